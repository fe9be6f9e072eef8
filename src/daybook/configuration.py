# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Literal, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "daybook"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_AGENDA_PATH: Path = DATA_PATH / "Agenda.json"
DATA_WEEK_NOTES_PATH: Path = DATA_PATH / "WeekNotes.json"
DATA_FINANCE_PATH: Path = DATA_PATH / "Finance.json"

ThemeColor = Literal["mint", "peach", "lavender", "sky", "lime", "coral", "rose"]
ThemeTone = Literal["white", "dark"]


class Configuration(TypedDict):
    data_path: Optional[str]
    preferred_currency: str
    notifications_enabled: bool
    theme: ThemeColor
    tone: ThemeTone
    cycle_length_days: int
    period_length_days: int
    last_period_start: Optional[str]  # YYYY-MM-DD
    agenda_start_hour: int
    agenda_end_hour: int
    monthly_spend_limit: Optional[float]


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "preferred_currency": "MXN",
        "notifications_enabled": True,
        "theme": "mint",
        "tone": "white",
        "cycle_length_days": 28,
        "period_length_days": 5,
        "last_period_start": None,
        "agenda_start_hour": 7,
        "agenda_end_hour": 22,
        "monthly_spend_limit": None,
    }


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_AGENDA_PATH, DATA_WEEK_NOTES_PATH, DATA_FINANCE_PATH

    DATA_PATH = data_path
    DATA_AGENDA_PATH = DATA_PATH / "Agenda.json"
    DATA_WEEK_NOTES_PATH = DATA_PATH / "WeekNotes.json"
    DATA_FINANCE_PATH = DATA_PATH / "Finance.json"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories touch their files.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        set_data_path(Path(data_path_setting).expanduser())
