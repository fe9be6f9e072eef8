# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from daybook import configuration


class ConfigurationRepository:
    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def path(self) -> Path:
        if self._path is not None:
            return self._path
        return configuration.APP_CONFIG_PATH

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        raw_config = None
        if self.path.is_file():
            raw_config = load(self.path.read_text(), Loader=Loader)
        if raw_config is None:
            raw_config = {}

        # Back-fill settings that older config files do not have yet
        defaults = configuration.get_default_configuration()
        for key, value in defaults.items():
            if key not in raw_config:
                raw_config[key] = value
                self.is_dirty = True

        self._config = raw_config

    def __save_data(self, config: configuration.Configuration) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        preferred_currency: Optional[str] = None,
        notifications_enabled: Optional[bool] = None,
        theme: Optional[configuration.ThemeColor] = None,
        tone: Optional[configuration.ThemeTone] = None,
        cycle_length_days: Optional[int] = None,
        period_length_days: Optional[int] = None,
        last_period_start: Optional[str] = None,
        remove_last_period_start: bool = False,
        agenda_start_hour: Optional[int] = None,
        agenda_end_hour: Optional[int] = None,
        monthly_spend_limit: Optional[float] = None,
        remove_monthly_spend_limit: bool = False,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
    ) -> None:
        self.is_dirty = True

        if preferred_currency is not None:
            self.config["preferred_currency"] = preferred_currency
        if notifications_enabled is not None:
            self.config["notifications_enabled"] = notifications_enabled
        if theme is not None:
            self.config["theme"] = theme
        if tone is not None:
            self.config["tone"] = tone
        if cycle_length_days is not None:
            self.config["cycle_length_days"] = cycle_length_days
        if period_length_days is not None:
            self.config["period_length_days"] = period_length_days
        if last_period_start is not None:
            self.config["last_period_start"] = last_period_start
        if agenda_start_hour is not None:
            self.config["agenda_start_hour"] = agenda_start_hour
        if agenda_end_hour is not None:
            self.config["agenda_end_hour"] = agenda_end_hour
        if monthly_spend_limit is not None:
            self.config["monthly_spend_limit"] = monthly_spend_limit
        if data_path is not None:
            self.config["data_path"] = data_path

        if remove_last_period_start:
            self.config["last_period_start"] = None
        if remove_monthly_spend_limit:
            self.config["monthly_spend_limit"] = None
        if remove_data_path:
            self.config["data_path"] = None


CONFIGURATION_REPO = ConfigurationRepository()
