# SPDX-License-Identifier: MIT

from daybook import configuration
from daybook.repository.agenda import AGENDA_REPO
from daybook.repository.configuration import CONFIGURATION_REPO
from daybook.service.reminder import LoggingReminderScheduler


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()

    config = CONFIGURATION_REPO.get_config()
    AGENDA_REPO.scheduler = LoggingReminderScheduler(config["notifications_enabled"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        # Loading a missing file back-fills every default; flushing writes them
        CONFIGURATION_REPO.get_config()
        CONFIGURATION_REPO.flush()
