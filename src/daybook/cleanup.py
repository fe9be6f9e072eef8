# SPDX-License-Identifier: MIT

import atexit

from daybook.repository.configuration import CONFIGURATION_REPO


def flush_and_sync() -> None:
    # Agenda and finance stores write on every mutation; only the
    # configuration is buffered
    CONFIGURATION_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
