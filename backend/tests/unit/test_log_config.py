"""Unit tests for per-category log levels."""

import logging

from helpdesk.config import Settings
from helpdesk.infrastructure.logging.log_config import LOGGER_GROUPS, setup_logging


def test_each_group_gets_its_configured_level():
    settings = Settings(_env_file=None, log_level_sql="ERROR", log_level_feed="debug", log_level_http="WARNING")

    setup_logging(settings)

    assert logging.getLogger("sqlalchemy.engine").level == logging.ERROR
    assert logging.getLogger("asyncpg").level == logging.ERROR
    assert logging.getLogger("helpdesk.application.services.change_feed").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING


def test_unknown_level_names_fall_back_to_info():
    setup_logging(Settings(_env_file=None, log_level_command="chatty"))

    for name in LOGGER_GROUPS["log_level_command"]:
        assert logging.getLogger(name).level == logging.INFO
