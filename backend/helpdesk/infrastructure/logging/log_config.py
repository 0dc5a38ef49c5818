"""Per-category log levels for the helpdesk backend.

Each ``log_level_*`` setting controls a group of loggers, so SQL echo or
outbound HTTP chatter can be muted while dispatcher stages stay visible.
Call ``setup_logging()`` once from the application lifespan.
"""

import logging
import sys

from helpdesk.config import Settings, get_settings

# Settings field -> loggers it governs.
LOGGER_GROUPS: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg"),
    "log_level_http": ("httpx", "httpcore"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_command": (
        "CommandDispatcher",
        "helpdesk.application.services.command_dispatcher",
        "helpdesk.application.services.power_tools_session",
        "helpdesk.application.services.llm_usage_logger",
        "helpdesk.presentation.functions",
    ),
    "log_level_openrouter": ("helpdesk.infrastructure.openrouter",),
    "log_level_feed": (
        "helpdesk.application.services.change_feed",
        "helpdesk.application.services.message_service",
    ),
}

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(settings: Settings | None = None) -> None:
    """Apply the configured levels; adds a stderr handler when none is installed."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
        root.addHandler(handler)

    applied = {}
    for field_name, logger_names in LOGGER_GROUPS.items():
        raw = getattr(settings, field_name, "INFO")
        level = _parse_level(raw)
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
        applied[field_name.removeprefix("log_level_")] = logging.getLevelName(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s %s",
        settings.log_level,
        " ".join(f"{group}={level}" for group, level in applied.items()),
    )


def _parse_level(raw: str) -> int:
    """Level constant for a name such as ``"debug"``; unknown names mean INFO."""
    level = logging.getLevelName(str(raw).strip().upper())
    return level if isinstance(level, int) else logging.INFO
