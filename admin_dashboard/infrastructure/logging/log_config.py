"""Logging setup for the admin BFF.

One console handler on the root logger; every category below gets its
level from Settings. uvicorn's own loggers are routed through the same
handler so request lines and application lines share one format.
"""

import logging
import logging.config
from typing import Any

from admin_dashboard.config import Settings, get_settings

CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Settings field → loggers it controls.
LOGGER_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("log_level_http", ("httpx", "httpcore")),
    ("log_level_uvicorn", ("uvicorn", "uvicorn.error", "uvicorn.access")),
    ("log_level_marketplace", ("admin_dashboard.infrastructure.http",
                               "admin_dashboard.application.services")),
)

# Loggers that already own a handler when uvicorn starts.
_DETACHED = ("uvicorn", "uvicorn.access")


def level_name(raw: str | None) -> str:
    """Upper-cased stdlib level name; anything unknown falls back to INFO."""
    candidate = (raw or "").strip().upper()
    return candidate if isinstance(logging.getLevelName(candidate), int) else "INFO"


def build_logging_config(settings: Settings) -> dict[str, Any]:
    """``logging.config.dictConfig`` schema derived from ``settings``."""
    loggers: dict[str, dict[str, Any]] = {}
    for field_name, names in LOGGER_CATEGORIES:
        level = level_name(getattr(settings, field_name, None))
        for name in names:
            entry: dict[str, Any] = {"level": level}
            if name in _DETACHED:
                entry.update(handlers=["console"], propagate=False)
            loggers[name] = entry

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": CONSOLE_FORMAT, "datefmt": DATE_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {"level": level_name(settings.log_level), "handlers": ["console"]},
        "loggers": loggers,
    }


def setup_logging(settings: Settings | None = None) -> None:
    """Apply the logging config; called once from the app lifespan."""
    settings = settings or get_settings()
    logging.config.dictConfig(build_logging_config(settings))
    logging.getLogger(__name__).debug(
        "Logging configured (%s): root=%s",
        settings.app_env,
        level_name(settings.log_level),
    )
