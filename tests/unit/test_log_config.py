"""Unit tests for the logging setup."""

import logging

import pytest

from admin_dashboard.config import Settings
from admin_dashboard.infrastructure.logging.log_config import (
    build_logging_config,
    level_name,
    setup_logging,
)


@pytest.mark.parametrize(
    "raw, expected",
    [("debug", "DEBUG"), (" Warning ", "WARNING"), ("loud", "INFO"), ("", "INFO"), (None, "INFO")],
)
def test_level_name(raw, expected):
    assert level_name(raw) == expected


def test_categories_take_levels_from_settings():
    settings = Settings(
        _env_file=None,
        log_level="warning",
        log_level_http="error",
        log_level_marketplace="debug",
    )

    config = build_logging_config(settings)

    assert config["root"] == {"level": "WARNING", "handlers": ["console"]}
    assert config["loggers"]["httpx"] == {"level": "ERROR"}
    assert config["loggers"]["admin_dashboard.application.services"] == {"level": "DEBUG"}
    assert config["loggers"]["uvicorn.access"] == {
        "level": "INFO", "handlers": ["console"], "propagate": False,
    }
    assert config["disable_existing_loggers"] is False


def test_setup_logging_applies_levels():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging(Settings(_env_file=None, log_level_http="critical"))
        assert logging.getLogger("httpcore").level == logging.CRITICAL
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
