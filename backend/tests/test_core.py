"""
Tests for settings and logging setup.
"""
import logging

from partsbot.core.config import Settings, get_settings
from partsbot.core.logging import get_logger, setup_logging


def test_settings_defaults():
    settings = Settings()
    assert settings.message_min_length == 1
    assert settings.message_max_length == 5000


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("MESSAGE_MAX_LENGTH", "20")
    monkeypatch.setenv("log_level", "warning")

    settings = Settings()
    assert settings.message_max_length == 20
    assert settings.log_level == "warning"


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_get_logger_is_namespaced():
    logger = get_logger("services.chat.scope")
    assert logger.name == "partsbot.services.chat.scope"


def test_setup_logging_single_handler():
    setup_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 1


def test_setup_logging_level_override():
    logger = setup_logging("debug")
    try:
        assert logger.level == logging.DEBUG
        assert logger.handlers[0].level == logging.DEBUG
    finally:
        setup_logging()
