import logging
import sys
from typing import Optional

from partsbot.core.config import get_settings

ROOT_LOGGER_NAME = "partsbot"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the 'partsbot' logger: one stdout handler, level from settings.

    Args:
        level: Override for settings.log_level (e.g. "debug" while testing rules)
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(settings.log_format))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under 'partsbot', e.g. get_logger("services.chat.scope")."""
    # Ensure the parent logger is configured
    setup_logging()
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
