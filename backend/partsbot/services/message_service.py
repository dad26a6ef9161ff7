"""
Message preprocessing service.
Validates, sanitizes, tokenizes and extracts entities from inbound messages.
"""
import re
from typing import Dict, Iterator, List, Optional, Tuple

from partsbot.core.config import Settings, get_settings
from partsbot.core.constants import ErrorCodes
from partsbot.core.logging import get_logger
from partsbot.core.schema import MessageMetadata, PreprocessedMessage
from partsbot.services.chat.keywords import tokenize_message
from partsbot.utils.entities import extract_entities
from partsbot.utils.keyword_loader import KeywordTables
from partsbot.utils.text_cleaning import InvalidInput, sanitize_message

logger = get_logger("services.message_service")

# Same set the sanitizer strips, minus DEL
UNSAFE_CONTROL_CHARACTERS = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F]')
DIGIT = re.compile(r'\d')
SPECIAL_CHARACTER = re.compile(r'[^\w\s]', re.ASCII)


class MessageValidationError(ValueError):
    """A message failed content validation."""

    def __init__(self, message: str, code: str = ErrorCodes.VALIDATION_ERROR):
        super().__init__(message)
        self.code = code


def _violations(message, settings: Settings) -> Iterator[Tuple[str, str]]:
    """Yield (error code, description) for every rule the message breaks."""
    if not isinstance(message, str):
        yield ErrorCodes.MESSAGE_INVALID_FORMAT, "Message must be a string"
        return

    length = len(message.strip())
    if length < settings.message_min_length:
        yield (
            ErrorCodes.MESSAGE_REQUIRED,
            f"Message must be at least {settings.message_min_length} character long",
        )
    elif length > settings.message_max_length:
        yield (
            ErrorCodes.MESSAGE_TOO_LONG,
            f"Message must be at most {settings.message_max_length} characters long",
        )

    if UNSAFE_CONTROL_CHARACTERS.search(message):
        yield ErrorCodes.MESSAGE_INVALID_FORMAT, "Message contains invalid control characters"


def validate_message_content(message, settings: Optional[Settings] = None) -> Dict:
    """
    Validate message content without raising.

    Returns:
        {"valid": bool, "errors": [str]}
    """
    settings = settings or get_settings()
    errors: List[str] = [description for _, description in _violations(message, settings)]
    return {"valid": not errors, "errors": errors}


def preprocess_message(
    message,
    settings: Optional[Settings] = None,
    tables: Optional[KeywordTables] = None,
) -> PreprocessedMessage:
    """
    Preprocess a message: validate, sanitize, tokenize, extract entities.

    Args:
        message: Raw message text
        settings: Settings carrying the length limits
        tables: Substitute keyword tables for entity patterns

    Returns:
        PreprocessedMessage

    Raises:
        InvalidInput: If message is not a string
        MessageValidationError: If the message breaks a content rule
    """
    if not isinstance(message, str):
        raise InvalidInput(f"Message must be a string, got {type(message).__name__}")

    settings = settings or get_settings()
    for code, description in _violations(message, settings):
        logger.warning(f"Message validation failed: {code} ({description})")
        raise MessageValidationError(description, code=code)

    sanitized = sanitize_message(message)
    tokens = tokenize_message(sanitized.cleaned)
    entities = extract_entities(sanitized.cleaned, tables)

    result = PreprocessedMessage(
        **sanitized.model_dump(),
        tokens=tuple(tokens),
        entities=entities,
        metadata=MessageMetadata(
            length=len(message),
            token_count=len(tokens),
            has_numbers=bool(DIGIT.search(sanitized.cleaned)),
            has_special_chars=bool(SPECIAL_CHARACTER.search(sanitized.cleaned)),
        ),
    )

    logger.debug(
        f"Message preprocessed: length={len(message)}, tokens={len(tokens)}, "
        f"entities={len(entities.part_numbers) + len(entities.model_numbers)}"
    )
    return result
