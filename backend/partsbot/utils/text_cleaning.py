"""
Text cleaning utilities for inbound chat messages.
Produces the canonical forms (cleaned, HTML-safe, lowercase) used by the
rest of the triage pipeline.
"""
import re

from partsbot.core.schema import SanitizedMessage


# C0 controls except tab, newline and carriage return, plus DEL
CONTROL_CHARACTERS = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')
WHITESPACE_RUN = re.compile(r'\s+')

HTML_ESCAPE_TABLE = str.maketrans({
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&#39;',
    '/': '&#x2F;',
})


class InvalidInput(TypeError):
    """Raised when a message is not a string."""


def remove_control_characters(text: str) -> str:
    """Remove null bytes and other control characters."""
    return CONTROL_CHARACTERS.sub('', text)


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return WHITESPACE_RUN.sub(' ', text).strip()


def encode_html_entities(text: str) -> str:
    """
    HTML-entity-encode a string for safe storage and rendering.
    Escapes & < > " ' and /.
    """
    return text.translate(HTML_ESCAPE_TABLE)


def clean_message_text(text: str) -> str:
    """
    Clean a message: strip control characters, trim, collapse whitespace.
    Cleaning an already cleaned string returns it unchanged.

    Args:
        text: Raw text

    Returns:
        Cleaned text
    """
    text = remove_control_characters(text)
    text = text.strip()
    return normalize_whitespace(text)


def sanitize_message(message) -> SanitizedMessage:
    """
    Sanitize a message for storage and processing.

    Args:
        message: The raw message as received

    Returns:
        SanitizedMessage with original, cleaned, HTML-encoded and lowercase forms

    Raises:
        InvalidInput: If message is not a string
    """
    if not isinstance(message, str):
        raise InvalidInput(f"Message must be a string, got {type(message).__name__}")

    cleaned = clean_message_text(message)

    return SanitizedMessage(
        original=message,
        cleaned=cleaned,
        sanitized=encode_html_entities(cleaned),
        lowercase=cleaned.lower(),
    )
