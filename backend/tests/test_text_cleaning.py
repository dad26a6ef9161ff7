"""
Tests for message sanitization.
"""
import pytest

from partsbot.utils.text_cleaning import (
    InvalidInput,
    clean_message_text,
    encode_html_entities,
    normalize_whitespace,
    remove_control_characters,
    sanitize_message,
)


# ============================================================================
# HELPERS
# ============================================================================

def test_remove_control_characters():
    """Null bytes, bell and DEL go; tab, newline and carriage return stay."""
    assert remove_control_characters("\x00he\x07llo\x7f") == "hello"
    assert remove_control_characters("a\x0bb\x0cc\x1fd") == "abcd"
    assert remove_control_characters("a\tb\nc\rd") == "a\tb\nc\rd"


def test_normalize_whitespace():
    assert normalize_whitespace("  Hi\t\tthere\n\nfriend  ") == "Hi there friend"


def test_encode_html_entities():
    encoded = encode_html_entities('<b>"Tom\'s" & co/</b>')
    assert encoded == "&lt;b&gt;&quot;Tom&#39;s&quot; &amp; co&#x2F;&lt;&#x2F;b&gt;"


# ============================================================================
# SANITIZE MESSAGE
# ============================================================================

def test_sanitize_message_forms():
    """All four forms are produced from one raw message."""
    raw = "  My  Fridge\x00 <door> is\tBROKEN  "
    result = sanitize_message(raw)

    assert result.original == raw
    assert result.cleaned == "My Fridge <door> is BROKEN"
    assert result.sanitized == "My Fridge &lt;door&gt; is BROKEN"
    assert result.lowercase == "my fridge <door> is broken"


def test_sanitize_message_rejects_non_strings():
    for bad in (None, 42, ["hello"], b"bytes"):
        with pytest.raises(InvalidInput):
            sanitize_message(bad)


def test_invalid_input_is_a_type_error():
    with pytest.raises(TypeError):
        sanitize_message(3.14)


def test_sanitize_empty_and_blank():
    assert sanitize_message("").cleaned == ""
    assert sanitize_message(" \t\n ").cleaned == ""


@pytest.mark.parametrize("raw", [
    "plain text",
    "  leading and trailing  ",
    "tabs\t\tand\nnewlines\r\n",
    "\x00\x01control\x1f\x7f chars",
    "a \x00 b",
    "\u00a0non-breaking\u00a0 spaces\u2003",
    "",
])
def test_cleaning_is_idempotent(raw):
    """Cleaning a cleaned message changes nothing."""
    once = sanitize_message(raw).cleaned
    assert sanitize_message(once).cleaned == once
    assert clean_message_text(once) == once


def test_cleaned_has_no_whitespace_runs():
    cleaned = sanitize_message("a\x00 \x00 b    c").cleaned
    assert "  " not in cleaned
    assert cleaned == "a b c"


def test_sanitized_message_is_immutable():
    result = sanitize_message("hello")
    with pytest.raises(Exception):
        result.cleaned = "changed"


def test_serializes_with_camel_case_names():
    dumped = sanitize_message("Hi").model_dump(by_alias=True)
    assert set(dumped) == {"original", "cleaned", "sanitized", "lowercase"}
