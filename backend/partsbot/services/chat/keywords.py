"""Tokenization and keyword scoring shared by the scope and intent classifiers."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence

from partsbot.core.constants import MAX_SCORE
from partsbot.utils.keyword_loader import KeywordTables, get_keyword_tables

TOKEN_SEPARATORS = re.compile(r"[\s\-_.,!?;:()\[\]{}]+")


def tokenize_message(text: str) -> List[str]:
    """Split text on whitespace and common punctuation into lowercase tokens."""
    return [token.lower() for token in TOKEN_SEPARATORS.split(text) if token]


def compact(phrase: str) -> str:
    """Remove internal spaces so multi-word phrases compare against single tokens."""
    return phrase.replace(" ", "")


def keyword_score(
    tokens: Sequence[str],
    keywords: Sequence[str],
    exact_weight: int,
    partial_weight: int,
) -> int:
    """
    Score tokens against a keyword table.

    Each token earns exact_weight when it equals a keyword, and partial_weight
    when it is a substring of, or contains, any keyword. Both can apply to the
    same token. The total is clamped to 100.
    """
    exact_keywords = {compact(keyword) for keyword in keywords}
    score = 0

    for token in tokens:
        if token in exact_keywords:
            score += exact_weight
        if any(keyword in token or token in keyword for keyword in keywords):
            score += partial_weight

    return min(score, MAX_SCORE)


def find_matching_keywords(tokens: Sequence[str], keywords: Sequence[str]) -> List[str]:
    """Keywords equal to or containing any token, de-duplicated in first-seen order."""
    matches: List[str] = []
    for token in tokens:
        for keyword in keywords:
            if (token == keyword or token in keyword) and keyword not in matches:
                matches.append(keyword)
    return matches


def extract_keywords(
    tokens: Sequence[str],
    tables: Optional[KeywordTables] = None,
) -> Dict[str, List[str]]:
    """Tokens that exactly match the in-scope and out-of-scope tables."""
    tables = tables or get_keyword_tables()
    return {
        "in_scope": [token for token in tokens if token in tables.in_scope_keywords],
        "out_of_scope": [token for token in tokens if token in tables.out_of_scope_keywords],
    }
