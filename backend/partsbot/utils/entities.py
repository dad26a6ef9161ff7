"""
Entity extraction for appliance part and model numbers.
"""
from typing import List, Optional

from partsbot.core.schema import EntitySet
from partsbot.utils.keyword_loader import KeywordTables, get_keyword_tables


PART_NUMBER_PREFIX = "PS"


def _unique(values: List[str]) -> tuple:
    """De-duplicate, keeping first-occurrence order."""
    return tuple(dict.fromkeys(values))


def find_part_numbers(text: str, tables: Optional[KeywordTables] = None) -> List[str]:
    """All part numbers in text (e.g. PS11752778), uppercased, in order."""
    tables = tables or get_keyword_tables()
    pattern = tables.pattern("PART_NUMBER", ignore_case=True)
    return [match.group(0).upper() for match in pattern.finditer(text)]


def find_model_numbers(text: str, tables: Optional[KeywordTables] = None) -> List[str]:
    """
    All model numbers in text (e.g. WDT780SAEM1), in order.

    Matching is case-sensitive so ordinary lowercase words never pass as
    model numbers. Matches that start with the part-number prefix are dropped.
    """
    tables = tables or get_keyword_tables()
    pattern = tables.pattern("MODEL_NUMBER", ignore_case=False)
    return [
        match.group(0)
        for match in pattern.finditer(text)
        if not match.group(0).startswith(PART_NUMBER_PREFIX)
    ]


def extract_part_number(text: str, tables: Optional[KeywordTables] = None) -> Optional[str]:
    """First part number in text, or None."""
    matches = find_part_numbers(text, tables)
    return matches[0] if matches else None


def extract_model_number(text: str, tables: Optional[KeywordTables] = None) -> Optional[str]:
    """First model number in text, or None."""
    matches = find_model_numbers(text, tables)
    return matches[0] if matches else None


def extract_entities(cleaned: str, tables: Optional[KeywordTables] = None) -> EntitySet:
    """
    Extract all entities from a cleaned (not lowercased) message.

    Args:
        cleaned: Cleaned message text
        tables: Keyword tables holding the patterns; defaults to the global tables

    Returns:
        EntitySet with de-duplicated part and model numbers
    """
    return EntitySet(
        part_numbers=_unique(find_part_numbers(cleaned, tables)),
        model_numbers=_unique(find_model_numbers(cleaned, tables)),
    )
