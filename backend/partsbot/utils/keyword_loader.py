"""
Keyword table loader for the triage classifiers.
Keyword lists and identifier patterns are static, versioned data kept in
partsbot/data/keywords.json and loaded once per process.
"""
import json
import re
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union
import logging

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator, model_validator

from partsbot.core.constants import IntentConstants

logger = logging.getLogger(__name__)

DEFAULT_KEYWORDS_PATH = Path(__file__).parent.parent / "data" / "keywords.json"

REQUIRED_PATTERNS = ("PART_NUMBER", "MODEL_NUMBER", "SKU_PATTERN")


class PatternConfig(BaseModel):
    """A single configured regular expression."""

    model_config = ConfigDict(frozen=True)

    pattern: str
    ignore_case: bool = False

    @field_validator("pattern")
    @classmethod
    def _check_compiles(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"Invalid pattern {value!r}: {e}") from e
        return value

    def compile(self, ignore_case: Optional[bool] = None) -> re.Pattern:
        """
        Compile the pattern.

        Args:
            ignore_case: Override the configured case sensitivity

        Returns:
            Compiled regular expression
        """
        if ignore_case is None:
            ignore_case = self.ignore_case
        return re.compile(self.pattern, re.IGNORECASE if ignore_case else 0)


class KeywordTables(BaseModel):
    """Immutable keyword and pattern configuration."""

    model_config = ConfigDict(frozen=True)

    version: str = "0"
    in_scope_keywords: Tuple[str, ...]
    out_of_scope_keywords: Tuple[str, ...]
    intent_keywords: Mapping[str, Tuple[str, ...]]
    patterns: Mapping[str, PatternConfig]

    @field_validator("in_scope_keywords", "out_of_scope_keywords")
    @classmethod
    def _normalize_keywords(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(keyword.strip().lower() for keyword in value if keyword.strip())

    @field_validator("intent_keywords")
    @classmethod
    def _normalize_intent_keywords(cls, value: Mapping[str, Tuple[str, ...]]) -> Mapping[str, Tuple[str, ...]]:
        return MappingProxyType({
            intent: tuple(keyword.strip().lower() for keyword in keywords if keyword.strip())
            for intent, keywords in value.items()
        })

    @field_validator("patterns")
    @classmethod
    def _freeze_patterns(cls, value: Mapping[str, PatternConfig]) -> Mapping[str, PatternConfig]:
        return MappingProxyType(dict(value))

    @field_serializer("intent_keywords", "patterns")
    def _dump_mapping(self, value: Mapping) -> Dict:
        return dict(value)

    @model_validator(mode="after")
    def _check_complete(self) -> "KeywordTables":
        missing_intents = [
            intent for intent in IntentConstants.SCORED_INTENTS
            if intent not in self.intent_keywords
        ]
        if missing_intents:
            raise ValueError(f"intent_keywords missing intents: {missing_intents}")

        missing_patterns = [name for name in REQUIRED_PATTERNS if name not in self.patterns]
        if missing_patterns:
            raise ValueError(f"patterns missing entries: {missing_patterns}")
        return self

    def keywords_for(self, intent: str) -> Tuple[str, ...]:
        """Trigger phrases for an intent (empty for unknown intents)."""
        return self.intent_keywords.get(intent, ())

    def pattern(self, name: str, ignore_case: Optional[bool] = None) -> re.Pattern:
        """Compiled pattern by name (PART_NUMBER, MODEL_NUMBER, SKU_PATTERN)."""
        return self.patterns[name].compile(ignore_case)


def load_keyword_tables(path: Optional[Union[str, Path]] = None) -> KeywordTables:
    """
    Load and validate keyword tables from a JSON file.

    Args:
        path: JSON file to read; defaults to the packaged keywords.json

    Returns:
        Validated KeywordTables

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON or misses required entries
    """
    filepath = Path(path) if path else DEFAULT_KEYWORDS_PATH

    if not filepath.exists():
        logger.error(f"Keyword file not found: {filepath}")
        raise FileNotFoundError(f"Keyword file not found: {filepath}")

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Error parsing keyword file {filepath}: {e}")
        raise ValueError(f"Invalid keyword file {filepath}: {e}") from e

    tables = KeywordTables.model_validate(data)
    logger.info(
        f"Loaded keyword tables v{tables.version}: "
        f"{len(tables.in_scope_keywords)} in-scope, "
        f"{len(tables.out_of_scope_keywords)} out-of-scope, "
        f"{len(tables.intent_keywords)} intents"
    )
    return tables


@lru_cache()
def get_keyword_tables() -> KeywordTables:
    """Get the process-wide keyword tables (loaded once)."""
    return load_keyword_tables()
