"""Scope detection: is a message about refrigerator or dishwasher parts?"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional, Sequence

from partsbot.core.constants import MAX_SCORE, ScopeConstants
from partsbot.core.logging import get_logger
from partsbot.core.schema import EntitySet, ScopeResult, ScopeScore
from partsbot.services.chat.keywords import keyword_score
from partsbot.utils.keyword_loader import KeywordTables, get_keyword_tables

logger = get_logger("services.chat.scope")

APPLIANCE_PATTERN = re.compile(r"refrigerator|fridge|dishwasher", re.IGNORECASE)

# First match wins
CATEGORY_PATTERNS = [
    (re.compile(r"install|setup|assemble|attach|how to", re.IGNORECASE), ScopeConstants.INSTALLATION_INQUIRY),
    (re.compile(r"compatible|fit|work with|support|match", re.IGNORECASE), ScopeConstants.COMPATIBILITY_CHECK),
    (
        re.compile(r"broken|not working|fix|repair|problem|issue|leak|freeze|noise", re.IGNORECASE),
        ScopeConstants.TROUBLESHOOTING_INQUIRY,
    ),
    (re.compile(r"order|price|cost|buy|cart|checkout|shipping", re.IGNORECASE), ScopeConstants.ORDER_SUPPORT),
]


class ScopeDetector:
    """
    Rule-based scope detector.

    The decision is a short-circuit tree: an explicit part or model number
    wins outright, then out-of-scope keywords must beat in-scope keywords by
    more than 20 points, then in-scope keywords must beat out-of-scope ones by
    more than 10. Anything in between is accepted as a general inquiry.
    """

    def __init__(self, tables: Optional[KeywordTables] = None):
        self.tables = tables or get_keyword_tables()
        self.part_number_pattern = self.tables.pattern("PART_NUMBER")
        self.model_number_pattern = self.tables.pattern("MODEL_NUMBER")

    def detect(
        self,
        cleaned: str,
        tokens: Sequence[str],
        entities: Optional[EntitySet] = None,
    ) -> ScopeResult:
        """Detect scope; never raises, falls back to a low-confidence in-scope result."""
        try:
            result = self._detect(cleaned, tokens)
        except Exception as exc:
            logger.error(f"[Scope] Detection failed: {exc} (message: {str(cleaned)[:50]!r})")
            return self.fallback_result()

        logger.debug(
            f"[Scope] in_scope={result.in_scope}, category={result.category}, "
            f"confidence={result.confidence}, entities={self._entity_count(entities)}"
        )
        return result

    def _detect(self, cleaned: str, tokens: Sequence[str]) -> ScopeResult:
        if self.has_identifier(cleaned):
            return ScopeResult(
                in_scope=True,
                confidence=1.0,
                reason="Explicit part or model number pattern detected",
                category=ScopeConstants.PARTS_INQUIRY,
                score=ScopeScore(in_scope=MAX_SCORE, out_of_scope=0, patterns=MAX_SCORE),
            )

        return self.decide(
            in_scope_score=self.in_scope_score(tokens),
            out_of_scope_score=self.out_of_scope_score(tokens),
            pattern_score=self.pattern_score(cleaned),
            tokens=tokens,
        )

    def has_identifier(self, text: str) -> bool:
        """True if text contains something shaped like a part or model number."""
        return bool(self.part_number_pattern.search(text) or self.model_number_pattern.search(text))

    def in_scope_score(self, tokens: Sequence[str]) -> int:
        return keyword_score(
            tokens,
            self.tables.in_scope_keywords,
            ScopeConstants.IN_SCOPE_EXACT_WEIGHT,
            ScopeConstants.IN_SCOPE_PARTIAL_WEIGHT,
        )

    def out_of_scope_score(self, tokens: Sequence[str]) -> int:
        return keyword_score(
            tokens,
            self.tables.out_of_scope_keywords,
            ScopeConstants.OUT_OF_SCOPE_EXACT_WEIGHT,
            ScopeConstants.OUT_OF_SCOPE_PARTIAL_WEIGHT,
        )

    def pattern_score(self, text: str) -> int:
        """Informational score for identifier and appliance mentions."""
        score = 0
        if self.part_number_pattern.search(text):
            score += ScopeConstants.PART_NUMBER_PATTERN_WEIGHT
        if self.model_number_pattern.search(text):
            score += ScopeConstants.MODEL_NUMBER_PATTERN_WEIGHT
        if APPLIANCE_PATTERN.search(text):
            score += ScopeConstants.APPLIANCE_PATTERN_WEIGHT
        return min(score, MAX_SCORE)

    def decide(
        self,
        in_scope_score: int,
        out_of_scope_score: int,
        pattern_score: int,
        tokens: Sequence[str],
    ) -> ScopeResult:
        """Turn keyword scores into a scope decision."""
        score = ScopeScore(
            in_scope=in_scope_score,
            out_of_scope=out_of_scope_score,
            patterns=pattern_score,
        )

        if out_of_scope_score > in_scope_score + ScopeConstants.OUT_OF_SCOPE_MARGIN:
            return ScopeResult(
                in_scope=False,
                confidence=min(ScopeConstants.MAX_CONFIDENCE, out_of_scope_score / 100),
                reason="Message contains out-of-scope keywords",
                category=ScopeConstants.OUT_OF_SCOPE,
                score=score,
            )

        if in_scope_score > out_of_scope_score + ScopeConstants.IN_SCOPE_MARGIN:
            return ScopeResult(
                in_scope=True,
                confidence=min(ScopeConstants.MAX_CONFIDENCE, in_scope_score / 100),
                reason="Message contains relevant keywords",
                category=categorize_in_scope_message(tokens),
                score=score,
            )

        # No strong signal either way: accept rather than turn away a real customer
        return ScopeResult(
            in_scope=True,
            confidence=ScopeConstants.AMBIGUOUS_CONFIDENCE,
            reason="Message appears to be parts-related",
            category=ScopeConstants.GENERAL_INQUIRY,
            score=score,
        )

    @staticmethod
    def fallback_result() -> ScopeResult:
        return ScopeResult(
            in_scope=True,
            confidence=ScopeConstants.FALLBACK_CONFIDENCE,
            reason="Error during scope detection, defaulting to in-scope",
            category=ScopeConstants.GENERAL_INQUIRY,
        )

    @staticmethod
    def _entity_count(entities: Optional[EntitySet]) -> int:
        if entities is None:
            return 0
        return len(entities.part_numbers) + len(entities.model_numbers)


def categorize_in_scope_message(tokens: Sequence[str]) -> str:
    """Sub-classify an in-scope message from its joined tokens."""
    message = " ".join(tokens)
    for pattern, category in CATEGORY_PATTERNS:
        if pattern.search(message):
            return category
    return ScopeConstants.PARTS_INQUIRY


@lru_cache()
def get_scope_detector() -> ScopeDetector:
    """Get the detector bound to the process-wide keyword tables."""
    return ScopeDetector()


def detect_scope(
    cleaned: str,
    tokens: Sequence[str],
    entities: Optional[EntitySet] = None,
    tables: Optional[KeywordTables] = None,
) -> ScopeResult:
    """
    Decide whether a message is within the parts domain.

    Args:
        cleaned: Cleaned message text (identifier patterns are tested on it)
        tokens: Lowercase tokens of the message
        entities: Entities already extracted from the message
        tables: Substitute keyword tables; defaults to the global tables

    Returns:
        ScopeResult
    """
    try:
        detector = ScopeDetector(tables) if tables is not None else get_scope_detector()
    except Exception as exc:
        logger.error(f"[Scope] Detector unavailable: {exc}")
        return ScopeDetector.fallback_result()
    return detector.detect(cleaned, tokens, entities)
