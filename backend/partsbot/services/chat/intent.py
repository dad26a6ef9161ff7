"""Intent detection helpers for the parts chat agent."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from partsbot.core.constants import (
    MAX_SCORE,
    ApplianceConstants,
    IntentConstants,
    IntentScoringConstants,
)
from partsbot.core.logging import get_logger
from partsbot.core.schema import EntitySet, IntentContext, IntentResult
from partsbot.services.chat.keywords import compact, find_matching_keywords
from partsbot.utils.keyword_loader import KeywordTables, get_keyword_tables

logger = get_logger("services.chat.intent")

REFRIGERATOR_PATTERN = re.compile(r"refrigerator|fridge|ice maker|freezer", re.IGNORECASE)
# Checked after REFRIGERATOR_PATTERN, so "fridge filter" stays a refrigerator
DISHWASHER_PATTERN = re.compile(r"dishwasher|wash|spray arm|filter|rinse", re.IGNORECASE)


def score_intent(tokens: Sequence[str], trigger_phrases: Sequence[str]) -> Tuple[int, List[str]]:
    """
    Score tokens against one intent's trigger phrases.

    Every (token, phrase) pair earns 15 for an exact match (phrase spaces
    removed), otherwise 5 when the phrase contains a token longer than two
    characters. Matching more than one distinct phrase adds 5 per phrase.

    Returns:
        (score clamped to 100, distinct matched phrases in first-seen order)
    """
    score = 0
    matches: List[str] = []

    for token in tokens:
        for phrase in trigger_phrases:
            if token == phrase or token == compact(phrase):
                score += IntentScoringConstants.EXACT_WEIGHT
                matches.append(phrase)
            elif token in phrase and len(token) >= IntentScoringConstants.MIN_PARTIAL_TOKEN_LENGTH:
                score += IntentScoringConstants.PARTIAL_WEIGHT
                matches.append(phrase)

    distinct = list(dict.fromkeys(matches))
    if len(distinct) > 1:
        score += IntentScoringConstants.MULTI_MATCH_BONUS * len(distinct)

    return min(score, MAX_SCORE), distinct


def detect_appliance_type(text: str) -> Optional[str]:
    """Detect 'refrigerator' or 'dishwasher' from message text, else None."""
    if REFRIGERATOR_PATTERN.search(text):
        return ApplianceConstants.REFRIGERATOR
    if DISHWASHER_PATTERN.search(text):
        return ApplianceConstants.DISHWASHER
    return None


class IntentClassifier:
    """Keyword-scoring classifier over the five supported intents."""

    def __init__(self, tables: Optional[KeywordTables] = None):
        self.tables = tables or get_keyword_tables()

    def classify(self, tokens: Sequence[str], entities: Optional[EntitySet] = None) -> IntentResult:
        """Classify intent; never raises, falls back to general_inquiry."""
        try:
            result = self._classify(tokens, entities or EntitySet())
        except Exception as exc:
            logger.error(f"[Intent Detection] Classification failed: {exc}")
            return self.fallback_result()

        logger.debug(
            f"[Intent Detection] Intent: {result.intent}, Confidence: {result.confidence}, "
            f"Keywords: {len(result.keywords)}"
        )
        return result

    def _classify(self, tokens: Sequence[str], entities: EntitySet) -> IntentResult:
        scores = self.score_all(tokens)
        intent, score = self.select_winner(scores)

        return IntentResult(
            intent=intent,
            confidence=min(score / 100, IntentScoringConstants.MAX_CONFIDENCE),
            keywords=tuple(find_matching_keywords(tokens, self.tables.keywords_for(intent))),
            context=IntentContext(
                part_number=entities.part_numbers[0] if entities.part_numbers else None,
                model_number=entities.model_numbers[0] if entities.model_numbers else None,
                appliance_type=detect_appliance_type(" ".join(tokens)),
            ),
            scores=scores,
        )

    def score_all(self, tokens: Sequence[str]) -> Dict[str, int]:
        """Scores for every scored intent, in tie-break order."""
        return {
            intent: score_intent(tokens, self.tables.keywords_for(intent))[0]
            for intent in IntentConstants.SCORED_INTENTS
        }

    @staticmethod
    def select_winner(scores: Dict[str, int]) -> Tuple[str, int]:
        """Highest score wins; on a tie the earlier intent keeps the lead."""
        best_intent, best_score = None, -1
        for intent, score in scores.items():
            if score > best_score:
                best_intent, best_score = intent, score
        return best_intent, best_score

    @staticmethod
    def fallback_result() -> IntentResult:
        return IntentResult(
            intent=IntentConstants.GENERAL_INQUIRY,
            confidence=IntentScoringConstants.FALLBACK_CONFIDENCE,
        )


@lru_cache()
def get_intent_classifier() -> IntentClassifier:
    """Get the classifier bound to the process-wide keyword tables."""
    return IntentClassifier()


def classify_intent(
    tokens: Sequence[str],
    entities: Optional[EntitySet] = None,
    tables: Optional[KeywordTables] = None,
) -> IntentResult:
    """
    Classify the intent of an in-scope message.

    Args:
        tokens: Lowercase tokens of the message
        entities: Entities extracted from the cleaned message
        tables: Substitute keyword tables; defaults to the global tables

    Returns:
        IntentResult
    """
    try:
        classifier = IntentClassifier(tables) if tables is not None else get_intent_classifier()
    except Exception as exc:
        logger.error(f"[Intent Detection] Classifier unavailable: {exc}")
        return IntentClassifier.fallback_result()
    return classifier.classify(tokens, entities)
