"""Chat service package supporting scope detection, intent detection and routing."""

from .intent import IntentClassifier, classify_intent, detect_appliance_type, score_intent
from .keywords import extract_keywords, keyword_score, tokenize_message
from .router import suggest_tools
from .scope import ScopeDetector, categorize_in_scope_message, detect_scope

__all__ = [
    "IntentClassifier",
    "ScopeDetector",
    "categorize_in_scope_message",
    "classify_intent",
    "detect_appliance_type",
    "detect_scope",
    "extract_keywords",
    "keyword_score",
    "score_intent",
    "suggest_tools",
    "tokenize_message",
]
