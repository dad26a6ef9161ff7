"""
Application-wide constants.
Centralizes the intent, scope and appliance vocabularies shared by the
triage pipeline and the API layer.
"""
from typing import List


class IntentConstants:
    """Intent names produced by the intent classifier."""

    PRODUCT_SEARCH: str = "product_search"
    COMPATIBILITY_CHECK: str = "compatibility_check"
    INSTALLATION_GUIDE: str = "installation_guide"
    TROUBLESHOOTING: str = "troubleshooting"
    ORDER_SUPPORT: str = "order_support"
    GENERAL_INQUIRY: str = "general_inquiry"

    # Scored intents, in tie-break order
    SCORED_INTENTS: List[str] = [
        PRODUCT_SEARCH,
        COMPATIBILITY_CHECK,
        INSTALLATION_GUIDE,
        TROUBLESHOOTING,
        ORDER_SUPPORT,
    ]


class ScopeConstants:
    """Categories and thresholds used by the scope detector."""

    PARTS_INQUIRY: str = "parts_inquiry"
    INSTALLATION_INQUIRY: str = "installation_inquiry"
    COMPATIBILITY_CHECK: str = "compatibility_check"
    TROUBLESHOOTING_INQUIRY: str = "troubleshooting_inquiry"
    ORDER_SUPPORT: str = "order_support"
    GENERAL_INQUIRY: str = "general_inquiry"
    OUT_OF_SCOPE: str = "out_of_scope"

    # Keyword weights (exact match, partial match)
    IN_SCOPE_EXACT_WEIGHT: int = 10
    IN_SCOPE_PARTIAL_WEIGHT: int = 3
    OUT_OF_SCOPE_EXACT_WEIGHT: int = 15
    OUT_OF_SCOPE_PARTIAL_WEIGHT: int = 5

    # Pattern score weights (informational only)
    PART_NUMBER_PATTERN_WEIGHT: int = 40
    MODEL_NUMBER_PATTERN_WEIGHT: int = 30
    APPLIANCE_PATTERN_WEIGHT: int = 20

    # Decision margins
    OUT_OF_SCOPE_MARGIN: int = 20
    IN_SCOPE_MARGIN: int = 10

    MAX_CONFIDENCE: float = 0.95
    AMBIGUOUS_CONFIDENCE: float = 0.5
    FALLBACK_CONFIDENCE: float = 0.3


class IntentScoringConstants:
    """Weights used when scoring intents."""

    EXACT_WEIGHT: int = 15
    PARTIAL_WEIGHT: int = 5
    MULTI_MATCH_BONUS: int = 5
    MIN_PARTIAL_TOKEN_LENGTH: int = 3
    MAX_CONFIDENCE: float = 0.99
    FALLBACK_CONFIDENCE: float = 0.3


class ApplianceConstants:
    """Supported appliance types."""

    REFRIGERATOR: str = "refrigerator"
    DISHWASHER: str = "dishwasher"


class ErrorCodes:
    """Error codes returned by the preprocessing layer and the API."""

    VALIDATION_ERROR: str = "VALIDATION_ERROR"
    MESSAGE_REQUIRED: str = "MESSAGE_REQUIRED"
    MESSAGE_TOO_LONG: str = "MESSAGE_TOO_LONG"
    MESSAGE_INVALID_FORMAT: str = "MESSAGE_INVALID_FORMAT"
    INTERNAL_SERVER_ERROR: str = "INTERNAL_SERVER_ERROR"


MAX_SCORE: int = 100


# Export all constants for easy import
__all__ = [
    'IntentConstants',
    'ScopeConstants',
    'IntentScoringConstants',
    'ApplianceConstants',
    'ErrorCodes',
    'MAX_SCORE',
]
