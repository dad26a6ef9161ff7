"""
Triage pipeline.
Orchestrates preprocessing → scope detection → intent classification.
"""
from typing import Optional

from partsbot.core.config import Settings
from partsbot.core.schema import TriageResult
from partsbot.services.chat.intent import IntentClassifier
from partsbot.services.chat.router import suggest_tools
from partsbot.services.chat.scope import ScopeDetector
from partsbot.services.message_service import preprocess_message
from partsbot.utils.keyword_loader import KeywordTables, get_keyword_tables
from partsbot.core.logging import get_logger

logger = get_logger("services.triage_pipeline")


class TriagePipeline:
    """Runs one message through every triage stage. Holds no per-message state."""

    def __init__(self, tables: Optional[KeywordTables] = None, settings: Optional[Settings] = None):
        self.tables = tables or get_keyword_tables()
        self.settings = settings
        self.scope_detector = ScopeDetector(self.tables)
        self.intent_classifier = IntentClassifier(self.tables)

    def run(self, message: str) -> TriageResult:
        """
        Run the full triage pipeline.

        Raises:
            InvalidInput: If message is not a string
            MessageValidationError: If the message fails validation
        """
        # 1. Preprocess
        preprocessed = preprocess_message(message, settings=self.settings, tables=self.tables)

        # 2. Scope
        scope = self.scope_detector.detect(
            preprocessed.cleaned,
            preprocessed.tokens,
            preprocessed.entities,
        )
        if not scope.in_scope:
            logger.info(f"[Triage] Out of scope (confidence={scope.confidence})")
            return TriageResult(message=preprocessed, scope=scope)

        # 3. Intent
        intent = self.intent_classifier.classify(preprocessed.tokens, preprocessed.entities)
        logger.info(
            f"[Triage] category={scope.category}, intent={intent.intent}, "
            f"confidence={intent.confidence}"
        )

        return TriageResult(
            message=preprocessed,
            scope=scope,
            intent=intent,
            suggested_tools=suggest_tools(intent.intent),
        )


_pipeline: Optional[TriagePipeline] = None


def get_triage_pipeline() -> TriagePipeline:
    """Get or create global TriagePipeline instance."""
    global _pipeline
    if _pipeline is None:
        _pipeline = TriagePipeline()
    return _pipeline


def triage_message(message: str) -> TriageResult:
    """Triage a raw message with the process-wide pipeline."""
    return get_triage_pipeline().run(message)
