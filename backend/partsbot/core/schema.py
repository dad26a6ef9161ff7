"""
Pydantic schemas for the triage pipeline records.
These define the structure of data flowing out of the pipeline and the API.

Attributes are snake_case; dump with by_alias=True for the camelCase wire names.
"""
from types import MappingProxyType
from typing import Optional, List, Dict, Mapping, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class TriageRecord(BaseModel):
    """Base for immutable, camelCase-serialized records."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SanitizedMessage(TriageRecord):
    """A raw message in its canonical forms."""
    original: str
    cleaned: str
    sanitized: str  # HTML-entity-encoded
    lowercase: str


class EntitySet(TriageRecord):
    """Identifiers extracted from a message, in first-occurrence order."""
    part_numbers: Tuple[str, ...] = ()
    model_numbers: Tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not self.part_numbers and not self.model_numbers


class ScopeScore(TriageRecord):
    """Keyword and pattern scores behind a scope decision (0-100 each)."""
    in_scope: int = Field(0, ge=0, le=100)
    out_of_scope: int = Field(0, ge=0, le=100)
    patterns: int = Field(0, ge=0, le=100)


class ScopeResult(TriageRecord):
    """Result of scope detection."""
    in_scope: bool
    confidence: float = Field(ge=0.0, le=1.0)
    reason: str
    category: str
    score: ScopeScore = ScopeScore()


class IntentContext(TriageRecord):
    """Context extracted alongside an intent."""
    part_number: Optional[str] = None
    model_number: Optional[str] = None
    appliance_type: Optional[str] = None


class IntentResult(TriageRecord):
    """Result of intent classification."""
    intent: str
    confidence: float = Field(ge=0.0, le=0.99)
    keywords: Tuple[str, ...] = ()
    context: IntentContext = IntentContext()
    scores: Mapping[str, int] = Field(default_factory=dict, validate_default=True)

    @field_validator("scores")
    @classmethod
    def _freeze_scores(cls, value: Mapping[str, int]) -> Mapping[str, int]:
        return MappingProxyType(dict(value))

    @field_serializer("scores")
    def _dump_scores(self, value: Mapping[str, int]) -> Dict[str, int]:
        return dict(value)


class MessageMetadata(TriageRecord):
    """Cheap surface features of a preprocessed message."""
    length: int
    token_count: int
    has_numbers: bool
    has_special_chars: bool


class PreprocessedMessage(SanitizedMessage):
    """Sanitized message plus tokens, entities and metadata."""
    tokens: Tuple[str, ...]
    entities: EntitySet
    metadata: MessageMetadata


class TriageResult(TriageRecord):
    """Full pipeline output for one message."""
    message: PreprocessedMessage
    scope: ScopeResult
    intent: Optional[IntentResult] = None
    suggested_tools: List[str] = []


class TriageRequest(BaseModel):
    """Request schema for the triage endpoint."""
    message: str


class ErrorPayload(BaseModel):
    """Error details returned by the API."""
    code: str
    message: str


class ErrorResponse(BaseModel):
    """Error envelope returned by the API."""
    error: ErrorPayload
