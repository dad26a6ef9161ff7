"""
End-to-end tests for the triage pipeline.
"""
import pytest

from partsbot.services.message_service import MessageValidationError
from partsbot.services.triage_pipeline import TriagePipeline, triage_message
from partsbot.utils.text_cleaning import InvalidInput


def test_in_scope_message_is_classified():
    result = triage_message("How do I install PS11752778?")

    assert result.scope.in_scope is True
    assert result.scope.category == "parts_inquiry"
    assert result.intent is not None
    assert result.intent.intent == "installation_guide"
    assert result.intent.context.part_number == "PS11752778"
    assert result.suggested_tools == ["installationTool", "productSearchTool"]


def test_out_of_scope_message_skips_intent():
    result = triage_message("Tell me a joke about the weather")

    assert result.scope.in_scope is False
    assert result.scope.category == "out_of_scope"
    assert result.intent is None
    assert result.suggested_tools == []


def test_ambiguous_message_is_accepted():
    result = triage_message("xyz")

    assert result.scope.in_scope is True
    assert result.scope.category == "general_inquiry"
    assert result.intent is not None


def test_pipeline_propagates_contract_violations():
    with pytest.raises(InvalidInput):
        triage_message(None)
    with pytest.raises(MessageValidationError):
        triage_message("")


def test_pipeline_is_deterministic():
    pipeline = TriagePipeline()
    message = "My dishwasher is leaking, do you have a new pump?"
    assert pipeline.run(message) == pipeline.run(message)


def test_result_serializes_with_camel_case():
    dumped = triage_message("Is PS11752778 compatible with WDT780SAEM1?").model_dump(
        by_alias=True, mode="json"
    )

    assert dumped["scope"]["inScope"] is True
    assert dumped["scope"]["score"] == {"inScope": 100, "outOfScope": 0, "patterns": 100}
    assert dumped["intent"]["context"] == {
        "partNumber": "PS11752778",
        "modelNumber": "WDT780SAEM1",
        "applianceType": None,
    }
    assert dumped["message"]["entities"]["partNumbers"] == ["PS11752778"]
    assert dumped["message"]["metadata"]["tokenCount"] == 5
    assert dumped["suggestedTools"] == ["compatibilityTool", "productSearchTool"]
