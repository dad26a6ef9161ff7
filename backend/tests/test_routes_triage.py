"""
Tests for the triage HTTP API.
"""
from fastapi.testclient import TestClient

from partsbot.main import app

client = TestClient(app)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_triage_in_scope():
    response = client.post(
        "/api/triage",
        json={"message": "Is PS11752778 compatible with WDT780SAEM1?"},
    )
    assert response.status_code == 200, response.text

    body = response.json()
    assert body["scope"]["inScope"] is True
    assert body["scope"]["confidence"] == 1.0
    assert body["intent"]["intent"] == "compatibility_check"
    assert body["intent"]["context"]["partNumber"] == "PS11752778"
    assert body["intent"]["context"]["modelNumber"] == "WDT780SAEM1"
    assert body["suggestedTools"] == ["compatibilityTool", "productSearchTool"]


def test_triage_out_of_scope():
    response = client.post("/api/triage", json={"message": "tell me a joke about the weather"})
    assert response.status_code == 200

    body = response.json()
    assert body["scope"]["inScope"] is False
    assert body["intent"] is None
    assert body["suggestedTools"] == []


def test_triage_escapes_html():
    response = client.post("/api/triage", json={"message": "<script>fridge</script>"})
    assert response.status_code == 200
    assert response.json()["message"]["sanitized"] == "&lt;script&gt;fridge&lt;&#x2F;script&gt;"


def test_triage_empty_message():
    response = client.post("/api/triage", json={"message": "   "})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "MESSAGE_REQUIRED"


def test_triage_control_characters():
    response = client.post("/api/triage", json={"message": "fridge\u0000door"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "MESSAGE_INVALID_FORMAT"


def test_triage_requires_message_field():
    response = client.post("/api/triage", json={})
    assert response.status_code == 422
