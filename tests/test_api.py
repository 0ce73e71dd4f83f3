"""HTTP API tests with the orchestrator dependency overridden."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from boardroom.core.models import CompanyContext
from boardroom.main import app
from boardroom.orchestration.orchestrator import create_orchestrator
from boardroom.runtime import get_orchestrator


@pytest.fixture
def client():
    orchestrator = create_orchestrator(CompanyContext(name="Acme", industry="Retail"))
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_reports_executive_count(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "executives": 6, "pending": 0}


def test_list_executives(client: TestClient) -> None:
    response = client.get("/executives")

    assert response.status_code == 200
    assert [item["role"] for item in response.json()] == ["CFO", "CMO", "COO", "CHRO", "CTO", "CCO"]


def test_send_message_returns_reply(client: TestClient) -> None:
    response = client.post(
        "/messages",
        json={
            "sender": "CFO",
            "recipient": "CMO",
            "subject": "Budget",
            "body": "Numbers?",
            "requires_response": True,
        },
    )

    assert response.status_code == 202
    data = response.json()
    assert data["message"]["status"] == "completed"
    assert data["reply"]["subject"] == "RE: Budget"
    assert data["pending"] == 1

    processed = client.post("/messages/process").json()
    assert processed == {"steps": 1, "pending": 0}
    assert len(client.get("/messages/processed").json()) == 2


def test_send_message_to_unknown_executive_is_404(client: TestClient) -> None:
    response = client.post(
        "/messages",
        json={"sender": "CFO", "recipient": "CEO", "subject": "Hi", "body": "Hello"},
    )

    assert response.status_code == 404
    [failure] = client.get("/messages/failures").json()
    assert failure["kind"] == "unroutable"


def test_send_message_with_empty_role_is_422(client: TestClient) -> None:
    response = client.post(
        "/messages",
        json={"sender": "CFO", "recipient": " ", "subject": "Hi", "body": "Hello"},
    )

    assert response.status_code == 422


def test_broadcast(client: TestClient) -> None:
    response = client.post(
        "/broadcasts",
        json={"sender": "CTO", "subject": "Maintenance", "body": "Tonight", "priority": "high"},
    )

    assert response.status_code == 202
    recipients = [item["recipient"] for item in response.json()]
    assert recipients == ["CFO", "CMO", "COO", "CHRO", "CCO"]


def test_record_and_query_decisions(client: TestClient) -> None:
    response = client.post(
        "/decisions",
        json={
            "owner": "CFO",
            "type": "approval",
            "title": "Budget",
            "summary": "Approved",
            "impacted_roles": ["CMO", "COO"],
            "action_required": True,
        },
    )

    assert response.status_code == 201
    assert len(response.json()["notifications"]) == 2
    assert len(client.get("/decisions").json()) == 1
    assert len(client.get("/decisions/pending").json()) == 1
    assert client.get("/decisions/CFO").json()[0]["title"] == "Budget"
    assert client.get("/decisions/CMO").json() == []


def test_decision_with_invalid_confidence_is_422(client: TestClient) -> None:
    response = client.post(
        "/decisions",
        json={"owner": "CFO", "type": "alert", "title": "X", "summary": "Y", "confidence": 2},
    )

    assert response.status_code == 422


def test_generate_reports(client: TestClient) -> None:
    response = client.post("/reports")

    assert response.status_code == 200
    data = response.json()
    assert len(data["decisions"]) == 6
    assert data["errors"] == []


def test_update_context_and_clear_history(client: TestClient) -> None:
    response = client.patch("/context", json={"industry": "Software", "goals": ["Ship v2"]})

    assert response.status_code == 200
    assert response.json()["industry"] == "Software"
    assert client.get("/context").json()["goals"] == ["Ship v2"]
    assert client.delete("/history").status_code == 204


@pytest.mark.parametrize("role", ["ALL", "%20"])
def test_decisions_for_impossible_role_is_422(client: TestClient, role: str) -> None:
    response = client.get(f"/decisions/{role}")

    assert response.status_code == 422


def test_update_context_can_clear_optional_figures(client: TestClient) -> None:
    client.patch("/context", json={"annual_revenue": 1_000_000, "employee_count": 12})

    response = client.patch("/context", json={"annual_revenue": None, "name": None})

    assert response.status_code == 200
    data = response.json()
    assert data["annual_revenue"] is None
    assert data["employee_count"] == 12
    assert data["name"] == "Acme"
