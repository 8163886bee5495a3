"""Tests for POST /api/log-user (Sheets mocked)."""

from unittest.mock import ANY, AsyncMock, patch

import httpx
from fastapi.testclient import TestClient

from app.core.google_auth_helper import SheetsConfigError
from app.core.schemas_leads import LeadLogResult, LeadRecord
from app.main import app

client = TestClient(app)


def _record(**overrides) -> LeadRecord:
    values = {
        "email": "asha@example.com",
        "phone": "+91 98765 43210",
        "survey_type": "StudyAbroad",
        "timestamp": "2026-10-18T09:30:00.000Z",
    }
    values.update(overrides)
    return LeadRecord(**values)


def test_new_lead_logged():
    result = LeadLogResult(is_duplicate=False, record=_record())

    with patch("app.api.leads.log_lead", new=AsyncMock(return_value=result)) as mock_log:
        response = client.post(
            "/api/log-user",
            json={"email": "asha@example.com", "phone": "+91 98765 43210", "surveyType": "StudyAbroad"},
        )

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "User data logged successfully"
    assert data["isDuplicate"] is False
    assert data["data"] == {
        "email": "asha@example.com",
        "phone": "+91 98765 43210",
        "surveyType": "StudyAbroad",
        "timestamp": "2026-10-18T09:30:00.000Z",
    }
    mock_log.assert_awaited_once_with(
        "asha@example.com", "+91 98765 43210", "StudyAbroad", request_id=ANY
    )
    assert len(mock_log.call_args.kwargs["request_id"]) == 12


def test_duplicate_lead():
    with patch("app.api.leads.log_lead", new=AsyncMock(return_value=LeadLogResult(is_duplicate=True))):
        response = client.post("/api/log-user", json={"email": "asha@example.com", "phone": "123"})

    assert response.status_code == 200
    assert response.json() == {"message": "User already registered", "isDuplicate": True}


def test_missing_phone_returns_400():
    with patch("app.api.leads.log_lead", new=AsyncMock()) as mock_log:
        response = client.post("/api/log-user", json={"email": "asha@example.com"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Email and phone are required"
    mock_log.assert_not_called()


def test_blank_email_returns_400():
    response = client.post("/api/log-user", json={"email": "  ", "phone": "123"})

    assert response.status_code == 400


def test_missing_configuration_returns_500():
    error = SheetsConfigError("Server configuration error (missing sheet ID)")

    with patch("app.api.leads.log_lead", new=AsyncMock(side_effect=error)):
        response = client.post("/api/log-user", json={"email": "asha@example.com", "phone": "123"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Server configuration error (missing sheet ID)"


def test_sheets_failure_returns_500():
    with patch("app.api.leads.log_lead", new=AsyncMock(side_effect=httpx.ConnectError("unreachable"))):
        response = client.post("/api/log-user", json={"email": "asha@example.com", "phone": "123"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to log user data"


def test_unexpected_error_returns_500():
    with patch("app.api.leads.log_lead", new=AsyncMock(side_effect=KeyError("values"))):
        response = client.post("/api/log-user", json={"email": "asha@example.com", "phone": "123"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"
