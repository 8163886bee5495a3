"""Tests for POST /api/generate-pdf (PDF export mocked)."""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from app.api.reports import report_filename
from app.core.pdf_service import EmptyPdfError, PdfRenderError
from app.main import app

client = TestClient(app)

FAKE_PDF = b"%PDF-1.4\n%fake report\n"


def test_generate_pdf_returns_attachment(report_payload):
    with patch("app.api.reports.html_to_pdf", new=AsyncMock(return_value=FAKE_PDF)) as mock_pdf:
        response = client.post("/api/generate-pdf", json=report_payload)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="psychometric-report-asha.pdf"'
    assert response.content == FAKE_PDF

    assert mock_pdf.call_args.kwargs["request_id"]
    html = mock_pdf.call_args.args[0]
    assert "Asha" in html
    assert 'class="page page-break"' in html


def test_missing_field_returns_400(report_payload):
    del report_payload["ReadinessLevel"]

    with patch("app.api.reports.html_to_pdf", new=AsyncMock(return_value=FAKE_PDF)) as mock_pdf:
        response = client.post("/api/generate-pdf", json=report_payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "Readiness Level is required"
    mock_pdf.assert_not_called()


def test_oversized_score_still_renders(report_payload):
    report_payload["OverallReadinessIndex"] = "9" * 400

    with patch("app.api.reports.html_to_pdf", new=AsyncMock(return_value=FAKE_PDF)) as mock_pdf:
        response = client.post("/api/generate-pdf", json=report_payload)

    assert response.status_code == 200
    assert response.content == FAKE_PDF
    assert ">0%</text>" in mock_pdf.call_args.args[0]


def test_non_object_body_returns_400_or_422():
    response = client.post("/api/generate-pdf", json=["Asha"])

    assert response.status_code in (400, 422)


def test_empty_pdf_returns_500(report_payload):
    with patch("app.api.reports.html_to_pdf", new=AsyncMock(side_effect=EmptyPdfError("empty"))):
        response = client.post("/api/generate-pdf", json=report_payload)

    assert response.status_code == 500
    assert response.json()["detail"] == "PDF generation failed - empty buffer"


def test_browser_failure_returns_500(report_payload):
    with patch("app.api.reports.html_to_pdf", new=AsyncMock(side_effect=PdfRenderError("launch failed"))):
        response = client.post("/api/generate-pdf", json=report_payload)

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to generate PDF"


def test_report_filename():
    assert report_filename("Asha") == "psychometric-report-asha.pdf"
    assert report_filename("Asha  Rao") == "psychometric-report-asha-rao.pdf"
    assert report_filename("José Núñez") == "psychometric-report-jose-nunez.pdf"
    assert report_filename('"; rm') == "psychometric-report--rm.pdf"
    assert report_filename("李") == "psychometric-report-student.pdf"
