"""Pytest configuration and fixtures."""

import os

import pytest


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["REPORT_ENV"] = "test"
    os.environ["GOOGLE_SHEET_ID"] = "test-sheet-id"
    os.environ["PDF_SETTLE_DELAY_MS"] = "0"


@pytest.fixture
def report_payload() -> dict:
    """Survey results as the survey front end posts them."""
    return {
        "StudentName": "Asha",
        "scores": {
            "FinancialPlanning": "78%",
            "AcademicReadiness": 90,
            "CareerAlignment": 72,
            "PersonalCultural": "65",
            "PracticalReadiness": 55.5,
            "SupportSystem": 80,
        },
        "OverallReadinessIndex": 82,
        "ReadinessLevel": "High",
        "Strengths": "Strong academics. Good savings.",
        "Gaps": "Limited work experience.",
        "Recommendations": "Build a budget plan.",
        "CountryFit": ["Canada", "Germany"],
    }
