"""Google Sheets lead log.

Async httpx wrapper for the Sheets v4 values API, authenticated as a
service account. Leads are appended once per email: the first column of
every existing row (after the header) is scanned for an exact match before
writing.
"""

import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from app.core.config import Settings, get_settings
from app.core.google_auth_helper import (
    ServiceAccountCredentials,
    SheetsConfigError,
    fetch_access_token,
    parse_service_account_key,
)
from app.core.logging import get_logger, log_with_context, mask_email, mask_phone
from app.core.schemas_leads import LeadLogResult, LeadRecord

logger = get_logger(__name__)

DEFAULT_SURVEY_TYPE = "Unknown"


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. 2026-10-18T09:30:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SheetsClient:
    """Minimal Sheets v4 values client bound to one spreadsheet."""

    def __init__(
        self,
        sheet_id: str,
        credentials: ServiceAccountCredentials,
        http_client: httpx.AsyncClient,
        api_url: str = "https://sheets.googleapis.com/v4/spreadsheets",
        token_uri: str = "https://oauth2.googleapis.com/token",
    ):
        self.sheet_id = sheet_id
        self.credentials = credentials
        self.http = http_client
        self.api_url = api_url.rstrip("/")
        self.token_uri = token_uri
        self._access_token: str | None = None

    async def _headers(self) -> dict[str, str]:
        if self._access_token is None:
            self._access_token = await fetch_access_token(self.credentials, self.token_uri, self.http)
        return {"Authorization": f"Bearer {self._access_token}"}

    def _values_url(self, cell_range: str, suffix: str = "") -> str:
        return f"{self.api_url}/{quote(self.sheet_id, safe='')}/values/{quote(cell_range, safe='!:')}{suffix}"

    async def get_values(self, cell_range: str) -> list[list[str]]:
        """
        Read a range.

        Raises:
            httpx.HTTPStatusError: If the API request fails
        """
        response = await self.http.get(self._values_url(cell_range), headers=await self._headers())
        response.raise_for_status()
        return response.json().get("values", [])

    async def append_values(
        self,
        cell_range: str,
        rows: list[list[Any]],
        value_input_option: str = "USER_ENTERED",
    ) -> dict[str, Any]:
        """
        Append rows after the last row of a range.

        Raises:
            httpx.HTTPStatusError: If the API request fails
        """
        response = await self.http.post(
            self._values_url(cell_range, ":append"),
            headers=await self._headers(),
            params={"valueInputOption": value_input_option},
            json={"values": rows},
        )
        response.raise_for_status()
        return response.json()


def email_exists(rows: list[list[str]], email: str) -> bool:
    """True when any data row (header skipped) has ``email`` in its first cell."""
    return any(row and row[0] == email for row in rows[1:])


async def log_lead(
    email: str,
    phone: str,
    survey_type: str | None = None,
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
    request_id: str | None = None,
) -> LeadLogResult:
    """
    Record a lead in the sheet unless the email is already there.

    Args:
        email: Lead email (exact-match duplicate key)
        phone: Lead phone number
        survey_type: Survey variant label; "Unknown" when empty
        settings: Optional settings override
        http_client: Optional client (a short-lived one is created otherwise)
        request_id: Id of the calling request, for log correlation

    Returns:
        LeadLogResult with is_duplicate and the written record

    Raises:
        SheetsConfigError: If the sheet ID or service account key is missing
        httpx.HTTPError: If a Sheets or token request fails
    """
    settings = settings or get_settings()

    if not settings.GOOGLE_SHEET_ID:
        raise SheetsConfigError("Server configuration error (missing sheet ID)")
    credentials = parse_service_account_key(settings.GOOGLE_SERVICE_ACCOUNT_KEY)

    own_client = http_client is None
    client = http_client or httpx.AsyncClient(timeout=settings.SHEETS_API_TIMEOUT)
    try:
        sheets = SheetsClient(
            settings.GOOGLE_SHEET_ID,
            credentials,
            client,
            api_url=settings.SHEETS_API_URL,
            token_uri=settings.GOOGLE_TOKEN_URI,
        )

        rows = await sheets.get_values(settings.GOOGLE_SHEET_RANGE)
        if email_exists(rows, email):
            log_with_context(
                logger,
                logging.INFO,
                "Lead already registered",
                request_id=request_id,
                email=mask_email(email),
                rows_scanned=len(rows),
            )
            return LeadLogResult(is_duplicate=True)

        record = LeadRecord(
            email=email,
            phone=phone,
            survey_type=survey_type or DEFAULT_SURVEY_TYPE,
            timestamp=utc_timestamp(),
        )
        # Email, Phone, Survey Type, Timestamp, Lead Generated, Contacted, Notes
        await sheets.append_values(
            settings.GOOGLE_SHEET_RANGE,
            [[record.email, record.phone, record.survey_type, record.timestamp, "", "", ""]],
        )
        log_with_context(
            logger,
            logging.INFO,
            "Lead logged",
            request_id=request_id,
            email=mask_email(email),
            phone=mask_phone(phone),
            survey_type=record.survey_type,
            rows_scanned=len(rows),
        )
        return LeadLogResult(is_duplicate=False, record=record)
    finally:
        if own_client:
            await client.aclose()
