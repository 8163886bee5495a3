"""Server-side Google service-account authentication.

Parses the service account key from configuration, signs an RS256 JWT
assertion with the cryptography library and exchanges it for an access
token (OAuth2 JWT-bearer grant).
"""

import base64
import json
import logging
import time
from typing import Any

import httpx
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

SHEETS_SCOPE = "https://www.googleapis.com/auth/spreadsheets"
JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
ASSERTION_LIFETIME_SECONDS = 3600


class SheetsConfigError(ValueError):
    """Google Sheets integration is missing or misconfigured."""


class ServiceAccountCredentials(BaseModel):
    """Fields of a service account key file that token exchange needs."""

    type: str = "service_account"
    project_id: str | None = None
    private_key_id: str | None = None
    private_key: str
    client_email: str
    client_id: str | None = None
    token_uri: str | None = None


def parse_service_account_key(raw: str | None) -> ServiceAccountCredentials:
    """
    Parse a service account key JSON string.

    Args:
        raw: Key JSON, usually from GOOGLE_SERVICE_ACCOUNT_KEY

    Returns:
        ServiceAccountCredentials

    Raises:
        SheetsConfigError: If the key is absent, malformed or truncated
    """
    if not raw:
        raise SheetsConfigError("GOOGLE_SERVICE_ACCOUNT_KEY environment variable is not set")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SheetsConfigError(f"Failed to parse service account key: {e}") from e

    # Keys pasted into env files often carry literal "\n" sequences
    if isinstance(data, dict) and isinstance(data.get("private_key"), str):
        data["private_key"] = data["private_key"].replace("\\n", "\n")

    try:
        credentials = ServiceAccountCredentials.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"]) or "root"
        raise SheetsConfigError(f"Service account key is invalid ({fields})") from e

    if "BEGIN PRIVATE KEY" not in credentials.private_key:
        raise SheetsConfigError("Invalid or truncated private key")

    return credentials


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def build_jwt_assertion(
    credentials: ServiceAccountCredentials,
    token_uri: str,
    scope: str = SHEETS_SCOPE,
    now: int | None = None,
) -> str:
    """
    Build a signed RS256 JWT for the JWT-bearer grant.

    Args:
        credentials: Parsed service account key
        token_uri: Audience (the OAuth2 token endpoint)
        scope: Space-separated OAuth scopes
        now: Issue time as a Unix timestamp (defaults to the current time)

    Returns:
        Compact JWT string

    Raises:
        SheetsConfigError: If the private key cannot be loaded as an RSA key
    """
    issued_at = int(time.time()) if now is None else now
    header: dict[str, Any] = {"alg": "RS256", "typ": "JWT"}
    if credentials.private_key_id:
        header["kid"] = credentials.private_key_id
    claims = {
        "iss": credentials.client_email,
        "scope": scope,
        "aud": token_uri,
        "iat": issued_at,
        "exp": issued_at + ASSERTION_LIFETIME_SECONDS,
    }

    signing_input = ".".join(
        _b64url(json.dumps(part, separators=(",", ":")).encode("utf-8")) for part in (header, claims)
    )

    try:
        key = serialization.load_pem_private_key(credentials.private_key.encode("utf-8"), password=None)
    except (ValueError, TypeError) as e:
        raise SheetsConfigError(f"Failed to load service account private key: {e}") from e
    if not isinstance(key, rsa.RSAPrivateKey):
        raise SheetsConfigError("Service account private key must be an RSA key")

    signature = key.sign(signing_input.encode("ascii"), padding.PKCS1v15(), hashes.SHA256())
    return f"{signing_input}.{_b64url(signature)}"


async def fetch_access_token(
    credentials: ServiceAccountCredentials,
    token_uri: str,
    client: httpx.AsyncClient,
    scope: str = SHEETS_SCOPE,
) -> str:
    """
    Exchange a signed assertion for a Google access token.

    Args:
        credentials: Parsed service account key
        token_uri: OAuth2 token endpoint
        client: HTTP client to use
        scope: OAuth scopes to request

    Returns:
        Bearer access token

    Raises:
        httpx.HTTPStatusError: If token exchange fails
    """
    assertion = build_jwt_assertion(credentials, credentials.token_uri or token_uri, scope)

    response = await client.post(
        credentials.token_uri or token_uri,
        data={"grant_type": JWT_BEARER_GRANT, "assertion": assertion},
    )
    response.raise_for_status()

    logger.debug(f"Google access token issued for {credentials.client_email}")
    return response.json()["access_token"]
