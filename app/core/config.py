"""Configuration management for the readiness report service."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    # Environment variables should be set directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    REPORT_ENV: str = Field(default="dev", description="Environment: dev, staging, prod")
    CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["*"], description="Origins allowed to call the API"
    )

    # Google Sheets lead log
    GOOGLE_SHEET_ID: str | None = Field(default=None, description="Spreadsheet ID for the lead log")
    GOOGLE_SERVICE_ACCOUNT_KEY: str | None = Field(
        default=None, description="Service account key JSON (single line)"
    )
    GOOGLE_SHEET_RANGE: str = Field(
        default="Sheet1!A:G",
        description="Columns: Email, Phone, Survey Type, Timestamp, Lead Generated, Contacted, Notes",
    )
    GOOGLE_TOKEN_URI: str = Field(
        default="https://oauth2.googleapis.com/token", description="OAuth2 token endpoint"
    )
    SHEETS_API_URL: str = Field(
        default="https://sheets.googleapis.com/v4/spreadsheets", description="Sheets v4 base URL"
    )
    SHEETS_API_TIMEOUT: int = Field(default=15, description="Sheets API timeout in seconds")

    # Report rendering
    REPORT_ASSETS_DIR: str = Field(
        default="assets", description="Directory holding logo, medal and flags/<code>.svg"
    )
    BRAND_NAME: str = Field(default="D-Vivid Consultant", description="Brand shown in the report")
    BRAND_TAGLINE: str = Field(
        default="Your Gateway to Global Education", description="Tagline under the brand"
    )

    # PDF rendering (headless Chromium)
    PDF_RENDER_TIMEOUT_MS: int = Field(
        default=30_000, description="Timeout for browser launch, content load and PDF export"
    )
    PDF_SETTLE_DELAY_MS: int = Field(
        default=1_000, description="Wait after content load so fonts and SVGs settle"
    )
    CHROMIUM_EXECUTABLE_PATH: str | None = Field(
        default=None, description="Chromium binary for serverless deployments"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If environment variables fail validation
    """
    return Settings()
