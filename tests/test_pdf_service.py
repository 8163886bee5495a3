"""Tests for headless-browser PDF export (browser mocked)."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import Error as PlaywrightError

from app.core.config import Settings
from app.core.pdf_service import EmptyPdfError, PdfRenderError, html_to_pdf


def _settings(**overrides) -> Settings:
    values = {"PDF_SETTLE_DELAY_MS": 0, "PDF_RENDER_TIMEOUT_MS": 5000}
    values.update(overrides)
    return Settings(**values)


def _mock_playwright(pdf_bytes: bytes = b"%PDF-1.4 fake", launch_error: Exception | None = None):
    page = MagicMock()
    page.emulate_media = AsyncMock()
    page.set_content = AsyncMock()
    page.pdf = AsyncMock(return_value=pdf_bytes)

    browser = MagicMock()
    browser.new_page = AsyncMock(return_value=page)
    browser.close = AsyncMock()

    playwright = MagicMock()
    if launch_error:
        playwright.chromium.launch = AsyncMock(side_effect=launch_error)
    else:
        playwright.chromium.launch = AsyncMock(return_value=browser)

    manager = AsyncMock()
    manager.__aenter__ = AsyncMock(return_value=playwright)
    manager.__aexit__ = AsyncMock(return_value=False)

    return manager, playwright, browser, page


@pytest.mark.asyncio
async def test_html_to_pdf_returns_bytes():
    manager, playwright, browser, page = _mock_playwright()

    with patch("app.core.pdf_service.async_playwright", return_value=manager):
        result = await html_to_pdf("<html><body>Report</body></html>", _settings())

    assert result == b"%PDF-1.4 fake"
    page.set_content.assert_awaited_once()
    assert page.set_content.call_args.kwargs["wait_until"] == "networkidle"
    pdf_kwargs = page.pdf.call_args.kwargs
    assert pdf_kwargs["format"] == "A4"
    assert pdf_kwargs["print_background"] is True
    browser.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_executable_path_passed_to_launch():
    manager, playwright, _, _ = _mock_playwright()

    with patch("app.core.pdf_service.async_playwright", return_value=manager):
        await html_to_pdf("<html></html>", _settings(CHROMIUM_EXECUTABLE_PATH="/opt/chromium"))

    launch_kwargs = playwright.chromium.launch.call_args.kwargs
    assert launch_kwargs["executable_path"] == "/opt/chromium"
    assert launch_kwargs["headless"] is True


@pytest.mark.asyncio
async def test_empty_buffer_raises():
    manager, _, browser, _ = _mock_playwright(pdf_bytes=b"")

    with patch("app.core.pdf_service.async_playwright", return_value=manager):
        with pytest.raises(EmptyPdfError):
            await html_to_pdf("<html></html>", _settings())

    browser.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_browser_failure_raises_render_error():
    manager, _, _, _ = _mock_playwright(launch_error=PlaywrightError("Browser closed"))

    with patch("app.core.pdf_service.async_playwright", return_value=manager):
        with pytest.raises(PdfRenderError, match="Browser closed"):
            await html_to_pdf("<html></html>", _settings())


@pytest.mark.asyncio
async def test_browser_closed_when_export_fails():
    manager, _, browser, page = _mock_playwright()
    page.pdf = AsyncMock(side_effect=PlaywrightError("Timeout 5000ms exceeded"))

    with patch("app.core.pdf_service.async_playwright", return_value=manager):
        with pytest.raises(PdfRenderError):
            await html_to_pdf("<html></html>", _settings())

    browser.close.assert_awaited_once()
