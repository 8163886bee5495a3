"""HTML → PDF conversion with headless Chromium (Playwright).

One browser per call, launched and closed inside the request. Every
browser step is bounded by PDF_RENDER_TIMEOUT_MS; failures are raised to
the caller as PdfRenderError without retrying.
"""

import asyncio
import logging

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from app.core.config import Settings, get_settings
from app.core.logging import get_logger, log_with_context

logger = get_logger(__name__)

# A4 at 96 DPI
A4_VIEWPORT = {"width": 794, "height": 1123}
PDF_MARGINS = {"top": "20mm", "right": "15mm", "bottom": "20mm", "left": "15mm"}
CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


class PdfRenderError(RuntimeError):
    """The headless browser could not produce a PDF."""


class EmptyPdfError(PdfRenderError):
    """The browser returned a zero-length PDF."""


async def html_to_pdf(
    html: str,
    settings: Settings | None = None,
    request_id: str | None = None,
) -> bytes:
    """
    Render an HTML document to an A4 PDF.

    Args:
        html: Complete, self-contained HTML document
        settings: Optional settings override (defaults to get_settings())
        request_id: Id of the calling request, for log correlation

    Returns:
        PDF bytes

    Raises:
        EmptyPdfError: If the browser returns an empty buffer
        PdfRenderError: If launch, content load or export fails or times out
    """
    settings = settings or get_settings()
    timeout = settings.PDF_RENDER_TIMEOUT_MS

    launch_kwargs = {"headless": True, "args": CHROMIUM_ARGS, "timeout": timeout}
    if settings.CHROMIUM_EXECUTABLE_PATH:
        launch_kwargs["executable_path"] = settings.CHROMIUM_EXECUTABLE_PATH

    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(**launch_kwargs)
            try:
                page = await browser.new_page(viewport=A4_VIEWPORT)
                page.set_default_timeout(timeout)
                page.set_default_navigation_timeout(timeout)

                await page.emulate_media(media="print")
                await page.set_content(html, wait_until="networkidle", timeout=timeout)
                if settings.PDF_SETTLE_DELAY_MS > 0:
                    await asyncio.sleep(settings.PDF_SETTLE_DELAY_MS / 1000)

                pdf_bytes = await page.pdf(
                    format="A4",
                    print_background=True,
                    prefer_css_page_size=True,
                    margin=PDF_MARGINS,
                    scale=1.0,
                    landscape=False,
                )
            finally:
                await browser.close()
    except PlaywrightError as e:
        log_with_context(logger, logging.ERROR, f"Headless browser failed: {e}", request_id=request_id)
        raise PdfRenderError(str(e)) from e

    if not pdf_bytes:
        log_with_context(logger, logging.ERROR, "PDF buffer is empty", request_id=request_id)
        raise EmptyPdfError("PDF generation failed - empty buffer")

    log_with_context(
        logger,
        logging.INFO,
        "PDF generated",
        request_id=request_id,
        html_chars=len(html),
        pdf_bytes=len(pdf_bytes),
    )
    return pdf_bytes
