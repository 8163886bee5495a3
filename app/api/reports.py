"""API endpoint for readiness report PDF generation."""

import logging
import re
import unicodedata
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Body, HTTPException
from fastapi.responses import Response

from app.core.config import get_settings
from app.core.logging import get_logger, log_with_context, mask_name, new_request_id
from app.core.pdf_service import EmptyPdfError, PdfRenderError, html_to_pdf
from app.core.report_assets import ReportAssets
from app.core.report_normalizer import ReportValidationError, normalize_report
from app.core.report_renderer import ReportBranding, render_report_html

logger = get_logger(__name__)

router = APIRouter()


def report_filename(student_name: str) -> str:
    """
    Attachment filename for a student's report.

    Whitespace runs become dashes and the name is lower-cased and folded to
    ASCII so it is safe in a Content-Disposition header.
    """
    ascii_name = unicodedata.normalize("NFKD", student_name).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"\s+", "-", ascii_name.strip()).lower()
    slug = re.sub(r"[^a-z0-9._-]", "", slug) or "student"
    return f"psychometric-report-{slug}.pdf"


@router.post("/generate-pdf")
async def generate_pdf(payload: dict[str, Any] = Body(...)) -> Response:
    """
    Generate the readiness report PDF for one student.

    Args:
        payload: Survey results (several key spellings accepted)

    Returns:
        application/pdf attachment

    Raises:
        HTTPException 400: If a required field is missing or malformed
        HTTPException 500: If HTML rendering or PDF export fails
    """
    settings = get_settings()
    request_id = new_request_id()

    try:
        report = normalize_report(payload)
    except ReportValidationError as e:
        log_with_context(logger, logging.WARNING, f"Rejected report payload: {e}", request_id=request_id)
        raise HTTPException(status_code=400, detail=str(e))

    log_with_context(
        logger,
        logging.INFO,
        "PDF generation requested",
        request_id=request_id,
        student=mask_name(report.student_name),
        fields=len(payload),
        countries=len(report.country_fit),
    )

    try:
        html = render_report_html(
            report,
            assets=ReportAssets(Path(settings.REPORT_ASSETS_DIR)),
            branding=ReportBranding(name=settings.BRAND_NAME, tagline=settings.BRAND_TAGLINE),
        )
        pdf_bytes = await html_to_pdf(html, settings, request_id=request_id)
    except EmptyPdfError:
        raise HTTPException(status_code=500, detail="PDF generation failed - empty buffer")
    except PdfRenderError:
        raise HTTPException(status_code=500, detail="Failed to generate PDF")
    except Exception:
        logger.exception("Error generating PDF", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to generate PDF")

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{report_filename(report.student_name)}"',
        },
    )
