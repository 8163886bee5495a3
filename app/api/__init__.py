"""API router for report and lead endpoints."""

from fastapi import APIRouter

from app.api import leads, reports

router = APIRouter()

# Report PDF generation
router.include_router(reports.router, tags=["reports"])

# Lead capture (Google Sheets)
router.include_router(leads.router, tags=["leads"])
