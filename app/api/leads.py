"""API endpoint for logging survey leads to Google Sheets."""

import logging

import httpx
from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from app.core.google_auth_helper import SheetsConfigError
from app.core.logging import get_logger, log_with_context, new_request_id
from app.core.schemas_leads import LeadCreate
from app.core.sheets_service import log_lead

logger = get_logger(__name__)

router = APIRouter()


@router.post("/log-user")
async def log_user(body: LeadCreate) -> JSONResponse:
    """
    Log a lead when a user starts a survey.

    Args:
        body: email, phone and surveyType

    Returns:
        201 with the logged row, or 200 with isDuplicate=true

    Raises:
        HTTPException 400: If email or phone is missing
        HTTPException 500: If the sheet is not configured or the API fails
    """
    request_id = new_request_id()
    email = (body.email or "").strip()
    phone = (body.phone or "").strip()
    if not email or not phone:
        raise HTTPException(status_code=400, detail="Email and phone are required")

    try:
        result = await log_lead(email, phone, body.survey_type, request_id=request_id)
    except SheetsConfigError as e:
        log_with_context(logger, logging.ERROR, f"Lead log not configured: {e}", request_id=request_id)
        raise HTTPException(status_code=500, detail=str(e))
    except httpx.HTTPError as e:
        log_with_context(logger, logging.ERROR, f"Google Sheets request failed: {e}", request_id=request_id)
        raise HTTPException(status_code=500, detail="Failed to log user data")
    except Exception:
        logger.exception("Error in log-user API", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    if result.is_duplicate:
        return JSONResponse(
            content={"message": "User already registered", "isDuplicate": True},
            status_code=200,
        )

    return JSONResponse(
        content={
            "message": "User data logged successfully",
            "isDuplicate": False,
            "data": result.record.model_dump(by_alias=True),
        },
        status_code=201,
    )
