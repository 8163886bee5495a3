"""Pydantic schemas for lead logging."""

from pydantic import BaseModel, ConfigDict, Field


class LeadCreate(BaseModel):
    """Request body for logging a survey lead."""

    model_config = ConfigDict(populate_by_name=True)

    email: str | None = Field(None, description="Lead email; first-column duplicate key")
    phone: str | None = Field(None, description="Lead phone number")
    survey_type: str | None = Field(
        None,
        alias="surveyType",
        description="Survey variant, e.g. Concise, Expanded, UltraQuick, StudyAbroad",
    )


class LeadRecord(BaseModel):
    """Row written to the lead sheet."""

    model_config = ConfigDict(populate_by_name=True)

    email: str
    phone: str
    survey_type: str = Field(..., serialization_alias="surveyType")
    timestamp: str


class LeadLogResult(BaseModel):
    """Outcome of a lead log attempt."""

    is_duplicate: bool
    record: LeadRecord | None = None
