"""Pydantic schemas for the readiness report."""

from pydantic import BaseModel, Field

# =============================================================================
# Categories
# =============================================================================

FINANCIAL_PLANNING = "Financial Planning"
ACADEMIC_READINESS = "Academic Readiness"
CAREER_ALIGNMENT = "Career Alignment"
PERSONAL_CULTURAL = "Personal & Cultural"
PRACTICAL_READINESS = "Practical Readiness"
SUPPORT_SYSTEM = "Support System"

CATEGORY_NAMES: tuple[str, ...] = (
    FINANCIAL_PLANNING,
    ACADEMIC_READINESS,
    CAREER_ALIGNMENT,
    PERSONAL_CULTURAL,
    PRACTICAL_READINESS,
    SUPPORT_SYSTEM,
)

# Weight of each category in the Comprehensive Readiness Index, in percent.
CATEGORY_WEIGHTS: dict[str, int] = {
    FINANCIAL_PLANNING: 25,
    ACADEMIC_READINESS: 20,
    CAREER_ALIGNMENT: 20,
    PERSONAL_CULTURAL: 15,
    PRACTICAL_READINESS: 10,
    SUPPORT_SYSTEM: 10,
}


class CategoryScores(BaseModel):
    """Per-category percentages after coercion."""

    financial_planning: int = 0
    academic_readiness: int = 0
    career_alignment: int = 0
    personal_cultural: int = 0
    practical_readiness: int = 0
    support_system: int = 0

    def by_name(self) -> dict[str, int]:
        """Scores keyed by display name, in report order."""
        return {
            FINANCIAL_PLANNING: self.financial_planning,
            ACADEMIC_READINESS: self.academic_readiness,
            CAREER_ALIGNMENT: self.career_alignment,
            PERSONAL_CULTURAL: self.personal_cultural,
            PRACTICAL_READINESS: self.practical_readiness,
            SUPPORT_SYSTEM: self.support_system,
        }


# =============================================================================
# Destinations
# =============================================================================


class CountryFit(BaseModel):
    """A ranked destination recommendation."""

    rank: int = Field(..., ge=1, description="1-based position in the input list")
    country: str
    match: int = Field(..., description="Match percentage")
    reasoning: str
    challenges: str = ""
    universities: list[str] = Field(default_factory=list)


# =============================================================================
# Report
# =============================================================================


class ReadinessReport(BaseModel):
    """Canonical report model handed to the renderer."""

    student_name: str
    student_email: str = ""
    student_phone: str = ""
    scores: CategoryScores
    overall_index: int
    readiness_level: str
    strengths: list[str]
    gaps: list[str]
    recommendations: list[str]
    country_fit: list[CountryFit] = Field(default_factory=list)

    @property
    def has_country_analysis(self) -> bool:
        return bool(self.country_fit)
