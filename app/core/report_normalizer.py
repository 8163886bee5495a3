"""Normalize loosely-shaped survey results into a ReadinessReport.

Upstream producers (the survey scorer and the LLM summarizer) do not agree
on key names, so every concept is looked up under a small, fixed set of
aliases. Required fields fail fast with a field-specific error; scores and
narrative text are coerced leniently.
"""

import math
import re
from collections.abc import Mapping
from typing import Any

from app.core.logging import get_logger
from app.core.schemas_report import CategoryScores, CountryFit, ReadinessReport

logger = get_logger(__name__)

STUDENT_NAME_KEYS = ("Student Name", "studentName", "StudentName")
STUDENT_EMAIL_KEYS = ("Student Email", "studentEmail", "userEmail")
STUDENT_PHONE_KEYS = ("Student Phone", "studentPhone", "userPhone")
SCORES_KEYS = ("scores", "Scores")
OVERALL_INDEX_KEYS = ("Overall Readiness Index", "overallIndex", "OverallReadinessIndex")
READINESS_LEVEL_KEYS = ("Readiness Level", "readinessLevel", "ReadinessLevel")
STRENGTHS_KEYS = ("Strengths", "strengths")
GAPS_KEYS = ("Gaps", "gaps")
RECOMMENDATIONS_KEYS = ("Recommendations", "recommendations")
COUNTRY_FIT_KEYS = ("Country Fit (Top 3)", "countryFit", "CountryFit")

# Folded (lower-case, alphanumeric only) spellings accepted for each category.
CATEGORY_KEY_ALIASES: dict[str, tuple[str, ...]] = {
    "financial_planning": ("financialplanning",),
    "academic_readiness": ("academicreadiness",),
    "career_alignment": ("careeralignment",),
    "personal_cultural": ("personalcultural", "personalandcultural"),
    "practical_readiness": ("practicalreadiness",),
    "support_system": ("supportsystem",),
}

EMPTY_NARRATIVE_SENTINELS = frozenset(
    {
        "No strengths identified",
        "No gaps identified",
        "No recommendations provided",
    }
)
NOT_AVAILABLE_BULLET = "Information not available"
INVALID_FORMAT_BULLET = "Invalid input format"

DEFAULT_STRING_REASONING = "Well-suited destination for study abroad"
DEFAULT_OBJECT_REASONING = "Good study destination"
DEFAULT_MATCH = 100
MATCH_STEP = 15

_NON_NUMERIC = re.compile(r"[^\d.]")
_LEADING_FLOAT = re.compile(r"^(\d+\.?\d*|\.\d+)")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_CLAUSE_SPLIT = re.compile(r"[,;]+")
_ENUMERATION_PREFIX = re.compile(r"^\d+\.?\s*")


class ReportValidationError(ValueError):
    """Payload cannot be turned into a report."""


class MissingFieldError(ReportValidationError):
    """A required report field is absent."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


# =============================================================================
# Coercion helpers
# =============================================================================


def _round_half_up(value: float) -> int:
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def parse_score(value: Any) -> int:
    """
    Coerce a raw score to an integer percentage.

    Numbers are rounded half up. Text is stripped of everything but digits
    and decimal points before parsing, so "85%" becomes 85. Anything that
    cannot be parsed, or is too large to represent, becomes 0. Values are
    not clamped.

    Args:
        value: Raw score from the payload

    Returns:
        Integer score
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0
        return _round_half_up(number)
    if isinstance(value, str):
        match = _LEADING_FLOAT.match(_NON_NUMERIC.sub("", value))
        if not match:
            return 0
        return _round_half_up(float(match.group(1)))
    return 0


def format_bullets(value: Any) -> list[str]:
    """
    Turn a narrative field into an ordered list of bullet strings.

    Args:
        value: A list of strings or a single delimited string

    Returns:
        Bullet strings, never empty
    """
    if value is None:
        return [NOT_AVAILABLE_BULLET]

    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value]

    if not isinstance(value, str):
        return [INVALID_FORMAT_BULLET]

    if not value.strip() or value in EMPTY_NARRATIVE_SENTINELS:
        return [NOT_AVAILABLE_BULLET]

    segments = [s for s in _SENTENCE_SPLIT.split(value) if s.strip()]
    if len(segments) <= 1:
        segments = [s for s in _CLAUSE_SPLIT.split(value) if s.strip()]

    bullets = []
    for segment in segments:
        bullet = _ENUMERATION_PREFIX.sub("", segment.strip())
        if bullet:
            bullets.append(bullet)

    return bullets or [NOT_AVAILABLE_BULLET]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def _first_present(payload: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    """Value of the first alias that carries a non-blank value."""
    for key in keys:
        value = payload.get(key)
        if not _is_blank(value):
            return value
    return None


def _fold_key(key: str) -> str:
    return re.sub(r"[^a-z0-9]", "", key.lower())


def _parse_category_scores(raw: Mapping[str, Any]) -> CategoryScores:
    folded = {_fold_key(str(k)): v for k, v in raw.items()}
    values = {}
    for field_name, aliases in CATEGORY_KEY_ALIASES.items():
        raw_value = next((folded[a] for a in aliases if a in folded), None)
        values[field_name] = parse_score(raw_value)
    return CategoryScores(**values)


def _coerce_universities(value: Any) -> list[str]:
    if _is_blank(value):
        return []
    if isinstance(value, str):
        return [u.strip() for u in value.split(",") if u.strip()]
    if isinstance(value, (list, tuple)):
        return [str(u).strip() for u in value if str(u).strip()]
    return [str(value)]


def synthesized_match(index: int) -> int:
    """Match score given to a bare country name at 0-based position ``index``."""
    return max(0, DEFAULT_MATCH - MATCH_STEP * index)


def normalize_country_fit(value: Any) -> list[CountryFit]:
    """
    Normalize the ranked destination list.

    Bare strings receive a synthesized, descending match score; objects are
    read as-is. The input order is the ranking.

    Args:
        value: List of strings and/or objects, or a comma-separated string

    Returns:
        CountryFit entries ranked by position

    Raises:
        ReportValidationError: If an entry has no usable country name
    """
    if _is_blank(value):
        return []
    if isinstance(value, str):
        value = [c.strip() for c in value.split(",") if c.strip()]
    if not isinstance(value, (list, tuple)):
        raise ReportValidationError("Country Fit must be a list")

    entries: list[CountryFit] = []
    for index, item in enumerate(value):
        rank = index + 1
        if isinstance(item, str):
            if not item.strip():
                raise ReportValidationError(f"Country Fit entry {rank} is missing a country name")
            entries.append(
                CountryFit(
                    rank=rank,
                    country=item.strip(),
                    match=synthesized_match(index),
                    reasoning=DEFAULT_STRING_REASONING,
                )
            )
        elif isinstance(item, Mapping):
            country = _first_present(item, ("country", "Country", "name"))
            if not isinstance(country, str) or not country.strip():
                raise ReportValidationError(f"Country Fit entry {rank} is missing a country name")
            raw_match = item.get("match")
            reasoning = item.get("reasoning")
            challenges = item.get("challenges")
            entries.append(
                CountryFit(
                    rank=rank,
                    country=country.strip(),
                    match=DEFAULT_MATCH if _is_blank(raw_match) else parse_score(raw_match),
                    reasoning=str(reasoning).strip() if not _is_blank(reasoning) else DEFAULT_OBJECT_REASONING,
                    challenges=str(challenges).strip() if not _is_blank(challenges) else "",
                    universities=_coerce_universities(item.get("universities")),
                )
            )
        else:
            raise ReportValidationError(f"Country Fit entry {rank} must be a name or an object")

    return entries


# =============================================================================
# Entry point
# =============================================================================


def _require(payload: Mapping[str, Any], keys: tuple[str, ...], field: str, message: str) -> Any:
    value = _first_present(payload, keys)
    if value is None:
        raise MissingFieldError(field, message)
    return value


def normalize_report(payload: Mapping[str, Any]) -> ReadinessReport:
    """
    Validate a survey results payload and build the canonical report.

    Args:
        payload: Raw JSON body

    Returns:
        ReadinessReport

    Raises:
        MissingFieldError: If any required field is absent
        ReportValidationError: If a field has an unusable shape
    """
    if not isinstance(payload, Mapping):
        raise ReportValidationError("Report data must be a JSON object")

    student_name = _require(payload, STUDENT_NAME_KEYS, "student_name", "Student Name is required")

    scores_raw = _require(payload, SCORES_KEYS, "scores", "Scores data is required")
    if not isinstance(scores_raw, Mapping):
        raise ReportValidationError("Scores data must be an object")

    overall_raw = next(
        (payload[k] for k in OVERALL_INDEX_KEYS if payload.get(k) is not None),
        None,
    )
    if overall_raw is None:
        raise MissingFieldError("overall_index", "Overall Readiness Index is required")

    readiness_level = _require(
        payload, READINESS_LEVEL_KEYS, "readiness_level", "Readiness Level is required"
    )
    strengths = _require(payload, STRENGTHS_KEYS, "strengths", "Strengths analysis is required")
    gaps = _require(payload, GAPS_KEYS, "gaps", "Gaps analysis is required")
    recommendations = _require(
        payload, RECOMMENDATIONS_KEYS, "recommendations", "Recommendations are required"
    )

    report = ReadinessReport(
        student_name=str(student_name).strip(),
        student_email=str(_first_present(payload, STUDENT_EMAIL_KEYS) or "").strip(),
        student_phone=str(_first_present(payload, STUDENT_PHONE_KEYS) or "").strip(),
        scores=_parse_category_scores(scores_raw),
        overall_index=parse_score(overall_raw),
        readiness_level=str(readiness_level).strip(),
        strengths=format_bullets(strengths),
        gaps=format_bullets(gaps),
        recommendations=format_bullets(recommendations),
        country_fit=normalize_country_fit(_first_present(payload, COUNTRY_FIT_KEYS)),
    )

    logger.debug(
        f"Normalized report: overall={report.overall_index}, "
        f"level={report.readiness_level}, countries={len(report.country_fit)}"
    )
    return report

