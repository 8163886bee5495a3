"""SVG charts for the readiness report.

Pure Python, no I/O. Geometry is computed analytically from the category
scores; colours come from fixed score thresholds.
"""

import math
from dataclasses import dataclass
from html import escape

from app.core.schemas_report import (
    ACADEMIC_READINESS,
    CAREER_ALIGNMENT,
    FINANCIAL_PLANNING,
    PERSONAL_CULTURAL,
    PRACTICAL_READINESS,
    SUPPORT_SYSTEM,
    CategoryScores,
)

GREEN = "#2ECC71"
AMBER = "#F1C40F"
RED = "#ef4444"
TRACK_GREY = "#e5e7eb"


@dataclass(frozen=True)
class RadarCategory:
    name: str
    short: str
    icon: str
    color: str


RADAR_CATEGORIES: tuple[RadarCategory, ...] = (
    RadarCategory(FINANCIAL_PLANNING, "Financial", "💰", "#ef4444"),
    RadarCategory(ACADEMIC_READINESS, "Academic", "📚", "#3b82f6"),
    RadarCategory(CAREER_ALIGNMENT, "Career", "🎯", "#8b5cf6"),
    RadarCategory(PERSONAL_CULTURAL, "Cultural", "🌍", "#10b981"),
    RadarCategory(PRACTICAL_READINESS, "Practical", "⚙️", "#f59e0b"),
    RadarCategory(SUPPORT_SYSTEM, "Support", "🤝", "#06b6d4"),
)


def clamp_percent(score: float) -> float:
    """Bound a score to [0, 100] for drawing. Displayed numbers are not clamped."""
    return max(0.0, min(100.0, float(score)))


def score_band(score: float) -> str:
    """CSS band class for a score bar."""
    if score >= 80:
        return "excellent"
    if score >= 60:
        return "good"
    if score >= 40:
        return "average"
    return "weak"


def score_color(score: float) -> str:
    """Stroke/fill colour for the progress ring and radar outline."""
    if score >= 60:
        return GREEN
    if score >= 40:
        return AMBER
    return RED


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def radar_point(index: int, score: float, radius: float, center: float, count: int = 6) -> tuple[float, float]:
    """
    Cartesian point for one radar axis.

    The first axis points straight up; axes advance clockwise.

    Args:
        index: Axis index
        score: Category score (clamped to 0-100)
        radius: Radius of the 100% ring
        center: Centre coordinate (the chart is square)
        count: Number of axes

    Returns:
        (x, y) in SVG user units
    """
    angle = index * (2 * math.pi / count) - math.pi / 2
    distance = clamp_percent(score) / 100 * radius
    return center + math.cos(angle) * distance, center + math.sin(angle) * distance


def circular_progress_svg(score: int, readiness_level: str) -> str:
    """Ring chart for the overall index with the readiness label badge."""
    size = 140
    radius = 55
    center = size / 2
    circumference = 2 * math.pi * radius
    offset = circumference - clamp_percent(score) / 100 * circumference
    color = score_color(score)

    return f"""
      <div class="circular-progress-container">
        <svg class="circular-progress-chart" width="{size}" height="{size}" viewBox="0 0 {size} {size}">
          <circle cx="{_fmt(center)}" cy="{_fmt(center)}" r="{radius}" fill="none" stroke="{TRACK_GREY}" stroke-width="8" opacity="0.3"/>
          <circle cx="{_fmt(center)}" cy="{_fmt(center)}" r="{radius}" fill="none" stroke="{color}" stroke-width="10"
                  stroke-dasharray="{_fmt(circumference)}" stroke-dashoffset="{_fmt(offset)}" stroke-linecap="round"
                  transform="rotate(-90 {_fmt(center)} {_fmt(center)})"/>
          <text x="{_fmt(center)}" y="{_fmt(center - 8)}" text-anchor="middle" dominant-baseline="middle"
                font-size="28" font-weight="900" fill="{color}" font-family="Poppins, sans-serif">{score}%</text>
          <text x="{_fmt(center)}" y="{_fmt(center + 18)}" text-anchor="middle" dominant-baseline="middle"
                font-size="11" font-weight="700" fill="#64748b" font-family="Poppins, sans-serif" letter-spacing="1px">CRI</text>
        </svg>
        <div class="readiness-level-badge">
          <span class="readiness-level-text">{escape(readiness_level)}</span>
        </div>
      </div>
    """


def radar_chart_svg(scores: CategoryScores) -> str:
    """Six-axis radar chart with per-category segments and a legend."""
    by_name = scores.by_name()
    values = [by_name[cat.name] for cat in RADAR_CATEGORIES]
    count = len(RADAR_CATEGORIES)

    size = 350
    center = size / 2
    radius = size * 0.32

    rings = "".join(
        f'<circle cx="{_fmt(center)}" cy="{_fmt(center)}" r="{_fmt(radius * scale)}" '
        f'fill="none" stroke="{TRACK_GREY}" stroke-width="1.5" opacity="0.4"/>'
        for scale in (0.25, 0.5, 0.75, 1)
    )

    points = [radar_point(i, v, radius, center, count) for i, v in enumerate(values)]

    segments = []
    for i, cat in enumerate(RADAR_CATEGORIES):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % count]
        segments.append(
            f'<polygon points="{_fmt(center)},{_fmt(center)} {_fmt(x1)},{_fmt(y1)} {_fmt(x2)},{_fmt(y2)}" '
            f'fill="{cat.color}" fill-opacity="0.15" stroke="{cat.color}" stroke-width="2"/>'
        )

    axes = []
    for i, cat in enumerate(RADAR_CATEGORIES):
        ax, ay = radar_point(i, 100, radius, center, count)
        lx, ly = radar_point(i, 100, radius + 35, center, count)
        axes.append(
            f'<line x1="{_fmt(center)}" y1="{_fmt(center)}" x2="{_fmt(ax)}" y2="{_fmt(ay)}" '
            f'stroke="{cat.color}" stroke-width="2" opacity="0.5"/>'
            f'<text x="{_fmt(lx)}" y="{_fmt(ly)}" text-anchor="middle" dominant-baseline="middle" '
            f'font-size="12" font-weight="700" fill="{cat.color}" font-family="Poppins, sans-serif">{cat.short}</text>'
        )

    segment_markup = "".join(segments)
    axis_markup = "".join(axes)

    average = sum(values) / count
    outline_color = score_color(average)
    outline = " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in points)
    dots = "".join(
        f'<circle cx="{_fmt(x)}" cy="{_fmt(y)}" r="8" fill="{cat.color}" stroke="white" stroke-width="2.5"/>'
        for (x, y), cat in zip(points, RADAR_CATEGORIES)
    )

    legend = "".join(
        f"""
            <div class="radar-legend-item" style="border-left-color: {cat.color};">
              <span class="radar-legend-icon">{cat.icon}</span>
              <span class="radar-legend-color" style="background-color: {cat.color};"></span>
              <span class="radar-legend-label">{escape(cat.name)}</span>
              <span class="radar-legend-score">{value}%</span>
            </div>"""
        for cat, value in zip(RADAR_CATEGORIES, values)
    )

    return f"""
      <div class="radar-chart-full-page">
        <svg class="radar-chart-svg-full" width="{size}" height="{size}" viewBox="0 0 {size} {size}">
          {rings}
          {segment_markup}
          {axis_markup}
          <polygon points="{outline}" fill="{outline_color}" fill-opacity="0.1" stroke="{outline_color}" stroke-width="4"/>
          {dots}
        </svg>
        <div class="radar-legend-enhanced">{legend}
        </div>
      </div>
    """
