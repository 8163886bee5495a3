"""Render a ReadinessReport into a self-contained, printable HTML document.

Pure Python, with no browser or network access. All styling is inlined and every
image is embedded as a data URI, so the output can be handed straight to a
headless browser for A4 pagination. Given the same report, assets and date
the output is byte-identical.

Page 1 always carries the overall index and the six score cards. Page 2,
the country analysis, is emitted only when the report has destinations.
"""

from dataclasses import dataclass
from datetime import date
from html import escape

from app.core.country_codes import fallback_code
from app.core.report_assets import ReportAssets, placeholder_flag, placeholder_logo_uri
from app.core.report_charts import circular_progress_svg, clamp_percent, radar_chart_svg, score_band
from app.core.schemas_report import CATEGORY_NAMES, CATEGORY_WEIGHTS, CountryFit, ReadinessReport

DISCLAIMER = (
    "Results are based on your inputs and benchmark data. The analysis is intended as "
    "guidance and should be interpreted as advisory, not definitive or prescriptive. This "
    "assessment provides general recommendations and should be used in conjunction with "
    "professional counseling for study abroad planning."
)


@dataclass(frozen=True)
class ReportBranding:
    name: str = "D-Vivid Consultant"
    tagline: str = "Your Gateway to Global Education"
    title: str = "Study Abroad Assessment Report"
    subtitle: str = "Comprehensive Readiness Index (CRI)"


@dataclass(frozen=True)
class RankBadge:
    color: str
    background: str
    icon: str
    label: str


@dataclass(frozen=True)
class CountryMetrics:
    tuition: str
    community: str
    support: str
    language: str


# =============================================================================
# Deterministic mappings
# =============================================================================


def format_report_date(day: date) -> str:
    """e.g. "October 18, 2026"."""
    return f"{day:%B} {day.day}, {day.year}"


def match_strength(match: int) -> str:
    if match >= 80:
        return "Strong Fit"
    if match >= 70:
        return "Good Fit"
    if match >= 60:
        return "Moderate Fit"
    return "Fair Fit"


def match_progress_color(match: int) -> str:
    if match >= 80:
        return "#2ECC71"
    if match >= 70:
        return "#F1C40F"
    return "#0066CC"


def rank_badge(rank: int) -> RankBadge:
    if rank == 1:
        return RankBadge("#F1C40F", "#FEF3C7", "🥇", "Top Choice")
    if rank == 2:
        return RankBadge("#94A3B8", "#F1F5F9", "🥈", "Great Option")
    return RankBadge("#D97706", "#FEF3C7", "🥉", "Good Fit")


def _mentions(text: str, *phrases: str) -> bool:
    return any(p in text for p in phrases)


def extract_country_metrics(reasoning: str, country: str) -> CountryMetrics:
    """
    Derive the four headline metrics shown on a country card.

    Keyword heuristics over the free-text reasoning, with a few defaults
    keyed on well-known destinations.
    """
    desc = reasoning.lower()
    name = country.lower()

    tuition = "Moderate"
    if _mentions(desc, "affordable", "lower cost", "moderate cost") or _mentions(name, "ireland", "germany"):
        tuition = "Affordable"
    elif _mentions(desc, "expensive", "high cost", "higher tuition") or _mentions(name, "usa", "uk"):
        tuition = "Higher"

    community = "Moderate"
    if _mentions(desc, "strong indian", "large indian", "indian diaspora", "welcoming") or _mentions(
        name, "canada", "uk", "australia"
    ):
        community = "Strong"
    elif _mentions(desc, "limited", "small"):
        community = "Growing"

    support = "Good"
    if _mentions(desc, "excellent support", "robust support", "strong support", "extensive support"):
        support = "Excellent"
    elif _mentions(desc, "limited support", "basic support"):
        support = "Basic"

    language = "English"
    if "french" in desc or "france" in name or ("canada" in name and "bilingual" in desc):
        language = "English/French"
    elif "german" in desc or "germany" in name:
        language = "German/English"
    elif "spanish" in desc or "spain" in name:
        language = "Spanish/English"

    return CountryMetrics(tuition, community, support, language)


def fit_summary(reasoning: str) -> str:
    """First sentence of the reasoning, never truncated mid-sentence."""
    return reasoning.split(".")[0].strip()


# =============================================================================
# Sections
# =============================================================================


def _header(branding: ReportBranding, logo_uri: str, title: str, subtitle: str) -> str:
    return f"""
      <div class="header">
        <div class="header-content">
          <div class="logo-section">
            <div class="logo"><img src="{logo_uri}" alt="{escape(branding.name)} Logo"/></div>
            <div class="company-info">
              <h1>{escape(branding.name)}</h1>
              <p>{escape(branding.tagline)}</p>
            </div>
          </div>
          <div class="report-title">
            <h2>{escape(title)}</h2>
            <p>{escape(subtitle)}</p>
          </div>
        </div>
      </div>"""


def _footer(branding: ReportBranding, logo_uri: str, generated: str) -> str:
    return f"""
      <div class="footer">
        <div class="footer-brand">
          <div class="footer-logo"><img src="{logo_uri}" alt="{escape(branding.name)} Logo"/></div>
          <span>{escape(branding.name)} - {escape(branding.tagline)}</span>
        </div>
        <div>Report Generated: {generated}</div>
      </div>"""


def _score_card(label: str, score: int) -> str:
    width = clamp_percent(score)
    return f"""
        <div class="score-card">
          <h4>{escape(label)}</h4>
          <div class="score-weight">Weight {CATEGORY_WEIGHTS[label]}%</div>
          <div class="score-value"><span class="score-number">{score}</span><span class="percent-symbol">%</span></div>
          <div class="score-bar"><div class="score-fill {score_band(score)}" style="width: {width:g}%"></div></div>
        </div>"""


def _flag(country: str, assets: ReportAssets | None) -> str:
    if assets is None:
        return placeholder_flag(fallback_code(country))
    return assets.flag_img(country)


def _bullet_list(items: list[str]) -> str:
    return "".join(f'<li class="bullet-item">{escape(item)}</li>' for item in items)


def _analysis_section(css_class: str, title: str, items: list[str]) -> str:
    return f"""
        <div class="section-divider"></div>
        <div class="analysis-section {css_class}">
          <h4>{escape(title)}</h4>
          <ul class="bullet-list">{_bullet_list(items)}</ul>
        </div>"""


def _country_card_grid(entry: CountryFit, assets: ReportAssets | None, medal_uri: str | None) -> str:
    badge = rank_badge(entry.rank)
    metrics = extract_country_metrics(entry.reasoning, entry.country)
    flag = _flag(entry.country, assets)
    medal = (
        f'<img src="{medal_uri}" alt="Medal" class="rank-medal-img"/>'
        if medal_uri
        else f'<span class="rank-icon">{badge.icon}</span>'
    )
    challenges = (
        f"""
          <div class="country-challenges-note">
            <span class="challenges-icon">⚠️</span>
            <span class="challenges-text">{escape(entry.challenges)}</span>
          </div>"""
        if entry.challenges
        else ""
    )
    metric_items = "".join(
        f"""
            <div class="country-metric-item" data-metric="{key}">
              <span class="metric-icon">{icon}</span>
              <div class="metric-content">
                <span class="metric-label">{label}</span>
                <span class="metric-value">{value}</span>
              </div>
            </div>"""
        for key, icon, label, value in (
            ("tuition", "🎓", "Tuition", metrics.tuition),
            ("community", "🌍", "Community", metrics.community),
            ("support", "🤝", "Support", metrics.support),
            ("language", "💬", "Language", metrics.language),
        )
    )

    return f"""
        <div class="country-card-grid" data-rank="{entry.rank}">
          <div class="country-rank-badge" style="background-color: {badge.background}; border-color: {badge.color};" title="{badge.label}">
            {medal}
            <span class="rank-number">#{entry.rank}</span>
          </div>
          <div class="country-card-header">
            <div class="country-flag-section">{flag}</div>
            <div class="country-title-section">
              <h3 class="country-card-name">{escape(entry.country)}</h3>
              <div class="country-match-info">
                <span class="match-percentage">{entry.match}% Match</span>
                <span class="match-divider">|</span>
                <span class="match-strength">{match_strength(entry.match)}</span>
              </div>
            </div>
          </div>
          <div class="country-progress-container">
            <div class="country-progress-bar">
              <div class="country-progress-fill" style="width: {clamp_percent(entry.match):g}%; background-color: {match_progress_color(entry.match)};"></div>
            </div>
          </div>
          <div class="country-metrics-grid">{metric_items}
          </div>
          <div class="country-fit-summary">
            <div class="fit-summary-icon">💡</div>
            <div class="fit-summary-content">
              <span class="fit-summary-label">Fit Summary:</span>
              <p class="fit-summary-text">{escape(fit_summary(entry.reasoning))}</p>
            </div>
          </div>{challenges}
        </div>"""


def _country_card(entry: CountryFit, assets: ReportAssets | None) -> str:
    university_list = ", ".join(entry.universities)
    flag = _flag(entry.country, assets)
    universities = (
        f"""
          <div class="universities-section">
            <span class="universities-label">Universities:</span>
            <span class="universities-list">{escape(university_list)}</span>
          </div>"""
        if entry.universities
        else ""
    )
    return f"""
        <div class="country-card">
          <div class="country-rank">#{entry.rank}</div>
          <div class="country-flag">{flag}</div>
          <div class="country-name">{escape(entry.country)}</div>
          <div class="country-score">{entry.match}% Match</div>{universities}
        </div>"""


def _results_page(report: ReadinessReport, branding: ReportBranding, logo_uri: str, generated: str) -> str:
    scores = report.scores.by_name()
    cards = "".join(_score_card(name, scores[name]) for name in CATEGORY_NAMES)
    return f"""
    <div class="page">
      {_header(branding, logo_uri, branding.title, branding.subtitle)}
      <div class="content">
        <div class="student-info">
          <div class="info-item">
            <div class="info-label">Student Name</div>
            <div class="info-value">{escape(report.student_name)}</div>
          </div>
          <div class="info-item">
            <div class="info-label">Student Email</div>
            <div class="info-value">{escape(report.student_email)}</div>
          </div>
          <div class="info-item">
            <div class="info-label">Phone Number</div>
            <div class="info-value">{escape(report.student_phone)}</div>
          </div>
        </div>
        <div class="overall-score">{circular_progress_svg(report.overall_index, report.readiness_level)}</div>
        <div class="scores-section">
          <h3 class="section-title">Readiness Scores</h3>
          <div class="scores-grid">{cards}
          </div>
        </div>
      </div>
      {_footer(branding, logo_uri, generated)}
    </div>"""


def _country_page(
    report: ReadinessReport,
    branding: ReportBranding,
    assets: ReportAssets | None,
    logo_uri: str,
    generated: str,
) -> str:
    medal_uri = assets.medal_data_uri() if assets else None
    grid = "".join(_country_card_grid(entry, assets, medal_uri) for entry in report.country_fit)
    compact = "".join(_country_card(entry, assets) for entry in report.country_fit)
    return f"""
    <div class="page page-break">
      {_header(branding, logo_uri, "Country Analysis & Recommendations", "Personalized Study Destinations")}
      <div class="country-page">
        <div class="charts-section-full">
          <h3 class="section-title">Readiness Radar Chart</h3>
          <div class="section-title-rule"></div>
          {radar_chart_svg(report.scores)}
        </div>
        {_analysis_section("strengths", "Key Strengths", report.strengths)}
        {_analysis_section("gaps", "Areas for Development", report.gaps)}
        {_analysis_section("recommendations", "Strategic Recommendations", report.recommendations)}
        <div class="chart-container full-width">
          <h4>Recommended Study Destinations</h4>
          <div class="country-cards-grid-container">{grid}
          </div>
        </div>
        <div class="country-fit">
          <h4 class="recommended-destinations-heading">Recommended Study Destinations</h4>
          <div class="recommended-destinations-divider"></div>{compact}
        </div>
      </div>
      <div class="disclaimer"><strong>DISCLAIMER:</strong> {DISCLAIMER}</div>
      {_footer(branding, logo_uri, generated)}
    </div>"""


# =============================================================================
# Entry point
# =============================================================================


def render_report_html(
    report: ReadinessReport,
    assets: ReportAssets | None = None,
    generated_on: date | None = None,
    branding: ReportBranding | None = None,
) -> str:
    """
    Render the full report document.

    Args:
        report: Normalized report
        assets: Image source; None renders with generated placeholders only
        generated_on: Date stamped in the footer (defaults to today)
        branding: Brand strings for header and footer

    Returns:
        Complete HTML document as a string
    """
    branding = branding or ReportBranding()
    generated = format_report_date(generated_on or date.today())
    logo_uri = assets.logo_data_uri() if assets else placeholder_logo_uri()

    pages = [_results_page(report, branding, logo_uri, generated)]
    if report.has_country_analysis:
        pages.append(_country_page(report, branding, assets, logo_uri, generated))

    body = "".join(pages)
    watermark = f".page::after {{ background-image: url('{logo_uri}'); }}"

    return f"""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(branding.name)} - {escape(branding.title)}</title>
    <style>{REPORT_CSS}{watermark}</style>
  </head>
  <body>{body}
  </body>
</html>
"""


REPORT_CSS = """
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700;800;900&display=swap');
@import url('https://fonts.googleapis.com/css2?family=Poppins:wght@300;400;500;600;700;800;900&display=swap');

@page { size: A4; margin: 20mm 15mm; }
* { margin: 0; padding: 0; box-sizing: border-box; -webkit-print-color-adjust: exact; print-color-adjust: exact; }
body { font-family: 'Inter', 'Poppins', sans-serif; line-height: 1.6; color: #1e293b; background: #ffffff; font-size: 11pt; font-weight: 500; }
h1 { font-size: 20pt; font-weight: 900; font-family: 'Poppins', sans-serif; line-height: 1.2; }
h2 { font-size: 16pt; font-weight: 800; font-family: 'Poppins', sans-serif; line-height: 1.3; }
h3 { font-size: 14pt; font-weight: 700; font-family: 'Poppins', sans-serif; line-height: 1.4; }
h4 { font-size: 12pt; font-weight: 700; font-family: 'Poppins', sans-serif; line-height: 1.4; }

.page { width: 210mm; min-height: 297mm; margin: 0 auto; background: #ffffff; position: relative; padding-bottom: 60px; }
.page::after { content: ''; position: absolute; bottom: 20mm; right: 20mm; width: 80px; height: 80px; background-size: contain; background-repeat: no-repeat; background-position: center; opacity: 0.08; z-index: 0; pointer-events: none; }
.page-break { page-break-before: always; break-before: page; }

.header { background: linear-gradient(135deg, #0066CC 0%, #0066CC 25%, #F1C40F 75%, #2ECC71 100%); color: white; padding: 15px 25px; position: relative; overflow: hidden; }
.header-content { display: flex; justify-content: space-between; align-items: center; }
.logo-section { display: flex; align-items: center; gap: 12px; }
.logo img { width: 60px; height: 60px; object-fit: contain; background: white; border-radius: 12px; padding: 6px; }
.company-info p, .report-title p { font-size: 9pt; opacity: 0.9; }
.report-title { text-align: right; }

.footer { position: absolute; bottom: 0; left: 0; right: 0; background: linear-gradient(135deg, #0066CC 0%, #0066CC 50%, #2ECC71 100%); color: white; padding: 10px 25px; display: flex; justify-content: space-between; align-items: center; font-size: 9pt; }
.footer-brand { display: flex; align-items: center; gap: 8px; }
.footer-logo img { width: 20px; height: 20px; object-fit: contain; }

.content, .country-page { padding: 20px 25px; position: relative; z-index: 1; }
.student-info { display: grid; grid-template-columns: repeat(3, 1fr); gap: 12px; margin-bottom: 20px; }
.info-item { background: #f8fafc; border: 1px solid #e2e8f0; border-radius: 10px; padding: 10px 14px; }
.info-label { font-size: 8pt; color: #64748b; text-transform: uppercase; letter-spacing: 1px; font-weight: 700; }
.info-value { font-weight: 700; word-break: break-word; }

.overall-score { display: flex; justify-content: center; margin: 10px 0 20px; }
.circular-progress-container { display: flex; flex-direction: column; align-items: center; gap: 8px; }
.readiness-level-badge { background: linear-gradient(135deg, #0066CC, #2ECC71); color: white; padding: 4px 18px; border-radius: 999px; font-weight: 800; letter-spacing: 1px; text-transform: uppercase; font-size: 10pt; }

.section-title { text-align: center; color: #0066CC; margin: 0 0 15px 0; font-size: 1.2em; font-weight: 900; text-transform: uppercase; letter-spacing: 1.5px; }
.section-title-rule { width: 100px; height: 4px; background: linear-gradient(90deg, #0066CC, #2ECC71); margin: 0 auto 15px auto; border-radius: 2px; }
.scores-grid { display: grid; grid-template-columns: repeat(3, 1fr); gap: 14px; }
.score-card { background: linear-gradient(135deg, #ffffff, #f8fafb); border: 2px solid #e9ecef; border-radius: 14px; padding: 14px; page-break-inside: avoid; break-inside: avoid; }
.score-card h4 { font-size: 10pt; color: #334155; }
.score-weight { font-size: 8pt; color: #94a3b8; font-weight: 600; }
.score-value { margin: 6px 0; }
.score-number { font-size: 22pt; font-weight: 900; color: #0f172a; }
.percent-symbol { font-size: 12pt; font-weight: 700; color: #64748b; }
.score-bar { height: 8px; background: #e5e7eb; border-radius: 4px; overflow: hidden; }
.score-fill { height: 100%; border-radius: 4px; }
.score-fill.excellent { background: linear-gradient(90deg, #22C55E, #16A34A); }
.score-fill.good { background: linear-gradient(90deg, #3B82F6, #2563EB); }
.score-fill.average { background: linear-gradient(90deg, #F59E0B, #D97706); }
.score-fill.weak { background: linear-gradient(90deg, #EF4444, #DC2626); }

.radar-chart-full-page { display: flex; align-items: center; justify-content: center; gap: 20px; }
.radar-legend-enhanced { display: flex; flex-direction: column; gap: 8px; }
.radar-legend-item { display: flex; align-items: center; gap: 8px; border-left: 4px solid; padding: 4px 10px; background: #f8fafc; border-radius: 6px; font-size: 9pt; }
.radar-legend-color { width: 10px; height: 10px; border-radius: 50%; display: inline-block; }
.radar-legend-label { flex: 1; font-weight: 600; }
.radar-legend-score { font-weight: 800; }

.section-divider { width: 100%; height: 1px; background: linear-gradient(90deg, transparent, #0066CC 20%, #F1C40F 50%, #0066CC 80%, transparent); margin: 24px 0; }
.analysis-section { background: linear-gradient(135deg, #ffffff, #f8fafb); padding: 20px; border-radius: 16px; border: 3px solid #e9ecef; page-break-inside: avoid; break-inside: avoid; }
.analysis-section h4 { margin-bottom: 12px; }
.bullet-list { list-style: none; }
.bullet-item { position: relative; padding: 12px 15px 12px 35px; margin-bottom: 10px; line-height: 1.6; border-radius: 8px; }
.strengths .bullet-item { background: rgba(46, 204, 113, 0.05); border-left: 4px solid #2ECC71; }
.gaps .bullet-item { background: rgba(241, 196, 15, 0.05); border-left: 4px solid #F1C40F; }
.recommendations .bullet-item { background: rgba(0, 102, 204, 0.05); border-left: 4px solid #0066CC; }

.chart-container { margin: 20px 0; }
.country-cards-grid-container { display: grid; grid-template-columns: 1fr; gap: 16px; margin-top: 12px; }
.country-card-grid { background: linear-gradient(135deg, #ffffff, #f8fafc); border-radius: 16px; border: 2px solid #e9ecef; box-shadow: 0 6px 20px rgba(0, 102, 204, 0.15); padding: 18px; position: relative; page-break-inside: avoid; break-inside: avoid; }
.country-rank-badge { position: absolute; top: 12px; right: 12px; display: flex; align-items: center; gap: 4px; border: 2px solid; border-radius: 999px; padding: 2px 10px; font-weight: 800; }
.rank-medal-img { width: 18px; height: 18px; }
.country-card-header { display: flex; align-items: center; gap: 14px; }
.country-map { border-radius: 6px; }
.country-match-info { font-size: 10pt; color: #475569; font-weight: 700; }
.country-progress-container { margin: 10px 0; }
.country-progress-bar { height: 8px; background: #e5e7eb; border-radius: 4px; overflow: hidden; }
.country-progress-fill { height: 100%; border-radius: 4px; }
.country-metrics-grid { display: grid; grid-template-columns: repeat(4, 1fr); gap: 8px; }
.country-metric-item { display: flex; gap: 6px; align-items: center; background: #f1f5f9; border-radius: 8px; padding: 6px 8px; }
.metric-content { display: flex; flex-direction: column; }
.metric-label { font-size: 7pt; color: #64748b; text-transform: uppercase; }
.metric-value { font-size: 9pt; font-weight: 800; }
.country-fit-summary { display: flex; gap: 8px; margin-top: 10px; font-size: 9.5pt; }
.fit-summary-label { font-weight: 800; color: #0066CC; }
.country-challenges-note { margin-top: 8px; background: #fff7ed; border-left: 4px solid #F59E0B; padding: 6px 10px; border-radius: 6px; font-size: 9pt; }

.country-fit { margin-top: 20px; }
.recommended-destinations-divider { height: 3px; background: linear-gradient(90deg, #0066CC, #2ECC71); margin: 8px 0 14px; border-radius: 2px; }
.country-card { display: grid; grid-template-columns: 40px 100px 1fr auto; align-items: center; gap: 12px; padding: 10px 14px; border: 2px solid #e9ecef; border-radius: 12px; margin-bottom: 10px; page-break-inside: avoid; break-inside: avoid; }
.country-rank { font-weight: 900; color: #0066CC; font-size: 14pt; }
.country-name { font-weight: 800; }
.country-score { font-weight: 800; color: #16A34A; }
.universities-section { grid-column: 1 / -1; font-size: 9pt; color: #475569; }
.universities-label { font-weight: 800; margin-right: 6px; }

.disclaimer { margin: 20px 25px 70px; background: linear-gradient(135deg, #fff9e6, #fff3cd); border: 2px solid #ffeaa7; border-radius: 12px; padding: 12px 16px; font-size: 8.5pt; color: #7c5e10; }
"""
