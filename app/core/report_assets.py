"""Local image assets embedded into the report as base64 data URIs.

Layout under the asset directory:
- logo.avif | logo.png | logo.svg
- flags/<iso-code>.svg
- icons/medal.png (also images/ or the root; png, jpg or avif)

Every asset is optional. Missing or unreadable files degrade to generated
placeholders so a report is never lost to an absent image.
"""

import base64
import re
from html import escape
from pathlib import Path

from app.core.country_codes import fallback_code, resolve_country_code
from app.core.logging import get_logger

logger = get_logger(__name__)

MIME_TYPES = {
    ".avif": "image/avif",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml",
}

LOGO_FILES = ("logo.avif", "logo.png", "logo.svg")
MEDAL_FILES = tuple(
    f"{folder}medal{ext}"
    for ext in (".png", ".jpg", ".avif")
    for folder in ("icons/", "images/", "")
)

FLAG_WIDTH = 90
FLAG_HEIGHT = 60

_PLACEHOLDER_LOGO_SVG = (
    '<svg width="85" height="85" viewBox="0 0 320 80" fill="none" xmlns="http://www.w3.org/2000/svg">'
    '<defs><linearGradient id="logoGrad" x1="0" y1="0" x2="320" y2="80" gradientUnits="userSpaceOnUse">'
    '<stop stop-color="#003B8C"/><stop offset="1" stop-color="#5BE8B9"/></linearGradient></defs>'
    '<path d="M0 0 L70 0 L35 60 Z" fill="url(#logoGrad)" opacity="0.95"/></svg>'
)


def to_data_uri(data: bytes, mime: str) -> str:
    """Encode raw bytes as a base64 data URI."""
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def placeholder_logo_uri() -> str:
    return to_data_uri(_PLACEHOLDER_LOGO_SVG.encode("utf-8"), MIME_TYPES[".svg"])


def placeholder_flag(code: str) -> str:
    """Blue rounded tile with the two-letter code."""
    return (
        f'<svg width="{FLAG_WIDTH}" height="{FLAG_HEIGHT}" viewBox="0 0 100 60" class="country-map" '
        'preserveAspectRatio="xMidYMid meet" xmlns="http://www.w3.org/2000/svg">'
        '<rect width="100" height="60" fill="#3498db" rx="8"/>'
        '<text x="50" y="35" text-anchor="middle" fill="white" font-size="10" font-weight="bold">'
        f"{escape(code)}</text></svg>"
    )


def _resize_svg(svg: str) -> str:
    """Force a fixed flag box on the root <svg> element."""

    def _root(match: re.Match) -> str:
        attrs = re.sub(r'\s+(width|height|preserveAspectRatio)="[^"]*"', "", match.group(1))
        return (
            f'<svg width="{FLAG_WIDTH}" height="{FLAG_HEIGHT}"{attrs} '
            'preserveAspectRatio="xMidYMid meet">'
        )

    return re.sub(r"<svg\b([^>]*)>", _root, svg.strip(), count=1)


class ReportAssets:
    """Reads report images from a local directory."""

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    def _read(self, relative: str) -> bytes | None:
        path = self.base_dir / relative
        if not path.is_file():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            logger.warning(f"Could not read asset {path}: {e}")
            return None

    def logo_data_uri(self) -> str:
        """Brand logo, or a generated gradient mark when no logo file exists."""
        for name in LOGO_FILES:
            data = self._read(name)
            if data is not None:
                return to_data_uri(data, MIME_TYPES[Path(name).suffix])
        logger.warning("Logo file not found, using fallback SVG")
        return placeholder_logo_uri()

    def medal_data_uri(self) -> str | None:
        """Medal image for rank badges, or None to fall back to emoji."""
        for name in MEDAL_FILES:
            data = self._read(name)
            if data is not None:
                return to_data_uri(data, MIME_TYPES[Path(name).suffix])
        return None

    def flag_img(self, country: str) -> str:
        """
        Flag markup for a country name.

        Args:
            country: Country name as it appears in the report

        Returns:
            An <img> with an embedded SVG flag, or a placeholder <svg>
        """
        code = resolve_country_code(country)
        if code is None:
            return placeholder_flag(fallback_code(country))

        data = self._read(f"flags/{code}.svg")
        if data is None:
            logger.warning(f"SVG file not found for country: {country} (code: {code})")
            return placeholder_flag(fallback_code(country))

        try:
            svg = _resize_svg(data.decode("utf-8"))
        except UnicodeDecodeError as e:
            logger.warning(f"Error loading SVG for {country}: {e}")
            return placeholder_flag(fallback_code(country))

        uri = to_data_uri(svg.encode("utf-8"), MIME_TYPES[".svg"])
        return (
            f'<img src="{uri}" width="{FLAG_WIDTH}" height="{FLAG_HEIGHT}" '
            f'class="country-map" alt="{escape(country)} flag"/>'
        )
