"""Tests for report image assets."""

import base64

from app.core.report_assets import ReportAssets, placeholder_flag, placeholder_logo_uri

CANADA_SVG = '<svg xmlns="http://www.w3.org/2000/svg" width="640" height="480"><rect width="640" height="480" fill="red"/></svg>'


def _decode(data_uri: str) -> str:
    return base64.b64decode(data_uri.split(",", 1)[1]).decode("utf-8")


def test_logo_falls_back_to_placeholder(tmp_path):
    assets = ReportAssets(tmp_path)
    assert assets.logo_data_uri() == placeholder_logo_uri()


def test_logo_from_file(tmp_path):
    (tmp_path / "logo.png").write_bytes(b"\x89PNG fake")

    uri = ReportAssets(tmp_path).logo_data_uri()

    assert uri.startswith("data:image/png;base64,")
    assert base64.b64decode(uri.split(",", 1)[1]) == b"\x89PNG fake"


def test_medal_optional(tmp_path):
    assets = ReportAssets(tmp_path)
    assert assets.medal_data_uri() is None

    (tmp_path / "icons").mkdir()
    (tmp_path / "icons" / "medal.png").write_bytes(b"medal")
    assert assets.medal_data_uri().startswith("data:image/png;base64,")


def test_flag_embedded_and_resized(tmp_path):
    (tmp_path / "flags").mkdir()
    (tmp_path / "flags" / "ca.svg").write_text(CANADA_SVG, encoding="utf-8")

    markup = ReportAssets(tmp_path).flag_img("Canada")

    assert markup.startswith('<img src="data:image/svg+xml;base64,')
    assert 'alt="Canada flag"' in markup
    svg = _decode(markup.split('src="', 1)[1].split('"', 1)[0])
    assert svg.startswith('<svg width="90" height="60"')
    # Only the root element is resized
    assert '<rect width="640" height="480"' in svg


def test_missing_flag_file_uses_placeholder(tmp_path):
    assert ReportAssets(tmp_path).flag_img("Germany") == placeholder_flag("GE")


def test_unknown_country_uses_placeholder(tmp_path):
    markup = ReportAssets(tmp_path).flag_img("Atlantis")

    assert markup == placeholder_flag("AT")
    assert ">AT</text>" in markup
