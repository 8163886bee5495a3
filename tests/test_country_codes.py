"""Tests for country name → flag code resolution."""

import pytest

from app.core.country_codes import fallback_code, resolve_country_code


@pytest.mark.parametrize(
    "name, code",
    [
        ("Canada", "ca"),
        ("united kingdom", "gb"),
        ("UK", "gb"),
        ("U.S.A.", "us"),
        ("Holland", "nl"),
        ("  New   Zealand ", "nz"),
        ("United States of America", "us"),
    ],
)
def test_exact_and_alias(name, code):
    assert resolve_country_code(name) == code


def test_prefix_match():
    assert resolve_country_code("Germany (Berlin)") == "de"


def test_word_containment():
    assert resolve_country_code("Studying in Canada") == "ca"


def test_longest_contained_key_wins():
    assert resolve_country_code("Universities in South Africa") == "za"
    assert resolve_country_code("Universities in South Korea") == "kr"


def test_unknown_country():
    assert resolve_country_code("Atlantis") is None
    assert resolve_country_code("") is None
    assert resolve_country_code(None) is None


def test_fallback_code():
    assert fallback_code("Atlantis") == "AT"
    assert fallback_code(None) == ""


def test_unique_truncated_name_resolves():
    assert resolve_country_code("Irel") == "ie"
    assert resolve_country_code("Switz") == "ch"


def test_ambiguous_truncated_name_unresolved():
    # Australia and Austria
    assert resolve_country_code("Austr") is None


def test_prefix_must_end_on_word_boundary():
    assert resolve_country_code("Indiana University") is None
    assert resolve_country_code("India (Delhi)") == "in"
