"""Country name → ISO 3166-1 alpha-2 code resolution for flag assets.

Resolution order: exact canonical name, then alias, then prefix match,
then whole-word containment. A name that extends a key must do so at a word
boundary ("Germany (Berlin)", not "Indiana"), and the longest such key
wins. A truncated name ("Ire") only resolves when every key it starts
matches the same country, so "Austr" stays unresolved. The result never
depends on table order.
"""

import re

# Canonical English name → lower-case ISO code.
COUNTRY_CODES: dict[str, str] = {
    "Singapore": "sg",
    "Ireland": "ie",
    "Netherlands": "nl",
    "Canada": "ca",
    "Australia": "au",
    "United Kingdom": "gb",
    "Germany": "de",
    "United States": "us",
    "India": "in",
    "United Arab Emirates": "ae",
    "New Zealand": "nz",
    "France": "fr",
    "Sweden": "se",
    "Norway": "no",
    "Denmark": "dk",
    "Finland": "fi",
    "Switzerland": "ch",
    "Austria": "at",
    "Belgium": "be",
    "Italy": "it",
    "Spain": "es",
    "Portugal": "pt",
    "Greece": "gr",
    "Poland": "pl",
    "Czech Republic": "cz",
    "Hungary": "hu",
    "Romania": "ro",
    "Japan": "jp",
    "South Korea": "kr",
    "China": "cn",
    "Hong Kong": "hk",
    "Taiwan": "tw",
    "Thailand": "th",
    "Malaysia": "my",
    "Indonesia": "id",
    "Philippines": "ph",
    "Vietnam": "vn",
    "South Africa": "za",
    "Brazil": "br",
    "Mexico": "mx",
    "Argentina": "ar",
    "Chile": "cl",
    "Turkey": "tr",
    "Israel": "il",
    "Saudi Arabia": "sa",
    "Qatar": "qa",
    "Kuwait": "kw",
    "Oman": "om",
    "Bahrain": "bh",
    "Russia": "ru",
    "Ukraine": "ua",
    "Belarus": "by",
    "Estonia": "ee",
    "Latvia": "lv",
    "Lithuania": "lt",
    "Slovakia": "sk",
    "Slovenia": "si",
    "Croatia": "hr",
    "Serbia": "rs",
    "Bulgaria": "bg",
    "Cyprus": "cy",
    "Malta": "mt",
    "Iceland": "is",
    "Luxembourg": "lu",
    "Monaco": "mc",
    "Andorra": "ad",
    "Liechtenstein": "li",
    "San Marino": "sm",
    "Vatican City": "va",
}

# Alternate spellings. Keys are compared after folding (see _fold).
COUNTRY_ALIASES: dict[str, str] = {
    "Holland": "nl",
    "The Netherlands": "nl",
    "UK": "gb",
    "Britain": "gb",
    "Great Britain": "gb",
    "England": "gb",
    "Scotland": "gb",
    "Deutschland": "de",
    "USA": "us",
    "US": "us",
    "United States of America": "us",
    "America": "us",
    "UAE": "ae",
    "Emirates": "ae",
    "Dubai": "ae",
    "Korea": "kr",
    "Republic of Korea": "kr",
    "Czechia": "cz",
    "Turkiye": "tr",
    "Viet Nam": "vn",
    "Vatican": "va",
    "NZ": "nz",
}

MIN_PREFIX_LENGTH = 3


def _fold(name: str) -> str:
    """Lower-case, drop dots and collapse whitespace: "U.S.A. " → "usa"."""
    return " ".join(name.replace(".", "").lower().split())


_EXACT: dict[str, str] = {_fold(k): v for k, v in COUNTRY_CODES.items()}
_ALIASES: dict[str, str] = {_fold(k): v for k, v in COUNTRY_ALIASES.items()}
_ALL_KEYS: dict[str, str] = {**_ALIASES, **_EXACT}


def resolve_country_code(name: str | None) -> str | None:
    """
    Resolve a free-text country name to a lower-case ISO code.

    Args:
        name: Country name as written by the upstream producer

    Returns:
        Two-letter code, or None when nothing matches
    """
    folded = _fold(name or "")
    if not folded:
        return None

    if folded in _EXACT:
        return _EXACT[folded]
    if folded in _ALIASES:
        return _ALIASES[folded]

    if len(folded) >= MIN_PREFIX_LENGTH:
        extended = [k for k in _ALL_KEYS if re.match(rf"{re.escape(k)}\b", folded)]
        if extended:
            return _ALL_KEYS[max(extended, key=len)]

        truncated = {_ALL_KEYS[k] for k in _ALL_KEYS if k.startswith(folded)}
        if len(truncated) == 1:
            return truncated.pop()

    contained = [k for k in _ALL_KEYS if re.search(rf"\b{re.escape(k)}\b", folded)]
    if contained:
        return _ALL_KEYS[max(contained, key=len)]

    return None


def fallback_code(name: str | None) -> str:
    """Two-letter display code synthesized from the name itself."""
    return (name or "").strip()[:2].upper()
