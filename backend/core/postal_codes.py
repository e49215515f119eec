"""Postal code formats per country (ISO 3166 alpha-2)."""
from __future__ import annotations

import re
from typing import Dict, Pattern


def _compile(pattern: str) -> Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


POSTAL_CODE_PATTERNS: Dict[str, Pattern[str]] = {
    # North America
    "US": _compile(r"\d{5}(-\d{4})?"),  # 12345 or 12345-6789
    "CA": _compile(r"[ABCEGHJKLMNPRSTVXY]\d[A-Z]\s?\d[A-Z]\d"),  # A1A 1A1
    "MX": _compile(r"\d{5}"),
    # Europe
    "GB": _compile(r"[A-Z]{1,2}\d[A-Z\d]?\s?\d[A-Z]{2}"),  # AA1 1AA, A1 1AA, A1A 1AA
    "DE": _compile(r"\d{5}"),
    "FR": _compile(r"\d{5}"),
    "IT": _compile(r"\d{5}"),
    "ES": _compile(r"\d{5}"),
    "NL": _compile(r"\d{4}\s?[A-Z]{2}"),  # 1234 AB
    "AT": _compile(r"\d{4}"),
    "BE": _compile(r"\d{4}"),
    "CH": _compile(r"\d{4}"),
    "DK": _compile(r"\d{4}"),
    "FI": _compile(r"\d{5}"),
    "GR": _compile(r"\d{3}\s?\d{2}"),  # 123 45
    "IE": _compile(r"[A-Z]\d{2}\s?[A-Z\d]{4}"),  # A12 B345
    "NO": _compile(r"\d{4}"),
    "PT": _compile(r"\d{4}-\d{3}"),
    "SE": _compile(r"\d{3}\s?\d{2}"),
    # Asia
    "JP": _compile(r"\d{3}-\d{4}"),
    "CN": _compile(r"\d{6}"),
    "IN": _compile(r"\d{6}"),
    "KR": _compile(r"\d{5}"),
    "SG": _compile(r"\d{6}"),
    "TH": _compile(r"\d{5}"),
    "MY": _compile(r"\d{5}"),
    # Oceania
    "AU": _compile(r"\d{4}"),
    "NZ": _compile(r"\d{4}"),
    # South America
    "BR": _compile(r"\d{5}-\d{3}"),
    "AR": _compile(r"[A-Z]\d{4}[A-Z]{3}"),  # C1234ABC
    "CL": _compile(r"\d{7}"),
    # Middle East
    "IL": _compile(r"\d{5}(\d{2})?"),  # 12345 or 1234567
    "SA": _compile(r"\d{5}(-\d{4})?"),
    "AE": _compile(r"\d{5}"),
    # Fallback for unlisted countries
    "DEFAULT": _compile(r"[A-Z0-9\s-]{3,10}"),
}


def pattern_for(country_code: str) -> Pattern[str]:
    return POSTAL_CODE_PATTERNS.get(country_code.upper(), POSTAL_CODE_PATTERNS["DEFAULT"])


def matches_postal_format(candidate: str, country_code: str = "US") -> bool:
    """Return whether ``candidate`` looks like a postal code of ``country_code``."""
    return pattern_for(country_code).fullmatch(candidate.strip()) is not None


__all__ = ["POSTAL_CODE_PATTERNS", "matches_postal_format", "pattern_for"]
