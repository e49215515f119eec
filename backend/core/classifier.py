"""Classification of free-form location input.

``classify`` decides whether a user's text is a postal code, a
"city, state, US" tuple, a "city, country" pair or a free-text query.  The
country detection relies on the last token being exactly two letters, so a
two-letter city abbreviation is read as a country code as well.
"""
from __future__ import annotations

import re
from typing import Optional

from backend.core.abstractions import (
    CityCountry,
    CityState,
    ClassifiedInput,
    Coordinates,
    FreeText,
    PostalCode,
)
from backend.core.errors import EmptyInputError
from backend.core.postal_codes import matches_postal_format


# [postal code] [country code] or [postal code],[country code]
_POSTAL_WITH_COUNTRY = re.compile(r"([A-Z0-9\s-]+)(?:[\s,]+([A-Z]{2}))?", re.IGNORECASE)
_SEPARATORS = re.compile(r",\s*|\s+")
_TWO_LETTERS = re.compile(r"[A-Z]{2}", re.IGNORECASE)
_SIGNED_DECIMAL = r"[+-]?(?:\d+\.?\d*|\.\d+)"
_COORDINATE_PAIR = re.compile(rf"({_SIGNED_DECIMAL}),\s*({_SIGNED_DECIMAL})")


def _is_two_letters(token: str) -> bool:
    return _TWO_LETTERS.fullmatch(token) is not None


def classify(text: str) -> ClassifiedInput:
    """Classify a raw location string.

    Raises:
        EmptyInputError: if ``text`` is blank after trimming.
    """
    text = text.strip()
    if not text:
        raise EmptyInputError()

    match = _POSTAL_WITH_COUNTRY.fullmatch(text)
    if match:
        candidate = match.group(1).strip()
        country_code = (match.group(2) or "US").upper()
        if matches_postal_format(candidate, country_code):
            return PostalCode(code=candidate, country_code=country_code)

    parts = _SEPARATORS.split(text)
    if len(parts) >= 2 and _is_two_letters(parts[-1]):
        last = parts[-1]
        if len(parts) >= 3 and _is_two_letters(parts[-2]) and last.upper() == "US":
            return CityState(city=" ".join(parts[:-2]), state=parts[-2])
        return CityCountry(city=" ".join(parts[:-1]), country_code=last)

    return FreeText(query=text, limit=1)


def parse_coordinate_pair(text: str) -> Optional[Coordinates]:
    """Return coordinates for ``"lat,lon"`` input, or None for anything else."""
    match = _COORDINATE_PAIR.fullmatch(text.strip())
    if not match:
        return None
    return Coordinates(lat=float(match.group(1)), lon=float(match.group(2)))


__all__ = ["classify", "parse_coordinate_pair"]
