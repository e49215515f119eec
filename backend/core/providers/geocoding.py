"""OpenWeather geocoding provider."""
from __future__ import annotations

from typing import Tuple

from backend.core.abstractions import (
    CityCountry,
    CityState,
    ClassifiedInput,
    Coordinates,
    FreeText,
    GeocodingResult,
    LocationResolver,
    PostalCode,
)
from backend.core.errors import NoResultsError
from backend.core.providers.base import OpenWeatherProvider
from backend.core.schemas import GeocodingResponse, GeocodingZipResponse, validate


class OpenWeatherGeocodingProvider(OpenWeatherProvider, LocationResolver):
    """Turns classified input into a single location via the Geocoding API."""

    name = "openweather-geocoding"
    base_url = "https://api.openweathermap.org/geo/1.0/"

    def resolve(self, location: ClassifiedInput) -> GeocodingResult:
        if isinstance(location, Coordinates):
            return GeocodingResult(
                name=f"Location at {location.lat:.4f}, {location.lon:.4f}",
                lat=location.lat,
                lon=location.lon,
                country="",
            )
        if isinstance(location, PostalCode):
            return self.by_zip_code(location.code, location.country_code)
        query, limit = self._direct_query(location)
        return self.by_query(query, limit)

    def by_zip_code(self, zip_code: str, country_code: str = "US") -> GeocodingResult:
        data = self._get(f"{self.base_url}zip", {"zip": f"{zip_code},{country_code}"})
        if not data:
            raise NoResultsError(zip_code)
        validated = validate(data, GeocodingZipResponse)
        return GeocodingResult(
            name=validated.name,
            lat=validated.lat,
            lon=validated.lon,
            country=validated.country,
        )

    def by_query(self, query: str, limit: int = 1) -> GeocodingResult:
        data = self._get(f"{self.base_url}direct", {"q": query, "limit": limit})
        if not data:
            raise NoResultsError(query)
        # A non-list body is validated as-is so the mismatch is reported.
        first = data[0] if isinstance(data, list) else data
        validated = validate(first, GeocodingResponse)
        return GeocodingResult(
            name=validated.name,
            lat=validated.lat,
            lon=validated.lon,
            country=validated.country,
            state=validated.state,
            local_names=validated.local_names,
        )

    def _direct_query(self, location: ClassifiedInput) -> Tuple[str, int]:
        if isinstance(location, CityState):
            return f"{location.city},{location.state},{location.country_code}", 1
        if isinstance(location, CityCountry):
            return f"{location.city},{location.country_code}", 1
        if isinstance(location, FreeText):
            return location.query, location.limit
        raise TypeError(f"Unsupported location input: {location!r}")


__all__ = ["OpenWeatherGeocodingProvider"]
