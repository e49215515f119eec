"""Geocoding service bridging the classifier and the geocoding provider."""
from __future__ import annotations

import logging
from typing import Optional

import requests

from backend.core.abstractions import ClassifiedInput, GeocodingResult, LocationResolver, ServiceConfig
from backend.core.classifier import classify
from backend.core.errors import GeocodingError, ServiceError
from backend.core.postal_codes import matches_postal_format
from backend.core.providers.geocoding import OpenWeatherGeocodingProvider


logger = logging.getLogger(__name__)


class GeocodingService:
    """Resolve user supplied locations to a single set of coordinates."""

    def __init__(
        self,
        config: ServiceConfig,
        session: Optional[requests.Session] = None,
        provider: Optional[LocationResolver] = None,
    ) -> None:
        self.config = config
        self._provider = provider or OpenWeatherGeocodingProvider(config, session=session)

    def get_coordinates(self, text: str) -> GeocodingResult:
        """Classify ``text`` (ZIP code, city, city + state, city + country) and resolve it."""
        try:
            location = classify(text)
        except ServiceError as exc:
            raise self._wrap(exc, text) from exc
        return self.resolve(location)

    def resolve(self, location: ClassifiedInput) -> GeocodingResult:
        try:
            result = self._provider.resolve(location)
        except ServiceError as exc:
            raise self._wrap(exc, location) from exc
        logger.debug("Resolved %r to %s (%s, %s)", location, result.name, result.lat, result.lon)
        return result

    def is_postal_code(self, text: str, country_code: str = "US") -> bool:
        return matches_postal_format(text, country_code)

    def _wrap(self, exc: ServiceError, location: object) -> GeocodingError:
        error = GeocodingError(exc)
        logger.warning("Geocoding %r failed: %s", location, error.summary)
        return error


__all__ = ["GeocodingService"]
