"""Weather service exposing One Call sections to the API layer."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import requests

from backend.core.abstractions import ServiceConfig
from backend.core.errors import NoResultsError, ServiceError, WeatherError
from backend.core.providers.onecall import OneCallProvider, exclude_all_but
from backend.core.schemas import DailyPoint, HourlyPoint, OneCallResponse, WeatherSnapshot


logger = logging.getLogger(__name__)


class WeatherService:
    """Fetch current conditions and forecasts for a coordinate pair.

    Every public method issues exactly one upstream request and raises
    :class:`WeatherError` on failure.
    """

    def __init__(
        self,
        config: ServiceConfig,
        session: Optional[requests.Session] = None,
        provider: Optional[OneCallProvider] = None,
    ) -> None:
        self.config = config
        self._provider = provider or OneCallProvider(config, session=session)

    def get_current_weather(self, lat: float, lon: float) -> WeatherSnapshot:
        data = self._fetch(lat, lon, exclude_all_but("current"))
        if data.current is None:
            raise self._wrap(NoResultsError("current weather"))
        return data.current

    def get_daily_forecast(self, lat: float, lon: float, days: int = 7) -> List[DailyPoint]:
        data = self._fetch(lat, lon, exclude_all_but("daily"))
        return data.daily[:days] if data.daily else []

    def get_hourly_forecast(self, lat: float, lon: float, hours: int = 24) -> List[HourlyPoint]:
        data = self._fetch(lat, lon, exclude_all_but("hourly"))
        return data.hourly[:hours] if data.hourly else []

    def get_complete_weather_data(
        self, lat: float, lon: float, exclude: Optional[Iterable[str]] = None
    ) -> OneCallResponse:
        return self._fetch(lat, lon, tuple(exclude or ()))

    def _fetch(self, lat: float, lon: float, exclude: Iterable[str]) -> OneCallResponse:
        try:
            return self._provider.fetch_snapshot(lat, lon, exclude)
        except ServiceError as exc:
            raise self._wrap(exc) from exc

    def _wrap(self, exc: ServiceError) -> WeatherError:
        error = WeatherError(exc)
        logger.warning("Weather lookup failed: %s", error.summary)
        return error


__all__ = ["WeatherService"]
