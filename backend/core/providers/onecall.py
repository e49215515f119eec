"""OpenWeather One Call provider."""
from __future__ import annotations

from typing import Iterable

from backend.core.errors import ServiceError, UpstreamHttpError
from backend.core.providers.base import OpenWeatherProvider
from backend.core.schemas import OneCallResponse, WeatherApiError, parse_onecall


SECTIONS = ("current", "minutely", "hourly", "daily", "alerts")


def exclude_all_but(section: str) -> tuple:
    return tuple(name for name in SECTIONS if name != section)


class OneCallProvider(OpenWeatherProvider):
    """Integration with the One Call 3.0 endpoint."""

    name = "openweather-onecall"
    base_url = "https://api.openweathermap.org/data/3.0/onecall"

    def fetch_snapshot(self, lat: float, lon: float, exclude: Iterable[str] = ()) -> OneCallResponse:
        exclude = list(exclude)
        unknown = [name for name in exclude if name not in SECTIONS]
        if unknown:
            raise ValueError(f"Unknown One Call sections: {', '.join(unknown)}")

        params = {
            "lat": lat,
            "lon": lon,
            "units": self.config.units,
            "lang": self.config.language,
        }
        if exclude:
            params["exclude"] = ",".join(exclude)

        try:
            data = parse_onecall(self._get(self.base_url, params))
            if isinstance(data, WeatherApiError):
                status = int(data.cod) if str(data.cod).isdigit() else 0
                raise UpstreamHttpError(status, "", data.message)
        except ServiceError as exc:
            self._log.error("Error fetching weather data for (%s, %s): %s", lat, lon, exc)
            raise
        return data


__all__ = ["OneCallProvider", "SECTIONS", "exclude_all_but"]
