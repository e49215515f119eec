"""REST API views for geocoding and weather information."""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests
from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.core.abstractions import UNIT_SYSTEMS, CityCountry, CityState, PostalCode, ServiceConfig
from backend.core.classifier import parse_coordinate_pair
from backend.core.errors import ErrorKind, ServiceError, UpstreamHttpError
from backend.core.providers.onecall import SECTIONS
from backend.core.services.geocoding_service import GeocodingService
from backend.core.services.weather_service import WeatherService


logger = logging.getLogger(__name__)

WEATHER_SELECTORS = ("all", "current", "daily", "hourly")

_STATUS_BY_KIND = {
    ErrorKind.CONFIGURATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.EMPTY_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NO_RESULTS: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_RESPONSE_SHAPE: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.UPSTREAM_HTTP: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.UPSTREAM_UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_geocoding_service(session: Optional[requests.Session] = None) -> GeocodingService:
    return GeocodingService(
        ServiceConfig(
            api_key=settings.OPENWEATHER_API_KEY,
            base_url=settings.OPENWEATHER_GEOCODING_URL,
            timeout=settings.OPENWEATHER_TIMEOUT,
        ),
        session=session,
    )


def get_weather_service(
    units: Optional[str] = None, session: Optional[requests.Session] = None
) -> WeatherService:
    return WeatherService(
        ServiceConfig(
            api_key=settings.OPENWEATHER_API_KEY,
            base_url=settings.OPENWEATHER_ONECALL_URL,
            units=units or settings.OPENWEATHER_UNITS,
            language=settings.OPENWEATHER_LANG,
            timeout=settings.OPENWEATHER_TIMEOUT,
        ),
        session=session,
    )


def status_for(exc: ServiceError) -> int:
    cause = getattr(exc, "cause", exc)
    if isinstance(cause, UpstreamHttpError) and cause.status in (404, 429):
        return cause.status
    return _STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_response(message: str, code: int = status.HTTP_400_BAD_REQUEST) -> Response:
    return Response({"error": message}, status=code)


def service_error_response(exc: ServiceError) -> Response:
    code = status_for(exc)
    if code >= 500:
        logger.error("Request failed: %s", exc.summary)
    return error_response(str(exc), code)


def select_weather(
    service: WeatherService,
    lat: float,
    lon: float,
    selector: str,
    exclude: Optional[list] = None,
    days: int = 7,
    hours: int = 24,
) -> Any:
    """Fetch one selector's worth of weather data as JSON-ready primitives."""
    if selector == "current":
        return service.get_current_weather(lat, lon).model_dump(by_alias=True, exclude_none=True)
    if selector == "daily":
        return [day.model_dump(by_alias=True, exclude_none=True) for day in service.get_daily_forecast(lat, lon, days)]
    if selector == "hourly":
        return [hour.model_dump(by_alias=True, exclude_none=True) for hour in service.get_hourly_forecast(lat, lon, hours)]
    return service.get_complete_weather_data(lat, lon, exclude).model_dump(by_alias=True, exclude_none=True)


def _int_param(request, name: str, default: int) -> int:
    raw = request.query_params.get(name)
    if raw is None:
        return default
    value = int(raw)
    if value < 0:
        raise ValueError(f"{name} must not be negative")
    return value


class GeocodeView(APIView):
    """Resolve explicit location fields: coordinates, city/state/country or zip."""

    permission_classes = [AllowAny]

    def get(self, request, *args: Any, **kwargs: Any) -> Response:
        params = request.query_params
        coordinates = params.get("coordinates")
        city = params.get("city")
        state = params.get("state")
        country = params.get("country") or "us"
        zip_code = params.get("zip")

        if coordinates:
            location = parse_coordinate_pair(coordinates)
            if location is None:
                return error_response("Invalid coordinates format")
        elif city:
            if state:
                location = CityState(city=city, state=state, country_code=country)
            else:
                location = CityCountry(city=city, country_code=country)
        elif zip_code:
            location = PostalCode(code=zip_code.strip(), country_code=country.upper())
        else:
            return error_response("Missing location parameters")

        with requests.Session() as session:
            try:
                result = get_geocoding_service(session).resolve(location)
            except ServiceError as exc:
                return service_error_response(exc)
        return Response(result.as_dict(), status=status.HTTP_200_OK)


class GeocodingView(APIView):
    """Resolve a free-form location string."""

    permission_classes = [AllowAny]

    def get(self, request, *args: Any, **kwargs: Any) -> Response:
        query = request.query_params.get("q")
        if not query:
            return error_response("Missing query parameter")

        with requests.Session() as session:
            try:
                result = get_geocoding_service(session).get_coordinates(query)
            except ServiceError as exc:
                return service_error_response(exc)
        return Response(result.as_dict(), status=status.HTTP_200_OK)


class WeatherView(APIView):
    """Return One Call weather data, optionally narrowed to one section."""

    permission_classes = [AllowAny]

    def get(self, request, *args: Any, **kwargs: Any) -> Response:
        params = request.query_params
        if not params.get("lat") or not params.get("lon"):
            return error_response("Missing latitude or longitude parameters")
        try:
            lat = float(params["lat"])
            lon = float(params["lon"])
        except ValueError:
            return error_response("lat and lon must be valid floating point numbers")

        units = params.get("units") or "imperial"
        if units not in UNIT_SYSTEMS:
            return error_response(f"units must be one of: {', '.join(UNIT_SYSTEMS)}")

        exclude = [name.strip() for name in (params.get("exclude") or "").split(",") if name.strip()]
        unknown = [name for name in exclude if name not in SECTIONS]
        if unknown:
            return error_response(f"Unknown exclude sections: {', '.join(unknown)}")

        selector = params.get("q") or "all"
        if selector not in WEATHER_SELECTORS:
            return error_response(f"q must be one of: {', '.join(WEATHER_SELECTORS)}")

        try:
            days = _int_param(request, "days", 7)
            hours = _int_param(request, "hours", 24)
        except ValueError:
            return error_response("days and hours must be non-negative integers")

        with requests.Session() as session:
            try:
                service = get_weather_service(units, session)
                payload = select_weather(service, lat, lon, selector, exclude=exclude, days=days, hours=hours)
            except ServiceError as exc:
                return service_error_response(exc)
        return Response(payload, status=status.HTTP_200_OK)
