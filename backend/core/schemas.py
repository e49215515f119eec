"""Pydantic schemas for OpenWeather geocoding and One Call payloads."""
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter, ValidationError

from backend.core.errors import InvalidResponseShapeError

__all__ = [
    "Alert",
    "DailyPoint",
    "DayFeelsLike",
    "DayTemperature",
    "GeocodingResponse",
    "GeocodingZipResponse",
    "HourlyPoint",
    "MinutelyPoint",
    "OneCallResponse",
    "WeatherApiError",
    "WeatherCondition",
    "WeatherSnapshot",
    "describe_errors",
    "parse_onecall",
    "validate",
]

ModelT = TypeVar("ModelT", bound=BaseModel)


# -- Geocoding --------------------------------------------------------------
class GeocodingResponse(BaseModel):
    model_config = ConfigDict(strict=True)

    name: str
    local_names: Optional[Dict[str, str]] = None
    lat: float
    lon: float
    country: str
    state: Optional[str] = None


class GeocodingZipResponse(BaseModel):
    """The zip endpoint answers with a single object that carries the code."""

    model_config = ConfigDict(strict=True)

    name: str
    lat: float
    lon: float
    country: str
    zip: str


# -- One Call ---------------------------------------------------------------
class WeatherCondition(BaseModel):
    id: int
    main: str
    description: str
    icon: str


class Precipitation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    last_hour: float = Field(alias="1h")


class _BaseWeatherData(BaseModel):
    dt: int
    temp: float
    feels_like: float
    pressure: float
    humidity: float
    dew_point: float
    uvi: float
    clouds: float
    visibility: Optional[float] = None
    wind_speed: float
    wind_deg: float
    wind_gust: Optional[float] = None
    rain: Optional[Precipitation] = None
    snow: Optional[Precipitation] = None
    weather: List[WeatherCondition] = Field(default_factory=list)


class WeatherSnapshot(_BaseWeatherData):
    sunrise: Optional[int] = None
    sunset: Optional[int] = None


class HourlyPoint(_BaseWeatherData):
    pop: float = 0.0


class MinutelyPoint(BaseModel):
    dt: int
    precipitation: float


class DayTemperature(BaseModel):
    day: float
    min: float
    max: float
    night: float
    eve: float
    morn: float


class DayFeelsLike(BaseModel):
    day: float
    night: float
    eve: float
    morn: float


class DailyPoint(BaseModel):
    dt: int
    sunrise: Optional[int] = None
    sunset: Optional[int] = None
    moonrise: Optional[int] = None
    moonset: Optional[int] = None
    moon_phase: Optional[float] = None
    summary: Optional[str] = None
    temp: DayTemperature
    feels_like: DayFeelsLike
    pressure: float
    humidity: float
    dew_point: float
    wind_speed: float
    wind_deg: float
    wind_gust: Optional[float] = None
    weather: List[WeatherCondition] = Field(default_factory=list)
    clouds: float
    pop: float = 0.0
    rain: Optional[float] = None
    snow: Optional[float] = None
    uvi: float


class Alert(BaseModel):
    sender_name: str
    event: str
    start: int
    end: int
    description: str
    tags: List[str] = Field(default_factory=list)


class OneCallResponse(BaseModel):
    lat: float
    lon: float
    timezone: str
    timezone_offset: int
    current: Optional[WeatherSnapshot] = None
    minutely: Optional[List[MinutelyPoint]] = None
    hourly: Optional[List[HourlyPoint]] = None
    daily: Optional[List[DailyPoint]] = None
    alerts: Optional[List[Alert]] = None


class WeatherApiError(BaseModel):
    cod: Union[int, str]
    message: str


def _onecall_variant(value: Any) -> str:
    if isinstance(value, dict) and "cod" in value and "message" in value:
        return "error"
    return "onecall"


OneCallResult = Annotated[
    Union[
        Annotated[OneCallResponse, Tag("onecall")],
        Annotated[WeatherApiError, Tag("error")],
    ],
    Discriminator(_onecall_variant),
]

_ONECALL_ADAPTER: TypeAdapter = TypeAdapter(OneCallResult)


# -- Validation helpers -----------------------------------------------------
def describe_errors(exc: ValidationError) -> str:
    """Flatten pydantic errors into ``"lat: Input should be ...; ..."``."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "<root>"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def validate(raw: Any, shape: Type[ModelT]) -> ModelT:
    """Validate ``raw`` against ``shape``.

    Raises:
        InvalidResponseShapeError: for any mismatch, including non-object input.
    """
    try:
        return shape.model_validate(raw)
    except ValidationError as exc:
        raise InvalidResponseShapeError(describe_errors(exc)) from exc


def parse_onecall(raw: Any) -> Union[OneCallResponse, WeatherApiError]:
    """Resolve a One Call body into the success or the error variant."""
    try:
        return _ONECALL_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        raise InvalidResponseShapeError(describe_errors(exc)) from exc
