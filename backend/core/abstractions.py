"""Core abstractions for the location and weather domain."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Protocol, Union

from backend.core.errors import ConfigurationError


UNIT_SYSTEMS = ("standard", "metric", "imperial")


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    """Settings for one OpenWeather service instance."""

    api_key: str
    base_url: Optional[str] = None
    units: str = "metric"
    language: str = "en"
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError("API key is required")
        if self.units not in UNIT_SYSTEMS:
            raise ConfigurationError(f"Unknown unit system: {self.units}")


@dataclass(frozen=True, slots=True)
class PostalCode:
    code: str
    country_code: str = "US"


@dataclass(frozen=True, slots=True)
class CityState:
    city: str
    state: str
    country_code: str = "US"


@dataclass(frozen=True, slots=True)
class CityCountry:
    city: str
    country_code: str


@dataclass(frozen=True, slots=True)
class Coordinates:
    lat: float
    lon: float


@dataclass(frozen=True, slots=True)
class FreeText:
    query: str
    limit: int = 1


ClassifiedInput = Union[PostalCode, CityState, CityCountry, Coordinates, FreeText]


@dataclass(slots=True)
class GeocodingResult:
    """A single resolved location."""

    name: str
    lat: float
    lon: float
    country: str
    state: Optional[str] = None
    local_names: Optional[Dict[str, str]] = None

    def as_dict(self) -> Dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


class LocationResolver(Protocol):
    """A data source able to turn classified input into coordinates."""

    name: str

    def resolve(self, location: ClassifiedInput) -> GeocodingResult:
        """Return the single best match for the provided location."""
        ...
