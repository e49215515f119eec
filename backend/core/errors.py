"""Error taxonomy shared by the geocoding and weather services.

Every failure carries an :class:`ErrorKind` so callers can branch on the kind
of failure instead of inspecting message text.  Providers raise the specific
classes; the service layer wraps them into :class:`GeocodingError` or
:class:`WeatherError` before they leave the core package.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    EMPTY_INPUT = "empty_input"
    UPSTREAM_HTTP = "upstream_http"
    NO_RESULTS = "no_results"
    INVALID_RESPONSE_SHAPE = "invalid_response_shape"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"


class ServiceError(RuntimeError):
    """Base class for every error raised by the core package."""

    kind: ErrorKind = ErrorKind.UPSTREAM_UNAVAILABLE

    def payload(self) -> Dict[str, Any]:
        """Structured details of the failure, safe to serialize."""
        return {}

    @property
    def summary(self) -> str:
        return f"{self.kind.value}: {self}"


class ConfigurationError(ServiceError):
    """Raised when a service is constructed with an invalid configuration."""

    kind = ErrorKind.CONFIGURATION


class EmptyInputError(ServiceError):
    """Raised when a location string is blank after trimming."""

    kind = ErrorKind.EMPTY_INPUT

    def __init__(self, message: str = "Please enter a location") -> None:
        super().__init__(message)


class UpstreamHttpError(ServiceError):
    """The provider answered with a non-2xx status or an error body."""

    kind = ErrorKind.UPSTREAM_HTTP

    def __init__(self, status: int, status_text: str = "", message: Optional[str] = None) -> None:
        self.status = status
        self.status_text = status_text
        self.upstream_message = message
        if message:
            text = f"API Error: {message}"
        else:
            text = f"API request failed with status: {status} {status_text}".rstrip()
        super().__init__(text)

    def payload(self) -> Dict[str, Any]:
        return {"status": self.status, "status_text": self.status_text, "message": self.upstream_message}


class NoResultsError(ServiceError):
    kind = ErrorKind.NO_RESULTS

    def __init__(self, query: Optional[str] = None) -> None:
        self.query = query
        super().__init__(f"No results found for query: {query}" if query else "No results found")

    def payload(self) -> Dict[str, Any]:
        return {"query": self.query}


class InvalidResponseShapeError(ServiceError):
    """The provider returned a body that does not match the expected shape."""

    kind = ErrorKind.INVALID_RESPONSE_SHAPE

    def __init__(self, diagnostic: str) -> None:
        self.diagnostic = diagnostic
        super().__init__(f"Invalid response format: {diagnostic}")

    def payload(self) -> Dict[str, Any]:
        return {"diagnostic": self.diagnostic}


class UpstreamUnavailableError(ServiceError):
    kind = ErrorKind.UPSTREAM_UNAVAILABLE

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Request failed: {reason}")

    def payload(self) -> Dict[str, Any]:
        return {"reason": self.reason}


class _BoundaryError(ServiceError):
    def __init__(self, cause: ServiceError) -> None:
        self.cause = cause
        self.kind = cause.kind
        super().__init__(str(cause))

    def payload(self) -> Dict[str, Any]:
        return self.cause.payload()


class GeocodingError(_BoundaryError):
    """Any failure of a geocoding lookup, as seen by callers of the service."""


class WeatherError(_BoundaryError):
    """Any failure of a weather lookup, as seen by callers of the service."""


__all__ = [
    "ConfigurationError",
    "EmptyInputError",
    "ErrorKind",
    "GeocodingError",
    "InvalidResponseShapeError",
    "NoResultsError",
    "ServiceError",
    "UpstreamHttpError",
    "UpstreamUnavailableError",
    "WeatherError",
]
