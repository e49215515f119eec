"""Shared plumbing for OpenWeather HTTP providers."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from requests import Response

from backend.core.abstractions import ServiceConfig
from backend.core.errors import InvalidResponseShapeError, UpstreamHttpError, UpstreamUnavailableError


class OpenWeatherProvider:
    """Base class issuing one authenticated GET per call."""

    name = "openweather"
    base_url = "https://api.openweathermap.org/"

    def __init__(self, config: ServiceConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.base_url = config.base_url or self.base_url
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _get(self, url: str, params: Dict[str, Any]) -> Any:
        params = {**params, "appid": self.config.api_key}
        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout)
        except requests.RequestException as exc:
            self._log.error("Request to %s failed", url, exc_info=exc)
            raise UpstreamUnavailableError(str(exc)) from exc
        self._handle_response(response)
        return self._json(response)

    def _handle_response(self, response: Response) -> Response:
        if response.ok:
            return response
        message = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            message = body["message"]
        self._log.error("Provider returned %s: %s", response.status_code, message or response.text[:200])
        raise UpstreamHttpError(response.status_code, response.reason or "", message)

    def _json(self, response: Response) -> Any:
        # An empty 2xx body is treated like a JSON null.
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise InvalidResponseShapeError("response body is not valid JSON") from exc


__all__ = ["OpenWeatherProvider"]
