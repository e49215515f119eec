from __future__ import annotations

from typing import Any, Dict, List

import pytest
import requests

from requests_mock import Mocker

from backend.core.abstractions import ServiceConfig

from payloads import GEO_URL, ONECALL_URL, make_hour


@pytest.fixture
def requests_mock():
    with Mocker(case_sensitive=True) as mock:
        yield mock


@pytest.fixture
def geo_config() -> ServiceConfig:
    return ServiceConfig(api_key="test-key", base_url=GEO_URL)


@pytest.fixture
def weather_config() -> ServiceConfig:
    return ServiceConfig(api_key="test-key", base_url=ONECALL_URL, units="imperial", language="de")


@pytest.fixture
def session() -> requests.Session:
    return requests.Session()


@pytest.fixture
def current_payload() -> Dict[str, Any]:
    current = make_hour(1700000000, temp=68.0)
    current.pop("pop")
    current.update({"sunrise": 1699960000, "sunset": 1699997000})
    return current


@pytest.fixture
def closed_sessions(monkeypatch) -> List[requests.Session]:
    """Record every ``requests.Session`` closed during the test."""
    closed: List[requests.Session] = []
    original = requests.Session.close

    def close(self) -> None:
        closed.append(self)
        original(self)

    monkeypatch.setattr(requests.Session, "close", close)
    return closed
