from __future__ import annotations

import pytest
import requests

from backend.core.abstractions import (
    CityCountry,
    CityState,
    Coordinates,
    FreeText,
    GeocodingResult,
    PostalCode,
    ServiceConfig,
)
from backend.core.errors import (
    EmptyInputError,
    ErrorKind,
    GeocodingError,
    InvalidResponseShapeError,
    NoResultsError,
    UpstreamHttpError,
    UpstreamUnavailableError,
)
from backend.core.providers.geocoding import OpenWeatherGeocodingProvider
from backend.core.services.geocoding_service import GeocodingService

from payloads import GEO_URL, NEW_YORK, PARIS, ZIP_10001


DIRECT_URL = f"{GEO_URL}direct"
ZIP_URL = f"{GEO_URL}zip"


def test_zip_lookup_issues_one_request_and_drops_zip(requests_mock, geo_config) -> None:
    requests_mock.get(ZIP_URL, json=ZIP_10001)
    service = GeocodingService(geo_config)

    result = service.get_coordinates("10001")

    assert requests_mock.call_count == 1
    assert requests_mock.last_request.qs == {"zip": ["10001,US"], "appid": ["test-key"]}
    assert result == GeocodingResult(name="New York", lat=40.7484, lon=-73.9967, country="US")
    assert "zip" not in result.as_dict()


def test_city_country_uses_direct_query(requests_mock, geo_config) -> None:
    requests_mock.get(DIRECT_URL, json=[PARIS])
    service = GeocodingService(geo_config)

    result = service.get_coordinates("Paris, FR")

    assert requests_mock.last_request.qs == {"q": ["Paris,FR"], "limit": ["1"], "appid": ["test-key"]}
    assert result.name == "Paris"
    assert result.state == "Ile-de-France"


def test_city_state_query_includes_country(requests_mock, geo_config) -> None:
    requests_mock.get(DIRECT_URL, json=[NEW_YORK, PARIS])
    service = GeocodingService(geo_config)

    result = service.get_coordinates("New York, NY, US")

    assert requests_mock.last_request.qs["q"] == ["New York,NY,US"]
    assert result.name == "New York"
    assert result.local_names == {"en": "New York", "fr": "New York"}


def test_free_text_query(requests_mock, geo_config) -> None:
    requests_mock.get(DIRECT_URL, json=[PARIS])
    provider = OpenWeatherGeocodingProvider(geo_config)

    provider.resolve(FreeText(query="Eiffel Tower", limit=1))

    assert requests_mock.last_request.qs["q"] == ["Eiffel Tower"]
    assert requests_mock.last_request.qs["limit"] == ["1"]


def test_explicit_city_state_country(requests_mock, geo_config) -> None:
    requests_mock.get(DIRECT_URL, json=[NEW_YORK])
    provider = OpenWeatherGeocodingProvider(geo_config)

    provider.resolve(CityState(city="Albany", state="NY", country_code="us"))

    assert requests_mock.last_request.qs["q"] == ["Albany,NY,us"]


def test_coordinates_are_not_geocoded(requests_mock, geo_config) -> None:
    service = GeocodingService(geo_config)

    result = service.resolve(Coordinates(lat=51.5, lon=-0.1276))

    assert requests_mock.call_count == 0
    assert result == GeocodingResult(name="Location at 51.5000, -0.1276", lat=51.5, lon=-0.1276, country="")


def test_default_base_url(requests_mock) -> None:
    requests_mock.get("https://api.openweathermap.org/geo/1.0/zip", json=ZIP_10001)
    provider = OpenWeatherGeocodingProvider(ServiceConfig(api_key="k"))

    provider.resolve(PostalCode(code="10001"))

    assert requests_mock.called


def test_empty_direct_result_is_no_results(requests_mock, geo_config) -> None:
    requests_mock.get(DIRECT_URL, json=[])
    provider = OpenWeatherGeocodingProvider(geo_config)

    with pytest.raises(NoResultsError) as excinfo:
        provider.resolve(CityCountry(city="Atlantis", country_code="GR"))

    assert excinfo.value.query == "Atlantis,GR"


def test_null_zip_result_is_no_results(requests_mock, geo_config) -> None:
    requests_mock.get(ZIP_URL, text="null")
    provider = OpenWeatherGeocodingProvider(geo_config)

    with pytest.raises(NoResultsError):
        provider.resolve(PostalCode(code="99999"))


def test_empty_zip_body_is_no_results(requests_mock, geo_config) -> None:
    requests_mock.get(ZIP_URL, text="")
    provider = OpenWeatherGeocodingProvider(geo_config)

    with pytest.raises(NoResultsError) as excinfo:
        provider.resolve(PostalCode(code="99999"))

    assert excinfo.value.query == "99999"


def test_service_wraps_no_results(requests_mock, geo_config) -> None:
    requests_mock.get(DIRECT_URL, json=[])
    service = GeocodingService(geo_config)

    with pytest.raises(GeocodingError) as excinfo:
        service.get_coordinates("Nowhere")

    error = excinfo.value
    assert error.kind is ErrorKind.NO_RESULTS
    assert isinstance(error.cause, NoResultsError)
    assert error.payload() == {"query": "Nowhere"}
    assert str(error) == "No results found for query: Nowhere"
    assert error.summary.startswith("no_results:")


def test_service_wraps_http_errors(requests_mock, geo_config) -> None:
    requests_mock.get(ZIP_URL, status_code=401, reason="Unauthorized", json={"cod": 401, "message": "Invalid API key."})
    service = GeocodingService(geo_config)

    with pytest.raises(GeocodingError) as excinfo:
        service.get_coordinates("10001")

    cause = excinfo.value.cause
    assert isinstance(cause, UpstreamHttpError)
    assert cause.status == 401
    assert cause.status_text == "Unauthorized"
    assert excinfo.value.kind is ErrorKind.UPSTREAM_HTTP


def test_http_error_without_body_reports_status(requests_mock, geo_config) -> None:
    requests_mock.get(DIRECT_URL, status_code=503, reason="Service Unavailable", text="")
    provider = OpenWeatherGeocodingProvider(geo_config)

    with pytest.raises(UpstreamHttpError) as excinfo:
        provider.resolve(FreeText(query="Paris"))

    assert str(excinfo.value) == "API request failed with status: 503 Service Unavailable"


def test_service_wraps_shape_errors(requests_mock, geo_config) -> None:
    requests_mock.get(DIRECT_URL, json=[{"name": "Paris", "lat": "48.85", "lon": 2.35, "country": "FR"}])
    service = GeocodingService(geo_config)

    with pytest.raises(GeocodingError) as excinfo:
        service.get_coordinates("Paris")

    assert excinfo.value.kind is ErrorKind.INVALID_RESPONSE_SHAPE
    assert isinstance(excinfo.value.cause, InvalidResponseShapeError)
    assert "lat" in excinfo.value.payload()["diagnostic"]


def test_zip_response_validated_against_zip_shape(requests_mock, geo_config) -> None:
    requests_mock.get(ZIP_URL, json=[NEW_YORK])
    provider = OpenWeatherGeocodingProvider(geo_config)

    with pytest.raises(InvalidResponseShapeError):
        provider.resolve(PostalCode(code="10001"))


def test_invalid_json_is_a_shape_error(requests_mock, geo_config) -> None:
    requests_mock.get(DIRECT_URL, text="<html>oops</html>")
    provider = OpenWeatherGeocodingProvider(geo_config)

    with pytest.raises(InvalidResponseShapeError) as excinfo:
        provider.resolve(FreeText(query="Paris"))

    assert excinfo.value.diagnostic == "response body is not valid JSON"


def test_transport_failure_is_unavailable(requests_mock, geo_config) -> None:
    requests_mock.get(DIRECT_URL, exc=requests.ConnectionError("connection refused"))
    service = GeocodingService(geo_config)

    with pytest.raises(GeocodingError) as excinfo:
        service.get_coordinates("Paris")

    assert excinfo.value.kind is ErrorKind.UPSTREAM_UNAVAILABLE
    assert isinstance(excinfo.value.cause, UpstreamUnavailableError)


def test_blank_input_never_reaches_upstream(requests_mock, geo_config) -> None:
    service = GeocodingService(geo_config)

    with pytest.raises(GeocodingError) as excinfo:
        service.get_coordinates("   ")

    assert isinstance(excinfo.value.cause, EmptyInputError)
    assert excinfo.value.kind is ErrorKind.EMPTY_INPUT
    assert requests_mock.call_count == 0


def test_is_postal_code(geo_config) -> None:
    service = GeocodingService(geo_config)

    assert service.is_postal_code("12345")
    assert service.is_postal_code("A1A 1A1", "ca")
    assert not service.is_postal_code("ABCDE")
