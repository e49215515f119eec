"""Management command to look up a location and its weather using the API stack."""
from __future__ import annotations

import json
from typing import Any

import requests
from django.core.management.base import BaseCommand, CommandError

from backend.api.views import WEATHER_SELECTORS, get_geocoding_service, get_weather_service, select_weather
from backend.core.errors import ServiceError


class Command(BaseCommand):
    help = "Resolve a location and fetch its weather"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--location", type=str, help="Free-form location, e.g. '10001' or 'Paris, FR'")
        parser.add_argument("--lat", type=float, help="Latitude")
        parser.add_argument("--lon", type=float, help="Longitude")
        parser.add_argument("--section", choices=WEATHER_SELECTORS, default="current", help="Weather section to print")
        parser.add_argument("--units", type=str, default=None, help="standard, metric or imperial")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        location = options.get("location")
        latitude = options.get("lat")
        longitude = options.get("lon")
        section = options["section"]

        if not location and (latitude is None or longitude is None):
            raise CommandError("--lat and --lon are required unless using --location")

        with requests.Session() as session:
            try:
                if location:
                    place = get_geocoding_service(session).get_coordinates(location)
                    latitude, longitude = place.lat, place.lon
                    payload: dict = {"location": place.as_dict()}
                else:
                    payload = {"location": {"lat": latitude, "lon": longitude}}

                service = get_weather_service(options.get("units"), session)
                key = "weather" if section == "all" else section
                payload[key] = select_weather(service, latitude, longitude, section)
            except ServiceError as exc:
                raise CommandError(str(exc)) from exc

        self.stdout.write(json.dumps(payload))
