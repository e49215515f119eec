"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from backend.api.views import GeocodeView, GeocodingView, WeatherView

urlpatterns = [
    path("geocode", GeocodeView.as_view(), name="geocode"),
    path("geocoding", GeocodingView.as_view(), name="geocoding"),
    path("weather", WeatherView.as_view(), name="weather"),
]
