from __future__ import annotations

import os

from django.apps import AppConfig


class ApiConfig(AppConfig):
    name = "backend.api"
    label = "api"
    # Namespace package: Django cannot infer a single location on its own.
    path = os.path.dirname(os.path.abspath(__file__))
