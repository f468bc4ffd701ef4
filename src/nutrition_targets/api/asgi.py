"""ASGI entrypoint for the nutrition targets API."""

from nutrition_targets.api.app import create_app
from nutrition_targets.containers import build_container

app = create_app(build_container())
