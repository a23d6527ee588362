"""ASGI entrypoint for the SnapMarket web app."""

from snap_market.api.app import create_app
from snap_market.containers import build_container

app = create_app(build_container())
