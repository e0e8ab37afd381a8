"""ASGI app built from environment settings, for uvicorn or serverless use."""

from snap_caption.api.app import create_app
from snap_caption.containers import build_container

app = create_app(build_container())
