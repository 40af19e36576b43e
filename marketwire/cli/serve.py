"""Serve command implementation."""

from typing import Optional

import typer
import uvicorn

from ..api import create_app
from ..config import Config


def serve_command(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port"),
) -> None:
    """Serve the scheduled-trigger and live feed endpoints."""
    config = Config()
    server = config.config.server
    uvicorn.run(create_app(config), host=host or server.host, port=port or server.port)
