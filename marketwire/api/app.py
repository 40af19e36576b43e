"""HTTP surface: scheduled trigger, live feed and read endpoints."""

import secrets
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, StreamingResponse
from rich.console import Console

from ..config import Config
from ..db import close_connection_pool
from ..errors import AuthorizationFailure
from ..services import Services

console = Console(stderr=True)


def check_cron_secret(expected: Optional[str], provided: Optional[str]) -> None:
    """Raise AuthorizationFailure unless the provided secret matches.

    An unset expected secret disables the check.
    """
    if expected is None:
        return
    if provided is None or not secrets.compare_digest(provided.encode(), expected.encode()):
        raise AuthorizationFailure("Invalid cron secret")


def create_app(config: Optional[Config] = None, services: Optional[Services] = None) -> FastAPI:
    """Build the FastAPI application."""
    config = config or (services.config if services else Config())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_services = services is None
        app.state.services = services or Services(config)
        try:
            yield
        finally:
            if owns_services:
                await close_connection_pool()

    app = FastAPI(title="marketwire news pipeline", lifespan=lifespan)

    @app.get("/api/ingest-news")
    async def ingest_news(request: Request, cron_secret: Optional[str] = Query(None)):
        svc: Services = request.app.state.services
        try:
            check_cron_secret(svc.config.get_cron_secret(), cron_secret)
        except AuthorizationFailure:
            return JSONResponse({"success": False, "message": "Unauthorized"}, status_code=401)

        try:
            result = await svc.orchestrator.run_cycle()
        except Exception as e:
            console.print(f"[red]Error during scheduled news ingestion: {e}[/red]")
            return JSONResponse({"success": False, "message": "Internal Server Error"}, status_code=500)

        return {"success": True, **result.model_dump(by_alias=True)}

    @app.get("/api/websocket-news")
    async def websocket_news(request: Request, url: Optional[str] = Query(None)):
        if not url:
            return JSONResponse({"success": False, "message": "Missing url parameter"}, status_code=400)
        svc: Services = request.app.state.services

        # Starlette cancels this generator when the client disconnects, which
        # closes the upstream socket.
        async def ndjson():
            async for article in svc.live.stream(url):
                yield article.model_dump_json(by_alias=True) + "\n"

        return StreamingResponse(
            ndjson(),
            media_type="application/x-ndjson",
            headers={"Cache-Control": "no-cache"},
        )

    @app.get("/api/news")
    async def recent_news(request: Request, limit: int = Query(50, ge=1, le=500)):
        svc: Services = request.app.state.services
        articles = await svc.sink.list_recent(limit)
        return [a.model_dump(mode="json", by_alias=True) for a in articles]

    @app.get("/api/logs")
    async def recent_logs(request: Request, limit: int = Query(50, ge=1, le=500)):
        svc: Services = request.app.state.services
        events = await svc.activity.recent(limit)
        return [e.model_dump(mode="json", by_alias=True) for e in events]

    return app
