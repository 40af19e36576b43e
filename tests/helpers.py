"""Test doubles for HTTP sources, sockets and canned payloads."""

import json
from typing import Dict, List, Optional, Tuple

import httpx

from marketwire.models import Severity
from marketwire.services import Services


ARTICLES = [
    {
        "ticker": "ACME",
        "headline": "Acme beats earnings estimates",
        "content": "Acme Corp reported record quarterly revenue.",
        "momentum": {
            "volume": "12.5M",
            "relativeVolume": 4.2,
            "float": "80M",
            "shortInterest": "12%",
            "priceAction": "Up 18% premarket",
        },
    },
    {
        "ticker": "BOLT",
        "headline": "Bolt Industries announces merger with Volt Inc",
        "content": "The all-stock deal values Bolt at $2B.",
        "momentum": {
            "volume": "3.1M",
            "relativeVolume": 2.0,
            "float": "40M",
            "shortInterest": "5%",
            "priceAction": "Halted pending news",
        },
    },
]


class FakeHTTP:
    """Routes ``host + path`` to canned responses and records every request."""

    def __init__(self, routes: Optional[Dict[str, Tuple[int, str]]] = None) -> None:
        self.routes = routes or {}
        self.requests: List[httpx.Request] = []

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(f"{request.url.host}{request.url.path}", (404, "not found"))
        return httpx.Response(status, text=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)


class FakeSocket:
    """Async context manager and iterator standing in for a websocket."""

    def __init__(self, messages: List, error: Optional[Exception] = None) -> None:
        self.messages = messages
        self.error = error
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True
        return False

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for message in self.messages:
            yield message
        if self.error is not None:
            raise self.error


class FakeConnector:
    """Replacement for ``websockets.connect``."""

    def __init__(self, socket: FakeSocket) -> None:
        self.socket = socket
        self.urls: List[str] = []

    def __call__(self, url: str) -> FakeSocket:
        self.urls.append(url)
        return self.socket


def articles_payload(*articles) -> str:
    return json.dumps(list(articles or ARTICLES))


async def events_with(services: Services, severity: Severity):
    return [e for e in await services.activity.recent(500) if e.severity == severity]
