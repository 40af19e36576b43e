"""Run async work against freshly built services."""

import asyncio
from typing import Awaitable, Callable, TypeVar

from ..config import Config
from ..db import close_connection_pool
from ..services import Services

T = TypeVar("T")


def run_with_services(work: Callable[[Services], Awaitable[T]]) -> T:
    """Build services from the default config, run ``work`` and close the pool."""

    async def main() -> T:
        services = Services(Config())
        try:
            return await work(services)
        finally:
            await close_connection_pool()

    return asyncio.run(main())
