"""Raw fetcher for polled sources."""

import os
from typing import Optional

import httpx

from ..db.logs import ActivityLog
from ..errors import ConfigurationFailure, FetchFailure
from ..models import Source


class RawFetcher:
    """One HTTP GET per source per cycle.

    Every attempt is logged with the body length and a short snippet. Non-2xx
    responses and transport errors are logged as warnings and raised as
    ``FetchFailure`` so the caller can skip just this source.
    """

    def __init__(
        self,
        activity: ActivityLog,
        timeout: float = 30.0,
        snippet_chars: int = 200,
        user_agent: str = "marketwire/0.1 (news ingestion)",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize raw fetcher."""
        self.activity = activity
        self.timeout = timeout
        self.snippet_chars = snippet_chars
        self.user_agent = user_agent
        self.transport = transport

    def resolve_api_key(self, source: Source) -> Optional[str]:
        """Read the source's API key from the environment.

        Raises:
            ConfigurationFailure: the referenced variable is unset
        """
        if not source.api_key_env:
            return None
        api_key = os.environ.get(source.api_key_env)
        if not api_key:
            raise ConfigurationFailure(f"Environment variable {source.api_key_env} is not set")
        return api_key

    def _snippet(self, body: str) -> str:
        snippet = body[: self.snippet_chars]
        if len(body) > self.snippet_chars:
            snippet += "..."
        return snippet

    async def fetch(self, source: Source) -> str:
        """Fetch the raw payload of a polled source."""
        url = httpx.URL(source.url)
        try:
            api_key = self.resolve_api_key(source)
            if api_key:
                url = url.copy_merge_params({source.api_key_param: api_key})
        except ConfigurationFailure:
            await self.activity.warn(
                f"API key environment variable not set for source: {source.name}",
                {"source": source.name, "variable": source.api_key_env},
            )

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
                transport=self.transport,
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            await self.activity.warn(
                f"Failed to fetch news from source: {source.name}",
                {"source": source.name, "error": f"{type(e).__name__}: {e}"},
            )
            raise FetchFailure(source.name, f"Transport error: {e}") from e

        body = response.text
        await self.activity.info(
            f"Fetched response from source: {source.name}",
            {
                "source": source.name,
                "status": response.status_code,
                "bytes": len(response.content),
                "snippet": self._snippet(body),
            },
        )

        if not response.is_success:
            await self.activity.warn(
                f"Failed to fetch news from source: {source.name}",
                {"source": source.name, "status": response.status_code},
            )
            raise FetchFailure(source.name, f"HTTP {response.status_code}", response.status_code)

        return body
