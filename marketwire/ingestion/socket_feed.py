"""Push-source subscription over a websocket."""

from typing import AsyncIterator, Callable, Optional

import websockets
from websockets.exceptions import WebSocketException

from ..db.logs import ActivityLog


class SocketFeed:
    """Deliver the inbound messages of one socket connection.

    Messages are yielded one at a time; a message arriving while the consumer
    is still busy with the previous one waits in the connection's buffer.
    A clean close ends iteration. Socket errors are logged and re-raised to
    the consumer; there are no reconnects.
    """

    def __init__(
        self,
        activity: ActivityLog,
        connect: Optional[Callable] = None,
    ) -> None:
        self.activity = activity
        self.connect = connect or websockets.connect

    async def messages(self, url: str) -> AsyncIterator[str]:
        try:
            async with self.connect(url) as ws:
                await self.activity.info(f"Connected to external WebSocket: {url}", {"url": url})
                async for message in ws:
                    if isinstance(message, bytes):
                        message = message.decode("utf-8", errors="replace")
                    yield message
        except (WebSocketException, OSError) as e:
            await self.activity.error(
                f"External WebSocket error for {url}",
                {"url": url, "error": f"{type(e).__name__}: {e}"},
            )
            raise
        await self.activity.info(f"Disconnected from external WebSocket: {url}", {"url": url})
