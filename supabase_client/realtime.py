# supabase_client/realtime.py
"""
Realtime change feed for one Supabase table.

Wraps an async client's `postgres_changes` channel. Every notification is
handed to the callback as-is; nothing is de-duplicated or debounced.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

from supabase_client.config import get_async_supabase_client


class TableChangeFeed:
    """Subscribe to all row changes of `table` on `channel_name`."""

    def __init__(
        self,
        table: str,
        channel_name: str,
        client_factory: Callable[[], Awaitable[Any]] = get_async_supabase_client,
        schema: str = "public",
    ):
        self.table = table
        self.channel_name = channel_name
        self.schema = schema
        self._client_factory = client_factory
        self._client = None
        self._channel = None

    @property
    def active(self) -> bool:
        return self._channel is not None

    async def start(self, callback: Callable[[Any], None]) -> None:
        if self._channel is not None:
            return
        self._client = await self._client_factory()
        channel = self._client.channel(self.channel_name)
        channel.on_postgres_changes(
            "*",
            callback=callback,
            table=self.table,
            schema=self.schema,
        )
        await channel.subscribe()
        self._channel = channel
        print(f"[Realtime] ✅ Subscribed to {self.schema}.{self.table} on '{self.channel_name}'")

    async def stop(self) -> None:
        channel: Optional[Any] = self._channel
        if channel is None:
            return
        self._channel = None
        await self._client.remove_channel(channel)
        print(f"[Realtime] Unsubscribed from '{self.channel_name}'")
