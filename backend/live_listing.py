"""
Live dataset listing
--------------------
Re-reads the `datasets` table whenever the realtime feed reports a change and
keeps the outcome for /status/summary. API listings never serve these rows;
they read the table on every request.

Each notification starts its own re-fetch. Re-fetches are neither debounced
nor sequenced, so when several overlap the one that resolves last wins.
"""

from __future__ import annotations

import asyncio
import datetime as dt
from typing import Any, Callable, Dict, List, Optional, Set

from supabase_client.errors import StoreError
from supabase_client.realtime import TableChangeFeed

Rows = List[Dict[str, Any]]


class LiveDatasetListing:
    def __init__(self, fetch: Callable[[], Rows], feed: Optional[TableChangeFeed] = None):
        self._fetch = fetch
        self.feed = feed
        self.rows: Optional[Rows] = None
        self.error: Optional[StoreError] = None
        self.updated_at: Optional[str] = None
        self.refresh_count = 0
        self._tasks: Set[asyncio.Task] = set()

    @property
    def live(self) -> bool:
        return self.feed is not None and self.feed.active

    async def refresh(self) -> None:
        try:
            rows = await asyncio.to_thread(self._fetch)
        except StoreError as e:
            self.rows = None
            self.error = e
            print(f"[Realtime] ⚠️ Dataset re-fetch failed: {e!r}")
            return
        self.rows = rows
        self.error = None
        self.updated_at = dt.datetime.now(dt.timezone.utc).isoformat()
        self.refresh_count += 1

    def on_change(self, _payload: Any = None) -> None:
        """Realtime callback: schedule a full re-fetch on the running loop."""
        task = asyncio.get_running_loop().create_task(self.refresh())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def start(self) -> None:
        await self.refresh()
        if self.feed is not None:
            await self.feed.start(self.on_change)

    async def stop(self) -> None:
        # in-flight re-fetches are left to finish on their own
        if self.feed is not None:
            await self.feed.stop()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "live": self.live,
            "updated_at": self.updated_at,
            "refresh_count": self.refresh_count,
            "rows": len(self.rows) if self.rows is not None else None,
        }
