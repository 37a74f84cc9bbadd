"""
QuantHub — ContributionSummary providers
----------------------------------------
Two interchangeable ways to obtain community summaries:

- `ClientSideSummaryProvider` reads the `strategies` and `datasets` tables
  directly (both requests in flight at once) and aggregates locally.
- `BackendSummaryProvider` asks the QuantHub backend, which does the same
  work server-side.

Pages depend only on `ContributionSummaryProvider`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests

from analytics.community import CommunityMember, MemberProfile, aggregate_contributions, build_profile
from core.ui_config import BACKEND_URL, DATASET_TABLE, STRATEGY_TABLE
from supabase_client.errors import ErrorKind, StoreError, error_from_response
from supabase_client.helpers import fetch_rows

Rows = List[Dict[str, Any]]


class ContributionSummaryProvider(ABC):
    @abstractmethod
    def summaries(self) -> List[CommunityMember]:
        """One summary per contributing author."""

    @abstractmethod
    def profile(self, author: str) -> MemberProfile:
        """Summary plus contributions of one author."""


def fetch_both(
    fetch_strategies: Callable[[], Rows],
    fetch_datasets: Callable[[], Rows],
) -> Tuple[Rows, Rows]:
    """Run both fetches concurrently; any failure fails the pair."""
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="quanthub-fetch") as pool:
        strategies = pool.submit(fetch_strategies)
        datasets = pool.submit(fetch_datasets)
        return strategies.result(), datasets.result()


class ClientSideSummaryProvider(ContributionSummaryProvider):
    def __init__(self, client=None):
        self._client = client

    def summaries(self) -> List[CommunityMember]:
        columns = "author_email, created_at"
        strategies, datasets = fetch_both(
            lambda: fetch_rows(STRATEGY_TABLE, columns=columns, client=self._client),
            lambda: fetch_rows(DATASET_TABLE, columns=columns, client=self._client),
        )
        return aggregate_contributions(strategies, datasets)

    def profile(self, author: str) -> MemberProfile:
        strategies, datasets = fetch_both(
            lambda: fetch_rows(STRATEGY_TABLE, author=author, client=self._client),
            lambda: fetch_rows(DATASET_TABLE, author=author, client=self._client),
        )
        return build_profile(author, strategies, datasets)


class BackendSummaryProvider(ContributionSummaryProvider):
    def __init__(self, base_url: str = BACKEND_URL, session: Optional[requests.Session] = None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self._http = session or requests.Session()
        self.timeout = timeout

    def _get(self, path: str) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = self._http.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise StoreError(ErrorKind.TRANSPORT, f"Backend unreachable at {self.base_url} ({e.__class__.__name__})") from e
        if resp.status_code >= 400:
            raise error_from_response(resp)
        return resp.json()

    def summaries(self) -> List[CommunityMember]:
        payload = self._get("community")
        return [CommunityMember(**item) for item in payload.get("results", [])]

    def profile(self, author: str) -> MemberProfile:
        payload = dict(self._get(f"community/{quote(author, safe='')}"))
        strategies = payload.pop("strategy_rows", [])
        datasets = payload.pop("dataset_rows", [])
        return MemberProfile(member=CommunityMember(**payload), strategies=strategies, datasets=datasets)
