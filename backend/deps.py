"""
Backend dependencies.

Routes never build Supabase clients themselves; they receive one through
`get_store`, which tests replace via `app.dependency_overrides`.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from backend.live_listing import LiveDatasetListing
from supabase_client.config import get_supabase_client


def get_store():
    return get_supabase_client()


def get_dataset_listing(request: Request) -> Optional[LiveDatasetListing]:
    return getattr(request.app.state, "dataset_listing", None)
