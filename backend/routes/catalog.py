"""
Catalog Router — QuantHub
=========================

Read-only access to uploaded strategies and datasets.

Endpoints:
----------
- GET /strategies                  → newest first, optional ?author=
- GET /strategies/{id}             → one row (404 if unknown)
- GET /strategies/{id}/preview     → file content prepared for display
- GET /datasets                    → newest first, optional ?author=
- GET /datasets/{id}
- GET /datasets/{id}/preview

Every listing is a fresh read of its table; uploads go straight from the UI
to Supabase, so the backend holds no copy that could go stale. Handlers are
plain `def`: the Supabase client is synchronous and FastAPI runs them in its
threadpool, off the loop that carries the realtime channel.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from backend.deps import get_store
from core.ui_config import DATASET_TABLE, STRATEGY_TABLE
from supabase_client.helpers import fetch_rows
from viewer.preview import load_detail

router = APIRouter(tags=["catalog"])


class PreviewResponse(BaseModel):
    file_name: Optional[str] = None
    language: str = "text"
    content: str = ""


# --------------------------------------------------------------------------- #
# Strategies
# --------------------------------------------------------------------------- #

@router.get("/strategies")
def list_strategies(
    author: Optional[str] = Query(None, description="Only rows with this author_email"),
    limit: Optional[int] = Query(None, ge=1, le=500),
    store=Depends(get_store),
) -> List[Dict[str, Any]]:
    return fetch_rows(STRATEGY_TABLE, author=author, limit=limit, client=store)


@router.get("/strategies/{strategy_id}")
def get_strategy(strategy_id: int, store=Depends(get_store)) -> Dict[str, Any]:
    return load_detail("strategy", strategy_id, client=store, with_file=False).row


@router.get("/strategies/{strategy_id}/preview", response_model=PreviewResponse)
def preview_strategy(strategy_id: int, store=Depends(get_store)):
    return load_detail("strategy", strategy_id, client=store).preview_dict()


# --------------------------------------------------------------------------- #
# Datasets
# --------------------------------------------------------------------------- #

@router.get("/datasets")
def list_datasets(
    author: Optional[str] = Query(None, description="Only rows with this author_email"),
    limit: Optional[int] = Query(None, ge=1, le=500),
    store=Depends(get_store),
) -> List[Dict[str, Any]]:
    return fetch_rows(DATASET_TABLE, author=author, limit=limit, client=store)


@router.get("/datasets/{dataset_id}")
def get_dataset(dataset_id: int, store=Depends(get_store)) -> Dict[str, Any]:
    return load_detail("dataset", dataset_id, client=store, with_file=False).row


@router.get("/datasets/{dataset_id}/preview", response_model=PreviewResponse)
def preview_dataset(dataset_id: int, store=Depends(get_store)):
    return load_detail("dataset", dataset_id, client=store).preview_dict()
