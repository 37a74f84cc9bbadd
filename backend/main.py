"""
QuantHub Backend API
====================

FastAPI service exposing the strategy/dataset catalogue, community
summaries and health endpoints.

Design Intent
-------------
• Read-only. Uploads go straight from the signed-in user's session to
  Supabase (storage + insert), so row-level security applies to the user.
• All Supabase access goes through `supabase_client.helpers`; every provider
  failure arrives here as a classified `StoreError` and is turned into an
  HTTP status by one exception handler.
• Listings always read their table. A realtime subscription on `datasets`
  re-fetches on every change and reports it through /status/summary
  (optional; disabled with QUANTHUB_LIVE_DATASETS=0 or missing credentials).
• Optional integrations never stop the app from starting.
"""

from __future__ import annotations

import os
import sys
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

# --------------------------------------------------------------------------- #
# Path setup: ensure project root on sys.path
# --------------------------------------------------------------------------- #

# Allows imports like `core.*`, `analytics.*`, `supabase_client.*` when running via uvicorn
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

from backend.deps import get_dataset_listing
from backend.live_listing import LiveDatasetListing
from backend.routes.catalog import router as catalog_router
from backend.routes.community import router as community_router
from core.health import system_health
from core.metadata import __version__
from core.ui_config import DATASET_CHANNEL, DATASET_TABLE, LIVE_DATASETS, SUPABASE_ANON_KEY, SUPABASE_URL
from supabase_client.errors import StoreError
from supabase_client.helpers import fetch_rows, test_connection
from supabase_client.realtime import TableChangeFeed

SUPABASE_CONFIGURED = bool(SUPABASE_URL and SUPABASE_ANON_KEY)

if not SUPABASE_CONFIGURED:
    print("[Supabase] ❌ Missing SUPABASE_URL or SUPABASE_ANON_KEY; data endpoints will fail.")


# --------------------------------------------------------------------------- #
# Lifespan: realtime dataset listing (optional)
# --------------------------------------------------------------------------- #

@asynccontextmanager
async def lifespan(app: FastAPI):
    listing = None
    if SUPABASE_CONFIGURED:
        test_connection(debug=True)
    if SUPABASE_CONFIGURED and LIVE_DATASETS:
        listing = LiveDatasetListing(
            fetch=lambda: fetch_rows(DATASET_TABLE),
            feed=TableChangeFeed(DATASET_TABLE, DATASET_CHANNEL),
        )
        try:
            await listing.start()
            print("[Backend] ✅ Live dataset listing active.")
        except Exception as e:  # noqa: BLE001 - realtime is optional
            print(f"[Backend] ⚠️ Live dataset listing unavailable; serving direct reads. Reason: {e}")
            listing = None
    app.state.dataset_listing = listing
    try:
        yield
    finally:
        if listing is not None:
            await listing.stop()


# --------------------------------------------------------------------------- #
# FastAPI App
# --------------------------------------------------------------------------- #

app = FastAPI(
    title="QuantHub Backend API",
    version=__version__,
    description=(
        "Backend for the QuantHub strategy & dataset hub.\n"
        "- Strategy and dataset catalogue with file previews.\n"
        "- Community contribution summaries.\n"
        "- Health and status endpoints."
    ),
    lifespan=lifespan,
)
app.state.dataset_listing = None

app.include_router(catalog_router)
app.include_router(community_router)


@app.exception_handler(StoreError)
async def store_error_handler(_request: Request, exc: StoreError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "kind": exc.kind.value, "code": exc.code},
    )


# --------------------------------------------------------------------------- #
# Core Routes
# --------------------------------------------------------------------------- #

@app.get("/")
async def root():
    """
    Basic liveness probe.
    """
    return {
        "status": "ok",
        "message": "QuantHub Backend is live.",
        "version": app.version,
        "supabase_configured": SUPABASE_CONFIGURED,
    }


@app.get("/health")
def health():
    """
    System health endpoint; delegates to core.health.system_health.
    Plain `def`: the Supabase check and psutil sampling block, so it runs in the threadpool.
    """
    return system_health()


@app.get("/status/summary")
async def status_summary(listing: Optional[LiveDatasetListing] = Depends(get_dataset_listing)) -> Dict[str, Any]:
    """
    High-level status summary for dashboards.
    """
    return {
        "backend_version": app.version,
        "supabase_configured": SUPABASE_CONFIGURED,
        "live_datasets": listing.snapshot() if listing is not None else None,
    }
