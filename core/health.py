"""
core/health.py
--------------
System health diagnostics for the QuantHub backend.

Purpose
-------
- Used by the FastAPI `/health` endpoint and the Streamlit status bar.
- Validates Supabase connectivity with a one-row probe of each catalogue table.
- Reports backend uptime, version and CPU/memory usage.
- Returns JSON-safe dict ready for serialization.
"""

from __future__ import annotations

import os
import time
import platform
import psutil
from typing import Any, Callable, Dict, Optional

from core.metadata import __version__
from core.ui_config import DATASET_TABLE, STRATEGY_TABLE
from supabase_client.config import get_supabase_client


# Cache the process start time for uptime calculation
START_TIME = time.time()


def system_health(client_factory: Optional[Callable[[], Any]] = None) -> Dict[str, Any]:
    """
    Return structured backend health diagnostics.

    Returns
    -------
    dict
        JSON-safe health report compatible with frontend HealthSchema.
    """
    status = "ok"
    message = "Backend operational."
    supabase_url = None
    tables: Dict[str, str] = {}

    # --- Supabase probes: one row from each catalogue table ---
    try:
        sb = (client_factory or get_supabase_client)()
        supabase_url = getattr(sb, "supabase_url", None)
    except Exception as e:
        sb = None
        status = "degraded"
        message = f"Supabase client unavailable: {e.__class__.__name__}"

    if sb is not None:
        for table in (STRATEGY_TABLE, DATASET_TABLE):
            try:
                sb.table(table).select("id").limit(1).execute()
                tables[table] = "ok"
            except Exception as e:
                tables[table] = e.__class__.__name__
                status = "degraded"
                message = f"Supabase check failed on '{table}': {e.__class__.__name__}"
    supabase_connected = bool(tables) and all(v == "ok" for v in tables.values())

    # --- System metrics ---
    try:
        cpu_load = psutil.cpu_percent(interval=0.2)
        memory_usage = round(psutil.virtual_memory().used / (1024 * 1024), 2)
    except Exception:
        cpu_load = None
        memory_usage = None

    return {
        "status": status,
        "message": message,
        "version": os.getenv("BACKEND_VERSION", __version__),
        "supabase_connected": supabase_connected,
        "supabase_url": supabase_url,
        "tables": tables,
        "cpu_load": cpu_load,
        "memory_usage": memory_usage,
        "uptime_sec": round(time.time() - START_TIME, 2),
        "system": platform.system(),
        "release": platform.release(),
    }
