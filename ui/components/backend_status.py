# ui/components/backend_status.py
"""
Backend health indicator for the QuantHub sidebar.

- Reads BACKEND_URL from core.ui_config.
- Validates the /health payload with Pydantic.
- Cached via st.cache_data; never raises into the page.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

import requests
import streamlit as st
from pydantic import BaseModel, Field

from core.ui_config import BACKEND_URL

CACHE_TTL = int(os.getenv("BACKEND_STATUS_TTL", "60"))  # seconds

STATUS_COLORS = {
    "ok": "green",
    "healthy": "green",
    "degraded": "orange",
    "error": "red",
    "offline": "red",
}


class HealthSchema(BaseModel):
    """Structured schema for the /health endpoint response."""
    status: str = Field(default="unknown", description="Overall backend status")
    message: Optional[str] = Field(default=None, description="Optional status message")
    version: Optional[str] = Field(default=None, description="Backend version string")
    supabase_connected: Optional[bool] = Field(default=None, description="Supabase connectivity flag")
    latency_ms: Optional[float] = Field(default=None, description="Approximate round-trip latency in ms")

    def color(self) -> str:
        return STATUS_COLORS.get(self.status.lower(), "gray")


@st.cache_data(ttl=CACHE_TTL)
def get_backend_status() -> Dict[str, Any]:
    """Fetch /health; offline/error states come back as a HealthSchema dict too."""
    url = f"{BACKEND_URL.rstrip('/')}/health"
    try:
        resp = requests.get(url, timeout=5)
        if resp.status_code != 200:
            return HealthSchema(status="error", message=f"HTTP {resp.status_code}: {resp.text[:100]}").model_dump()
        data = resp.json()
        data["latency_ms"] = round(resp.elapsed.total_seconds() * 1000, 2)
        return HealthSchema(**data).model_dump()
    except requests.exceptions.RequestException as e:
        return HealthSchema(
            status="offline",
            message=f"Backend unreachable at {BACKEND_URL} ({e.__class__.__name__})",
        ).model_dump()


def render_status_bar() -> None:
    """Compact backend health summary at the bottom of the sidebar."""
    health = HealthSchema(**get_backend_status())
    st.sidebar.markdown("---")
    st.sidebar.markdown(
        f"<span style='color:{health.color()}; font-weight:600;'>● {health.status.upper()}</span>",
        unsafe_allow_html=True,
    )
    if health.message:
        st.sidebar.caption(f"💬 {health.message}")
    st.sidebar.caption("☁️ Supabase: connected" if health.supabase_connected else "☁️ Supabase: unavailable")
