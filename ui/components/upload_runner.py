"""Runs an UploadFlow from a Streamlit form and renders its outcome."""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import streamlit as st
from streamlit.runtime.scriptrunner import add_script_run_ctx

from core.ui_config import PAGES
from core.ui_helpers import invalidate_backend_cache
from ui.components.session import get_client, get_session_provider
from uploads.flow import SimulatedProgress, UploadFlow, UploadKind, UploadOutcome
from uploads.validation import UploadedFile


def to_uploaded_file(widget_file) -> Optional[UploadedFile]:
    """Streamlit's UploadedFile -> ours."""
    if widget_file is None:
        return None
    return UploadedFile(
        name=widget_file.name,
        data=widget_file.getvalue(),
        content_type=widget_file.type,
        size=widget_file.size,
    )


def run_upload(kind: UploadKind, form: Dict[str, Any], widget_file, key_prefix: str) -> UploadOutcome:
    provider = get_session_provider()
    bar = st.progress(0, text="Uploading…")
    progress = SimulatedProgress(
        lambda value: bar.progress(value, text=f"Uploading… {value}%"),
        prepare_thread=add_script_run_ctx,
    )
    flow = UploadFlow(kind, get_client(), provider.session, progress=progress)
    outcome = flow.submit(form, to_uploaded_file(widget_file))

    if outcome.auth_required:
        bar.empty()
        st.warning(outcome.message)
        return outcome

    if outcome.errors:
        bar.empty()
        st.error(outcome.message)
        for field_name, message in outcome.errors.items():
            st.caption(f"• **{field_name}**: {message}")
        return outcome

    if not outcome.ok:
        bar.empty()
        st.error(outcome.message)
        return outcome

    invalidate_backend_cache()
    st.success(outcome.message)
    # reset the form widgets before leaving
    for key in [k for k in st.session_state.keys() if str(k).startswith(key_prefix)]:
        del st.session_state[key]
    time.sleep(outcome.redirect_delay)
    st.switch_page(PAGES[outcome.redirect_to])
    return outcome
