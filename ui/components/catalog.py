"""Card renderers for strategy and dataset rows."""

from __future__ import annotations

from typing import Any, Dict

import streamlit as st

from core.formatting import format_date, format_file_size
from core.ui_config import detail_link


def _tags(row: Dict[str, Any]) -> str:
    tags = row.get("tags") or []
    if isinstance(tags, str):
        tags = [t.strip() for t in tags.split(",") if t.strip()]
    return " ".join(f"`{t}`" for t in tags)


def render_strategy_card(row: Dict[str, Any]) -> None:
    with st.container(border=True):
        st.markdown(f"### [{row.get('name') or 'Untitled'}]({detail_link('strategy', row.get('id'))})")
        st.caption(
            f"{row.get('category') or '—'} · risk {row.get('risk_level') or '—'} · "
            f"{row.get('time_horizon') or '—'} · {format_date(row.get('created_at'))}"
        )
        st.write(row.get("description") or "")
        if row.get("tags"):
            st.markdown(_tags(row))
        if row.get("author_email"):
            st.caption(f"by [{row['author_email']}]({detail_link('community', row['author_email'])})")


def render_dataset_card(row: Dict[str, Any]) -> None:
    with st.container(border=True):
        st.markdown(f"### [{row.get('name') or 'Untitled'}]({detail_link('dataset', row.get('id'))})")
        st.caption(
            f"{row.get('category') or '—'} · {row.get('data_type') or '—'} · "
            f"{row.get('time_frame') or '—'} · {format_file_size(row.get('file_size'))}"
        )
        st.write(row.get("description") or "")
        if row.get("assets"):
            st.caption(f"Assets: {row['assets']}")
        if row.get("tags"):
            st.markdown(_tags(row))
        if row.get("author_email"):
            st.caption(
                f"by [{row['author_email']}]({detail_link('community', row['author_email'])}) · "
                f"{format_date(row.get('created_at'))}"
            )
