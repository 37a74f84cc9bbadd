"""Syntax-highlighted file preview with a plain-text fallback."""

from __future__ import annotations

import streamlit as st

from viewer.preview import DetailView


def render_preview(view: DetailView, download_key: str) -> None:
    if view.data is None:
        st.info("No file attached.")
        return

    st.download_button(
        "⬇️ Download file",
        data=view.data,
        file_name=view.file_name or "download.txt",
        mime=view.mime,
        key=download_key,
    )
    if not view.content:
        return

    st.caption(f"📄 {view.file_name} · {view.language}")
    try:
        st.code(view.content, language=view.language, line_numbers=True)
    except Exception:  # noqa: BLE001 - any highlighter problem degrades to raw text
        st.text(view.content)
