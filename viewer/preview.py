"""
QuantHub — Detail viewer
------------------------
Fetch one strategy/dataset row, download its file and turn the bytes into
something a code block can show.

Notebooks are reduced to their code cells; everything else is shown as
text. The highlighting language is picked from the file extension; the
Streamlit layer falls back to plain preformatted text if highlighting fails.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.ui_config import DATASET_BUCKET, DATASET_TABLE, STRATEGY_BUCKET, STRATEGY_TABLE
from supabase_client.helpers import download_object, fetch_by_id

LANGUAGES = {
    ".py": "python",
    ".ipynb": "python",
    ".json": "json",
    ".md": "markdown",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "jsx",
    ".sql": "sql",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".csv": "text",
    ".tsv": "text",
}

MIME_TYPES = {
    ".json": "application/json",
    ".ipynb": "application/json",
    ".md": "text/markdown",
    ".sql": "application/sql",
    ".csv": "text/csv",
    ".py": "text/x-python",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xls": "application/vnd.ms-excel",
}

SOURCES = {
    "strategy": (STRATEGY_TABLE, STRATEGY_BUCKET),
    "dataset": (DATASET_TABLE, DATASET_BUCKET),
}


def _ext(file_name: Optional[str]) -> str:
    return os.path.splitext((file_name or "").lower())[1]


def highlight_language(file_name: Optional[str]) -> str:
    return LANGUAGES.get(_ext(file_name), "text")


def download_mime(file_name: Optional[str]) -> str:
    return MIME_TYPES.get(_ext(file_name), "text/plain")


def notebook_code(text: str) -> str:
    """
    Code cells of a notebook, each headed `# In [i]`.

    Raises ValueError when `text` is not notebook JSON. A notebook with no
    code cells comes back pretty-printed.
    """
    notebook = json.loads(text)
    if not isinstance(notebook, dict):
        raise ValueError("Notebook JSON must be an object.")
    code_cells = [c for c in notebook.get("cells") or [] if isinstance(c, dict) and c.get("cell_type") == "code"]
    if not code_cells:
        return json.dumps(notebook, indent=2)

    blocks = []
    for idx, cell in enumerate(code_cells):
        source = cell.get("source")
        src = "".join(source) if isinstance(source, list) else str(source if source is not None else "")
        blocks.append(f"# In [{idx}]\n{src}")
    return "\n\n".join(blocks)


def preview_text(file_name: Optional[str], data: bytes) -> str:
    text = data.decode("utf-8", errors="replace")
    if _ext(file_name) == ".ipynb":
        try:
            return notebook_code(text)
        except ValueError:
            return text
    return text


@dataclass
class DetailView:
    row: Dict[str, Any]
    content: str = ""
    language: str = "text"
    data: Optional[bytes] = None

    @property
    def file_name(self) -> Optional[str]:
        return self.row.get("file_name")

    @property
    def mime(self) -> str:
        return download_mime(self.file_name)

    def preview_dict(self) -> Dict[str, Any]:
        return {"file_name": self.file_name, "language": self.language, "content": self.content}


def load_detail(kind: str, row_id: Any, client=None, with_file: bool = True) -> DetailView:
    """
    Row + file preview for `kind` ("strategy" or "dataset").

    Raises StoreError(NOT_FOUND) for an unknown id and StoreError(TRANSPORT)
    if the file cannot be downloaded.
    """
    table, bucket = SOURCES[kind]
    row = fetch_by_id(table, row_id, client=client)
    view = DetailView(row=row, language=highlight_language(row.get("file_name")))

    path = row.get("file_path")
    if with_file and path:
        view.data = download_object(bucket, path, client=client)
        view.content = preview_text(row.get("file_name"), view.data)
    return view
