# supabase_client/helpers.py
"""
Utility layer for interacting with Supabase.

Features
--------
- Thin wrappers for table reads/inserts and storage upload/download.
- Every provider failure is re-raised as a classified `StoreError`.
- Optional verbose debug logging for diagnostics.
- Client is injectable; defaults to a fresh anon client.

Used by the fetchers, the upload flow, the detail viewer and the backend.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

from core.ui_config import DEBUG
from supabase_client.config import get_supabase_client
from supabase_client.errors import ErrorKind, StoreError, classify


def _log(debug: Optional[bool], message: str) -> None:
    if DEBUG if debug is None else debug:
        print(f"[Supabase] {message}")


def insert_record(
    table: str,
    data: Dict[str, Any],
    client=None,
    debug: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Insert one record and return the stored row.

    Parameters
    ----------
    table : str
        Target table name in Supabase.
    data : dict
        Column names and values; `created_at` is filled in when missing.
    client : supabase.Client, optional
        Client to use (the signed-in user's client for RLS-protected inserts).

    Raises
    ------
    StoreError
        Classified insert failure (constraint violations, network errors).
    """
    sb = client or get_supabase_client()
    payload = dict(data)
    payload.setdefault("created_at", dt.datetime.now(dt.timezone.utc).isoformat())

    _log(debug, f"→ Inserting into '{table}' …")
    _log(debug, f"Payload keys: {list(payload.keys())}")
    try:
        res = sb.table(table).insert(payload).execute()
    except Exception as e:
        err = classify(e)
        _log(debug, f"⚠️ Insert failed: {err!r}")
        raise err from e

    rows = res.data or []
    _log(debug, f"✅ Insert success → {len(rows)} row(s)")
    return rows[0] if rows else payload


def fetch_rows(
    table: str,
    columns: str = "*",
    author: Optional[str] = None,
    limit: Optional[int] = None,
    client=None,
    debug: Optional[bool] = None,
) -> List[Dict[str, Any]]:
    """
    Fetch rows newest first, optionally only those of one author (`author_email`).
    """
    sb = client or get_supabase_client()
    _log(debug, f"→ Fetching '{columns}' from '{table}'" + (f" for {author}" if author else ""))
    try:
        query = sb.table(table).select(columns)
        if author is not None:
            query = query.eq("author_email", author)
        query = query.order("created_at", desc=True)
        if limit:
            query = query.limit(limit)
        res = query.execute()
    except Exception as e:
        err = classify(e)
        _log(debug, f"⚠️ Fetch failed: {err!r}")
        raise err from e

    records = res.data or []
    _log(debug, f"← Got {len(records)} records")
    return records


def fetch_by_id(table: str, row_id: Any, client=None, debug: Optional[bool] = None) -> Dict[str, Any]:
    """Return one row by primary key or raise StoreError(NOT_FOUND)."""
    sb = client or get_supabase_client()
    _log(debug, f"→ Fetching {table}#{row_id}")
    try:
        res = sb.table(table).select("*").eq("id", row_id).limit(1).execute()
    except Exception as e:
        err = classify(e)
        _log(debug, f"⚠️ Fetch failed: {err!r}")
        raise err from e

    rows = res.data or []
    if not rows:
        raise StoreError(ErrorKind.NOT_FOUND, f"No row with id {row_id} in '{table}'.")
    return rows[0]


# --------------------------------------------------------------------------- #
# Storage
# --------------------------------------------------------------------------- #

def upload_object(
    bucket: str,
    path: str,
    data: bytes,
    content_type: Optional[str] = None,
    client=None,
    debug: Optional[bool] = None,
) -> str:
    """Upload bytes to `bucket/path` and return the stored path."""
    sb = client or get_supabase_client()
    options = {"content-type": content_type or "application/octet-stream"}
    _log(debug, f"→ Uploading {len(data)} bytes to '{bucket}/{path}'")
    try:
        res = sb.storage.from_(bucket).upload(path=path, file=data, file_options=options)
    except Exception as e:
        err = classify(e)
        # storage failures are never constraint problems from our point of view
        err.kind = ErrorKind.TRANSPORT
        _log(debug, f"⚠️ Upload failed: {err!r}")
        raise err from e

    stored = getattr(res, "path", None) or path
    _log(debug, f"✅ Stored at '{bucket}/{stored}'")
    return stored


def download_object(bucket: str, path: str, client=None, debug: Optional[bool] = None) -> bytes:
    """Download raw bytes from `bucket/path`."""
    sb = client or get_supabase_client()
    _log(debug, f"→ Downloading '{bucket}/{path}'")
    try:
        return sb.storage.from_(bucket).download(path)
    except Exception as e:
        err = classify(e)
        err.kind = ErrorKind.TRANSPORT
        _log(debug, f"⚠️ Download failed: {err!r}")
        raise err from e


def public_url(bucket: str, path: str, client=None) -> str:
    """Public URL of an object in an already-public bucket."""
    sb = client or get_supabase_client()
    try:
        return sb.storage.from_(bucket).get_public_url(path)
    except Exception as e:
        err = classify(e)
        err.kind = ErrorKind.TRANSPORT
        raise err from e


def test_connection(debug: bool = True) -> Optional[str]:
    """
    Verify Supabase client connectivity.

    Returns
    -------
    Optional[str]
        Supabase project URL if success, None if failure.
    """
    try:
        sb = get_supabase_client()
        _log(debug, f"✅ Connection OK → {sb.supabase_url}")
        return sb.supabase_url
    except Exception as e:
        _log(debug, f"❌ Connection failed: {e}")
        return None
