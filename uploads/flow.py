"""
QuantHub — Upload flow
----------------------
Drives one submission of the strategy or dataset upload form:

    editing -> validating -> uploading-file -> persisting-row -> success | failed

- Validation fails closed and never touches the network.
- The file is stored first, then the metadata row is inserted.
- There is no rollback: when the insert fails the stored object is left in
  the bucket (logged with its path).
- Progress is simulated (+10 every 200 ms up to 90, 100 on success). The
  storage client does not report transfer progress.
"""

from __future__ import annotations

import datetime as dt
import os
import secrets
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from core.session import AuthSession
from core.ui_config import (
    DATASET_BUCKET,
    DATASET_REDIRECT_DELAY,
    DATASET_TABLE,
    STRATEGY_BUCKET,
    STRATEGY_REDIRECT_DELAY,
    STRATEGY_TABLE,
)
from supabase_client.errors import StoreError, user_message
from supabase_client.helpers import insert_record, public_url, upload_object
from uploads.validation import (
    UploadedFile,
    headline,
    parse_number,
    parse_tags,
    validate_dataset_form,
    validate_strategy_form,
)


class UploadState(str, Enum):
    EDITING = "editing"
    VALIDATING = "validating"
    UPLOADING_FILE = "uploading-file"
    PERSISTING_ROW = "persisting-row"
    SUCCESS = "success"
    FAILED = "failed"


class UploadKind(str, Enum):
    STRATEGY = "strategy"
    DATASET = "dataset"


@dataclass
class UploadOutcome:
    state: UploadState
    message: str = ""
    errors: Dict[str, str] = field(default_factory=dict)
    auth_required: bool = False
    file_path: Optional[str] = None
    row: Optional[Dict[str, Any]] = None
    redirect_to: Optional[str] = None
    redirect_delay: float = 0.0

    @property
    def ok(self) -> bool:
        return self.state == UploadState.SUCCESS


# --------------------------------------------------------------------------- #
# Simulated progress
# --------------------------------------------------------------------------- #

class SimulatedProgress:
    """
    Timer-driven percentage: `step` every `interval` seconds up to `ceiling`.

    `prepare_thread` is called with the worker thread before it starts
    (Streamlit uses it to attach the script context).
    """

    def __init__(
        self,
        on_update: Callable[[int], None],
        interval: float = 0.2,
        step: int = 10,
        ceiling: int = 90,
        prepare_thread: Optional[Callable[[threading.Thread], Any]] = None,
    ):
        self.on_update = on_update
        self.interval = interval
        self.step = step
        self.ceiling = ceiling
        self.value = 0
        self.reached_ceiling = threading.Event()
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._prepare_thread = prepare_thread
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        self._emit(0)
        self._thread = threading.Thread(target=self._run, name="upload-progress", daemon=True)
        if self._prepare_thread is not None:
            self._prepare_thread(self._thread)
        self._thread.start()

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            with self._lock:
                if self._stop.is_set():
                    return
                nxt = min(self.value + self.step, self.ceiling)
                self._emit(nxt)
                if nxt >= self.ceiling:
                    self.reached_ceiling.set()
                    return

    def _emit(self, value: int) -> None:
        self.value = value
        self.on_update(value)

    def stop(self) -> None:
        with self._lock:
            self._stop.set()

    def complete(self) -> None:
        self.stop()
        with self._lock:
            self._emit(100)

    def reset(self) -> None:
        self.stop()
        with self._lock:
            self._emit(0)


def _noop(_value: int) -> None:
    return None


# --------------------------------------------------------------------------- #
# Paths & rows
# --------------------------------------------------------------------------- #

def storage_path(user_id: str, file_name: str, now_ms: int, token: str) -> str:
    """`<user>/<millis>-<token>.<ext>`: per-user namespace, collision-resistant name."""
    ext = os.path.splitext(file_name)[1].lstrip(".").lower() or "bin"
    return f"{user_id}/{now_ms}-{token}.{ext}"


def strategy_row(form: Dict[str, Any], file: UploadedFile, path: str, session: AuthSession, now: str) -> Dict[str, Any]:
    return {
        "user_id": session.user_id,
        "author_email": session.email,
        "name": str(form.get("name") or "").strip(),
        "description": str(form.get("description") or "").strip(),
        "category": form.get("category"),
        "tags": parse_tags(form.get("tags")),
        "risk_level": form.get("risk_level") or None,
        "expected_return": parse_number(form.get("expected_return")),
        "max_drawdown": parse_number(form.get("max_drawdown")),
        "strategy_type": form.get("strategy_type") or None,
        "time_horizon": form.get("time_horizon") or None,
        "minimum_capital": parse_number(form.get("minimum_capital")),
        "file_path": path,
        "file_name": file.name,
        "file_size": file.size,
        "created_at": now,
        "updated_at": now,
        "is_public": True,
        "downloads": 0,
        "stars": 0,
        "forks": 0,
        "status": "active",
    }


def dataset_row(form: Dict[str, Any], file: UploadedFile, path: str, session: AuthSession, now: str, url: Optional[str]) -> Dict[str, Any]:
    return {
        "author_id": session.user_id,
        "author_email": session.email,
        "name": str(form.get("name") or "").strip(),
        "description": str(form.get("description") or "").strip(),
        "category": form.get("category"),
        "data_type": form.get("data_type"),
        "time_frame": form.get("time_frame"),
        "assets": str(form.get("assets") or "").strip() or None,
        "tags": parse_tags(form.get("tags")),
        "file_path": path,
        "file_url": url,
        "file_name": file.name,
        "file_size": file.size,
        "created_at": now,
    }


_KIND_SETTINGS = {
    UploadKind.STRATEGY: {
        "table": STRATEGY_TABLE,
        "bucket": STRATEGY_BUCKET,
        "validate": validate_strategy_form,
        "redirect": "/strategies",
        "delay": STRATEGY_REDIRECT_DELAY,
        "success": "Strategy uploaded successfully!",
        "login": "Please log in to upload a strategy",
    },
    UploadKind.DATASET: {
        "table": DATASET_TABLE,
        "bucket": DATASET_BUCKET,
        "validate": validate_dataset_form,
        "redirect": "/datasets",
        "delay": DATASET_REDIRECT_DELAY,
        "success": "Dataset uploaded successfully!",
        "login": "Please log in to upload a dataset",
    },
}


# --------------------------------------------------------------------------- #
# Flow
# --------------------------------------------------------------------------- #

class UploadFlow:
    """One upload form; `submit` runs a full attempt and reports the outcome."""

    def __init__(
        self,
        kind: UploadKind,
        client,
        session: Optional[AuthSession],
        progress: Optional[SimulatedProgress] = None,
        clock: Callable[[], float] = time.time,
        token_factory: Callable[[], str] = lambda: secrets.token_hex(6),
        on_state: Optional[Callable[[UploadState], None]] = None,
        debug: Optional[bool] = None,
    ):
        self.kind = UploadKind(kind)
        self.settings = _KIND_SETTINGS[self.kind]
        self.client = client
        self.session = session
        self.progress = progress or SimulatedProgress(_noop)
        self.clock = clock
        self.token_factory = token_factory
        self.on_state = on_state
        self.debug = debug
        self.state = UploadState.EDITING
        self.history: List[UploadState] = [UploadState.EDITING]

    def _enter(self, state: UploadState) -> None:
        self.state = state
        self.history.append(state)
        if self.on_state is not None:
            self.on_state(state)

    def _finish(self, state: UploadState, **kwargs) -> UploadOutcome:
        self._enter(state)
        return UploadOutcome(state=state, **kwargs)

    def submit(self, form: Dict[str, Any], file: Optional[UploadedFile]) -> UploadOutcome:
        if self.session is None:
            return UploadOutcome(state=UploadState.EDITING, message=self.settings["login"], auth_required=True)

        self._enter(UploadState.VALIDATING)
        errors = self.settings["validate"](form, file)
        if errors:
            return self._finish(UploadState.EDITING, message=headline(errors), errors=errors)

        bucket = self.settings["bucket"]
        path = storage_path(self.session.user_id, file.name, int(self.clock() * 1000), self.token_factory())

        self._enter(UploadState.UPLOADING_FILE)
        self.progress.start()
        try:
            path = upload_object(bucket, path, file.data, file.content_type, client=self.client, debug=self.debug)
        except StoreError as e:
            self.progress.reset()
            return self._finish(UploadState.FAILED, message=f"Upload failed: {e.message}")

        self._enter(UploadState.PERSISTING_ROW)
        now = dt.datetime.fromtimestamp(self.clock(), dt.timezone.utc).isoformat()
        try:
            if self.kind == UploadKind.STRATEGY:
                row = strategy_row(form, file, path, self.session, now)
            else:
                row = dataset_row(form, file, path, self.session, now, public_url(bucket, path, client=self.client))
            stored = insert_record(self.settings["table"], row, client=self.client, debug=self.debug)
        except StoreError as e:
            self.progress.reset()
            print(f"[Upload] ⚠️ Row not saved; '{bucket}/{path}' left in storage ({e.kind.value}).")
            return self._finish(UploadState.FAILED, message=user_message(e), file_path=path)

        self.progress.complete()
        return self._finish(
            UploadState.SUCCESS,
            message=self.settings["success"],
            file_path=path,
            row=stored,
            redirect_to=self.settings["redirect"],
            redirect_delay=self.settings["delay"],
        )
