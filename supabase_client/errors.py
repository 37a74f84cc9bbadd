"""
supabase_client/errors.py
-------------------------
Structured failures for everything that crosses the Supabase boundary.

Callers never look at provider error text: helpers classify each failure
once into an `ErrorKind`, and presentation code maps kinds (and the Postgres
code, when there is one) to messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"


# Postgres / PostgREST codes we know how to classify
PG_UNIQUE_VIOLATION = "23505"
PG_FOREIGN_KEY_VIOLATION = "23503"
PG_NOT_NULL_VIOLATION = "23502"
PG_CHECK_VIOLATION = "23514"
PG_INVALID_TEXT = "22P02"
PGRST_NO_ROWS = "PGRST116"

_CODE_KINDS = {
    PG_UNIQUE_VIOLATION: ErrorKind.CONFLICT,
    PG_FOREIGN_KEY_VIOLATION: ErrorKind.VALIDATION,
    PG_NOT_NULL_VIOLATION: ErrorKind.VALIDATION,
    PG_CHECK_VIOLATION: ErrorKind.VALIDATION,
    PG_INVALID_TEXT: ErrorKind.VALIDATION,
    PGRST_NO_ROWS: ErrorKind.NOT_FOUND,
}

HTTP_STATUS = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.CONFLICT: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.TRANSPORT: 502,
}


class StoreError(Exception):
    """A classified failure from the hosted store, storage or auth service."""

    def __init__(self, kind: ErrorKind, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]

    def as_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message, "code": self.code}

    def __repr__(self) -> str:
        return f"StoreError(kind={self.kind.value!r}, code={self.code!r}, message={self.message!r})"


def _kind_from_message(message: str) -> Optional[tuple[ErrorKind, Optional[str]]]:
    text = message.lower()
    if "duplicate key" in text:
        return ErrorKind.CONFLICT, PG_UNIQUE_VIOLATION
    if "foreign key" in text:
        return ErrorKind.VALIDATION, PG_FOREIGN_KEY_VIOLATION
    if "not null" in text or "null value" in text:
        return ErrorKind.VALIDATION, PG_NOT_NULL_VIOLATION
    return None


def classify(exc: BaseException) -> StoreError:
    """Translate any provider exception into a StoreError."""
    if isinstance(exc, StoreError):
        return exc

    if isinstance(exc, APIError):
        message = exc.message or str(exc)
        code = exc.code
        kind = _CODE_KINDS.get(code or "")
        if kind is None:
            guessed = _kind_from_message(message)
            if guessed:
                kind, code = guessed[0], code or guessed[1]
            else:
                kind = ErrorKind.TRANSPORT
        return StoreError(kind, message, code)

    if isinstance(exc, httpx.HTTPError):
        return StoreError(ErrorKind.TRANSPORT, f"Network error: {exc}")

    # storage3 / gotrue raise their own exception types across versions;
    # all of them carry a `message` attribute
    message = getattr(exc, "message", None) or str(exc) or exc.__class__.__name__
    guessed = _kind_from_message(str(message))
    if guessed:
        return StoreError(guessed[0], str(message), guessed[1])
    return StoreError(ErrorKind.TRANSPORT, str(message))


def user_message(error: StoreError) -> str:
    """Friendly text for a failed metadata insert."""
    if error.code == PG_FOREIGN_KEY_VIOLATION:
        return "Invalid user session. Please log in again and try."
    if error.code == PG_NOT_NULL_VIOLATION:
        return "Required fields are missing. Please check your form and try again."
    if error.kind == ErrorKind.CONFLICT:
        return "This entry already exists. Please change it and try again."
    return f"Database error: {error.message}"


def error_from_response(resp: Any) -> StoreError:
    """
    Rebuild a StoreError from a failed backend HTTP response.

    Uses the backend's `{"detail", "kind", "code"}` body when there is one;
    bodies that are not JSON (proxy pages) fall back to the status code.
    """
    try:
        body = resp.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}
    try:
        kind = ErrorKind(body.get("kind"))
    except ValueError:
        kind = ErrorKind.NOT_FOUND if resp.status_code == 404 else ErrorKind.TRANSPORT
    detail = body.get("detail") or f"HTTP {resp.status_code}: {str(getattr(resp, 'text', ''))[:100]}"
    return StoreError(kind, str(detail), body.get("code"))
