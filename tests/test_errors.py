from types import SimpleNamespace

import httpx
from postgrest.exceptions import APIError

from supabase_client.errors import ErrorKind, StoreError, classify, error_from_response, user_message


def api_error(message, code=None):
    return APIError({"message": message, "code": code, "hint": None, "details": None})


def test_classify_by_postgres_code():
    assert classify(api_error("dup", "23505")).kind == ErrorKind.CONFLICT
    assert classify(api_error("fk", "23503")).kind == ErrorKind.VALIDATION
    assert classify(api_error("bad int", "22P02")).kind == ErrorKind.VALIDATION
    assert classify(api_error("no rows", "PGRST116")).kind == ErrorKind.NOT_FOUND


def test_classify_falls_back_to_message():
    err = classify(api_error('duplicate key value violates unique constraint "strategies_name_key"'))
    assert err.kind == ErrorKind.CONFLICT
    assert err.code == "23505"
    assert classify(api_error("something odd")).kind == ErrorKind.TRANSPORT


def test_classify_transport_and_passthrough():
    assert classify(httpx.ConnectError("refused")).kind == ErrorKind.TRANSPORT
    original = StoreError(ErrorKind.NOT_FOUND, "gone")
    assert classify(original) is original
    assert classify(RuntimeError("bucket offline")).message == "bucket offline"


def test_status_codes_and_dict():
    err = StoreError(ErrorKind.CONFLICT, "exists", "23505")
    assert err.status_code == 409
    assert err.as_dict() == {"kind": "conflict", "message": "exists", "code": "23505"}
    assert StoreError(ErrorKind.TRANSPORT, "x").status_code == 502


def test_user_messages():
    assert user_message(classify(api_error("fk", "23503"))) == "Invalid user session. Please log in again and try."
    assert user_message(classify(api_error("nn", "23502"))).startswith("Required fields are missing")
    assert user_message(classify(api_error("dup", "23505"))).startswith("This entry already exists")
    assert user_message(StoreError(ErrorKind.TRANSPORT, "timeout")) == "Database error: timeout"


def test_error_from_backend_body():
    body = {"detail": "This entry already exists.", "kind": "conflict", "code": "23505"}
    err = error_from_response(SimpleNamespace(status_code=409, json=lambda: body, text=""))
    assert (err.kind, err.code, err.message) == (ErrorKind.CONFLICT, "23505", "This entry already exists.")

    unknown = error_from_response(SimpleNamespace(status_code=500, json=lambda: ["odd"], text="boom"))
    assert unknown.kind == ErrorKind.TRANSPORT
    assert unknown.message == "HTTP 500: boom"
