"""
Shared fixtures: an in-memory stand-in for the Supabase client.

`FakeSupabase` implements the small part of the client surface the project
uses (table query chains, storage buckets, auth) and lets tests inject a
failure for the next call against a given table or bucket.
"""

import sys
import threading
from pathlib import Path
from types import SimpleNamespace

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeQuery:
    def __init__(self, store, table):
        self._store = store
        self._table = table
        self._filters = []
        self._order = None
        self._limit = None
        self._insert = None

    def select(self, _columns="*"):
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, n):
        self._limit = n
        return self

    def insert(self, payload):
        self._insert = dict(payload)
        return self

    def execute(self):
        self._store.raise_if_failing(self._table)
        with self._store.lock:
            rows = self._store.tables.setdefault(self._table, [])
            if self._insert is not None:
                row = {"id": len(rows) + 1, **self._insert}
                rows.append(row)
                return SimpleNamespace(data=[dict(row)])
            # ids arrive as strings from query params; compare loosely
            result = [r for r in rows if all(str(r.get(c)) == str(v) for c, v in self._filters)]
        if self._order:
            column, desc = self._order
            result = sorted(result, key=lambda r: r.get(column) or "", reverse=desc)
        if self._limit:
            result = result[: self._limit]
        return SimpleNamespace(data=[dict(r) for r in result])


class FakeBucket:
    def __init__(self, store, name):
        self._store = store
        self._name = name

    def upload(self, path, file, file_options=None):
        self._store.raise_if_failing(self._name)
        with self._store.lock:
            self._store.buckets.setdefault(self._name, {})[path] = bytes(file)
        return SimpleNamespace(path=path, full_path=f"{self._name}/{path}")

    def download(self, path):
        self._store.raise_if_failing(self._name)
        objects = self._store.buckets.get(self._name, {})
        if path not in objects:
            raise RuntimeError(f"Object not found: {path}")
        return objects[path]

    def get_public_url(self, path):
        return f"https://fake.supabase.co/storage/v1/object/public/{self._name}/{path}"


class FakeStorage:
    def __init__(self, store):
        self._store = store

    def from_(self, bucket):
        return FakeBucket(self._store, bucket)


class FakeSubscription:
    def __init__(self, auth):
        self._auth = auth
        self.active = True

    def unsubscribe(self):
        self.active = False
        self._auth.callbacks.clear()


def make_session(user_id="user-1", email="jane.doe@example.com", token="token-1"):
    return SimpleNamespace(user=SimpleNamespace(id=user_id, email=email), access_token=token)


class FakeAuth:
    def __init__(self):
        self.current = None
        self.callbacks = []
        self.error = None

    def on_auth_state_change(self, callback):
        self.callbacks.append(callback)
        return FakeSubscription(self)

    def emit(self, event, session):
        self.current = session
        for cb in list(self.callbacks):
            cb(event, session)

    def get_session(self):
        if self.error:
            raise self.error
        return self.current

    def sign_in_with_password(self, credentials):
        if self.error:
            raise self.error
        session = make_session(email=credentials["email"])
        self.current = session
        return SimpleNamespace(session=session, user=session.user)

    def sign_up(self, credentials):
        if self.error:
            raise self.error
        # email confirmation pending: user but no session
        return SimpleNamespace(session=None, user=SimpleNamespace(id="new-user", email=credentials["email"]))

    def sign_out(self):
        if self.error:
            raise self.error
        self.current = None


class FakeSupabase:
    supabase_url = "https://fake.supabase.co"

    def __init__(self):
        self.lock = threading.Lock()
        self.tables = {}
        self.buckets = {}
        self.failures = {}
        self.storage = FakeStorage(self)
        self.auth = FakeAuth()

    def table(self, name):
        return FakeQuery(self, name)

    def fail_next(self, target, exc):
        self.failures[target] = exc

    def raise_if_failing(self, target):
        exc = self.failures.pop(target, None)
        if exc is not None:
            raise exc

    def rows(self, table):
        return self.tables.get(table, [])


@pytest.fixture
def fake_store():
    return FakeSupabase()


@pytest.fixture
def seeded_store(fake_store):
    fake_store.tables["strategies"] = [
        {
            "id": 1,
            "name": "Momentum Alpha",
            "author_email": "jane.doe@example.com",
            "category": "momentum",
            "file_name": "alpha.py",
            "file_path": "user-1/1700000000000-abc.py",
            "created_at": "2025-01-10T09:00:00+00:00",
        },
        {
            "id": 2,
            "name": "Pairs Notebook",
            "author_email": "jane.doe@example.com",
            "category": "pairs_trading",
            "file_name": "pairs.ipynb",
            "file_path": "user-1/1700000000001-def.ipynb",
            "created_at": "2025-03-01T12:00:00+00:00",
        },
        {
            "id": 3,
            "name": "Mean Revert",
            "author_email": "bob_smith7@example.com",
            "category": "mean_reversion",
            "file_name": "mr.py",
            "file_path": None,
            "created_at": "2025-02-01T08:00:00+00:00",
        },
    ]
    fake_store.tables["datasets"] = [
        {
            "id": 1,
            "name": "S&P Daily (2020)",
            "author_email": "bob_smith7@example.com",
            "category": "market-data",
            "file_name": "spx.csv",
            "file_path": "user-2/1700000000002-ghi.csv",
            "created_at": "2025-04-01T10:00:00+00:00",
        },
        {
            "id": 2,
            "name": "Sentiment",
            "author_email": "carol@example.com",
            "category": "sentiment-data",
            "file_name": "sent.json",
            "file_path": "user-3/1700000000003-jkl.json",
            "created_at": "2024-12-01T10:00:00+00:00",
        },
    ]
    fake_store.buckets["strategies"] = {
        "user-1/1700000000000-abc.py": b"def signal(prices):\n    return prices.pct_change()\n",
        "user-1/1700000000001-def.ipynb": (
            b'{"cells": [{"cell_type": "markdown", "source": ["# Pairs"]},'
            b' {"cell_type": "code", "source": ["import pandas as pd\\n", "x = 1"]},'
            b' {"cell_type": "code", "source": "print(x)"}]}'
        ),
    }
    fake_store.buckets["datasets"] = {
        "user-2/1700000000002-ghi.csv": b"date,close\n2020-01-02,3257.85\n",
    }
    return fake_store
