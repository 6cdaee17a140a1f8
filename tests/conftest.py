"""Pytest configuration and fixtures"""
import itertools
import os
from collections import defaultdict
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test_anon_key")
os.environ.setdefault("EVENTHUB_CART_BACKEND", "memory")


class FakeQuery:
    """Chainable stand-in for a PostgREST query builder."""

    def __init__(self, store: "FakeSupabase", table: str):
        self.store = store
        self.table = table
        self.op = None
        self.payload = None
        self.filters = []

    def select(self, *args, **kwargs):
        self.op = self.op or "select"
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, *args, **kwargs):
        return self

    def limit(self, *args, **kwargs):
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    async def execute(self):
        self.store.calls.append((self.table, self.op))
        failure = self.store.failures.get((self.table, self.op))
        if failure is not None:
            raise failure

        rows = self.store.tables[self.table]
        if self.op == "insert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            created = [self.store.new_row(self.table, row) for row in payload]
            rows.extend(created)
            return SimpleNamespace(data=[dict(r) for r in created], count=None)
        if self.op == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(dict(row))
            return SimpleNamespace(data=updated, count=None)
        if self.op == "delete":
            removed = [row for row in rows if self._matches(row)]
            self.store.tables[self.table] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=removed, count=None)
        selected = [dict(row) for row in rows if self._matches(row)]
        return SimpleNamespace(data=selected, count=len(selected))


class FakeRpc:
    def __init__(self, store: "FakeSupabase", name: str, params: dict):
        self.store = store
        self.name = name
        self.params = params

    async def execute(self):
        self.store.calls.append(("rpc", self.name))
        failure = self.store.failures.get(("rpc", self.name))
        if failure is not None:
            raise failure
        order = self.store.new_row(
            "orders", {"user_id": self.params["p_user_id"], "total_price": self.params["p_total_price"]}
        )
        self.store.tables["orders"].append(order)
        for item in self.params["p_items"]:
            self.store.tables["order_items"].append(
                self.store.new_row("order_items", {"order_id": order["id"], **item})
            )
        return SimpleNamespace(data=dict(order), count=None)


class FakeSupabase:
    """In-memory remote store with per-(table, operation) failure injection."""

    def __init__(self):
        self.tables = defaultdict(list)
        self.failures = {}
        self.calls = []
        self._ids = itertools.count(1)
        self.auth = Mock()

    def new_row(self, table, row):
        created = dict(row)
        created.setdefault("id", f"{table}-{next(self._ids)}")
        if table == "orders":
            created.setdefault("created_at", "2025-06-01T12:00:00+00:00")
        return created

    def table(self, name):
        return FakeQuery(self, name)

    def rpc(self, name, params):
        return FakeRpc(self, name, params)


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def mock_supabase_client():
    """Mock async Supabase client (chainable query builder)."""
    client = Mock()

    table_mock = Mock()
    for method in ("select", "insert", "update", "delete", "eq", "order", "limit"):
        getattr(table_mock, method).return_value = table_mock
    table_mock.execute = AsyncMock(return_value=SimpleNamespace(data=[], count=0))

    client.table.return_value = table_mock
    return client


@pytest.fixture
def sample_event():
    """Sample event row"""
    return {
        "id": "A",
        "vendor_id": "vendor-1",
        "name": "Jazz Night",
        "description": "Live jazz",
        "date": "2025-07-01",
        "price": 20.00,
        "created_at": "2025-05-01T00:00:00Z",
    }


@pytest.fixture
def sample_profile():
    """Sample customer profile row"""
    return {
        "id": "U1",
        "full_name": "Test User",
        "role": "user",
        "business_name": None,
        "created_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def signed_in_session():
    """Session resolver stand-in with actor U1."""
    from eventhub.services.models import Profile

    session = Mock()
    session.actor_id = "U1"
    session.profile = Profile(id="U1", role="user")
    return session


@pytest.fixture
def anonymous_session():
    session = Mock()
    session.actor_id = None
    session.profile = None
    return session
