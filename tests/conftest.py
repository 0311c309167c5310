"""
Pytest configuration and fixtures for the finance tracker tests.
"""

import os
import threading
import uuid
from datetime import datetime, timezone

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("SESSION_COOKIE_SECURE", "false")
os.environ.setdefault("FRONTEND_ORIGIN", "http://localhost:3000,https://spendx.vercel.app")

import pytest
from fastapi.testclient import TestClient
from google.api_core.exceptions import AlreadyExists

from api.deps import get_db
from client.api import FinanceAPI
from client.state import FinanceState
from main import app

API_BASE_URL = "http://testserver/api/v1"


# =============================================================================
# In-memory Firestore double
# =============================================================================

class FakeSnapshot:
    def __init__(self, reference, data):
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocumentReference:
    def __init__(self, collection, doc_id):
        self.collection = collection
        self.id = doc_id

    def get(self):
        return FakeSnapshot(self, self.collection.docs.get(self.id))

    def set(self, data):
        self.collection.docs[self.id] = dict(data)

    def create(self, data):
        with self.collection.lock:
            if self.id in self.collection.docs:
                raise AlreadyExists(f"Document already exists: {self.collection.name}/{self.id}")
            self.collection.docs[self.id] = dict(data)

    def delete(self):
        self.collection.docs.pop(self.id, None)


class FakeQuery:
    def __init__(self, collection, filters=(), limit=None):
        self.collection = collection
        self.filters = list(filters)
        self._limit = limit

    def where(self, field_path=None, op_string=None, value=None, *, filter=None):
        if filter is not None:
            field_path, op_string, value = filter.field_path, filter.op_string, filter.value
        assert op_string == "==", f"unsupported operator {op_string}"
        return FakeQuery(self.collection, [*self.filters, (field_path, value)], self._limit)

    def limit(self, count):
        return FakeQuery(self.collection, self.filters, count)

    def stream(self):
        matched = [
            FakeSnapshot(FakeDocumentReference(self.collection, doc_id), data)
            for doc_id, data in list(self.collection.docs.items())
            if all(data.get(field) == value for field, value in self.filters)
        ]
        if self._limit is not None:
            matched = matched[: self._limit]
        return iter(matched)


class FakeCollection(FakeQuery):
    def __init__(self, name):
        self.name = name
        self.docs = {}
        self.lock = threading.Lock()
        super().__init__(self)

    def document(self, doc_id=None):
        return FakeDocumentReference(self, doc_id or uuid.uuid4().hex)

    def add(self, data):
        ref = self.document()
        ref.set(data)
        return datetime.now(timezone.utc), ref


class FakeFirestore:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
def make_client(fake_db):
    """Factory for HTTP clients with their own cookie jar over the shared fake db."""
    app.dependency_overrides[get_db] = lambda: fake_db
    clients = []

    def _make() -> TestClient:
        client = TestClient(app, base_url=API_BASE_URL)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


@pytest.fixture
def registered_client(client, sample_user) -> TestClient:
    """Client that holds a session cookie for a freshly registered user."""
    response = client.post("register", json=sample_user())
    assert response.status_code == 201
    return client


@pytest.fixture
def api(client) -> FinanceAPI:
    return FinanceAPI(http=client)


@pytest.fixture
def state(api) -> FinanceState:
    return FinanceState(api)


@pytest.fixture
def sample_user():
    """Factory for register payloads."""

    def _make(**overrides) -> dict:
        user = {"name": "Olena", "email": "olena@example.com", "password": "secret123"}
        user.update(overrides)
        return user

    return _make


@pytest.fixture
def sample_record():
    """Factory for income/expense payloads."""

    def _make(**overrides) -> dict:
        record = {
            "title": "Salary",
            "amount": 1500.0,
            "category": "salary",
            "description": "October salary",
            "date": "2026-10-01",
        }
        record.update(overrides)
        return record

    return _make
