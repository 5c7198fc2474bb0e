"""
Shared test fixtures.

Provides an in-memory stand-in for the Supabase client so services can be
exercised without a database.
"""

import os
import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings are loaded at import time
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import pytest
from unittest.mock import patch
from datetime import datetime
from typing import Generator, Optional

# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data=None, count: int = None):
        self.data = data if data is not None else []
        if count is not None:
            self.count = count
        elif isinstance(self.data, list):
            self.count = len(self.data)
        else:
            self.count = 1


class MockSupabaseQuery:
    """
    Mock Supabase query builder with chainable methods.

    eq() filters are applied when the query executes, so updates only touch
    matching rows and an update for an unknown id returns no data.
    """

    def __init__(self, table: "MockSupabaseTable", action: str = "select", payload=None):
        self._table = table
        self._action = action
        self._payload = payload
        self._filters: list[tuple[str, object]] = []
        self._range: Optional[tuple[int, int]] = None
        self._limit: Optional[int] = None
        self._is_single = False

    def select(self, *args, **kwargs):
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def single(self):
        self._is_single = True
        return self

    def order(self, column, **kwargs):
        return self

    def range(self, start, end):
        self._range = (start, end)
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _matches(self, row: dict) -> bool:
        return all(row.get(column) == value for column, value in self._filters)

    def execute(self) -> MockSupabaseResponse:
        client = self._table.client
        client.calls.append({
            "table": self._table.name,
            "action": self._action,
            "payload": self._payload,
            "filters": list(self._filters),
        })

        if self._table.error is not None:
            raise self._table.error

        now = datetime.utcnow().isoformat() + "Z"

        if self._action == "insert":
            items = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = []
            for item in items:
                row = dict(item)
                row["id"] = "test-uuid-123"
                row["created_at"] = now
                row["updated_at"] = now
                row.setdefault("active", True)
                inserted.append(row)
            self._table.rows.extend(inserted)
            return MockSupabaseResponse(data=inserted)

        matched = [row for row in self._table.rows if self._matches(row)]

        if self._action == "update":
            for row in matched:
                row.update(self._payload)
                row["updated_at"] = now
            return MockSupabaseResponse(data=[dict(row) for row in matched])

        total = self._table.count if self._table.count is not None else len(matched)
        data = [dict(row) for row in matched]
        if self._range is not None:
            start, end = self._range
            data = data[start:end + 1]
        if self._limit is not None:
            data = data[:self._limit]

        if self._is_single:
            return MockSupabaseResponse(data=data[0] if data else None, count=1 if data else 0)

        return MockSupabaseResponse(data=data, count=total)


class MockSupabaseTable:
    """Mock Supabase table with configurable responses."""

    def __init__(self, client: "MockSupabaseClient", name: str):
        self.client = client
        self.name = name
        self.rows: list[dict] = []
        self.count: Optional[int] = None
        self.error: Optional[BaseException] = None

    def select(self, *args, **kwargs):
        return MockSupabaseQuery(self, "select")

    def insert(self, data):
        return MockSupabaseQuery(self, "insert", data)

    def update(self, data):
        return MockSupabaseQuery(self, "update", data)

    def delete(self):
        return MockSupabaseQuery(self, "delete")


class MockStorageBucket:
    """Mock Supabase Storage bucket."""

    def __init__(self, storage: "MockStorage", name: str):
        self.storage = storage
        self.name = name

    def upload(self, path, file, file_options=None):
        if self.storage.error is not None:
            raise self.storage.error
        self.storage.uploads.append({
            "bucket": self.name,
            "path": path,
            "content": file,
            "file_options": file_options or {},
        })
        return {"Key": f"{self.name}/{path}"}

    def get_public_url(self, path, options=None):
        return f"https://test.supabase.co/storage/v1/object/public/{self.name}/{path}"


class MockStorage:
    """Mock Supabase Storage client."""

    def __init__(self):
        self.uploads: list[dict] = []
        self.error: Optional[BaseException] = None

    def from_(self, bucket: str) -> MockStorageBucket:
        return MockStorageBucket(self, bucket)


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self._tables: dict[str, MockSupabaseTable] = {}
        self.calls: list[dict] = []
        self.storage = MockStorage()

    def _get_table(self, name: str) -> MockSupabaseTable:
        if name not in self._tables:
            self._tables[name] = MockSupabaseTable(self, name)
        return self._tables[name]

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        table = self._get_table(table_name)
        table.rows = [dict(row) for row in data]
        table.count = count

    def set_table_error(self, table_name: str, error: BaseException):
        """Make every query on a table raise error."""
        self._get_table(table_name).error = error

    def get_table_data(self, table_name: str) -> list[dict]:
        return self._get_table(table_name).rows

    def calls_for(self, table_name: str, action: Optional[str] = None) -> list[dict]:
        """Executed queries against a table, optionally filtered by action."""
        return [
            call for call in self.calls
            if call["table"] == table_name and (action is None or call["action"] == action)
        ]

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        return self._get_table(name)


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("brands", [
                {"id": "1", "name": "Acme", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("brands", [...])
            # Now any code using get_supabase_client() gets the mock
    """
    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("services.brand_service.get_supabase_client", return_value=mock_supabase):
            with patch("services.image_storage_service.get_supabase_client", return_value=mock_supabase):
                with patch("services.image_storage_service.get_admin_client", return_value=None):
                    yield mock_supabase


@pytest.fixture
def sample_brand_data() -> dict:
    """Sample stored brand row for testing."""
    return {
        "id": "brand-uuid-1",
        "name": "Acme Tiles",
        "slug": "acme-tiles",
        "description": "Porcelain tiles since 1962",
        "logo": "https://cdn.example.com/acme/logo.png",
        "origin_country": "Spain",
        "established_year": "1962",
        "specialty": "Porcelain",
        "active": True,
        "created_at": "2025-12-05T10:00:00Z",
        "updated_at": "2025-12-05T10:00:00Z"
    }


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client_with_mock_db(mock_db, mock_supabase):
    """
    Create FastAPI test client with mocked database.

    Service singletons are reset so routes build services on the mock.

    Usage:
        def test_endpoint(test_client_with_mock_db, mock_supabase):
            mock_supabase.set_table_data("brands", [...])
            response = test_client_with_mock_db.get("/api/brands")
    """
    from fastapi.testclient import TestClient
    import services.brand_service as brand_service_module
    import services.image_storage_service as image_service_module
    from main import app

    brand_service_module._service = None
    image_service_module._service = None
    try:
        yield TestClient(app)
    finally:
        brand_service_module._service = None
        image_service_module._service = None
