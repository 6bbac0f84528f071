"""Shared pytest conftest for dbops-service tests.

ClickHouse is replaced by an in-memory fake that records every statement and
answers SELECTs from canned rows.
"""

import os

os.environ["INTERNAL_API_KEY"] = "test-internal-key"
os.environ["ENCRYPTION_KEY"] = "0123456789abcdef0123456789abcdef"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.clickhouse.client import ClickHouseClient, ClickHouseError  # noqa: E402
from app.clickhouse.row import Row  # noqa: E402
from app.connection import get_client  # noqa: E402
from app.main import app  # noqa: E402


class FakeClickHouseClient(ClickHouseClient):
    """Records statements; SELECTs return the rows of the first matching fragment."""

    def __init__(self):
        self.statements: list[str] = []
        self.executed: list[str] = []
        self._responses: list[tuple[str, list[dict]]] = []
        self._failures: list[tuple[str, str]] = []

    def respond(self, fragment: str, *rows: dict) -> "FakeClickHouseClient":
        self._responses.append((fragment, list(rows)))
        return self

    def fail(self, fragment: str, message: str = "Code: 497. DB::Exception: ACCESS_DENIED") -> "FakeClickHouseClient":
        self._failures.append((fragment, message))
        return self

    def _check_failure(self, sql: str) -> None:
        for fragment, message in self._failures:
            if fragment in sql:
                raise ClickHouseError(message, "PERMISSION_DENIED")

    async def select(self, sql, callback):
        self.statements.append(sql)
        self._check_failure(sql)
        for fragment, rows in self._responses:
            if fragment in sql:
                for data in rows:
                    callback(Row(data))
                return

    async def exec(self, sql):
        self.statements.append(sql)
        self._check_failure(sql)
        self.executed.append(sql)


# ── Fixtures ──────────────────────────────────────────────

@pytest.fixture
def fake_ch():
    return FakeClickHouseClient()


@pytest.fixture
def api(fake_ch):
    """TestClient wired to the fake ClickHouse client."""
    app.dependency_overrides[get_client] = lambda: fake_ch
    yield TestClient(app)
    app.dependency_overrides.pop(get_client, None)


@pytest.fixture
def key_headers():
    return {"X-Internal-Api-Key": "test-internal-key"}
