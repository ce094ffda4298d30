from __future__ import annotations
import os
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session

from bookflix import migrate
from bookflix.db import get_db
from bookflix.main import app


class FakeResult:
    def __init__(self, rows: List[Dict[str, Any]], scalar: Any = None, rowcount: int = 0):
        self._rows = rows
        self._scalar = scalar
        self.rowcount = rowcount

    def mappings(self):
        return self

    def all(self):
        return list(self._rows)

    def scalar(self):
        return self._scalar


class FakeSession:
    """Records every statement and its params; answers with canned rows."""

    def __init__(self):
        self.rows: List[Dict[str, Any]] = []
        self.scalar: Any = None
        self.error: Optional[Exception] = None
        self.executed: List[tuple[str, Dict[str, Any]]] = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def execute(self, stmt, params=None):
        self.executed.append((str(stmt), dict(params or {})))
        if self.error is not None:
            raise self.error
        return FakeResult(self.rows, self.scalar)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True

    @property
    def last_sql(self) -> str:
        return self.executed[-1][0]

    @property
    def last_params(self) -> Dict[str, Any]:
        return self.executed[-1][1]


@pytest.fixture
def fake_db():
    return FakeSession()


@pytest.fixture
def client(fake_db):
    app.dependency_overrides[get_db] = lambda: fake_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def pg_engine():
    """
    Migrated PostgreSQL for query tests: TEST_DATABASE_URL when set,
    otherwise a throwaway container.
    """
    url = os.getenv("TEST_DATABASE_URL")
    container = None
    if not url:
        try:
            from testcontainers.postgres import PostgresContainer
            container = PostgresContainer("postgres:16-alpine", driver="psycopg")
            container.start()
        except Exception as exc:
            pytest.skip(f"PostgreSQL not available: {exc}")
        url = container.get_connection_url()

    engine = create_engine(url, future=True)
    migrate.run(engine)
    yield engine
    engine.dispose()
    if container is not None:
        container.stop()


@pytest.fixture
def pg_db(pg_engine):
    with pg_engine.begin() as conn:
        conn.execute(text("TRUNCATE books_data, movies_metadata, login RESTART IDENTITY CASCADE"))
    with Session(bind=pg_engine) as session:
        yield session
