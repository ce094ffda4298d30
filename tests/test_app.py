from __future__ import annotations

from sqlalchemy.exc import OperationalError


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_db_ping(client, fake_db):
    fake_db.scalar = "PostgreSQL 16.2"

    assert client.get("/db-ping").json() == {"db": "ok", "version": "PostgreSQL 16.2"}


def test_cors_allows_any_origin(client, fake_db):
    fake_db.rows = [{"book_title": "Dune"}]

    resp = client.get("/book/details/12345", headers={"Origin": "http://example.com"})

    assert resp.headers["access-control-allow-origin"] == "*"


def test_unknown_route(client):
    assert client.get("/invalid/route").status_code == 404


def test_database_error_is_generic_500(client, fake_db):
    fake_db.error = OperationalError("SELECT", {}, Exception("connection refused"))

    resp = client.get("/analytics/movies/topMoviesByGenre")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal Server Error"}


def test_get_db_closes_session(monkeypatch, fake_db):
    from bookflix import db as db_module

    monkeypatch.setattr(db_module, "new_session", lambda: fake_db)

    gen = db_module.get_db()
    assert next(gen) is fake_db
    gen.close()

    assert fake_db.closed


def test_unexpected_error_is_json_500(fake_db):
    from fastapi.testclient import TestClient

    from bookflix.db import get_db
    from bookflix.main import app

    fake_db.error = RuntimeError("boom")
    app.dependency_overrides[get_db] = lambda: fake_db
    try:
        with TestClient(app, raise_server_exceptions=False) as c:
            resp = c.get("/analytics/movies/topMoviesByGenre")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal Server Error"}
