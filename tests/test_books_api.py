from __future__ import annotations


BOOK_ROW = {
    "book_id": 12345,
    "book_title": "Dune",
    "book_description": "Desert planet.",
    "book_image_link": None,
    "book_publisher_name": "Chilton",
    "book_published_date": "1965-08-01",
    "authors": "Frank Herbert",
}


def test_book_details_returns_rows(client, fake_db):
    fake_db.rows = [BOOK_ROW]

    resp = client.get("/book/details/12345")

    assert resp.status_code == 200
    body = resp.json()
    assert isinstance(body, list)
    assert body[0]["book_title"] == "Dune"
    assert fake_db.last_params == {"book_id": 12345}


def test_book_details_negative_id_is_404_without_query(client, fake_db):
    resp = client.get("/book/details/-1")

    assert resp.status_code == 404
    assert resp.json() == {"message": "No books found"}
    assert fake_db.executed == []


def test_book_details_unknown_id_is_404(client, fake_db):
    resp = client.get("/book/details/99999")

    assert resp.status_code == 404
    assert resp.json() == {"message": "No books found"}


def test_book_details_non_numeric_id_is_400(client):
    resp = client.get("/book/details/invalid_id")

    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request parameters"


def test_book_search_binds_params(client, fake_db):
    fake_db.rows = []

    resp = client.get("/books/search", params={
        "title": "Harry Potter", "genre": "Fantasy", "yearLow": 1990, "yearHigh": 2020,
    })

    assert resp.status_code == 200
    assert resp.json() == []
    sql, params = fake_db.executed[-1]
    assert "Harry Potter" not in sql
    assert params["title"] == "%Harry Potter%"
    assert params["author"] == "%%"
    assert params["genre"] == "%Fantasy%"
    assert (params["year_low"], params["year_high"]) == (1990, 2020)


def test_book_search_inverted_year_range(client, fake_db):
    resp = client.get("/books/search", params={"yearLow": 2025, "yearHigh": 2000})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid year range"}
    assert fake_db.executed == []


def test_book_search_non_numeric_year(client):
    resp = client.get("/books/search", params={"yearLow": "invalid", "yearHigh": 2020})

    assert resp.status_code == 400


def test_book_search_escapes_like_wildcards(client, fake_db):
    client.get("/books/search", params={"title": "100%_sure"})

    assert fake_db.last_params["title"] == "%100\\%\\_sure%"


def test_reviews_defaults_and_empty(client, fake_db):
    resp = client.get("/books/reviews", params={"book_id": 1})

    assert resp.status_code == 200
    assert resp.json() == []
    assert fake_db.last_params == {"book_id": 1, "min_rating": 0, "max_rating": 5}


def test_reviews_rating_filter(client, fake_db):
    fake_db.rows = [{
        "review_id": 3, "book_title": "Dune", "book_review": "Great",
        "book_rating": 5.0, "reviewer_profile_name": "ana", "book_review_votes": 4,
    }]

    resp = client.get("/books/reviews", params={"book_id": 12345, "minrating": 3})

    assert resp.status_code == 200
    assert resp.json()[0]["book_rating"] == 5.0
    assert fake_db.last_params["min_rating"] == 3


def test_reviews_negative_book_id(client, fake_db):
    resp = client.get("/books/reviews", params={"book_id": -1})

    assert resp.status_code == 404
    assert fake_db.executed == []
