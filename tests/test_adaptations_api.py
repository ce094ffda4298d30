from __future__ import annotations


def test_books_for_movie(client, fake_db):
    fake_db.rows = [{
        "book_id": 127, "book_title": "Rita Hayworth and Shawshank Redemption",
        "book_rating": 4.6, "movie_title": "The Shawshank Redemption",
        "avg_movie_rating": 9.3, "is_movie_adult": False,
    }]

    resp = client.get("/adaptations/books/tt0111161")

    assert resp.status_code == 200
    assert resp.json()[0]["book_id"] == 127
    sql, params = fake_db.executed[-1]
    assert params == {"tconst": "tt0111161"}
    assert "ORDER BY m.runtimeminutes DESC" in sql
    assert "LIMIT 1" in sql


def test_books_for_movie_without_mapping_is_empty(client, fake_db):
    resp = client.get("/adaptations/books/tt9999999")

    assert resp.status_code == 200
    assert resp.json() == []


def test_books_for_movie_missing_id(client):
    assert client.get("/adaptations/books/").status_code == 404
    assert client.get("/adaptations/books/%20").status_code == 404


def test_movies_for_book(client, fake_db):
    fake_db.rows = [{
        "book_title": "Dune", "book_description": None, "book_image_link": None,
        "book_publisher_name": None, "book_published_date": None,
        "book_average_rating": 4.5, "movie_title": "Dune", "avg_movie_rating": 8.0,
        "is_movie_adult": False, "movie_id": "tt1160419",
    }]

    resp = client.get("/adaptations/movies/127")

    assert resp.status_code == 200
    assert resp.json()[0]["movie_id"] == "tt1160419"
    assert fake_db.last_params == {"book_id": 127}


def test_movies_for_book_negative_id(client, fake_db):
    assert client.get("/adaptations/movies/-5").status_code == 404
    assert fake_db.executed == []
