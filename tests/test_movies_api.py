from __future__ import annotations

MOVIE_ROW = {
    "tconst": "tt0111161",
    "primarytitle": "The Shawshank Redemption",
    "originaltitle": "The Shawshank Redemption",
    "isadult": False,
    "runtimeminutes": 142,
    "genres": "Drama",
    "averagerating": 9.3,
    "numvotes": 2900000,
}


def test_movie_details_by_id(client, fake_db):
    fake_db.rows = [MOVIE_ROW]

    resp = client.get("/movies/details/tt0111161")

    assert resp.status_code == 200
    assert resp.json()[0]["primarytitle"] == "The Shawshank Redemption"
    assert fake_db.last_params == {"tconst": "tt0111161"}


def test_movie_details_by_title_empty(client, fake_db):
    resp = client.get("/movies/details", params={"movie_title": "Nonexistent Movie"})

    assert resp.status_code == 200
    assert resp.json() == []
    assert fake_db.last_params == {"title": "%Nonexistent Movie%"}


def test_search_movies_defaults(client, fake_db):
    resp = client.get("/search/movies")

    assert resp.status_code == 200
    assert fake_db.last_params == {
        "title": "%%",
        "genre": "%%",
        "is_adult": False,
        "min_runtime": 1,
        "max_runtime": 60000,
        "min_rating": 0,
        "max_rating": 10,
    }


def test_search_movies_filters(client, fake_db):
    fake_db.rows = [MOVIE_ROW]

    resp = client.get("/search/movies", params={
        "movieTitle": "The Godfather", "genre": "Crime",
        "minRunTimeMinutes": 100, "maxRunTimeMinutes": 200,
        "minRating": 8, "maxRating": 10, "isAdult": "true",
    })

    assert resp.status_code == 200
    sql, params = fake_db.executed[-1]
    assert "Godfather" not in sql
    assert params["is_adult"] is True
    assert params["min_runtime"] == 100


def test_search_movies_inverted_ranges(client, fake_db):
    assert client.get("/search/movies", params={"minRunTimeMinutes": 200, "maxRunTimeMinutes": 100}).status_code == 400
    assert client.get("/search/movies", params={"minRating": 9, "maxRating": 2}).status_code == 400
    assert fake_db.executed == []
