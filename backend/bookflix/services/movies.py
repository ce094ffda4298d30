from __future__ import annotations
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from bookflix.services.sql import fetch_all, like_pattern

# Shared projection: one row per movie, genres comma-joined.
_MOVIE_SELECT = """
    SELECT d.tconst,
           d.primarytitle,
           d.originaltitle,
           d.isadult,
           d.runtimeminutes,
           STRING_AGG(g.genre, ', ' ORDER BY g.genre) AS genres,
           r.averagerating,
           r.numvotes
    FROM movies_metadata d
             LEFT JOIN movies_ratings r ON d.tconst = r.movie_id
             LEFT JOIN movies_genres g ON d.tconst = g.movie_id
"""

_MOVIE_GROUP = """
    GROUP BY d.tconst, d.primarytitle, d.originaltitle, d.isadult, d.runtimeminutes,
             r.averagerating, r.numvotes
"""


def movies_by_title(db: Session, movie_title: str | None) -> List[Dict[str, Any]]:
    sql = _MOVIE_SELECT + """
        WHERE (d.primarytitle ILIKE :title OR d.originaltitle ILIKE :title)
          AND d.runtimeminutes > 0
    """ + _MOVIE_GROUP + """
        ORDER BY d.primarytitle
    """
    return fetch_all(db, sql, {"title": like_pattern(movie_title)})


def get_movie_details(db: Session, tconst: str) -> List[Dict[str, Any]]:
    sql = _MOVIE_SELECT + """
        WHERE d.tconst = :tconst
          AND d.runtimeminutes > 0
    """ + _MOVIE_GROUP
    return fetch_all(db, sql, {"tconst": tconst})


def search_movies(
    db: Session,
    *,
    title: str | None = None,
    is_adult: bool = False,
    genre: str | None = None,
    min_runtime: int = 1,
    max_runtime: int = 60000,
    min_rating: float = 0,
    max_rating: float = 10,
) -> List[Dict[str, Any]]:
    """
    Movie search with title/genre substrings and runtime/rating ranges.
    The genre filter selects the movie; the `genres` column still lists
    every genre of a matching movie.
    """
    sql = _MOVIE_SELECT + """
        WHERE (d.primarytitle ILIKE :title OR d.originaltitle ILIKE :title)
          AND d.runtimeminutes BETWEEN :min_runtime AND :max_runtime
          AND d.isadult = :is_adult
          AND r.averagerating BETWEEN :min_rating AND :max_rating
          AND EXISTS (SELECT 1 FROM movies_genres mg
                      WHERE mg.movie_id = d.tconst AND mg.genre ILIKE :genre)
    """ + _MOVIE_GROUP + """
        ORDER BY d.primarytitle
    """
    return fetch_all(db, sql, {
        "title": like_pattern(title),
        "genre": like_pattern(genre),
        "is_adult": bool(is_adult),
        "min_runtime": min_runtime,
        "max_runtime": max_runtime,
        "min_rating": min_rating,
        "max_rating": max_rating,
    })
