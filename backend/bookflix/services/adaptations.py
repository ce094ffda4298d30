from __future__ import annotations
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from bookflix.services.sql import fetch_all


def book_for_movie(db: Session, tconst: str) -> List[Dict[str, Any]]:
    """
    The book adapted into movie `tconst`, with the book's rating averaged over
    its reviews. When several books map to the movie, a single row comes back.
    Empty list when the movie has no recorded adaptation.
    """
    sql = """
        WITH AverageBookRating AS (SELECT br.book_id,
                                          AVG(br.rating) AS avg_book_rating
                                   FROM books_rating br
                                            JOIN books_movies_map bm ON bm.book_id = br.book_id
                                   WHERE bm.tconst = :tconst
                                   GROUP BY br.book_id)
        SELECT b.book_id           AS book_id,
               b.title             AS book_title,
               abr.avg_book_rating AS book_rating,
               m.primarytitle      AS movie_title,
               mr.averagerating    AS avg_movie_rating,
               m.isadult           AS is_movie_adult
        FROM movies_metadata m
                 JOIN books_movies_map bm ON m.tconst = bm.tconst
                 JOIN books_data b ON b.book_id = bm.book_id
                 LEFT JOIN AverageBookRating abr ON b.book_id = abr.book_id
                 LEFT JOIN movies_ratings mr ON m.tconst = mr.movie_id
        WHERE m.tconst = :tconst
        ORDER BY m.runtimeminutes DESC NULLS LAST, b.book_id
        LIMIT 1
    """
    return fetch_all(db, sql, {"tconst": tconst})


def movie_for_book(db: Session, book_id: int) -> List[Dict[str, Any]]:
    """
    The movie adaptation of `book_id`; the longest-running movie wins when
    the book was adapted more than once.
    """
    sql = """
        WITH AverageBookRating AS (SELECT book_id,
                                          AVG(rating) AS avg_book_rating
                                   FROM books_rating
                                   WHERE book_id = :book_id
                                   GROUP BY book_id)
        SELECT b.title             AS book_title,
               b.description       AS book_description,
               b.image_link        AS book_image_link,
               b.publisher         AS book_publisher_name,
               b.published_date    AS book_published_date,
               abr.avg_book_rating AS book_average_rating,
               m.primarytitle      AS movie_title,
               mr.averagerating    AS avg_movie_rating,
               m.isadult           AS is_movie_adult,
               m.tconst            AS movie_id
        FROM books_data b
                 JOIN books_movies_map bm ON b.book_id = bm.book_id
                 JOIN movies_metadata m ON bm.tconst = m.tconst
                 LEFT JOIN AverageBookRating abr ON b.book_id = abr.book_id
                 LEFT JOIN movies_ratings mr ON m.tconst = mr.movie_id
        WHERE b.book_id = :book_id
        ORDER BY m.runtimeminutes DESC NULLS LAST, m.tconst
        LIMIT 1
    """
    return fetch_all(db, sql, {"book_id": book_id})
