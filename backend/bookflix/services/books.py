from __future__ import annotations
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from bookflix.services.sql import fetch_all, like_pattern

YEAR_MIN = 0
YEAR_MAX = 9999


def search_books(
    db: Session,
    *,
    title: str | None = None,
    author: str | None = None,
    genre: str | None = None,
    year_low: int = YEAR_MIN,
    year_high: int = YEAR_MAX,
) -> List[Dict[str, Any]]:
    """
    Books whose title, one of the authors and one of the genres contain the
    given substrings (case-insensitive), published within [year_low, year_high].
    Authors and genres come back as comma-joined strings.
    """
    sql = """
        SELECT bd.book_id,
               bd.title,
               STRING_AGG(DISTINCT ba.author_name, ', ') AS author_name,
               bd.description,
               bd.image_link,
               bd.publisher,
               bd.published_date                         AS year_published,
               STRING_AGG(DISTINCT bg.genre_name, ', ')  AS genre_name
        FROM books_data bd
                 JOIN books_authors ba ON bd.book_id = ba.book_id
                 JOIN books_genres bg ON bd.book_id = bg.book_id
        WHERE bd.title ILIKE :title
          AND EXISTS (SELECT 1 FROM books_authors a
                      WHERE a.book_id = bd.book_id AND a.author_name ILIKE :author)
          AND EXISTS (SELECT 1 FROM books_genres g
                      WHERE g.book_id = bd.book_id AND g.genre_name ILIKE :genre)
          AND EXTRACT(YEAR FROM bd.published_date) BETWEEN :year_low AND :year_high
        GROUP BY bd.book_id, bd.title, bd.description, bd.image_link, bd.publisher, bd.published_date
        ORDER BY bd.title
    """
    return fetch_all(db, sql, {
        "title": like_pattern(title),
        "author": like_pattern(author),
        "genre": like_pattern(genre),
        "year_low": year_low,
        "year_high": year_high,
    })


def get_book_details(db: Session, book_id: int) -> List[Dict[str, Any]]:
    sql = """
        SELECT bd.book_id,
               bd.title                                                 AS book_title,
               bd.description                                           AS book_description,
               bd.image_link                                            AS book_image_link,
               bd.publisher                                             AS book_publisher_name,
               bd.published_date                                        AS book_published_date,
               STRING_AGG(ba.author_name, ', ' ORDER BY ba.author_name) AS authors
        FROM books_data bd
                 LEFT JOIN books_authors ba ON bd.book_id = ba.book_id
        WHERE bd.book_id = :book_id
        GROUP BY bd.book_id, bd.title, bd.description, bd.image_link, bd.publisher, bd.published_date
    """
    return fetch_all(db, sql, {"book_id": book_id})


def get_book_reviews(
    db: Session, book_id: int, *, min_rating: float = 0, max_rating: float = 5
) -> List[Dict[str, Any]]:
    sql = """
        SELECT r.review_id,
               b.title                 AS book_title,
               r.review                AS book_review,
               r.rating                AS book_rating,
               r.reviewer_profile_name AS reviewer_profile_name,
               r.total_votes           AS book_review_votes
        FROM books_rating r
                 JOIN books_data b ON r.book_id = b.book_id
        WHERE b.book_id = :book_id
          AND r.rating BETWEEN :min_rating AND :max_rating
        ORDER BY r.rating DESC, r.total_votes DESC NULLS LAST
    """
    return fetch_all(db, sql, {
        "book_id": book_id,
        "min_rating": min_rating,
        "max_rating": max_rating,
    })
