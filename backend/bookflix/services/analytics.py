from __future__ import annotations
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from bookflix import config
from bookflix.services.sql import fetch_all


def top_movies_by_genre(db: Session) -> List[Dict[str, Any]]:
    return fetch_all(db, """
        SELECT genre, primarytitle, averagerating
        FROM mv_top_movies_by_genre
        ORDER BY genre, rank
    """)


def top_authors(db: Session, limit: int = 5) -> List[Dict[str, Any]]:
    """Authors ranked by the average rating of reviews across all their books."""
    return fetch_all(db, """
        SELECT ba.author_name, AVG(br.rating) AS average_rating
        FROM books_authors ba
                 JOIN books_rating br ON ba.book_id = br.book_id
        GROUP BY ba.author_name
        ORDER BY average_rating DESC, ba.author_name
        LIMIT :limit
    """, {"limit": limit})


def review_length_vs_movie_rating(db: Session) -> List[Dict[str, Any]]:
    return fetch_all(db, """
        SELECT label, COUNT(*) AS record_count
        FROM ReviewMovieStats2
        GROUP BY label
        ORDER BY record_count DESC, label
    """)


def positive_books_vs_low_movies(db: Session, min_positive: int | None = None) -> List[Dict[str, Any]]:
    """
    Adapted movies that rate low although their source book collected more
    than `min_positive` positive reviews.
    """
    if min_positive is None:
        min_positive = config.MIN_POSITIVE_REVIEWS
    return fetch_all(db, """
        WITH books_to_movies AS (SELECT pb.book_id,
                                        pb.positive_review_count,
                                        pb.avg_book_rating,
                                        lm.movie_title,
                                        lm.avg_movie_rating
                                 FROM mv_positive_books2 pb
                                          JOIN books_movies_map bm ON pb.book_id = bm.book_id
                                          JOIN mv_low_rated_movies lm ON bm.tconst = lm.tconst)
        SELECT btm.movie_title,
               btm.positive_review_count,
               btm.avg_movie_rating
        FROM books_to_movies btm
        WHERE btm.positive_review_count > :min_positive
        ORDER BY btm.positive_review_count DESC, btm.avg_movie_rating ASC
    """, {"min_positive": min_positive})


def book_and_movie_outliers(db: Session, threshold: float | None = None) -> List[Dict[str, Any]]:
    """
    Titles whose average rating lies more than `threshold` standard
    deviations from the mean of their medium. Books and movies are scored
    against their own BookStats/MovieStats. A zero stddev yields no rows.
    """
    if threshold is None:
        threshold = config.OUTLIER_Z_THRESHOLD
    return fetch_all(db, """
        WITH BookScores AS (SELECT bd.title,
                                   AVG(br.rating)                                               AS book_avg_rating,
                                   (AVG(br.rating) - bs.avg_rating) / NULLIF(bs.stddev_rating, 0) AS z_score
                            FROM books_rating br
                                     JOIN books_data bd ON br.book_id = bd.book_id
                                     CROSS JOIN BookStats bs
                            GROUP BY bd.book_id, bd.title, bs.avg_rating, bs.stddev_rating),
             MovieScores AS (SELECT mm.primarytitle                                                     AS movie_title,
                                    AVG(mr.averagerating)                                               AS movie_avg_rating,
                                    (AVG(mr.averagerating) - ms.avg_rating) / NULLIF(ms.stddev_rating, 0) AS z_score
                             FROM movies_ratings mr
                                      JOIN movies_metadata mm ON mr.movie_id = mm.tconst
                                      CROSS JOIN MovieStats ms
                             GROUP BY mm.tconst, mm.primarytitle, ms.avg_rating, ms.stddev_rating)
        SELECT 'Book'          AS media_type,
               title           AS media_title,
               book_avg_rating AS avg_rating,
               z_score
        FROM BookScores
        WHERE ABS(z_score) > :threshold
        UNION ALL
        SELECT 'Movie'          AS media_type,
               movie_title      AS media_title,
               movie_avg_rating AS avg_rating,
               z_score
        FROM MovieScores
        WHERE ABS(z_score) > :threshold
        ORDER BY z_score DESC
    """, {"threshold": float(threshold)})
