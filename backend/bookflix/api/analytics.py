from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bookflix.db import get_db
from bookflix.services import analytics as analytics_service

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/movies/topMoviesByGenre")
def top_movies_by_genre(db: Session = Depends(get_db)):
    return analytics_service.top_movies_by_genre(db)


@router.get("/books/topAuthors")
def top_authors(limit: int = Query(5, ge=1, le=50), db: Session = Depends(get_db)):
    return analytics_service.top_authors(db, limit=limit)


@router.get("/reviews-movie-ratings")
def reviews_movie_ratings(db: Session = Depends(get_db)):
    """Review length bucket vs. rating of the adapted movie, with counts."""
    return analytics_service.review_length_vs_movie_rating(db)


@router.get("/PositiveReviewsForBooksVSLowMovieRating")
def positive_books_vs_low_movies(
    min_positive: int | None = Query(None, ge=0),
    db: Session = Depends(get_db),
):
    return analytics_service.positive_books_vs_low_movies(db, min_positive=min_positive)


@router.get("/BookAndMovieOutliers")
def book_and_movie_outliers(
    threshold: float | None = Query(None, gt=0),
    db: Session = Depends(get_db),
):
    return analytics_service.book_and_movie_outliers(db, threshold=threshold)
