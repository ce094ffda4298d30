from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bookflix.db import get_db
from bookflix.errors import ApiError
from bookflix.services import books as book_service

router = APIRouter(tags=["books"])

NO_BOOKS = "No books found"


@router.get("/books/search")
def search_books(
    title: str | None = None,
    name: str | None = Query(None, description="Author name substring"),
    genre: str | None = None,
    yearLow: int = Query(book_service.YEAR_MIN),
    yearHigh: int = Query(book_service.YEAR_MAX),
    db: Session = Depends(get_db),
):
    """
    Title/author/genre substring search with a publication-year range.
    """
    if yearLow > yearHigh:
        raise ApiError(400, error="Invalid year range")
    return book_service.search_books(
        db, title=title, author=name, genre=genre, year_low=yearLow, year_high=yearHigh
    )


@router.get("/book/details/{book_id}")
def book_details(book_id: int, db: Session = Depends(get_db)):
    if book_id < 0:
        raise ApiError(404, message=NO_BOOKS)
    rows = book_service.get_book_details(db, book_id)
    if not rows:
        raise ApiError(404, message=NO_BOOKS)
    return rows


@router.get("/books/reviews")
def book_reviews(
    book_id: int,
    minrating: float = Query(0, ge=0, le=5),
    maxrating: float = Query(5, ge=0, le=5),
    db: Session = Depends(get_db),
):
    if book_id < 0:
        raise ApiError(404, error="Invalid book id")
    if minrating > maxrating:
        raise ApiError(400, error="Invalid rating range")
    return book_service.get_book_reviews(db, book_id, min_rating=minrating, max_rating=maxrating)
