from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookflix.db import get_db
from bookflix.errors import ApiError
from bookflix.services import adaptations as adaptation_service

router = APIRouter(prefix="/adaptations", tags=["adaptations"])


@router.get("/books/{tconst}")
def books_for_movie(tconst: str, db: Session = Depends(get_db)):
    """Book adapted into the movie, or [] when there is none."""
    tconst = tconst.strip()
    if not tconst:
        raise ApiError(404, error="Movie not found")
    return adaptation_service.book_for_movie(db, tconst)


@router.get("/movies/{book_id}")
def movies_for_book(book_id: int, db: Session = Depends(get_db)):
    if book_id < 0:
        raise ApiError(404, message="No books found")
    return adaptation_service.movie_for_book(db, book_id)
