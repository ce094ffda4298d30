from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bookflix.db import get_db
from bookflix.errors import ApiError
from bookflix.services import movies as movie_service

router = APIRouter(tags=["movies"])


@router.get("/movies/details")
def movie_details_by_title(movie_title: str | None = None, db: Session = Depends(get_db)):
    return movie_service.movies_by_title(db, movie_title)


@router.get("/movies/details/{tconst}")
def movie_details(tconst: str, db: Session = Depends(get_db)):
    tconst = tconst.strip()
    if not tconst:
        raise ApiError(404, error="Movie not found")
    return movie_service.get_movie_details(db, tconst)


@router.get("/search/movies")
def search_movies(
    movieTitle: str | None = None,
    isAdult: bool = False,
    genre: str | None = None,
    minRunTimeMinutes: int = Query(1, ge=0),
    maxRunTimeMinutes: int = Query(60000, ge=0),
    minRating: float = Query(0, ge=0, le=10),
    maxRating: float = Query(10, ge=0, le=10),
    db: Session = Depends(get_db),
):
    if minRunTimeMinutes > maxRunTimeMinutes:
        raise ApiError(400, error="Invalid runtime range")
    if minRating > maxRating:
        raise ApiError(400, error="Invalid rating range")
    return movie_service.search_movies(
        db,
        title=movieTitle,
        is_adult=isAdult,
        genre=genre,
        min_runtime=minRunTimeMinutes,
        max_runtime=maxRunTimeMinutes,
        min_rating=minRating,
        max_rating=maxRating,
    )
