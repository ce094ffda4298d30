from bookflix.models.book import Book, BookAuthor, BookGenre
from bookflix.models.review import BookReview
from bookflix.models.movie import Movie, MovieRating, MovieGenre
from bookflix.models.adaptation import BookMovieMap

__all__ = [
    "Book", "BookAuthor", "BookGenre", "BookReview",
    "Movie", "MovieRating", "MovieGenre", "BookMovieMap",
]
