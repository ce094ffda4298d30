"""BookFlix: JSON API over books, movies, reviews and their adaptations."""

__version__ = "0.1.0"
