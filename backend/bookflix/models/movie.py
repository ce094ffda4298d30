from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, Float, ForeignKey, Integer, Text
from bookflix.db import Base


class Movie(Base):
    __tablename__ = "movies_metadata"

    tconst: Mapped[str] = mapped_column(Text, primary_key=True)
    primarytitle: Mapped[str] = mapped_column(Text, nullable=False)
    originaltitle: Mapped[str | None] = mapped_column(Text)
    isadult: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    runtimeminutes: Mapped[int | None] = mapped_column(Integer)


class MovieRating(Base):
    __tablename__ = "movies_ratings"

    movie_id: Mapped[str] = mapped_column(Text, ForeignKey("movies_metadata.tconst", ondelete="CASCADE"), primary_key=True)
    averagerating: Mapped[float | None] = mapped_column(Float)
    numvotes: Mapped[int | None] = mapped_column(Integer)


class MovieGenre(Base):
    __tablename__ = "movies_genres"

    movie_id: Mapped[str] = mapped_column(Text, ForeignKey("movies_metadata.tconst", ondelete="CASCADE"), primary_key=True)
    genre: Mapped[str] = mapped_column(Text, primary_key=True)
