from sqlalchemy import Column, BigInteger, ForeignKey, Text
from bookflix.db import Base

class BookMovieMap(Base):
    __tablename__ = "books_movies_map"
    book_id = Column(BigInteger, ForeignKey("books_data.book_id", ondelete="CASCADE"), primary_key=True)
    tconst = Column(Text, ForeignKey("movies_metadata.tconst", ondelete="CASCADE"), primary_key=True, index=True)
