from sqlalchemy import Column, BigInteger, Date, ForeignKey, Text
from bookflix.db import Base

class Book(Base):
    __tablename__ = "books_data"
    book_id = Column(BigInteger, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False, unique=True)
    description = Column(Text, nullable=True)
    image_link = Column(Text)
    publisher = Column(Text)
    published_date = Column(Date)


class BookAuthor(Base):
    __tablename__ = "books_authors"
    book_id = Column(BigInteger, ForeignKey("books_data.book_id", ondelete="CASCADE"), primary_key=True)
    author_name = Column(Text, primary_key=True)


class BookGenre(Base):
    __tablename__ = "books_genres"
    book_id = Column(BigInteger, ForeignKey("books_data.book_id", ondelete="CASCADE"), primary_key=True)
    genre_name = Column(Text, primary_key=True)
