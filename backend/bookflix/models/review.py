from sqlalchemy import Column, BigInteger, Float, ForeignKey, Integer, Text, CheckConstraint
from bookflix.db import Base

class BookReview(Base):
    __tablename__ = "books_rating"
    review_id = Column(BigInteger, primary_key=True, autoincrement=True)
    book_id = Column(BigInteger, ForeignKey("books_data.book_id", ondelete="CASCADE"), nullable=False, index=True)
    reviewer_profile_name = Column(Text)
    review = Column(Text)
    rating = Column(Float)
    total_votes = Column(Integer, default=0)

    __table_args__ = (CheckConstraint("rating BETWEEN 1 AND 5", name="books_rating_rating_range"),)
