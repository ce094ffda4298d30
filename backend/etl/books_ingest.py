"""
Load the Amazon Books Reviews dataset (books_data.csv + Books_rating.csv)
into books_data / books_authors / books_genres / books_rating.

    python -m etl.books_ingest --books books_data.csv --ratings Books_rating.csv
"""
from __future__ import annotations
import argparse
import ast
import re
from datetime import date
from typing import Dict, List, Optional

import pandas as pd
from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from bookflix.db import new_session
from bookflix.logs import get_logger
from bookflix.models import Book, BookAuthor, BookGenre, BookReview
from etl.common import chunks, clean_str

LOG = get_logger("etl.books_ingest")

BOOK_COLS = {
    "Title": "title",
    "description": "description",
    "authors": "authors",
    "image": "image_link",
    "publisher": "publisher",
    "publishedDate": "published_date",
    "categories": "categories",
}

RATING_COLS = {
    "Title": "title",
    "profileName": "reviewer_profile_name",
    "review/helpfulness": "helpfulness",
    "review/score": "rating",
    "review/text": "review",
}

BATCH = 1000


def parse_list_field(v) -> List[str]:
    """"['A', 'B']" -> ['A', 'B']; a plain string becomes a one-item list."""
    s = clean_str(v)
    if not s:
        return []
    if s.startswith("["):
        try:
            parsed = ast.literal_eval(s)
        except (ValueError, SyntaxError):
            parsed = [p.strip(" '\"") for p in s.strip("[]").split(",")]
        return [str(p).strip() for p in parsed if p and str(p).strip()]
    return [s]


def parse_published_date(v) -> Optional[date]:
    """Accepts '1996', '2005-02', '2005-02-01' and trailing junk like '2000-01-01*'."""
    s = clean_str(v)
    if not s:
        return None
    m = re.match(r"(\d{4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?", s)
    if not m:
        return None
    year = int(m.group(1))
    month = int(m.group(2) or 1)
    day = int(m.group(3) or 1)
    try:
        return date(year, month, day)
    except ValueError:
        return date(year, 1, 1)


def parse_helpful_votes(v) -> int:
    """'7/10' -> 10 (total votes cast on the review)."""
    s = clean_str(v)
    if not s or "/" not in s:
        return 0
    try:
        return int(s.split("/", 1)[1])
    except ValueError:
        return 0


def parse_score(v) -> Optional[float]:
    """Review score in 1..5, else None."""
    s = clean_str(v)
    if not s:
        return None
    try:
        score = float(s)
    except ValueError:
        return None
    return score if 1 <= score <= 5 else None


def upsert_book(db: Session, row: dict) -> int:
    stmt = insert(Book).values(
        title=row["title"],
        description=clean_str(row.get("description")),
        image_link=clean_str(row.get("image_link")),
        publisher=clean_str(row.get("publisher")),
        published_date=parse_published_date(row.get("published_date")),
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["title"],
        set_={
            "description": stmt.excluded.description,
            "image_link": stmt.excluded.image_link,
            "publisher": stmt.excluded.publisher,
            "published_date": stmt.excluded.published_date,
        },
    ).returning(Book.book_id)
    return db.execute(stmt).scalar_one()


def load_books(db: Session, path: str) -> Dict[str, int]:
    df = pd.read_csv(path, dtype=str).rename(columns=BOOK_COLS)
    df = df[df["title"].notna()]

    ids: Dict[str, int] = {}
    for _, r in df.iterrows():
        row = r.to_dict()
        title = clean_str(row["title"])
        if not title:
            continue
        row["title"] = title
        book_id = upsert_book(db, row)
        ids[title] = book_id

        authors = [{"book_id": book_id, "author_name": a} for a in parse_list_field(row.get("authors"))]
        genres = [{"book_id": book_id, "genre_name": g} for g in parse_list_field(row.get("categories"))]
        if authors:
            db.execute(insert(BookAuthor).on_conflict_do_nothing(), authors)
        if genres:
            db.execute(insert(BookGenre).on_conflict_do_nothing(), genres)

    db.commit()
    LOG.info("Books upserted: %d", len(ids))
    return ids


def review_rows(df: pd.DataFrame, ids: Dict[str, int]):
    for _, r in df.iterrows():
        book_id = ids.get(clean_str(r["title"]) or "")
        score = parse_score(r.get("rating"))
        if book_id is None or score is None:
            continue
        yield {
            "book_id": book_id,
            "reviewer_profile_name": clean_str(r.get("reviewer_profile_name")),
            "review": clean_str(r.get("review")),
            "rating": score,
            "total_votes": parse_helpful_votes(r.get("helpfulness")),
        }


def load_reviews(db: Session, path: str, ids: Dict[str, int], replace: bool = True) -> int:
    if replace and ids:
        for batch in chunks(ids.values(), BATCH):
            db.execute(delete(BookReview).where(BookReview.book_id.in_(batch)))

    inserted = 0
    for frame in pd.read_csv(path, dtype=str, chunksize=50_000):
        frame = frame.rename(columns=RATING_COLS)
        for batch in chunks(review_rows(frame, ids), BATCH):
            db.execute(insert(BookReview), batch)
            inserted += len(batch)
        db.commit()
        LOG.info("Reviews inserted so far: %d", inserted)
    return inserted


def run(books_csv: str, ratings_csv: str | None, replace_reviews: bool = True):
    with new_session() as db:
        ids = load_books(db, books_csv)
        reviews = load_reviews(db, ratings_csv, ids, replace=replace_reviews) if ratings_csv else 0
    LOG.info("Done. Books processed %d, reviews inserted %d.", len(ids), reviews)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--books", required=True, help="Path to books_data.csv")
    parser.add_argument("--ratings", help="Path to Books_rating.csv")
    parser.add_argument("--keep-reviews", action="store_true",
                        help="Append reviews instead of replacing those of the loaded books")
    args = parser.parse_args()
    run(args.books, args.ratings, replace_reviews=not args.keep_reviews)
