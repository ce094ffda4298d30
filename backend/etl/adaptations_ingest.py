"""
Fill books_movies_map.

With --csv the file must carry a `tconst` column plus either `book_id` or
`book_title`. Without it, books and movies are paired by exact title after
lower-casing and trimming.
"""
from __future__ import annotations
import argparse

import pandas as pd
from sqlalchemy import text
from sqlalchemy.orm import Session

from bookflix.db import new_session
from bookflix.logs import get_logger
from etl.common import clean_str

LOG = get_logger("etl.adaptations_ingest")

MATCH_BY_TITLE = """
    INSERT INTO books_movies_map (book_id, tconst)
    SELECT b.book_id, m.tconst
    FROM books_data b
             JOIN movies_metadata m
                  ON lower(trim(b.title)) = lower(trim(m.primarytitle))
    ON CONFLICT DO NOTHING
"""

INSERT_BY_ID = """
    INSERT INTO books_movies_map (book_id, tconst)
    SELECT b.book_id, m.tconst
    FROM books_data b, movies_metadata m
    WHERE b.book_id = :book_id AND m.tconst = :tconst
    ON CONFLICT DO NOTHING
"""

INSERT_BY_TITLE = """
    INSERT INTO books_movies_map (book_id, tconst)
    SELECT b.book_id, m.tconst
    FROM books_data b, movies_metadata m
    WHERE b.title = :book_title AND m.tconst = :tconst
    ON CONFLICT DO NOTHING
"""


def mapping_params(df: pd.DataFrame) -> tuple[str, list[dict]]:
    if "tconst" not in df.columns:
        raise ValueError("mapping CSV needs a tconst column")
    if "book_id" in df.columns:
        sql, key = INSERT_BY_ID, "book_id"
    elif "book_title" in df.columns:
        sql, key = INSERT_BY_TITLE, "book_title"
    else:
        raise ValueError("mapping CSV needs a book_id or book_title column")

    params = []
    for _, r in df.iterrows():
        tconst = clean_str(r["tconst"])
        book = clean_str(r[key])
        if not tconst or not book:
            continue
        params.append({"tconst": tconst, key: int(book) if key == "book_id" else book})
    return sql, params


def load_csv(db: Session, path: str) -> int:
    sql, params = mapping_params(pd.read_csv(path, dtype=str))
    if params:
        db.execute(text(sql), params)
    db.commit()
    return len(params)


def match_titles(db: Session) -> int:
    inserted = db.execute(text(MATCH_BY_TITLE)).rowcount
    db.commit()
    return inserted


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--csv", help="CSV with tconst and book_id or book_title columns")
    args = parser.parse_args()
    with new_session() as db:
        if args.csv:
            LOG.info("Mapping rows read: %d", load_csv(db, args.csv))
        else:
            LOG.info("Title matches inserted: %d", match_titles(db))
