"""
Load IMDb dataset dumps into movies_metadata / movies_genres / movies_ratings.

    python -m etl.imdb_ingest --basics title.basics.tsv.gz --ratings title.ratings.tsv.gz
"""
from __future__ import annotations
import argparse
import csv
from typing import Iterable, List, Optional, Set

import pandas as pd
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from bookflix.db import new_session
from bookflix.logs import get_logger
from bookflix.models import Movie, MovieGenre, MovieRating
from etl.common import chunks, clean_str

LOG = get_logger("etl.imdb_ingest")

CHUNK_ROWS = 100_000
BATCH = 2000


def read_tsv(path: str, usecols: List[str]) -> Iterable[pd.DataFrame]:
    return pd.read_csv(
        path,
        sep="\t",
        dtype=str,
        na_values="\\N",
        keep_default_na=False,
        quoting=csv.QUOTE_NONE,
        usecols=usecols,
        chunksize=CHUNK_ROWS,
    )


def parse_runtime(v) -> Optional[int]:
    s = clean_str(v)
    return int(s) if s and s.isdigit() else None


def parse_genres(v) -> List[str]:
    s = clean_str(v)
    return [g.strip() for g in s.split(",") if g.strip()] if s else []


def movie_rows(df: pd.DataFrame):
    df = df[df["titleType"] == "movie"]
    for _, r in df.iterrows():
        tconst = clean_str(r["tconst"])
        title = clean_str(r["primaryTitle"])
        if not tconst or not title:
            continue
        yield {
            "tconst": tconst,
            "primarytitle": title,
            "originaltitle": clean_str(r.get("originalTitle")),
            "isadult": clean_str(r.get("isAdult")) == "1",
            "runtimeminutes": parse_runtime(r.get("runtimeMinutes")),
            "genres": parse_genres(r.get("genres")),
        }


def upsert_movies(db: Session, rows: List[dict]) -> None:
    stmt = insert(Movie)
    stmt = stmt.on_conflict_do_update(
        index_elements=["tconst"],
        set_={
            "primarytitle": stmt.excluded.primarytitle,
            "originaltitle": stmt.excluded.originaltitle,
            "isadult": stmt.excluded.isadult,
            "runtimeminutes": stmt.excluded.runtimeminutes,
        },
    )
    db.execute(stmt, [{k: v for k, v in r.items() if k != "genres"} for r in rows])

    genres = [{"movie_id": r["tconst"], "genre": g} for r in rows for g in r["genres"]]
    if genres:
        db.execute(insert(MovieGenre).on_conflict_do_nothing(), genres)


def load_basics(db: Session, path: str) -> Set[str]:
    cols = ["tconst", "titleType", "primaryTitle", "originalTitle", "isAdult", "runtimeMinutes", "genres"]
    loaded: Set[str] = set()
    for frame in read_tsv(path, cols):
        for batch in chunks(movie_rows(frame), BATCH):
            upsert_movies(db, batch)
            loaded.update(r["tconst"] for r in batch)
        db.commit()
        LOG.info("Movies upserted so far: %d", len(loaded))
    return loaded


def rating_rows(df: pd.DataFrame, known: Set[str]):
    for _, r in df.iterrows():
        tconst = clean_str(r["tconst"])
        if tconst not in known:
            continue
        avg = clean_str(r.get("averageRating"))
        votes = clean_str(r.get("numVotes"))
        yield {
            "movie_id": tconst,
            "averagerating": float(avg) if avg else None,
            "numvotes": int(votes) if votes and votes.isdigit() else None,
        }


def load_ratings(db: Session, path: str, known: Set[str]) -> int:
    stmt = insert(MovieRating)
    stmt = stmt.on_conflict_do_update(
        index_elements=["movie_id"],
        set_={"averagerating": stmt.excluded.averagerating, "numvotes": stmt.excluded.numvotes},
    )
    total = 0
    for frame in read_tsv(path, ["tconst", "averageRating", "numVotes"]):
        for batch in chunks(rating_rows(frame, known), BATCH):
            db.execute(stmt, batch)
            total += len(batch)
        db.commit()
    LOG.info("Movie ratings upserted: %d", total)
    return total


def run(basics: str, ratings: str | None):
    with new_session() as db:
        known = load_basics(db, basics)
        if ratings:
            load_ratings(db, ratings, known)
    LOG.info("Done. Movies loaded %d.", len(known))


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--basics", required=True, help="Path to title.basics.tsv(.gz)")
    parser.add_argument("--ratings", help="Path to title.ratings.tsv(.gz)")
    args = parser.parse_args()
    run(args.basics, args.ratings)
