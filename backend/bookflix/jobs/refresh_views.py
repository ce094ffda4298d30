from __future__ import annotations

from sqlalchemy import text

from bookflix.db import new_session
from bookflix.logs import get_logger

LOG = get_logger("bookflix.jobs.refresh_views")

MATERIALIZED_VIEWS = (
    "mv_top_movies_by_genre",
    "mv_positive_books2",
    "mv_low_rated_movies",
)


def refresh_all(db) -> int:
    for name in MATERIALIZED_VIEWS:
        db.execute(text(f"REFRESH MATERIALIZED VIEW {name}"))
        LOG.info("Refreshed %s", name)
    db.commit()
    return len(MATERIALIZED_VIEWS)


if __name__ == "__main__":
    with new_session() as db:
        count = refresh_all(db)
        LOG.info("Materialized views refreshed: %d", count)
