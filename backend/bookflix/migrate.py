from __future__ import annotations
import hashlib
import re
from pathlib import Path
from datetime import datetime, timezone
from typing import List

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from tenacity import retry, wait_exponential, stop_after_attempt

from bookflix.db import get_engine
from bookflix.logs import get_logger

LOG = get_logger("bookflix.migrate")

MIGRATIONS_DIR = Path(__file__).with_name("migrations")

_STATEMENT_END = re.compile(r";\s*$", re.MULTILINE)


def sha256(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()


def split_statements(sql: str) -> List[str]:
    """Split a migration file on statement-terminating semicolons (no dollar-quoted bodies)."""
    parts = _STATEMENT_END.split(sql)
    statements = []
    for part in parts:
        body = "\n".join(
            line for line in part.splitlines() if not line.strip().startswith("--")
        ).strip()
        if body:
            statements.append(body)
    return statements


@retry(wait=wait_exponential(multiplier=0.5, max=8), stop=stop_after_attempt(6), reraise=True)
def wait_for_database(engine: Engine) -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def ensure_schema_table(conn: Connection):
    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
          id SERIAL PRIMARY KEY,
          filename TEXT NOT NULL UNIQUE,
          checksum TEXT NOT NULL,
          applied_at TIMESTAMP NOT NULL DEFAULT now()
        )
    """))


def already_applied(conn: Connection, filename: str) -> bool:
    return bool(conn.execute(
        text("SELECT 1 FROM schema_migrations WHERE filename = :f"),
        {"f": filename}
    ).scalar())


def record_applied(conn: Connection, filename: str, checksum: str):
    conn.execute(
        text("INSERT INTO schema_migrations (filename, checksum, applied_at) VALUES (:f, :c, :t)"),
        {"f": filename, "c": checksum, "t": datetime.now(timezone.utc).replace(tzinfo=None)}
    )


def run(engine: Engine | None = None) -> int:
    """Apply pending migrations in filename order. Returns how many were applied."""
    files = sorted(p for p in MIGRATIONS_DIR.glob("*.sql"))
    if not files:
        LOG.info("No migrations found.")
        return 0

    engine = engine or get_engine()
    wait_for_database(engine)

    applied = 0
    with engine.begin() as conn:
        ensure_schema_table(conn)

        for f in files:
            filename = f.name
            sql = f.read_text()
            if already_applied(conn, filename):
                LOG.info("Skip %s (already applied)", filename)
                continue

            for statement in split_statements(sql):
                conn.execute(text(statement))
            record_applied(conn, filename, sha256(sql))
            applied += 1
            LOG.info("Applied %s", filename)

    LOG.info("All migrations up to date.")
    return applied


if __name__ == "__main__":
    run()
