from __future__ import annotations
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookflix import config


class Base(DeclarativeBase):
    pass


def make_engine(url: str | None = None) -> Engine:
    url = url or config.DATABASE_URL
    if not url:
        raise RuntimeError("DATABASE_URL not set")
    return create_engine(
        url,
        future=True,
        pool_pre_ping=True,
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_MAX_OVERFLOW,
    )


_engine: Engine | None = None


def get_engine() -> Engine:
    # created on first use
    global _engine
    if _engine is None:
        _engine = make_engine()
    return _engine


SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False)


def new_session() -> Session:
    return SessionLocal(bind=get_engine())


def get_db() -> Iterator[Session]:
    db = new_session()
    try:
        yield db
    finally:
        db.close()
