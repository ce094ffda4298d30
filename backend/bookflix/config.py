from __future__ import annotations
import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _csv(value: str | None, default: str) -> List[str]:
    raw = value if value is not None and value.strip() else default
    return [part.strip() for part in raw.split(",") if part.strip()]


def _float(value: str | None, default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int(value: str | None, default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


DATABASE_URL = os.getenv("DATABASE_URL")
DB_POOL_SIZE = _int(os.getenv("DB_POOL_SIZE"), 5)
DB_MAX_OVERFLOW = _int(os.getenv("DB_MAX_OVERFLOW"), 10)

# comma separated; "*" allows any origin
FRONTEND_ORIGINS = _csv(os.getenv("FRONTEND_ORIGIN"), "*")

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").upper()

OUTLIER_Z_THRESHOLD = _float(os.getenv("OUTLIER_Z_THRESHOLD"), 2.0)
MIN_POSITIVE_REVIEWS = _int(os.getenv("MIN_POSITIVE_REVIEWS"), 20)


def log_level_name() -> str:
    return LOG_LEVEL
