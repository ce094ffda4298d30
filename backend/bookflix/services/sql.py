from __future__ import annotations
from typing import Any, Dict, List, Mapping

from sqlalchemy import text
from sqlalchemy.orm import Session


def like_pattern(value: str | None) -> str:
    """
    Substring pattern for ILIKE with the LIKE wildcards in `value` escaped.
    Blank input matches everything; otherwise the value is kept as given.
    """
    s = value or ""
    if not s.strip():
        return "%%"
    s = s.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{s}%"


def fetch_all(db: Session, sql: str, params: Mapping[str, Any] | None = None) -> List[Dict[str, Any]]:
    rows = db.execute(text(sql), dict(params or {})).mappings().all()
    return [dict(r) for r in rows]
