from __future__ import annotations
from typing import Any, Iterable, Iterator, List, TypeVar

import pandas as pd

T = TypeVar("T")


def clean_str(v: Any) -> str | None:
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return None
    s = str(v).strip()
    if not s or s.lower() == "nan" or s == "\\N":
        return None
    return s


def chunks(items: Iterable[T], size: int) -> Iterator[List[T]]:
    batch: List[T] = []
    for item in items:
        batch.append(item)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch
