from __future__ import annotations

from typing import Optional


class DatasetError(Exception):
    """Base error for anything that stops the dataset from being charted."""


class FetchError(DatasetError):
    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{message} ({url})")
        self.url = url
        self.message = message


class RecordParseError(DatasetError):
    def __init__(self, message: str, *, index: Optional[int] = None, field: Optional[str] = None) -> None:
        where = []
        if index is not None:
            where.append(f"record {index}")
        if field is not None:
            where.append(f"field {field}")
        prefix = f"{', '.join(where)}: " if where else ""
        super().__init__(f"{prefix}{message}")
        self.index = index
        self.field = field
        self.message = message
