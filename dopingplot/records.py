from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional

from .errors import RecordParseError


# Climb times only carry minutes and seconds; every parsed time shares this date.
TIME_ANCHOR = datetime(1970, 1, 1, tzinfo=timezone.utc)
TIME_FORMAT = "%M:%S"


@dataclass(frozen=True)
class Record:
    rank: int
    time: datetime  # anchored on TIME_ANCHOR
    year: int
    name: str
    nationality: str
    doping: str  # "" = no allegation
    seconds: Optional[int] = None
    url: str = ""

    @property
    def has_doping(self) -> bool:
        return self.doping != ""

    @property
    def time_label(self) -> str:
        return format_time(self.time)

    @property
    def time_iso(self) -> str:
        return iso_timestamp(self.time)


def parse_time(value: str) -> datetime:
    """Parse "MM:SS" into a datetime on TIME_ANCHOR.

    Minutes past 59 roll over into hours instead of failing.
    """
    text = (value or "").strip() if isinstance(value, str) else ""
    parts = text.split(":")
    if len(parts) != 2 or not all(p.isascii() and p.isdigit() for p in parts):
        raise RecordParseError(f"expected MM:SS, got {value!r}")
    try:
        minutes, seconds = (int(parts[0]), int(parts[1]))
        return TIME_ANCHOR + timedelta(minutes=minutes, seconds=seconds)
    except (ValueError, OverflowError) as exc:
        raise RecordParseError(f"time out of range: {value!r}") from exc


def format_time(value: datetime) -> str:
    return value.strftime(TIME_FORMAT)


def iso_timestamp(value: datetime) -> str:
    """UTC ISO 8601 with millisecond precision, e.g. 1970-01-01T00:36:50.000Z."""
    utc = value.astimezone(timezone.utc) if value.tzinfo else value
    millis = utc.microsecond // 1000
    return f"{utc.strftime('%Y-%m-%dT%H:%M:%S')}.{millis:03d}Z"


def parse_record(raw: Any, *, index: Optional[int] = None) -> Record:
    if not isinstance(raw, dict):
        raise RecordParseError(f"expected an object, got {type(raw).__name__}", index=index)

    try:
        time = parse_time(raw.get("Time"))
    except RecordParseError as exc:
        raise RecordParseError(exc.message, index=index, field="Time") from exc

    return Record(
        rank=_required_int(raw, "Place", index=index),
        time=time,
        year=_required_int(raw, "Year", index=index),
        name=_text(raw.get("Name")),
        nationality=_text(raw.get("Nationality")),
        doping=_text(raw.get("Doping")),
        seconds=_optional_int(raw.get("Seconds")),
        url=_text(raw.get("URL")),
    )


def parse_records(raw_records: Iterable[Any]) -> list[Record]:
    return [parse_record(raw, index=i) for i, raw in enumerate(raw_records)]


def record_to_dict(record: Record) -> dict[str, Any]:
    return {
        "rank": record.rank,
        "year": record.year,
        "time": record.time_label,
        "time_iso": record.time_iso,
        "name": record.name,
        "nationality": record.nationality,
        "doping": record.doping,
        "seconds": record.seconds,
        "url": record.url,
    }


def _required_int(raw: dict[str, Any], field: str, *, index: Optional[int]) -> int:
    value = _optional_int(raw.get(field))
    if value is None:
        raise RecordParseError(f"expected a whole number, got {raw.get(field)!r}", index=index, field=field)
    return value


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
