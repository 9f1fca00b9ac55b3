from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import requests

from .config import DATASET_URL, DEFAULT_LAYOUT, ChartLayout, default_out_dir
from .errors import DatasetError
from .export_site import export_site
from .fetch import fetch_dataset
from .records import Record, parse_records


@dataclass(frozen=True)
class BuildSiteSummary:
    records: int
    with_doping: int
    min_year: int
    max_year: int
    out_dir: Path
    index_path: Path


def load_records(
    *,
    url: str = DATASET_URL,
    cache_dir: Optional[Path] = None,
    refresh: bool = False,
    session: Optional[requests.Session] = None,
) -> list[Record]:
    raw = fetch_dataset(url=url, cache_dir=cache_dir, refresh=refresh, session=session)
    return parse_records(raw)


def build_site(
    *,
    url: str = DATASET_URL,
    out_dir: Path = default_out_dir(),
    cache_dir: Optional[Path] = None,
    refresh: bool = False,
    layout: ChartLayout = DEFAULT_LAYOUT,
    session: Optional[requests.Session] = None,
) -> Optional[BuildSiteSummary]:
    """Fetch, parse and export the chart.

    Dataset failures are reported on stderr and yield None; nothing is written
    to out_dir in that case.
    """
    try:
        records = load_records(url=url, cache_dir=cache_dir, refresh=refresh, session=session)
        index_path = export_site(records=records, out_dir=out_dir, layout=layout, source_url=url)
    except DatasetError as exc:
        print(f"Could not build chart: {exc}", file=sys.stderr)
        return None

    return BuildSiteSummary(
        records=len(records),
        with_doping=sum(1 for r in records if r.has_doping),
        min_year=min(r.year for r in records),
        max_year=max(r.year for r in records),
        out_dir=out_dir,
        index_path=index_path,
    )
