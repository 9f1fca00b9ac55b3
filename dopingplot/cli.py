from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import DATASET_URL, default_cache_dir, default_out_dir
from .errors import DatasetError
from .site_build import build_site, load_records
from .webapp import run_web


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m dopingplot",
        description="Alpe d'Huez climb times -> static doping scatterplot",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    build = sub.add_parser("build", help="Fetch the dataset and export the chart as a static site")
    build.add_argument("--url", type=str, default=DATASET_URL, help="Dataset URL (JSON array)")
    build.add_argument("--out", type=Path, default=default_out_dir(), help="Output folder (e.g. docs/ for GitHub Pages)")
    build.add_argument("--cache-dir", type=Path, default=default_cache_dir(), help="Cache for the downloaded JSON")
    build.add_argument("--no-cache", action="store_true", help="Do not read or write the download cache")
    build.add_argument("--refresh", action="store_true", help="Download again even if a cached copy exists")

    fetch = sub.add_parser("fetch", help="Fetch and parse the dataset, print the records")
    fetch.add_argument("--url", type=str, default=DATASET_URL, help="Dataset URL (JSON array)")
    fetch.add_argument("--cache-dir", type=Path, default=default_cache_dir(), help="Cache for the downloaded JSON")
    fetch.add_argument("--no-cache", action="store_true", help="Do not read or write the download cache")
    fetch.add_argument("--refresh", action="store_true", help="Download again even if a cached copy exists")

    web = sub.add_parser("web", help="Serve an exported chart locally")
    web.add_argument("--site", type=Path, default=default_out_dir(), help="Folder written by 'build'")
    web.add_argument("--host", type=str, default="127.0.0.1", help="Host, e.g. 127.0.0.1")
    web.add_argument("--port", type=int, default=8000, help="Port, e.g. 8000")
    web.add_argument("--no-open", action="store_true", help="Do not open a browser automatically")

    args = parser.parse_args(argv)

    if args.cmd == "build":
        res = build_site(
            url=args.url,
            out_dir=args.out,
            cache_dir=None if args.no_cache else args.cache_dir,
            refresh=bool(args.refresh),
        )
        if res is None:
            return 1
        print(
            "Build done:",
            f"records={res.records}",
            f"doping={res.with_doping}",
            f"years={res.min_year}-{res.max_year}",
            f"out={res.out_dir}",
            sep=" ",
        )
        return 0

    if args.cmd == "fetch":
        try:
            records = load_records(
                url=args.url,
                cache_dir=None if args.no_cache else args.cache_dir,
                refresh=bool(args.refresh),
            )
        except DatasetError as exc:
            print(f"Could not load dataset: {exc}", file=sys.stderr)
            return 1

        if not records:
            print("No records.")
            return 0

        for r in records:
            print(f"{r.rank:>3} | {r.year} | {r.time_label} | {r.name} ({r.nationality}) | {r.doping or '-'}")
        return 0

    if args.cmd == "web":
        run_web(site_dir=args.site, host=args.host, port=int(args.port), open_browser=not bool(args.no_open))
        return 0

    parser.error(f"Unknown command: {args.cmd}")
    return 2
