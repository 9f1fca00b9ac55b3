from __future__ import annotations

import json
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from .config import DATASET_URL, DEFAULT_LAYOUT, ChartLayout
from .records import Record, record_to_dict
from .render import render_document
from .scales import build_scales
from .tooltip import TooltipController


STATIC_ASSETS = ("styles.css", "tooltip.js")


def export_site(
    *,
    records: Sequence[Record],
    out_dir: Path,
    layout: ChartLayout = DEFAULT_LAYOUT,
    source_url: str = DATASET_URL,
) -> Path:
    """
    Write a static, self-contained version of the chart.

    Layout created in out_dir:
      - index.html (svg chart + tooltip panel)
      - static/styles.css, static/tooltip.js
      - api/records.json (the parsed records the chart was drawn from)
    """
    web_src = Path(__file__).resolve().parent / "web_static"
    for name in STATIC_ASSETS:
        if not (web_src / name).exists():
            raise FileNotFoundError(f"Missing web_static asset: {web_src / name}")

    # Scales reject an empty record set, so nothing is written for it.
    scales = build_scales(records, layout)
    tooltip = TooltipController()
    document = render_document(records, layout=layout, scales=scales, tooltip=tooltip)

    out_dir.mkdir(parents=True, exist_ok=True)
    _clean_dir(out_dir / "static")
    _clean_dir(out_dir / "api")
    _unlink_if_exists(out_dir / "index.html")
    _unlink_if_exists(out_dir / ".nojekyll")

    (out_dir / "static").mkdir(parents=True, exist_ok=True)
    for name in STATIC_ASSETS:
        shutil.copyfile(web_src / name, out_dir / "static" / name)
    (out_dir / ".nojekyll").write_text("", encoding="utf-8")

    index_path = out_dir / "index.html"
    index_path.write_text(document, encoding="utf-8")

    generated_at = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    _write_json(
        out_dir / "api" / "records.json",
        {
            "source_url": source_url,
            "generated_at": generated_at,
            "count": len(records),
            "records": [record_to_dict(r) for r in records],
        },
    )
    return index_path


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    raw = json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    path.write_text(raw, encoding="utf-8")


def _clean_dir(path: Path) -> None:
    if path.exists():
        shutil.rmtree(path)


def _unlink_if_exists(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        return
