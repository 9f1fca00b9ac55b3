from __future__ import annotations

import hashlib
import json
import re
from pathlib import Path
from typing import Any, Optional

import requests

from .config import DATASET_URL, USER_AGENT
from .errors import FetchError


_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+", re.IGNORECASE)


def fetch_dataset(
    *,
    url: str = DATASET_URL,
    cache_dir: Optional[Path] = None,
    refresh: bool = False,
    session: Optional[requests.Session] = None,
    timeout: float = 60,
) -> list[dict[str, Any]]:
    """Download the cyclist dataset and return its raw (untyped) records.

    With a cache_dir the response body is stored on disk and reused on the next
    call unless refresh is set.
    """
    cache_path = cache_dir / _safe_cache_filename(url) if cache_dir is not None else None
    if cache_path is not None and cache_path.exists() and not refresh:
        return decode_dataset(cache_path.read_bytes(), url=url)

    content = _download(url=url, session=session, timeout=timeout)
    data = decode_dataset(content, url=url)
    # Only a response that decoded cleanly is worth caching.
    if cache_path is not None:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_bytes(content)
    return data


def decode_dataset(content: bytes, *, url: str = DATASET_URL) -> list[dict[str, Any]]:
    try:
        data = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise FetchError(url, f"response is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise FetchError(url, f"expected a JSON array, got {type(data).__name__}")
    if not all(isinstance(item, dict) for item in data):
        raise FetchError(url, "expected every array item to be an object")
    return data


def _download(*, url: str, session: Optional[requests.Session], timeout: float) -> bytes:
    sess = session or requests.Session()
    headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    try:
        resp = sess.get(url, headers=headers, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(url, f"download failed: {exc}") from exc
    return resp.content


def _safe_cache_filename(url: str) -> str:
    digest = hashlib.sha1(url.encode("utf-8")).hexdigest()[:16]
    stem = url.rstrip("/").rsplit("/", 1)[-1]
    stem = _NON_ALNUM_RE.sub("-", stem.removesuffix(".json")).strip("-").lower() or "dataset"
    return f"{stem[:40]}_{digest}.json"
