"""Tests for downloading and decoding the dataset (network stubbed)."""

from __future__ import annotations

import pytest
import requests

from dopingplot.config import DATASET_URL, USER_AGENT
from dopingplot.errors import DatasetError, FetchError
from dopingplot.fetch import _safe_cache_filename, decode_dataset, fetch_dataset


def test_returns_raw_records(fake_session, raw_records):
    session = fake_session(raw_records)
    data = fetch_dataset(session=session)
    assert data == raw_records
    assert len(session.calls) == 1
    assert session.calls[0]["url"] == DATASET_URL
    assert session.calls[0]["headers"]["User-Agent"] == USER_AGENT


def test_http_error_becomes_fetch_error(fake_session):
    session = fake_session(content=b"Not found", status_code=404)
    with pytest.raises(FetchError) as excinfo:
        fetch_dataset(url="https://example.invalid/data.json", session=session)
    assert excinfo.value.url == "https://example.invalid/data.json"
    assert isinstance(excinfo.value, DatasetError)


def test_network_error_becomes_fetch_error(fake_session):
    session = fake_session(error=requests.ConnectionError("connection refused"))
    with pytest.raises(FetchError, match="download failed"):
        fetch_dataset(session=session)


@pytest.mark.parametrize(
    "content",
    [b"<html>oops</html>", b'{"Time": "36:50"}', b"[1, 2, 3]", b"\xff\xfe"],
)
def test_malformed_payloads_rejected(content):
    with pytest.raises(FetchError):
        decode_dataset(content)


def test_cache_is_reused(tmp_path, fake_session, raw_records):
    first = fake_session(raw_records)
    fetch_dataset(cache_dir=tmp_path, session=first)
    assert len(list(tmp_path.iterdir())) == 1

    offline = fake_session(error=requests.ConnectionError("offline"))
    data = fetch_dataset(cache_dir=tmp_path, session=offline)
    assert data == raw_records
    assert offline.calls == []


def test_refresh_bypasses_cache(tmp_path, fake_session, raw_records):
    fetch_dataset(cache_dir=tmp_path, session=fake_session(raw_records))

    updated = raw_records[:1]
    session = fake_session(updated)
    data = fetch_dataset(cache_dir=tmp_path, refresh=True, session=session)
    assert data == updated
    assert len(session.calls) == 1


def test_failed_download_leaves_no_cache(tmp_path, fake_session):
    with pytest.raises(FetchError):
        fetch_dataset(cache_dir=tmp_path, session=fake_session(content=b"", status_code=500))
    assert list(tmp_path.iterdir()) == []


def test_cache_filename_is_stable():
    name = _safe_cache_filename(DATASET_URL)
    assert name == _safe_cache_filename(DATASET_URL)
    assert name.startswith("cyclist-data_")
    assert name.endswith(".json")
