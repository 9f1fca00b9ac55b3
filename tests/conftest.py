"""Shared fixtures for the chart tests.

Provides:
- raw_records / records: a small slice of the cyclist dataset
- fake_session: factory for a requests.Session stand-in (no network)
"""

from __future__ import annotations

import copy
import json

import pytest
import requests

from dopingplot.config import DEFAULT_LAYOUT
from dopingplot.records import parse_records
from dopingplot.scales import build_scales


SAMPLE_RAW = [
    {
        "Time": "36:50",
        "Place": 1,
        "Seconds": 2210,
        "Name": "Marco Pantani",
        "Year": 1995,
        "Nationality": "ITA",
        "Doping": "Alleged drug use during 1995 due to high hematocrit levels",
        "URL": "https://en.wikipedia.org/wiki/Marco_Pantani#Alleged_drug_use",
    },
    {
        "Time": "36:50",
        "Place": 2,
        "Seconds": 2210,
        "Name": "Lance Armstrong",
        "Year": 2001,
        "Nationality": "USA",
        "Doping": "Admitted",
        "URL": "",
    },
    {
        "Time": "37:15",
        "Place": 3,
        "Seconds": 2235,
        "Name": "Piotr Ugrumov",
        "Year": 1994,
        "Nationality": "LAT",
        "Doping": "",
        "URL": "",
    },
    {
        "Time": "39:12",
        "Place": "4",
        "Seconds": 2352,
        "Name": "Nairo Quintana",
        "Year": 2015,
        "Nationality": "COL",
        "Doping": "",
        "URL": "",
    },
]


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Records every GET and answers with a fixed response or error."""

    def __init__(self, *, content: bytes = b"", status_code: int = 200, error: Exception | None = None) -> None:
        self.content = content
        self.status_code = status_code
        self.error = error
        self.calls: list[dict] = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return FakeResponse(self.content, self.status_code)


@pytest.fixture
def raw_records():
    return copy.deepcopy(SAMPLE_RAW)


@pytest.fixture
def records(raw_records):
    return parse_records(raw_records)


@pytest.fixture
def scales(records):
    return build_scales(records, DEFAULT_LAYOUT)


@pytest.fixture
def fake_session():
    def _make(payload=None, **kwargs):
        if payload is not None:
            kwargs.setdefault("content", json.dumps(payload).encode("utf-8"))
        return FakeSession(**kwargs)

    return _make
