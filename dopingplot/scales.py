from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Hashable, Sequence

import matplotlib
from matplotlib.colors import to_hex
from matplotlib.ticker import MaxNLocator

from .config import ChartLayout
from .errors import DatasetError
from .records import TIME_ANCHOR, Record, format_time


# Tick mantissas: years land on 1/2/5-steps, times on 10/15/20/30/60-second steps.
_YEAR_STEPS = [1, 2, 5, 10]
_TIME_STEPS = [1, 1.5, 2, 3, 6, 10]
_TICK_BINS = 12


@dataclass
class LinearScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return r0 + (r1 - r0) * 0.5
        return r0 + (float(value) - d0) / (d1 - d0) * (r1 - r0)

    def ticks(self, count: int = _TICK_BINS) -> list[float]:
        lo, hi = sorted(self.domain)
        locator = MaxNLocator(nbins=count, steps=_YEAR_STEPS, integer=True)
        return _within(locator.tick_values(lo, hi), lo, hi)


@dataclass
class TimeScale:
    domain: tuple[datetime, datetime]
    range: tuple[float, float]

    def __call__(self, value: datetime) -> float:
        d0, d1 = (_seconds(d) for d in self.domain)
        r0, r1 = self.range
        if d1 == d0:
            return r0 + (r1 - r0) * 0.5
        return r0 + (_seconds(value) - d0) / (d1 - d0) * (r1 - r0)

    def ticks(self, count: int = _TICK_BINS) -> list[datetime]:
        lo, hi = sorted(_seconds(d) for d in self.domain)
        locator = MaxNLocator(nbins=count, steps=_TIME_STEPS)
        return [TIME_ANCHOR + timedelta(seconds=s) for s in _within(locator.tick_values(lo, hi), lo, hi)]


@dataclass
class OrdinalScale:
    """Assigns palette colours to keys in the order the keys are first seen."""

    palette: Sequence[str]
    domain: list[Hashable] = field(default_factory=list)

    def __call__(self, key: Hashable) -> str:
        if key not in self.domain:
            self.domain.append(key)
        return self.palette[self.domain.index(key) % len(self.palette)]


@dataclass
class Axis:
    scale: LinearScale | TimeScale
    orient: str  # "bottom" | "left"
    tick_format: Callable[[object], str]

    def ticks(self) -> list[tuple[float, str]]:
        return [(self.scale(value), self.tick_format(value)) for value in self.scale.ticks()]


@dataclass
class ChartScales:
    x: LinearScale
    y: TimeScale
    color: OrdinalScale
    x_axis: Axis
    y_axis: Axis


def category10() -> list[str]:
    cmap = matplotlib.colormaps["tab10"]
    return [to_hex(c) for c in cmap.colors]


def build_scales(records: Sequence[Record], layout: ChartLayout) -> ChartScales:
    if not records:
        raise DatasetError("no records to chart")

    x = LinearScale(
        domain=(min(r.year - 1 for r in records), max(r.year + 1 for r in records)),
        range=(0, layout.width),
    )
    y = TimeScale(
        domain=(min(r.time for r in records), max(r.time for r in records)),
        range=(0, layout.height),
    )

    color = OrdinalScale(palette=category10())
    for r in records:
        color(r.has_doping)

    return ChartScales(
        x=x,
        y=y,
        color=color,
        x_axis=Axis(scale=x, orient="bottom", tick_format=lambda v: f"{int(round(float(v)))}"),
        y_axis=Axis(scale=y, orient="left", tick_format=format_time),
    )


def _seconds(value: datetime) -> float:
    return (value - TIME_ANCHOR).total_seconds()


def _within(values: Sequence[float], lo: float, hi: float) -> list[float]:
    eps = (hi - lo) * 1e-9
    return [float(v) for v in values if lo - eps <= v <= hi + eps]
