from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


DATASET_URL = "https://raw.githubusercontent.com/freeCodeCamp/ProjectReferenceData/master/cyclist-data.json"

USER_AGENT = "dopingplot/0.1 (contact: local)"

CANVAS_WIDTH = 920
CANVAS_HEIGHT = 630

TITLE = "Doping in Professional Bicycle Racing"
SUBTITLE = "35 Fastest times up Alpe d'Huez"
X_LABEL = "Year"
Y_LABEL = "Best Time (minutes)"
SIDE_LABEL = "Time in Minutes"
LEGEND_LABELS = {
    True: "Riders with doping allegations",
    False: "No doping allegations",
}


@dataclass(frozen=True)
class Margin:
    top: int
    right: int
    bottom: int
    left: int


DEFAULT_MARGIN = Margin(top=100, right=20, bottom=30, left=60)


@dataclass(frozen=True)
class ChartLayout:
    canvas_width: int = CANVAS_WIDTH
    canvas_height: int = CANVAS_HEIGHT
    margin: Margin = DEFAULT_MARGIN

    @property
    def width(self) -> int:
        return self.canvas_width - self.margin.left - self.margin.right

    @property
    def height(self) -> int:
        return self.canvas_height - self.margin.top - self.margin.bottom


DEFAULT_LAYOUT = ChartLayout()


def default_data_dir() -> Path:
    return Path("data")


def default_cache_dir() -> Path:
    return default_data_dir() / "cache" / "cyclist"


def default_out_dir() -> Path:
    return Path("docs")
