from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Optional

from .records import Record


HIDDEN = "hidden"
VISIBLE = "visible"

VISIBLE_OPACITY = 0.9
# The panel sits slightly above the pointer.
POINTER_OFFSET_Y = 28


@dataclass(frozen=True)
class Position:
    x: float
    y: float


class TooltipController:
    """Hover panel shared by every point of the chart.

    One panel, one visibility flag: a show() while already visible just
    replaces the content and position.
    """

    def __init__(self) -> None:
        self.state = HIDDEN
        self.opacity = 0.0
        self.html = ""
        self.data_year: Optional[int] = None
        self.left: Optional[float] = None
        self.top: Optional[float] = None

    @property
    def visible(self) -> bool:
        return self.state == VISIBLE

    def show(self, record: Record, position: Position) -> None:
        self.state = VISIBLE
        self.opacity = VISIBLE_OPACITY
        self.data_year = record.year
        self.html = self.content(record)
        self.left = position.x
        self.top = position.y - POINTER_OFFSET_Y

    def hide(self) -> None:
        self.state = HIDDEN
        self.opacity = 0.0

    @staticmethod
    def content(record: Record) -> str:
        text = (
            f"{_esc(record.name)}: {_esc(record.nationality)}"
            f"<br/>Year: {record.year}, Time: {record.time_label}"
        )
        if record.has_doping:
            text += f"<br/><br/>{_esc(record.doping)}"
        return text

    def style(self) -> str:
        parts = [f"opacity: {_fmt(self.opacity)}"]
        if self.left is not None and self.top is not None:
            parts.append(f"left: {_fmt(self.left)}px")
            parts.append(f"top: {_fmt(self.top)}px")
        return "; ".join(parts) + ";"


def _esc(text: str) -> str:
    return html.escape(str(text), quote=True)


def _fmt(value: float) -> str:
    return f"{float(value):g}"
