"""
Pixel geometry for line and bar charts.

Everything here is pure: given canvas dimensions, a dataset (ordered Series)
and its value range, compute where grid lines, points, bars and labels go.
Pixel y grows downward; the data origin is the bottom-left of the plot area.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
import pandas as pd

from dataset import ValueRange
from errors import DegenerateCanvasError

GRID_STEPS = 10
BAR_FILL = 0.8  # shares of a slot: bar + gap
BAR_GAP = 0.2
DEGENERATE_FRACTION = 0.5
VALUE_LABEL_OFFSET = 15
KEY_LABEL_OFFSET = 5
GRID_LABEL_PADDING = 10


@dataclass(frozen=True)
class PlotArea:
    width: int
    height: int
    margin: int

    @classmethod
    def from_canvas(cls, width: int, height: int, margin: int) -> "PlotArea":
        for name, v in (("width", width), ("height", height), ("margin", margin)):
            if isinstance(v, bool) or not isinstance(v, int):
                raise DegenerateCanvasError(f"{name} must be an int, got {v!r}")
        if width <= 0 or height <= 0:
            raise DegenerateCanvasError(f"canvas must be positive, got {width}x{height}")
        if margin < 0:
            raise DegenerateCanvasError(f"margin must not be negative, got {margin}")
        if 2 * margin >= width or 2 * margin >= height:
            raise DegenerateCanvasError(
                f"margin {margin} leaves no plot area on a {width}x{height} canvas"
            )
        return cls(width=width, height=height, margin=margin)

    @property
    def left(self) -> int:
        return self.margin

    @property
    def top(self) -> int:
        return self.margin

    @property
    def right(self) -> int:
        return self.width - self.margin

    @property
    def bottom(self) -> int:
        return self.height - self.margin

    @property
    def graph_width(self) -> int:
        return self.width - 2 * self.margin

    @property
    def graph_height(self) -> int:
        return self.height - 2 * self.margin

    @property
    def mid_y(self) -> float:
        return self.bottom - DEGENERATE_FRACTION * self.graph_height


@dataclass(frozen=True)
class PointLayout:
    index: int
    key: str
    value: float
    x: float
    y: float


@dataclass(frozen=True)
class BarLayout:
    index: int
    key: str
    value: float
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def width(self) -> float:
        return self.x2 - self.x1


@dataclass(frozen=True)
class GridLine:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class GridLayout:
    horizontal: List[GridLine]
    vertical: List[GridLine]
    # (y of the horizontal line, interpolated value) bottom to top
    labels: List[Tuple[float, float]]


def fraction(value: float, vr: ValueRange) -> float:
    """Position of value inside [min, max]; constant ranges sit at mid-height."""
    if vr.is_degenerate:
        return DEGENERATE_FRACTION
    return (value / 2 - vr.min_value / 2) / vr.half_span


def value_to_y(value: float, vr: ValueRange, area: PlotArea) -> float:
    return area.bottom - fraction(value, vr) * area.graph_height


def point_positions(series: pd.Series, area: PlotArea, vr: ValueRange) -> List[PointLayout]:
    n = len(series)
    points = []
    for i, (key, value) in enumerate(series.items()):
        x = area.left + (i / n) * area.graph_width
        points.append(PointLayout(i, key, value, x, value_to_y(value, vr, area)))
    return points


def slot_width(area, n):
    return area.graph_width / n


def bar_slots(series: pd.Series, area: PlotArea, vr: ValueRange) -> List[BarLayout]:
    n = len(series)
    slot = slot_width(area, n)
    bar_width = slot * BAR_FILL
    gap = slot * BAR_GAP

    bars = []
    for i, (key, value) in enumerate(series.items()):
        x1 = area.left + gap / 2 + i * (bar_width + gap)
        y1 = value_to_y(value, vr, area)
        bars.append(BarLayout(i, key, value, x1, y1, x1 + bar_width, float(area.bottom)))
    return bars


def grid_lines(area: PlotArea, vr: ValueRange, steps: int = GRID_STEPS) -> GridLayout:
    i = np.arange(steps + 1)
    ys = area.bottom - (area.graph_height / steps) * i
    xs = area.left + (area.graph_width / steps) * i
    t = i / steps
    # weighted form stays finite when max - min would overflow
    values = vr.min_value * (1 - t) + vr.max_value * t

    horizontal = [GridLine(area.left, float(y), area.right, float(y)) for y in ys]
    vertical = [GridLine(float(x), area.bottom, float(x), area.top) for x in xs]
    labels = [(float(y), round(float(v), 1)) for y, v in zip(ys, values)]
    return GridLayout(horizontal=horizontal, vertical=vertical, labels=labels)


def format_number(value):
    """10.0 -> "10", 15.5 -> "15.5", 0.1 + 0.2 -> "0.3" (14 significant digits)."""
    v = float(value)
    if v.is_integer() and abs(v) < 1e15:
        return str(int(v))
    return format(v, ".14g")


# --- label anchors (top-left corner of the text box) ---

def centered_on(x_center, text, glyph_w):
    return x_center - glyph_w * len(text) / 2


def centered_in_span(x1, span, text, glyph_w):
    return x1 + (span - glyph_w * len(text)) / 2


def grid_label_anchor(area, y, text, glyph_w, glyph_h):
    """Right-aligned against the plot area's left edge, vertically centered on the line."""
    return area.left - glyph_w * len(text) - GRID_LABEL_PADDING, y - glyph_h / 2


def title_anchor(area, text, glyph_w):
    return (area.width - glyph_w * len(text)) / 2, area.margin / 2


def value_label_y(y):
    return y - VALUE_LABEL_OFFSET


def key_label_y(area):
    return area.bottom + KEY_LABEL_OFFSET
