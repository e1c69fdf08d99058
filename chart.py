from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Optional, Union

import layout
from canvas import Surface, create_surface, glyph_height, glyph_width
from colors import BLACK, GRID_GRAY, TEXT_GRAY, Color, resolve_series_color
from dataset import ValueRange, normalize_dataset
from layout import PlotArea

log = logging.getLogger(__name__)

LABEL_FONT = 5
ANNOTATION_FONT = 2
MARKER_SIZE = 5


class ChartLayoutEngine:
    """
    Lays out a single line or bar series on a raster canvas.

    One engine owns one surface; draw calls composite in call order
    (background, grid, series, annotations), so use one engine per chart.
    """

    def __init__(
        self,
        width: int = 1000,
        height: int = 500,
        margin: int = 50,
        surface_factory: Callable[[int, int], Surface] = create_surface,
    ):
        self.area = PlotArea.from_canvas(width, height, margin)
        self._surface_factory = surface_factory
        self._background = BLACK
        self.surface = surface_factory(width, height)
        self.set_background_color()

    @property
    def width(self) -> int:
        return self.area.width

    @property
    def height(self) -> int:
        return self.area.height

    @property
    def margin(self) -> int:
        return self.area.margin

    @property
    def plot_area(self) -> PlotArea:
        return self.area

    def set_size(self, width: int, height: int) -> None:
        """New surface of the given size; anything drawn so far is dropped."""
        area = PlotArea.from_canvas(width, height, self.margin)
        self.surface.close()
        self.area = area
        self.surface = self._surface_factory(width, height)
        self.surface.fill(0, 0, self._background)

    def set_background_color(self, r: int = 0, g: int = 0, b: int = 0) -> None:
        self._background = Color(r, g, b)
        self.surface.fill(0, 0, self._background)

    def set_label(self, text: str, r: int = 255, g: int = 255, b: int = 255) -> None:
        color = Color(r, g, b)
        x, y = layout.title_anchor(self.area, text, glyph_width(LABEL_FONT))
        self.surface.draw_text(LABEL_FONT, x, y, text, color)

    def draw_grid(self, max_value: float, min_value: float) -> None:
        grid = layout.grid_lines(self.area, ValueRange(min_value, max_value))
        gw, gh = glyph_width(ANNOTATION_FONT), glyph_height(ANNOTATION_FONT)

        for h, v, (y, value) in zip(grid.horizontal, grid.vertical, grid.labels):
            self.surface.draw_line(h.x1, h.y1, h.x2, h.y2, GRID_GRAY)
            self.surface.draw_line(v.x1, v.y1, v.x2, v.y2, GRID_GRAY)

            label = layout.format_number(value)
            tx, ty = layout.grid_label_anchor(self.area, y, label, gw, gh)
            self.surface.draw_text(ANNOTATION_FONT, tx, ty, label, GRID_GRAY)

    def _prepare(self, data, hex_color, kind, **columns):
        series = normalize_dataset(data, **columns)
        vr = ValueRange.of(series)
        degenerate = vr.check()
        if degenerate is not None:
            log.debug("%s; drawing %d points at mid-height", degenerate, len(series))
        color = resolve_series_color(hex_color, kind)
        self.draw_grid(vr.max_value, vr.min_value)
        return series, vr, color

    def _annotate(self, x1, span, top_y, key, value, show_values, show_keys):
        gw = glyph_width(ANNOTATION_FONT)
        if show_values:
            label = layout.format_number(value)
            self.surface.draw_text(ANNOTATION_FONT, layout.centered_in_span(x1, span, label, gw),
                                   layout.value_label_y(top_y), label, TEXT_GRAY)
        if show_keys:
            self.surface.draw_text(ANNOTATION_FONT, layout.centered_in_span(x1, span, key, gw),
                                   layout.key_label_y(self.area), key, TEXT_GRAY)

    def draw_lines(
        self,
        data: Any,
        hex_color: str = "#ff0000",
        show_values: bool = True,
        show_keys: bool = True,
        key_column: Optional[str] = None,
        value_column: Optional[str] = None,
    ) -> None:
        series, vr, color = self._prepare(
            data, hex_color, "line", key_column=key_column, value_column=value_column
        )

        previous = None
        for p in layout.point_positions(series, self.area, vr):
            if previous is not None:
                self.surface.draw_line(previous.x, previous.y, p.x, p.y, color)
            previous = p
            self.surface.draw_filled_ellipse(p.x, p.y, MARKER_SIZE, MARKER_SIZE, color)
            self._annotate(p.x, 0, p.y, p.key, p.value, show_values, show_keys)

    def draw_bars(
        self,
        data: Any,
        hex_color: str = "#00ff00",
        show_values: bool = True,
        show_keys: bool = True,
        key_column: Optional[str] = None,
        value_column: Optional[str] = None,
    ) -> None:
        series, vr, color = self._prepare(
            data, hex_color, "bar", key_column=key_column, value_column=value_column
        )

        for bar in layout.bar_slots(series, self.area, vr):
            self.surface.draw_filled_rect(bar.x1, bar.y1, bar.x2, bar.y2, color)
            self._annotate(bar.x1, bar.width, bar.y1, bar.key, bar.value, show_values, show_keys)

    def render(self) -> bytes:
        """PNG bytes of everything drawn so far."""
        return self.surface.encode_png()

    def save(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.write_bytes(self.render())
        return path

    def close(self) -> None:
        self.surface.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def render_series_png(
    kind: str,
    data: Any,
    width: int = 1000,
    height: int = 500,
    margin: int = 50,
    hex_color: Optional[str] = None,
    title: Optional[str] = None,
    background: Color = BLACK,
    show_values: bool = True,
    show_keys: bool = True,
) -> bytes:
    """One-shot helper: background, grid, series, title -> PNG bytes."""
    if kind not in ("line", "bar"):
        raise ValueError(f"Unknown chart kind '{kind}'. Available: ['bar', 'line']")

    with ChartLayoutEngine(width, height, margin) as engine:
        engine.set_background_color(*background.as_tuple())
        draw = engine.draw_lines if kind == "line" else engine.draw_bars
        if hex_color is None:
            draw(data, show_values=show_values, show_keys=show_keys)
        else:
            draw(data, hex_color, show_values=show_values, show_keys=show_keys)
        if title:
            engine.set_label(title)
        return engine.render()
