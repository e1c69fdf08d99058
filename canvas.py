import io
from typing import Tuple

import matplotlib

matplotlib.use("Agg")
import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Ellipse, Rectangle

from colors import BLACK, Color

# power of two: width / DPI * DPI is exact, so the PNG is exactly width x height
DPI = 64

# classic bitmap font cells (width, height) in pixels, by font id
FONTS = {
    1: (5, 8),
    2: (6, 13),
    3: (7, 13),
    4: (8, 16),
    5: (9, 15),
}
MONO_ADVANCE = 0.6  # advance / em of a monospace face, used to size text to the cell


def _font(font_id: int) -> Tuple[int, int]:
    # out of range ids clamp to the nearest built-in font
    return FONTS[min(max(int(font_id), 1), 5)]


def glyph_width(font_id: int) -> int:
    return _font(font_id)[0]


def glyph_height(font_id: int) -> int:
    return _font(font_id)[1]


def text_width(font_id: int, text: str) -> int:
    return glyph_width(font_id) * len(text)


def _pt(px: float) -> float:
    return px * 72.0 / DPI


class Surface:
    """
    A width x height raster backed by a matplotlib Figure.
    Coordinates are pixels, origin top-left, y grows downward.
    Every draw call lands on top of the previous ones.
    """

    def __init__(self, width: int, height: int, background: Color = BLACK):
        self.width = width
        self.height = height
        self.figure = Figure(figsize=(width / DPI, height / DPI), dpi=DPI)
        self._canvas = FigureCanvasAgg(self.figure)
        self.ax = self.figure.add_axes([0, 0, 1, 1])
        self.ax.set_axis_off()
        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)
        self.ax.set_autoscale_on(False)
        self._z = 0
        self.fill(0, 0, background)

    def _next_z(self) -> int:
        self._z += 1
        return self._z

    def fill(self, x: int, y: int, color: Color) -> None:
        """Flood the surface from (x, y); the surface is one region, so this repaints everything."""
        for artist in list(self.ax.lines) + list(self.ax.patches) + list(self.ax.texts):
            artist.remove()
        self._z = 0
        self.figure.patch.set_facecolor(color.as_unit())

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: Color) -> None:
        line = Line2D(
            [x1 + 0.5, x2 + 0.5], [y1 + 0.5, y2 + 0.5],
            color=color.as_unit(), linewidth=_pt(1), antialiased=False,
            solid_capstyle="projecting", zorder=self._next_z(),
        )
        self.ax.add_line(line)

    def draw_filled_rect(self, x1: float, y1: float, x2: float, y2: float, color: Color) -> None:
        left, right = sorted((x1, x2))
        top, bottom = sorted((y1, y2))
        # both corners inclusive
        rect = Rectangle(
            (left, top), right - left + 1, bottom - top + 1,
            facecolor=color.as_unit(), edgecolor="none", linewidth=0,
            antialiased=False, zorder=self._next_z(),
        )
        self.ax.add_patch(rect)

    def draw_filled_ellipse(self, cx: float, cy: float, w: float, h: float, color: Color) -> None:
        ellipse = Ellipse(
            (cx + 0.5, cy + 0.5), w, h,
            facecolor=color.as_unit(), edgecolor="none", linewidth=0,
            zorder=self._next_z(),
        )
        self.ax.add_patch(ellipse)

    def draw_text(self, font_id: int, x: float, y: float, text: str, color: Color) -> None:
        """(x, y) is the top-left corner of the text cell."""
        em_px = glyph_width(font_id) / MONO_ADVANCE
        self.ax.text(
            x, y, text,
            color=color.as_unit(), fontsize=_pt(em_px), family="monospace",
            ha="left", va="top", clip_on=False, zorder=self._next_z(),
        )

    def to_array(self) -> np.ndarray:
        """RGB pixels, shape (height, width, 3)."""
        self._canvas.draw()
        return np.asarray(self._canvas.buffer_rgba())[:, :, :3].copy()

    def encode_png(self) -> bytes:
        buf = io.BytesIO()
        self.figure.savefig(buf, format="png", dpi=DPI, facecolor=self.figure.get_facecolor())
        return buf.getvalue()

    def close(self) -> None:
        self.figure.clear()


def create_surface(width: int, height: int, background: Color = BLACK) -> Surface:
    return Surface(width, height, background)
