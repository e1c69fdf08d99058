import pytest

from chart import ChartLayoutEngine


class RecordingSurface:
    """Stands in for canvas.Surface and remembers every call."""

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.calls = []
        self.closed = False

    def _record(self, name, *args):
        self.calls.append((name, args))

    def fill(self, x, y, color):
        self._record("fill", x, y, color)

    def draw_line(self, x1, y1, x2, y2, color):
        self._record("draw_line", x1, y1, x2, y2, color)

    def draw_filled_rect(self, x1, y1, x2, y2, color):
        self._record("draw_filled_rect", x1, y1, x2, y2, color)

    def draw_filled_ellipse(self, cx, cy, w, h, color):
        self._record("draw_filled_ellipse", cx, cy, w, h, color)

    def draw_text(self, font_id, x, y, text, color):
        self._record("draw_text", font_id, x, y, text, color)

    def encode_png(self):
        return b"\x89PNG recorded"

    def close(self):
        self.closed = True

    def named(self, name):
        return [args for n, args in self.calls if n == name]


@pytest.fixture
def recording_engine():
    def make(width=300, height=200, margin=20):
        return ChartLayoutEngine(width, height, margin, surface_factory=RecordingSurface)
    return make


@pytest.fixture
def monthly():
    return {"Jan": 10, "Feb": 20, "Mar": 15}
