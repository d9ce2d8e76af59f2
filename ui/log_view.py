"""The log view: sizes itself to the stored lines and draws the newest ones."""

from __future__ import annotations

from dataclasses import dataclass

from ui.canvas import Canvas, Size
from ui.layers import ScrollView
from ui.log_line import LogLine
from ui.log_store import LogStore


@dataclass(frozen=True)
class ViewOptions:
    # continuation rows of a multi-line message start under the message
    # text when True, at column 0 when False
    indent: bool = True


class LogView:
    """Displays the lines of a ``LogStore``.

    Several views may share one store, each with its own options.
    """

    def __init__(self, store: LogStore, options: ViewOptions | None = None) -> None:
        self.store = store
        self.options = options or ViewOptions()

    def required_size(self, constraint: Size) -> Size:
        """Smallest size showing every stored line, never below *constraint*."""
        width = 0
        height = 0
        with self.store.locked() as lines:
            for line in lines:
                width = max(width, line.width)
                height += line.row_count
            if not lines:
                width = 1
        return Size(max(width, constraint.width), max(height, constraint.height))

    def draw(self, canvas: Canvas) -> None:
        lines = self.store.snapshot_for_render(canvas.height)
        rows = sum(line.row_count for line in lines)
        # bottom-align when the oldest line only partly fits
        y = min(0, canvas.height - rows)
        for line in lines:
            y = self._draw_line(canvas, y, line)

    def _draw_line(self, canvas: Canvas, y: int, line: LogLine) -> int:
        x = 0
        for segment in line.prefix:
            x = canvas.print_segment(x, y, segment)

        body_x = x
        for i, part in enumerate(line.body_parts):
            if i:
                x = body_x if self.options.indent else 0
            canvas.print(x, y, part, line.body.style)
            y += 1
        return y


def scrollable(store: LogStore, options: ViewOptions | None = None) -> ScrollView:
    """A ``LogView`` wrapped in a bottom-sticking ``ScrollView``."""
    return ScrollView(LogView(store, options))
