"""Fixed-size cell grid that views draw into and Rich renders."""

from __future__ import annotations

import unicodedata
from typing import Iterable, NamedTuple

from rich.cells import get_character_cell_size
from rich.console import Console, ConsoleOptions, RenderResult
from rich.segment import Segment
from rich.style import Style


class Size(NamedTuple):
    width: int
    height: int


# trailing cell of a double-width character
_WIDE_TAIL = ""


class Canvas:
    """A width x height grid of cells, each holding its text and style.

    Printing outside the grid is clipped; a double-width character that
    does not fit entirely is dropped. Zero-width marks (combining accents,
    vowel signs, joiners) stay in the cell of the character they follow.
    ``origin_x`` is the logical column shown at the left edge.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"negative canvas size: {width}x{height}")
        self.width = width
        self.height = height
        self.origin_x = 0
        self._cells = [[(" ", None)] * width for _ in range(height)]

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    def print(self, x: int, y: int, text: str, style: Style | None = None) -> int:
        """Print *text* at logical column *x*, row *y*; return the column after it."""
        if not 0 <= y < self.height:
            for ch in text:
                x += get_character_cell_size(ch)
            return x
        row = self._cells[y]
        # cell holding the last base character; marks join it
        base = self._base_before(row, x - self.origin_x)
        for ch in text:
            cells = get_character_cell_size(ch)
            col = x - self.origin_x
            if cells == 0:
                if base is not None and unicodedata.category(ch) != "Cc":
                    mark_text, mark_style = row[base]
                    row[base] = (mark_text + ch, mark_style)
                continue
            if col >= 0 and col + cells <= self.width:
                row[col] = (ch, style)
                if cells == 2:
                    row[col + 1] = (_WIDE_TAIL, style)
                base = col
            else:
                base = None
            x += cells
        return x

    def _base_before(self, row: list, col: int) -> int | None:
        col -= 1
        if 0 <= col < self.width and row[col][0] == _WIDE_TAIL:
            col -= 1
        return col if 0 <= col < self.width else None

    def print_segment(self, x: int, y: int, segment: Segment) -> int:
        return self.print(x, y, segment.text, segment.style)

    def row_text(self, y: int) -> str:
        return "".join(text for text, _ in self._cells[y])

    def style_at(self, x: int, y: int) -> Style | None:
        return self._cells[y][x][1]

    def _row_segments(self, y: int) -> Iterable[Segment]:
        text = ""
        style = None
        for ch, cell_style in self._cells[y]:
            if cell_style != style and text:
                yield Segment(text, style)
                text = ""
            style = cell_style
            text += ch
        if text:
            yield Segment(text, style)

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        for y in range(self.height):
            yield from self._row_segments(y)
            if y < self.height - 1:
                yield Segment.line()
