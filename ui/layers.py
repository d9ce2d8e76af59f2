"""Containers placed on the app's layer stack: scrolling and dialog chrome."""

from __future__ import annotations

from typing import Protocol

from rich.panel import Panel

from ui.canvas import Canvas, Size


class View(Protocol):
    def required_size(self, constraint: Size) -> Size: ...

    def draw(self, canvas: Canvas) -> None: ...


class ScrollView:
    """Lets the wrapped view be larger than the viewport; sticks to the bottom.

    ``offset_x`` scrolls horizontally; the vertical position always follows
    the newest content.
    """

    def __init__(self, view: View) -> None:
        self.view = view
        self.offset_x = 0

    def required_size(self, constraint: Size) -> Size:
        return constraint

    def draw(self, canvas: Canvas) -> None:
        # the wrapped view draws its newest rows at the bottom of the
        # viewport, so only the horizontal position needs tracking
        inner = self.view.required_size(canvas.size)
        max_x = max(0, inner.width - canvas.width)
        self.offset_x = min(max(self.offset_x, 0), max_x)
        origin = canvas.origin_x
        canvas.origin_x = origin + self.offset_x
        try:
            self.view.draw(canvas)
        finally:
            canvas.origin_x = origin

    def scroll_x(self, delta: int) -> None:
        self.offset_x = max(0, self.offset_x + delta)


class Dialog:
    """Bordered, titled box around a view, optionally of fixed size."""

    def __init__(
        self,
        view: View,
        title: str = "",
        size: Size | None = None,
        subtitle: str | None = None,
    ) -> None:
        self.view = view
        self.title = title
        self.size = size
        self.subtitle = subtitle

    def render(self, screen: Size) -> Panel:
        width, height = self.size or screen
        width = min(width, screen.width)
        height = min(height, screen.height)
        # borders take one cell on every side
        canvas = Canvas(max(0, width - 2), max(0, height - 2))
        self.view.draw(canvas)
        return Panel(
            canvas,
            title=f"[bold]{self.title}[/bold]" if self.title else None,
            subtitle=self.subtitle,
            border_style="blue",
            width=width,
            height=height,
            padding=0,
        )
