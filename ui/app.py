"""Rich-based live terminal UI hosting the log view layers."""

from __future__ import annotations

import threading

from rich.align import Align
from rich.console import Console, RenderableType
from rich.live import Live
from rich.text import Text

from config import TUI_REFRESH_RATE
from ui.canvas import Size
from ui.layers import Dialog
from ui.log_store import LogStore
from ui.log_view import ViewOptions, scrollable
from ui.notifier import CallbackReceiver, CallbackSink

DEBUG_VIEW_NAME = "_log_debug_view"


class ConsoleApp:
    """Single-threaded UI loop with a stack of dialog layers.

    Other threads talk to it only through ``cb_sink()``.
    """

    def __init__(
        self,
        store: LogStore,
        console: Console | None = None,
        refresh_rate: float = TUI_REFRESH_RATE,
        screen: bool = True,
    ) -> None:
        self.store = store
        self.console = console or Console()
        self.refresh_rate = refresh_rate
        self.screen = screen
        self._layers: list[tuple[str | None, Dialog]] = []
        self._receiver = CallbackReceiver()
        self._stop = threading.Event()

    # ── Layers ──

    @property
    def layers(self) -> list[Dialog]:
        return [layer for _, layer in self._layers]

    def add_layer(self, layer: Dialog, name: str | None = None) -> None:
        self._layers.append((name, layer))

    def find_layer(self, name: str) -> int | None:
        for pos, (layer_name, _) in enumerate(self._layers):
            if layer_name == name:
                return pos
        return None

    def remove_layer(self, pos: int) -> Dialog:
        return self._layers.pop(pos)[1]

    # ── Loop ──

    def cb_sink(self) -> CallbackSink:
        return self._receiver.sink()

    def quit(self) -> None:
        self._stop.set()

    @property
    def running(self) -> bool:
        return not self._stop.is_set()

    def step(self, timeout: float | None = 0) -> bool:
        """Wait up to *timeout* for callbacks and run them.

        Returns True when at least one ran, i.e. a redraw is due.
        """
        if not self._receiver.wait(timeout):
            return False
        return self._receiver.drain(self) > 0

    def render(self) -> RenderableType:
        width, height = self.console.size
        if not self._layers:
            return Text("")
        panel = self._layers[-1][1].render(Size(width, height))
        return Align.center(panel, vertical="middle", height=height)

    def run(self) -> None:
        """Block the calling thread, redrawing until ``quit()`` is called.

        The callback sink is closed on exit; later sends raise
        ``SinkClosedError``.
        """
        interval = 1.0 / self.refresh_rate
        try:
            with Live(
                self.render(),
                console=self.console,
                auto_refresh=False,
                screen=self.screen,
            ) as live:
                while self.running:
                    # redraw after callbacks, or every interval to catch resizes
                    self.step(interval)
                    if self.running:
                        live.update(self.render(), refresh=True)
        finally:
            self._receiver.close()


# ── Debug console ──

def show_debug_console(app: ConsoleApp, options: ViewOptions | None = None) -> None:
    app.add_layer(
        Dialog(scrollable(app.store, options), title="Debug console"),
        name=DEBUG_VIEW_NAME,
    )


def hide_debug_console(app: ConsoleApp) -> bool:
    pos = app.find_layer(DEBUG_VIEW_NAME)
    if pos is None:
        return False
    app.remove_layer(pos)
    return True


def toggle_debug_console(app: ConsoleApp, options: ViewOptions | None = None) -> None:
    """Show the debug console, or hide it if it's already visible."""
    if not hide_debug_console(app):
        show_debug_console(app, options)
