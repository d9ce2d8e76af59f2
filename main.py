"""Log viewer demo -- a worker thread logs while the TUI shows the log view."""

from __future__ import annotations

import threading
import time

import keyboard
from colorama import init as colorama_init

from config import (
    CONSOLE_HEIGHT,
    CONSOLE_WIDTH,
    HOTKEY_CONSOLE,
    INDENT_CONTINUATION,
    STOP_HOTKEY,
)
from ui.app import ConsoleApp, toggle_debug_console
from ui.canvas import Size
from ui.layers import Dialog
from ui.log_store import LogStore
from ui.log_view import ViewOptions, scrollable
from ui.log_writer import log_view_writer
from ui.notifier import Callback, CallbackSink, SinkClosedError
from utils import logger
from utils.logging_bridge import attach_bridge


def worker(sink: CallbackSink) -> None:
    """Background thread: one message per level, then ask the UI to quit."""
    logger.trace("A trace log message")
    time.sleep(1)

    logger.debug("A debug log message")
    time.sleep(1)

    logger.info("An info log message")
    time.sleep(1)

    logger.debug("Really detailed debug information\nfoo: 5\nbar: 42")
    time.sleep(1)

    logger.warn("A warning log message")
    time.sleep(1)

    logger.error("An error log message")
    time.sleep(1)

    if not post(sink, lambda app: app.quit()):
        logger.warn("UI closed before the worker finished")


def post(sink: CallbackSink, callback: Callback) -> bool:
    """Send *callback* to the UI; False once the UI loop has shut down."""
    try:
        sink.send(callback)
    except SinkClosedError:
        return False
    return True


def register_hotkeys(sink: CallbackSink, options: ViewOptions) -> bool:
    """Hotkeys run on keyboard's thread, so they only post callbacks."""
    try:
        keyboard.add_hotkey(
            HOTKEY_CONSOLE,
            lambda: post(sink, lambda app: toggle_debug_console(app, options)),
            trigger_on_release=True,
        )
        keyboard.add_hotkey(STOP_HOTKEY, lambda: post(sink, lambda app: app.quit()), trigger_on_release=True)
    except ImportError as exc:
        # keyboard needs root on Linux
        logger.warn(f"Hotkeys unavailable: {exc}")
        return False
    return True


def main() -> None:
    colorama_init()

    # -- Shared state --
    store = LogStore()
    app = ConsoleApp(store)
    options = ViewOptions(indent=INDENT_CONTINUATION)

    # Wire logger -> log view
    logger.add_writer(log_view_writer(app))
    attach_bridge()

    app.add_layer(Dialog(
        scrollable(store, options),
        title="Log View",
        size=Size(CONSOLE_WIDTH, CONSOLE_HEIGHT),
        subtitle=f"{HOTKEY_CONSOLE} console | {STOP_HOTKEY} quit",
    ))

    logger.info("started simple example")

    hotkeys = register_hotkeys(app.cb_sink(), options)

    thread = threading.Thread(target=worker, args=(app.cb_sink(),), name="worker", daemon=True)
    thread.start()

    try:
        app.run()
    except KeyboardInterrupt:
        app.quit()
    finally:
        logger.clear_writers()
        if hotkeys:
            keyboard.unhook_all()
        thread.join(timeout=1.0)


if __name__ == "__main__":
    main()
