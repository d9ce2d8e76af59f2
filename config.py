# Log Viewer Configuration

import os
import sys
from dotenv import load_dotenv

# When bundled by PyInstaller, look for .env next to the exe
if getattr(sys, "frozen", False):
    _env_path = os.path.join(os.path.dirname(sys.executable), ".env")
    load_dotenv(_env_path)
else:
    load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Logging frontend
LOG_LEVEL = os.environ.get("LOG_LEVEL", "trace")
LOG_ECHO = _env_flag("LOG_ECHO", False)   # mirror records to stderr

# Log view
INDENT_CONTINUATION = _env_flag("INDENT_CONTINUATION", True)
NOTIFY_QUEUE_SIZE = 64

# Hotkeys
HOTKEY_CONSOLE = "F1"
STOP_HOTKEY = "F12"

# TUI
TUI_REFRESH_RATE = 4  # redraws per second when idle (resize pickup)
CONSOLE_WIDTH = 72
CONSOLE_HEIGHT = 10
