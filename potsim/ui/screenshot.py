from __future__ import annotations

import time
from pathlib import Path

from PySide6.QtWidgets import QWidget


def default_screenshot_name() -> str:
    return f"potential_simulator_{int(time.time() * 1000)}.png"


def save_screenshot(widget: QWidget, path: str | Path) -> bool:
    """Grab *widget* and write it as PNG. Returns False when Qt could not write the file."""
    pm = widget.grab()
    if pm.isNull():
        return False
    return bool(pm.save(str(path), "PNG"))
