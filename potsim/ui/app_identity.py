from __future__ import annotations

import sys

APP_USER_MODEL_ID = "PotentialSimulator.Desktop"


def apply_windows_app_user_model_id() -> None:
    """Group the taskbar entry under our own id instead of python.exe."""
    if sys.platform != "win32":
        return
    try:
        import ctypes

        ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(APP_USER_MODEL_ID)
    except (AttributeError, OSError):
        return
