from __future__ import annotations

import logging
import os
import re
import sys
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)

CURRENT_STATE_KEY = "current_state"


def preset_key(index: int) -> str:
    return f"preset_{int(index)}"


class KeyValueStorage(Protocol):
    """Durable string key/value facility. Synchronous, last write wins."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self.values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileStorage:
    """
    One file per key inside the data directory:
      <data_dir>/current_state.json
      <data_dir>/preset_1.json ... preset_10.json

    Values are stored verbatim; writes go through a .tmp file and replace().
    """

    def __init__(self, data_dir: str | Path | None = None) -> None:
        self.data_dir = Path(data_dir) if data_dir else primary_data_dir()

    def path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key or ""):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        p = self.path_for(key)
        if not p.exists():
            return None
        try:
            return p.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", p, exc)
            return None

    def set(self, key: str, value: str) -> None:
        p = self.path_for(key)
        tmp = p.with_suffix(".tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            tmp.write_text(value, encoding="utf-8")
            tmp.replace(p)
        except OSError as exc:
            # the live session keeps running on a read-only disk
            logger.error("Could not write %s: %s", p, exc)


def _runtime_app_name() -> str:
    if getattr(sys, "frozen", False):
        return "PotentialSimulator"
    return "PotentialSimulator-dev"


def primary_data_dir() -> Path:
    override_dir = (os.environ.get("POTSIM_DATA_DIR") or "").strip()
    if override_dir:
        return Path(override_dir)

    app_name = (os.environ.get("POTSIM_DATA_APP_NAME") or "").strip() or _runtime_app_name()
    base_dir = (
        (os.environ.get("LOCALAPPDATA") or "").strip()
        or (os.environ.get("APPDATA") or "").strip()
    )
    if base_dir:
        return Path(base_dir) / app_name
    return Path.home() / ".config" / app_name
