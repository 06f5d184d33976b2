from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

import shiboken6
from PySide6.QtCore import QObject, QRunnable, QThreadPool, Qt, Signal
from PySide6.QtGui import QPixmap

from potsim.services.asset_cache import BoundedCache
from potsim.services.catalog_source import fetch_asset_bytes, is_url

logger = logging.getLogger(__name__)

MAX_CACHED_PIXMAPS = 256

ApplyFn = Callable[[QPixmap], None]


class _ImageWorkerSignals(QObject):
    finished = Signal(str, object)
    failed = Signal(str, str)


class _ImageWorker(QRunnable):
    def __init__(self, location: str):
        super().__init__()
        self.signals = _ImageWorkerSignals()
        self._location = location

    def run(self) -> None:
        try:
            data = fetch_asset_bytes(self._location)
            self.signals.finished.emit(self._location, data)
        except Exception as exc:
            self.signals.failed.emit(self._location, str(exc))


def _to_pixmap(data: Optional[bytes], size: int) -> QPixmap:
    pm = QPixmap()
    if data:
        pm.loadFromData(data)
    if not pm.isNull():
        pm = pm.scaled(size, size, Qt.KeepAspectRatio, Qt.SmoothTransformation)
    return pm


class ImageLoader(QObject):
    """
    Catalog images for the widgets. Local files are read right away, URLs on
    the global thread pool so the window never waits on the network.

    *apply* is only called with a usable pixmap, and only while *target*
    still exists. Scaled pixmaps are kept in a bounded cache keyed by
    location and size; failures are cached too so a dead URL is hit once.
    """

    def __init__(self, max_entries: int = MAX_CACHED_PIXMAPS, parent: QObject | None = None):
        super().__init__(parent)
        self._cache: BoundedCache[QPixmap] = BoundedCache(max_entries)
        self._waiting: Dict[str, List[Tuple[int, QObject, ApplyFn]]] = {}
        self._workers: Dict[str, _ImageWorker] = {}

    def request(self, location: str, size: int, target: QObject, apply: ApplyFn) -> None:
        if not location:
            return
        cached = self._cache.get((location, size))
        if cached is not None:
            if not cached.isNull():
                apply(cached)
            return

        if not is_url(location):
            pm = _to_pixmap(fetch_asset_bytes(location), size)
            self._cache.put((location, size), pm)
            if not pm.isNull():
                apply(pm)
            return

        waiters = self._waiting.setdefault(location, [])
        waiters.append((size, target, apply))
        if location in self._workers:
            return
        worker = _ImageWorker(location)
        worker.signals.finished.connect(self._on_finished)
        worker.signals.failed.connect(self._on_failed)
        self._workers[location] = worker
        QThreadPool.globalInstance().start(worker)

    def _on_finished(self, location: str, data: object) -> None:
        self._workers.pop(location, None)
        payload = data if isinstance(data, bytes) else None
        for size, target, apply in self._waiting.pop(location, []):
            pm = self._cache.get((location, size))
            if pm is None:
                pm = _to_pixmap(payload, size)
                self._cache.put((location, size), pm)
            if pm.isNull() or not shiboken6.isValid(target):
                continue
            apply(pm)

    def _on_failed(self, location: str, detail: str) -> None:
        logger.warning("Image %s could not be loaded: %s", location, detail)
        self._on_finished(location, None)


_loader: Optional[ImageLoader] = None


def image_loader() -> ImageLoader:
    """Shared loader; created on first use, after the QApplication exists."""
    global _loader
    if _loader is None:
        _loader = ImageLoader()
    return _loader
