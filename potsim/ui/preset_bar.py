from __future__ import annotations

from typing import Callable, Dict, List

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QGridLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from potsim.domain.catalog import CharacterCatalog
from potsim.domain.models import PRESET_COUNT
from potsim.domain.preset_store import PresetSummary
from potsim.i18n import tr
from potsim.ui.image_loader import image_loader

THUMB_SIZE = 40


class _PresetItem(QWidget):
    def __init__(self, index: int, on_save: Callable[[int], None], on_load: Callable[[int], None]):
        super().__init__()
        layout = QVBoxLayout(self)
        layout.setContentsMargins(2, 2, 2, 2)
        layout.setSpacing(2)

        self.title = QLabel(tr("preset.label", n=index))
        self.title.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.title)

        self.icon = QLabel()
        self.icon.setFixedSize(THUMB_SIZE, THUMB_SIZE)
        self.icon.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.icon, 0, Qt.AlignHCenter)

        buttons = QGridLayout()
        self.btn_save = QPushButton(tr("btn.save"))
        self.btn_save.clicked.connect(lambda: on_save(index))
        self.btn_load = QPushButton(tr("btn.load"))
        self.btn_load.clicked.connect(lambda: on_load(index))
        self.btn_load.setEnabled(False)
        buttons.addWidget(self.btn_save, 0, 0)
        buttons.addWidget(self.btn_load, 0, 1)
        layout.addLayout(buttons)
        self._thumb_location = ""

    def show_thumbnail(self, location: str) -> None:
        self._thumb_location = location
        self.icon.clear()
        self.icon.hide()
        if location:
            image_loader().request(location, THUMB_SIZE, self, lambda pm: self._apply_thumbnail(location, pm))

    def _apply_thumbnail(self, location: str, pm: QPixmap) -> None:
        # a later render may have moved on to another character
        if location != self._thumb_location:
            return
        self.icon.setPixmap(pm)
        self.icon.show()


class PresetBar(QWidget):
    def __init__(
        self,
        catalog: CharacterCatalog,
        on_save: Callable[[int], None],
        on_load: Callable[[int], None],
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self.catalog = catalog
        self._items: Dict[int, _PresetItem] = {}
        grid = QGridLayout(self)
        grid.setContentsMargins(0, 0, 0, 0)
        for index in range(1, PRESET_COUNT + 1):
            item = _PresetItem(index, on_save, on_load)
            grid.addWidget(item, 0, index - 1)
            self._items[index] = item

    def render(self, summaries: List[PresetSummary]) -> None:
        for s in summaries:
            item = self._items.get(s.index)
            if item is None:
                continue
            item.btn_load.setEnabled(s.available)
            icon = self.catalog.icon_for(s.main_character_id)
            item.show_thumbnail(self.catalog.resolve_asset(icon) if icon else "")
