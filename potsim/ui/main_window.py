from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Dict, Optional

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

import potsim.i18n as i18n
from potsim.domain.catalog import CharacterCatalog
from potsim.domain.errors import CatalogLoadError, PotentialSimError
from potsim.domain.models import SLOTS
from potsim.domain.preset_store import CONFIRM_OVERWRITE, PresetStore
from potsim.domain.slot_store import SlotStateStore
from potsim.i18n import tr
from potsim.services.catalog_source import load_catalog
from potsim.services.storage import JsonFileStorage, KeyValueStorage
from potsim.ui.app_identity import apply_windows_app_user_model_id
from potsim.ui.preset_bar import PresetBar
from potsim.ui.screenshot import default_screenshot_name, save_screenshot
from potsim.ui.slot_panel import SlotPanel
from potsim.ui.theme import apply_dark_palette
from potsim.ui.toast import Toast

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Presentation only: forwards user intents to the stores and re-renders
    from their state afterwards.
    """

    def __init__(self, catalog: CharacterCatalog, storage: KeyValueStorage, catalog_error: str = ""):
        super().__init__()
        self.setWindowTitle(tr("main.title"))
        self.resize(1600, 980)

        self.catalog = catalog
        self.storage = storage
        self.slot_store = SlotStateStore(catalog, storage)
        self.preset_store = PresetStore(storage, self.slot_store, self._confirm_preset)
        self._inert = bool(catalog_error)
        if not self._inert:
            self.slot_store.hydrate()

        self._panels: Dict[str, SlotPanel] = {}
        self._build_ui()
        self.toast = Toast(self)
        self._render_all()

        if catalog_error:
            QTimer.singleShot(0, lambda: self.toast.show_message(tr("error.catalog_load")))

    # -----------------------------
    # Layout
    # -----------------------------
    def _build_ui(self) -> None:
        root = QWidget()
        layout = QVBoxLayout(root)

        toolbar = QHBoxLayout()
        self.chk_hide = QCheckBox(tr("check.hide_unplanned"))
        self.chk_hide.toggled.connect(lambda _c: self._render_all())
        toolbar.addWidget(self.chk_hide)
        toolbar.addStretch(1)
        self.btn_reset_count = QPushButton(tr("btn.reset_count"))
        self.btn_reset_count.clicked.connect(self._on_reset_counts)
        toolbar.addWidget(self.btn_reset_count)
        self.btn_reset_all = QPushButton(tr("btn.reset_all"))
        self.btn_reset_all.setProperty("danger", True)
        self.btn_reset_all.clicked.connect(self._on_reset_all)
        toolbar.addWidget(self.btn_reset_all)
        self.btn_screenshot = QPushButton(tr("btn.screenshot"))
        self.btn_screenshot.clicked.connect(self._on_screenshot)
        toolbar.addWidget(self.btn_screenshot)
        toolbar.addWidget(QLabel(tr("main.language")))
        self.combo_lang = QComboBox()
        for code, label in i18n.available_languages().items():
            self.combo_lang.addItem(label, code)
        self.combo_lang.setCurrentIndex(max(0, self.combo_lang.findData(i18n.get_language())))
        self.combo_lang.currentIndexChanged.connect(self._on_language_changed)
        toolbar.addWidget(self.combo_lang)
        layout.addLayout(toolbar)

        self.capture_root = QWidget()
        slots_row = QHBoxLayout(self.capture_root)
        self._panels = {}
        for slot in SLOTS:
            panel = SlotPanel(
                slot,
                self.catalog,
                on_select=self._on_select_character,
                on_image_click=self._on_image_click,
                on_core_toggle=self._on_core_toggle,
                on_sub_level=self._on_sub_level,
            )
            panel.setEnabled(not self._inert)
            self._panels[slot] = panel
            slots_row.addWidget(panel, 1)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.capture_root)
        layout.addWidget(scroll, 1)

        self.preset_bar = PresetBar(self.catalog, on_save=self._on_save_preset, on_load=self._on_load_preset)
        self.preset_bar.setEnabled(not self._inert)
        layout.addWidget(self.preset_bar)

        for w in (self.btn_reset_count, self.btn_reset_all):
            w.setEnabled(not self._inert)

        self.setCentralWidget(root)

    # -----------------------------
    # Rendering
    # -----------------------------
    def _render_slot(self, slot: str) -> None:
        self._panels[slot].render(
            self.slot_store.slot_state(slot),
            hide_unplanned=self.chk_hide.isChecked(),
            hidden_ids=self.slot_store.hidden_potentials(slot),
        )

    def _render_all(self) -> None:
        for slot in SLOTS:
            self._render_slot(slot)
        self.preset_bar.render(self.preset_store.list())

    # -----------------------------
    # Intents
    # -----------------------------
    def _run(self, fn, *args):
        """Call a store operation; data errors end up in the toast instead of crashing the UI."""
        try:
            return fn(*args)
        except PotentialSimError as exc:
            logger.error("%s failed: %s", getattr(fn, "__name__", fn), exc)
            self.toast.show_message(tr("error.generic", detail=str(exc)))
            return None

    def _on_select_character(self, slot: str, character_id: Optional[str]) -> None:
        self._run(self.slot_store.select_character, slot, character_id)
        self._render_slot(slot)

    def _on_core_toggle(self, slot: str, potential_id: str) -> None:
        result = self._run(self.slot_store.toggle_core_potential, slot, potential_id)
        if result is not None and not result.accepted:
            self.toast.show_message(result.reason)
            return
        self._render_slot(slot)

    def _on_sub_level(self, slot: str, potential_id: str, level: str) -> None:
        self._run(self.slot_store.set_sub_potential_level, slot, potential_id, level)
        self._render_slot(slot)

    def _on_image_click(self, slot: str, potential_id: str, kind: str) -> None:
        if self._run(self.slot_store.click_potential_image, slot, potential_id, kind):
            self._render_slot(slot)

    def _on_reset_counts(self) -> None:
        self.slot_store.reset_counts()
        self._render_all()

    def _on_reset_all(self) -> None:
        reply = QMessageBox.question(
            self,
            tr("dlg.confirm_title"),
            tr("dlg.reset_all_confirm"),
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        if reply != QMessageBox.Yes:
            return
        self.slot_store.reset_all()
        self.chk_hide.setChecked(False)
        self._render_all()

    def _confirm_preset(self, kind: str, index: int) -> bool:
        text = tr("dlg.overwrite_confirm", n=index) if kind == CONFIRM_OVERWRITE else tr("dlg.discard_confirm")
        reply = QMessageBox.question(
            self,
            tr("dlg.confirm_title"),
            text,
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        return reply == QMessageBox.Yes

    def _on_save_preset(self, index: int) -> None:
        if self._run(self.preset_store.save, index):
            self.preset_bar.render(self.preset_store.list())

    def _on_load_preset(self, index: int) -> None:
        if self._run(self.preset_store.load, index) is not None:
            self._render_all()

    def _on_screenshot(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self,
            tr("dlg.screenshot_title"),
            str(Path.home() / default_screenshot_name()),
            tr("dlg.screenshot_filter"),
        )
        if not path:
            return
        if not save_screenshot(self.capture_root, path):
            logger.error("Screenshot could not be written to %s", path)
            self.toast.show_message(tr("error.screenshot"))

    def _on_language_changed(self, _index: int) -> None:
        i18n.set_language(str(self.combo_lang.currentData()))
        self.setWindowTitle(tr("main.title"))
        self._build_ui()
        self.toast.raise_()
        self._render_all()


def _configure_logging() -> None:
    level_name = (os.environ.get("POTSIM_LOG_LEVEL") or "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_app(catalog_source: str | None = None, data_dir: str | None = None) -> None:
    _configure_logging()
    apply_windows_app_user_model_id()
    app = QApplication(sys.argv)
    apply_dark_palette(app)

    storage = JsonFileStorage(data_dir)
    i18n.init(storage.data_dir)

    catalog_error = ""
    try:
        catalog = load_catalog(catalog_source)
    except CatalogLoadError as exc:
        logger.error("%s", exc)
        catalog = CharacterCatalog()
        catalog_error = str(exc)

    w = MainWindow(catalog, storage, catalog_error=catalog_error)
    w.show()
    sys.exit(app.exec())
