from __future__ import annotations

from typing import Callable, Dict, List, Optional

from PySide6.QtCore import QSize
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import (
    QComboBox,
    QGridLayout,
    QGroupBox,
    QLabel,
    QVBoxLayout,
    QWidget,
)

from potsim.domain.catalog import CharacterCatalog, PotentialInfo
from potsim.domain.models import KIND_CORE, KIND_SUB, SlotState, role_for_slot
from potsim.i18n import tr
from potsim.ui.image_loader import image_loader
from potsim.ui.potential_card import PotentialCard

CARDS_PER_ROW = 4
COMBO_ICON_SIZE = 24


class SlotPanel(QGroupBox):
    def __init__(
        self,
        slot: str,
        catalog: CharacterCatalog,
        on_select: Callable[[str, Optional[str]], None],
        on_image_click: Callable[[str, str, str], None],
        on_core_toggle: Callable[[str, str], None],
        on_sub_level: Callable[[str, str, str], None],
        parent: QWidget | None = None,
    ):
        super().__init__(tr(f"slot.{slot}"), parent)
        self.slot = slot
        self.catalog = catalog
        self._on_image_click = on_image_click
        self._on_core_toggle = on_core_toggle
        self._on_sub_level = on_sub_level
        self._shown_character: Optional[str] = None
        self._cards: Dict[tuple[str, str], PotentialCard] = {}

        layout = QVBoxLayout(self)
        self.combo = QComboBox()
        self.combo.setIconSize(QSize(COMBO_ICON_SIZE, COMBO_ICON_SIZE))
        self.combo.addItem(tr("slot.placeholder"), None)
        for c in catalog.characters():
            self.combo.addItem(c.name, c.id)
            if c.icon:
                image_loader().request(
                    catalog.resolve_asset(c.icon),
                    COMBO_ICON_SIZE,
                    self.combo,
                    lambda pm, i=self.combo.count() - 1: self.combo.setItemIcon(i, QIcon(pm)),
                )
        self.combo.currentIndexChanged.connect(lambda _i: on_select(slot, self.combo.currentData()))
        layout.addWidget(self.combo)

        self.body = QWidget()
        self.body_layout = QVBoxLayout(self.body)
        self.body_layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.body)
        layout.addStretch(1)

    # -----------------------------
    # Building
    # -----------------------------
    def _clear_body(self) -> None:
        while self.body_layout.count():
            item = self.body_layout.takeAt(0)
            w = item.widget()
            if w is not None:
                w.deleteLater()
        self._cards = {}

    def _add_section(self, title: str, potentials: List[PotentialInfo], kind: str) -> None:
        self.body_layout.addWidget(QLabel(title))
        grid_host = QWidget()
        grid = QGridLayout(grid_host)
        grid.setContentsMargins(0, 0, 0, 0)
        for i, p in enumerate(potentials):
            card = PotentialCard(
                p,
                kind,
                self.catalog.resolve_asset(p.image),
                on_image_click=lambda pid, k: self._on_image_click(self.slot, pid, k),
                on_core_toggle=lambda pid: self._on_core_toggle(self.slot, pid),
                on_sub_level=lambda pid, level: self._on_sub_level(self.slot, pid, level),
            )
            grid.addWidget(card, i // CARDS_PER_ROW, i % CARDS_PER_ROW)
            self._cards[(kind, p.id)] = card
        self.body_layout.addWidget(grid_host)

    def _build(self, character_id: Optional[str]) -> None:
        self._clear_body()
        self._shown_character = character_id
        if character_id is None or character_id not in self.catalog:
            return
        pset = self.catalog.potentials_for(character_id, role_for_slot(self.slot))
        self._add_section(tr("section.core"), list(pset.core), KIND_CORE)
        self._add_section(tr("section.sub"), list(pset.sub), KIND_SUB)

    # -----------------------------
    # Rendering
    # -----------------------------
    def render(self, state: SlotState, hide_unplanned: bool = False, hidden_ids: List[str] | None = None) -> None:
        idx = self.combo.findData(state.character_id) if state.character_id else 0
        if idx != self.combo.currentIndex():
            self.combo.blockSignals(True)
            self.combo.setCurrentIndex(max(0, idx))
            self.combo.blockSignals(False)

        if state.character_id != self._shown_character:
            self._build(state.character_id)

        hidden = set(hidden_ids or []) if hide_unplanned else set()
        for pid, core in state.core_potentials.items():
            card = self._cards.get((KIND_CORE, pid))
            if card is None:
                continue
            card.render_core(core)
            card.setVisible(pid not in hidden)
        for pid, sub in state.sub_potentials.items():
            card = self._cards.get((KIND_SUB, pid))
            if card is None:
                continue
            card.render_sub(sub)
            card.setVisible(pid not in hidden)
