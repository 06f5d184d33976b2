from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QComboBox,
    QFrame,
    QGraphicsOpacityEffect,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from potsim.domain.catalog import PotentialInfo
from potsim.domain.models import KIND_CORE, LEVEL_6, LEVEL_NONE, SUB_LEVELS, CoreState, SubState
from potsim.i18n import tr
from potsim.ui.image_loader import image_loader
from potsim.ui.theme import repolish

IMAGE_SIZE = 64


class _ClickableImage(QLabel):
    def __init__(self, on_click: Callable[[], None], parent: QWidget | None = None):
        super().__init__(parent)
        self._on_click = on_click
        self.setCursor(Qt.PointingHandCursor)

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self._on_click()
            return
        super().mousePressEvent(event)


class PotentialCard(QFrame):
    """
    One potential: image (click = progress), name, and the plan control.
    Core cards get a toggle button, sub cards a level combo.
    The card never changes state itself; it calls back into the window.
    """

    def __init__(
        self,
        potential: PotentialInfo,
        kind: str,
        image_location: str,
        on_image_click: Callable[[str, str], None],
        on_core_toggle: Callable[[str], None],
        on_sub_level: Callable[[str, str], None],
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self.potential = potential
        self.kind = kind
        self.setProperty("potentialCard", True)
        self.setFixedWidth(IMAGE_SIZE + 56)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(4)

        self.image = _ClickableImage(lambda: on_image_click(potential.id, kind))
        self.image.setProperty("potentialImage", True)
        self.image.setFixedSize(IMAGE_SIZE + 4, IMAGE_SIZE + 4)
        self.image.setAlignment(Qt.AlignCenter)
        self.image.setText(potential.name[:4])
        image_loader().request(image_location, IMAGE_SIZE, self.image, self._set_image)
        if potential.description:
            self.image.setToolTip(potential.description)
        self._opacity = QGraphicsOpacityEffect(self.image)
        self.image.setGraphicsEffect(self._opacity)
        layout.addWidget(self.image, 0, Qt.AlignHCenter)

        # overlays on the image
        self.badge = QLabel(self.image)
        self.badge.setProperty("countBadge", True)
        self.badge.move(IMAGE_SIZE - 14, 0)
        self.badge.hide()
        self.mark = QLabel(self.image)
        self.mark.move(2, 0)
        self.mark.hide()

        self.name_label = QLabel(potential.name)
        self.name_label.setWordWrap(True)
        self.name_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.name_label)

        if kind == KIND_CORE:
            self.toggle_btn = QPushButton(tr("core.unplanned"))
            self.toggle_btn.clicked.connect(lambda: on_core_toggle(potential.id))
            layout.addWidget(self.toggle_btn)
            self.level_combo = None
        else:
            self.toggle_btn = None
            self.level_combo = QComboBox()
            for level in SUB_LEVELS:
                self.level_combo.addItem(tr(f"level.{level}"), level)
            self.level_combo.currentIndexChanged.connect(
                lambda _i: on_sub_level(potential.id, str(self.level_combo.currentData()))
            )
            layout.addWidget(self.level_combo)

    def _set_image(self, pm: QPixmap) -> None:
        self.image.setText("")
        self.image.setPixmap(pm)

    def _set_greyed(self, greyed: bool) -> None:
        self._opacity.setOpacity(0.3 if greyed else 1.0)

    def render_core(self, state: CoreState) -> None:
        self._set_greyed(not state.obtained)
        self.toggle_btn.setText(tr("core.planned") if state.obtained else tr("core.unplanned"))
        self.toggle_btn.setProperty("planned", bool(state.obtained))
        repolish(self.toggle_btn)
        self.image.setProperty("acquired", bool(state.acquired))
        repolish(self.image)
        if state.acquired:
            self.mark.setText("✔")
            self.mark.adjustSize()
            self.mark.show()
        else:
            self.mark.hide()

    def render_sub(self, state: SubState) -> None:
        self._set_greyed(state.status == LEVEL_NONE)
        idx = self.level_combo.findData(state.status)
        if idx != self.level_combo.currentIndex():
            self.level_combo.blockSignals(True)
            self.level_combo.setCurrentIndex(idx if idx >= 0 else self.level_combo.count() - 1)
            self.level_combo.blockSignals(False)
        if state.status == LEVEL_6:
            self.mark.setText("👍")
            self.mark.adjustSize()
            self.mark.show()
        else:
            self.mark.hide()
        if state.count > 0 and state.status != LEVEL_NONE:
            self.badge.setText(str(state.count))
            self.badge.adjustSize()
            self.badge.show()
        else:
            self.badge.hide()
