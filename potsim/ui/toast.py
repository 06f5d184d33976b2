from __future__ import annotations

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QLabel, QWidget

TOAST_MS = 3000


class Toast(QLabel):
    """Transient error message at the top of the parent, hidden again after 3s."""

    def __init__(self, parent: QWidget):
        super().__init__(parent)
        self.setProperty("toast", True)
        self.setAlignment(Qt.AlignCenter)
        self.setWordWrap(True)
        self.hide()
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.hide)

    def show_message(self, message: str) -> None:
        self.setText(message)
        parent = self.parentWidget()
        width = min(520, max(240, parent.width() - 40)) if parent else 420
        self.setFixedWidth(width)
        self.adjustSize()
        if parent:
            self.move((parent.width() - self.width()) // 2, 16)
        self.raise_()
        self.show()
        self._timer.start(TOAST_MS)
