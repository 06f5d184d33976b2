from __future__ import annotations

from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QApplication


def apply_dark_palette(app: QApplication) -> None:
    """Force dark UI styling across platforms/widgets."""
    app.setStyle("Fusion")

    p = QPalette()
    p.setColor(QPalette.Window, QColor("#1e1e1e"))
    p.setColor(QPalette.WindowText, QColor("#dddddd"))
    p.setColor(QPalette.Base, QColor("#2b2b2b"))
    p.setColor(QPalette.AlternateBase, QColor("#282828"))
    p.setColor(QPalette.ToolTipBase, QColor("#1f242a"))
    p.setColor(QPalette.ToolTipText, QColor("#e6edf3"))
    p.setColor(QPalette.Text, QColor("#dddddd"))
    p.setColor(QPalette.Button, QColor("#2b2b2b"))
    p.setColor(QPalette.ButtonText, QColor("#dddddd"))
    p.setColor(QPalette.Highlight, QColor("#3498db"))
    p.setColor(QPalette.HighlightedText, QColor("#ffffff"))
    p.setColor(QPalette.Disabled, QPalette.Text, QColor("#666666"))
    p.setColor(QPalette.Disabled, QPalette.ButtonText, QColor("#666666"))
    app.setPalette(p)

    app.setStyleSheet(
        """
        * { font-family: "Segoe UI", "Yu Gothic UI", "Meiryo", system-ui, sans-serif; }
        QToolTip { color: #e6edf3; background: #1f242a; border: 1px solid #3a3f46; border-radius: 4px; padding: 4px 8px; }
        QPushButton { background-color: #2b2b2b; color: #dddddd; border: 1px solid #3a3a3a; border-radius: 6px; padding: 5px 14px; min-height: 24px; }
        QPushButton:hover { background-color: #383838; }
        QPushButton:pressed { background-color: #222222; }
        QPushButton:disabled { color: #555555; border-color: #2a2a2a; }
        QPushButton[planned="true"] { background-color: #1a4a8a; color: #ffffff; border: 1px solid #2d6bc4; font-weight: bold; }
        QPushButton[planned="true"]:hover { background-color: #2260b0; }
        QPushButton[danger="true"] { background-color: #5a1e1e; border: 1px solid #8a2d2d; }
        QComboBox { background-color: #252525; color: #dddddd; border: 1px solid #3a3a3a; border-radius: 5px; padding: 4px 8px; }
        QComboBox QAbstractItemView { background-color: #2b2b2b; color: #dddddd; selection-background-color: #2d4a7a; border: 1px solid #3a3a3a; }
        QComboBox::drop-down { border: none; }
        QMessageBox { background-color: #1e1e1e; color: #dddddd; }
        QLabel { color: #dddddd; }
        QGroupBox { color: #9aa4b2; border: 1px solid #303030; border-radius: 6px; margin-top: 8px; padding-top: 16px; }
        QGroupBox::title { subcontrol-origin: margin; left: 10px; padding: 0 6px; color: #9aa4b2; }
        QScrollArea { background-color: #1e1e1e; border: none; }
        QScrollBar:vertical { background: transparent; width: 8px; margin: 0; }
        QScrollBar::handle:vertical { background: #3a3a3a; border-radius: 4px; min-height: 24px; margin: 2px; }
        QCheckBox { color: #dddddd; spacing: 6px; }
        QCheckBox::indicator { width: 14px; height: 14px; border: 1px solid #3a3a3a; border-radius: 3px; background: #252525; }
        QCheckBox::indicator:checked { background: #4a90e2; border-color: #4a90e2; }
        QFrame[potentialCard="true"] { background-color: #242424; border: 1px solid #303030; border-radius: 6px; }
        QLabel[potentialImage="true"] { border: 2px solid transparent; border-radius: 4px; }
        QLabel[potentialImage="true"][acquired="true"] { border: 2px solid #4caf50; }
        QLabel[countBadge="true"] { background-color: #c0392b; color: #ffffff; border-radius: 9px; padding: 0 5px; font-weight: bold; }
        QLabel[toast="true"] { background-color: #8a2d2d; color: #ffffff; border-radius: 6px; padding: 8px 14px; font-weight: bold; }
        """
    )


def repolish(widget) -> None:
    """Re-apply the stylesheet after a dynamic property changed."""
    style = widget.style()
    style.unpolish(widget)
    style.polish(widget)
