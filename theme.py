# theme.py
from __future__ import annotations

from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QWidget


OSD_BACKGROUND = QColor(20, 20, 22, 225)
OSD_BORDER = QColor(42, 42, 48)
OSD_TEXT = QColor(230, 230, 230)
LEVEL_TRACK = QColor(42, 42, 48)
LEVEL_FILL = QColor(127, 214, 166)
LEVEL_FILL_MUTED = QColor(229, 139, 139)


def apply_osd_theme(w: QWidget) -> None:
    pal = w.palette()
    pal.setColor(QPalette.WindowText, OSD_TEXT)
    pal.setColor(QPalette.Text, OSD_TEXT)
    w.setPalette(pal)

    w.setStyleSheet(
        """
        QLabel#OsdValue {
            color: #e6e6e6;
            font-size: 18px;
            font-weight: 650;
            min-width: 42px;
        }
        """
    )
