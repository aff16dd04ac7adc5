# osd.py
from __future__ import annotations

from typing import Any, Optional

from PySide6.QtCore import QRectF, QSize, Qt, QTimer
from PySide6.QtGui import QCursor, QGuiApplication, QIcon, QPainter, QPen
from PySide6.QtWidgets import QHBoxLayout, QLabel, QWidget

from theme import OSD_BACKGROUND, OSD_BORDER, apply_osd_theme
from widgets import LevelBar


ICON_SIZE = QSize(32, 32)


class VolumeOsd(QWidget):
    """
    I am the transient volume popup: icon, level bar and percent.

    show_osd() takes a timeout in milliseconds; a negative value means the
    default hide delay and 0 keeps the popup up until the next call.
    """

    def __init__(self, default_timeout_ms: int = 1500, parent: Optional[QWidget] = None) -> None:
        flags = Qt.ToolTip | Qt.FramelessWindowHint | Qt.WindowStaysOnTopHint | Qt.WindowDoesNotAcceptFocus
        super().__init__(parent, flags)
        self.setAttribute(Qt.WA_TranslucentBackground, True)
        self.setAttribute(Qt.WA_ShowWithoutActivating, True)
        self.setObjectName("Osd")

        self.default_timeout_ms = default_timeout_ms

        self.icon = QLabel()
        self.icon.setFixedSize(ICON_SIZE)
        self.bar = LevelBar()
        self.value = QLabel("0")
        self.value.setObjectName("OsdValue")
        self.value.setAlignment(Qt.AlignRight | Qt.AlignVCenter)

        row = QHBoxLayout()
        row.setContentsMargins(18, 14, 18, 14)
        row.setSpacing(14)
        row.addWidget(self.icon, 0, Qt.AlignVCenter)
        row.addWidget(self.bar, 1, Qt.AlignVCenter)
        row.addWidget(self.value, 0, Qt.AlignVCenter)
        self.setLayout(row)

        apply_osd_theme(self)

        self._hide_timer = QTimer(self)
        self._hide_timer.setSingleShot(True)
        self._hide_timer.timeout.connect(self.hide)

    def show_osd(self, timeout_ms: int, icon: Any, percent: int) -> None:
        percent = max(0, min(100, int(percent)))

        if isinstance(icon, QIcon):
            self.icon.setPixmap(icon.pixmap(ICON_SIZE))
        self.bar.set_target(percent)
        self.value.setText(str(percent))

        self._place()
        self.show()
        self.raise_()

        timeout = self.default_timeout_ms if timeout_ms < 0 else timeout_ms
        if timeout == 0:
            self._hide_timer.stop()
        else:
            self._hide_timer.start(timeout)

    def _place(self) -> None:
        self.adjustSize()
        screen = QGuiApplication.screenAt(QCursor.pos()) or QGuiApplication.primaryScreen()
        if screen is None:
            return
        geo = screen.availableGeometry()
        x = geo.x() + (geo.width() - self.width()) // 2
        y = geo.y() + int(geo.height() * 0.85) - self.height()
        self.move(x, y)

    def paintEvent(self, _event) -> None:
        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing, True)
        r = QRectF(0.5, 0.5, self.width() - 1.0, self.height() - 1.0)
        p.setPen(QPen(OSD_BORDER, 1.0))
        p.setBrush(OSD_BACKGROUND)
        p.drawRoundedRect(r, 14.0, 14.0)
        p.end()
