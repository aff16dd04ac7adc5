# widgets.py
from __future__ import annotations

from PySide6.QtCore import Property, QEasingCurve, QPropertyAnimation, QRectF, QSize, Qt
from PySide6.QtGui import QPainter, QPen
from PySide6.QtWidgets import QWidget

from theme import LEVEL_FILL, LEVEL_FILL_MUTED, LEVEL_TRACK, OSD_BORDER


class LevelBar(QWidget):
    def __init__(self, parent=None) -> None:
        super().__init__(parent)

        self._level = 0.0
        self._target = 0
        self._anim = QPropertyAnimation(self, b"level", self)
        self._anim.setDuration(120)
        self._anim.setEasingCurve(QEasingCurve.OutCubic)

        self.setFixedSize(200, 10)

    def sizeHint(self) -> QSize:
        return QSize(200, 10)

    def target(self) -> int:
        return self._target

    def set_target(self, percent: int, animate: bool = True) -> None:
        self._target = max(0, min(100, int(percent)))
        self._anim.stop()
        if not animate or not self.isVisible():
            self.set_level(float(self._target))
            return
        self._anim.setStartValue(self._level)
        self._anim.setEndValue(float(self._target))
        self._anim.start()

    def get_level(self) -> float:
        return self._level

    def set_level(self, v: float) -> None:
        self._level = float(v)
        self.update()

    level = Property(float, get_level, set_level)

    def paintEvent(self, _event) -> None:
        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing, True)

        r = QRectF(0.5, 0.5, self.width() - 1.0, self.height() - 1.0)
        rad = r.height() / 2.0

        p.setPen(QPen(OSD_BORDER, 1.0))
        p.setBrush(LEVEL_TRACK)
        p.drawRoundedRect(r, rad, rad)

        if self._level > 0.0:
            fill = QRectF(r.x(), r.y(), max(r.height(), r.width() * self._level / 100.0), r.height())
            p.setPen(Qt.NoPen)
            p.setBrush(LEVEL_FILL if self._target > 0 else LEVEL_FILL_MUTED)
            p.drawRoundedRect(fill, rad, rad)
        p.end()
