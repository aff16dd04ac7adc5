# icons.py
from __future__ import annotations

from typing import Dict, Tuple

from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication, QStyle

from models import IconTier


# Mint-Y status icons first, then the freedesktop names every theme ships.
ICON_NAMES: Dict[IconTier, Tuple[str, str]] = {
    IconTier.MUTE: ("audio-status-volume-muted-symbolic", "audio-volume-muted-symbolic"),
    IconTier.LOW: ("audio-status-volume-low-symbolic", "audio-volume-low-symbolic"),
    IconTier.MEDIUM: ("audio-status-volume-medium-symbolic", "audio-volume-medium-symbolic"),
    IconTier.HIGH: ("audio-status-volume-high-symbolic", "audio-volume-high-symbolic"),
}


def themed_icons() -> Dict[IconTier, QIcon]:
    style = QApplication.style()
    out: Dict[IconTier, QIcon] = {}
    for tier, (status_name, fd_name) in ICON_NAMES.items():
        sp = QStyle.SP_MediaVolumeMuted if tier is IconTier.MUTE else QStyle.SP_MediaVolume
        fallback = QIcon.fromTheme(fd_name, style.standardIcon(sp))
        out[tier] = QIcon.fromTheme(status_name, fallback)
    return out
