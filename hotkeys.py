# hotkeys.py
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from PySide6.QtCore import QObject, Signal

from errors import HotkeyError

logger = logging.getLogger(__name__)


def _keyboard():
    # pynput binds to the display server when imported.
    try:
        from pynput import keyboard
    except ImportError as e:
        raise HotkeyError(f"Global hotkeys are unavailable: {e}") from e
    return keyboard


class GlobalHotkeyManager(QObject):
    """
    I register named global hotkeys.

    Each name gets its own pynput listener thread. A key press is turned into a
    queued signal, so callbacks always run on the Qt thread, one at a time.
    """

    _activated = Signal(str)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._callbacks: Dict[str, Callable[[], None]] = {}
        self._listeners: Dict[str, Any] = {}
        self._activated.connect(self._dispatch)

    def names(self):
        return sorted(self._listeners)

    def register(self, name: str, combo: str, callback: Callable[[], None]) -> None:
        self.unregister(name)

        kb = _keyboard()
        try:
            kb.HotKey.parse(combo)
        except ValueError as e:
            raise HotkeyError(f"Invalid key combination {combo!r} for {name}: {e}") from e

        listener = kb.GlobalHotKeys({combo: lambda: self._activated.emit(name)})
        self._callbacks[name] = callback
        self._listeners[name] = listener
        listener.start()
        logger.debug(f"Hotkey {name} listening for {combo}")

    def unregister(self, name: str) -> None:
        self._callbacks.pop(name, None)
        listener = self._listeners.pop(name, None)
        if listener is not None:
            listener.stop()
            logger.debug(f"Hotkey {name} removed")

    def _dispatch(self, name: str) -> None:
        # A press can still be queued after its hotkey was removed.
        cb = self._callbacks.get(name)
        if cb is None:
            return
        cb()
