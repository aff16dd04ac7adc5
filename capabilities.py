# capabilities.py
"""
I describe the host services the volume core talks to.

Concrete implementations live in store_config.py, hotkeys.py, pulse_backend.py
and osd.py; tests provide fakes with the same shape.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Protocol

from models import StreamKind


SettingCallback = Callable[[], None]
StreamCallback = Callable[[int], None]


class UiItem(Protocol):
    def destroy(self) -> None: ...


class SettingsStore(Protocol):
    def get(self, key: str) -> str: ...

    def get_int(self, key: str) -> int: ...

    def bind(self, key: str, callback: SettingCallback) -> str: ...

    def finalize(self) -> None: ...


class HotkeyManager(Protocol):
    def register(self, name: str, combo: str, callback: Callable[[], None]) -> None: ...

    def unregister(self, name: str) -> None: ...


class MixerStream(Protocol):
    id: int
    kind: Optional[StreamKind]
    volume: int
    application_id: str
    is_virtual: bool

    def push_volume(self) -> None: ...


class MixerControl(Protocol):
    def open(self, name: str) -> None: ...

    def close(self) -> None: ...

    def get_default_sink(self) -> Optional[MixerStream]: ...

    def lookup_stream_id(self, stream_id: int) -> Optional[MixerStream]: ...

    def get_vol_max_norm(self) -> int: ...

    def on_stream_added(self, callback: StreamCallback) -> None: ...

    def on_stream_removed(self, callback: StreamCallback) -> None: ...


class OverlayDisplay(Protocol):
    def show_osd(self, timeout_ms: int, icon: Any, percent: int) -> None: ...
