"""Pytest configuration and fakes for the volume hotkey tests."""

import os
from typing import Callable, Dict, List, Optional

import pytest

from models import IconTier, StreamKind

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


VOL_NORM = 65536


class FakeStream:
    def __init__(self, stream_id=1, volume=0, kind=None, application_id="", is_virtual=False, fail_push=None):
        self.id = stream_id
        self.volume = volume
        self.kind = kind
        self.application_id = application_id
        self.is_virtual = is_virtual
        self.fail_push = fail_push
        self.pushed: List[int] = []

    def push_volume(self):
        if self.fail_push is not None:
            raise self.fail_push
        self.pushed.append(self.volume)


class FakeMixer:
    def __init__(self, default_sink: Optional[FakeStream] = None, vol_max: int = VOL_NORM):
        self.default_sink = default_sink
        self.vol_max = vol_max
        self.streams: Dict[int, FakeStream] = {}
        self.opened_as: Optional[str] = None
        self.closed = False
        self.added_callbacks: List[Callable[[int], None]] = []
        self.removed_callbacks: List[Callable[[int], None]] = []

    def open(self, name):
        self.opened_as = name

    def close(self):
        self.closed = True

    def get_default_sink(self):
        return self.default_sink

    def lookup_stream_id(self, stream_id):
        return self.streams.get(stream_id)

    def get_vol_max_norm(self):
        return self.vol_max

    def on_stream_added(self, callback):
        self.added_callbacks.append(callback)

    def on_stream_removed(self, callback):
        self.removed_callbacks.append(callback)

    def add_stream(self, stream: FakeStream):
        self.streams[stream.id] = stream
        for cb in self.added_callbacks:
            cb(stream.id)

    def remove_stream(self, stream_id: int):
        self.streams.pop(stream_id, None)
        for cb in self.removed_callbacks:
            cb(stream_id)


class FakeOverlay:
    def __init__(self):
        self.calls = []

    def show_osd(self, timeout_ms, icon, percent):
        self.calls.append((timeout_ms, icon, percent))


class FakeHotkeys:
    def __init__(self):
        self.active: Dict[str, tuple] = {}
        self.log: List[tuple] = []

    def register(self, name, combo, callback):
        assert name not in self.active, f"{name} registered twice"
        self.active[name] = (combo, callback)
        self.log.append(("register", name, combo))

    def unregister(self, name):
        self.active.pop(name, None)
        self.log.append(("unregister", name))

    def press(self, name):
        self.active[name][1]()


class FakeSettings:
    def __init__(self, values=None):
        self.values = {"volume-up": "<ctrl>+<alt>+<page_up>", "volume-down": "<ctrl>+<alt>+<page_down>", "volume-steps": "5"}
        self.values.update(values or {})
        self.bindings: Dict[str, List[Callable[[], None]]] = {}
        self.finalized = False

    def get(self, key):
        return self.values[key]

    def get_int(self, key):
        return int(self.values[key])

    def bind(self, key, callback):
        self.bindings.setdefault(key, []).append(callback)
        return self.values[key]

    def finalize(self):
        self.finalized = True
        self.bindings.clear()

    def change(self, key, value):
        self.values[key] = value
        for cb in list(self.bindings.get(key, [])):
            cb()


ICONS = {tier: f"icon-{tier.value}" for tier in IconTier}


@pytest.fixture
def icons():
    return dict(ICONS)


@pytest.fixture
def overlay():
    return FakeOverlay()


@pytest.fixture
def hotkeys():
    return FakeHotkeys()


@pytest.fixture
def settings():
    return FakeSettings()


@pytest.fixture
def sink():
    return FakeStream(stream_id=1, volume=VOL_NORM // 2)


@pytest.fixture
def mixer(sink):
    return FakeMixer(default_sink=sink)


@pytest.fixture
def sink_input():
    return FakeStream(stream_id=5, kind=StreamKind.SINK_INPUT, application_id="org.mozilla.firefox")
