# pulse_backend.py
from __future__ import annotations

import itertools
import logging
import threading
from typing import Callable, Dict, List, Optional, Tuple

import pulsectl
from PySide6.QtCore import QObject, QTimer, Signal

from errors import MixerError
from models import StreamKind

logger = logging.getLogger(__name__)


# PA_VOLUME_NORM: the raw value for 100%.
VOLUME_NORM = 0x10000
PA_INVALID_INDEX = 0xFFFFFFFF

FACILITY_KINDS: Dict[str, StreamKind] = {
    "sink_input": StreamKind.SINK_INPUT,
    "source_output": StreamKind.SOURCE_OUTPUT,
}

StreamKey = Tuple[str, int]


def _proplist(info) -> Dict[str, str]:
    pl = getattr(info, "proplist", None)
    return pl if isinstance(pl, dict) else {}


def _has_no_client(info) -> bool:
    client = getattr(info, "client", None)
    return client is None or client == PA_INVALID_INDEX


class PulseStream:
    def __init__(
        self,
        pulse: pulsectl.Pulse,
        info,
        stream_id: int,
        kind: Optional[StreamKind],
    ) -> None:
        self._pulse = pulse
        self._info = info
        self.id = stream_id
        self.kind = kind
        self._channels: List[float] = list(info.volume.values)
        # The loudest channel is the stream's level; the others keep their ratio to it.
        self.volume = int(round(max(self._channels, default=0.0) * VOLUME_NORM))
        self.application_id = _proplist(info).get("application.id", "")
        # Streams nobody owns are created by the server itself.
        self.is_virtual = kind is not None and _has_no_client(info)

    @property
    def name(self) -> str:
        return getattr(self._info, "name", "") or ""

    def _scaled_channels(self) -> List[float]:
        target = self.volume / VOLUME_NORM
        loudest = max(self._channels, default=0.0)
        if loudest <= 0:
            return [target] * len(self._channels)
        factor = target / loudest
        return [v * factor for v in self._channels]

    def push_volume(self) -> None:
        values = self._scaled_channels()
        if not values:
            return
        try:
            self._pulse.volume_set(self._info, pulsectl.PulseVolumeInfo(values))
        except pulsectl.PulseError as e:
            raise MixerError(f"Failed to push volume for stream {self.id}: {e}") from e


class PulseMixerControl(QObject):
    """
    I expose a pulsectl connection the way the volume core expects a mixer.

    Stream ids handed out here are my own: Pulse indexes are only unique per
    object type, so (type, index) pairs are mapped onto one counter.
    Server events are read on a second connection in a background thread and
    re-emitted on the Qt thread that owns this object.
    """

    stream_added = Signal(int)
    stream_removed = Signal(int)
    _pulse_event = Signal(str, str, int)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._name = ""
        self._pulse: Optional[pulsectl.Pulse] = None
        self._listener: Optional[pulsectl.Pulse] = None
        self._thread: Optional[threading.Thread] = None

        self._ids: Dict[StreamKey, int] = {}
        self._keys: Dict[int, StreamKey] = {}
        self._counter = itertools.count(1)
        # Only the current default sink gets an id; sinks are never tracked.
        self._default_sink: Optional[Tuple[int, int]] = None

        self._pulse_event.connect(self._on_pulse_event)

    def open(self, name: str) -> None:
        self._name = name
        self._pulse_connect()
        self._start_listener()
        QTimer.singleShot(0, self._announce_existing)

    def _pulse_connect(self) -> pulsectl.Pulse:
        if self._pulse is None:
            try:
                self._pulse = pulsectl.Pulse(self._name)
            except pulsectl.PulseError as e:
                raise MixerError(f"Failed to connect to the sound server: {e}") from e
            logger.info(f"Connected to the sound server as {self._name!r}")
        return self._pulse

    def _start_listener(self) -> None:
        if self._listener is not None:
            return
        try:
            listener = pulsectl.Pulse(f"{self._name} (events)")
            listener.event_mask_set(*FACILITY_KINDS.keys())
            listener.event_callback_set(self._on_raw_event)
        except pulsectl.PulseError as e:
            raise MixerError(f"Failed to subscribe to sound server events: {e}") from e

        self._listener = listener
        self._thread = threading.Thread(target=self._listen, name="pulse-events", daemon=True)
        self._thread.start()

    def _listen(self) -> None:
        listener = self._listener
        if listener is None:
            return
        try:
            listener.event_listen()
        except pulsectl.PulseDisconnected:
            logger.warning("Sound server event connection lost")

    def _on_raw_event(self, ev) -> None:
        # Runs on the listener thread; the connection is busy, so only forward.
        facility = next((f for f in FACILITY_KINDS if ev.facility == f), None)
        if facility is None:
            return
        if ev.t == "new":
            self._pulse_event.emit(facility, "new", int(ev.index))
        elif ev.t == "remove":
            self._pulse_event.emit(facility, "remove", int(ev.index))

    def _on_pulse_event(self, facility: str, event_type: str, index: int) -> None:
        key = (facility, index)
        if event_type == "new":
            if key in self._ids:
                return
            self.stream_added.emit(self._assign_id(key))
        elif event_type == "remove":
            sid = self._ids.pop(key, None)
            if sid is None:
                return
            self._keys.pop(sid, None)
            self.stream_removed.emit(sid)

    def _announce_existing(self) -> None:
        if self._pulse is None:
            return
        listings = (
            ("sink_input", self._pulse.sink_input_list),
            ("source_output", self._pulse.source_output_list),
        )
        for facility, list_fn in listings:
            try:
                infos = list_fn()
            except pulsectl.PulseError as e:
                logger.warning(f"Failed to list {facility} streams: {e}")
                continue
            for info in infos:
                key = (facility, int(info.index))
                if key not in self._ids:
                    self.stream_added.emit(self._assign_id(key))

    def _assign_id(self, key: StreamKey) -> int:
        sid = self._ids.get(key)
        if sid is None:
            sid = next(self._counter)
            self._ids[key] = sid
            self._keys[sid] = key
        return sid

    def _default_sink_id(self, index: int) -> int:
        if self._default_sink is None or self._default_sink[0] != index:
            self._default_sink = (index, next(self._counter))
        return self._default_sink[1]

    def _require(self) -> pulsectl.Pulse:
        if self._pulse is None:
            raise MixerError("Mixer connection is not open.")
        return self._pulse

    def get_default_sink(self) -> Optional[PulseStream]:
        pulse = self._require()
        try:
            name = pulse.server_info().default_sink_name
            if not name:
                return None
            info = pulse.get_sink_by_name(name)
        except pulsectl.PulseIndexError:
            return None
        except pulsectl.PulseError as e:
            raise MixerError(f"Failed to query the default sink: {e}") from e
        return PulseStream(pulse, info, self._default_sink_id(int(info.index)), None)

    def lookup_stream_id(self, stream_id: int) -> Optional[PulseStream]:
        key = self._keys.get(stream_id)
        if key is None:
            return None
        facility, index = key
        kind = FACILITY_KINDS.get(facility)
        if kind is None:
            return None

        pulse = self._require()
        info_fn = pulse.sink_input_info if kind is StreamKind.SINK_INPUT else pulse.source_output_info
        try:
            info = info_fn(index)
        except pulsectl.PulseIndexError:
            return None
        except pulsectl.PulseError as e:
            raise MixerError(f"Failed to look up stream {stream_id}: {e}") from e
        return PulseStream(pulse, info, stream_id, kind)

    def get_vol_max_norm(self) -> int:
        return VOLUME_NORM

    def on_stream_added(self, callback: Callable[[int], None]) -> None:
        self.stream_added.connect(callback)

    def on_stream_removed(self, callback: Callable[[int], None]) -> None:
        self.stream_removed.connect(callback)

    def close(self) -> None:
        if self._listener is not None:
            self._listener.event_listen_stop()
            if self._thread is not None:
                self._thread.join(timeout=1.0)
            self._listener.close()
        self._listener = None
        self._thread = None

        if self._pulse is not None:
            self._pulse.close()
        self._pulse = None

        self._ids.clear()
        self._keys.clear()
        self._default_sink = None
        logger.info("Sound server connection closed")
