# stream_registry.py
from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from capabilities import UiItem
from models import StreamKind, TrackedStreamEntry

logger = logging.getLogger(__name__)


# Event sounds (login chimes, notification pings) come and go constantly.
NOISE_APP_IDS = frozenset({"org.freedesktop.libcanberra"})


class StreamRegistry:
    def __init__(self) -> None:
        self._entries: List[TrackedStreamEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TrackedStreamEntry]:
        return iter(list(self._entries))

    def __contains__(self, stream_id: object) -> bool:
        return self._index_of(stream_id) is not None

    def ids(self) -> List[int]:
        return [e.id for e in self._entries]

    def get(self, stream_id: int) -> Optional[TrackedStreamEntry]:
        i = self._index_of(stream_id)
        return None if i is None else self._entries[i]

    def _index_of(self, stream_id: object) -> Optional[int]:
        for i, e in enumerate(self._entries):
            if e.id == stream_id:
                return i
        return None

    def on_stream_added(
        self,
        stream_id: int,
        kind: object,
        is_virtual: bool,
        owner_app_id: Optional[str],
    ) -> Optional[TrackedStreamEntry]:
        if is_virtual or owner_app_id in NOISE_APP_IDS:
            logger.debug(f"Ignoring stream {stream_id} (virtual={is_virtual}, app={owner_app_id})")
            return None

        if kind is StreamKind.SINK_INPUT:
            entry = TrackedStreamEntry(id=stream_id, kind=StreamKind.SINK_INPUT)
        elif kind is StreamKind.SOURCE_OUTPUT:
            entry = TrackedStreamEntry(id=stream_id, kind=StreamKind.SOURCE_OUTPUT)
        else:
            logger.debug(f"Ignoring stream {stream_id} of kind {kind!r}")
            return None

        # A re-announced id replaces the stale entry.
        self.on_stream_removed(stream_id)
        self._entries.append(entry)
        logger.debug(f"Tracking {entry.kind.value} stream {stream_id}")
        return entry

    def on_stream_removed(self, stream_id: int) -> None:
        i = self._index_of(stream_id)
        if i is None:
            return

        entry = self._entries.pop(i)
        if entry.item is not None:
            entry.item.destroy()
        logger.debug(f"Stopped tracking stream {stream_id}")

    def attach_item(self, stream_id: int, item: UiItem) -> bool:
        entry = self.get(stream_id)
        if entry is None:
            return False
        entry.item = item
        return True

    def clear(self) -> None:
        for e in list(self._entries):
            self.on_stream_removed(e.id)
