# models.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from capabilities import UiItem


class StreamKind(Enum):
    SINK_INPUT = "SinkInput"
    SOURCE_OUTPUT = "SourceOutput"


class IconTier(Enum):
    MUTE = "mute"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class TrackedStreamEntry:
    id: int
    kind: StreamKind
    item: Optional[UiItem] = None


@dataclass(frozen=True)
class VolumeSettings:
    up_binding: str
    down_binding: str
    step: int
