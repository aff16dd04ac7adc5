# volume_math.py
from __future__ import annotations

from typing import Optional, Union

from errors import DomainError
from models import IconTier


PERCENT_MIN = 0
PERCENT_MAX = 100
DEFAULT_STEP = 1


def _check_ceiling(raw_max: float) -> None:
    if raw_max <= 0:
        raise DomainError(f"Volume ceiling must be positive, got {raw_max!r}")


def normalize(raw_volume: float, raw_max: float) -> int:
    """Convert a native volume into percent, relative to the server's 100% value."""
    _check_ceiling(raw_max)
    return int(round(raw_volume * 100 / raw_max))


def apply_step(percent: float, delta: float) -> int:
    v = percent + delta
    v = min(v, PERCENT_MAX)
    v = max(v, PERCENT_MIN)
    return int(round(v))


def denormalize(percent: float, raw_max: float) -> int:
    _check_ceiling(raw_max)
    return int(round(percent / 100 * raw_max))


def icon_tier(percent: int) -> IconTier:
    """
    I map a percent level onto one of four icon tiers.

    Upper bounds are inclusive: 25 is still LOW and 75 is still MEDIUM.
    """
    if percent <= 0:
        return IconTier.MUTE
    if percent <= 25:
        return IconTier.LOW
    if percent <= 75:
        return IconTier.MEDIUM
    return IconTier.HIGH


def clamp_step(value: Optional[Union[int, str]]) -> int:
    if value is None or value == "":
        return DEFAULT_STEP
    step = int(value)
    return max(1, min(PERCENT_MAX, step))
