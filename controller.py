# controller.py
from __future__ import annotations

import logging
from typing import Any, Mapping

from capabilities import MixerControl, OverlayDisplay
from errors import MixerError
from models import IconTier
from volume_math import apply_step, clamp_step, denormalize, icon_tier, normalize

logger = logging.getLogger(__name__)


# Hide delay is left to the overlay.
OSD_DEFAULT_TIMEOUT = -1


class VolumeController:
    def __init__(
        self,
        mixer: MixerControl,
        overlay: OverlayDisplay,
        icons: Mapping[IconTier, Any],
    ) -> None:
        self._mixer = mixer
        self._overlay = overlay
        self._icons = icons

    def volume_up(self, step: int = 1) -> None:
        self._change_volume(clamp_step(step))

    def volume_down(self, step: int = 1) -> None:
        self._change_volume(-clamp_step(step))

    def _change_volume(self, delta: int) -> None:
        stream = self._mixer.get_default_sink()
        if stream is None:
            return

        # Everything that can raise DomainError runs before any side effect.
        vol_max = self._mixer.get_vol_max_norm()
        percent = apply_step(normalize(stream.volume, vol_max), delta)
        raw = denormalize(percent, vol_max)

        self._overlay.show_osd(OSD_DEFAULT_TIMEOUT, self._icons[icon_tier(percent)], percent)

        try:
            stream.volume = raw
            stream.push_volume()
        except MixerError as e:
            logger.warning(f"Failed to set volume of stream {stream.id} to {percent}%: {e}")
            return

        logger.debug(f"Volume of stream {stream.id} set to {percent}% (raw {raw})")
