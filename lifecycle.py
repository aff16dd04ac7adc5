# lifecycle.py
from __future__ import annotations

import functools
import logging
from typing import Any, Mapping, Optional

from app_meta import APP_NAME
from capabilities import HotkeyManager, MixerControl, OverlayDisplay, SettingsStore
from controller import VolumeController
from models import IconTier, VolumeSettings
from stream_registry import StreamRegistry
from volume_math import clamp_step

logger = logging.getLogger(__name__)


KEY_VOLUME_UP = "volume-up"
KEY_VOLUME_DOWN = "volume-down"
KEY_VOLUME_STEPS = "volume-steps"

MIXER_NAME = APP_NAME


class ExtensionLifecycle:
    """
    I own one running instance: the settings bindings, the two hotkeys,
    the mixer connection and the stream registry.

    Construction is the init phase; the host then calls enable() and,
    eventually, disable(). After disable() the instance is finished.
    """

    def __init__(
        self,
        uuid: str,
        settings: SettingsStore,
        hotkeys: HotkeyManager,
        mixer: MixerControl,
        overlay: OverlayDisplay,
        icons: Mapping[IconTier, Any],
    ) -> None:
        self.uuid = uuid
        self.settings: Optional[SettingsStore] = settings
        self.hotkeys = hotkeys
        self.mixer = mixer
        self.registry = StreamRegistry()
        self.controller = VolumeController(mixer, overlay, icons)

        self._enabled = False
        self._disabled = False

        settings.bind(KEY_VOLUME_UP, self.on_keybinding_changed)
        settings.bind(KEY_VOLUME_DOWN, self.on_keybinding_changed)
        settings.bind(KEY_VOLUME_STEPS, self.on_step_changed)
        self.values = self._read_settings()

        self.mixer.open(MIXER_NAME)
        self.mixer.on_stream_added(self._on_stream_added)
        self.mixer.on_stream_removed(self._on_stream_removed)
        logger.info(f"Initialized {MIXER_NAME} ({uuid})")

    @property
    def up_hotkey_name(self) -> str:
        return f"fvc-volume-up-{self.uuid}"

    @property
    def down_hotkey_name(self) -> str:
        return f"fvc-volume-down-{self.uuid}"

    def _read_settings(self) -> VolumeSettings:
        if self.settings is None:
            raise RuntimeError("Settings were released by disable().")
        return VolumeSettings(
            up_binding=self.settings.get(KEY_VOLUME_UP).strip(),
            down_binding=self.settings.get(KEY_VOLUME_DOWN).strip(),
            step=clamp_step(self.settings.get_int(KEY_VOLUME_STEPS)),
        )

    def enable(self) -> None:
        if self._disabled:
            raise RuntimeError("Cannot enable after disable.")
        self._enabled = True
        self.on_keybinding_changed()
        logger.info("Enabled")

    def on_keybinding_changed(self) -> None:
        if not self._enabled or self.settings is None:
            return

        self.values = self._read_settings()

        # Always drop both first; a step change needs new callbacks too.
        self.hotkeys.unregister(self.up_hotkey_name)
        self.hotkeys.unregister(self.down_hotkey_name)

        step = self.values.step
        self._register(self.up_hotkey_name, self.values.up_binding,
                       functools.partial(self.controller.volume_up, step))
        self._register(self.down_hotkey_name, self.values.down_binding,
                       functools.partial(self.controller.volume_down, step))

    def on_step_changed(self) -> None:
        self.on_keybinding_changed()

    def _register(self, name: str, combo: str, callback) -> None:
        if not combo:
            logger.info(f"No key combination set for {name}; leaving it unbound")
            return
        self.hotkeys.register(name, combo, callback)
        logger.info(f"Bound {name} to {combo}")

    def _on_stream_added(self, stream_id: int) -> None:
        if self._disabled:
            return
        stream = self.mixer.lookup_stream_id(stream_id)
        if stream is None:
            return
        self.registry.on_stream_added(stream_id, stream.kind, stream.is_virtual, stream.application_id)

    def _on_stream_removed(self, stream_id: int) -> None:
        if self._disabled:
            return
        self.registry.on_stream_removed(stream_id)

    def disable(self) -> None:
        if self._disabled:
            return
        self._disabled = True
        self._enabled = False

        if self.settings is not None:
            self.settings.finalize()
            self.settings = None

        self.hotkeys.unregister(self.up_hotkey_name)
        self.hotkeys.unregister(self.down_hotkey_name)
        self.registry.clear()
        self.mixer.close()
        logger.info("Disabled")
