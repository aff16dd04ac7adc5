"""Tests for the hotkey volume actions."""

import pytest

from controller import OSD_DEFAULT_TIMEOUT, VolumeController
from errors import DomainError, MixerError
from models import IconTier
from volume_math import denormalize

from conftest import VOL_NORM, FakeMixer, FakeStream


class TestVolumeController:
    """Test volume up/down against fake collaborators."""

    def test_no_default_sink_is_noop(self, overlay, icons):
        """Test that nothing happens without a default sink."""
        ctl = VolumeController(FakeMixer(default_sink=None), overlay, icons)
        ctl.volume_up(5)
        ctl.volume_down(5)
        assert overlay.calls == []

    def test_volume_up_from_half(self, mixer, sink, overlay, icons):
        """Test 50% + 5 shows 55 with the medium icon and writes 55%."""
        ctl = VolumeController(mixer, overlay, icons)
        ctl.volume_up(5)

        assert overlay.calls == [(OSD_DEFAULT_TIMEOUT, icons[IconTier.MEDIUM], 55)]
        assert sink.pushed == [denormalize(55, VOL_NORM)]
        assert sink.volume == denormalize(55, VOL_NORM)

    def test_volume_down_from_half(self, mixer, sink, overlay, icons):
        """Test 50% - 5 writes 45%."""
        ctl = VolumeController(mixer, overlay, icons)
        ctl.volume_down(5)

        assert overlay.calls[0][2] == 45
        assert sink.pushed == [denormalize(45, VOL_NORM)]

    def test_saturates_at_full(self, overlay, icons):
        """Test that volume up at 100% stays at 100% and uses the high icon."""
        sink = FakeStream(volume=VOL_NORM)
        ctl = VolumeController(FakeMixer(default_sink=sink), overlay, icons)
        ctl.volume_up(5)

        assert overlay.calls == [(OSD_DEFAULT_TIMEOUT, icons[IconTier.HIGH], 100)]
        assert sink.pushed == [VOL_NORM]

    def test_down_to_mute(self, overlay, icons):
        """Test that stepping to 0 shows the mute icon."""
        sink = FakeStream(volume=denormalize(3, VOL_NORM))
        ctl = VolumeController(FakeMixer(default_sink=sink), overlay, icons)
        ctl.volume_down(5)

        assert overlay.calls[0][1:] == (icons[IconTier.MUTE], 0)
        assert sink.pushed == [0]

    def test_step_is_clamped(self, mixer, sink, overlay, icons):
        """Test that a zero step still moves by 1%."""
        ctl = VolumeController(mixer, overlay, icons)
        ctl.volume_up(0)
        assert overlay.calls[0][2] == 51

    def test_domain_error_has_no_side_effects(self, sink, overlay, icons):
        """Test that a broken ceiling aborts before overlay and write."""
        ctl = VolumeController(FakeMixer(default_sink=sink, vol_max=0), overlay, icons)
        with pytest.raises(DomainError):
            ctl.volume_up(5)
        assert overlay.calls == []
        assert sink.pushed == []

    def test_failed_write_still_shows_overlay(self, overlay, icons):
        """Test that a rejected push is swallowed after the overlay was shown."""
        sink = FakeStream(volume=VOL_NORM // 2, fail_push=MixerError("gone"))
        ctl = VolumeController(FakeMixer(default_sink=sink), overlay, icons)
        ctl.volume_up(5)

        assert len(overlay.calls) == 1
        assert sink.pushed == []
