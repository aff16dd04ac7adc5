# errors.py
from __future__ import annotations


class DomainError(ValueError):
    """A volume computation received an argument outside its domain."""


class SettingsError(RuntimeError):
    pass


class HotkeyError(RuntimeError):
    pass


class MixerError(RuntimeError):
    pass
