# store_config.py
from __future__ import annotations

import configparser
import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from app_meta import APP_ID
from errors import SettingsError

logger = logging.getLogger(__name__)


SECTION_KEYS = "Keybindings"
SECTION_OVERLAY = "Overlay"

DEFAULTS: Dict[str, Dict[str, str]] = {
    SECTION_KEYS: {
        "volume-up": "<ctrl>+<alt>+<page_up>",
        "volume-down": "<ctrl>+<alt>+<page_down>",
        "volume-steps": "1",
    },
    SECTION_OVERLAY: {
        "timeout-ms": "1500",
    },
}

DEFAULT_CONFIG_TEXT = """\
[Keybindings]
volume-up = <ctrl>+<alt>+<page_up>
volume-down = <ctrl>+<alt>+<page_down>
volume-steps = 1

[Overlay]
timeout-ms = 1500
"""


def _linux_xdg_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def user_config_dir(app_name: str = APP_ID) -> Path:
    return _linux_xdg_config_dir() / app_name


def _new_parser() -> configparser.ConfigParser:
    return configparser.ConfigParser(interpolation=None)


class ConfigStore:
    """
    I keep the user's settings in an INI file and tell bound callbacks when a
    value changes.

    Changes made by editing the file are picked up by reload(), which the
    application calls from a timer. Only keys whose value actually changed
    fire their callbacks.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.file_path = path if path is not None else user_config_dir() / f"{APP_ID}.cfg"
        self._bindings: Dict[Tuple[str, str], List[Callable[[], None]]] = {}
        self._finalized = False
        self._cfg = self.load()

    @property
    def dir_path(self) -> Path:
        return self.file_path.parent

    def ensure_exists(self) -> None:
        self.dir_path.mkdir(parents=True, exist_ok=True)
        if not self.file_path.exists():
            self.file_path.write_text(DEFAULT_CONFIG_TEXT, encoding="utf-8")
            logger.info(f"Wrote default settings to {self.file_path}")

    def load(self) -> configparser.ConfigParser:
        self.ensure_exists()
        cfg = _new_parser()
        try:
            cfg.read(self.file_path, encoding="utf-8")
        except configparser.Error as e:
            raise SettingsError(f"Cannot parse {self.file_path}: {e}") from e

        for section, values in DEFAULTS.items():
            if not cfg.has_section(section):
                cfg.add_section(section)
            for key, default in values.items():
                cfg.set(section, key, cfg.get(section, key, fallback=default))

        return cfg

    def save(self) -> None:
        self.ensure_exists()
        with self.file_path.open("w", encoding="utf-8") as f:
            self._cfg.write(f)

    def get(self, key: str, section: str = SECTION_KEYS) -> str:
        if not self._cfg.has_option(section, key):
            raise SettingsError(f"Unknown setting [{section}] {key}")
        return self._cfg.get(section, key)

    def get_int(self, key: str, section: str = SECTION_KEYS) -> int:
        raw = self.get(key, section).strip()
        try:
            return int(raw)
        except ValueError as e:
            raise SettingsError(f"Setting [{section}] {key} must be an integer, got {raw!r}") from e

    def set(self, key: str, value: str, section: str = SECTION_KEYS) -> None:
        old = self.get(key, section)
        self._cfg.set(section, key, str(value))
        self.save()
        if old != str(value):
            self._notify(section, key)

    def bind(self, key: str, callback: Callable[[], None], section: str = SECTION_KEYS) -> str:
        if self._finalized:
            raise SettingsError("Settings store has been finalized.")
        value = self.get(key, section)
        self._bindings.setdefault((section, key), []).append(callback)
        return value

    def reload(self) -> List[str]:
        if self._finalized:
            return []

        fresh = self.load()
        changed: List[Tuple[str, str]] = []
        for section in fresh.sections():
            for key, value in fresh.items(section):
                if self._cfg.get(section, key, fallback=None) != value:
                    changed.append((section, key))

        self._cfg = fresh
        # Every changed key is notified; the next reload sees no diff.
        errors: List[Exception] = []
        for section, key in changed:
            logger.info(f"Setting [{section}] {key} changed")
            try:
                self._notify(section, key)
            except Exception as e:
                logger.error(f"Applying [{section}] {key} failed: {e}")
                errors.append(e)
        if errors:
            raise errors[0]
        return [key for _section, key in changed]

    def _notify(self, section: str, key: str) -> None:
        for cb in list(self._bindings.get((section, key), [])):
            cb()

    def finalize(self) -> None:
        self._bindings.clear()
        self._finalized = True
