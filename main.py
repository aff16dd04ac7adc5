# main.py
from __future__ import annotations

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

from app_meta import APP_ID, APP_NAME, DEFAULT_UUID, detect_version
from errors import HotkeyError, MixerError, SettingsError
from hotkeys import GlobalHotkeyManager
from icons import themed_icons
from lifecycle import ExtensionLifecycle
from osd import VolumeOsd
from pulse_backend import PulseMixerControl
from store_config import SECTION_OVERLAY, ConfigStore, user_config_dir

logger = logging.getLogger(__name__)


SETTINGS_POLL_MS = 1200


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=APP_ID,
        description="Global hotkeys for fine-grained volume steps on the default output.",
    )
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    parser.add_argument("--config", type=Path, default=None, help="settings file to use")
    parser.add_argument("--uuid", default=DEFAULT_UUID, help="identity used to name the hotkeys")
    parser.add_argument("--version", action="version", version=f"%(prog)s {detect_version()}")
    return parser.parse_args(argv)


def setup_logging(debug: bool, log_dir: Path) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / f"{APP_ID}.log", encoding="utf-8"))
    except OSError:
        pass

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def poll_settings(store: ConfigStore) -> None:
    try:
        store.reload()
    except (SettingsError, HotkeyError) as e:
        logger.error(f"Settings change rejected: {e}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    log_dir = args.config.parent if args.config is not None else user_config_dir()
    setup_logging(args.debug, log_dir)
    logger.info(f"Starting {APP_NAME} {detect_version()}")

    app = QApplication(sys.argv[:1])
    app.setApplicationName(APP_NAME)
    app.setQuitOnLastWindowClosed(False)

    try:
        store = ConfigStore(args.config)
        osd = VolumeOsd(default_timeout_ms=store.get_int("timeout-ms", SECTION_OVERLAY))
        store.bind(
            "timeout-ms",
            lambda: setattr(osd, "default_timeout_ms", store.get_int("timeout-ms", SECTION_OVERLAY)),
            section=SECTION_OVERLAY,
        )
        lifecycle = ExtensionLifecycle(
            args.uuid,
            store,
            GlobalHotkeyManager(),
            PulseMixerControl(),
            osd,
            themed_icons(),
        )
        lifecycle.enable()
    except (SettingsError, HotkeyError, MixerError) as e:
        logger.error(f"Failed to start: {e}")
        return 1

    poll = QTimer()
    poll.setInterval(SETTINGS_POLL_MS)
    poll.timeout.connect(lambda: poll_settings(store))
    poll.start()

    # Python only sees SIGINT between Qt events; the idle timer makes room.
    signal.signal(signal.SIGINT, lambda *_: app.quit())
    wake = QTimer()
    wake.start(250)
    wake.timeout.connect(lambda: None)

    app.aboutToQuit.connect(poll.stop)
    app.aboutToQuit.connect(lifecycle.disable)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
