# app_meta.py
from __future__ import annotations

from importlib import metadata


APP_NAME = "Fine Volume Control"
APP_ID = "fine-volume-control"
DEFAULT_UUID = "fine-volume-control@local"


def detect_version() -> str:
    try:
        return metadata.version(APP_ID)
    except metadata.PackageNotFoundError:
        return "0.0.0"
