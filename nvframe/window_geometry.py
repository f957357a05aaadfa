"""Persisting the window's size and position between sessions."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from nvframe.config import WindowSettings
from nvframe.dimensions import Dimensions

log = logging.getLogger(__name__)

SETTINGS_FILE = "neovide-settings.json"

DEFAULT_WINDOW_GEOMETRY = Dimensions(100, 50)

_U64_MAX = 2**64 - 1
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+", re.ASCII)


class WindowSettingsError(Exception):
    """The saved window settings could not be read."""


@dataclass(frozen=True)
class Maximized:
    """The window was last maximized."""


@dataclass(frozen=True)
class Windowed:
    """The window was last a normal window at a position with a grid size."""

    position: Tuple[int, int] = (0, 0)
    size: Dimensions = DEFAULT_WINDOW_GEOMETRY


PersistentWindowSettings = Union[Maximized, Windowed]


def _neovim_data_path() -> Path:
    if os.name == "nt":
        return Path.home() / "AppData" / "local" / "nvim-data"
    data_home = os.environ.get("XDG_DATA_HOME", "")
    base = Path(data_home) if data_home and os.path.isabs(data_home) else (
        Path.home() / ".local" / "share"
    )
    return base / "nvim"


def settings_path() -> Path:
    """Default location of the persisted settings file."""
    return _neovim_data_path() / SETTINGS_FILE


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_position(data: Any) -> Tuple[int, int]:
    if not isinstance(data, dict):
        raise WindowSettingsError(f"invalid position: {data!r}")
    x, y = data.get("x"), data.get("y")
    for coordinate in (x, y):
        if not _is_int(coordinate) or not _I32_MIN <= coordinate <= _I32_MAX:
            raise WindowSettingsError(f"invalid position: {data!r}")
    return (x, y)


def _parse_size(data: Any) -> Dimensions:
    if not isinstance(data, dict):
        raise WindowSettingsError(f"invalid size: {data!r}")
    width, height = data.get("width"), data.get("height")
    for extent in (width, height):
        if not _is_int(extent) or not 0 <= extent <= _U64_MAX:
            raise WindowSettingsError(f"invalid size: {data!r}")
    return Dimensions(width, height)


def _parse_window(data: Any) -> PersistentWindowSettings:
    if data == "Maximized":
        return Maximized()
    if isinstance(data, dict) and len(data) == 1:
        tag, body = next(iter(data.items()))
        if tag == "Maximized" and body is None:
            return Maximized()
        if tag == "Windowed" and isinstance(body, dict):
            position = _parse_position(body["position"]) if "position" in body else (0, 0)
            size = _parse_size(body["size"]) if "size" in body else DEFAULT_WINDOW_GEOMETRY
            return Windowed(position=position, size=size)
    raise WindowSettingsError(f"unknown window settings: {data!r}")


def _serialise_window(window: PersistentWindowSettings) -> Any:
    if isinstance(window, Maximized):
        return "Maximized"
    x, y = window.position
    return {
        "Windowed": {
            "position": {"x": x, "y": y},
            "size": {"width": window.size.width, "height": window.size.height},
        }
    }


def load_last_window_settings(path: Optional[Path] = None) -> PersistentWindowSettings:
    """Read the saved window settings, raising WindowSettingsError on failure."""
    path = settings_path() if path is None else Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as error:
        raise WindowSettingsError(str(error)) from error
    try:
        document = json.loads(text)
    except json.JSONDecodeError as error:
        raise WindowSettingsError(str(error)) from error
    if not isinstance(document, dict) or "window" not in document:
        raise WindowSettingsError("missing field `window`")

    loaded = _parse_window(document["window"])
    log.debug("Loaded window settings: %r", loaded)

    if isinstance(loaded, Windowed) and (loaded.size.width == 0 or loaded.size.height == 0):
        loaded = Windowed(position=loaded.position, size=DEFAULT_WINDOW_GEOMETRY)
    return loaded


def save_window_geometry(
    path: Optional[Path],
    window_settings: WindowSettings,
    maximized: bool,
    grid_size: Optional[Dimensions],
    position: Optional[Tuple[int, int]],
) -> None:
    """Write the window state, honouring the remember-size/position settings."""
    if maximized and window_settings.remember_window_size:
        window: PersistentWindowSettings = Maximized()
    else:
        size = (
            grid_size
            if window_settings.remember_window_size and grid_size is not None
            else DEFAULT_WINDOW_GEOMETRY
        )
        saved_position = (
            position
            if window_settings.remember_window_position and position is not None
            else (0, 0)
        )
        window = Windowed(position=saved_position, size=size)

    path = settings_path() if path is None else Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps({"window": _serialise_window(window)}, separators=(",", ":"))
    log.debug("Saved Window Settings: %s", text)
    path.write_text(text, encoding="utf-8")


def _parse_dimension(text: str, invalid_message: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ValueError(invalid_message)
    value = int(text)
    if value > _U64_MAX:
        raise ValueError(invalid_message)
    if value == 0:
        raise ValueError("Invalid geometry: Window dimensions should be greater than 0.")
    return value


def parse_window_geometry(geometry: Optional[str], path: Optional[Path] = None) -> Dimensions:
    """Parse a ``<width>x<height>`` geometry, or fall back to the saved size."""
    if geometry is None:
        try:
            saved = load_last_window_settings(path)
        except WindowSettingsError:
            return DEFAULT_WINDOW_GEOMETRY
        return saved.size if isinstance(saved, Windowed) else DEFAULT_WINDOW_GEOMETRY

    invalid_message = f"Invalid geometry: {geometry}\nValid format: <width>x<height>"
    dimensions = [_parse_dimension(part, invalid_message) for part in geometry.split("x")]
    if len(dimensions) != 2:
        raise ValueError(invalid_message)
    width, height = dimensions
    return Dimensions(width, height)