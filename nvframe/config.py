"""Setting groups for the window, keyboard input and renderer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class WindowSettings:
    """Window behaviour settings."""

    refresh_rate: int = 60
    no_idle: bool = False
    transparency: float = 1.0
    fullscreen: bool = False
    iso_layout: bool = False
    remember_window_size: bool = True
    remember_window_position: bool = True
    hide_mouse_when_typing: bool = False


@dataclass
class KeyboardSettings:
    """Keyboard input settings."""

    use_logo: bool = False


@dataclass
class RendererSettings:
    """Renderer animation and appearance settings."""

    position_animation_length: float = 0.15
    scroll_animation_length: float = 0.3
    floating_opacity: float = 0.7
    floating_blur: bool = True
    debug_renderer: bool = False