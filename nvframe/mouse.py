"""Turning pointer movement, clicks and wheel input into grid mouse commands."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

from nvframe.dimensions import Dimensions
from nvframe.windows import Rect, WindowDrawDetails

_U64_MAX = 2**64 - 1
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U32_MASK = 0xFFFFFFFF


class MouseButton(Enum):
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"
    OTHER = "other"


@dataclass(frozen=True)
class MouseButtonCommand:
    button: str
    action: str
    grid_id: int
    position: Tuple[int, int]
    modifier_string: str


@dataclass(frozen=True)
class DragCommand:
    button: str
    grid_id: int
    position: Tuple[int, int]
    modifier_string: str


@dataclass(frozen=True)
class ScrollCommand:
    direction: str
    grid_id: int
    position: Tuple[int, int]
    modifier_string: str


MouseCommand = Union[MouseButtonCommand, DragCommand, ScrollCommand]


def _f32(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _to_u64(value: float) -> int:
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return 0 if value < 0 else _U64_MAX
    return min(max(int(value), 0), _U64_MAX)


def _to_i64(value: float) -> int:
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return _I64_MIN if value < 0 else _I64_MAX
    return min(max(int(value), _I64_MIN), _I64_MAX)


def clamp_position(
    position: Tuple[float, float], region: Rect, font_dimensions: Dimensions
) -> Tuple[float, float]:
    """Keep a pixel position inside a region, at least one cell from its right and bottom."""
    x, y = position
    return (
        max(min(x, region.right - font_dimensions.width), region.left),
        max(min(y, region.bottom - font_dimensions.height), region.top),
    )


def to_grid_coords(
    position: Tuple[float, float], font_dimensions: Dimensions
) -> Tuple[int, int]:
    """The grid cell containing a pixel position."""
    x, y = position
    return (
        (_to_u64(x) // font_dimensions.width) & _U32_MASK,
        (_to_u64(y) // font_dimensions.height) & _U32_MASK,
    )


def mouse_button_text(button: Any) -> Optional[str]:
    """The editor's name for a button, or None for buttons it does not know."""
    if button in (MouseButton.LEFT, MouseButton.RIGHT, MouseButton.MIDDLE):
        return button.value
    return None


class MouseManager:
    """Tracks pointer state and produces mouse commands for the editor."""

    def __init__(self, command_sender: Optional[Callable[[MouseCommand], None]] = None) -> None:
        self._send = command_sender
        self.dragging: Optional[str] = None
        self.drag_position: Tuple[int, int] = (0, 0)
        self.has_moved = False
        self.position: Tuple[int, int] = (0, 0)
        self.relative_position: Tuple[int, int] = (0, 0)
        self.scroll_x = 0.0
        self.scroll_y = 0.0
        self.window_details_under_mouse: Optional[WindowDrawDetails] = None
        self.enabled = True

    def _emit(self, commands: List[MouseCommand]) -> List[MouseCommand]:
        if self._send is not None:
            for command in commands:
                self._send(command)
        return commands

    def _relevant_window(
        self, position: Tuple[float, float], regions: Sequence[WindowDrawDetails]
    ) -> Optional[WindowDrawDetails]:
        if self.dragging is not None:
            # A drag stays with the window it started on.
            if self.window_details_under_mouse is None:
                raise RuntimeError("If dragging, there should be a window details recorded")
            target_id = self.window_details_under_mouse.id
            return next((d for d in regions if d.id == target_id), None)
        # Regions come in draw order, so the last match is the topmost window.
        x, y = position
        hits = [details for details in regions if details.region.contains(x, y)]
        return hits[-1] if hits else None

    def pointer_motion(
        self,
        x: int,
        y: int,
        window_size: Tuple[int, int],
        regions: Sequence[WindowDrawDetails],
        font_dimensions: Dimensions,
        modifier_string: str = "",
    ) -> List[MouseCommand]:
        """Record a pointer move; return the drag command it causes, if any."""
        width, height = window_size
        if x < 0 or x >= width or y < 0 or y >= height:
            return []

        position = (float(x), float(y))
        details = self._relevant_window(position, regions)

        bounds = details.region if details is not None else Rect(0.0, 0.0, float(width), float(height))
        clamped = clamp_position(position, bounds, font_dimensions)
        self.position = to_grid_coords(clamped, font_dimensions)

        commands: List[MouseCommand] = []
        if details is not None:
            relative = (clamped[0] - details.region.left, clamped[1] - details.region.top)
            self.relative_position = to_grid_coords(relative, font_dimensions)

            previous_position = self.drag_position
            # Floating windows take relative coordinates; root windows need global ones.
            if details.floating_order is not None:
                self.drag_position = self.relative_position
            else:
                self.drag_position = self.position

            moved = self.drag_position != previous_position
            if self.dragging is not None and moved:
                commands.append(
                    DragCommand(
                        button=self.dragging,
                        grid_id=details.id,
                        position=self.drag_position,
                        modifier_string=modifier_string,
                    )
                )
            else:
                self.window_details_under_mouse = details

            self.has_moved = self.dragging is not None and (self.has_moved or moved)

        return self._emit(commands)

    def pointer_transition(
        self, button: Any, down: bool, modifier_string: str = ""
    ) -> List[MouseCommand]:
        """Record a button press or release; return the command it causes."""
        if not self.enabled:
            return []
        button_text = mouse_button_text(button)
        if button_text is None:
            return []

        commands: List[MouseCommand] = []
        details = self.window_details_under_mouse
        if details is not None:
            position = self.drag_position if not down and self.has_moved else self.relative_position
            commands.append(
                MouseButtonCommand(
                    button=button_text,
                    action="press" if down else "release",
                    grid_id=details.id,
                    position=position,
                    modifier_string=modifier_string,
                )
            )

        self.dragging = button_text if down else None
        if self.dragging is None:
            self.has_moved = False

        return self._emit(commands)

    def _scroll_axis(
        self, total: float, delta: float, forward: str, backward: str, modifier_string: str
    ) -> Tuple[float, List[MouseCommand]]:
        new_total = _f32(total + _f32(delta))
        previous_lines = _to_i64(total)
        new_lines = _to_i64(new_total)
        if new_lines == previous_lines:
            return new_total, []
        grid_id = (
            self.window_details_under_mouse.id
            if self.window_details_under_mouse is not None
            else 0
        )
        command = ScrollCommand(
            direction=forward if new_lines > previous_lines else backward,
            grid_id=grid_id,
            position=self.drag_position,
            modifier_string=modifier_string,
        )
        return new_total, [command] * abs(new_lines - previous_lines)

    def line_scroll(self, x: float, y: float, modifier_string: str = "") -> List[MouseCommand]:
        """Accumulate wheel movement in lines; one command per whole line crossed."""
        if not self.enabled:
            return []
        self.scroll_y, vertical = self._scroll_axis(
            self.scroll_y, y, "up", "down", modifier_string
        )
        self.scroll_x, horizontal = self._scroll_axis(
            self.scroll_x, x, "right", "left", modifier_string
        )
        return self._emit(vertical + horizontal)

    def pixel_scroll(
        self,
        font_dimensions: Dimensions,
        pixel_x: float,
        pixel_y: float,
        modifier_string: str = "",
    ) -> List[MouseCommand]:
        """Scroll by a pixel distance, measured in cells."""
        return self.line_scroll(
            _f32(_f32(pixel_x) / font_dimensions.width),
            _f32(_f32(pixel_y) / font_dimensions.height),
            modifier_string,
        )