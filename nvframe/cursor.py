"""Animated cursor corners and where the cursor lands on screen."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from nvframe.animation import FLOAT32_EPSILON, Point, ease_out_expo, ease_point, lerp
from nvframe.cursor_vfx import CursorSettings
from nvframe.dimensions import Dimensions
from nvframe.windows import WindowAnimation

DEFAULT_CELL_PERCENTAGE = 1.0 / 8.0

STANDARD_CORNERS: Tuple[Tuple[float, float], ...] = (
    (-0.5, -0.5),
    (0.5, -0.5),
    (0.5, 0.5),
    (-0.5, 0.5),
)


class CursorShape(Enum):
    BLOCK = "block"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def _length_multiplier(distance: float) -> float:
    if math.isnan(distance) or distance <= 0.0:
        return 0.0
    return max(math.log10(distance), 0.0)


def _advance(t: float, step: float, duration: float) -> float:
    """Add step/duration to t and cap the result at 1.0."""
    if duration != 0.0:
        candidate = t + step / duration
    elif step > 0.0:
        candidate = math.inf
    elif step < 0.0:
        candidate = -math.inf
    else:
        candidate = math.nan
    if math.isnan(candidate):
        return 1.0
    return min(candidate, 1.0)


@dataclass
class Corner:
    """One corner of the cursor quad, animated towards its destination."""

    start_position: Point = Point(0.0, 0.0)
    current_position: Point = Point(0.0, 0.0)
    relative_position: Point = Point(0.0, 0.0)
    previous_destination: Point = Point(-1000.0, -1000.0)
    length_multiplier: float = 1.0
    t: float = 0.0

    def update(
        self,
        settings: CursorSettings,
        font_dimensions: Point,
        destination: Point,
        dt: float,
        immediate_movement: bool,
    ) -> bool:
        """Move the corner towards ``destination``; return whether it is still animating."""
        if destination != self.previous_destination:
            self.t = 0.0
            self.start_position = self.current_position
            self.previous_destination = destination
            if settings.distance_length_adjust:
                self.length_multiplier = _length_multiplier(
                    (destination - self.current_position).length()
                )
            else:
                self.length_multiplier = 1.0

        if abs(self.t - 1.0) < FLOAT32_EPSILON:
            return False

        scaled_offset = Point(
            self.relative_position.x * font_dimensions.x,
            self.relative_position.y * font_dimensions.y,
        )
        corner_destination = destination + scaled_offset

        if immediate_movement:
            self.t = 1.0
            self.current_position = corner_destination
            return True

        # Corners facing the direction of travel move faster than trailing ones.
        travel_direction = (destination - self.current_position).normalized()
        corner_direction = self.relative_position.normalized()
        direction_alignment = travel_direction.dot(corner_direction)

        trail = min(max(1.0 - settings.trail_size, 0.0), 1.0)
        corner_dt = dt * lerp(1.0, trail, -direction_alignment)
        self.t = _advance(
            self.t, corner_dt, settings.animation_length * self.length_multiplier
        )

        self.current_position = ease_point(
            ease_out_expo, self.start_position, corner_destination, self.t
        )
        return True


def shape_corners(
    corners: Iterable[Corner], cursor_shape: CursorShape, cell_percentage: float
) -> List[Corner]:
    """New corners placed for a cursor shape, restarting their animation."""
    corners = list(corners)
    if len(corners) > len(STANDARD_CORNERS):
        raise ValueError(f"a cursor has at most {len(STANDARD_CORNERS)} corners")

    shaped = []
    for corner, (x, y) in zip(corners, STANDARD_CORNERS):
        if cursor_shape is CursorShape.VERTICAL:
            # Pull the right side in to the bar width.
            relative = Point((x + 0.5) * cell_percentage - 0.5, y)
        elif cursor_shape is CursorShape.HORIZONTAL:
            # The same, flipped so the bar sits at the bottom of the cell.
            relative = Point(x, -((-y + 0.5) * cell_percentage - 0.5))
        else:
            relative = Point(x, y)
        shaped.append(
            replace(
                corner,
                relative_position=relative,
                t=0.0,
                start_position=corner.current_position,
            )
        )
    return shaped


def cursor_destination(
    grid_position: Tuple[int, int],
    font_dimensions: Dimensions,
    window: Optional[WindowAnimation],
) -> Point:
    """Pixel position of a cursor at a grid position inside a window.

    The vertical position is kept inside the window, since only scrolling
    can push it out.
    """
    grid_x, grid_y = grid_position
    if window is None:
        return Point(
            float(grid_x * font_dimensions.width),
            float(grid_y * font_dimensions.height),
        )

    origin = window.grid_current_position
    x = grid_x + origin.x
    y = grid_y + origin.y - (window.current_scroll - window.top_line)
    y = min(max(y, origin.y), origin.y + window.grid_size.height - 1.0)
    return Point(x * font_dimensions.width, y * font_dimensions.height)