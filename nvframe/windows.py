"""Placement, scroll animation and draw ordering of editor windows."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterable, List, Optional, Tuple, Union

from nvframe.animation import FLOAT32_EPSILON, Point, ease, ease_out_expo, ease_point
from nvframe.config import RendererSettings
from nvframe.dimensions import Dimensions

# A t outside the 0..1 range marks an animation as finished.
_STOPPED = 2.0
_MAX_SNAPSHOTS = 5

GridSize = Union[Dimensions, Tuple[int, int]]


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its edges."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_point_and_size(cls, origin: Point, size: Tuple[float, float]) -> Rect:
        width, height = size
        return cls(origin.x, origin.y, origin.x + width, origin.y + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def contains(self, x: float, y: float) -> bool:
        """Whether the point lies inside; left and top edges are inclusive."""
        return self.left <= x < self.right and self.top <= y < self.bottom

    def center_y(self) -> float:
        return (self.top + self.bottom) / 2.0


@dataclass(frozen=True)
class WindowDrawDetails:
    """Where a window was drawn, used to route mouse input."""

    id: int
    region: Rect
    floating_order: Optional[int] = None


def _as_dimensions(size: GridSize) -> Dimensions:
    if isinstance(size, Dimensions):
        return size
    return Dimensions.from_pair(size)


class WindowAnimation:
    """The animated position and scroll state of one editor grid.

    Snapshots stand for earlier viewports still visible while a scroll
    animation runs; each is recorded as the top line it showed.
    """

    def __init__(self, id: int, grid_position: Point, grid_size: GridSize) -> None:
        self.id = id
        self.hidden = False
        self.floating_order: Optional[int] = None
        self.grid_size = _as_dimensions(grid_size)

        self.grid_start_position = grid_position
        self.grid_current_position = grid_position
        self.grid_destination = grid_position
        self.position_t = _STOPPED

        self.top_line = 0
        self.snapshots: Deque[int] = deque()
        self.start_scroll = 0.0
        self.current_scroll = 0.0
        self.scroll_destination = 0.0
        self.scroll_t = _STOPPED

    def pixel_region(self, font_dimensions: Dimensions) -> Rect:
        """The window's current area in pixels."""
        origin = Point(
            self.grid_current_position.x * font_dimensions.width,
            self.grid_current_position.y * font_dimensions.height,
        )
        return Rect.from_point_and_size(origin, (self.grid_size * font_dimensions).as_tuple())

    def update(self, settings: RendererSettings, dt: float) -> bool:
        """Advance position and scroll animations; return whether either is running."""
        animating = False

        if 1.0 - self.position_t < FLOAT32_EPSILON:
            self.position_t = _STOPPED
        else:
            animating = True
            self.position_t = min(
                self.position_t + dt / settings.position_animation_length, 1.0
            )
        self.grid_current_position = ease_point(
            ease_out_expo, self.grid_start_position, self.grid_destination, self.position_t
        )

        if 1.0 - self.scroll_t < FLOAT32_EPSILON:
            self.scroll_t = _STOPPED
            self.snapshots.clear()
        else:
            animating = True
            self.scroll_t = min(self.scroll_t + dt / settings.scroll_animation_length, 1.0)
        self.current_scroll = ease(
            ease_out_expo, self.start_scroll, self.scroll_destination, self.scroll_t
        )

        return animating

    def set_position(
        self,
        grid_left: float,
        grid_top: float,
        grid_size: GridSize,
        floating_order: Optional[int],
    ) -> bool:
        """Move and resize the window; return whether its grid size changed."""
        new_destination = Point(float(max(grid_left, 0.0)), float(max(grid_top, 0.0)))
        new_grid_size = _as_dimensions(grid_size)

        if self.grid_destination != new_destination:
            if (
                abs(self.grid_start_position.x) > FLOAT32_EPSILON
                or abs(self.grid_start_position.y) > FLOAT32_EPSILON
            ):
                self.position_t = 0.0
                self.grid_start_position = self.grid_current_position
            else:
                # Moving out of the initial location is not animated.
                self.position_t = _STOPPED
                self.grid_start_position = new_destination
            self.grid_destination = new_destination

        resized = self.grid_size != new_grid_size
        self.grid_size = new_grid_size
        self.floating_order = floating_order

        if self.hidden:
            self.hidden = False
            self.position_t = _STOPPED
            self.grid_start_position = new_destination
            self.grid_destination = new_destination

        return resized

    def show(self) -> None:
        if self.hidden:
            self.hidden = False
            self.position_t = _STOPPED
            self.grid_start_position = self.grid_destination

    def hide(self) -> None:
        self.hidden = True

    def set_viewport(self, top_line: int) -> None:
        """Scroll to a new top line, keeping a snapshot of the old viewport."""
        if self.top_line == top_line:
            return
        self.snapshots.append(self.top_line)
        if len(self.snapshots) > _MAX_SNAPSHOTS:
            self.snapshots.popleft()
        self.top_line = top_line
        self.start_scroll = self.current_scroll
        self.scroll_destination = float(top_line)
        self.scroll_t = 0.0

    def clear(self) -> None:
        self.snapshots.clear()


def draw_order(windows: Iterable[WindowAnimation]) -> List[WindowAnimation]:
    """Visible windows in drawing order: root windows by id, then floating ones.

    Floating windows are ordered by floating order, then by x and y position.
    """
    visible = [window for window in windows if not window.hidden]
    roots = sorted((w for w in visible if w.floating_order is None), key=lambda w: w.id)
    floating = sorted(
        (w for w in visible if w.floating_order is not None),
        key=lambda w: (
            w.floating_order,
            w.grid_current_position.x,
            w.grid_current_position.y,
        ),
    )
    return roots + floating