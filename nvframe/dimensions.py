"""Integer width/height pairs used for grid and pixel sizes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

_U64_MAX = 2**64 - 1
_U32_MASK = 0xFFFFFFFF


def _to_u64(value: float) -> int:
    """Saturating conversion of a number to an unsigned 64-bit integer."""
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        if math.isinf(value):
            return 0 if value < 0 else _U64_MAX
    return min(max(int(value), 0), _U64_MAX)


@dataclass(frozen=True)
class Dimensions:
    """A width and height in whole units (cells or pixels)."""

    width: int
    height: int

    @classmethod
    def from_pair(cls, pair: Tuple[float, float]) -> Dimensions:
        """Build from a (width, height) pair, truncating fractional parts."""
        width, height = pair
        return cls(_to_u64(width), _to_u64(height))

    def as_tuple(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def __mul__(self, other: Dimensions) -> Dimensions:
        if not isinstance(other, Dimensions):
            return NotImplemented
        return Dimensions(self.width * other.width, self.height * other.height)

    def __truediv__(self, other: Dimensions) -> Dimensions:
        if not isinstance(other, Dimensions):
            return NotImplemented
        return Dimensions(self.width // other.width, self.height // other.height)


def scale_position(position: Tuple[int, int], dimensions: Dimensions) -> Tuple[int, int]:
    """Scale a grid position by cell dimensions into a pixel position."""
    x, y = position
    return (x * dimensions.width, y * dimensions.height)


def physical_to_grid(physical: Tuple[int, int], font_dimensions: Dimensions) -> Dimensions:
    """Convert a pixel size into the number of whole cells it holds."""
    return Dimensions.from_pair(physical) / font_dimensions


def grid_to_physical(grid: Dimensions, font_dimensions: Dimensions) -> Tuple[int, int]:
    """Convert a grid size into a 32-bit pixel size."""
    width, height = (grid * font_dimensions).as_tuple()
    return (width & _U32_MASK, height & _U32_MASK)