"""Font selection keys and parsing of the ``guifont`` option."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List

from nvframe.animation import FLOAT32_EPSILON

DEFAULT_FONT_SIZE = 14.0

_PIXELS_PER_INCH = 96.0
_POINTS_PER_INCH = 72.0

_FLOAT = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE | re.ASCII,
)


def points_to_pixels(value: float) -> float:
    """Convert a font size in points to pixels.

    On macOS points and pixels coincide; elsewhere the standard 96 pixels
    per 72 points is used.
    """
    if sys.platform == "darwin":
        return value
    return value * (_PIXELS_PER_INCH / _POINTS_PER_INCH)


class SelectionKind(Enum):
    NAME = "name"
    CHARACTER = "character"
    DEFAULT = "default"
    LAST_RESORT = "last_resort"


@dataclass(frozen=True)
class FontSelection:
    """Which font to load: a family name, a font covering a character, or a bundled font."""

    kind: SelectionKind
    value: str = ""

    DEFAULT: ClassVar[FontSelection]
    LAST_RESORT: ClassVar[FontSelection]

    @classmethod
    def named(cls, name: str) -> FontSelection:
        return cls(SelectionKind.NAME, name)

    @classmethod
    def for_character(cls, character: str) -> FontSelection:
        if len(character) != 1:
            raise ValueError(f"expected a single character, got {character!r}")
        return cls(SelectionKind.CHARACTER, character)


FontSelection.DEFAULT = FontSelection(SelectionKind.DEFAULT)
FontSelection.LAST_RESORT = FontSelection(SelectionKind.LAST_RESORT)


@dataclass(eq=False)
class FontOptions:
    """Font family fallbacks, size in pixels and style flags."""

    font_list: List[str] = field(default_factory=list)
    size: float = field(default_factory=lambda: points_to_pixels(DEFAULT_FONT_SIZE))
    bold: bool = False
    italic: bool = False

    @classmethod
    def parse(cls, guifont_setting: str) -> FontOptions:
        """Parse a setting like ``Family One,Family Two:h12:b:i``."""
        parts = [part for part in guifont_setting.split(":") if part]
        font_list: List[str] = []
        size = DEFAULT_FONT_SIZE
        bold = False
        italic = False

        if parts:
            fallbacks = [name for name in parts[0].split(",") if name]
            if fallbacks:
                font_list = fallbacks

        for part in parts[1:]:
            if part.startswith("h") and len(part) > 1:
                if _FLOAT.fullmatch(part[1:]):
                    size = float(part[1:])
            elif part == "b":
                bold = True
            elif part == "i":
                italic = True

        return cls(
            font_list=font_list,
            size=points_to_pixels(size),
            bold=bold,
            italic=italic,
        )

    def primary_font(self) -> FontSelection:
        """The first listed family, or the bundled default font."""
        if self.font_list:
            return FontSelection.named(self.font_list[0])
        return FontSelection.DEFAULT

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FontOptions):
            return NotImplemented
        return (
            self.font_list == other.font_list
            and abs(self.size - other.size) < FLOAT32_EPSILON
            and self.bold == other.bold
            and self.italic == other.italic
        )

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class FontKey:
    """Identifies a loaded font by style and selection."""

    bold: bool = False
    italic: bool = False
    font_selection: FontSelection = FontSelection.DEFAULT

    @classmethod
    def from_options(cls, options: FontOptions) -> FontKey:
        return cls(
            bold=options.bold,
            italic=options.italic,
            font_selection=options.primary_font(),
        )