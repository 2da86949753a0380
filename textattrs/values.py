"""Value types carried by text attributes: colors, shadows and style enums."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import ClassVar, Optional

from .constants import TextAttributeConstants
from .errors import FormatError
from .geometry import Size

_HEX_COLOR = re.compile(r"^#([0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")


def _channel_to_byte(value: float) -> int:
    levels = TextAttributeConstants.COLOR_CHANNEL_LEVELS
    return max(0, min(levels - 1, int(levels * value)))


@dataclass(frozen=True)
class Color:
    """An RGBA color with float channels in ``[0, 1]``."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    BLACK: ClassVar["Color"]
    WHITE: ClassVar["Color"]
    RED: ClassVar["Color"]
    GREEN: ClassVar["Color"]
    BLUE: ClassVar["Color"]
    CLEAR: ClassVar["Color"]

    def __post_init__(self):
        for name in ("red", "green", "blue", "alpha"):
            channel = getattr(self, name)
            if not 0.0 <= channel <= 1.0:
                raise ValueError(f"Color channel {name}={channel} outside [0, 1]")

    @classmethod
    def from_rgba8(cls, red: int, green: int, blue: int, alpha: int = 255) -> "Color":
        return cls(red / 255.0, green / 255.0, blue / 255.0, alpha / 255.0)

    def rgba8(self) -> tuple[int, int, int, int]:
        """Channels quantized to 8 bits, as written by :meth:`to_hex`."""
        return (
            _channel_to_byte(self.red),
            _channel_to_byte(self.green),
            _channel_to_byte(self.blue),
            _channel_to_byte(self.alpha),
        )

    def to_hex(self) -> str:
        return "#%02X%02X%02X%02X" % self.rgba8()

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse ``#RRGGBBAA`` or ``#RRGGBB`` (opaque)."""
        if not isinstance(value, str):
            raise FormatError(f"Color must be a hex string, got {type(value).__name__}")
        m = _HEX_COLOR.match(value)
        if not m:
            raise FormatError(f"Malformed hex color: {value!r}")
        digits = m.group(1)
        if len(digits) == 6:
            digits += "FF"
        number = int(digits, 16)
        return cls.from_rgba8(
            (number >> 24) & 0xFF,
            (number >> 16) & 0xFF,
            (number >> 8) & 0xFF,
            number & 0xFF,
        )

    def is_close_to(self, other: "Color", tolerance: float = 1.0 / 255.0) -> bool:
        """Compare channel-wise within ``tolerance`` (hex round trips quantize)."""
        return all(
            abs(a - b) <= tolerance + 1e-9
            for a, b in zip(
                (self.red, self.green, self.blue, self.alpha),
                (other.red, other.green, other.blue, other.alpha),
            )
        )


Color.BLACK = Color(0.0, 0.0, 0.0)
Color.WHITE = Color(1.0, 1.0, 1.0)
Color.RED = Color(1.0, 0.0, 0.0)
Color.GREEN = Color(0.0, 1.0, 0.0)
Color.BLUE = Color(0.0, 0.0, 1.0)
Color.CLEAR = Color(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Shadow:
    blur_radius: float = 0.0
    offset: Size = Size(0.0, -3.0)
    color: Optional[Color] = None


class UnderlineStyle(IntFlag):
    """Underline/strikethrough style option set; raw values are stable."""

    NONE = 0x00
    SINGLE = 0x01
    THICK = 0x02
    DOUBLE = 0x09
    PATTERN_DOT = 0x0100
    PATTERN_DASH = 0x0200
    PATTERN_DASH_DOT = 0x0300
    PATTERN_DASH_DOT_DOT = 0x0400
    BY_WORD = 0x8000


class LineBreakMode(IntEnum):
    BY_WORD_WRAPPING = 0
    BY_CHAR_WRAPPING = 1
    BY_CLIPPING = 2
    BY_TRUNCATING_HEAD = 3
    BY_TRUNCATING_TAIL = 4
    BY_TRUNCATING_MIDDLE = 5

    @classmethod
    def from_raw(cls, raw: int) -> "LineBreakMode":
        try:
            return cls(raw)
        except ValueError:
            return cls.BY_WORD_WRAPPING


class TextAlignment(IntEnum):
    LEFT = 0
    CENTER = 1
    RIGHT = 2
    JUSTIFIED = 3
    NATURAL = 4

    @classmethod
    def from_raw(cls, raw: int) -> "TextAlignment":
        try:
            return cls(raw)
        except ValueError:
            return cls.JUSTIFIED

    @property
    def offset(self) -> float:
        """Fraction of the free space that precedes a line with this alignment."""
        if self is TextAlignment.CENTER:
            return 0.5
        if self is TextAlignment.RIGHT:
            return 1.0
        return 0.0


class WritingDirection(IntEnum):
    NATURAL = -1
    LEFT_TO_RIGHT = 0
    RIGHT_TO_LEFT = 1


@dataclass(frozen=True)
class TabStop:
    alignment: TextAlignment = TextAlignment.LEFT
    location: float = 0.0
