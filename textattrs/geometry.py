"""Plain geometry value types, measured in points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Size:
    width: float = 0.0
    height: float = 0.0

    ZERO: ClassVar["Size"]


Size.ZERO = Size()


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with a top-left origin."""

    origin: Point = Point()
    size: Size = Size()

    ZERO: ClassVar["Rect"]

    @classmethod
    def make(cls, x: float, y: float, width: float, height: float) -> "Rect":
        return cls(Point(x, y), Size(width, height))

    @property
    def min_x(self) -> float:
        return self.origin.x

    @property
    def min_y(self) -> float:
        return self.origin.y

    @property
    def max_x(self) -> float:
        return self.origin.x + self.size.width

    @property
    def max_y(self) -> float:
        return self.origin.y + self.size.height

    @property
    def width(self) -> float:
        return self.size.width

    @property
    def height(self) -> float:
        return self.size.height

    def contains(self, point: Point) -> bool:
        return self.min_x <= point.x < self.max_x and self.min_y <= point.y < self.max_y

    def union(self, other: "Rect") -> "Rect":
        x0 = min(self.min_x, other.min_x)
        y0 = min(self.min_y, other.min_y)
        x1 = max(self.max_x, other.max_x)
        y1 = max(self.max_y, other.max_y)
        return Rect.make(x0, y0, x1 - x0, y1 - y0)


Rect.ZERO = Rect()
