"""Font descriptions used by the ``font`` attribute.

A font is identified by its face name and point size only; the metrics the
hit tester and the monospace layout need are derived from the size.
"""

from dataclasses import dataclass

from .constants import TextAttributeConstants


@dataclass(frozen=True)
class Font:
    """A font face at a point size.

    Attributes:
        name: Face name, e.g. ``"Helvetica-Bold"``
        size: Point size
    """
    name: str
    size: float

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Font name must be a non-empty string")
        if self.size <= 0:
            raise ValueError(f"Font size must be positive, got {self.size}")

    @property
    def line_height(self) -> float:
        """Ascender + descender + leading, approximated from the point size."""
        return self.size * TextAttributeConstants.LINE_HEIGHT_FACTOR

    @property
    def is_bold(self) -> bool:
        lowered = self.name.lower()
        return "bold" in lowered or "heavy" in lowered or "black" in lowered

    @property
    def is_italic(self) -> bool:
        lowered = self.name.lower()
        return "italic" in lowered or "oblique" in lowered

    def with_size(self, size: float) -> "Font":
        return Font(self.name, size)


def system_font(size: float = TextAttributeConstants.DEFAULT_FONT_SIZE) -> Font:
    return Font(TextAttributeConstants.SYSTEM_FONT_NAME, size)


def bold_system_font(size: float = TextAttributeConstants.DEFAULT_FONT_SIZE) -> Font:
    return Font(TextAttributeConstants.SYSTEM_BOLD_FONT_NAME, size)
