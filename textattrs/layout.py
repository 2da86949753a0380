"""Layout collaborators used by the hit tester.

:class:`LayoutManager` is the interface the hit tester needs from a layout
engine. :class:`MonospaceLayoutManager` implements it for fixed-pitch text:
every UTF-16 unit is one glyph with the same advance, lines are word wrapped
to the container width, and the paragraph style at the start of the text
supplies line spacing and alignment.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import NamedTuple, Optional

from .attributes import AttributeKey
from .constants import TextAttributeConstants
from .fonts import Font, system_font
from .geometry import Point, Rect, Size
from .model import AttributedText, RangeLike, TextRange
from .paragraph_style import ParagraphStyle
from .values import LineBreakMode


@dataclass
class TextContainer:
    """The region text is laid out in. A width of 0 means unlimited."""
    size: Size = Size()
    line_fragment_padding: float = 0.0
    maximum_number_of_lines: int = 0  # 0 = no limit
    line_break_mode: LineBreakMode = LineBreakMode.BY_WORD_WRAPPING


class LineFragment(NamedTuple):
    range: TextRange
    rect: Rect


class LayoutManager(ABC):
    """What the hit tester needs from a layout engine."""

    @abstractmethod
    def glyph_index(self, point: Point, container: TextContainer) -> int:
        """Index of the glyph nearest to ``point``.

        Never fails for points outside the text: they resolve to the closest
        line and the closest glyph on it. Returns 0 for empty text.
        """

    @abstractmethod
    def used_rect(self, container: TextContainer) -> Rect:
        """Bounding box of all laid-out lines in container coordinates."""

    @abstractmethod
    def bounding_rect(self, glyph_range: RangeLike, container: TextContainer) -> Rect:
        """Bounding box of the glyphs in ``glyph_range``."""


def wrap_paragraph(paragraph: str, columns: int) -> list[int]:
    """Word wrap a paragraph into lines of at most ``columns`` characters.

    Returns the offset in ``paragraph`` at which each visual line ends. The
    space a line was broken at stays at the end of that line; words longer
    than a line are split. ``columns <= 0`` disables wrapping.
    """
    if not paragraph:
        return [0]
    if columns <= 0:
        return [len(paragraph)]

    ends: list[int] = []
    char_count = 0
    current_line: Optional[str] = None

    def place_word(word: str) -> str:
        nonlocal char_count
        # Break long word across as many lines as needed
        while len(word) > columns:
            char_count += columns
            ends.append(char_count)
            word = word[columns:]
        return word

    for word in paragraph.split(" "):
        if current_line is None:
            current_line = place_word(word)
        elif len(current_line) + 1 + len(word) <= columns:
            current_line += " " + word
        else:
            # Commit current line, keeping the space it breaks at
            char_count += len(current_line) + 1
            ends.append(char_count)
            current_line = place_word(word)

    assert current_line is not None
    char_count += len(current_line)
    ends.append(char_count)
    return ends


class MonospaceLayoutManager(LayoutManager):
    """Fixed-pitch layout of an :class:`AttributedText`.

    Args:
        text: The text to lay out
        font: Font for metrics; defaults to the font attribute at index 0,
            then the system font
        character_width: Glyph advance; defaults to a fraction of the font
            size, plus any kerning set at index 0
    """

    def __init__(self, text: AttributedText, font: Optional[Font] = None,
                 character_width: Optional[float] = None):
        self.text = text
        first = text.attributes_at(0) if text.length else {}
        self.font = font or first.get(AttributeKey.FONT) or system_font()
        paragraph_style = first.get(AttributeKey.PARAGRAPH_STYLE) or ParagraphStyle.DEFAULT
        self.line_spacing = paragraph_style.line_spacing
        self.alignment = paragraph_style.alignment
        if character_width is None:
            character_width = self.font.size * TextAttributeConstants.MONOSPACE_ADVANCE_FACTOR
            character_width += first.get(AttributeKey.KERN) or 0.0
        if character_width <= 0:
            raise ValueError(f"Character width must be positive, got {character_width}")
        self.character_width = character_width

    @property
    def line_height(self) -> float:
        return self.font.line_height

    def _columns(self, container: TextContainer) -> int:
        if container.size.width <= 0:
            return 0
        width = container.size.width - 2 * container.line_fragment_padding
        # Tolerate rounding when the width is an exact multiple of the advance
        return max(1, int(math.floor(width / self.character_width + 1e-9)))

    def line_fragments(self, container: TextContainer) -> list[LineFragment]:
        """Lay out the text and return one fragment per visual line."""
        units = self.text.units
        if not units:
            return []
        columns = self._columns(container)

        ranges: list[TextRange] = []
        paragraph_start = 0
        while paragraph_start <= len(units):
            newline = units.find("\n", paragraph_start)
            paragraph_end = newline if newline >= 0 else len(units)
            line_start = paragraph_start
            for end in wrap_paragraph(units[paragraph_start:paragraph_end], columns):
                ranges.append(TextRange(line_start, paragraph_start + end))
                line_start = paragraph_start + end
            if newline < 0:
                break
            # The newline belongs to the last line of its paragraph
            last = ranges[-1]
            ranges[-1] = TextRange(last.start, last.end + 1)
            paragraph_start = newline + 1

        # No extra line after a trailing newline
        if len(ranges) > 1 and ranges[-1].is_empty:
            ranges.pop()
        if container.maximum_number_of_lines > 0:
            ranges = ranges[:container.maximum_number_of_lines]

        pitch = self.line_height + self.line_spacing
        fragments = []
        for i, r in enumerate(ranges):
            visible = units[r.start:r.end].rstrip(" \n")
            width = len(visible) * self.character_width
            x = container.line_fragment_padding
            if container.size.width > 0:
                free = container.size.width - 2 * container.line_fragment_padding - width
                x += max(0.0, free) * self.alignment.offset
            fragments.append(LineFragment(r, Rect.make(x, i * pitch, width, self.line_height)))
        return fragments

    def glyph_index(self, point: Point, container: TextContainer) -> int:
        fragments = self.line_fragments(container)
        if not fragments:
            return 0
        pitch = self.line_height + self.line_spacing
        line = min(max(int(math.floor(point.y / pitch)), 0), len(fragments) - 1)
        fragment = fragments[line]
        if fragment.range.is_empty:
            return fragment.range.start
        column = int(math.floor((point.x - fragment.rect.min_x) / self.character_width))
        column = min(max(column, 0), fragment.range.length - 1)
        return fragment.range.start + column

    def used_rect(self, container: TextContainer) -> Rect:
        fragments = self.line_fragments(container)
        if not fragments:
            return Rect.ZERO
        used = fragments[0].rect
        for fragment in fragments[1:]:
            used = used.union(fragment.rect)
        return used

    def bounding_rect(self, glyph_range: RangeLike, container: TextContainer) -> Rect:
        glyphs = TextRange(*glyph_range)
        bounds: Optional[Rect] = None
        for fragment in self.line_fragments(container):
            if not fragment.range.intersects(glyphs):
                continue
            first = max(glyphs.start, fragment.range.start)
            last = min(glyphs.end, fragment.range.end)
            x = fragment.rect.min_x + (first - fragment.range.start) * self.character_width
            rect = Rect.make(x, fragment.rect.min_y, (last - first) * self.character_width,
                             fragment.rect.height)
            bounds = rect if bounds is None else bounds.union(rect)
        return bounds or Rect.ZERO
