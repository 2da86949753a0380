"""Resolve a tap inside rendered text to a character index.

The tap point is given in the label's coordinate space. The layout engine
works in text container coordinates, so the point is first shifted by the
alignment offset between the label bounds and the area the text actually
uses. The result is clamped to the last character of the tapped line, so a
tap in the empty space right of a short line selects that line's last
character instead of running into the next line.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .attributes import AttributeKey
from .fonts import Font, system_font
from .geometry import Point, Size
from .layout import LayoutManager, TextContainer
from .model import AttributedText
from .paragraph_style import ParagraphStyle
from .values import LineBreakMode, TextAlignment


@dataclass(frozen=True)
class LabelGeometry:
    """The label measurements the hit test depends on."""
    bounds: Size
    alignment: TextAlignment = TextAlignment.NATURAL
    font_line_height: float = system_font().line_height
    line_spacing: float = 0.0

    def __post_init__(self):
        if not self.line_pitch > 0:
            raise ValueError(f"Line pitch must be positive, got {self.line_pitch}")

    @classmethod
    def for_text(cls, text: AttributedText, bounds: Size, font: Optional[Font] = None) -> "LabelGeometry":
        """Take alignment and line spacing from the paragraph style at index 0."""
        first = text.attributes_at(0) if text.length else {}
        paragraph_style = first.get(AttributeKey.PARAGRAPH_STYLE) or ParagraphStyle.DEFAULT
        font = font or first.get(AttributeKey.FONT) or system_font()
        return cls(
            bounds=bounds,
            alignment=paragraph_style.alignment,
            font_line_height=font.line_height,
            line_spacing=paragraph_style.line_spacing,
        )

    @property
    def line_pitch(self) -> float:
        return self.font_line_height + self.line_spacing

    def container(self, maximum_number_of_lines: int = 0,
                  line_break_mode: LineBreakMode = LineBreakMode.BY_WORD_WRAPPING) -> TextContainer:
        return TextContainer(
            size=self.bounds,
            line_fragment_padding=0.0,
            maximum_number_of_lines=maximum_number_of_lines,
            line_break_mode=line_break_mode,
        )


def alignment_offset(alignment: TextAlignment) -> float:
    """0.0 for left, natural and justified text, 0.5 for centered, 1.0 for right."""
    return TextAlignment(alignment).offset


def inset_location(point: Point, geometry: LabelGeometry, container: TextContainer,
                   layout: LayoutManager) -> Point:
    """Translate a label point into text container coordinates."""
    used = layout.used_rect(container)
    offset = alignment_offset(geometry.alignment)
    x_offset = (geometry.bounds.width - used.width) * offset - used.min_x
    y_offset = (geometry.bounds.height - used.height) * offset - used.min_y
    return Point(point.x - x_offset, point.y - y_offset)


def tapped_line(point: Point, geometry: LabelGeometry) -> int:
    """Zero-based line under ``point``, from the raw (unshifted) y coordinate."""
    return math.ceil(point.y / geometry.line_pitch) - 1


def last_character_index(point: Point, geometry: LabelGeometry, container: TextContainer,
                         layout: LayoutManager) -> int:
    """Index of the last character on the line under ``point``."""
    line = tapped_line(point, geometry)
    right_most = Point(geometry.bounds.width, geometry.line_pitch * line)
    return layout.glyph_index(right_most, container)


def glyph_index_at(point: Point, text: AttributedText, geometry: LabelGeometry,
                   layout: LayoutManager, container: Optional[TextContainer] = None) -> Optional[int]:
    """Character index under ``point``, or None when ``text`` is empty."""
    if text.length == 0:
        return None
    if container is None:
        container = geometry.container()
    character_index = layout.glyph_index(inset_location(point, geometry, container, layout), container)
    last_index = last_character_index(point, geometry, container, layout)
    # ignore taps past the end of the tapped line
    return min(character_index, last_index)


def link_at(point: Point, text: AttributedText, geometry: LabelGeometry,
            layout: LayoutManager, container: Optional[TextContainer] = None) -> Optional[str]:
    """The ``link`` attribute of the character under ``point``, if any."""
    index = glyph_index_at(point, text, geometry, layout, container)
    if index is None or not 0 <= index < text.length:
        return None
    return text.attribute_at(AttributeKey.LINK, index)
