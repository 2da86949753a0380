"""Paragraph style records and their composition.

A paragraph style is stored under a single attribute key, so the line break
mode, line spacing and alignment attributes cannot simply overwrite each
other. They are merged field by field with :func:`compose`.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, ClassVar

from .constants import TextAttributeConstants
from .values import LineBreakMode, TabStop, TextAlignment, WritingDirection


def _default_tab_stops() -> tuple[TabStop, ...]:
    interval = TextAttributeConstants.DEFAULT_TAB_STOP_INTERVAL
    return tuple(
        TabStop(TextAlignment.LEFT, interval * i)
        for i in range(1, TextAttributeConstants.DEFAULT_TAB_STOP_COUNT + 1)
    )


@dataclass(frozen=True)
class ParagraphStyle:
    """Immutable paragraph-level layout settings.

    Every field has a default; :attr:`DEFAULT` is the record with all of them.
    """
    alignment: TextAlignment = TextAlignment.NATURAL
    line_break_mode: LineBreakMode = LineBreakMode.BY_WORD_WRAPPING
    line_spacing: float = 0.0
    head_indent: float = 0.0
    tail_indent: float = 0.0
    first_line_head_indent: float = 0.0
    minimum_line_height: float = 0.0
    maximum_line_height: float = 0.0
    line_height_multiple: float = 0.0
    paragraph_spacing: float = 0.0
    paragraph_spacing_before: float = 0.0
    hyphenation_factor: float = 0.0
    default_tab_interval: float = 0.0
    tab_stops: tuple[TabStop, ...] = field(default_factory=_default_tab_stops)
    base_writing_direction: WritingDirection = WritingDirection.NATURAL
    allows_default_tightening_for_truncation: bool = False

    DEFAULT: ClassVar["ParagraphStyle"]

    def replace(self, **changes: Any) -> "ParagraphStyle":
        if "tab_stops" in changes:
            changes["tab_stops"] = tuple(changes["tab_stops"])
        return dataclasses.replace(self, **changes)

    def changed_fields(self) -> dict[str, Any]:
        """Fields whose value differs from the default record."""
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)
            if getattr(self, f.name) != getattr(ParagraphStyle.DEFAULT, f.name)
        }

    def is_default(self) -> bool:
        return not self.changed_fields()

    def __add__(self, other: "ParagraphStyle") -> "ParagraphStyle":
        if not isinstance(other, ParagraphStyle):
            return NotImplemented
        return compose(self, other)


ParagraphStyle.DEFAULT = ParagraphStyle()


def compose(base: ParagraphStyle, overlay: ParagraphStyle) -> ParagraphStyle:
    """Merge ``overlay`` onto ``base``, field by field.

    A field of ``overlay`` wins only when it differs from the default value.
    An overlay that deliberately sets a field back to its default therefore
    leaves ``base`` unchanged for that field: the record carries no per-field
    "is set" marker.
    """
    return dataclasses.replace(base, **overlay.changed_fields())
