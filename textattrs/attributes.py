"""The typed text attribute model.

A :class:`TextAttribute` is one of a closed set of styles (:class:`Style`),
each paired with a value of a known type. Every style maps to exactly one
:class:`AttributeKey` under which the text buffer stores it. The line break
mode, line spacing and alignment styles share ``AttributeKey.PARAGRAPH_STYLE``
and are stored as a :class:`~textattrs.paragraph_style.ParagraphStyle`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .fonts import Font
from .paragraph_style import ParagraphStyle
from .values import Color, LineBreakMode, Shadow, TextAlignment, UnderlineStyle


class AttributeKey(str, Enum):
    """Keys of the attribute dictionaries stored in a text buffer."""

    FONT = "font"
    KERN = "kern"
    FOREGROUND_COLOR = "foregroundColor"
    BACKGROUND_COLOR = "backgroundColor"
    SHADOW = "shadow"
    UNDERLINE_STYLE = "underlineStyle"
    UNDERLINE_COLOR = "underlineColor"
    STRIKETHROUGH_STYLE = "strikethroughStyle"
    STRIKETHROUGH_COLOR = "strikethroughColor"
    PARAGRAPH_STYLE = "paragraphStyle"
    LINK = "link"


class Style(str, Enum):
    """Attribute styles; the values are the serialization tags."""

    FONT = "font"
    KERN = "kern"
    FOREGROUND_COLOR = "foregroundColor"
    BACKGROUND_COLOR = "backgroundColor"
    SHADOW = "shadow"
    UNDERLINE_STYLE = "underlineStyle"
    UNDERLINE_COLOR = "underlineColor"
    STRIKETHROUGH_STYLE = "strikethroughStyle"
    STRIKETHROUGH_COLOR = "strikethroughColor"
    LINE_BREAK_MODE = "lineBreakMode"
    LINE_SPACING = "lineSpacing"
    TEXT_ALIGNMENT = "textAlignment"
    LINK = "link"

    @property
    def key(self) -> AttributeKey:
        return STYLE_KEYS[self]

    @property
    def is_paragraph_style(self) -> bool:
        return self.key is AttributeKey.PARAGRAPH_STYLE


STYLE_KEYS: dict[Style, AttributeKey] = {
    Style.FONT: AttributeKey.FONT,
    Style.KERN: AttributeKey.KERN,
    Style.FOREGROUND_COLOR: AttributeKey.FOREGROUND_COLOR,
    Style.BACKGROUND_COLOR: AttributeKey.BACKGROUND_COLOR,
    Style.SHADOW: AttributeKey.SHADOW,
    Style.UNDERLINE_STYLE: AttributeKey.UNDERLINE_STYLE,
    Style.UNDERLINE_COLOR: AttributeKey.UNDERLINE_COLOR,
    Style.STRIKETHROUGH_STYLE: AttributeKey.STRIKETHROUGH_STYLE,
    Style.STRIKETHROUGH_COLOR: AttributeKey.STRIKETHROUGH_COLOR,
    Style.LINE_BREAK_MODE: AttributeKey.PARAGRAPH_STYLE,
    Style.LINE_SPACING: AttributeKey.PARAGRAPH_STYLE,
    Style.TEXT_ALIGNMENT: AttributeKey.PARAGRAPH_STYLE,
    Style.LINK: AttributeKey.LINK,
}

# Paragraph style field written by each paragraph-level style
PARAGRAPH_FIELDS: dict[Style, str] = {
    Style.LINE_BREAK_MODE: "line_break_mode",
    Style.LINE_SPACING: "line_spacing",
    Style.TEXT_ALIGNMENT: "alignment",
}

_COLOR_STYLES = frozenset({
    Style.FOREGROUND_COLOR,
    Style.BACKGROUND_COLOR,
    Style.UNDERLINE_COLOR,
    Style.STRIKETHROUGH_COLOR,
})


def _require_number(style: Style, value: Any) -> float:
    # bool is an int subclass but never a meaningful measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{style.value} expects a number, got {type(value).__name__}")
    return float(value)


def _normalize_value(style: Style, value: Any) -> Any:
    if style is Style.FONT:
        if not isinstance(value, Font):
            raise TypeError(f"font expects a Font, got {type(value).__name__}")
        return value
    if style in (Style.KERN, Style.LINE_SPACING):
        return _require_number(style, value)
    if style in _COLOR_STYLES:
        if not isinstance(value, Color):
            raise TypeError(f"{style.value} expects a Color, got {type(value).__name__}")
        return value
    if style is Style.SHADOW:
        if not isinstance(value, Shadow):
            raise TypeError(f"shadow expects a Shadow, got {type(value).__name__}")
        return value
    if style in (Style.UNDERLINE_STYLE, Style.STRIKETHROUGH_STYLE):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{style.value} expects an UnderlineStyle, got {type(value).__name__}")
        return UnderlineStyle(value)
    if style is Style.LINE_BREAK_MODE:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"lineBreakMode expects a LineBreakMode, got {type(value).__name__}")
        return LineBreakMode(value)
    if style is Style.TEXT_ALIGNMENT:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"textAlignment expects a TextAlignment, got {type(value).__name__}")
        return TextAlignment(value)
    if style is Style.LINK:
        if not isinstance(value, str) or not value:
            raise TypeError("link expects a non-empty URL string")
        return value
    raise TypeError(f"Unhandled style {style!r}")


@dataclass(frozen=True)
class TextAttribute:
    """A style paired with its value, e.g. ``TextAttribute.kern(2.0)``."""

    style: Style
    value: Any

    def __post_init__(self):
        style = Style(self.style)
        object.__setattr__(self, "style", style)
        object.__setattr__(self, "value", _normalize_value(style, self.value))

    @property
    def key(self) -> AttributeKey:
        return self.style.key

    def raw_value(self) -> Any:
        """The value as stored in a text buffer under :attr:`key`."""
        if self.style in (Style.UNDERLINE_STYLE, Style.STRIKETHROUGH_STYLE):
            return int(self.value)
        field_name = PARAGRAPH_FIELDS.get(self.style)
        if field_name is not None:
            return ParagraphStyle.DEFAULT.replace(**{field_name: self.value})
        return self.value

    def raw_entry(self) -> tuple[AttributeKey, Any]:
        return self.key, self.raw_value()

    # Constructors, one per style

    @classmethod
    def font(cls, font: Font) -> "TextAttribute":
        return cls(Style.FONT, font)

    @classmethod
    def kern(cls, kerning: float) -> "TextAttribute":
        return cls(Style.KERN, kerning)

    @classmethod
    def foreground_color(cls, color: Color) -> "TextAttribute":
        return cls(Style.FOREGROUND_COLOR, color)

    @classmethod
    def background_color(cls, color: Color) -> "TextAttribute":
        return cls(Style.BACKGROUND_COLOR, color)

    @classmethod
    def shadow(cls, shadow: Shadow) -> "TextAttribute":
        return cls(Style.SHADOW, shadow)

    @classmethod
    def underline_style(cls, style: UnderlineStyle) -> "TextAttribute":
        return cls(Style.UNDERLINE_STYLE, style)

    @classmethod
    def underline_color(cls, color: Color) -> "TextAttribute":
        return cls(Style.UNDERLINE_COLOR, color)

    @classmethod
    def strikethrough_style(cls, style: UnderlineStyle) -> "TextAttribute":
        return cls(Style.STRIKETHROUGH_STYLE, style)

    @classmethod
    def strikethrough_color(cls, color: Color) -> "TextAttribute":
        return cls(Style.STRIKETHROUGH_COLOR, color)

    @classmethod
    def line_break_mode(cls, mode: LineBreakMode) -> "TextAttribute":
        return cls(Style.LINE_BREAK_MODE, mode)

    @classmethod
    def line_spacing(cls, spacing: float) -> "TextAttribute":
        return cls(Style.LINE_SPACING, spacing)

    @classmethod
    def text_alignment(cls, alignment: TextAlignment) -> "TextAttribute":
        return cls(Style.TEXT_ALIGNMENT, alignment)

    @classmethod
    def link(cls, url: str) -> "TextAttribute":
        return cls(Style.LINK, url)


def attributes_from_raw(key: AttributeKey, value: Any) -> list[TextAttribute]:
    """Rebuild the attributes that a stored ``(key, value)`` pair represents.

    A paragraph style expands to the line break mode, line spacing and
    alignment attributes whose fields differ from the default; its other
    fields have no attribute form and are dropped.
    """
    key = AttributeKey(key)
    if key is AttributeKey.PARAGRAPH_STYLE:
        attrs = []
        for style, field_name in PARAGRAPH_FIELDS.items():
            field_value = getattr(value, field_name)
            if field_value != getattr(ParagraphStyle.DEFAULT, field_name):
                attrs.append(TextAttribute(style, field_value))
        return attrs
    return [TextAttribute(Style(key.value), value)]
