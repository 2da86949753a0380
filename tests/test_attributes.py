"""Test the typed attribute model."""

import pytest

from textattrs.attributes import AttributeKey, Style, TextAttribute, attributes_from_raw
from textattrs.fonts import Font
from textattrs.paragraph_style import ParagraphStyle
from textattrs.values import Color, LineBreakMode, Shadow, TextAlignment, UnderlineStyle


def test_every_style_has_a_key():
    for style in Style:
        assert isinstance(style.key, AttributeKey)


def test_paragraph_styles_share_one_key():
    paragraph = [s for s in Style if s.is_paragraph_style]
    assert paragraph == [Style.LINE_BREAK_MODE, Style.LINE_SPACING, Style.TEXT_ALIGNMENT]
    assert {s.key for s in paragraph} == {AttributeKey.PARAGRAPH_STYLE}


def test_direct_styles_use_their_own_tag_as_key():
    assert Style.FOREGROUND_COLOR.key is AttributeKey.FOREGROUND_COLOR
    assert Style.LINK.key.value == "link"


def test_numbers_are_stored_as_float():
    attr = TextAttribute.kern(2)
    assert attr.value == 2.0
    assert isinstance(attr.value, float)


def test_ints_become_enums():
    assert TextAttribute(Style.TEXT_ALIGNMENT, 1).value is TextAlignment.CENTER
    assert TextAttribute(Style.LINE_BREAK_MODE, 4).value is LineBreakMode.BY_TRUNCATING_TAIL
    assert TextAttribute(Style.UNDERLINE_STYLE, 0x101).value == UnderlineStyle.SINGLE | UnderlineStyle.PATTERN_DOT


def test_style_accepts_tag_string():
    attr = TextAttribute("kern", 1.5)
    assert attr.style is Style.KERN


@pytest.mark.parametrize("factory, value", [
    (TextAttribute.kern, "2"),
    (TextAttribute.kern, True),
    (TextAttribute.line_spacing, None),
    (TextAttribute.font, "Helvetica"),
    (TextAttribute.foreground_color, "#FF0000FF"),
    (TextAttribute.shadow, 3.0),
    (TextAttribute.underline_style, 1.0),
    (TextAttribute.link, ""),
])
def test_wrong_value_type_raises(factory, value):
    with pytest.raises(TypeError):
        factory(value)


def test_raw_value_of_direct_styles():
    font = Font("Courier", 12)
    assert TextAttribute.font(font).raw_entry() == (AttributeKey.FONT, font)
    assert TextAttribute.foreground_color(Color.RED).raw_value() == Color.RED
    assert TextAttribute.link("https://example.com").raw_value() == "https://example.com"


def test_raw_value_of_underline_is_int():
    raw = TextAttribute.underline_style(UnderlineStyle.SINGLE).raw_value()
    assert raw == 1
    assert type(raw) is int


def test_raw_value_of_paragraph_style_variant():
    key, raw = TextAttribute.text_alignment(TextAlignment.CENTER).raw_entry()
    assert key is AttributeKey.PARAGRAPH_STYLE
    assert raw == ParagraphStyle.DEFAULT.replace(alignment=TextAlignment.CENTER)
    assert raw.changed_fields() == {"alignment": TextAlignment.CENTER}


def test_attributes_from_raw_direct():
    shadow = Shadow(blur_radius=2.0)
    assert attributes_from_raw(AttributeKey.SHADOW, shadow) == [TextAttribute.shadow(shadow)]


def test_attributes_from_raw_expands_paragraph_style():
    style = ParagraphStyle.DEFAULT.replace(
        alignment=TextAlignment.RIGHT, line_spacing=6.0, head_indent=10.0
    )
    assert attributes_from_raw(AttributeKey.PARAGRAPH_STYLE, style) == [
        TextAttribute.line_spacing(6.0),
        TextAttribute.text_alignment(TextAlignment.RIGHT),
    ]


def test_attributes_from_raw_default_paragraph_style_is_empty():
    assert attributes_from_raw(AttributeKey.PARAGRAPH_STYLE, ParagraphStyle.DEFAULT) == []


def test_attributes_are_hashable_values():
    a = TextAttribute.kern(1.0)
    b = TextAttribute.kern(1)
    assert a == b
    assert len({a, b}) == 1
