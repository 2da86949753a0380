"""Test adding and removing attributes over ranges."""

import unittest

import pytest

from textattrs.attributes import AttributeKey, Style, TextAttribute
from textattrs.engine import (
    add_attribute,
    add_attributes,
    adding_attribute,
    adding_attributes,
    enumerate_attribute,
    remove_attribute,
    remove_attributes,
    removing_attribute,
    removing_attributes,
)
from textattrs.errors import RangeError
from textattrs.fonts import Font
from textattrs.model import AttributedText, TextRange
from textattrs.paragraph_style import ParagraphStyle
from textattrs.values import Color, LineBreakMode, Shadow, TextAlignment, UnderlineStyle

ALL_DIRECT = [
    TextAttribute.font(Font("Courier", 12)),
    TextAttribute.kern(1.5),
    TextAttribute.foreground_color(Color.RED),
    TextAttribute.background_color(Color.WHITE),
    TextAttribute.shadow(Shadow(blur_radius=2.0, color=Color.BLACK)),
    TextAttribute.underline_style(UnderlineStyle.SINGLE),
    TextAttribute.underline_color(Color.BLUE),
    TextAttribute.strikethrough_style(UnderlineStyle.THICK),
    TextAttribute.strikethrough_color(Color.GREEN),
    TextAttribute.link("https://example.com"),
]


@pytest.mark.parametrize("attr", ALL_DIRECT, ids=lambda a: a.style.value)
@pytest.mark.parametrize("r", [(0, 11), (2, 7), (10, 11)])
def test_added_attribute_enumerates_as_one_run(attr, r):
    text = AttributedText("hello world")
    add_attributes(text, [attr], r)
    assert list(enumerate_attribute(text, attr.style)) == [(attr.raw_value(), TextRange(*r))]


@pytest.mark.parametrize("attr", ALL_DIRECT, ids=lambda a: a.style.value)
def test_adding_twice_is_idempotent(attr):
    once = add_attributes(AttributedText("hello world"), [attr], (3, 8))
    twice = add_attributes(add_attributes(AttributedText("hello world"), [attr], (3, 8)), [attr], (3, 8))
    assert once == twice


def test_default_range_is_whole_text():
    text = add_attribute(AttributedText("hello"), TextAttribute.kern(2.0))
    assert list(enumerate_attribute(text, Style.KERN)) == [(2.0, TextRange(0, 5))]


def test_last_one_wins_within_a_call():
    text = add_attributes(AttributedText("hello"), [
        TextAttribute.foreground_color(Color.RED),
        TextAttribute.foreground_color(Color.BLUE),
    ])
    assert text.attribute_at(AttributeKey.FOREGROUND_COLOR, 0) == Color.BLUE


def test_range_past_end_raises_without_mutating():
    text = AttributedText("hello")
    before = text.copy()
    with pytest.raises(RangeError):
        add_attributes(text, [TextAttribute.kern(1.0)], (3, 6))
    assert text == before


def test_range_wholly_past_end_raises():
    with pytest.raises(RangeError):
        add_attributes(AttributedText("hello"), [TextAttribute.kern(1.0)], (8, 9))


def test_empty_range_at_end_is_a_no_op():
    text = AttributedText("hello")
    add_attributes(text, [TextAttribute.kern(1.0), TextAttribute.line_spacing(2.0)], (5, 5))
    assert text == AttributedText("hello")


def test_empty_text():
    text = add_attributes(AttributedText(""), [TextAttribute.kern(1.0)])
    assert text.length == 0
    assert list(enumerate_attribute(text, Style.KERN)) == []


def test_adding_returns_a_copy():
    original = AttributedText("hello")
    result = adding_attributes(original, [TextAttribute.kern(1.0)], (0, 2))
    assert original.attribute_at(AttributeKey.KERN, 0) is None
    assert result.attribute_at(AttributeKey.KERN, 0) == 1.0
    assert adding_attribute(original, TextAttribute.kern(1.0), (0, 2)) == result


class TestParagraphStyleComposition(unittest.TestCase):
    """Paragraph-level attributes are merged into one paragraph style."""

    def paragraph_style(self, text, index=0):
        return text.attribute_at(AttributeKey.PARAGRAPH_STYLE, index)

    def test_variants_in_one_call_are_merged(self):
        text = add_attributes(AttributedText("hello"), [
            TextAttribute.line_spacing(6.0),
            TextAttribute.text_alignment(TextAlignment.CENTER),
            TextAttribute.line_break_mode(LineBreakMode.BY_CLIPPING),
        ])
        style = self.paragraph_style(text)
        self.assertEqual(style.line_spacing, 6.0)
        self.assertEqual(style.alignment, TextAlignment.CENTER)
        self.assertEqual(style.line_break_mode, LineBreakMode.BY_CLIPPING)

    def test_successive_calls_converge(self):
        text = AttributedText("hello")
        add_attribute(text, TextAttribute.line_spacing(6.0))
        add_attribute(text, TextAttribute.text_alignment(TextAlignment.RIGHT))
        style = self.paragraph_style(text)
        self.assertEqual(style.line_spacing, 6.0)
        self.assertEqual(style.alignment, TextAlignment.RIGHT)

    def test_later_value_replaces_earlier(self):
        text = AttributedText("hello")
        add_attribute(text, TextAttribute.line_spacing(6.0))
        add_attribute(text, TextAttribute.line_spacing(3.0))
        self.assertEqual(self.paragraph_style(text).line_spacing, 3.0)

    def test_existing_style_is_read_at_range_start(self):
        text = AttributedText("hello world")
        add_attribute(text, TextAttribute.line_spacing(6.0), (0, 5))
        add_attribute(text, TextAttribute.text_alignment(TextAlignment.CENTER), (2, 11))
        expected = ParagraphStyle.DEFAULT.replace(line_spacing=6.0, alignment=TextAlignment.CENTER)
        self.assertEqual(self.paragraph_style(text, 2), expected)
        self.assertEqual(self.paragraph_style(text, 10), expected)
        self.assertEqual(self.paragraph_style(text, 0).alignment, TextAlignment.NATURAL)

    def test_other_keys_untouched(self):
        text = AttributedText("hello", {AttributeKey.KERN: 1.0})
        add_attribute(text, TextAttribute.line_spacing(6.0))
        self.assertEqual(text.attribute_at(AttributeKey.KERN, 3), 1.0)


class TestRemoveAttributes(unittest.TestCase):
    """Test removing attributes."""

    def setUp(self):
        self.text = AttributedText("abcdef")
        add_attributes(self.text, [
            TextAttribute.foreground_color(Color.RED),
            TextAttribute.kern(2.0),
        ])

    def test_remove_clears_only_inside_range(self):
        remove_attribute(self.text, Style.FOREGROUND_COLOR, (2, 4))
        self.assertEqual(list(enumerate_attribute(self.text, Style.FOREGROUND_COLOR)), [
            (Color.RED, TextRange(0, 2)),
            (Color.RED, TextRange(4, 6)),
        ])
        self.assertEqual(self.text.attribute_at(AttributeKey.KERN, 3), 2.0)

    def test_remove_several(self):
        remove_attributes(self.text, [Style.FOREGROUND_COLOR, Style.KERN])
        self.assertEqual(self.text, AttributedText("abcdef"))

    def test_remove_by_tag_string(self):
        remove_attributes(self.text, ["foregroundColor"])
        self.assertIsNone(self.text.attribute_at(AttributeKey.FOREGROUND_COLOR, 0))

    def test_remove_absent_attribute_is_harmless(self):
        before = self.text.copy()
        remove_attribute(self.text, Style.LINK)
        self.assertEqual(self.text, before)

    def test_remove_paragraph_variant_clears_paragraph_style(self):
        add_attributes(self.text, [
            TextAttribute.line_spacing(6.0),
            TextAttribute.text_alignment(TextAlignment.CENTER),
        ])
        remove_attribute(self.text, Style.LINE_SPACING)
        self.assertIsNone(self.text.attribute_at(AttributeKey.PARAGRAPH_STYLE, 0))

    def test_remove_bad_range_raises_without_mutating(self):
        before = self.text.copy()
        with self.assertRaises(RangeError):
            remove_attribute(self.text, Style.KERN, (0, 7))
        self.assertEqual(self.text, before)

    def test_unknown_style_raises(self):
        with self.assertRaises(ValueError):
            remove_attribute(self.text, "bold")

    def test_removing_returns_a_copy(self):
        result = removing_attributes(self.text, [Style.KERN])
        self.assertIsNone(result.attribute_at(AttributeKey.KERN, 0))
        self.assertEqual(self.text.attribute_at(AttributeKey.KERN, 0), 2.0)
        self.assertEqual(removing_attribute(self.text, Style.KERN), result)


if __name__ == '__main__':
    unittest.main()
