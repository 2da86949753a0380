"""Test paragraph style composition."""

import unittest

from textattrs.paragraph_style import ParagraphStyle, compose
from textattrs.values import LineBreakMode, TabStop, TextAlignment


class TestParagraphStyle(unittest.TestCase):
    """Test the paragraph style record."""

    def test_default_tab_stops(self):
        stops = ParagraphStyle.DEFAULT.tab_stops
        self.assertEqual(len(stops), 12)
        self.assertEqual(stops[0], TabStop(TextAlignment.LEFT, 28.0))
        self.assertEqual(stops[-1].location, 28.0 * 12)

    def test_default_is_default(self):
        self.assertTrue(ParagraphStyle().is_default())
        self.assertEqual(ParagraphStyle(), ParagraphStyle.DEFAULT)

    def test_changed_fields(self):
        style = ParagraphStyle.DEFAULT.replace(line_spacing=4.0, head_indent=2.0)
        self.assertEqual(style.changed_fields(), {"line_spacing": 4.0, "head_indent": 2.0})

    def test_replace_converts_tab_stops(self):
        style = ParagraphStyle.DEFAULT.replace(tab_stops=[TabStop(TextAlignment.RIGHT, 10.0)])
        self.assertEqual(style.tab_stops, (TabStop(TextAlignment.RIGHT, 10.0),))
        hash(style)


class TestCompose(unittest.TestCase):
    """Test field-by-field composition."""

    def setUp(self):
        self.base = ParagraphStyle.DEFAULT.replace(
            alignment=TextAlignment.CENTER,
            line_spacing=6.0,
            paragraph_spacing=12.0,
        )

    def test_default_overlay_leaves_base_unchanged(self):
        self.assertEqual(compose(self.base, ParagraphStyle.DEFAULT), self.base)

    def test_overlay_onto_default_is_overlay(self):
        self.assertEqual(compose(ParagraphStyle.DEFAULT, self.base), self.base)

    def test_non_default_overlay_fields_win(self):
        overlay = ParagraphStyle.DEFAULT.replace(
            alignment=TextAlignment.RIGHT,
            line_break_mode=LineBreakMode.BY_CLIPPING,
        )
        result = compose(self.base, overlay)
        self.assertEqual(result.alignment, TextAlignment.RIGHT)
        self.assertEqual(result.line_break_mode, LineBreakMode.BY_CLIPPING)
        self.assertEqual(result.line_spacing, 6.0)
        self.assertEqual(result.paragraph_spacing, 12.0)

    def test_overlay_cannot_reset_a_field_to_default(self):
        overlay = ParagraphStyle.DEFAULT.replace(line_spacing=0.0)
        self.assertEqual(compose(self.base, overlay).line_spacing, 6.0)

    def test_right_most_explicit_value_wins(self):
        a = ParagraphStyle.DEFAULT.replace(line_spacing=2.0)
        b = ParagraphStyle.DEFAULT.replace(line_spacing=4.0, alignment=TextAlignment.LEFT)
        c = ParagraphStyle.DEFAULT.replace(line_spacing=8.0)
        result = a + b + c
        self.assertEqual(result.line_spacing, 8.0)
        self.assertEqual(result.alignment, TextAlignment.LEFT)

    def test_line_height_multiple_is_composed(self):
        overlay = ParagraphStyle.DEFAULT.replace(line_height_multiple=1.5)
        self.assertEqual(compose(self.base, overlay).line_height_multiple, 1.5)

    def test_composition_is_repeatable(self):
        overlay = ParagraphStyle.DEFAULT.replace(head_indent=5.0)
        once = compose(self.base, overlay)
        self.assertEqual(compose(once, overlay), once)


if __name__ == '__main__':
    unittest.main()
