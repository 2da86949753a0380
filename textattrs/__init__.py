"""textattrs - Styled spans over text: attributes, paragraph styles, hit testing."""

from .attributes import AttributeKey, Style, TextAttribute, attributes_from_raw
from .codec import decode_attribute, dumps, encode_attribute, load_text, loads, dump_text
from .engine import (
    add_attribute,
    add_attributes,
    add_attributes_to_occurrences,
    adding_attributes,
    enumerate_attribute,
    enumerate_occurrences,
    remove_attribute,
    remove_attributes,
    remove_attributes_from_occurrences,
    removing_attributes,
)
from .errors import FormatError, LinkConstructionError, RangeError, TextAttributesError
from .fonts import Font
from .hit_testing import LabelGeometry, glyph_index_at, link_at
from .links import linkify
from .model import AttributedText, TextRange
from .paragraph_style import ParagraphStyle, compose
from .search import CompareOptions
from .values import Color, LineBreakMode, Shadow, TextAlignment, UnderlineStyle

__all__ = [
    'AttributeKey',
    'AttributedText',
    'Color',
    'CompareOptions',
    'Font',
    'FormatError',
    'LabelGeometry',
    'LineBreakMode',
    'LinkConstructionError',
    'ParagraphStyle',
    'RangeError',
    'Shadow',
    'Style',
    'TextAlignment',
    'TextAttribute',
    'TextAttributesError',
    'TextRange',
    'UnderlineStyle',
    'add_attribute',
    'add_attributes',
    'add_attributes_to_occurrences',
    'adding_attributes',
    'attributes_from_raw',
    'compose',
    'decode_attribute',
    'dump_text',
    'dumps',
    'encode_attribute',
    'enumerate_attribute',
    'enumerate_occurrences',
    'glyph_index_at',
    'link_at',
    'linkify',
    'load_text',
    'loads',
    'remove_attribute',
    'remove_attributes',
    'remove_attributes_from_occurrences',
    'removing_attributes',
]
