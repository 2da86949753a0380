"""Add, remove and enumerate typed attributes over an attributed text.

The functions here hold no state: each call borrows the caller's
:class:`~textattrs.model.AttributedText`, validates the requested range
before touching it, and derives runs from the buffer's current content.
Mutating functions return the buffer so calls can be chained; the
``adding_*``/``removing_*`` variants work on a copy instead.
"""

import logging
from typing import Any, Callable, Iterable, Iterator, Optional, Union

from .attributes import AttributeKey, Style, TextAttribute
from .model import AttributedText, RangeLike, TextRange
from .paragraph_style import ParagraphStyle, compose
from .search import CompareOptions, find_occurrences

logger = logging.getLogger(__name__)

StyleOrKey = Union[Style, AttributeKey, str]
OccurrenceCallback = Callable[[AttributedText, TextRange], Optional[AttributedText]]


def attribute_key(style_or_key: StyleOrKey) -> AttributeKey:
    """Resolve a style, key or tag string to the key it is stored under."""
    if isinstance(style_or_key, Style):
        return style_or_key.key
    if isinstance(style_or_key, AttributeKey):
        return style_or_key
    try:
        return Style(style_or_key).key
    except ValueError:
        return AttributeKey(style_or_key)


def _partition(attrs: Iterable[TextAttribute]) -> tuple[dict[AttributeKey, Any], Optional[ParagraphStyle]]:
    """Split attributes into direct key/value writes and one paragraph style overlay."""
    updates: dict[AttributeKey, Any] = {}
    overlay: Optional[ParagraphStyle] = None
    for attr in attrs:
        if attr.style.is_paragraph_style:
            overlay = compose(overlay or ParagraphStyle.DEFAULT, attr.raw_value())
        else:
            # Last one wins for repeated keys
            updates[attr.key] = attr.raw_value()
    return updates, overlay


# --- Range operations ---

def add_attributes(text: AttributedText, attrs: Iterable[TextAttribute],
                   range: Optional[RangeLike] = None) -> AttributedText:
    """Apply ``attrs`` to ``range`` (the whole text when None).

    Line break mode, line spacing and alignment are composed into the
    paragraph style found at the start of the range and written once.

    Raises:
        RangeError: ``range`` is not within ``[0, len(text)]``.
    """
    r = text.check_range(range)
    updates, overlay = _partition(attrs)
    if r.is_empty:
        return text
    if overlay is not None:
        existing = text.attribute_at(AttributeKey.PARAGRAPH_STYLE, r.start) or ParagraphStyle.DEFAULT
        updates[AttributeKey.PARAGRAPH_STYLE] = compose(existing, overlay)
    text.set_attributes(updates, r)
    return text


def add_attribute(text: AttributedText, attr: TextAttribute,
                  range: Optional[RangeLike] = None) -> AttributedText:
    return add_attributes(text, [attr], range)


def remove_attributes(text: AttributedText, styles: Iterable[StyleOrKey],
                      range: Optional[RangeLike] = None) -> AttributedText:
    """Clear each style's key over the runs that carry it inside ``range``.

    Removing any of the paragraph-level styles clears the whole paragraph
    style, since they share one key.
    """
    r = text.check_range(range)
    keys = [attribute_key(style) for style in styles]
    for key in keys:
        runs = [run for _, run in enumerate_attribute(text, key, r)]
        for run in runs:
            text.clear_attribute(key, run)
    return text


def remove_attribute(text: AttributedText, style: StyleOrKey,
                     range: Optional[RangeLike] = None) -> AttributedText:
    return remove_attributes(text, [style], range)


# --- Enumeration ---

def enumerate_attribute(text: AttributedText, style_or_key: StyleOrKey,
                        range: Optional[RangeLike] = None,
                        include_absent: bool = False) -> Iterator[tuple[Any, TextRange]]:
    """Iterate over the maximal runs of one attribute within ``range``.

    Yields ``(value, range)`` pairs left to right; runs are clipped to
    ``range``. Runs without the attribute are skipped unless
    ``include_absent`` is set, in which case they come with a value of None.
    Stop early by breaking out of the loop. The range is checked when this
    function is called, not when iteration starts.
    """
    key = attribute_key(style_or_key)
    r = text.check_range(range)
    return _attribute_runs(text, key, r, include_absent)


def _attribute_runs(text: AttributedText, key: AttributeKey, r: TextRange,
                    include_absent: bool) -> Iterator[tuple[Any, TextRange]]:
    start = r.start
    while start < r.end:
        value = text.attribute_at(key, start)
        end = start + 1
        while end < r.end and text.attribute_at(key, end) == value:
            end += 1
        if value is not None or include_absent:
            yield value, TextRange(start, end)
        start = end


def map_attribute(text: AttributedText, style_or_key: StyleOrKey,
                  func: Callable[[str], str]) -> list[str]:
    """Apply ``func`` to the substring of every run of the attribute.

    Runs without the attribute are included, so the results cover the whole
    text in order.
    """
    runs = enumerate_attribute(text, style_or_key, include_absent=True)
    return [func(text.substring(run).string) for _, run in runs]


# --- Occurrence operations ---

def enumerate_occurrences(text: AttributedText, substring: str, callback: OccurrenceCallback,
                          options: CompareOptions = CompareOptions.NONE,
                          range: Optional[RangeLike] = None) -> AttributedText:
    """Let ``callback`` edit a copy of every occurrence of ``substring``.

    Occurrences are found up front, left to right and non-overlapping. For
    each one the callback receives a standalone copy of the occurrence and
    its range in the text as it was before any edit. The callback may change
    the copy's characters and attributes in place, or return a replacement;
    the result is spliced back over the occurrence. Later occurrences are
    shifted by the accumulated change in length.
    """
    r = text.check_range(range)
    occurrences = find_occurrences(text.units, substring, options, r)
    offset = 0
    for occurrence in occurrences:
        target = occurrence.offset(offset)
        fragment = text.substring(target)
        original_length = fragment.length
        replacement = callback(fragment, occurrence)
        if replacement is not None:
            fragment = replacement
        text.replace(target, fragment)
        if fragment.length != original_length:
            logger.debug(f"Occurrence at {tuple(occurrence)} changed length "
                         f"from {original_length} to {fragment.length}")
        offset += fragment.length - original_length
    return text


def add_attributes_to_occurrences(text: AttributedText, attrs: Iterable[TextAttribute], substring: str,
                                  options: CompareOptions = CompareOptions.NONE,
                                  range: Optional[RangeLike] = None) -> AttributedText:
    attrs = list(attrs)
    return enumerate_occurrences(
        text, substring, lambda fragment, _: add_attributes(fragment, attrs), options, range
    )


def add_attribute_to_occurrences(text: AttributedText, attr: TextAttribute, substring: str,
                                 options: CompareOptions = CompareOptions.NONE,
                                 range: Optional[RangeLike] = None) -> AttributedText:
    return add_attributes_to_occurrences(text, [attr], substring, options, range)


def remove_attributes_from_occurrences(text: AttributedText, styles: Iterable[StyleOrKey], substring: str,
                                       options: CompareOptions = CompareOptions.NONE,
                                       range: Optional[RangeLike] = None) -> AttributedText:
    styles = list(styles)
    # Resolve before the first splice so a bad style fails without mutating
    for style in styles:
        attribute_key(style)
    return enumerate_occurrences(
        text, substring, lambda fragment, _: remove_attributes(fragment, styles), options, range
    )


def remove_attribute_from_occurrences(text: AttributedText, style: StyleOrKey, substring: str,
                                      options: CompareOptions = CompareOptions.NONE,
                                      range: Optional[RangeLike] = None) -> AttributedText:
    return remove_attributes_from_occurrences(text, [style], substring, options, range)


# --- Copying variants ---

def adding_attributes(text: AttributedText, attrs: Iterable[TextAttribute],
                      range: Optional[RangeLike] = None) -> AttributedText:
    return add_attributes(text.copy(), attrs, range)


def adding_attribute(text: AttributedText, attr: TextAttribute,
                     range: Optional[RangeLike] = None) -> AttributedText:
    return add_attributes(text.copy(), [attr], range)


def adding_attributes_to_occurrences(text: AttributedText, attrs: Iterable[TextAttribute], substring: str,
                                     options: CompareOptions = CompareOptions.NONE,
                                     range: Optional[RangeLike] = None) -> AttributedText:
    return add_attributes_to_occurrences(text.copy(), attrs, substring, options, range)


def adding_attribute_to_occurrences(text: AttributedText, attr: TextAttribute, substring: str,
                                    options: CompareOptions = CompareOptions.NONE,
                                    range: Optional[RangeLike] = None) -> AttributedText:
    return add_attributes_to_occurrences(text.copy(), [attr], substring, options, range)


def removing_attributes(text: AttributedText, styles: Iterable[StyleOrKey],
                        range: Optional[RangeLike] = None) -> AttributedText:
    return remove_attributes(text.copy(), styles, range)


def removing_attribute(text: AttributedText, style: StyleOrKey,
                       range: Optional[RangeLike] = None) -> AttributedText:
    return remove_attributes(text.copy(), [style], range)


def removing_attributes_from_occurrences(text: AttributedText, styles: Iterable[StyleOrKey], substring: str,
                                         options: CompareOptions = CompareOptions.NONE,
                                         range: Optional[RangeLike] = None) -> AttributedText:
    return remove_attributes_from_occurrences(text.copy(), styles, substring, options, range)


def removing_attribute_from_occurrences(text: AttributedText, style: StyleOrKey, substring: str,
                                        options: CompareOptions = CompareOptions.NONE,
                                        range: Optional[RangeLike] = None) -> AttributedText:
    return remove_attributes_from_occurrences(text.copy(), [style], substring, options, range)
