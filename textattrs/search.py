"""Substring search over UTF-16 units with comparison options."""

from __future__ import annotations

import re
import unicodedata
from enum import Flag, auto
from typing import Optional

from .model import TextRange, to_units


class CompareOptions(Flag):
    NONE = 0
    CASE_INSENSITIVE = auto()
    DIACRITIC_INSENSITIVE = auto()
    WIDTH_INSENSITIVE = auto()
    REGULAR_EXPRESSION = auto()


_FOLDING = (
    CompareOptions.CASE_INSENSITIVE
    | CompareOptions.DIACRITIC_INSENSITIVE
    | CompareOptions.WIDTH_INSENSITIVE
)


def _fold_unit(unit: str, options: CompareOptions) -> str:
    folded = unit
    if options & CompareOptions.WIDTH_INSENSITIVE:
        folded = unicodedata.normalize("NFKC", folded)
    if options & CompareOptions.DIACRITIC_INSENSITIVE:
        folded = "".join(
            c for c in unicodedata.normalize("NFD", folded) if not unicodedata.combining(c)
        )
    if options & CompareOptions.CASE_INSENSITIVE:
        folded = folded.casefold()
    return folded


def _fold(units: str, start: int, end: int, options: CompareOptions) -> tuple[str, list[int]]:
    """Fold ``units[start:end]``; ``origin[k]`` is the unit that produced folded char ``k``."""
    pieces: list[str] = []
    origin: list[int] = []
    for i in range(start, end):
        piece = _fold_unit(units[i], options)
        pieces.append(piece)
        origin.extend([i] * len(piece))
    return "".join(pieces), origin


def _on_boundaries(origin: list[int], start: int, end: int) -> bool:
    # A match may not begin or end inside the expansion of a single unit
    if start > 0 and origin[start - 1] == origin[start]:
        return False
    if end < len(origin) and origin[end - 1] == origin[end]:
        return False
    return True


def _occurrence(units: str, origin: list[int], start: int, end: int,
                range_end: int) -> Optional[TextRange]:
    """Map folded match ``[start, end)`` back to units, or None if it splits a character."""
    if not _on_boundaries(origin, start, end):
        return None
    first = origin[start]
    if first > 0 and unicodedata.combining(units[first]):
        return None
    # Units that folded away after the match, such as combining marks, belong to it
    last = origin[end] if end < len(origin) else range_end
    if last < len(units) and unicodedata.combining(units[last]):
        return None
    return TextRange(first, last)


def find_occurrences(units: str, needle: str,
                     options: CompareOptions = CompareOptions.NONE,
                     within: Optional[tuple[int, int]] = None) -> list[TextRange]:
    """Find non-overlapping occurrences of ``needle`` in ``units``, left to right.

    Args:
        units: Text with one character per UTF-16 unit
        needle: The substring (or pattern, with REGULAR_EXPRESSION) to find
        options: Comparison options
        within: Offsets to search in; defaults to the whole text

    Returns:
        Ranges of the occurrences in UTF-16 offsets. An empty needle, or a
        pattern that only matches the empty string, has no occurrences.
    """
    start, end = within if within is not None else (0, len(units))
    if not needle or start >= end:
        return []

    if options & CompareOptions.REGULAR_EXPRESSION:
        return _find_pattern(units, needle, options, start, end)

    needle_units = to_units(needle)
    if options & _FOLDING:
        haystack, origin = _fold(units, start, end, options)
        needle_units = "".join(_fold_unit(u, options) for u in needle_units)
        if not needle_units:
            return []
    else:
        haystack = units[start:end]
        origin = list(range(start, end))

    found: list[TextRange] = []
    pos = 0
    while pos < len(haystack):
        hit = haystack.find(needle_units, pos)
        if hit < 0:
            break
        hit_end = hit + len(needle_units)
        occurrence = _occurrence(units, origin, hit, hit_end, end)
        if occurrence is None:
            pos = hit + 1
            continue
        found.append(occurrence)
        pos = hit_end
    return found


def _find_pattern(units: str, pattern: str, options: CompareOptions,
                  start: int, end: int) -> list[TextRange]:
    flags = re.IGNORECASE if options & CompareOptions.CASE_INSENSITIVE else 0
    try:
        compiled = re.compile(pattern, flags)
    except re.error as e:
        raise ValueError(f"Invalid search pattern {pattern!r}: {e}") from e

    fold_options = options & (CompareOptions.DIACRITIC_INSENSITIVE | CompareOptions.WIDTH_INSENSITIVE)
    if fold_options:
        haystack, origin = _fold(units, start, end, fold_options)
    else:
        haystack = units[start:end]
        origin = list(range(start, end))

    found: list[TextRange] = []
    pos = 0
    while pos < len(haystack):
        m = compiled.search(haystack, pos)
        if m is None:
            break
        occurrence = None
        if m.end() > m.start():
            occurrence = _occurrence(units, origin, m.start(), m.end(), end)
        if occurrence is None:
            pos = m.start() + 1
            continue
        found.append(occurrence)
        pos = m.end()
    return found
