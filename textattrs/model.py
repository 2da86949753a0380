"""Mutable attributed text buffer.

The text is held as UTF-16 code units, one Python character per unit, with a
parallel list holding the attribute dictionary of every unit. All offsets and
ranges in this module are UTF-16 offsets. Attribute dictionaries are never
mutated in place once stored; updates install new dictionaries, so runs that
were never touched keep sharing one object.
"""

import sys
from array import array
from typing import Any, Iterator, Mapping, NamedTuple, Optional, Union

from .attributes import AttributeKey
from .errors import RangeError


class TextRange(NamedTuple):
    """Half-open range ``[start, end)`` of UTF-16 offsets."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start

    def offset(self, delta: int) -> "TextRange":
        return TextRange(self.start + delta, self.end + delta)

    def intersects(self, other: "TextRange") -> bool:
        return self.start < other.end and other.start < self.end

    @classmethod
    def full(cls, length: int) -> "TextRange":
        return cls(0, length)


RangeLike = Union[TextRange, tuple[int, int]]


def utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def to_units(text: str) -> str:
    """Split ``text`` into one character per UTF-16 code unit."""
    if text.isascii():
        return text
    units = array("H")
    units.frombytes(text.encode("utf-16-le", "surrogatepass"))
    if sys.byteorder == "big":
        units.byteswap()
    return "".join(map(chr, units))


def from_units(units: str) -> str:
    """Join UTF-16 code units back into a regular string."""
    if units.isascii():
        return units
    return units.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


def unit_offset(text: str, code_point_index: int) -> int:
    """UTF-16 offset of the code point at ``code_point_index`` in ``text``."""
    return utf16_length(text[:code_point_index])


def code_point_offset(text: str, unit_index: int) -> int:
    """Code point index of the UTF-16 offset ``unit_index`` in ``text``."""
    units = 0
    for i, ch in enumerate(text):
        if units >= unit_index:
            return i
        units += 2 if ord(ch) > 0xFFFF else 1
    return len(text)


class AttributedText:
    """A string with an attribute dictionary for every UTF-16 unit."""

    def __init__(self, text: str = "", attributes: Optional[Mapping[Any, Any]] = None):
        self._units = to_units(text)
        base = _normalize_mapping(attributes) if attributes else {}
        self._attributes: list[dict[AttributeKey, Any]] = [base] * len(self._units)

    @classmethod
    def _from_parts(cls, units: str, attributes: list) -> "AttributedText":
        text = cls()
        text._units = units
        text._attributes = attributes
        return text

    # --- Reading ---

    @property
    def string(self) -> str:
        return from_units(self._units)

    @property
    def units(self) -> str:
        """The text with one character per UTF-16 code unit."""
        return self._units

    @property
    def length(self) -> int:
        return len(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def __str__(self) -> str:
        return self.string

    def __repr__(self) -> str:
        runs = ", ".join(
            f"{r.start}-{r.end}: {{{', '.join(f'{k.value}={v!r}' for k, v in attrs.items())}}}"
            for attrs, r in self.runs()
            if attrs
        )
        return f"AttributedText({self.string!r}{', ' + runs if runs else ''})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributedText):
            return NotImplemented
        return self._units == other._units and self._attributes == other._attributes

    def copy(self) -> "AttributedText":
        return AttributedText._from_parts(self._units, list(self._attributes))

    def check_range(self, range: Optional[RangeLike]) -> TextRange:
        """Return ``range`` as a TextRange, or the whole text when None.

        Raises RangeError unless ``0 <= start <= end <= length``.
        """
        if range is None:
            return TextRange.full(self.length)
        start, end = range
        if not (0 <= start <= end <= self.length):
            raise RangeError((start, end), self.length)
        return TextRange(start, end)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.length:
            raise RangeError((index, index + 1), self.length)

    def attributes_at(self, index: int) -> dict[AttributeKey, Any]:
        self._check_index(index)
        return dict(self._attributes[index])

    def attribute_at(self, key: Any, index: int) -> Any:
        self._check_index(index)
        return self._attributes[index].get(AttributeKey(key))

    def effective_range(self, key: Any, index: int) -> TextRange:
        """The maximal range around ``index`` where ``key`` keeps its value."""
        key = AttributeKey(key)
        value = self.attribute_at(key, index)
        start = index
        while start > 0 and self._attributes[start - 1].get(key) == value:
            start -= 1
        end = index + 1
        while end < self.length and self._attributes[end].get(key) == value:
            end += 1
        return TextRange(start, end)

    def runs(self, range: Optional[RangeLike] = None) -> Iterator[tuple[dict[AttributeKey, Any], TextRange]]:
        """Yield maximal runs with identical attribute dictionaries."""
        r = self.check_range(range)
        start = r.start
        while start < r.end:
            attrs = self._attributes[start]
            end = start + 1
            while end < r.end and (self._attributes[end] is attrs or self._attributes[end] == attrs):
                end += 1
            yield dict(attrs), TextRange(start, end)
            start = end

    def substring(self, range: RangeLike) -> "AttributedText":
        r = self.check_range(range)
        return AttributedText._from_parts(self._units[r.start:r.end], self._attributes[r.start:r.end])

    # --- Mutation ---

    def replace(self, range: RangeLike, replacement: Union[str, "AttributedText"]) -> None:
        """Replace the characters and attributes in ``range``.

        A plain string takes the attributes of the first replaced unit, or of
        the unit before ``range`` when ``range`` is empty.
        """
        r = self.check_range(range)
        if isinstance(replacement, AttributedText):
            units = replacement._units
            attributes = list(replacement._attributes)
        else:
            units = to_units(replacement)
            if r.start < self.length:
                inherited = self._attributes[r.start]
            elif r.start > 0:
                inherited = self._attributes[r.start - 1]
            else:
                inherited = {}
            attributes = [inherited] * len(units)
        self._units = self._units[:r.start] + units + self._units[r.end:]
        self._attributes[r.start:r.end] = attributes

    def append(self, other: Union[str, "AttributedText"]) -> None:
        self.replace((self.length, self.length), other)

    def set_attributes(self, attributes: Mapping[Any, Any], range: Optional[RangeLike] = None) -> None:
        """Set every key of ``attributes`` over ``range``, keeping other keys."""
        r = self.check_range(range)
        updates = _normalize_mapping(attributes)
        if not updates:
            return
        self._rewrite(r, lambda attrs: {**attrs, **updates})

    def set_attribute(self, key: Any, value: Any, range: Optional[RangeLike] = None) -> None:
        self.set_attributes({key: value}, range)

    def clear_attribute(self, key: Any, range: Optional[RangeLike] = None) -> None:
        r = self.check_range(range)
        key = AttributeKey(key)
        self._rewrite(r, lambda attrs: {k: v for k, v in attrs.items() if k is not key})

    def _rewrite(self, r: TextRange, update) -> None:
        # Units sharing one dictionary keep sharing its replacement
        rewritten: dict[int, tuple[dict, dict]] = {}
        for i in range(r.start, r.end):
            current = self._attributes[i]
            entry = rewritten.get(id(current))
            if entry is None:
                entry = (current, update(current))
                rewritten[id(current)] = entry
            self._attributes[i] = entry[1]


def _normalize_mapping(attributes: Mapping[Any, Any]) -> dict[AttributeKey, Any]:
    return {AttributeKey(k): v for k, v in attributes.items()}
