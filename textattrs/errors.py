"""Exception types raised by textattrs."""


class TextAttributesError(Exception):
    """Base class for all textattrs errors."""


class RangeError(TextAttributesError, IndexError):
    """A range lies outside ``[0, length]`` of the text it was applied to."""

    def __init__(self, range, length: int):
        self.range = range
        self.length = length
        super().__init__(f"Range {tuple(range)} out of bounds for text of length {length}")


class FormatError(TextAttributesError, ValueError):
    """Serialized attribute data could not be decoded."""


class LinkConstructionError(TextAttributesError, ValueError):
    """Detected link text does not form a valid URL."""
