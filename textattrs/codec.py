"""Serialization of text attributes to and from JSON-compatible data.

Each attribute is written as ``{"style": <tag>, "value": <value>}``:

- colors as ``#RRGGBBAA`` hex strings (channels quantized to 8 bits)
- fonts as ``{"name": ..., "size": ...}``
- shadows as ``{"blur": ..., "offset": {"width": ..., "height": ...}, "color": ...}``
  with ``color`` omitted when the shadow has none
- underline/strikethrough styles, line break modes and alignments as raw ints
- kerning and line spacing as numbers, links as strings

Color round trips are exact only up to 1/255 per channel. Unknown line break
mode and alignment raw values decode to word wrapping and justified
alignment respectively; every other malformed value raises FormatError.
"""

import json
import math
from typing import Any, Iterable, Mapping, Optional, Union

from .attributes import AttributeKey, Style, TextAttribute, attributes_from_raw
from .constants import TextAttributeConstants
from .engine import add_attributes
from .errors import FormatError, RangeError
from .fonts import Font
from .geometry import Size
from .model import AttributedText
from .values import Color, LineBreakMode, Shadow, TextAlignment, UnderlineStyle

# Maximum serialized size accepted by loads/load_text
MAX_SERIALIZED_SIZE = TextAttributeConstants.MAX_SERIALIZED_SIZE

_KEY_ORDER = {key: i for i, key in enumerate(AttributeKey)}


# --- Attributes ---

def _encode_color(color: Color) -> str:
    return color.to_hex()


def _encode_shadow(shadow: Shadow) -> dict[str, Any]:
    encoded: dict[str, Any] = {
        "blur": shadow.blur_radius,
        "offset": {"width": shadow.offset.width, "height": shadow.offset.height},
    }
    if shadow.color is not None:
        encoded["color"] = _encode_color(shadow.color)
    return encoded


def encode_attribute(attr: TextAttribute) -> dict[str, Any]:
    """Encode one attribute as a ``{"style", "value"}`` dictionary."""
    style, value = attr.style, attr.value
    if style is Style.FONT:
        encoded: Any = {"name": value.name, "size": value.size}
    elif style in (Style.FOREGROUND_COLOR, Style.BACKGROUND_COLOR,
                   Style.UNDERLINE_COLOR, Style.STRIKETHROUGH_COLOR):
        encoded = _encode_color(value)
    elif style is Style.SHADOW:
        encoded = _encode_shadow(value)
    elif style in (Style.UNDERLINE_STYLE, Style.STRIKETHROUGH_STYLE,
                   Style.LINE_BREAK_MODE, Style.TEXT_ALIGNMENT):
        encoded = int(value)
    else:
        # kern, lineSpacing, link
        encoded = value
    return {"style": style.value, "value": encoded}


def _number(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatError(f"{what} must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError:
        raise FormatError(f"{what} is out of range, got {value!r}") from None
    if not math.isfinite(number):
        raise FormatError(f"{what} must be a finite number, got {value!r}")
    return number


def _integer(value: Any, what: str) -> int:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise FormatError(f"{what} must be an integer, got {value!r}")
    return value


def _field(container: Any, name: str, what: str) -> Any:
    if not isinstance(container, Mapping):
        raise FormatError(f"{what} must be an object, got {container!r}")
    if name not in container:
        raise FormatError(f"{what} is missing '{name}'")
    return container[name]


def _decode_font(value: Any) -> Font:
    name = _field(value, "name", "font")
    size = _number(_field(value, "size", "font"), "font size")
    if not isinstance(name, str) or not name:
        raise FormatError(f"font name must be a non-empty string, got {name!r}")
    if size <= 0:
        raise FormatError(f"font size must be positive, got {size}")
    return Font(name, size)


def _decode_shadow(value: Any) -> Shadow:
    blur = _number(_field(value, "blur", "shadow"), "shadow blur")
    offset = _field(value, "offset", "shadow")
    width = _number(_field(offset, "width", "shadow offset"), "shadow offset width")
    height = _number(_field(offset, "height", "shadow offset"), "shadow offset height")
    color = value.get("color")
    return Shadow(
        blur_radius=blur,
        offset=Size(width, height),
        color=Color.from_hex(color) if color is not None else None,
    )


def _decode_link(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise FormatError(f"link must be a non-empty URL string, got {value!r}")
    if any(ch.isspace() for ch in value):
        raise FormatError(f"link is not a valid URL: {value!r}")
    return value


def decode_attribute(data: Any) -> TextAttribute:
    """Decode one ``{"style", "value"}`` dictionary.

    Raises:
        FormatError: unknown style tag, or a missing or malformed value.
    """
    tag = _field(data, "style", "attribute")
    try:
        style = Style(tag)
    except ValueError:
        raise FormatError(f"Unknown attribute style: {tag!r}") from None
    value = _field(data, "value", f"{style.value} attribute")

    if style is Style.FONT:
        decoded: Any = _decode_font(value)
    elif style in (Style.KERN, Style.LINE_SPACING):
        decoded = _number(value, style.value)
    elif style in (Style.FOREGROUND_COLOR, Style.BACKGROUND_COLOR,
                   Style.UNDERLINE_COLOR, Style.STRIKETHROUGH_COLOR):
        decoded = Color.from_hex(value)
    elif style is Style.SHADOW:
        decoded = _decode_shadow(value)
    elif style in (Style.UNDERLINE_STYLE, Style.STRIKETHROUGH_STYLE):
        raw = _integer(value, style.value)
        if raw < 0:
            raise FormatError(f"{style.value} must not be negative, got {raw}")
        decoded = UnderlineStyle(raw)
    elif style is Style.LINE_BREAK_MODE:
        decoded = LineBreakMode.from_raw(_integer(value, style.value))
    elif style is Style.TEXT_ALIGNMENT:
        decoded = TextAlignment.from_raw(_integer(value, style.value))
    else:
        decoded = _decode_link(value)
    return TextAttribute(style, decoded)


def encode_attributes(attrs: Iterable[TextAttribute]) -> list[dict[str, Any]]:
    return [encode_attribute(attr) for attr in attrs]


def decode_attributes(data: Any) -> list[TextAttribute]:
    if not isinstance(data, list):
        raise FormatError(f"Expected a list of attributes, got {type(data).__name__}")
    return [decode_attribute(item) for item in data]


def _parse_json(data: Union[str, bytes]) -> Any:
    if len(data) > MAX_SERIALIZED_SIZE:
        raise FormatError(f"Serialized data exceeds {MAX_SERIALIZED_SIZE} bytes")
    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise FormatError(f"Invalid JSON: {e}") from e


def dumps(attrs: Iterable[TextAttribute], indent: Optional[int] = None) -> str:
    return json.dumps(encode_attributes(attrs), indent=indent)


def loads(data: Union[str, bytes]) -> list[TextAttribute]:
    return decode_attributes(_parse_json(data))


# --- Documents ---

def encode_text(text: AttributedText) -> dict[str, Any]:
    """Encode a whole attributed text as its string plus attribute runs.

    Run offsets are UTF-16 offsets. Paragraph styles are kept through their
    line break mode, line spacing and alignment fields only.
    """
    runs = []
    for attrs, r in text.runs():
        encoded = [
            encode_attribute(attr)
            for key, value in sorted(attrs.items(), key=lambda item: _KEY_ORDER[item[0]])
            for attr in attributes_from_raw(key, value)
        ]
        if encoded:
            runs.append({"start": r.start, "end": r.end, "attributes": encoded})
    return {"text": text.string, "runs": runs}


def decode_text(data: Any) -> AttributedText:
    string = _field(data, "text", "document")
    if not isinstance(string, str):
        raise FormatError(f"document text must be a string, got {type(string).__name__}")
    runs = data.get("runs", [])
    if not isinstance(runs, list):
        raise FormatError("document runs must be a list")
    text = AttributedText(string)
    for run in runs:
        start = _integer(_field(run, "start", "run"), "run start")
        end = _integer(_field(run, "end", "run"), "run end")
        attrs = decode_attributes(_field(run, "attributes", "run"))
        try:
            add_attributes(text, attrs, (start, end))
        except RangeError as e:
            raise FormatError(f"Run {start}-{end} does not fit the document text") from e
    return text


def dump_text(text: AttributedText, indent: Optional[int] = 2) -> str:
    return json.dumps(encode_text(text), indent=indent, ensure_ascii=False)


def load_text(data: Union[str, bytes]) -> AttributedText:
    return decode_text(_parse_json(data))
