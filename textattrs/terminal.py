"""Terminal preview of attributed text using Blessed."""

from typing import Any, Optional

import blessed

from .attributes import AttributeKey
from .model import AttributedText


def _run_prefix(attrs: dict[AttributeKey, Any], term: blessed.Terminal) -> str:
    """Formatting sequences for one run of attributes."""
    parts = []
    font = attrs.get(AttributeKey.FONT)
    if font is not None:
        if font.is_bold:
            parts.append(term.bold)
        if font.is_italic:
            parts.append(term.italic)
    foreground = attrs.get(AttributeKey.FOREGROUND_COLOR)
    if foreground is not None:
        parts.append(term.color_rgb(*foreground.rgba8()[:3]))
    background = attrs.get(AttributeKey.BACKGROUND_COLOR)
    if background is not None:
        parts.append(term.on_color_rgb(*background.rgba8()[:3]))
    if attrs.get(AttributeKey.UNDERLINE_STYLE):
        parts.append(term.underline)
    return "".join(parts)


def render_ansi(text: AttributedText, term: Optional[blessed.Terminal] = None) -> str:
    """Render ``text`` with terminal formatting.

    Fonts map to bold/italic, colors to 24-bit color sequences (downgraded
    by Blessed on terminals with fewer colors), underline styles to
    underline, and links to OSC 8 hyperlinks. Other attributes have no
    terminal form and are ignored.
    """
    term = term or blessed.Terminal()
    out = []
    for attrs, r in text.runs():
        chunk = text.substring(r).string
        prefix = _run_prefix(attrs, term)
        if prefix:
            chunk = prefix + chunk + term.normal
        link = attrs.get(AttributeKey.LINK)
        if link:
            chunk = term.link(link, chunk)
        out.append(chunk)
    return "".join(out)
