"""Detect URLs in text and attach ``link`` attributes to them."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlsplit

from linkify_it import LinkifyIt

from .attributes import TextAttribute
from .constants import TextAttributeConstants
from .engine import add_attributes
from .errors import LinkConstructionError
from .model import AttributedText, TextRange, unit_offset

logger = logging.getLogger(__name__)

_DETECTOR: Optional[LinkifyIt] = None


def _detector() -> LinkifyIt:
    global _DETECTOR
    if _DETECTOR is None:
        _DETECTOR = LinkifyIt()
    return _DETECTOR


def link_target(matched: str) -> str:
    """Build the URL for a detected link.

    ``http://``/``https://`` matches are used verbatim; anything else (bare
    hosts such as ``example.com``) gets the default ``https://`` scheme.

    Raises:
        LinkConstructionError: the result is not a usable URL.
    """
    if matched.startswith(("https://", "http://")):
        candidate = matched
    else:
        candidate = TextAttributeConstants.DEFAULT_LINK_SCHEME + matched
    if any(ch.isspace() for ch in candidate):
        raise LinkConstructionError(f"Link contains whitespace: {matched!r}")
    try:
        parts = urlsplit(candidate)
    except ValueError as e:
        raise LinkConstructionError(f"Cannot build a URL from {matched!r}: {e}") from e
    if not parts.scheme or not parts.netloc:
        raise LinkConstructionError(f"Cannot build a URL from {matched!r}")
    return candidate


def detect_links(string: str) -> list[tuple[TextRange, str]]:
    """Find links in ``string``.

    Returns:
        ``(range, url)`` pairs with UTF-16 ranges; matches that cannot form a
        URL are left out.
    """
    links = []
    for match in _detector().match(string) or []:
        try:
            url = link_target(match.raw)
        except LinkConstructionError as e:
            logger.debug(f"Skipping detected link: {e}")
            continue
        r = TextRange(unit_offset(string, match.index), unit_offset(string, match.last_index))
        links.append((r, url))
    return links


def linkify(text: AttributedText) -> AttributedText:
    """Return a copy of ``text`` with a ``link`` attribute on every detected URL."""
    result = text.copy()
    for r, url in detect_links(result.string):
        add_attributes(result, [TextAttribute.link(url)], r)
    return result
