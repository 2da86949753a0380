"""textattrs CLI entry point.

Allows running via `python -m textattrs` and provides the console script
defined in `pyproject.toml`.

Usage:
    textattrs --version
    textattrs preview FILE
    textattrs hit FILE X Y [--width W]
    textattrs linkify FILE
"""

from __future__ import annotations

import sys
from pathlib import Path

from .version import get_version_string

USAGE = """usage: textattrs --version
       textattrs preview FILE
       textattrs hit FILE X Y [--width W]
       textattrs linkify FILE"""


def _load(path: str):
    from .codec import load_text
    return load_text(Path(path).read_text(encoding="utf-8"))


def run_preview(path: str) -> None:
    """Print a document file with terminal formatting."""
    import blessed
    from .terminal import render_ansi

    print(render_ansi(_load(path), blessed.Terminal()))


def run_hit(path: str, x: float, y: float, width: float | None = None) -> int | None:
    """Resolve a tap at (x, y) in a document laid out in a monospace label."""
    from .geometry import Point, Size
    from .hit_testing import LabelGeometry, glyph_index_at
    from .layout import MonospaceLayoutManager, TextContainer

    text = _load(path)
    layout = MonospaceLayoutManager(text)
    # Without an explicit width the label hugs the unwrapped text
    natural = layout.used_rect(TextContainer())
    bounds = Size(width if width is not None else natural.width, natural.height)
    geometry = LabelGeometry.for_text(text, bounds, layout.font)
    index = glyph_index_at(Point(x, y), text, geometry, layout)
    print("none" if index is None else index)
    return index


def run_linkify(path: str) -> None:
    """Print a document file with detected links added."""
    from .codec import dump_text
    from .links import linkify

    print(dump_text(linkify(_load(path))))


def _parse_hit_args(args: list[str]) -> tuple[str, float, float, float | None]:
    width = None
    if "--width" in args:
        i = args.index("--width")
        if i + 1 >= len(args):
            raise ValueError("--width needs a value")
        width = float(args[i + 1])
        args = args[:i] + args[i + 2:]
    if len(args) != 3:
        raise ValueError("hit needs FILE X Y")
    return args[0], float(args[1]), float(args[2]), width


def main(argv: list[str] | None = None) -> int:
    # Very small arg parsing: a command name followed by its arguments
    from .errors import TextAttributesError

    args = sys.argv[1:] if argv is None else list(argv)
    if not args or args[0] in ("-h", "--help"):
        print(USAGE)
        return 0
    if args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0

    command, rest = args[0], args[1:]
    try:
        if command == "preview" and len(rest) == 1:
            run_preview(rest[0])
        elif command == "linkify" and len(rest) == 1:
            run_linkify(rest[0])
        elif command == "hit":
            run_hit(*_parse_hit_args(rest))
        else:
            print(USAGE, file=sys.stderr)
            return 2
    except (TextAttributesError, OSError, ValueError) as e:
        print(f"textattrs: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
