# pencel_map/palette_data.py
from __future__ import annotations

"""
Pencil palette definitions and loaders.

Palette files hold one pencil per line:

  <name> <heavy-hex> <light-hex>

Hex values are 'rrggbb' or 'aarrggbb', optionally prefixed with '#' or '0x'.
The two colour fields are taken from the end of the line, so names may contain
spaces. Blank lines and lines starting with '# ' are skipped.

Exports:
  DEFAULT_PALETTE: list[tuple[str, str, str]]  # [(name, heavy, light), ...]
  parse_palette(lines) -> list[PencilInfo]
  load_palette(path) -> list[PencilInfo]
  build_palette(triples=DEFAULT_PALETTE) -> list[PencilInfo]
"""

from pathlib import Path
from typing import Iterable, List, Tuple

from .core_types import PencilInfo, parse_hex_colour
from .errors import PaletteFormatError


DEFAULT_PALETTE: List[Tuple[str, str, str]] = [
    ("White", "ffffff", "ffffff"),
    ("Lemon", "f5d800", "fbec80"),
    ("Orange", "f08a00", "f8c27a"),
    ("Vermilion", "e0301e", "f09a8c"),
    ("Crimson", "a8112a", "d98a96"),
    ("Pink", "e86fa6", "f4bdd6"),
    ("Violet", "6a2c91", "b79acb"),
    ("Ultramarine", "1f3c99", "8fa0d6"),
    ("Sky Blue", "2aa0dc", "a4d6f0"),
    ("Turquoise", "00999a", "80cccc"),
    ("Grass Green", "3a9a34", "a3d19c"),
    ("Olive", "6b6b1f", "b8b88a"),
    ("Ochre", "c2861c", "e3c38e"),
    ("Sepia", "6e4424", "b79f8a"),
    ("Grey", "7a7a7a", "c4c4c4"),
    ("Black", "1a1a1a", "6a6a6a"),
]


def _is_comment(line: str) -> bool:
    return line == "#" or line.startswith("# ")


def parse_palette(lines: Iterable[str]) -> List[PencilInfo]:
    """Parse palette lines in order. Raises PaletteFormatError on bad input."""
    palette: List[PencilInfo] = []
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or _is_comment(line):
            continue
        parts = line.rsplit(maxsplit=2)
        if len(parts) != 3:
            raise PaletteFormatError(
                f"expected '<name> <heavy> <light>', got {line!r}", line_no
            )
        name, s_heavy, s_light = parts
        try:
            heavy = parse_hex_colour(s_heavy)
            light = parse_hex_colour(s_light)
        except ValueError as e:
            raise PaletteFormatError(str(e), line_no) from e
        palette.append(PencilInfo(name=name, heavy=heavy, light=light))
    return palette


def load_palette(path: Path) -> List[PencilInfo]:
    """Read a palette text file (UTF-8)."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PaletteFormatError(f"cannot read palette {path}: {e}") from e
    return parse_palette(text.splitlines())


def build_palette(
    triples: Iterable[Tuple[str, str, str]] = DEFAULT_PALETTE,
) -> List[PencilInfo]:
    """Build PencilInfo entries from (name, heavy-hex, light-hex) triples."""
    return [
        PencilInfo(name=name, heavy=parse_hex_colour(hx), light=parse_hex_colour(lx))
        for name, hx, lx in triples
    ]


__all__ = ["DEFAULT_PALETTE", "parse_palette", "load_palette", "build_palette"]
