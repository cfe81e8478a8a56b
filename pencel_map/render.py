# pencel_map/render.py
from __future__ import annotations

"""
Console rendering of palettes and swatch grids.

Colour output uses 24-bit ANSI foreground escapes. With colour disabled the
glyph alone tells heavy ('HH') from light ('LL') tones.
"""

from collections import Counter
from typing import Dict, List, Sequence, Tuple

from .constants import HEAVY_GLYPH, LIGHT_GLYPH
from .core_types import ARGB32, MatchResult, PencilInfo, rgb_to_hex, unpack_argb
from .errors import InvalidParameterError

ANSI_RESET = "\x1b[0m"


def ansi_fg(colour: ARGB32) -> str:
    r, g, b = unpack_argb(colour)
    return f"\x1b[38;2;{r};{g};{b}m"


def _paint(text: str, colour: ARGB32, use_colour: bool) -> str:
    if not use_colour:
        return text
    return f"{ansi_fg(colour)}{text}{ANSI_RESET}"


def format_palette_listing(
    palette: Sequence[PencilInfo], use_colour: bool = True
) -> List[str]:
    """One line per pencil: heavy swatch, light swatch, hex codes, name."""
    lines: List[str] = []
    for info in palette:
        heavy = _paint(HEAVY_GLYPH, info.heavy, use_colour)
        light = _paint(LIGHT_GLYPH, info.light, use_colour)
        lines.append(
            f"{heavy} {light} {rgb_to_hex(info.heavy_rgb)} {rgb_to_hex(info.light_rgb)} {info.name}"
        )
    return lines


def format_grid(
    matches: Sequence[MatchResult],
    width: int,
    height: int,
    palette: Sequence[PencilInfo],
    use_colour: bool = True,
) -> List[str]:
    """Rows of two-character swatches in row-major match order."""
    if len(matches) != width * height:
        raise InvalidParameterError(
            f"{len(matches)} matches do not fill a {width}x{height} grid"
        )
    rows: List[str] = []
    for row in range(height):
        cells = []
        for m in matches[row * width : (row + 1) * width]:
            glyph = HEAVY_GLYPH if m.heavy else LIGHT_GLYPH
            cells.append(_paint(glyph, m.colour(palette), use_colour))
        rows.append("".join(cells))
    return rows


def swatch_usage_report(
    matches: Sequence[MatchResult], palette: Sequence[PencilInfo]
) -> List[Tuple[str, str, int]]:
    """
    Count how often each pencil tone was picked.

    Returns a list of (name, 'heavy'|'light', count) sorted by count descending,
    ties in palette order with heavy first.
    """
    counts: Dict[Tuple[int, bool], int] = Counter((m.index, m.heavy) for m in matches)
    ordered = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0][0], not kv[0][1]))
    return [
        (palette[index].name, "heavy" if heavy else "light", count)
        for (index, heavy), count in ordered
    ]


__all__ = [
    "ANSI_RESET",
    "ansi_fg",
    "format_palette_listing",
    "format_grid",
    "swatch_usage_report",
]
