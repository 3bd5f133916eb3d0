"""
ASCII rendering for crosswire grids.

Draws the bounding box of every marked cell, one character per cell, with
each marker kind in its own colour.
"""

from __future__ import annotations

import logging
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from crosswire import WireGrid
from wire_types import Marker, Point

logger = logging.getLogger(__name__)


GLYPHS: dict[Marker, str] = {
    Marker.EMPTY: ".",
    Marker.START: "o",
    Marker.INTERSECTION: "+",
    Marker.LONGITUDINAL_MOVE: "|",
    Marker.LATERAL_MOVE: "-",
    Marker.PATHS_CROSSED: "X",
}


def _palette() -> dict[Marker, Callable[[str], str]]:
    return {
        Marker.EMPTY: chalk.white,
        Marker.START: chalk.greenBright,
        Marker.INTERSECTION: chalk.yellow,
        Marker.LONGITUDINAL_MOVE: chalk.cyan,
        Marker.LATERAL_MOVE: chalk.blue,
        Marker.PATHS_CROSSED: chalk.redBright,
    }


def render_window(grid: WireGrid, max_size: int = 200) -> tuple[Point, Point] | None:
    """
    Compute the logical window to draw: every marked cell plus a one-cell margin,
    clipped to the grid and cropped to at most max_size cells per axis, centred
    on the origin where cropping is needed.

    Returns:
        Tuple of (top_left, bottom_right), inclusive, or None for an empty grid
    """
    extent = grid.extent()
    if extent is None:
        return None

    low = -grid.offset
    high = grid.side - 1 - grid.offset
    top_left, bottom_right = extent

    def clip(axis: str, lo: int, hi: int) -> tuple[int, int]:
        lo, hi = max(lo - 1, low), min(hi + 1, high)
        if hi - lo + 1 <= max_size:
            return (lo, hi)
        # Crop around the origin, keeping the window inside the marked range
        start = min(max(-(max_size // 2), lo), hi - max_size + 1)
        logger.info(
            "render_window: %s=[%d, %d] cropped to [%d, %d] (max_size=%d)",
            axis,
            lo,
            hi,
            start,
            start + max_size - 1,
            max_size,
        )
        return (start, start + max_size - 1)

    x0, x1 = clip("x", top_left.x, bottom_right.x)
    y0, y1 = clip("y", top_left.y, bottom_right.y)
    return (Point(x0, y0), Point(x1, y1))


def render(
    grid: WireGrid,
    highlight: Point | None = None,
    max_size: int = 200,
    color: bool = True,
) -> str:
    """
    Render a built grid to a string.

    Args:
        grid: The grid to render
        highlight: Optional cell to draw on a white background
        max_size: Maximum width and height in characters (default 200)
        color: Emit ANSI colour codes (default True)

    Returns:
        Rendered text, one line per grid row, or "" for an empty grid
    """
    window = render_window(grid, max_size)
    if window is None:
        return ""
    top_left, bottom_right = window

    palette = _palette()
    lines: list[str] = []
    for y in range(top_left.y, bottom_right.y + 1):
        chars: list[str] = []
        for x in range(top_left.x, bottom_right.x + 1):
            point = Point(x, y)
            marker = grid[point]
            glyph = GLYPHS[marker]
            if color:
                if point == highlight:
                    glyph = chalk.bgWhite.black(glyph)
                else:
                    glyph = palette[marker](glyph)
            chars.append(glyph)
        lines.append("".join(chars))

    return "\n".join(lines)
