"""
Wire crossing simulation on a fixed-size marker grid.
Three-phase algorithm: build (trace every wire onto the grid) -> analyze
(closest crossing by Manhattan distance) -> search (BFS over marked cells).
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterator, Sequence, Union

from wire_parser import parse_instruction
from wire_types import (
    Direction,
    GridBoundsError,
    GridConfig,
    Instruction,
    Marker,
    NoCrossingError,
    Orientation,
    Point,
    UnknownCommandError,
)

logger = logging.getLogger(__name__)

InstructionLike = Union[str, Instruction]

# Largest side required_side() will hand out (a 30000x30000 grid is ~900 MB)
MAX_AUTO_SIDE = 30000


# =============================================================================
# Grid Model
# =============================================================================


class WireGrid:
    """
    A square grid of cell markers addressed by logical Points.

    The logical origin sits at (offset, offset) in the backing rows, so wires
    may travel in every direction. Each row is a bytearray of Marker values.
    """

    def __init__(self, side: int, offset: int | None = None) -> None:
        if side <= 0:
            raise ValueError(f"Grid side must be positive, got {side}")
        self.side = side
        self.offset = side // 2 if offset is None else offset
        self.rows = [bytearray(side) for _ in range(side)]

    @property
    def origin(self) -> Point:
        return Point(0, 0)

    def in_bounds(self, point: Point) -> bool:
        col = point.x + self.offset
        row = point.y + self.offset
        return 0 <= col < self.side and 0 <= row < self.side

    def _index(self, point: Point) -> tuple[int, int]:
        if not self.in_bounds(point):
            raise GridBoundsError(
                f"Point ({point.x}, {point.y}) is outside the grid\n"
                f"  Grid: {self.side}x{self.side}, origin offset {self.offset}\n"
                f"  The grid side must cover every wire's excursion from the origin"
            )
        return (point.y + self.offset, point.x + self.offset)

    def __getitem__(self, point: Point) -> Marker:
        row, col = self._index(point)
        return Marker(self.rows[row][col])

    def __setitem__(self, point: Point, marker: Marker) -> None:
        row, col = self._index(point)
        self.rows[row][col] = marker

    def mark_start(self) -> None:
        self[self.origin] = Marker.START

    def count(self, marker: Marker) -> int:
        return sum(row.count(marker) for row in self.rows)

    def extent(self) -> tuple[Point, Point] | None:
        """Return the (top-left, bottom-right) logical corners of all non-empty cells."""
        min_col = min_row = self.side
        max_col = max_row = -1

        for row_idx, row in enumerate(self.rows):
            if not any(row):
                continue
            first = len(row) - len(row.lstrip(b"\x00"))
            last = len(row.rstrip(b"\x00")) - 1
            min_row = min(min_row, row_idx)
            max_row = row_idx
            min_col = min(min_col, first)
            max_col = max(max_col, last)

        if max_row < 0:
            return None
        return (
            Point(min_col - self.offset, min_row - self.offset),
            Point(max_col - self.offset, max_row - self.offset),
        )

    def cells(self) -> Iterator[tuple[Point, Marker]]:
        """Yield every non-empty cell in row-major order."""
        for row_idx, row in enumerate(self.rows):
            if not any(row):
                continue
            for col_idx, value in enumerate(row):
                if value:
                    yield Point(col_idx - self.offset, row_idx - self.offset), Marker(value)


# =============================================================================
# Path Tracer
# =============================================================================


# Pairs not listed leave the marker unchanged
_TRANSITIONS: dict[tuple[Marker, Orientation], Marker] = {
    (Marker.EMPTY, Orientation.LONGITUDINAL): Marker.LONGITUDINAL_MOVE,
    (Marker.EMPTY, Orientation.LATERAL): Marker.LATERAL_MOVE,
    (Marker.LATERAL_MOVE, Orientation.LONGITUDINAL): Marker.PATHS_CROSSED,
    (Marker.LONGITUDINAL_MOVE, Orientation.LATERAL): Marker.PATHS_CROSSED,
}


def transition(old: Marker, orientation: Orientation) -> Marker:
    """Marker a cell holds after a segment of the given orientation passes over it."""
    return _TRANSITIONS.get((old, orientation), old)


def walk(start: int, end: int) -> range:
    """Coordinates from just past start up to and including end, in travel order."""
    step = 1 if end >= start else -1
    return range(start + step, end + step, step)


def _direction(instruction: Instruction) -> Direction:
    try:
        return Direction(instruction.direction)
    except ValueError:
        raise UnknownCommandError(
            f"Command not found: '{instruction.direction}'\n"
            f"  Instruction: {instruction.direction}{instruction.steps}\n"
            f"  Valid directions: U, D, L, R"
        ) from None


def destination(start: Point, instruction: Instruction) -> Point:
    """Point reached by moving instruction.steps cells from start."""
    dx, dy = _direction(instruction).delta
    return Point(start.x + dx * instruction.steps, start.y + dy * instruction.steps)


def move_to(
    grid: WireGrid,
    crossings: list[Point],
    start: Point,
    end: Point,
    preserve_crossings: bool = False,
) -> Point:
    """
    Draw a straight segment from start to end and return end.

    Every cell after start up to and including end is updated through
    transition(); cells that become PATHS_CROSSED are appended to crossings.
    The end cell is then stamped INTERSECTION, except when it holds START, or
    PATHS_CROSSED with preserve_crossings set.

    Raises:
        GridBoundsError: If end lies outside the grid (nothing is drawn)
        ValueError: If the segment is not axis-aligned
    """
    grid[end]  # Bounds check before any cell is written

    if start.x == end.x:
        orientation = Orientation.LONGITUDINAL
        points = (Point(start.x, y) for y in walk(start.y, end.y))
    elif start.y == end.y:
        orientation = Orientation.LATERAL
        points = (Point(x, start.y) for x in walk(start.x, end.x))
    else:
        raise ValueError(f"Diagonal segment from {start} to {end} is not supported")

    for point in points:
        old = grid[point]
        new = transition(old, orientation)
        if new != old:
            grid[point] = new
            if new == Marker.PATHS_CROSSED:
                crossings.append(point)

    # Not every leg actually ends on an intersection
    terminal = grid[end]
    if terminal != Marker.START and not (preserve_crossings and terminal == Marker.PATHS_CROSSED):
        grid[end] = Marker.INTERSECTION

    return end


def _as_instruction(instruction: InstructionLike) -> Instruction:
    if isinstance(instruction, Instruction):
        return instruction
    return parse_instruction(instruction)


def max_excursion(instruction_sets: Sequence[Sequence[InstructionLike]]) -> int:
    """Largest absolute coordinate any wire reaches from the origin."""
    furthest = 0
    for wire in instruction_sets:
        cursor = Point(0, 0)
        for instruction in wire:
            cursor = destination(cursor, _as_instruction(instruction))
            furthest = max(furthest, abs(cursor.x), abs(cursor.y))
    return furthest


def required_side(instruction_sets: Sequence[Sequence[InstructionLike]]) -> int:
    """
    Smallest grid side that fits every wire plus a one-cell border for the BFS.

    Raises:
        GridBoundsError: If the side would exceed MAX_AUTO_SIDE
    """
    excursion = max_excursion(instruction_sets)
    side = 2 * excursion + 3
    if side > MAX_AUTO_SIDE:
        raise GridBoundsError(
            f"Wires reach {excursion} cells from the origin\n"
            f"  Required side: {side}, automatic sizing limit: {MAX_AUTO_SIDE}\n"
            f"  Pass an explicit GridConfig to build a larger grid"
        )
    return side


def build_wires(
    instruction_sets: Sequence[Sequence[InstructionLike]],
    config: GridConfig | None = None,
) -> tuple[WireGrid, list[Point]]:
    """
    Trace every wire onto a fresh grid.

    Args:
        instruction_sets: One sequence of tokens ("R75") or Instructions per wire
        config: Grid settings; sized from the wires' excursion when omitted

    Returns:
        Tuple of (grid, crossings) with crossings in the order they were drawn

    Raises:
        MalformedInstructionError: If a token cannot be parsed
        UnknownCommandError: If a direction is not U, D, L or R
        GridBoundsError: If a wire leaves the configured grid
    """
    wires = [[_as_instruction(instruction) for instruction in wire] for wire in instruction_sets]
    if config is None:
        config = GridConfig(required_side(wires))

    grid = WireGrid(config.side)
    grid.mark_start()
    crossings: list[Point] = []

    for wire_idx, wire in enumerate(wires):
        cursor = grid.origin
        for instruction in wire:
            cursor = move_to(
                grid, crossings, cursor, destination(cursor, instruction), config.preserve_crossings
            )
        logger.debug("build_wires: wire %d ends at (%d, %d)", wire_idx, cursor.x, cursor.y)

    logger.info(
        "build_wires: %d wires, side=%d, crossings=%d",
        len(wires),
        config.side,
        len(crossings),
    )
    return (grid, crossings)


# =============================================================================
# Intersection Analyzer
# =============================================================================


def manhattan_distance(p1: Point, p2: Point) -> int:
    return abs(p1.x - p2.x) + abs(p1.y - p2.y)


def closest_crossing(start: Point, crossings: Sequence[Point]) -> Point:
    """First crossing with the minimum Manhattan distance from start."""
    if not crossings:
        raise NoCrossingError("No crossings were recorded; the wires never cross")
    return min(crossings, key=lambda point: manhattan_distance(start, point))


def find_closest_intersection(start: Point, crossings: Sequence[Point]) -> int:
    """Minimum Manhattan distance from start to any crossing."""
    return manhattan_distance(start, closest_crossing(start, crossings))


# =============================================================================
# BFS Pathfinder
# =============================================================================


_NEIGHBOURS = ((0, 1), (1, 0), (0, -1), (-1, 0))


def bfs(grid: WireGrid) -> int:
    """
    Grid-hop distance from the origin to the nearest PATHS_CROSSED cell.

    Moves are 4-directional and may only pass through marked cells (not
    EMPTY, not START). The count is grid edges, not the wires' own step
    counts. Returns 0 if no crossing is reachable.

    Raises:
        GridBoundsError: If the search steps off the edge of the grid
    """
    origin = grid.origin
    queue: deque[tuple[Point, int]] = deque([(origin, 0)])
    seen = {origin}

    while queue:
        point, steps = queue.popleft()
        for dx, dy in _NEIGHBOURS:
            neighbour = Point(point.x + dx, point.y + dy)
            marker = grid[neighbour]
            if marker == Marker.PATHS_CROSSED:
                return steps + 1
            if marker != Marker.EMPTY and marker != Marker.START and neighbour not in seen:
                seen.add(neighbour)
                queue.append((neighbour, steps + 1))

    logger.warning("bfs: frontier exhausted after %d cells without reaching a crossing", len(seen))
    return 0


# =============================================================================
# Combined Wire Steps
# =============================================================================


def fewest_combined_steps(instruction_sets: Sequence[Sequence[InstructionLike]]) -> int:
    """
    Fewest total wire steps to a cell shared by two or more wires.

    Each wire contributes the steps it took to first reach the cell; the
    origin is never counted. Unlike bfs(), this follows the wires themselves
    and ignores segment orientation.

    Raises:
        NoCrossingError: If no two wires share a cell
    """
    totals: dict[Point, list[int]] = {}

    for wire in instruction_sets:
        first_visit: dict[Point, int] = {}
        cursor = Point(0, 0)
        steps = 0
        for raw in wire:
            instruction = _as_instruction(raw)
            dx, dy = _direction(instruction).delta
            for _ in range(instruction.steps):
                cursor = Point(cursor.x + dx, cursor.y + dy)
                steps += 1
                first_visit.setdefault(cursor, steps)
        for point, count in first_visit.items():
            totals.setdefault(point, []).append(count)

    shared = [sum(counts) for point, counts in totals.items() if len(counts) > 1 and point != Point(0, 0)]
    if not shared:
        raise NoCrossingError("No cell is shared by two wires")
    return min(shared)
