"""
Shared type definitions for the crosswire system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class Direction(Enum):
    """Instruction direction, screen convention (y grows downward)."""

    U = "U"  # Up (decreasing y)
    D = "D"  # Down (increasing y)
    L = "L"  # Left (decreasing x)
    R = "R"  # Right (increasing x)

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]


_DELTAS = {
    Direction.U: (0, -1),
    Direction.D: (0, 1),
    Direction.L: (-1, 0),
    Direction.R: (1, 0),
}


class Orientation(Enum):
    """Axis a wire segment runs along."""

    LONGITUDINAL = "longitudinal"  # Vertical segment
    LATERAL = "lateral"  # Horizontal segment


class Marker(IntEnum):
    """Cell marker. Stored as a byte, so EMPTY must stay 0."""

    EMPTY = 0
    START = 1
    INTERSECTION = 2  # Terminal stamp at the end of every leg
    LONGITUDINAL_MOVE = 3
    LATERAL_MOVE = 4
    PATHS_CROSSED = 5


# =============================================================================
# Coordinates and Instructions
# =============================================================================


@dataclass(frozen=True)
class Point:
    """A logical (offset-free) grid coordinate."""

    x: int
    y: int


@dataclass(frozen=True)
class Instruction:
    """A parsed wire instruction. The direction is validated lazily."""

    direction: str
    steps: int


@dataclass(frozen=True)
class GridConfig:
    """Settings for a wire build."""

    side: int
    preserve_crossings: bool = False  # Keep PATHS_CROSSED under a leg's terminal stamp


Wire = list[Instruction]


# =============================================================================
# Errors
# =============================================================================


class WireError(Exception):
    """Base class for every crosswire failure."""


class MalformedInstructionError(WireError, ValueError):
    """An instruction token could not be interpreted."""


class UnknownCommandError(MalformedInstructionError):
    """An instruction's direction is not one of U, D, L, R."""


class GridBoundsError(WireError, IndexError):
    """A coordinate fell outside the fixed grid extent."""


class NoCrossingError(WireError):
    """The wires never cross."""
