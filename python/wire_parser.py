"""
Instruction parsing utilities for crosswire.

Wire instructions are tokens such as "U10": a direction character followed
immediately by a non-negative decimal step count. A wire is one line of
tokens separated by a delimiter (comma by default).
"""

from __future__ import annotations

import logging
from pathlib import Path

from wire_types import Instruction, MalformedInstructionError, Wire

__all__ = ["parse_instruction", "parse_wire", "parse_wires", "read_wires"]

logger = logging.getLogger(__name__)


def parse_instruction(token: str) -> Instruction:
    """
    Parse a single instruction token.

    Only the step count is validated here. The direction character is kept
    as-is and checked when the destination is computed.

    Examples:
        "R40" -> Instruction("R", 40)
        "U300202" -> Instruction("U", 300202)

    Raises:
        MalformedInstructionError: If the token is empty or its suffix is not
            a non-negative decimal integer
    """
    if not token:
        raise MalformedInstructionError("Empty instruction token")

    direction, digits = token[0], token[1:]
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise MalformedInstructionError(
            f"Invalid instruction: '{token}'\n"
            f"  Step count: '{digits}'\n"
            f"  Expected a direction character followed by a non-negative integer (e.g., 'R40')"
        )

    return Instruction(direction, int(digits))


def parse_wire(line: str, delimiter: str = ",") -> Wire:
    """Parse one line of delimited tokens into a wire."""
    return [parse_instruction(token.strip()) for token in line.split(delimiter)]


def parse_wires(text: str, delimiter: str = ",") -> list[Wire]:
    """
    Parse a block of text into wires, one per non-blank line.

    Args:
        text: Line-oriented instruction text
        delimiter: Token separator within a line

    Returns:
        List of wires in line order
    """
    wires: list[Wire] = []

    for line_idx, line in enumerate(text.splitlines()):
        if not line.strip():
            continue
        try:
            wires.append(parse_wire(line, delimiter))
        except MalformedInstructionError as e:
            raise MalformedInstructionError(f"Line {line_idx + 1}: {e}") from e

    return wires


def read_wires(path: str | Path, delimiter: str = ",") -> list[Wire]:
    """Read and parse wires from a text file."""
    path = Path(path)
    wires = parse_wires(path.read_text(), delimiter)
    logger.info("read_wires: %d wires from %s", len(wires), path)
    return wires
