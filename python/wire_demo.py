#!/usr/bin/env python3
"""
Command-line entry point for crosswire.

Reads one wire per line from a text file and prints the Manhattan distance to
the closest crossing followed by the BFS grid-hop distance to a crossing.
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ascii_render import render
from crosswire import (
    bfs,
    build_wires,
    closest_crossing,
    fewest_combined_steps,
    manhattan_distance,
    required_side,
)
from wire_parser import read_wires
from wire_types import GridConfig, NoCrossingError, WireError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find where wires cross on a grid.")
    parser.add_argument("path", help="text file with one wire per line")
    parser.add_argument("--delimiter", default=",", help="token separator (default ',')")
    parser.add_argument("--side", type=int, default=None, help="grid side length (default: fit the wires)")
    parser.add_argument(
        "--preserve-crossings",
        action="store_true",
        help="do not let a leg's terminal marker overwrite a crossing",
    )
    parser.add_argument(
        "--combined-steps",
        action="store_true",
        help="also print the fewest combined wire steps to a shared cell",
    )
    parser.add_argument("--render", action="store_true", help="draw the grid")
    parser.add_argument("--max-size", type=int, default=120, help="render window size (default 120)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress")
    return parser.parse_args(argv)


def run(args: argparse.Namespace, console: Console) -> None:
    wires = read_wires(args.path, args.delimiter)
    side = args.side if args.side is not None else required_side(wires)
    grid, crossings = build_wires(wires, GridConfig(side, args.preserve_crossings))

    if not crossings:
        raise NoCrossingError(f"The {len(wires)} wires in {args.path} never cross")

    origin = grid.origin
    closest = closest_crossing(origin, crossings)
    hops = bfs(grid)
    if hops == 0:
        raise NoCrossingError(
            f"No crossing in {args.path} is reachable by the grid search\n"
            f"  Recorded crossings: {len(crossings)}, all overwritten by leg end markers\n"
            f"  Try --preserve-crossings"
        )

    answers = [manhattan_distance(origin, closest), hops]
    if args.combined_steps:
        answers.append(fewest_combined_steps(wires))
    for answer in answers:
        print(answer)

    if args.render:
        picture = Text.from_ansi(render(grid, highlight=closest, max_size=args.max_size))
        console.print(Panel(picture, title=f"crosswire - {args.path}", border_style="green"))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        run(args, Console())
    except (WireError, OSError) as e:
        Console(stderr=True).print(Text(f"error: {e}", style="bold red"), soft_wrap=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
