"""Distance-vector routing tables computed from a link-cost matrix."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Route:
    """One entry of a node's routing table: the next hop and the total cost."""

    via: int
    distance: int


@dataclass(frozen=True)
class Update:
    """A table change: `source` now reaches `destination` through `via`."""

    source: int
    destination: int
    via: int


def distance_vector(
    matrix: Sequence[Sequence[int]],
) -> tuple[list[list[Route]], list[Update]]:
    """Relax every node's table through every intermediate node, in place.

    Tables are updated in a single pass, so a node's table may already use
    improvements found earlier for other nodes.  Returns the final tables and
    the updates in the order they were made.
    """
    dist = [list(row) for row in matrix]
    size = len(dist)
    if any(len(row) != size for row in dist):
        raise ValueError("cost matrix must be square")

    via = [list(range(size)) for _ in range(size)]
    updates: list[Update] = []
    for source, row in enumerate(dist):
        for destination in range(size):
            for hop, cost_to_hop in enumerate(row):
                candidate = cost_to_hop + dist[hop][destination]
                if row[destination] > candidate:
                    row[destination] = candidate
                    via[source][destination] = hop
                    updates.append(Update(source, destination, hop))

    tables = [
        [Route(hop, distance) for hop, distance in zip(hops, row)]
        for hops, row in zip(via, dist)
    ]
    return tables, updates


def parse_matrix(text: str) -> list[list[int]]:
    """Read a node count followed by that many rows of integer costs."""
    tokens = text.split()
    if not tokens:
        raise ValueError("missing number of nodes")
    size = int(tokens[0])
    if size < 0:
        raise ValueError("number of nodes must not be negative")
    values = [int(token) for token in tokens[1 : 1 + size * size]]
    if len(values) < size * size:
        raise ValueError(
            f"expected {size * size} costs, got {len(values)}"
        )
    return [values[row * size : (row + 1) * size] for row in range(size)]


def format_tables(tables: Sequence[Sequence[Route]]) -> str:
    """Render routing tables, one block per node."""
    lines: list[str] = []
    for node, table in enumerate(tables):
        lines.append(f"State of node {node}")
        lines.extend(
            f"  Node {destination} via node {route.via} has distance {route.distance}"
            for destination, route in enumerate(table)
        )
        lines.append("")
    return "\n".join(lines)


def _format_update(update: Update) -> str:
    return (
        f"Updated distance from {update.source} to {update.destination} "
        f"by going via {update.via}"
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="netlab-dvr",
        description="Compute distance-vector routing tables from a cost matrix "
        "read on standard input (node count, then the matrix).",
    )
    parser.add_argument(
        "-u",
        "--updates",
        action="store_true",
        help="also list every table update as it is made",
    )
    args = parser.parse_args(argv)

    try:
        matrix = parse_matrix(sys.stdin.read())
        tables, updates = distance_vector(matrix)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.updates:
        for update in updates:
            print(_format_update(update))
        print()
    print(format_tables(tables))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())