"""
Four-direction adjacency graph over the node arena.

link_horizontal() and link_vertical() are the only functions that change a
relation. Both update the two sides of the edge together and invalidate the
cached energy of every node whose energy formula reads the changed relation.
The border sentinel is never written to.
"""

import logging
from typing import List, Tuple

from .grid import PixelGrid
from .node import BORDER, NodeStore

logger = logging.getLogger(__name__)


def link_horizontal(store: NodeStore, left: int, right: int):
    """Make `right` the right neighbor of `left` (and vice versa)."""
    up, down, invalidate = store.up, store.down, store.invalidate_energy

    if left != BORDER:
        store.right[left] = right
        invalidate(left)
        invalidate(up[left])
        invalidate(down[left])

    if right != BORDER:
        store.left[right] = left
        invalidate(right)
        invalidate(up[right])
        invalidate(down[right])


def link_vertical(store: NodeStore, bottom: int, top: int):
    """Make `top` the up neighbor of `bottom` (and vice versa)."""
    left, right, invalidate = store.left, store.right, store.invalidate_energy

    if bottom != BORDER:
        store.up[bottom] = top
        invalidate(bottom)
        invalidate(left[bottom])
        invalidate(right[bottom])

    if top != BORDER:
        store.down[top] = bottom
        invalidate(top)
        invalidate(left[top])
        invalidate(right[top])


def build_graph(store: NodeStore, grid: PixelGrid):
    """
    Wire up a freshly created grid of detached nodes.

    Walks the rows with a single cursor on the front of the previous row. Each
    node is linked to its left neighbor and to the node above it, which is
    reached as "the up-neighbor of my left neighbor, then one step right".
    Outward relations of boundary nodes stay on the border sentinel.
    """
    front_of_row = BORDER
    for y in range(grid.height):
        new_front = grid.node(y, 0)
        link_vertical(store, new_front, front_of_row)
        front_of_row = new_front

        pixel = new_front
        for x in range(1, grid.width):
            next_pixel = grid.node(y, x)
            link_horizontal(store, pixel, next_pixel)
            link_vertical(store, next_pixel, store.right[store.up[pixel]])
            pixel = next_pixel

    logger.debug("Built pixel graph: %d x %d", grid.width, grid.height)


def expected_neighbors(grid: PixelGrid, y: int, x: int) -> Tuple[int, int, int, int]:
    """(up, down, left, right) implied by array adjacency in the grid."""
    up = grid.node(y - 1, x) if y > 0 else BORDER
    down = grid.node(y + 1, x) if y < grid.height - 1 else BORDER
    left = grid.node(y, x - 1) if x > 0 else BORDER
    right = grid.node(y, x + 1) if x < grid.width - 1 else BORDER
    return up, down, left, right


def check_adjacency(store: NodeStore, grid: PixelGrid) -> List[str]:
    """
    Compare every node's relations with its position in the grid.

    Returns:
        Human-readable violations; empty when the graph is consistent.
    """
    problems = []
    names = ('up', 'down', 'left', 'right')

    if len(grid.rows) != grid.height:
        return [f"grid has {len(grid.rows)} rows, expected {grid.height}"]
    for y, row in enumerate(grid.rows):
        if len(row) != grid.width:
            problems.append(f"row {y} has {len(row)} entries, expected {grid.width}")
    if problems:
        return problems

    for y in range(grid.height):
        for x in range(grid.width):
            node = grid.node(y, x)
            actual = store.neighbors(node)
            expected = expected_neighbors(grid, y, x)
            for name, got, want in zip(names, actual, expected):
                if got != want:
                    problems.append(f"({y}, {x}).{name} is node {got}, expected {want}")

    if store.neighbors(BORDER) != (BORDER, BORDER, BORDER, BORDER):
        problems.append("border sentinel relations were modified")

    return problems
