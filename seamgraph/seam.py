"""
Seam computation.

find_seam() is the classic forward dynamic program over the current energy
field. It runs on anything that exposes `width`, `height` and `node(y, x)`:
a PixelGrid for vertical seams, or a TransposedView for horizontal ones.
"""

from typing import List, Sequence

from .energy import pixel_energy
from .errors import TopologyError
from .node import NodeStore


def find_seam(store: NodeStore, view) -> List[int]:
    """
    Minimum-energy 8-connected top-to-bottom path.

    Each row picks the cheapest of the three parents above it; on exact ties
    the straight-up parent wins, then the up-left one, then the up-right one.
    The bottom-row end point is the leftmost minimum.

    Args:
        store: Node arena holding the energy caches
        view: PixelGrid or TransposedView

    Returns:
        One column index per row, top to bottom
    """
    H, W = view.height, view.width
    node = view.node

    costs = [pixel_energy(store, node(0, x)) for x in range(W)]
    parents = [[0] * W for _ in range(H)]

    for y in range(1, H):
        row_costs = [0.0] * W
        row_parents = parents[y]
        for x in range(W):
            energy = pixel_energy(store, node(y, x))

            best = x
            best_cost = costs[x]
            if x > 0 and costs[x - 1] < best_cost:
                best = x - 1
                best_cost = costs[x - 1]
            if x < W - 1 and costs[x + 1] < best_cost:
                best = x + 1
                best_cost = costs[x + 1]

            row_costs[x] = energy + best_cost
            row_parents[x] = best
        costs = row_costs

    end = 0
    for x in range(1, W):
        if costs[x] < costs[end]:
            end = x

    path = [0] * H
    x = end
    for y in range(H - 1, -1, -1):
        path[y] = x
        x = parents[y][x]
    return path


def seam_cost(store: NodeStore, view, path: Sequence[int]) -> float:
    """Total energy along a path."""
    return sum(pixel_energy(store, view.node(y, x)) for y, x in enumerate(path))


def validate_seam(path: Sequence[int], width: int, height: int = None):
    """
    Check that a path is a legal seam for a view of the given size.

    Raises:
        TopologyError: wrong length, index out of range, or a jump of more
            than one column between consecutive rows
    """
    if height is not None and len(path) != height:
        raise TopologyError(f"Seam has {len(path)} entries, expected {height}")
    for i, x in enumerate(path):
        if not 0 <= x < width:
            raise TopologyError(f"Seam index {x} at row {i} is outside [0, {width})")
        if i > 0 and abs(x - path[i - 1]) > 1:
            raise TopologyError(
                f"Seam is not 8-connected between rows {i - 1} and {i}: "
                f"{path[i - 1]} -> {x}")
