"""Shared test fixtures for the seamgraph test suite."""

import math
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import torch
import pytest
from seamgraph.carving import build_image

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


@pytest.fixture
def checkerboard():
    """4x4 black/white checkerboard, black at (0, 0)."""
    return make_checkerboard(4, 4)


@pytest.fixture
def random_image():
    """Seeded 6x5 random RGB image wrapped in a graph."""
    return build_image(make_random_pixels(6, 5, seed=7), validate=True)


def make_checkerboard(H, W):
    """Black where (x + y) is even, white where it is odd."""
    pixels = np.zeros((H, W, 3), dtype=np.uint8)
    for y in range(H):
        for x in range(W):
            if (x + y) % 2 == 1:
                pixels[y, x] = WHITE
    return pixels


def make_random_pixels(H, W, seed=0):
    torch.manual_seed(seed)
    return torch.randint(0, 256, (H, W, 3), dtype=torch.uint8).numpy()


def reference_energy(pixels):
    """Sobel energy computed straight from array positions with zero padding."""
    H, W = pixels.shape[:2]
    bright = [[(int(p[0]) + int(p[1]) + int(p[2])) / 765.0 for p in row] for row in pixels]

    def b(y, x):
        if 0 <= y < H and 0 <= x < W:
            return bright[y][x]
        return 0.0

    energy = [[0.0] * W for _ in range(H)]
    for y in range(H):
        for x in range(W):
            h = (b(y - 1, x - 1) + 2 * b(y, x - 1) + b(y + 1, x - 1)
                 - (b(y - 1, x + 1) + 2 * b(y, x + 1) + b(y + 1, x + 1)))
            v = (b(y - 1, x - 1) + 2 * b(y - 1, x) + b(y - 1, x + 1)
                 - (b(y + 1, x - 1) + 2 * b(y + 1, x) + b(y + 1, x + 1)))
            energy[y][x] = math.sqrt(h * h + v * v)
    return energy


def reference_horizontal_seam(pixels):
    """Left-to-right DP over columns, no transposition involved.

    Ties prefer the same row, then the row above, then the row below.
    """
    energy = reference_energy(pixels)
    H, W = pixels.shape[:2]

    costs = [energy[r][0] for r in range(H)]
    parents = [[0] * H for _ in range(W)]
    for c in range(1, W):
        new_costs = [0.0] * H
        for r in range(H):
            best, best_cost = r, costs[r]
            if r > 0 and costs[r - 1] < best_cost:
                best, best_cost = r - 1, costs[r - 1]
            if r < H - 1 and costs[r + 1] < best_cost:
                best, best_cost = r + 1, costs[r + 1]
            new_costs[r] = energy[r][c] + best_cost
            parents[c][r] = best
        costs = new_costs

    end = min(range(H), key=lambda r: (costs[r], r))
    path = [0] * W
    r = end
    for c in range(W - 1, -1, -1):
        path[c] = r
        r = parents[c][r]
    return path


def reference_remove_horizontal(pixels):
    """Find and delete one horizontal seam directly on the pixel array."""
    path = reference_horizontal_seam(pixels)
    H, W = pixels.shape[:2]
    carved = np.zeros((H - 1, W, 3), dtype=pixels.dtype)
    for c in range(W):
        carved[:, c] = np.delete(pixels[:, c], path[c], axis=0)
    return carved


def random_path(length, width, seed=0):
    """A random 8-connected path of `length` steps inside [0, width)."""
    gen = torch.Generator().manual_seed(seed)
    x = int(torch.randint(0, width, (1,), generator=gen).item())
    path = [x]
    for _ in range(length - 1):
        step = int(torch.randint(-1, 2, (1,), generator=gen).item())
        x = min(width - 1, max(0, x + step))
        path.append(x)
    return path
