"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

The graph energy reads only relations, never positions: for a node p,

    horiz = b(p.left.up) + 2 b(p.left) + b(p.left.down)
          - (b(p.right.up) + 2 b(p.right) + b(p.right.down))
    vert  = b(p.up.left) + 2 b(p.up) + b(p.up.right)
          - (b(p.down.left) + 2 b(p.down) + b(p.down.right))
    E(p)  = sqrt(horiz^2 + vert^2)

where b is brightness and the border sentinel contributes 0. This is a Sobel
operator on the brightness image with zero padding, which is what the torch
functions below compute for whole images at once.
"""

import math

import torch
import torch.nn.functional as F

from .node import BORDER, NodeStore

# Each gradient is bounded by 4, so the magnitude is bounded by sqrt(32).
MAX_ENERGY = math.sqrt(32)


def horizontal_gradient(store: NodeStore, node: int) -> float:
    up, down, b = store.up, store.down, store.brightness
    left = store.left[node]
    right = store.right[node]
    return (
        b(up[left]) + 2 * b(left) + b(down[left])
        - (b(up[right]) + 2 * b(right) + b(down[right]))
    )


def vertical_gradient(store: NodeStore, node: int) -> float:
    left, right, b = store.left, store.right, store.brightness
    up = store.up[node]
    down = store.down[node]
    return (
        b(left[up]) + 2 * b(up) + b(right[up])
        - (b(left[down]) + 2 * b(down) + b(right[down]))
    )


def pixel_energy(store: NodeStore, node: int) -> float:
    """
    Energy of one node, served from the cache when it is still valid.

    Args:
        store: Node arena
        node: Node index

    Returns:
        Gradient magnitude in [0, MAX_ENERGY]
    """
    if node == BORDER:
        return 0.0
    cached = store.cached_energy(node)
    if cached is not None:
        return cached
    h = horizontal_gradient(store, node)
    v = vertical_gradient(store, node)
    value = math.sqrt(h * h + v * v)
    store.store_energy(node, value)
    return value


def energy_to_gray(energy: float) -> int:
    """Map an energy value to an 8-bit gray level for display."""
    level = int(energy / MAX_ENERGY * 255)
    return max(0, min(255, level))


def brightness_map(image: torch.Tensor) -> torch.Tensor:
    """
    Per-pixel brightness (R+G+B)/765 of an 8-bit RGB image.

    Args:
        image: Integer RGB tensor (H, W, 3) with values in 0..255

    Returns:
        Brightness map (H, W) in float64
    """
    if image.dim() != 3 or image.shape[-1] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {tuple(image.shape)}")
    return image.to(torch.float64).sum(dim=-1) / 765.0


def sobel_energy(brightness: torch.Tensor) -> torch.Tensor:
    """
    Sobel gradient magnitude with zero padding.

    Matches pixel_energy() on an image whose graph satisfies the adjacency
    invariant, so it serves as the vectorised reference for the cache.

    Args:
        brightness: Brightness map (H, W)

    Returns:
        Energy map (H, W)
    """
    gray = brightness.unsqueeze(0).unsqueeze(0)

    sobel_x = torch.tensor([[-1, 0, 1],
                            [-2, 0, 2],
                            [-1, 0, 1]], dtype=gray.dtype, device=gray.device)
    sobel_x = sobel_x.view(1, 1, 3, 3)

    sobel_y = torch.tensor([[-1, -2, -1],
                            [ 0,  0,  0],
                            [ 1,  2,  1]], dtype=gray.dtype, device=gray.device)
    sobel_y = sobel_y.view(1, 1, 3, 3)

    grad_x = F.conv2d(gray, sobel_x, padding=1)
    grad_y = F.conv2d(gray, sobel_y, padding=1)

    energy = torch.sqrt(grad_x ** 2 + grad_y ** 2)
    return energy.squeeze(0).squeeze(0)
