"""
High-level carving functions that orchestrate graph-based seam removal.

An ImageGraph owns one node arena and one backing grid. Vertical seams run
directly on the grid; horizontal seams run the same seam finder on a
transposed view of the grid and rewire the graph with the up/down slides.
The graph relations themselves are never transposed.
"""

import logging
from typing import Callable, List, Optional, Tuple

import numpy as np
import torch

from .energy import energy_to_gray, pixel_energy
from .errors import ConstructionError, DimensionExhaustedError, TopologyError
from .graph import build_graph, check_adjacency
from .grid import PixelGrid
from .node import NodeStore, unpack_rgb
from .removal import remove_horizontal, remove_vertical
from .seam import find_seam, seam_cost

logger = logging.getLogger(__name__)

VERTICAL = 'vertical'
HORIZONTAL = 'horizontal'
DIRECTIONS = (VERTICAL, HORIZONTAL)
POLICIES = ('vertical-first', 'alternating', 'random')

SeamCoords = List[Tuple[int, int]]


def _check_direction(direction: str):
    if direction not in DIRECTIONS:
        raise ValueError(f"Invalid direction: {direction}")


class ImageGraph:
    """
    A carvable image: pixel nodes, their adjacency graph and the backing grid.

    Args:
        store: Node arena
        grid: Backing grid of node indices, already wired by build_graph()
        validate: Re-check the adjacency invariant after every removal
    """

    def __init__(self, store: NodeStore, grid: PixelGrid, validate: bool = False):
        self.store = store
        self.grid = grid
        self.validate = validate

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def dimensions(self) -> Tuple[int, int]:
        return self.grid.width, self.grid.height

    def _find(self, direction: str):
        if direction == VERTICAL:
            view = self.grid
        else:
            view = self.grid.transposed()
        return view, find_seam(self.store, view)

    @staticmethod
    def _to_image_coords(direction: str, path: List[int]) -> SeamCoords:
        if direction == VERTICAL:
            return [(y, x) for y, x in enumerate(path)]
        return [(y, x) for x, y in enumerate(path)]

    def preview_seam(self, direction: str = VERTICAL) -> SeamCoords:
        """The seam remove_seam() would take next, as (row, col) pairs."""
        _check_direction(direction)
        _, path = self._find(direction)
        return self._to_image_coords(direction, path)

    def remove_seam(self, direction: str = VERTICAL) -> SeamCoords:
        """
        Remove one seam and shrink the image by one column or row.

        Args:
            direction: 'vertical' (width shrinks) or 'horizontal' (height shrinks)

        Returns:
            The removed pixels as (row, col) pairs in pre-removal coordinates

        Raises:
            DimensionExhaustedError: the dimension is already 1; nothing changes
        """
        _check_direction(direction)
        size = self.grid.width if direction == VERTICAL else self.grid.height
        if size <= 1:
            raise DimensionExhaustedError(direction, size)

        view, path = self._find(direction)
        if logger.isEnabledFor(logging.DEBUG):
            cost = seam_cost(self.store, view, path)
        else:
            cost = float('nan')

        if direction == VERTICAL:
            remove_vertical(self.store, view, path)
        else:
            remove_horizontal(self.store, view, path)

        logger.debug("Removed %s seam (cost %.4f), size now %d x %d",
                     direction, cost, self.grid.width, self.grid.height)

        if self.validate:
            self.check()
        return self._to_image_coords(direction, path)

    def check(self):
        """
        Raises:
            TopologyError: some relation disagrees with the grid layout
        """
        problems = check_adjacency(self.store, self.grid)
        if problems:
            shown = '; '.join(problems[:5])
            raise TopologyError(f"{len(problems)} adjacency violations: {shown}")

    def colors(self) -> np.ndarray:
        """Packed 24-bit colors (H, W)."""
        color = self.store.color
        return np.array([[color[n] for n in row] for row in self.grid.rows],
                        dtype=np.uint32).reshape(self.grid.height, self.grid.width)

    def read_pixels(self) -> np.ndarray:
        """Current colors as an (H, W, 3) uint8 array."""
        packed = self.colors()
        return np.stack([(packed >> 16) & 0xFF,
                         (packed >> 8) & 0xFF,
                         packed & 0xFF], axis=-1).astype(np.uint8)

    def energy_map(self) -> torch.Tensor:
        """Cached per-pixel energies (H, W)."""
        store = self.store
        return torch.tensor([[pixel_energy(store, n) for n in row] for row in self.grid.rows],
                            dtype=torch.float64).reshape(self.grid.height, self.grid.width)

    def energy_pixels(self) -> np.ndarray:
        """Energy rendered as a gray (H, W, 3) uint8 image."""
        store = self.store
        gray = np.array([[energy_to_gray(pixel_energy(store, n)) for n in row]
                         for row in self.grid.rows], dtype=np.uint8)
        gray = gray.reshape(self.grid.height, self.grid.width)
        return np.repeat(gray[:, :, None], 3, axis=2)


def _pack_pixels(pixels) -> np.ndarray:
    """Normalise (H, W, 3) channels or (H, W) packed colors to packed int64."""
    try:
        arr = np.asarray(pixels)
    except ValueError as ex:
        raise ConstructionError(f"Pixels are not a rectangular array: {ex}") from ex

    if arr.dtype == object:
        raise ConstructionError("Pixels are not a rectangular array")
    if arr.size and arr.dtype.kind not in 'iub':
        raise ConstructionError(
            f"Expected integer color values, got dtype {arr.dtype}; "
            f"convert float images with tensor_to_image() first")

    if arr.ndim == 3 and arr.shape[-1] == 3:
        channels = arr.astype(np.int64)
        if channels.size and (channels.min() < 0 or channels.max() > 255):
            raise ConstructionError("Channel values must be in 0..255")
        return (channels[..., 0] << 16) | (channels[..., 1] << 8) | channels[..., 2]
    if arr.ndim == 2:
        packed = arr.astype(np.int64)
        if packed.size and (packed.min() < 0 or packed.max() > 0xFFFFFF):
            raise ConstructionError("Packed colors must be in 0..0xFFFFFF")
        return packed
    raise ConstructionError(
        f"Expected an (H, W, 3) RGB array or (H, W) packed colors, got shape {arr.shape}")


def build_image(pixels, validate: bool = False) -> ImageGraph:
    """
    Create the node store and adjacency graph for a rectangular image.

    Args:
        pixels: (H, W, 3) array-like of 0..255 ints, or (H, W) packed 24-bit colors
        validate: Re-check the adjacency invariant after every removal

    Returns:
        ImageGraph ready for seam removal

    Raises:
        ConstructionError: empty, ragged or non-RGB input
    """
    packed = _pack_pixels(pixels)
    H, W = packed.shape
    if H <= 0 or W <= 0:
        raise ConstructionError(f"Image must be at least 1x1, got {W}x{H}")

    store = NodeStore()
    grid = PixelGrid([[store.create(c) for c in row] for row in packed.tolist()])
    build_graph(store, grid)
    return ImageGraph(store, grid, validate=validate)


def remove_seam(image: ImageGraph, direction: str = VERTICAL) -> SeamCoords:
    """Remove one seam from `image`; see ImageGraph.remove_seam()."""
    return image.remove_seam(direction)


def read_pixels(image: ImageGraph) -> np.ndarray:
    return image.read_pixels()


def dimensions(image: ImageGraph) -> Tuple[int, int]:
    """(width, height) of the image in its current state."""
    return image.dimensions()


def highlight_seam(pixels: np.ndarray, coords: SeamCoords,
                   color: int = 0xFF0000) -> np.ndarray:
    """Copy of `pixels` with the seam painted in `color`."""
    out = np.array(pixels, dtype=np.uint8, copy=True)
    rgb = unpack_rgb(color)
    for y, x in coords:
        out[y, x] = rgb
    return out


StepCallback = Callable[[int, str, SeamCoords], None]


def carve(image: ImageGraph, n_vertical: int = 0, n_horizontal: int = 0,
          on_step: Optional[StepCallback] = None) -> ImageGraph:
    """
    Remove vertical seams, then horizontal seams.

    Stops early in a direction once that dimension reaches 1 pixel.

    Args:
        image: Image to carve in place
        n_vertical: Number of vertical seams to remove
        n_horizontal: Number of horizontal seams to remove
        on_step: Called as on_step(step, direction, coords) after each removal

    Returns:
        The same image, for chaining
    """
    step = 0
    for direction, count in ((VERTICAL, n_vertical), (HORIZONTAL, n_horizontal)):
        for _ in range(count):
            size = image.width if direction == VERTICAL else image.height
            if size <= 1:
                logger.debug("Stopping %s seams early at size 1", direction)
                break
            coords = image.remove_seam(direction)
            step += 1
            if on_step is not None:
                on_step(step, direction, coords)
    return image


def choose_direction(policy: str, remaining_w: int, remaining_h: int,
                     step: int, generator: Optional[torch.Generator] = None) -> str:
    """
    Pick the next seam direction toward a target size.

    Policies:
        vertical-first: all vertical seams, then all horizontal ones
        alternating: vertical on even steps, horizontal on odd ones
        random: vertical with probability remaining_w / (remaining_w + remaining_h)
    """
    if remaining_w <= 0:
        return HORIZONTAL
    if remaining_h <= 0:
        return VERTICAL

    if policy == 'vertical-first':
        return VERTICAL
    if policy == 'alternating':
        return VERTICAL if step % 2 == 0 else HORIZONTAL
    if policy == 'random':
        draw = torch.rand(1, generator=generator).item()
        return VERTICAL if draw < remaining_w / (remaining_w + remaining_h) else HORIZONTAL
    raise ValueError(f"Invalid policy: {policy!r}. Must be one of {POLICIES}.")


def carve_to_size(image: ImageGraph, width: Optional[int] = None,
                  height: Optional[int] = None, policy: str = 'vertical-first',
                  seed: Optional[int] = None,
                  on_step: Optional[StepCallback] = None) -> ImageGraph:
    """
    Shrink an image to (width, height) one seam at a time.

    Args:
        image: Image to carve in place
        width: Target width (None keeps the current width)
        height: Target height (None keeps the current height)
        policy: Direction policy, see choose_direction()
        seed: Seed for the 'random' policy
        on_step: Called as on_step(step, direction, coords) after each removal

    Returns:
        The same image, for chaining
    """
    if policy not in POLICIES:
        raise ValueError(f"Invalid policy: {policy!r}. Must be one of {POLICIES}.")

    target_w = image.width if width is None else width
    target_h = image.height if height is None else height
    if not 1 <= target_w <= image.width or not 1 <= target_h <= image.height:
        raise ValueError(
            f"Target size {target_w}x{target_h} must be between 1x1 and the "
            f"current size {image.width}x{image.height}; seam insertion is not supported")

    generator = None
    if policy == 'random':
        generator = torch.Generator()
        if seed is not None:
            generator.manual_seed(seed)
        else:
            generator.seed()

    step = 0
    while image.width > target_w or image.height > target_h:
        direction = choose_direction(policy, image.width - target_w,
                                     image.height - target_h, step, generator)
        coords = image.remove_seam(direction)
        step += 1
        if on_step is not None:
            on_step(step, direction, coords)
    return image
