"""
Graph-based seam carving.

Pixels live in a four-direction adjacency graph. Each seam removal finds the
minimum-energy path by dynamic programming, then deletes it with local
pointer rewiring instead of rebuilding the image. Horizontal seams reuse the
vertical machinery through a transposed view of the backing grid.
"""

__version__ = "0.1.0"

from .node import BORDER, NodeStore, pack_rgb, unpack_rgb
from .energy import pixel_energy, brightness_map, sobel_energy, energy_to_gray, MAX_ENERGY
from .grid import PixelGrid, TransposedView
from .graph import link_horizontal, link_vertical, build_graph, check_adjacency
from .seam import find_seam, seam_cost, validate_seam
from .removal import remove_vertical, remove_horizontal
from .carving import (
    VERTICAL,
    HORIZONTAL,
    ImageGraph,
    build_image,
    remove_seam,
    read_pixels,
    dimensions,
    highlight_seam,
    carve,
    carve_to_size,
    choose_direction,
)
from .io import load_image, save_image, image_to_tensor, tensor_to_image, save_animation
from .errors import (
    SeamCarvingError,
    ConstructionError,
    DimensionExhaustedError,
    TopologyError,
)

__all__ = [
    'BORDER',
    'NodeStore',
    'pack_rgb',
    'unpack_rgb',
    'pixel_energy',
    'brightness_map',
    'sobel_energy',
    'energy_to_gray',
    'MAX_ENERGY',
    'PixelGrid',
    'TransposedView',
    'link_horizontal',
    'link_vertical',
    'build_graph',
    'check_adjacency',
    'find_seam',
    'seam_cost',
    'validate_seam',
    'remove_vertical',
    'remove_horizontal',
    'VERTICAL',
    'HORIZONTAL',
    'ImageGraph',
    'build_image',
    'remove_seam',
    'read_pixels',
    'dimensions',
    'highlight_seam',
    'carve',
    'carve_to_size',
    'choose_direction',
    'SeamCarvingError',
    'ConstructionError',
    'DimensionExhaustedError',
    'TopologyError',
    'load_image',
    'save_image',
    'image_to_tensor',
    'tensor_to_image',
    'save_animation',
]
