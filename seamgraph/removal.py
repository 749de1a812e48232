"""
Seam removal by local graph surgery.

A removed pixel's left and right neighbors are linked to each other. When the
seam stepped sideways between two rows, one neighbor also takes over the
vertical slot the removed pixel leaves behind ("slides" into it):

    parent straight above     slide_still   close the horizontal gap
    parent one column right   slide_left    right neighbor moves under node.up
    parent one column left    slide_right   left neighbor moves under node.up

Horizontal seams use the mirrored operations with up/down in place of
left/right. No other node is touched, so a removal costs O(1) per pixel.
"""

import logging
from typing import Callable, Sequence

from .graph import link_horizontal, link_vertical
from .node import NodeStore
from .seam import validate_seam

logger = logging.getLogger(__name__)


def slide_still(store: NodeStore, node: int):
    link_horizontal(store, store.left[node], store.right[node])


def slide_left(store: NodeStore, node: int):
    link_horizontal(store, store.left[node], store.right[node])
    link_vertical(store, store.right[node], store.up[node])


def slide_right(store: NodeStore, node: int):
    link_horizontal(store, store.left[node], store.right[node])
    link_vertical(store, store.left[node], store.up[node])


def slide_still_horizontal(store: NodeStore, node: int):
    link_vertical(store, store.down[node], store.up[node])


def slide_up(store: NodeStore, node: int):
    link_vertical(store, store.down[node], store.up[node])
    link_horizontal(store, store.left[node], store.down[node])


def slide_down(store: NodeStore, node: int):
    link_vertical(store, store.down[node], store.up[node])
    link_horizontal(store, store.left[node], store.up[node])


# Keyed by offset d = path[y - 1] - path[y]; None stands for the first row.
VERTICAL_SLIDES = {None: slide_still, 0: slide_still, 1: slide_left, -1: slide_right}
HORIZONTAL_SLIDES = {None: slide_still_horizontal, 0: slide_still_horizontal,
                     1: slide_up, -1: slide_down}


def _remove_path(store: NodeStore, view, path: Sequence[int], slides: dict):
    # Validate the whole path before the first edit.
    validate_seam(path, view.width, view.height)

    for y, x in enumerate(path):
        offset = None if y == 0 else path[y - 1] - x
        slide: Callable = slides[offset]
        slide(store, view.node(y, x))
        view.delete_in_row(y, x)

    view.commit_width()


def remove_vertical(store: NodeStore, grid, path: Sequence[int]):
    """
    Excise a vertical seam (one column index per row) from graph and grid.

    Raises:
        TopologyError: the path is out of range or not 8-connected
    """
    _remove_path(store, grid, path, VERTICAL_SLIDES)
    logger.debug("Removed vertical seam, width now %d", grid.width)


def remove_horizontal(store: NodeStore, view, path: Sequence[int]):
    """
    Excise a horizontal seam given on a transposed view.

    `path[c]` is the image row removed from image column c. Graph relations
    keep their real orientation, so the up/down slides are used here.

    Raises:
        TopologyError: the path is out of range or not 8-connected
    """
    _remove_path(store, view, path, HORIZONTAL_SLIDES)
    logger.debug("Removed horizontal seam, height now %d", view.width)
