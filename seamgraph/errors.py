"""Exceptions raised by the seam carving core."""


class SeamCarvingError(Exception):
    """Base class for all seamgraph errors."""


class ConstructionError(SeamCarvingError, ValueError):
    """The pixel input cannot form an image (empty, ragged, or not RGB)."""


class DimensionExhaustedError(SeamCarvingError):
    """The dimension a seam would shrink is already 1 pixel wide."""

    def __init__(self, direction: str, size: int):
        super().__init__(f"Cannot remove a {direction} seam: dimension is already {size}")
        self.direction = direction
        self.size = size


class TopologyError(SeamCarvingError, RuntimeError):
    """A seam path or the graph it was applied to is not consistent."""
