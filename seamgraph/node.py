"""
Pixel node store.

Every pixel is a node in an arena, addressed by a stable integer index.
A node carries its packed 24-bit color, a brightness cache, an energy cache
and four directional relations (up, down, left, right) that are themselves
node indices.

Index 0 is the border sentinel: it stands for "off the edge of the image",
has brightness 0 and energy 0, and all four of its relations point back to
itself. Each store owns its own sentinel, so it never outlives the image.
"""

from typing import Optional, Tuple

BORDER = 0


def pack_rgb(r: int, g: int, b: int) -> int:
    """Pack three 0..255 channels into a 24-bit color."""
    return ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def unpack_rgb(color: int) -> Tuple[int, int, int]:
    """Split a 24-bit color into (r, g, b)."""
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


class NodeStore:
    """
    Arena of pixel nodes.

    Relations are stored in four parallel lists so that a relation lookup is a
    plain list index. Removed nodes stay in the arena; they are simply no
    longer referenced by the backing grid.
    """

    def __init__(self):
        self.color = [0]
        self.up = [BORDER]
        self.down = [BORDER]
        self.left = [BORDER]
        self.right = [BORDER]
        self._brightness: list = [0.0]
        self._energy = [0.0]
        self._energy_valid = [True]

    def __len__(self) -> int:
        """Number of real (non-sentinel) nodes ever created."""
        return len(self.color) - 1

    def create(self, color: int) -> int:
        """Create a detached node; all four relations point to the border."""
        self.color.append(int(color) & 0xFFFFFF)
        self.up.append(BORDER)
        self.down.append(BORDER)
        self.left.append(BORDER)
        self.right.append(BORDER)
        self._brightness.append(None)
        self._energy.append(0.0)
        self._energy_valid.append(False)
        return len(self.color) - 1

    def brightness(self, node: int) -> float:
        """Mean channel intensity in [0, 1], computed on first access."""
        value = self._brightness[node]
        if value is None:
            r, g, b = unpack_rgb(self.color[node])
            value = (r + g + b) / 765.0
            self._brightness[node] = value
        return value

    def cached_energy(self, node: int) -> Optional[float]:
        """Cached energy, or None when the cache is stale."""
        if self._energy_valid[node]:
            return self._energy[node]
        return None

    def store_energy(self, node: int, value: float):
        if node == BORDER:
            return
        self._energy[node] = value
        self._energy_valid[node] = True

    def invalidate_energy(self, node: int):
        # The sentinel's energy is permanently valid at 0.
        if node != BORDER:
            self._energy_valid[node] = False

    def is_energy_valid(self, node: int) -> bool:
        return self._energy_valid[node]

    def neighbors(self, node: int) -> Tuple[int, int, int, int]:
        """(up, down, left, right) of a node."""
        return self.up[node], self.down[node], self.left[node], self.right[node]
