"""
Backing index over the node arena.

PixelGrid is the only structure that knows the image width and height. It
holds one list of node indices per row and supports removing one entry per
row (vertical seam) or one entry per column (horizontal seam).

TransposedView swaps row/column addressing over the same grid without
copying it, so the vertical seam machinery can run on horizontal seams.
"""

from typing import List, Sequence


class PixelGrid:
    """
    Row-major grid of node indices.

    A seam removal happens in two steps: one delete per row (or column) while
    the graph is being rewired, then a commit that shrinks the dimension.
    """

    def __init__(self, rows: Sequence[Sequence[int]]):
        self.rows: List[List[int]] = [list(row) for row in rows]
        self.height = len(self.rows)
        self.width = len(self.rows[0]) if self.rows else 0

    def node(self, y: int, x: int) -> int:
        return self.rows[y][x]

    def __iter__(self):
        for row in self.rows:
            yield from row

    def delete_in_row(self, y: int, x: int):
        """Drop entry x from row y, shifting the rest of the row left."""
        del self.rows[y][x]

    def delete_in_column(self, x: int, y: int):
        """Drop entry y from column x, shifting the rest of the column up."""
        rows = self.rows
        for r in range(y, self.height - 1):
            rows[r][x] = rows[r + 1][x]

    def commit_width(self):
        """Finish a vertical seam: every row has lost exactly one entry."""
        self.width -= 1

    def commit_height(self):
        """Finish a horizontal seam: the last row now only holds stale entries."""
        self.rows.pop()
        self.height -= 1

    def transposed(self) -> 'TransposedView':
        return TransposedView(self)


class TransposedView:
    """
    Index-remapping wrapper: view.node(y, x) is grid.node(x, y).

    View rows are image columns, so "delete x from view row y" removes the
    node at image row x of image column y.
    """

    def __init__(self, grid: PixelGrid):
        self.grid = grid

    @property
    def width(self) -> int:
        return self.grid.height

    @property
    def height(self) -> int:
        return self.grid.width

    def node(self, y: int, x: int) -> int:
        return self.grid.rows[x][y]

    def delete_in_row(self, y: int, x: int):
        self.grid.delete_in_column(y, x)

    def commit_width(self):
        self.grid.commit_height()

    def transposed(self) -> PixelGrid:
        return self.grid
