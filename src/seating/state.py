"""
Cell states and grid representation for the seating simulation.

The grid is stored as a flat, row-major, read-only buffer:
- index = row * width + col
- each entry is a Cell value (floor, empty seat, occupied seat)

Directions are (row_delta, col_delta) pairs, enumerated clockwise from the
top-left neighbor.
"""

import logging
from enum import IntEnum
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np

from .errors import InvalidSymbol, MalformedGrid

_logger = logging.getLogger(__name__)


class Cell(IntEnum):
    """State of a single grid position."""

    FLOOR = 0
    EMPTY = 1
    OCCUPIED = 2

    @property
    def symbol(self) -> str:
        """Layout character for this state."""
        return _CELL_TO_SYMBOL[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Cell":
        """Parse a layout character, raising InvalidSymbol if unknown."""
        try:
            return _SYMBOL_TO_CELL[symbol]
        except KeyError:
            raise InvalidSymbol(symbol) from None


_SYMBOL_TO_CELL = {".": Cell.FLOOR, "L": Cell.EMPTY, "#": Cell.OCCUPIED}
_CELL_TO_SYMBOL = {cell: symbol for symbol, cell in _SYMBOL_TO_CELL.items()}

# Lookup table for rendering a whole buffer at once
_SYMBOL_TABLE = np.array([Cell(i).symbol for i in range(len(Cell))])

CELL_DTYPE = np.uint8


# Direction indices (clockwise from top-left)
NORTH_WEST = 0
NORTH = 1
NORTH_EAST = 2
EAST = 3
SOUTH_EAST = 4
SOUTH = 5
SOUTH_WEST = 6
WEST = 7

DIRECTIONS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
)


class Grid:
    """
    Immutable seating layout.

    Attributes:
        width: Number of columns
        height: Number of rows
        cells: Flat read-only array of Cell values, length width * height
    """

    __slots__ = ("width", "height", "cells")

    def __init__(self, width: int, height: int, cells: Union[np.ndarray, Sequence[int]]):
        if width <= 0 or height <= 0:
            raise MalformedGrid(f"grid dimensions must be positive, got {width}x{height}")

        buffer = np.array(cells, dtype=CELL_DTYPE).reshape(-1)
        if buffer.size != width * height:
            raise MalformedGrid(
                f"expected {width * height} cells for a {width}x{height} grid, "
                f"got {buffer.size}"
            )
        if buffer.size and int(buffer.max()) > Cell.OCCUPIED:
            raise ValueError(f"cell values must be in 0..{int(Cell.OCCUPIED)}")

        buffer.setflags(write=False)
        self.width = width
        self.height = height
        self.cells = buffer

    # -----------------------------
    # Construction
    # -----------------------------
    @classmethod
    def parse(cls, text: str) -> "Grid":
        """
        Parse a textual layout.

        Args:
            text: One line per row using '.', 'L' and '#'; rows end at a
                newline (CRLF accepted), trailing newline optional

        Returns:
            Parsed grid

        Raises:
            MalformedGrid: Empty input or rows of unequal length
            InvalidSymbol: Any character outside the three layout symbols
        """
        # Only '\n' (optionally preceded by '\r') ends a row
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        lines = [line[:-1] if line.endswith("\r") else line for line in lines]
        if not lines:
            raise MalformedGrid("layout is empty")

        width = len(lines[0])
        if width == 0:
            raise MalformedGrid("first line of layout is empty", line_number=1, expected=None, actual=0)

        cells: list[int] = []
        for line_number, line in enumerate(lines, start=1):
            if len(line) != width:
                raise MalformedGrid(
                    f"line {line_number} has length {len(line)}, expected {width}",
                    line_number=line_number,
                    expected=width,
                    actual=len(line),
                )
            for column, symbol in enumerate(line, start=1):
                cell = _SYMBOL_TO_CELL.get(symbol)
                if cell is None:
                    raise InvalidSymbol(symbol, line_number=line_number, column=column)
                cells.append(cell)

        grid = cls(width, len(lines), cells)
        _logger.debug("Parsed %dx%d layout", grid.width, grid.height)
        return grid

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Grid":
        """Read and parse a layout file."""
        return cls.parse(Path(path).read_text(encoding="utf-8"))

    def with_cells(self, cells: np.ndarray) -> "Grid":
        """Create a grid of the same shape holding a new generation of cells."""
        return Grid(self.width, self.height, cells)

    def clone(self) -> "Grid":
        """Create an independent copy of the grid."""
        return Grid(self.width, self.height, self.cells.copy())

    # -----------------------------
    # Geometry
    # -----------------------------
    @property
    def shape(self) -> tuple[int, int]:
        """Grid dimensions (height, width)."""
        return (self.height, self.width)

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.width * self.height

    def contains(self, row: int, col: int) -> bool:
        """Whether (row, col) lies inside the grid."""
        return 0 <= row < self.height and 0 <= col < self.width

    def index(self, row: int, col: int) -> int:
        """Flat index of (row, col)."""
        assert self.contains(row, col), f"({row}, {col}) outside {self.width}x{self.height} grid"
        return row * self.width + col

    def position(self, index: int) -> tuple[int, int]:
        """(row, col) of a flat index."""
        assert 0 <= index < self.size, f"index {index} outside grid of {self.size} cells"
        return divmod(index, self.width)

    def offsets(self, index: int, distance: int = 1) -> list[Optional[int]]:
        """
        Cells at a given distance from ``index`` in each of the 8 directions.

        Args:
            index: Flat index of the origin cell
            distance: Multiplier applied to every direction vector

        Returns:
            One entry per direction (in DIRECTIONS order): the flat index of
            the target cell, or None if it falls outside the grid
        """
        row, col = self.position(index)
        result: list[Optional[int]] = []
        for dr, dc in DIRECTIONS:
            r, c = row + dr * distance, col + dc * distance
            if self.contains(r, c):
                result.append(r * self.width + c)
            else:
                result.append(None)
        return result

    # -----------------------------
    # Access
    # -----------------------------
    def __getitem__(self, index: int) -> Cell:
        return Cell(int(self.cells[index]))

    def at(self, row: int, col: int) -> Cell:
        """Cell state at (row, col)."""
        return self[self.index(row, col)]

    def rows(self) -> np.ndarray:
        """2D read-only view [height, width] of the cells."""
        return self.cells.reshape(self.height, self.width)

    def count(self, cell: Cell) -> int:
        """Number of cells in the given state."""
        return int(np.count_nonzero(self.cells == cell))

    # -----------------------------
    # Rendering / comparison
    # -----------------------------
    def render(self) -> str:
        """Textual layout, one newline-terminated line per row."""
        symbols = _SYMBOL_TABLE[self.rows()]
        return "".join("".join(row) + "\n" for row in symbols)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.cells, other.cells))

    def __hash__(self) -> int:
        return hash((self.width, self.height, self.cells.tobytes()))


def parse_grid(text: str) -> Grid:
    """Parse a textual layout (see Grid.parse)."""
    return Grid.parse(text)
