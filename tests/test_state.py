"""
Tests for cell states and the grid.
"""

import numpy as np
import pytest

from seating.errors import InvalidSymbol, MalformedGrid
from seating.state import (
    Cell, DIRECTIONS, EAST, Grid, NORTH_WEST, SOUTH, WEST, parse_grid,
)


class TestCell:
    """Tests for Cell states and symbols."""

    @pytest.mark.parametrize(
        "symbol,cell",
        [(".", Cell.FLOOR), ("L", Cell.EMPTY), ("#", Cell.OCCUPIED)],
    )
    def test_symbols(self, symbol, cell):
        """Each state maps to its layout character and back."""
        assert Cell.from_symbol(symbol) is cell
        assert cell.symbol == symbol

    def test_invalid_symbol(self):
        """Unknown characters are rejected."""
        with pytest.raises(InvalidSymbol) as exc:
            Cell.from_symbol("x")
        assert exc.value.symbol == "x"


class TestGridParse:
    """Tests for building a grid from text."""

    def test_dimensions(self, layout_grid):
        """Width and height come from the layout."""
        assert layout_grid.width == 10
        assert layout_grid.height == 10
        assert layout_grid.shape == (10, 10)
        assert layout_grid.cells.shape == (100,)

    def test_row_major_cells(self, layout_grid):
        """Cells are stored row by row."""
        assert layout_grid[0] == Cell.EMPTY
        assert layout_grid[1] == Cell.FLOOR
        assert layout_grid[17] == Cell.FLOOR
        assert layout_grid[64] == Cell.EMPTY
        assert layout_grid.at(6, 4) == Cell.EMPTY

    def test_trailing_newline_optional(self, layout_text):
        """A missing final newline parses the same."""
        assert Grid.parse(layout_text.rstrip("\n")) == Grid.parse(layout_text)

    def test_crlf_line_endings(self, layout_text):
        """Windows line endings are accepted."""
        assert Grid.parse(layout_text.replace("\n", "\r\n")) == Grid.parse(layout_text)

    def test_unequal_lines(self):
        """Rows must all match the first line's width."""
        with pytest.raises(MalformedGrid) as exc:
            Grid.parse("L.L\nLL\nLLL\n")

        assert exc.value.line_number == 2
        assert exc.value.expected == 3
        assert exc.value.actual == 2

    def test_blank_line_inside_layout(self):
        """A blank row is a zero-width line."""
        with pytest.raises(MalformedGrid):
            Grid.parse("LL\n\nLL\n")

    def test_extra_trailing_blank_line(self):
        """Only a single final newline is dropped."""
        with pytest.raises(MalformedGrid) as exc:
            Grid.parse("LL\nLL\n\n")

        assert exc.value.line_number == 3

    def test_empty_input(self):
        """An empty layout has no grid."""
        with pytest.raises(MalformedGrid):
            Grid.parse("")

    def test_invalid_symbol_context(self):
        """Unknown characters are reported with their position."""
        with pytest.raises(InvalidSymbol) as exc:
            Grid.parse("L.L\nL?L\n")

        assert exc.value.symbol == "?"
        assert exc.value.line_number == 2
        assert exc.value.column == 2
        assert "line 2" in str(exc.value)

    @pytest.mark.parametrize(
        "separator",
        ["\x0b", "\x0c", "\x1c", "\x1d", "\x1e", "\x85", "\u2028", "\u2029"],
    )
    def test_other_line_separators_are_symbols(self, separator):
        """Only newline ends a row; other Unicode line breaks are invalid symbols."""
        with pytest.raises(InvalidSymbol) as exc:
            Grid.parse(f"LL{separator}LL\n")

        assert exc.value.symbol == separator
        assert exc.value.line_number == 1
        assert exc.value.column == 3

    def test_lone_carriage_return_is_symbol(self):
        """A carriage return not followed by newline is not a line ending."""
        with pytest.raises(InvalidSymbol):
            Grid.parse("L\rL\n")

    def test_errors_are_value_errors(self):
        """Layout errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            Grid.parse("LX")

    def test_from_file(self, layout_file, layout_grid):
        """Layouts load from disk."""
        assert Grid.from_file(layout_file) == layout_grid

    def test_parse_grid_alias(self, layout_text, layout_grid):
        """Module-level parse_grid matches Grid.parse."""
        assert parse_grid(layout_text) == layout_grid


class TestGridState:
    """Tests for grid storage, rendering and comparison."""

    def test_round_trip(self, layout_text, layout_grid):
        """Rendering and re-parsing yields an identical grid."""
        assert layout_grid.render() == layout_text
        assert Grid.parse(layout_grid.render()) == layout_grid

    def test_round_trip_non_square(self):
        """Rendering splits rows by the grid's own width."""
        grid = Grid.parse("L.#L.\n#....\n")

        assert grid.render() == "L.#L.\n#....\n"
        assert Grid.parse(str(grid)) == grid

    def test_cells_read_only(self, layout_grid):
        """The cell buffer cannot be written in place."""
        with pytest.raises(ValueError):
            layout_grid.cells[0] = Cell.OCCUPIED

    def test_clone(self, layout_grid):
        """Clone creates an equal, independent copy."""
        cloned = layout_grid.clone()

        assert cloned == layout_grid
        assert cloned.cells is not layout_grid.cells

    def test_with_cells(self, layout_grid):
        """A new generation keeps the shape and leaves the original alone."""
        nxt = layout_grid.with_cells(np.full(100, Cell.OCCUPIED, dtype=np.uint8))

        assert nxt.shape == layout_grid.shape
        assert nxt.count(Cell.OCCUPIED) == 100
        assert layout_grid.count(Cell.OCCUPIED) == 0

    def test_wrong_cell_count(self):
        """Cell count must match width * height."""
        with pytest.raises(MalformedGrid):
            Grid(3, 3, [Cell.EMPTY] * 8)

    def test_rows_view(self, layout_grid):
        """rows() exposes a [height, width] view."""
        rows = layout_grid.rows()

        assert rows.shape == (10, 10)
        assert rows[7, 9] == Cell.EMPTY
        assert rows[6, 0] == Cell.FLOOR

    def test_count(self, layout_grid):
        """Cells are counted per state."""
        assert layout_grid.count(Cell.EMPTY) + layout_grid.count(Cell.FLOOR) == 100
        assert layout_grid.count(Cell.EMPTY) == 71

    def test_equality_depends_on_shape(self):
        """Same cells in a different shape are a different grid."""
        assert Grid.parse("LL\nLL\n") != Grid.parse("LLLL\n")


class TestOffsets:
    """Tests for bounds-checked directional offsets."""

    def test_direction_order(self):
        """Clockwise from top-left."""
        assert DIRECTIONS[NORTH_WEST] == (-1, -1)
        assert DIRECTIONS[EAST] == (0, 1)
        assert DIRECTIONS[SOUTH] == (1, 0)
        assert DIRECTIONS[WEST] == (0, -1)
        assert len(DIRECTIONS) == 8

    def test_top_left_corner(self, layout_grid):
        """Index 0 has only east, south-east and south in bounds."""
        offsets = layout_grid.offsets(0)

        assert offsets == [None, None, None, 1, 11, 10, None, None]
        assert sorted(i for i in offsets if i is not None) == [1, 10, 11]
        assert offsets.count(None) == 5

    def test_bottom_right_corner(self, layout_grid):
        """Index 99 has only north-west, north and west in bounds."""
        offsets = layout_grid.offsets(99)

        assert offsets == [88, 89, None, None, None, None, None, 98]

    @pytest.mark.parametrize(
        "index,expected",
        [
            (2, [1, 3, 11, 12, 13]),          # top
            (9, [8, 18, 19]),                 # top-right
            (40, [30, 31, 41, 50, 51]),       # left
            (23, [12, 13, 14, 22, 24, 32, 33, 34]),  # middle
            (79, [68, 69, 78, 88, 89]),       # right
            (90, [80, 81, 91]),               # bottom-left
            (95, [84, 85, 86, 94, 96]),       # bottom
        ],
    )
    def test_edges(self, layout_grid, index, expected):
        """Edge cells never wrap to the opposite side."""
        offsets = layout_grid.offsets(index)

        assert len(offsets) == 8
        assert sorted(i for i in offsets if i is not None) == expected

    def test_long_distances(self, layout_grid):
        """Distance scales every direction vector."""
        assert layout_grid.offsets(11, 3) == [None, None, None, 14, 44, 41, None, None]
        assert layout_grid.offsets(55, 4) == [11, 15, 19, 59, 99, 95, 91, 51]
        assert layout_grid.offsets(0, 4) == [None, None, None, 4, 44, 40, None, None]

    def test_index_position(self, layout_grid):
        """Flat index and (row, col) convert both ways."""
        assert layout_grid.index(3, 7) == 37
        assert layout_grid.position(37) == (3, 7)
        assert layout_grid.contains(9, 9)
        assert not layout_grid.contains(10, 0)
        assert not layout_grid.contains(0, -1)
