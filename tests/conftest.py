"""
Pytest configuration and fixtures for seating tests.
"""

import matplotlib

matplotlib.use("Agg")

import pytest

from seating.config import Config
from seating.state import Grid


LAYOUT = (
    "L.LL.LL.LL\n"
    "LLLLLLL.LL\n"
    "L.L.L..L..\n"
    "LLLL.LL.LL\n"
    "L.LL.LL.LL\n"
    "L.LLLLL.LL\n"
    "..L.L.....\n"
    "LLLLLLLLLL\n"
    "L.LLLLLL.L\n"
    "L.LLLLL.LL\n"
)

# Successive generations of LAYOUT under the immediate rule
IMMEDIATE_GENERATIONS = [
    "#.##.##.##\n#######.##\n#.#.#..#..\n####.##.##\n#.##.##.##\n#.#####.##\n..#.#.....\n##########\n#.######.#\n#.#####.##\n",
    "#.LL.L#.##\n#LLLLLL.L#\nL.L.L..L..\n#LLL.LL.L#\n#.LL.LL.LL\n#.LLLL#.##\n..L.L.....\n#LLLLLLLL#\n#.LLLLLL.L\n#.#LLLL.##\n",
    "#.##.L#.##\n#L###LL.L#\nL.#.#..#..\n#L##.##.L#\n#.##.LL.LL\n#.###L#.##\n..#.#.....\n#L######L#\n#.LL###L.L\n#.#L###.##\n",
    "#.#L.L#.##\n#LLL#LL.L#\nL.L.L..#..\n#LLL.##.L#\n#.LL.LL.LL\n#.LL#L#.##\n..L.L.....\n#L#LLLL#L#\n#.LLLLLL.L\n#.#L#L#.##\n",
    "#.#L.L#.##\n#LLL#LL.L#\nL.#.L..#..\n#L##.##.L#\n#.#L.LL.LL\n#.#L#L#.##\n..L.L.....\n#L#L##L#L#\n#.LLLLLL.L\n#.#L#L#.##\n",
]

# Successive generations of LAYOUT under the first-visible rule
FIRST_VISIBLE_GENERATIONS = [
    "#.##.##.##\n#######.##\n#.#.#..#..\n####.##.##\n#.##.##.##\n#.#####.##\n..#.#.....\n##########\n#.######.#\n#.#####.##\n",
    "#.LL.LL.L#\n#LLLLLL.LL\nL.L.L..L..\nLLLL.LL.LL\nL.LL.LL.LL\nL.LLLLL.LL\n..L.L.....\nLLLLLLLLL#\n#.LLLLLL.L\n#.LLLLL.L#\n",
    "#.L#.##.L#\n#L#####.LL\nL.#.#..#..\n##L#.##.##\n#.##.#L.##\n#.#####.#L\n..#.#.....\nLLL####LL#\n#.L#####.L\n#.L####.L#\n",
    "#.L#.L#.L#\n#LLLLLL.LL\nL.L.L..#..\n##LL.LL.L#\nL.LL.LL.L#\n#.LLLLL.LL\n..L.L.....\nLLLLLLLLL#\n#.LLLLL#.L\n#.L#LL#.L#\n",
    "#.L#.L#.L#\n#LLLLLL.LL\nL.L.L..#..\n##L#.#L.L#\nL.L#.#L.L#\n#.L####.LL\n..#.#.....\nLLL###LLL#\n#.LLLLL#.L\n#.L#LL#.L#\n",
    "#.L#.L#.L#\n#LLLLLL.LL\nL.L.L..#..\n##L#.#L.L#\nL.L#.LL.L#\n#.LLLL#.LL\n..#.L.....\nLLL###LLL#\n#.LLLLL#.L\n#.L#LL#.L#\n",
]


@pytest.fixture
def layout_text() -> str:
    """Canonical 10x10 waiting-area layout."""
    return LAYOUT


@pytest.fixture
def layout_grid() -> Grid:
    """Parsed canonical layout."""
    return Grid.parse(LAYOUT)


@pytest.fixture
def layout_file(tmp_path):
    """Canonical layout written to disk."""
    path = tmp_path / "layout.txt"
    path.write_text(LAYOUT)
    return path


@pytest.fixture
def immediate_config() -> Config:
    """Adjacent-seat rule (threshold 4)."""
    return Config.immediate()


@pytest.fixture
def first_visible_config() -> Config:
    """Line-of-sight rule (threshold 5)."""
    return Config.first_visible()


@pytest.fixture
def immediate_generations() -> list[Grid]:
    """Generations 1..5 of the canonical layout under the immediate rule."""
    return [Grid.parse(text) for text in IMMEDIATE_GENERATIONS]


@pytest.fixture
def first_visible_generations() -> list[Grid]:
    """Generations 1..6 of the canonical layout under the first-visible rule."""
    return [Grid.parse(text) for text in FIRST_VISIBLE_GENERATIONS]
