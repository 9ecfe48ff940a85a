"""
Neighbor visibility for the seating rules.

Two modes decide which cell "counts" as the neighbor in each of the eight
compass directions:
- immediate: the adjacent cell at distance 1
- first_visible: the first seat (empty or occupied) met when marching
  outward, skipping floor

Floor never changes, so the neighbor chosen in each direction depends only
on the floor layout. build_sightlines() resolves it for every cell at once
and the step function reuses that table for every generation.
"""

from typing import Optional, Union

import numpy as np

from .config import Config, IMMEDIATE, FIRST_VISIBLE
from .state import Cell, DIRECTIONS, Grid

# Marker for a direction with no relevant neighbor
ABSENT = -1

RuleLike = Union[Config, str]


def _resolve_mode(rule: RuleLike, sight_range: Optional[int]) -> tuple[str, Optional[int]]:
    """Split a Config (or bare visibility name) into (visibility, sight_range)."""
    if isinstance(rule, Config):
        return rule.visibility, sight_range if sight_range is not None else rule.sight_range
    if rule not in (IMMEDIATE, FIRST_VISIBLE):
        raise ValueError(f"unknown visibility mode {rule!r}")
    return rule, sight_range


def max_distance(grid: Grid, sight_range: Optional[int] = None) -> int:
    """Furthest distance a first_visible search may march on this grid."""
    limit = max(grid.width, grid.height)
    if sight_range is not None:
        limit = min(limit, sight_range)
    return limit


def neighbor_indices(
    grid: Grid,
    index: int,
    rule: RuleLike = IMMEDIATE,
    sight_range: Optional[int] = None,
) -> list[Optional[int]]:
    """
    Relevant neighbor of a cell in each direction.

    Args:
        grid: Current layout
        index: Flat index of the cell
        rule: Config or visibility mode name
        sight_range: Override for the first_visible marching limit

    Returns:
        One entry per direction: flat index of the neighbor, or None
    """
    visibility, sight_range = _resolve_mode(rule, sight_range)
    if visibility == IMMEDIATE:
        return grid.offsets(index, 1)

    cells = grid.cells
    row, col = grid.position(index)
    limit = max_distance(grid, sight_range)
    result: list[Optional[int]] = []
    for dr, dc in DIRECTIONS:
        seat = None
        for distance in range(1, limit + 1):
            r, c = row + dr * distance, col + dc * distance
            if not grid.contains(r, c):
                break
            candidate = r * grid.width + c
            if cells[candidate] != Cell.FLOOR:
                seat = candidate
                break
        result.append(seat)
    return result


def visible_neighbors(
    grid: Grid,
    index: int,
    rule: RuleLike = IMMEDIATE,
    sight_range: Optional[int] = None,
) -> dict[int, Cell]:
    """
    Map each direction that has a relevant neighbor to that neighbor's state.

    Directions leading off the grid (or, in first_visible mode, seeing only
    floor) are left out.
    """
    return {
        direction: grid[neighbor]
        for direction, neighbor in enumerate(neighbor_indices(grid, index, rule, sight_range))
        if neighbor is not None
    }


def occupied_neighbor_count(
    grid: Grid,
    index: int,
    rule: RuleLike = IMMEDIATE,
    sight_range: Optional[int] = None,
) -> int:
    """Number of occupied seats among a cell's relevant neighbors."""
    return sum(
        1 for state in visible_neighbors(grid, index, rule, sight_range).values()
        if state == Cell.OCCUPIED
    )


def build_sightlines(grid: Grid, rule: RuleLike = IMMEDIATE, sight_range: Optional[int] = None) -> np.ndarray:
    """
    Resolve the relevant neighbor of every cell in every direction.

    Each direction is marched independently for all cells in parallel: at
    distance d, cells whose search is still open either resolve to the
    target (in-bounds seat, or any in-bounds cell in immediate mode), close
    as ABSENT (target off-grid), or stay open (floor).

    Args:
        grid: Layout whose floor plan defines the sightlines
        rule: Config or visibility mode name
        sight_range: Override for the first_visible marching limit

    Returns:
        Integer array [width * height, 8] of neighbor indices, ABSENT where
        a direction has no relevant neighbor
    """
    visibility, sight_range = _resolve_mode(rule, sight_range)
    H, W = grid.height, grid.width
    rows, cols = np.divmod(np.arange(grid.size), W)

    limit = 1 if visibility == IMMEDIATE else max_distance(grid, sight_range)
    is_floor = grid.cells == Cell.FLOOR

    table = np.full((grid.size, len(DIRECTIONS)), ABSENT, dtype=np.int64)
    for direction, (dr, dc) in enumerate(DIRECTIONS):
        open_search = np.ones(grid.size, dtype=bool)
        for distance in range(1, limit + 1):
            r = rows + dr * distance
            c = cols + dc * distance
            in_bounds = (r >= 0) & (r < H) & (c >= 0) & (c < W)

            # Off-grid ends the search with nothing found
            open_search &= in_bounds
            if not open_search.any():
                break

            target = np.where(in_bounds, r * W + c, 0)
            hit = open_search.copy()
            if visibility == FIRST_VISIBLE:
                hit &= ~is_floor[target]

            table[hit, direction] = target[hit]
            open_search &= ~hit

    return table


def count_occupied_neighbors(grid: Grid, sightlines: np.ndarray) -> np.ndarray:
    """
    Occupied-neighbor count for every cell of a generation.

    Args:
        grid: Generation to read (never modified)
        sightlines: Table from build_sightlines() for this grid's floor plan

    Returns:
        Integer array [width * height]
    """
    present = sightlines != ABSENT
    neighbor_states = grid.cells[np.where(present, sightlines, 0)]
    return np.count_nonzero(present & (neighbor_states == Cell.OCCUPIED), axis=1)
