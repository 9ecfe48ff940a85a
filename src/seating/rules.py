"""
Occupancy rule for the seating simulation.

One synchronous update: every cell's decision is computed from the current
generation only, then written into a fresh buffer for the next generation.
"""

from typing import Optional

import numpy as np

from .config import Config
from .state import Cell, Grid
from .visibility import build_sightlines, count_occupied_neighbors


def compute_step(
    grid: Grid,
    config: Config,
    sightlines: Optional[np.ndarray] = None,
) -> tuple[Grid, bool]:
    """
    Apply the occupancy rule once to every cell.

    - floor: never changes
    - empty seat: becomes occupied if no relevant neighbor is occupied
    - occupied seat: empties if at least ``config.threshold`` relevant
      neighbors are occupied

    Args:
        grid: Current generation (read-only)
        config: Rule configuration
        sightlines: Precomputed neighbor table for this floor plan
            (built from ``grid`` if not given)

    Returns:
        (next generation, whether any cell changed)
    """
    if sightlines is None:
        sightlines = build_sightlines(grid, config)

    current = grid.cells
    occupied_neighbors = count_occupied_neighbors(grid, sightlines)

    sit_down = (current == Cell.EMPTY) & (occupied_neighbors == 0)
    leave = (current == Cell.OCCUPIED) & (occupied_neighbors >= config.threshold)

    nxt = current.copy()
    nxt[sit_down] = Cell.OCCUPIED
    nxt[leave] = Cell.EMPTY

    changed = bool(sit_down.any() or leave.any())
    return grid.with_cells(nxt), changed


def changed_cells(old: Grid, new: Grid) -> np.ndarray:
    """Flat indices whose state differs between two generations of the same grid."""
    assert old.shape == new.shape, f"shape mismatch: {old.shape} vs {new.shape}"
    return np.flatnonzero(old.cells != new.cells)
