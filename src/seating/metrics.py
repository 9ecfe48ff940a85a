"""
Metrics and analysis utilities for seating layouts.
"""

from typing import Any

import numpy as np

from .state import Cell, Grid


def occupied_count(grid: Grid) -> int:
    """Number of occupied seats."""
    return grid.count(Cell.OCCUPIED)


def seat_count(grid: Grid) -> int:
    """Number of seats (empty or occupied)."""
    return grid.size - grid.count(Cell.FLOOR)


def floor_count(grid: Grid) -> int:
    """Number of floor positions."""
    return grid.count(Cell.FLOOR)


def occupancy_rate(grid: Grid) -> float:
    """
    Fraction of seats that are occupied.

    Returns 0.0 for a layout without seats.
    """
    seats = seat_count(grid)
    if seats == 0:
        return 0.0
    return occupied_count(grid) / seats


def row_occupancy(grid: Grid) -> np.ndarray:
    """Occupied seats per row [height]."""
    return np.count_nonzero(grid.rows() == Cell.OCCUPIED, axis=1)


def compute_all_metrics(grid: Grid) -> dict[str, Any]:
    """
    Compute all metrics for a generation.

    Args:
        grid: Layout to analyze

    Returns:
        Dictionary of metrics
    """
    rows = row_occupancy(grid)
    return {
        "width": grid.width,
        "height": grid.height,
        "cells": grid.size,
        "floor": floor_count(grid),
        "seats": seat_count(grid),
        "occupied": occupied_count(grid),
        "empty": grid.count(Cell.EMPTY),
        "occupancy_rate": occupancy_rate(grid),
        "busiest_row": int(np.argmax(rows)),
        "max_row_occupancy": int(rows.max()),
    }


def print_metrics_summary(metrics: dict[str, Any]) -> None:
    """Pretty-print a metrics dictionary."""
    print("=" * 40)
    print("Seating metrics")
    print("=" * 40)
    print(f"  Grid:            {metrics['width']}x{metrics['height']} ({metrics['cells']} cells)")
    print(f"  Floor:           {metrics['floor']}")
    print(f"  Seats:           {metrics['seats']}")
    print(f"  Occupied:        {metrics['occupied']}")
    print(f"  Empty:           {metrics['empty']}")
    print(f"  Occupancy rate:  {metrics['occupancy_rate']:.2%}")
    print(f"  Busiest row:     {metrics['busiest_row']} ({metrics['max_row_occupancy']} occupied)")
    print()
