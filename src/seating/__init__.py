"""
Seating System - waiting-area seat occupancy automaton.

Seats fill and empty under a neighbor-count rule until the layout
stabilizes; the occupied seats are then counted.
"""

__version__ = "0.1.0"

from .config import Config
from .errors import InvalidSymbol, MalformedGrid, NonConvergence, SeatingError
from .simulation import Simulation, run_to_equilibrium
from .state import Cell, Grid, parse_grid

__all__ = [
    "Config",
    "Cell",
    "Grid",
    "parse_grid",
    "Simulation",
    "run_to_equilibrium",
    "SeatingError",
    "MalformedGrid",
    "InvalidSymbol",
    "NonConvergence",
    "__version__",
]
