"""
Main simulation loop for the seating system.

Repeatedly applies the occupancy rule until a generation produces no
change, then reports how many seats are occupied.
"""

import logging
from typing import Callable, Optional, Union

from tqdm import tqdm

from .config import Config
from .errors import NonConvergence
from .rules import compute_step
from .state import Cell, Grid
from .visibility import build_sightlines

_logger = logging.getLogger(__name__)

# Driver states
RUNNING = "running"
CONVERGED = "converged"


class Simulation:
    """
    Seating simulation manager.

    Owns the current generation and provides hooks for visualization/analysis.

    Attributes:
        config: Rule configuration (fixed for the run)
        initial_state: Generation 0
        state: Current generation
        step_count: Number of step() calls that did work, including the
            final no-change step
        generations: Number of steps that changed the grid
        status: RUNNING or CONVERGED
    """

    def __init__(self, grid: Grid, config: Optional[Config] = None):
        """
        Initialize simulation.

        Args:
            grid: Starting layout
            config: Rule configuration (defaults to the immediate preset)
        """
        self.config = config if config is not None else Config.immediate()
        self.initial_state = grid
        self.state = grid
        self.step_count = 0
        self.generations = 0
        self.status = RUNNING

        # Floor is inert, so the neighbor table holds for every generation
        self._sightlines = build_sightlines(grid, self.config)

        _logger.info(
            "Simulation ready: %dx%d grid, threshold=%d, visibility=%s",
            grid.width, grid.height, self.config.threshold, self.config.visibility,
        )

    @property
    def converged(self) -> bool:
        """Whether a fixed point has been reached."""
        return self.status == CONVERGED

    def step(self) -> bool:
        """
        Advance simulation by one generation.

        Returns:
            True if any cell changed; False once the fixed point is reached
        """
        if self.converged:
            return False

        self.state, changed = compute_step(self.state, self.config, self._sightlines)
        self.step_count += 1

        if changed:
            self.generations += 1
            _logger.debug(
                "Generation %d: %d occupied", self.generations, self.occupied_count()
            )
        else:
            self.status = CONVERGED
            _logger.info(
                "Converged after %d generations with %d occupied seats",
                self.generations, self.occupied_count(),
            )
        return changed

    def run(
        self,
        max_iterations: Optional[int] = None,
        callback: Optional[Callable[["Simulation"], None]] = None,
        callback_interval: int = 1,
        show_progress: bool = False,
    ) -> int:
        """
        Run simulation until it reaches a fixed point.

        Args:
            max_iterations: Bound on the number of steps (falls back to
                config.max_iterations; None = unbounded)
            callback: Optional function called after changing generations
            callback_interval: Call callback every N changing generations
            show_progress: Whether to show progress bar

        Returns:
            Number of occupied seats at the fixed point

        Raises:
            NonConvergence: If the bound is exhausted before convergence
        """
        if callback_interval < 1:
            raise ValueError(f"callback_interval must be >= 1, got {callback_interval}")

        limit = max_iterations if max_iterations is not None else self.config.max_iterations

        with tqdm(desc="Simulating", unit="gen", disable=not show_progress) as progress:
            while not self.converged:
                if limit is not None and self.step_count >= limit:
                    raise NonConvergence(self.step_count)

                if self.step():
                    progress.update(1)
                    if callback is not None and self.generations % callback_interval == 0:
                        callback(self)

        return self.occupied_count()

    def occupied_count(self) -> int:
        """Number of occupied seats in the current generation."""
        return self.state.count(Cell.OCCUPIED)

    def reset(self) -> None:
        """Reset simulation to generation 0."""
        self.state = self.initial_state
        self.step_count = 0
        self.generations = 0
        self.status = RUNNING

    def get_state_dict(self) -> dict:
        """Get serializable state dictionary."""
        return {
            "step_count": self.step_count,
            "generations": self.generations,
            "status": self.status,
            "occupied": self.occupied_count(),
            "config": self.config.to_dict(),
            "width": self.state.width,
            "height": self.state.height,
            "layout": self.state.render(),
        }


def run_to_equilibrium(
    layout: Union[Grid, str],
    config: Optional[Config] = None,
    **run_kwargs,
) -> int:
    """
    Simulate a layout to its fixed point and count occupied seats.

    Args:
        layout: Grid or layout text
        config: Rule configuration (defaults to the immediate preset)
        **run_kwargs: Forwarded to Simulation.run()

    Returns:
        Number of occupied seats at the fixed point
    """
    grid = layout if isinstance(layout, Grid) else Grid.parse(layout)
    return Simulation(grid, config).run(**run_kwargs)
