"""
Visualization utilities for the seating simulation.

Provides real-time display and image export for generations.
"""

from pathlib import Path
from typing import Optional, Union

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from .state import Grid


# RGB palette indexed by Cell value
PALETTE = np.array(
    [
        (40, 40, 40),     # floor
        (120, 200, 120),  # empty seat
        (220, 60, 60),    # occupied seat
    ],
    dtype=np.uint8,
)


def grid_to_rgb(grid: Grid, scale: int = 1) -> np.ndarray:
    """
    Convert a generation to an RGB image.

    Args:
        grid: Layout to render
        scale: Pixels per cell along each axis

    Returns:
        RGB image [H * scale, W * scale, 3] as uint8
    """
    if scale < 1:
        raise ValueError(f"scale must be >= 1, got {scale}")

    rgb = PALETTE[grid.rows()]
    if scale > 1:
        rgb = np.repeat(np.repeat(rgb, scale, axis=0), scale, axis=1)
    return rgb


def save_grid_image(grid: Grid, path: Union[str, Path], scale: int = 8) -> None:
    """Save a generation as a PNG image."""
    plt.imsave(path, grid_to_rgb(grid, scale=scale))


class Visualizer:
    """
    Real-time visualization manager.

    Each animation frame advances the simulation by one generation; once
    the fixed point is reached the last frame is held.
    """

    def __init__(
        self,
        simulation: "Simulation",  # Forward reference
        fps: int = 5,
        scale: int = 1,
    ):
        """
        Initialize visualizer.

        Args:
            simulation: Simulation to visualize
            fps: Target frames per second
            scale: Pixels per cell
        """
        self.sim = simulation
        self.fps = fps
        self.scale = scale

        # Setup figure
        self.fig, self.ax = plt.subplots(figsize=(6, 6))
        self.ax.set_axis_off()

        self.im = self.ax.imshow(grid_to_rgb(self.sim.state, self.scale), interpolation="nearest")

        self.text = self.ax.text(
            0.02, 0.98, self._label(),
            transform=self.ax.transAxes,
            fontsize=10,
            verticalalignment='top',
            color='white',
            bbox=dict(boxstyle='round', facecolor='black', alpha=0.5)
        )

    def _label(self) -> str:
        label = f"Generation: {self.sim.generations}  Occupied: {self.sim.occupied_count()}"
        if self.sim.converged:
            label += "  (stable)"
        return label

    def _init_frame(self) -> list:
        """Draw the current generation without advancing."""
        self.im.set_array(grid_to_rgb(self.sim.state, self.scale))
        self.text.set_text(self._label())
        return [self.im, self.text]

    def _animation_update(self, frame: int) -> list:
        """Update function for animation."""
        self.sim.step()

        self.im.set_array(grid_to_rgb(self.sim.state, self.scale))
        self.text.set_text(self._label())

        return [self.im, self.text]

    def show_live(self, steps: Optional[int] = None) -> None:
        """
        Display live animation.

        Args:
            steps: Number of frames to run (None for 1000)
        """
        frames = steps if steps is not None else 1000
        interval = 1000 // self.fps

        anim = FuncAnimation(
            self.fig,
            self._animation_update,
            frames=frames,
            init_func=self._init_frame,
            interval=interval,
            blit=True,
            repeat=False,
        )

        plt.show()

    def save_animation(
        self,
        path: str,
        steps: Optional[int] = None,
        fps: Optional[int] = None,
    ) -> None:
        """
        Save animation to file.

        Args:
            path: Output file path (mp4, gif, etc.)
            steps: Number of frames (None = until the simulation converges,
                plus one frame showing the stable layout)
            fps: Frames per second (uses self.fps if not provided)
        """
        if fps is None:
            fps = self.fps

        if steps is None:
            frames = self._frames_until_stable
        else:
            frames = steps

        anim = FuncAnimation(
            self.fig,
            self._animation_update,
            frames=frames,
            init_func=self._init_frame,
            interval=1000 // fps,
            blit=True,
            repeat=False,
            # Frames are bare counters; the generator path has no known length
            cache_frame_data=False,
        )

        # Determine writer from extension
        suffix = Path(path).suffix.lower()
        if suffix == ".gif":
            anim.save(path, writer="pillow", fps=fps)
        else:
            anim.save(path, writer="ffmpeg", fps=fps)

    def _frames_until_stable(self):
        """Frame generator that stops one frame after the fixed point."""
        frame = 0
        while not self.sim.converged:
            yield frame
            frame += 1


def save_generation_images(
    grid: Grid,
    output_dir: Union[str, Path],
    prefix: str = "generation",
    step: int = 0,
    scale: int = 8,
) -> Path:
    """
    Save one generation as a numbered PNG image.

    Args:
        grid: Layout to render
        output_dir: Output directory
        prefix: Filename prefix
        step: Generation number for filename
        scale: Pixels per cell

    Returns:
        Path of the written image
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    path = output_path / f"{prefix}_{step:06d}.png"
    save_grid_image(grid, path, scale=scale)
    return path
