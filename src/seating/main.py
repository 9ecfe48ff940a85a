"""
Command-line interface for the seating simulation.

Usage:
    python -m seating.main --help
    python -m seating.main layout.txt
    python -m seating.main layout.txt --rule first_visible --print-metrics
    python -m seating.main - --quiet < layout.txt
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import Config, PRESETS, VISIBILITY_MODES
from .errors import NonConvergence, SeatingError
from .metrics import compute_all_metrics, print_metrics_summary
from .simulation import Simulation
from .state import Grid
from .visualization import Visualizer, save_generation_images


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all options."""
    parser = argparse.ArgumentParser(
        description="Seating system - simulate a waiting area until it stabilizes",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "layout",
        help="Layout file ('.', 'L', '#' per cell), or '-' to read stdin"
    )

    # Rule options
    parser.add_argument(
        "--rule", type=str, default="immediate",
        choices=sorted(PRESETS),
        help="Preset rule configuration"
    )
    parser.add_argument(
        "--threshold", type=int, default=None,
        help="Override: occupied neighbors at which a seat empties"
    )
    parser.add_argument(
        "--visibility", type=str, default=None,
        choices=VISIBILITY_MODES,
        help="Override: neighbor visibility mode"
    )
    parser.add_argument(
        "--sight-range", type=int, default=None, dest="sight_range",
        help="Maximum look distance in first_visible mode (default: unbounded)"
    )
    parser.add_argument(
        "--max-iterations", type=int, default=None, dest="max_iterations",
        help="Fail if no fixed point is reached within this many generations"
    )

    # Output options
    parser.add_argument(
        "--quiet", action="store_true",
        help="Print only the occupied-seat count"
    )
    parser.add_argument(
        "--show-grid", action="store_true",
        help="Print the stable layout"
    )
    parser.add_argument(
        "--print-metrics", action="store_true",
        help="Print layout metrics at the end"
    )
    parser.add_argument(
        "--save-metrics", type=str, default=None,
        help="Save metrics to JSON file"
    )
    parser.add_argument(
        "--no-progress", action="store_true",
        help="Hide the progress bar"
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log simulation progress to stderr"
    )

    # Visualization options
    parser.add_argument(
        "--visualize", action="store_true",
        help="Show live visualization"
    )
    parser.add_argument(
        "--fps", type=int, default=5,
        help="Frames per second for visualization"
    )
    parser.add_argument(
        "--save-frames", type=str, default=None,
        help="Directory to save one image per generation"
    )
    parser.add_argument(
        "--save-animation", type=str, default=None,
        help="Path to save animation (mp4 or gif)"
    )

    return parser


def read_layout(source: str) -> Grid:
    """Load a layout from a path, or from stdin when source is '-'."""
    if source == "-":
        return Grid.parse(sys.stdin.read())
    return Grid.from_file(Path(source))


def run_animated(sim: Simulation, args: argparse.Namespace) -> int:
    """
    Drive the simulation through the live view or an animation export.

    Each frame is one step, so the iteration bound caps the frame count.

    Returns:
        Number of occupied seats at the fixed point

    Raises:
        NonConvergence: If the animation ended before a fixed point
    """
    viz = Visualizer(sim, fps=args.fps)
    steps = sim.config.max_iterations

    if args.visualize:
        viz.show_live(steps=steps)
    else:
        viz.save_animation(args.save_animation, steps=steps)
        if not args.quiet:
            print(f"Animation saved to {args.save_animation}")

    if not sim.converged:
        raise NonConvergence(sim.step_count)
    return sim.occupied_count()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    try:
        config = Config.from_args(args)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        grid = read_layout(args.layout)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 1
    except SeatingError as e:
        print(f"Layout error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print("Seating System")
        print(f"  Grid: {grid.width}x{grid.height}")
        print(f"  Rule: threshold={config.threshold}, visibility={config.visibility}")
        if config.sight_range is not None:
            print(f"  Sight range: {config.sight_range}")
        print()

    sim = Simulation(grid, config)

    # Frame saving callback
    frame_callback = None
    if args.save_frames:
        output_dir = Path(args.save_frames)
        save_generation_images(sim.state, output_dir, step=0)

        def frame_callback(s: Simulation) -> None:
            save_generation_images(s.state, output_dir, step=s.generations)

    try:
        if args.visualize or args.save_animation:
            occupied = run_animated(sim, args)
        else:
            occupied = sim.run(
                callback=frame_callback,
                show_progress=not (args.no_progress or args.quiet),
            )
    except NonConvergence as e:
        print(f"Simulation error: {e}", file=sys.stderr)
        return 1

    if args.quiet:
        print(occupied)
        return 0

    print(f"Stable after {sim.generations} generations")

    if args.show_grid:
        print()
        print(sim.state.render(), end="")

    if args.print_metrics or args.save_metrics:
        metrics = compute_all_metrics(sim.state)
        metrics["generations"] = sim.generations

        if args.print_metrics:
            print()
            print_metrics_summary(metrics)

        if args.save_metrics:
            with open(args.save_metrics, "w") as f:
                json.dump({"config": config.to_dict(), "metrics": metrics}, f, indent=2)
            print(f"Metrics saved to {args.save_metrics}")

    print(f"Occupied seats: {occupied}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
