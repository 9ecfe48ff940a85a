#!/usr/bin/env python3
"""
Basic seating simulation example.

This script demonstrates:
1. Loading a layout
2. Running both rule presets to their fixed point
3. Watching generations through a callback
4. Measuring the stable layout
"""

from pathlib import Path

from seating import Config, Grid
from seating.simulation import Simulation
from seating.metrics import compute_all_metrics, print_metrics_summary


LAYOUT = Path(__file__).with_name("waiting_area.txt")


def main():
    print("=" * 60)
    print("Seating System")
    print("Basic Simulation Example")
    print("=" * 60)
    print()

    grid = Grid.from_file(LAYOUT)
    print(f"Layout: {grid.width}x{grid.height}")
    print(grid.render())

    for config in (Config.immediate(), Config.first_visible()):
        print(f"Rule: threshold={config.threshold}, visibility={config.visibility}")

        def progress_callback(s: Simulation):
            print(f"  Generation {s.generations}: {s.occupied_count()} occupied")

        sim = Simulation(grid, config)
        occupied = sim.run(callback=progress_callback)

        print()
        print(sim.state.render())
        print_metrics_summary(compute_all_metrics(sim.state))
        print(f"Stable after {sim.generations} generations: {occupied} occupied seats")
        print()

    print("To animate, run:")
    print("  python -m seating.main examples/waiting_area.txt --visualize")
    print()


if __name__ == "__main__":
    main()
