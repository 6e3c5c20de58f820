"""Entry point for ``python -m sealife``.

Loads the default YAML config, builds a simulator, and either opens a
Pygame window or runs headless, logging population counts each tick.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from sealife.simulation.config import SimulationConfig
from sealife.simulation.engine import LONG_RUN_STEPS, Simulator
from sealife.simulation.reporting import log_stats

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args, create simulator, run it."""
    parser = argparse.ArgumentParser(
        prog="sealife",
        description="Sealife - marine predator/prey simulator",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=LONG_RUN_STEPS,
        help=f"Maximum ticks to run (default: {LONG_RUN_STEPS})",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window, logging counts each tick",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=6,
        help="Pixel size per grid cell (default: 6)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=10.0,
        help="Simulation ticks per second (default: 10)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)

    if args.headless:
        simulator = Simulator(config=config, stats_sinks=[log_stats])
        executed = simulator.simulate(args.steps)
        logging.getLogger("sealife").info(
            "Finished after %d steps (viable=%s)",
            executed,
            simulator.field.is_viable(),
        )
        return

    from sealife.ui.pygame_client import PygameRenderer

    simulator = Simulator(config=config)
    renderer = PygameRenderer(
        engine=simulator,
        cell_size=args.cell_size,
        ticks_per_second=args.speed,
    )
    renderer.run(fps=args.fps, max_steps=args.steps)


if __name__ == "__main__":
    main()
