"""Entry point for ``python -m rescomp``.

Loads the default YAML config, builds a simulation engine, and either
opens a Pygame window to watch the agents compete or, with
``--headless``, runs a fixed number of ticks and logs a summary.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from rescomp.simulation.config import SimulationConfig
from rescomp.simulation.engine import SimulationEngine

logger = logging.getLogger("rescomp")

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def _load_config(path: pathlib.Path) -> SimulationConfig:
    """Load ``path``, falling back to built-in defaults if it is missing."""
    if not path.exists():
        logger.warning("Config %s not found, using defaults", path)
        return SimulationConfig()
    return SimulationConfig.from_yaml(path)


def main() -> None:
    """Parse CLI args, create engine, launch renderer or run headless."""
    parser = argparse.ArgumentParser(
        prog="rescomp",
        description="rescomp - 2D resource competition simulator",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the RNG seed from the config file",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=None,
        help="Pixel size per grid cell (default: from config)",
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
        default=None,
        help="Simulation ticks per second (default: from config)",
    )
    parser.add_argument(
        "--headless",
        type=int,
        metavar="TICKS",
        default=None,
        help="Run TICKS ticks without a window and print a summary",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = _load_config(args.config)
    if args.seed is not None:
        config.seed = args.seed
    engine = SimulationEngine(config=config)

    if args.headless is not None:
        engine.run(args.headless)
        world = engine.world
        logger.info(
            "Finished %d ticks: %d/%d agents alive, %d total resource",
            engine.tick,
            world.alive_count(),
            len(world.agents),
            world.total_resource(),
        )
        return

    from rescomp.ui.pygame_client import PygameRenderer

    renderer = PygameRenderer(
        engine=engine,
        cell_size=args.cell_size or config.cell_size,
        ticks_per_second=args.speed or config.ticks_per_second,
    )
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
