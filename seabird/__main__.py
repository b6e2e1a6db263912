"""Entry point for ``python -m seabird``.

Loads the YAML config, applies any command-line overrides (port
distance, boat count, seed), builds a game session and opens a Pygame
window to play it.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pathlib

from seabird.simulation.config import GameConfig
from seabird.simulation.engine import GameSession
from seabird.ui.pygame_client import PygameRenderer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main() -> None:
    """Parse CLI args, create the session, launch the renderer."""
    parser = argparse.ArgumentParser(
        prog="seabird",
        description="Seabird - route a seabird to fish by turning arrows",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--port-distance",
        type=int,
        default=None,
        help="Tiles between the nest and the port (default: from config)",
    )
    parser.add_argument(
        "--boats",
        type=int,
        default=None,
        help="Maximum fishing boats, 0 for none (default: from config)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="RNG seed for a repeatable board (default: from config)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=80,
        help="Pixel size per grid cell (default: 80)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    config = GameConfig.from_yaml(args.config)
    if args.port_distance is not None:
        config = config.with_port_distance(args.port_distance)
    if args.boats is not None:
        config = config.with_boats(args.boats)
    if args.seed is not None:
        config = dataclasses.replace(config, seed=args.seed)

    session = GameSession(config=config)
    renderer = PygameRenderer(session=session, cell_size=args.cell_size)
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
