"""Application entry point."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from dataclasses import replace

from seabattle.app.engine import GameEngine
from seabattle.infra.config import GameConfig, load_default_env_files, load_game_config
from seabattle.infra.logging import setup_logging, shutdown_logging
from seabattle.ui.console import ConsoleGame

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seabattle", description="Battleship against the computer.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the random source")
    parser.add_argument("--fleet", choices=("standard", "classic"), default=None)
    parser.add_argument("--ai", choices=("random", "hunt"), default=None)
    parser.add_argument("--reveal", action="store_true", help="show enemy ships")
    return parser


def apply_cli_overrides(config: GameConfig, args: argparse.Namespace) -> GameConfig:
    """Return ``config`` with any explicitly passed CLI options applied."""
    overrides: dict[str, object] = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.fleet is not None:
        overrides["fleet"] = args.fleet
    if args.ai is not None:
        overrides["ai"] = args.ai
    if args.reveal:
        overrides["reveal_enemy"] = True
    return replace(config, **overrides)


def main(argv: Sequence[str] | None = None) -> None:
    """Run the SeaBattle console game."""
    args = build_parser().parse_args(argv)
    load_default_env_files()
    setup_logging()
    config = apply_cli_overrides(load_game_config(), args)
    logger.info(
        "game_config",
        extra={"fleet": config.fleet, "ai": config.ai, "seed": config.seed},
    )
    try:
        ConsoleGame(GameEngine.from_config(config)).run()
    finally:
        shutdown_logging()


if __name__ == "__main__":
    main()
