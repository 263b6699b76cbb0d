"""Battle flow helpers separated from engine state handling."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass

from seabattle.ai.hunt_target import HuntTargetAI
from seabattle.ai.random_shot import RandomShotAI
from seabattle.ai.strategy import AIStrategy
from seabattle.core.board import Board
from seabattle.core.fleet import RandomSource
from seabattle.core.models import Coord

logger = logging.getLogger(__name__)

STRATEGIES: tuple[str, ...] = ("random", "hunt")


@dataclass(frozen=True, slots=True)
class AIShot:
    """One resolved computer shot."""

    coord: Coord
    hit: bool
    sunk: bool


def build_ai_strategy(name: str, rng: RandomSource) -> AIStrategy:
    """Construct AI strategy from its configured name."""
    key = name.strip().lower()
    if key == "random":
        return RandomShotAI(rng)
    if key == "hunt":
        if not isinstance(rng, random.Random):
            raise TypeError("hunt strategy requires a random.Random source")
        return HuntTargetAI(rng)
    raise ValueError(f"Unknown AI strategy '{name}'. Expected one of: {', '.join(STRATEGIES)}.")


def strategy_factory(name: str, rng: RandomSource) -> Callable[[], AIStrategy]:
    """Return a zero-arg builder so each new game gets fresh strategy state."""
    if name.strip().lower() not in STRATEGIES:
        raise ValueError(f"Unknown AI strategy '{name}'. Expected one of: {', '.join(STRATEGIES)}.")
    return lambda: build_ai_strategy(name, rng)


def run_ai_volley(board: Board, strategy: AIStrategy) -> list[AIShot]:
    """Fire at ``board`` until a miss or until its last ship sinks.

    Runs as one synchronous loop; a hit always earns another shot.
    """
    shots: list[AIShot] = []
    while board.unshot_cells():
        coord = strategy.choose_shot(board)
        hit = board.shoot(coord.x, coord.y)
        ship = board.get_cell(coord.x, coord.y).ship
        sunk = hit and ship is not None and not ship.is_alive()
        strategy.notify_result(coord, hit, sunk)
        shots.append(AIShot(coord=coord, hit=hit, sunk=sunk))
        logger.debug("ai_shot x=%d y=%d hit=%s sunk=%s", coord.x, coord.y, hit, sunk)
        if not hit or board.all_ships_sunk():
            break
    return shots
