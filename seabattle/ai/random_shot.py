"""Uniform random shooter."""

from __future__ import annotations

from seabattle.ai.strategy import AIStrategy
from seabattle.core.board import Board
from seabattle.core.fleet import RandomSource
from seabattle.core.models import Coord


class RandomShotAI(AIStrategy):
    """Samples uniform coordinates, resampling any cell already shot."""

    def __init__(self, rng: RandomSource) -> None:
        self._rng = rng

    def choose_shot(self, board: Board) -> Coord:
        if not board.unshot_cells():
            raise ValueError("no unshot cells left on board")
        while True:
            x = self._rng.randrange(board.size)
            y = self._rng.randrange(board.size)
            if not board.was_shot(x, y):
                return Coord(x, y)
