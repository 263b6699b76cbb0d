"""Hunt/target AI strategy."""

from __future__ import annotations

import random
from collections import deque

from seabattle.ai.strategy import AIStrategy
from seabattle.core.board import Board
from seabattle.core.models import BOARD_SIZE, Coord, in_bounds


class HuntTargetAI(AIStrategy):
    """Parity hunting that switches to probing neighbours after a hit."""

    def __init__(self, rng: random.Random, size: int = BOARD_SIZE) -> None:
        self._rng = rng
        self._size = size
        self._target_queue: deque[Coord] = deque()
        self._active_hits: list[Coord] = []
        self._hunt_cells: list[Coord] = [
            Coord(x, y) for y in range(size) for x in range(size) if (x + y) % 2 == 0
        ]
        self._rng.shuffle(self._hunt_cells)

    def choose_shot(self, board: Board) -> Coord:
        while self._target_queue:
            coord = self._target_queue.popleft()
            if not board.was_shot(coord.x, coord.y):
                return coord

        while self._hunt_cells:
            coord = self._hunt_cells.pop()
            if not board.was_shot(coord.x, coord.y):
                return coord

        remaining = board.unshot_cells()
        if not remaining:
            raise ValueError("no unshot cells left on board")
        return self._rng.choice(remaining)

    def notify_result(self, coord: Coord, hit: bool, sunk: bool) -> None:
        if sunk:
            self._active_hits.clear()
            self._target_queue.clear()
        elif hit:
            self._active_hits.append(coord)
            self._enqueue_target_neighbors(coord)
            self._narrow_queue_by_orientation()

    def _enqueue_target_neighbors(self, coord: Coord) -> None:
        for cell in coord.neighbors():
            if in_bounds(cell, self._size) and cell not in self._target_queue:
                self._target_queue.append(cell)

    def _narrow_queue_by_orientation(self) -> None:
        if len(self._active_hits) < 2:
            return

        rows = {coord.y for coord in self._active_hits}
        cols = {coord.x for coord in self._active_hits}
        if len(rows) == 1:
            row = next(iter(rows))
            self._target_queue = deque(coord for coord in self._target_queue if coord.y == row)
        elif len(cols) == 1:
            col = next(iter(cols))
            self._target_queue = deque(coord for coord in self._target_queue if coord.x == col)
