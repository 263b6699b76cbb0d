"""AI strategy interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from seabattle.core.board import Board
from seabattle.core.models import Coord


class AIStrategy(ABC):
    """Shot selection contract for the computer opponent."""

    @abstractmethod
    def choose_shot(self, board: Board) -> Coord:
        """Return the next coordinate to fire at on ``board``; never an already-shot cell."""

    def notify_result(self, coord: Coord, hit: bool, sunk: bool) -> None:
        """Update strategy state with a resolved shot."""
