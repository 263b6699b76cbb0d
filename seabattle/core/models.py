"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

BOARD_SIZE = 10
MIN_SHIP_SIZE = 1
MAX_SHIP_SIZE = 4


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class Turn(StrEnum):
    """Current turn owner."""

    PLAYER = "PLAYER"
    AI = "AI"


class Phase(StrEnum):
    """Game lifecycle phase."""

    SETUP = "SETUP"
    PLAYING = "PLAYING"
    GAME_OVER = "GAME_OVER"


class Outcome(StrEnum):
    """Final result from the human player's point of view."""

    WIN = "WIN"
    LOSS = "LOSS"


class ShotResult(StrEnum):
    """Result of a single fire request."""

    MISS = "MISS"
    HIT = "HIT"
    REJECTED = "REJECTED"


class CellState(StrEnum):
    """Render-facing state of one board cell."""

    EMPTY = "EMPTY"
    SHIP = "SHIP"
    MISS = "MISS"
    HIT = "HIT"
    SUNK = "SUNK"


class BoardSide(StrEnum):
    """Selects one of the two boards owned by the engine."""

    PLAYER = "PLAYER"
    ENEMY = "ENEMY"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate; x is the column and y the row."""

    x: int
    y: int

    def neighbors(self) -> tuple[Coord, Coord, Coord, Coord]:
        """Return the four orthogonal neighbours, bounds unchecked."""
        return (
            Coord(self.x - 1, self.y),
            Coord(self.x + 1, self.y),
            Coord(self.x, self.y - 1),
            Coord(self.x, self.y + 1),
        )


def in_bounds(coord: Coord, size: int = BOARD_SIZE) -> bool:
    """Return whether the coordinate lies on a size x size grid."""
    return 0 <= coord.x < size and 0 <= coord.y < size
