"""Game exception hierarchy."""

from __future__ import annotations


class SeaBattleError(Exception):
    """Base class for all game errors."""


class CoordinateOutOfRangeError(SeaBattleError, IndexError):
    """A board lookup was made outside the grid."""

    def __init__(self, x: int, y: int, size: int) -> None:
        super().__init__(f"coordinate ({x}, {y}) outside {size}x{size} board")
        self.x = x
        self.y = y


class RepeatedShotError(SeaBattleError, ValueError):
    """A cell was fired at twice."""

    def __init__(self, x: int, y: int) -> None:
        super().__init__(f"cell ({x}, {y}) has already been shot")
        self.x = x
        self.y = y


class PhaseError(SeaBattleError, RuntimeError):
    """An engine operation was called in the wrong phase."""


class FleetPlacementError(SeaBattleError, RuntimeError):
    """Random fleet placement ran out of attempts."""
