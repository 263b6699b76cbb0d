"""Fleet rulesets and random fleet placement."""

from __future__ import annotations

import logging
from typing import Protocol

from seabattle.core.board import Board
from seabattle.core.errors import FleetPlacementError
from seabattle.core.models import MAX_SHIP_SIZE, MIN_SHIP_SIZE, Orientation
from seabattle.core.ship import Ship

logger = logging.getLogger(__name__)

STANDARD_FLEET: tuple[int, ...] = (4, 3, 3, 2, 2)
CLASSIC_FLEET: tuple[int, ...] = (4, 3, 3, 2, 2, 2, 1, 1, 1, 1)

FLEETS: dict[str, tuple[int, ...]] = {
    "standard": STANDARD_FLEET,
    "classic": CLASSIC_FLEET,
}

DEFAULT_PLACEMENT_ATTEMPTS = 10_000


class RandomSource(Protocol):
    """Subset of ``random.Random`` the game draws from."""

    def randrange(self, stop: int) -> int: ...

    def random(self) -> float: ...


def resolve_fleet(name: str) -> tuple[int, ...]:
    """Return ship sizes for a named ruleset."""
    key = name.strip().lower()
    if key not in FLEETS:
        raise ValueError(f"Unknown fleet '{name}'. Expected one of: {', '.join(FLEETS)}.")
    return FLEETS[key]


def random_orientation(rng: RandomSource) -> Orientation:
    """Coin-flip orientation."""
    return Orientation.VERTICAL if rng.random() < 0.5 else Orientation.HORIZONTAL


def place_fleet_randomly(
    board: Board,
    sizes: tuple[int, ...],
    rng: RandomSource,
    max_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS,
) -> None:
    """Place each ship by rejection sampling a uniform anchor and orientation.

    Raises ``FleetPlacementError`` when a ship cannot be placed within
    ``max_attempts`` draws, which only happens on crowded boards.
    """
    for size in sizes:
        for attempt in range(1, max_attempts + 1):
            x = rng.randrange(board.size)
            y = rng.randrange(board.size)
            if board.place_ship(Ship(size, random_orientation(rng)), x, y):
                logger.debug("fleet_ship_placed size=%d x=%d y=%d attempts=%d", size, x, y, attempt)
                break
        else:
            raise FleetPlacementError(
                f"Failed to place ship of size {size} after {max_attempts} attempts."
            )


def validate_fleet(sizes: tuple[int, ...]) -> tuple[bool, str]:
    """Validate that a fleet is non-empty and uses supported ship sizes."""
    if not sizes:
        return False, "Fleet must contain at least one ship."
    invalid = sorted({size for size in sizes if not MIN_SHIP_SIZE <= size <= MAX_SHIP_SIZE})
    if invalid:
        return False, f"Unsupported ship sizes: {', '.join(str(size) for size in invalid)}."
    return True, ""
