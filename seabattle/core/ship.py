"""Ship model."""

from __future__ import annotations

from dataclasses import dataclass, field

from seabattle.core.models import MAX_SHIP_SIZE, MIN_SHIP_SIZE, Coord, Orientation


@dataclass(eq=False, slots=True)
class Ship:
    """A vessel with fixed size and orientation plus remaining health.

    Ships compare by identity: two ships of equal size are still distinct
    vessels once placed.
    """

    size: int
    orientation: Orientation = Orientation.VERTICAL
    health: int = field(init=False)

    def __post_init__(self) -> None:
        if not MIN_SHIP_SIZE <= self.size <= MAX_SHIP_SIZE:
            raise ValueError(
                f"ship size must be in [{MIN_SHIP_SIZE}, {MAX_SHIP_SIZE}], got {self.size}"
            )
        self.health = self.size

    @property
    def vertical(self) -> bool:
        return self.orientation is Orientation.VERTICAL

    def hit(self) -> None:
        """Register one hit; health never drops below zero."""
        if self.health > 0:
            self.health -= 1

    def is_alive(self) -> bool:
        return self.health > 0

    def cells(self, anchor: Coord) -> list[Coord]:
        """Compute covered cells from the left-most/top-most anchor."""
        if self.orientation is Orientation.HORIZONTAL:
            return [Coord(anchor.x + i, anchor.y) for i in range(self.size)]
        return [Coord(anchor.x, anchor.y + i) for i in range(self.size)]
