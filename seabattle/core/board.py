"""Board state representation and mutation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from seabattle.core.errors import CoordinateOutOfRangeError, RepeatedShotError
from seabattle.core.models import BOARD_SIZE, CellState, Coord, in_bounds
from seabattle.core.ship import Ship


@dataclass(frozen=True, slots=True)
class Cell:
    """Read-only view of one board cell."""

    x: int
    y: int
    ship: Ship | None
    was_shot: bool


@dataclass(slots=True)
class Board:
    """Numpy-backed board owning ship occupancy and shot state.

    ``ship_ids`` holds 0 for water and a positive id for each placed ship;
    ``shots`` marks every cell that has been fired at. Arrays are indexed
    ``[y, x]``.
    """

    is_enemy: bool = False
    size: int = BOARD_SIZE
    ship_ids: np.ndarray = field(init=False, repr=False)
    shots: np.ndarray = field(init=False, repr=False)
    fleet: dict[int, Ship] = field(default_factory=dict, init=False)
    ships_remaining: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.ship_ids = np.zeros((self.size, self.size), dtype=np.int16)
        self.shots = np.zeros((self.size, self.size), dtype=np.bool_)

    def in_bounds(self, x: int, y: int) -> bool:
        """Return whether the coordinate is in board bounds."""
        return in_bounds(Coord(x, y), self.size)

    def get_cell(self, x: int, y: int) -> Cell:
        """Return a view of the cell at (x, y)."""
        self._require_in_bounds(x, y)
        return Cell(x=x, y=y, ship=self._ship_at(x, y), was_shot=bool(self.shots[y, x]))

    def can_place_ship(self, ship: Ship, x: int, y: int) -> bool:
        """Return whether a ship fits at the anchor without overlap or orthogonal contact."""
        for cell in ship.cells(Coord(x, y)):
            if not self.in_bounds(cell.x, cell.y):
                return False
            if self.ship_ids[cell.y, cell.x] != 0:
                return False
            for neighbor in cell.neighbors():
                if not self.in_bounds(neighbor.x, neighbor.y):
                    continue
                if self.ship_ids[neighbor.y, neighbor.x] != 0:
                    return False
        return True

    def place_ship(self, ship: Ship, x: int, y: int) -> bool:
        """Place a ship anchored at (x, y); return False and leave the board untouched if invalid."""
        if not self.can_place_ship(ship, x, y):
            return False
        ship_id = len(self.fleet) + 1
        for cell in ship.cells(Coord(x, y)):
            self.ship_ids[cell.y, cell.x] = ship_id
        self.fleet[ship_id] = ship
        self.ships_remaining += 1
        return True

    def was_shot(self, x: int, y: int) -> bool:
        """Return whether this cell was previously targeted."""
        self._require_in_bounds(x, y)
        return bool(self.shots[y, x])

    def shoot(self, x: int, y: int) -> bool:
        """Fire at (x, y) and return whether a ship was hit."""
        self._require_in_bounds(x, y)
        if self.shots[y, x]:
            raise RepeatedShotError(x, y)
        self.shots[y, x] = True
        ship = self._ship_at(x, y)
        if ship is None:
            return False
        was_alive = ship.is_alive()
        ship.hit()
        if was_alive and not ship.is_alive():
            self.ships_remaining -= 1
        return True

    def unshot_cells(self) -> list[Coord]:
        """Return every coordinate not yet fired at."""
        ys, xs = np.nonzero(~self.shots)
        return [Coord(int(x), int(y)) for y, x in zip(ys, xs)]

    def all_ships_sunk(self) -> bool:
        return self.ships_remaining == 0

    def snapshot(self, reveal: bool = False) -> tuple[tuple[CellState, ...], ...]:
        """Return rows of cell states; enemy boards hide intact ship cells unless revealed."""
        show_ships = reveal or not self.is_enemy
        rows: list[tuple[CellState, ...]] = []
        for y in range(self.size):
            row: list[CellState] = []
            for x in range(self.size):
                row.append(self._cell_state(x, y, show_ships))
            rows.append(tuple(row))
        return tuple(rows)

    def _cell_state(self, x: int, y: int, show_ships: bool) -> CellState:
        ship = self._ship_at(x, y)
        if not self.shots[y, x]:
            if ship is not None and show_ships:
                return CellState.SHIP
            return CellState.EMPTY
        if ship is None:
            return CellState.MISS
        return CellState.HIT if ship.is_alive() else CellState.SUNK

    def _ship_at(self, x: int, y: int) -> Ship | None:
        ship_id = int(self.ship_ids[y, x])
        if ship_id == 0:
            return None
        return self.fleet[ship_id]

    def _require_in_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise CoordinateOutOfRangeError(x, y, self.size)
