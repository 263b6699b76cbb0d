import numpy as np
import pytest

from seabattle.core.board import Board
from seabattle.core.errors import CoordinateOutOfRangeError, RepeatedShotError
from seabattle.core.models import CellState, Orientation
from seabattle.core.ship import Ship


def _board_with_cruiser() -> Board:
    board = Board()
    assert board.place_ship(Ship(3, Orientation.HORIZONTAL), 0, 0)
    return board


def test_orthogonal_contact_is_rejected_and_diagonal_allowed() -> None:
    board = _board_with_cruiser()
    assert not board.can_place_ship(Ship(1), 0, 1)
    # (2, 1) sits directly below the cruiser's last cell.
    assert not board.can_place_ship(Ship(1), 2, 1)
    assert not board.can_place_ship(Ship(1), 3, 0)
    assert board.can_place_ship(Ship(1), 3, 1)
    assert board.place_ship(Ship(1), 3, 1)


def test_overlap_and_out_of_bounds_are_rejected() -> None:
    board = _board_with_cruiser()
    assert not board.can_place_ship(Ship(2, Orientation.VERTICAL), 1, 0)
    assert not board.can_place_ship(Ship(4, Orientation.HORIZONTAL), 7, 5)
    assert not board.can_place_ship(Ship(4, Orientation.VERTICAL), 5, 7)
    assert not board.can_place_ship(Ship(1), -1, 5)
    assert board.can_place_ship(Ship(4, Orientation.HORIZONTAL), 6, 5)
    assert board.can_place_ship(Ship(4, Orientation.VERTICAL), 5, 6)


def test_failed_placement_does_not_mutate() -> None:
    board = _board_with_cruiser()
    before = board.ship_ids.copy()
    assert not board.place_ship(Ship(2, Orientation.HORIZONTAL), 1, 1)
    assert np.array_equal(board.ship_ids, before)
    assert board.ships_remaining == 1


def test_placed_ship_is_shared_by_its_cells() -> None:
    board = _board_with_cruiser()
    ships = {id(board.get_cell(x, 0).ship) for x in range(3)}
    assert len(ships) == 1
    assert board.get_cell(3, 0).ship is None


def test_shoot_miss_hit_and_sink() -> None:
    board = Board()
    board.place_ship(Ship(2, Orientation.HORIZONTAL), 4, 4)
    assert board.ships_remaining == 1

    assert board.shoot(0, 0) is False
    assert board.get_cell(0, 0).was_shot
    assert board.shoot(4, 4) is True
    assert board.ships_remaining == 1
    assert board.shoot(5, 4) is True
    assert board.ships_remaining == 0
    assert board.all_ships_sunk()


def test_ships_remaining_drops_once_per_sunk_ship() -> None:
    board = Board()
    board.place_ship(Ship(1), 0, 0)
    board.place_ship(Ship(1), 5, 5)
    board.place_ship(Ship(2, Orientation.VERTICAL), 9, 0)
    counts = []
    for x, y in [(0, 0), (3, 3), (9, 0), (9, 1), (5, 5)]:
        board.shoot(x, y)
        counts.append(board.ships_remaining)
    assert counts == [2, 2, 2, 1, 0]


def test_single_ship_board_reaches_zero() -> None:
    board = Board()
    board.place_ship(Ship(1), 5, 5)
    assert board.shoot(5, 5)
    assert board.ships_remaining == 0


def test_repeated_shot_raises_without_changes() -> None:
    board = Board()
    board.place_ship(Ship(1), 5, 5)
    board.shoot(5, 5)
    with pytest.raises(RepeatedShotError):
        board.shoot(5, 5)
    assert board.ships_remaining == 0
    assert int(board.shots.sum()) == 1


def test_out_of_range_lookup_is_a_fault() -> None:
    board = Board()
    with pytest.raises(CoordinateOutOfRangeError):
        board.get_cell(10, 0)
    with pytest.raises(IndexError):
        board.shoot(0, -1)


def test_snapshot_states_and_enemy_obscuring() -> None:
    board = Board(is_enemy=True)
    board.place_ship(Ship(2, Orientation.HORIZONTAL), 0, 0)
    board.place_ship(Ship(1), 5, 5)
    board.shoot(0, 0)
    board.shoot(5, 5)
    board.shoot(9, 9)

    hidden = board.snapshot()
    assert hidden[0][0] is CellState.HIT
    assert hidden[0][1] is CellState.EMPTY
    assert hidden[5][5] is CellState.SUNK
    assert hidden[9][9] is CellState.MISS

    revealed = board.snapshot(reveal=True)
    assert revealed[0][1] is CellState.SHIP
    assert len(revealed) == 10 and all(len(row) == 10 for row in revealed)


def test_unshot_cells_shrink_as_shots_land() -> None:
    board = Board()
    assert len(board.unshot_cells()) == 100
    board.shoot(3, 7)
    cells = board.unshot_cells()
    assert len(cells) == 99
    assert all((cell.x, cell.y) != (3, 7) for cell in cells)
