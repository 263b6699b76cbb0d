"""Game engine: setup, turn alternation, and game-over handling."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field

from seabattle.ai.random_shot import RandomShotAI
from seabattle.ai.strategy import AIStrategy
from seabattle.app.battle import AIShot, run_ai_volley, strategy_factory
from seabattle.core.board import Board
from seabattle.core.errors import FleetPlacementError, PhaseError
from seabattle.core.fleet import (
    DEFAULT_PLACEMENT_ATTEMPTS,
    STANDARD_FLEET,
    RandomSource,
    place_fleet_randomly,
    resolve_fleet,
    validate_fleet,
)
from seabattle.core.models import (
    BoardSide,
    CellState,
    Orientation,
    Outcome,
    Phase,
    ShotResult,
    Turn,
)
from seabattle.core.ship import Ship
from seabattle.infra.config import GameConfig

logger = logging.getLogger(__name__)

GameOverListener = Callable[[Outcome], None]

PLACE_FLEET_MESSAGE = "Place your fleet."
SHIP_OCCUPIED_MESSAGE = "A ship is already placed here."
ALREADY_SHOT_MESSAGE = "This cell has already been shot."
WIN_MESSAGE = "CONGRATULATIONS, YOU WIN"
LOSS_MESSAGE = "SORRY, YOU LOSE"


@dataclass(frozen=True, slots=True)
class FireResult:
    """Outcome of a full player action (player shot plus any AI response)."""

    shot_result: ShotResult
    opponent_ships_remaining: int
    turn: Turn
    status: str
    ai_shots: tuple[AIShot, ...] = ()
    outcome: Outcome | None = None

    @property
    def rejected(self) -> bool:
        return self.shot_result is ShotResult.REJECTED


@dataclass(slots=True)
class _EngineState:
    """Mutable per-game state; replaced wholesale on reset."""

    player_board: Board
    enemy_board: Board
    pending_sizes: list[int]
    ai_strategy: AIStrategy
    phase: Phase = Phase.SETUP
    turn: Turn = Turn.PLAYER
    outcome: Outcome | None = None
    last_message: str = PLACE_FLEET_MESSAGE
    history: list[str] = field(default_factory=list)


class GameEngine:
    """Drives one human-vs-AI game through Setup, Playing and GameOver.

    The engine owns both boards. The presentation layer calls
    :meth:`place_ship` and :meth:`fire_at` and reads snapshots back; AI turns
    run synchronously inside :meth:`fire_at`.
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        fleet: tuple[int, ...] = STANDARD_FLEET,
        ai_factory: Callable[[], AIStrategy] | None = None,
        placement_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS,
        reveal_enemy: bool = False,
    ) -> None:
        valid, reason = validate_fleet(fleet)
        if not valid:
            raise ValueError(reason)
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._fleet = tuple(sorted(fleet, reverse=True))
        self._ai_factory = ai_factory or (lambda: RandomShotAI(self._rng))
        self._placement_attempts = placement_attempts
        self._reveal_enemy = reveal_enemy
        self._listeners: list[GameOverListener] = []
        self._state = self._new_state()

    @classmethod
    def from_config(cls, config: GameConfig) -> GameEngine:
        """Build an engine from loaded configuration."""
        rng = random.Random(config.seed)
        return cls(
            rng=rng,
            fleet=resolve_fleet(config.fleet),
            ai_factory=strategy_factory(config.ai, rng),
            placement_attempts=config.placement_attempts,
            reveal_enemy=config.reveal_enemy,
        )

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def turn(self) -> Turn:
        return self._state.turn

    @property
    def outcome(self) -> Outcome | None:
        return self._state.outcome

    @property
    def fleet(self) -> tuple[int, ...]:
        return self._fleet

    @property
    def ships_to_place(self) -> int:
        return len(self._state.pending_sizes)

    @property
    def pending_sizes(self) -> tuple[int, ...]:
        return tuple(self._state.pending_sizes)

    @property
    def next_ship_size(self) -> int | None:
        pending = self._state.pending_sizes
        return pending[0] if pending else None

    @property
    def player_board(self) -> Board:
        return self._state.player_board

    @property
    def enemy_board(self) -> Board:
        return self._state.enemy_board

    @property
    def last_message(self) -> str:
        return self._state.last_message

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._state.history)

    def add_game_over_listener(self, listener: GameOverListener) -> None:
        """Register a callback invoked once with the outcome when a game ends."""
        self._listeners.append(listener)

    def remove_game_over_listener(self, listener: GameOverListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def place_ship(
        self,
        x: int,
        y: int,
        orientation: Orientation,
        size: int | None = None,
    ) -> bool:
        """Place one of the player's pending ships anchored at (x, y).

        ``size`` defaults to the largest ship still pending. A rejected
        placement leaves the quota untouched so the caller can retry. Placing
        the last ship also places the enemy fleet; if that raises
        ``FleetPlacementError`` the engine is left exactly as it was.
        """
        self._require_phase(Phase.SETUP)
        state = self._state
        if size is None:
            size = state.pending_sizes[0]
        elif size not in state.pending_sizes:
            self._set_message(f"No ship of size {size} left to place.")
            return False

        board = state.player_board
        if board.in_bounds(x, y) and board.get_cell(x, y).ship is not None:
            self._set_message(SHIP_OCCUPIED_MESSAGE)
            return False

        ship = Ship(size, orientation)
        if not board.can_place_ship(ship, x, y):
            logger.debug(
                "placement_rejected size=%d x=%d y=%d orientation=%s", size, x, y, orientation
            )
            self._set_message(f"Cannot place a ship of size {size} at ({x}, {y}).")
            return False

        remaining = list(state.pending_sizes)
        remaining.remove(size)
        # The enemy fleet is generated before anything is committed.
        enemy_board = None if remaining else self._generate_enemy_board()

        board.place_ship(ship, x, y)
        state.pending_sizes = remaining
        logger.debug("placement_accepted size=%d x=%d y=%d orientation=%s", size, x, y, orientation)
        if enemy_board is None:
            self._set_message(f"Placed ship of size {size}. {len(remaining)} left to place.")
        else:
            self._start_battle(enemy_board)
        return True

    def fire_at(self, x: int, y: int) -> FireResult:
        """Fire at the enemy board; an AI volley follows any miss."""
        self._require_phase(Phase.PLAYING)
        state = self._state
        enemy = state.enemy_board
        if enemy.was_shot(x, y):
            self._set_message(ALREADY_SHOT_MESSAGE)
            return self._fire_result(ShotResult.REJECTED)

        hit = enemy.shoot(x, y)
        ship = enemy.get_cell(x, y).ship
        if ship is not None and not ship.is_alive():
            self._record(f"You fired at ({x}, {y}): sunk a ship of size {ship.size}.")
        else:
            self._record(f"You fired at ({x}, {y}): {'hit' if hit else 'miss'}.")
        shot_result = ShotResult.HIT if hit else ShotResult.MISS

        if enemy.all_ships_sunk():
            self._finish(Outcome.WIN)
            return self._fire_result(shot_result)
        if hit:
            return self._fire_result(shot_result)

        state.turn = Turn.AI
        volley = run_ai_volley(state.player_board, state.ai_strategy)
        for shot in volley:
            verdict = "sunk a ship" if shot.sunk else ("hit" if shot.hit else "miss")
            self._record(f"AI fired at ({shot.coord.x}, {shot.coord.y}): {verdict}.")
        if state.player_board.all_ships_sunk():
            self._finish(Outcome.LOSS)
        else:
            state.turn = Turn.PLAYER
        return self._fire_result(shot_result, tuple(volley))

    def board_snapshot(
        self, which: BoardSide, reveal: bool = False
    ) -> tuple[tuple[CellState, ...], ...]:
        """Return a render-ready grid for one side."""
        if which is BoardSide.PLAYER:
            return self._state.player_board.snapshot()
        return self._state.enemy_board.snapshot(reveal=reveal or self._reveal_enemy)

    def acknowledge_game_over(self) -> None:
        """Dismiss the result and start a fresh game."""
        self._require_phase(Phase.GAME_OVER)
        self.reset()

    def reset(self) -> None:
        """Discard both boards and return to setup."""
        self._state = self._new_state()
        logger.info("game_reset ships_to_place=%d", self.ships_to_place)

    def _new_state(self) -> _EngineState:
        return _EngineState(
            player_board=Board(is_enemy=False),
            enemy_board=Board(is_enemy=True),
            pending_sizes=list(self._fleet),
            ai_strategy=self._ai_factory(),
        )

    def _generate_enemy_board(self) -> Board:
        board = Board(is_enemy=True)
        try:
            place_fleet_randomly(board, self._fleet, self._rng, self._placement_attempts)
        except FleetPlacementError:
            logger.warning("enemy_fleet_placement_failed attempts=%d", self._placement_attempts)
            raise
        return board

    def _start_battle(self, enemy_board: Board) -> None:
        state = self._state
        state.enemy_board = enemy_board
        state.phase = Phase.PLAYING
        state.turn = Turn.PLAYER
        self._set_message("Battle started. Your turn.")
        logger.info("phase=%s enemy_ships=%d", state.phase.name, state.enemy_board.ships_remaining)

    def _finish(self, outcome: Outcome) -> None:
        state = self._state
        state.phase = Phase.GAME_OVER
        state.outcome = outcome
        state.turn = Turn.PLAYER if outcome is Outcome.WIN else Turn.AI
        self._record(WIN_MESSAGE if outcome is Outcome.WIN else LOSS_MESSAGE)
        logger.info("phase=%s outcome=%s", state.phase.name, outcome.name)
        for listener in tuple(self._listeners):
            listener(outcome)

    def _fire_result(
        self, shot_result: ShotResult, ai_shots: tuple[AIShot, ...] = ()
    ) -> FireResult:
        state = self._state
        return FireResult(
            shot_result=shot_result,
            opponent_ships_remaining=state.enemy_board.ships_remaining,
            turn=state.turn,
            status=state.last_message,
            ai_shots=ai_shots,
            outcome=state.outcome,
        )

    def _record(self, message: str) -> None:
        self._state.last_message = message
        self._state.history.append(message)

    def _set_message(self, message: str) -> None:
        self._state.last_message = message

    def _require_phase(self, phase: Phase) -> None:
        if self._state.phase is not phase:
            raise PhaseError(
                f"operation requires phase {phase.name}, engine is in {self._state.phase.name}"
            )
