"""Text front-end that drives the engine from typed commands."""

from __future__ import annotations

import logging
from collections.abc import Callable

from seabattle.app.engine import FireResult, GameEngine
from seabattle.core.errors import SeaBattleError
from seabattle.core.models import BoardSide, CellState, Phase
from seabattle.ui.commands import (
    HELP_TEXT,
    CommandError,
    CommandType,
    ConsoleCommand,
    parse_command,
)

logger = logging.getLogger(__name__)

CELL_GLYPHS: dict[CellState, str] = {
    CellState.EMPTY: ".",
    CellState.SHIP: "#",
    CellState.MISS: "o",
    CellState.HIT: "x",
    CellState.SUNK: "X",
}


def render_board(title: str, rows: tuple[tuple[CellState, ...], ...]) -> str:
    """Render a snapshot as a titled text grid, x across and y down."""
    width = len(rows[0]) if rows else 0
    lines = [title, "   " + " ".join(str(x) for x in range(width))]
    for y, row in enumerate(rows):
        lines.append(f"{y:>2} " + " ".join(CELL_GLYPHS[state] for state in row))
    return "\n".join(lines)


class ConsoleGame:
    """Read-eval-render loop over a :class:`GameEngine`."""

    def __init__(
        self,
        engine: GameEngine,
        read_line: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self._engine = engine
        self._read_line = read_line
        self._write = write

    def run(self) -> None:
        """Play until the user quits or input ends."""
        self._write(HELP_TEXT)
        while True:
            self._render()
            if self._engine.phase is Phase.GAME_OVER:
                if not self._ask_play_again():
                    return
                continue
            try:
                line = self._read_line(self._prompt())
            except EOFError:
                return
            try:
                command = parse_command(line, self._engine.player_board.size)
            except CommandError as exc:
                self._write(str(exc))
                continue
            if command.kind is CommandType.QUIT:
                return
            try:
                self._dispatch(command)
            except SeaBattleError as exc:
                logger.warning("command_failed kind=%s error=%s", command.kind, exc)
                self._write(str(exc))

    def _dispatch(self, command: ConsoleCommand) -> None:
        engine = self._engine
        if command.kind is CommandType.HELP:
            self._write(HELP_TEXT)
        elif command.kind is CommandType.RESET:
            engine.reset()
        elif command.kind is CommandType.PLACE:
            if engine.phase is not Phase.SETUP:
                self._write("All ships are placed. Fire with X Y.")
                return
            engine.place_ship(command.x, command.y, command.orientation, command.size)
            self._write(engine.last_message)
        elif command.kind is CommandType.FIRE:
            if engine.phase is not Phase.PLAYING:
                self._write("Place your ships first: h X Y or v X Y.")
                return
            seen = len(engine.history)
            self._report(engine.fire_at(command.x, command.y), seen)

    def _report(self, result: FireResult, seen: int) -> None:
        if result.rejected:
            self._write(result.status)
            return
        for line in self._engine.history[seen:]:
            self._write(line)
        logger.debug(
            "fire_reported result=%s ai_shots=%d enemy_left=%d",
            result.shot_result,
            len(result.ai_shots),
            result.opponent_ships_remaining,
        )

    def _ask_play_again(self) -> bool:
        self._write(self._engine.last_message)
        try:
            answer = self._read_line("Play again? [y/n] ")
        except EOFError:
            return False
        if answer.strip().lower() in {"y", "yes"}:
            self._engine.acknowledge_game_over()
            return True
        return False

    def _render(self) -> None:
        engine = self._engine
        reveal = engine.phase is Phase.GAME_OVER
        self._write(render_board("Enemy", engine.board_snapshot(BoardSide.ENEMY, reveal=reveal)))
        self._write(render_board("You", engine.board_snapshot(BoardSide.PLAYER)))

    def _prompt(self) -> str:
        engine = self._engine
        if engine.phase is Phase.SETUP:
            return f"Place ship of size {engine.next_ship_size} ({engine.ships_to_place} left)> "
        return f"Fire (enemy ships left: {engine.enemy_board.ships_remaining})> "
