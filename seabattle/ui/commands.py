"""Typed console command model and parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from seabattle.core.models import BOARD_SIZE, Orientation


class CommandType(str, Enum):
    PLACE = "place"
    FIRE = "fire"
    RESET = "reset"
    HELP = "help"
    QUIT = "quit"


@dataclass(frozen=True, slots=True)
class ConsoleCommand:
    kind: CommandType
    x: int | None = None
    y: int | None = None
    orientation: Orientation | None = None
    size: int | None = None


class CommandError(ValueError):
    """Raised for input the console cannot interpret."""


_WORDS = {
    "q": CommandType.QUIT,
    "quit": CommandType.QUIT,
    "r": CommandType.RESET,
    "reset": CommandType.RESET,
    "?": CommandType.HELP,
    "help": CommandType.HELP,
}
_ORIENTATIONS = {"h": Orientation.HORIZONTAL, "v": Orientation.VERTICAL}

HELP_TEXT = (
    "Setup:   h X Y [SIZE]  place horizontally, v X Y [SIZE]  place vertically\n"
    "Battle:  X Y  or  f X Y  fire at the enemy board\n"
    "Other:   r  restart, ?  help, q  quit"
)


def parse_command(line: str, size: int = BOARD_SIZE) -> ConsoleCommand:
    """Parse one line of console input."""
    parts = line.strip().lower().split()
    if not parts:
        raise CommandError("Empty command. Type ? for help.")

    head = parts[0]
    if head in _WORDS and len(parts) == 1:
        return ConsoleCommand(_WORDS[head])

    if head in _ORIENTATIONS:
        if len(parts) not in (3, 4):
            raise CommandError("Placement takes X Y and an optional SIZE.")
        x, y = _coords(parts[1], parts[2], size)
        ship_size = _integer(parts[3]) if len(parts) == 4 else None
        return ConsoleCommand(
            CommandType.PLACE, x=x, y=y, orientation=_ORIENTATIONS[head], size=ship_size
        )

    if head == "f":
        parts = parts[1:]
    if len(parts) == 2:
        x, y = _coords(parts[0], parts[1], size)
        return ConsoleCommand(CommandType.FIRE, x=x, y=y)
    raise CommandError(f"Unknown command '{line.strip()}'. Type ? for help.")


def _coords(raw_x: str, raw_y: str, size: int) -> tuple[int, int]:
    x = _integer(raw_x)
    y = _integer(raw_y)
    if not (0 <= x < size and 0 <= y < size):
        raise CommandError(f"Coordinates must be between 0 and {size - 1}.")
    return x, y


def _integer(raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise CommandError(f"'{raw}' is not a number.") from exc
