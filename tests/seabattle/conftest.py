from __future__ import annotations

import random
from collections import deque
from collections.abc import Callable, Iterable

import pytest

from seabattle.app.engine import GameEngine
from seabattle.core.models import Orientation

# Non-touching anchors for the standard fleet (4, 3, 3, 2, 2), one ship per even row.
STANDARD_LAYOUT: tuple[tuple[int, int], ...] = ((0, 0), (0, 2), (0, 4), (0, 6), (0, 8))


class ScriptedRandom:
    """Random source that replays fixed draws."""

    def __init__(self, ints: Iterable[int] = (), floats: Iterable[float] = ()) -> None:
        self._ints = deque(ints)
        self._floats = deque(floats)

    @property
    def remaining_ints(self) -> int:
        return len(self._ints)

    def extend(self, ints: Iterable[int]) -> None:
        self._ints.extend(ints)

    def randrange(self, stop: int) -> int:
        value = self._ints.popleft()
        assert 0 <= value < stop
        return value

    def random(self) -> float:
        return self._floats.popleft() if self._floats else 0.9


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def scripted_rng() -> Callable[..., ScriptedRandom]:
    def _make(ints: Iterable[int] = (), floats: Iterable[float] = ()) -> ScriptedRandom:
        return ScriptedRandom(ints, floats)

    return _make


@pytest.fixture
def place_standard_fleet() -> Callable[[GameEngine], None]:
    def _place(engine: GameEngine) -> None:
        for x, y in STANDARD_LAYOUT:
            assert engine.place_ship(x, y, Orientation.HORIZONTAL)

    return _place
