"""Application configuration and env loading."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from seabattle.core.fleet import DEFAULT_PLACEMENT_ATTEMPTS


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Immutable game settings sourced from environment."""

    fleet: str = "standard"
    ai: str = "random"
    seed: int | None = None
    placement_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS
    reveal_enemy: bool = False


def load_game_config() -> GameConfig:
    """Load game settings from ``SEABATTLE_*`` env vars."""
    seed_raw = os.getenv("SEABATTLE_SEED", "").strip()
    return GameConfig(
        fleet=os.getenv("SEABATTLE_FLEET", "standard").strip().lower() or "standard",
        ai=os.getenv("SEABATTLE_AI", "random").strip().lower() or "random",
        seed=_int_or_none(seed_raw),
        placement_attempts=max(1, _int("SEABATTLE_PLACEMENT_ATTEMPTS", DEFAULT_PLACEMENT_ATTEMPTS)),
        reveal_enemy=_flag("SEABATTLE_REVEAL_ENEMY", False),
    )


DEFAULT_ENV_FILES: tuple[str, ...] = (
    "appdata/config/.env.app",
    "appdata/config/.env.app.local",
    ".env.app",
    ".env.app.local",
)


def read_env_file(path: str | Path) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines from ``path``; a missing file reads as empty."""
    env_path = Path(path)
    if not env_path.is_file():
        return {}
    values: dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        entry = _parse_env_line(line)
        if entry is not None:
            values[entry[0]] = entry[1]
    return values


def load_env_file(path: str | Path = ".env", *, override_existing: bool = True) -> dict[str, str]:
    """Export one env file into ``os.environ`` and return what was set."""
    applied = {
        key: value
        for key, value in read_env_file(path).items()
        if override_existing or key not in os.environ
    }
    os.environ.update(applied)
    return applied


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str | Path] = DEFAULT_ENV_FILES
) -> None:
    """Load each env file in turn, so later files win.

    Relative paths resolve against the working directory.
    """
    for path in paths:
        load_env_file(path, override_existing=override_existing)


def _parse_env_line(line: str) -> tuple[str, str] | None:
    key, sep, value = line.strip().partition("=")
    key = key.strip()
    if not sep or not key or key.startswith("#"):
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] in "'\"" and value[-1] == value[0]:
        value = value[1:-1]
    return key, value


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = _int_or_none(raw.strip())
    return default if value is None else value


def _int_or_none(raw: str) -> int | None:
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None
