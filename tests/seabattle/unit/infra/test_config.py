from __future__ import annotations

import os

from seabattle.infra.config import (
    GameConfig,
    load_default_env_files,
    load_env_file,
    load_game_config,
    read_env_file,
)


def test_load_env_file_sets_values_with_overwrite_by_default(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "A=1\nB='two'\n#comment\nINVALID\nC=three\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("C", "already")
    monkeypatch.delenv("A", raising=False)
    monkeypatch.delenv("B", raising=False)
    load_env_file(str(env_file))
    assert os.environ.get("A") == "1"
    assert os.environ.get("B") == "two"
    assert os.environ.get("C") == "three"


def test_read_env_file_skips_comments_and_strips_quotes(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# header\n\nSEABATTLE_AI = \"hunt\"\n#SEABATTLE_SEED=1\n=orphan\nSEABATTLE_FLEET=classic=x\n",
        encoding="utf-8",
    )
    assert read_env_file(env_file) == {"SEABATTLE_AI": "hunt", "SEABATTLE_FLEET": "classic=x"}


def test_load_env_file_can_preserve_existing_values(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("C=three\n", encoding="utf-8")
    monkeypatch.setenv("C", "already")
    assert load_env_file(str(env_file), override_existing=False) == {}
    assert os.environ.get("C") == "already"


def test_load_env_file_missing_is_noop(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("SEABATTLE_FLEET", raising=False)
    load_env_file(str(tmp_path / ".env.missing"))
    assert "SEABATTLE_FLEET" not in os.environ


def test_load_default_env_files_honors_order(tmp_path, monkeypatch) -> None:
    app_env = tmp_path / ".env.app"
    app_local_env = tmp_path / ".env.app.local"
    app_env.write_text("A=app\nB=app\n", encoding="utf-8")
    app_local_env.write_text("B=app_local\n", encoding="utf-8")
    monkeypatch.delenv("A", raising=False)
    monkeypatch.delenv("B", raising=False)

    load_default_env_files(paths=(str(app_env), str(app_local_env)))

    assert os.environ.get("A") == "app"
    assert os.environ.get("B") == "app_local"


def test_load_game_config_defaults(monkeypatch) -> None:
    for name in (
        "SEABATTLE_FLEET",
        "SEABATTLE_AI",
        "SEABATTLE_SEED",
        "SEABATTLE_PLACEMENT_ATTEMPTS",
        "SEABATTLE_REVEAL_ENEMY",
    ):
        monkeypatch.delenv(name, raising=False)
    assert load_game_config() == GameConfig()


def test_load_game_config_reads_env(monkeypatch) -> None:
    monkeypatch.setenv("SEABATTLE_FLEET", "Classic")
    monkeypatch.setenv("SEABATTLE_AI", "hunt")
    monkeypatch.setenv("SEABATTLE_SEED", "42")
    monkeypatch.setenv("SEABATTLE_PLACEMENT_ATTEMPTS", "250")
    monkeypatch.setenv("SEABATTLE_REVEAL_ENEMY", "yes")
    config = load_game_config()
    assert config == GameConfig(fleet="classic", ai="hunt", seed=42, placement_attempts=250, reveal_enemy=True)


def test_load_game_config_ignores_bad_integers(monkeypatch) -> None:
    monkeypatch.setenv("SEABATTLE_SEED", "abc")
    monkeypatch.setenv("SEABATTLE_PLACEMENT_ATTEMPTS", "lots")
    config = load_game_config()
    assert config.seed is None
    assert config.placement_attempts == GameConfig().placement_attempts
