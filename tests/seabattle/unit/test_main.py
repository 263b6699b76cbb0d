from seabattle.infra.config import GameConfig
from seabattle.main import apply_cli_overrides, build_parser


def test_cli_overrides_only_passed_options() -> None:
    base = GameConfig(fleet="standard", ai="random", seed=None)
    args = build_parser().parse_args(["--seed", "9", "--ai", "hunt"])
    config = apply_cli_overrides(base, args)
    assert config == GameConfig(fleet="standard", ai="hunt", seed=9)


def test_cli_reveal_flag() -> None:
    args = build_parser().parse_args(["--reveal", "--fleet", "classic"])
    config = apply_cli_overrides(GameConfig(), args)
    assert config.reveal_enemy is True
    assert config.fleet == "classic"
