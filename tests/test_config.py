import pytest

from blockfall.game import ConfigError, FallingBlockGame, GameConfig, GravitySpeed


def test_defaults():
    cfg = GameConfig()
    assert (cfg.width, cfg.height, cfg.lookahead) == (10, 22, 3)
    assert cfg.gravity_ms == 250
    assert cfg.ghost is True


def test_speed_presets():
    assert [int(s) for s in GravitySpeed] == [500, 250, 100]


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"width": 0}, "width"),
        ({"width": -3}, "width"),
        ({"height": 0}, "height"),
        ({"height": 2}, "height"),
        ({"lookahead": 0}, "lookahead"),
        ({"gravity_ms": 0}, "gravity_ms"),
        ({"gravity_ms": -10}, "gravity_ms"),
    ],
)
def test_bad_config_fails_at_construction(kwargs, field):
    with pytest.raises(ConfigError, match=field):
        FallingBlockGame(GameConfig(**kwargs))


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)


def test_smallest_board_is_accepted():
    game = FallingBlockGame(GameConfig(width=1, height=3, lookahead=1, random_seed=0))
    game.tick(0)
    assert game.game_over  # nothing in the catalog fits a single column


def test_runtime_gravity_change_validated():
    game = FallingBlockGame()
    with pytest.raises(ConfigError):
        game.set_gravity_interval(0)
    game.set_gravity_interval(GravitySpeed.FAST)
    assert game.gravity_ms == 100
