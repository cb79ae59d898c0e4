import os

import pygame
import pytest

from blockfall.game import Action, FallingBlockGame, GameConfig, GameState
from blockfall.visualization.human_play import action_for_key, build_parser
from blockfall.visualization.renderer import Renderer


@pytest.fixture
def screen(monkeypatch):
    monkeypatch.setitem(os.environ, "SDL_VIDEODRIVER", "dummy")
    pygame.init()
    renderer = Renderer(cell_size=10, margin=5)
    surf = pygame.display.set_mode(renderer.window_size(10, 22))
    yield renderer, surf
    pygame.quit()


def test_window_hides_buffer_rows():
    renderer = Renderer(cell_size=10, margin=5)
    assert renderer.window_size(10, 22) == (5 * 3 + 100 + 60, 5 * 2 + 200)


def test_draw_every_state(screen):
    renderer, surf = screen
    game = FallingBlockGame(GameConfig(random_seed=0))
    game.tick(0)
    renderer.draw(surf, game.snapshot())
    game.toggle_pause()
    renderer.draw(surf, game.snapshot())
    game.state = GameState.GAME_OVER
    renderer.draw(surf, game.snapshot())


def test_restart_key_only_after_game_over():
    game = FallingBlockGame()
    assert action_for_key(pygame.K_r, game) is None
    assert action_for_key(pygame.K_SPACE, game) is Action.HARD_DROP
    game.state = GameState.GAME_OVER
    assert action_for_key(pygame.K_r, game) is Action.RESTART


def test_cli_options():
    args = build_parser().parse_args(["--speed", "fast", "--no-ghost", "--seed", "3"])
    assert args.speed == "fast"
    assert args.no_ghost
    assert args.seed == 3
