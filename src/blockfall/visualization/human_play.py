from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from blockfall.game import Action, FallingBlockGame, GameConfig, GravitySpeed
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_ESCAPE: Action.PAUSE,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play blockfall with the keyboard.")
    p.add_argument("--speed", choices=[s.name.lower() for s in GravitySpeed], default="normal")
    p.add_argument("--no-ghost", action="store_true", help="hide the landing projection")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", default="WARNING")
    return p


def action_for_key(key: int, game: FallingBlockGame) -> Optional[Action]:
    if key == pygame.K_r and game.game_over:
        return Action.RESTART
    return KEY_TO_ACTION.get(key)


def run(config: Optional[GameConfig] = None) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = FallingBlockGame(config)
        renderer = Renderer(cell_size=28)
        screen = pygame.display.set_mode(renderer.window_size(game.config.width, game.config.height))
        pygame.display.set_caption("blockfall")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_q:
                        running = False
                        continue
                    action = action_for_key(event.key, game)
                    if action is not None:
                        game.apply(action)

            game.tick(clock.tick(60))
            renderer.draw(screen, game.snapshot())
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    config = GameConfig(
        gravity_ms=float(GravitySpeed[args.speed.upper()]),
        ghost=not args.no_ghost,
        random_seed=args.seed,
    )
    run(config)


if __name__ == "__main__":  # pragma: no cover
    main()
