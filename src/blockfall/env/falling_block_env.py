from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import Action, FallingBlockGame, GameConfig, TetrominoType
from blockfall.game.core import ACTIVE_CELL, GHOST_CELL, LOCKED_CELL


# Env action index -> engine action. Pause and restart are not exposed to agents.
ENV_ACTIONS = (
    Action.NONE,
    Action.LEFT,
    Action.RIGHT,
    Action.ROTATE_CW,
    Action.SOFT_DROP,
    Action.HARD_DROP,
)

_PALETTE = {
    0: (30, 30, 36),
    LOCKED_CELL: (85, 85, 85),
    ACTIVE_CELL: (70, 200, 120),
    GHOST_CELL: (55, 70, 60),
}


class FallingBlockEnv(gym.Env):
    """Gymnasium wrapper that advances gravity by one interval per step."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 4}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = FallingBlockGame(config)
        self.render_mode = render_mode
        self.terminal_penalty = float(terminal_penalty)

        cfg = self.game.config
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=GHOST_CELL, shape=(cfg.height, cfg.width), dtype=np.int8),
                "queue": spaces.Box(low=0, high=len(TetrominoType) - 1, shape=(cfg.lookahead,), dtype=np.int8),
            }
        )
        self.action_space = spaces.Discrete(len(ENV_ACTIONS))
        self._last_obs: Optional[Dict[str, Any]] = None

    def _ensure_piece(self) -> None:
        if self.game.current_piece is None:
            self.game.tick(0.0)

    def _get_obs(self) -> Dict[str, Any]:
        snap = self.game.snapshot()
        queue = np.array([int(p.kind) for p in snap.queue], dtype=np.int8)
        return {"board": snap.overlay(), "queue": queue}

    def _get_info(self) -> Dict[str, Any]:
        return {
            "lines_cleared": self.game.lines_cleared,
            "state": self.game.state.value,
            "ghost_offset": self.game.ghost_offset(),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.restart(seed)
        self._ensure_piece()
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        if not self.action_space.contains(int(action)):
            raise ValueError(f"Action {action!r} is outside {self.action_space}")
        lines_before = self.game.lines_cleared

        applied = self.game.apply(ENV_ACTIONS[int(action)])
        self.game.tick(self.game.gravity_ms)
        if not self.game.game_over:
            self._ensure_piece()

        terminated = bool(self.game.game_over)
        reward = float(self.game.lines_cleared - lines_before)
        if terminated:
            reward += self.terminal_penalty

        obs = self._get_obs()
        info = self._get_info()
        info["action_applied"] = applied
        self._last_obs = obs
        return obs, reward, terminated, False, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self._last_obs["board"] if self._last_obs is not None else self.game.snapshot().overlay()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = _PALETTE[int(grid[y, x])]
            return img
        return None

    def close(self) -> None:
        pass
