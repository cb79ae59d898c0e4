from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .config import GameConfig, check_gravity_interval
from .grid import GameGrid
from .pieces import Piece, TetrominoType
from .selector import PieceSelector


logger = logging.getLogger(__name__)


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    ROTATE_CW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    PAUSE = 6
    RESTART = 7


class GameState(Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    PAUSED = "paused"
    GAME_OVER = "game_over"


# Values used by GameSnapshot.overlay()
EMPTY_CELL = 0
LOCKED_CELL = 1
ACTIVE_CELL = 2
GHOST_CELL = 3


def _frozen(arr: np.ndarray) -> np.ndarray:
    out = arr.copy()
    out.flags.writeable = False
    return out


@dataclass(frozen=True)
class PieceView:
    kind: TetrominoType
    layout: np.ndarray
    x: int
    y: int


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a session, handed to renderers once per frame."""

    board: np.ndarray
    active: Optional[PieceView]
    ghost_offset: int
    queue: Tuple[PieceView, ...]
    lines_cleared: int
    state: GameState
    gravity_ms: float

    def overlay(self) -> np.ndarray:
        out = self.board.astype(np.int8) * LOCKED_CELL
        if self.active is None:
            return out
        height, width = out.shape
        cells = np.argwhere(self.active.layout)
        if self.ghost_offset > 0:
            for r, c in cells:
                y = self.active.y + self.ghost_offset + int(r)
                x = self.active.x + int(c)
                if 0 <= y < height and 0 <= x < width:
                    out[y, x] = GHOST_CELL
        for r, c in cells:
            y = self.active.y + int(r)
            x = self.active.x + int(c)
            if 0 <= y < height and 0 <= x < width:
                out[y, x] = ACTIVE_CELL
        return out


class FallingBlockGame:
    """One game session: board, active piece, selector queue and gravity timer.

    Drivers call ``tick`` with elapsed milliseconds and the action methods in
    response to input. Every method runs synchronously; none raise during play.
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = (config or GameConfig()).validate()
        self.gravity_ms = float(self.config.gravity_ms)
        self.state = GameState.UNINITIALIZED
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.selector: Optional[PieceSelector] = None
        self.current_piece: Optional[Piece] = None
        self.lines_cleared = 0
        self.elapsed_ms = 0.0
        self._handlers: Dict[Action, Callable[[], bool]] = {
            Action.LEFT: self.move_left,
            Action.RIGHT: self.move_right,
            Action.ROTATE_CW: self.rotate_clockwise,
            Action.SOFT_DROP: self.soft_drop,
            Action.HARD_DROP: self.hard_drop,
            Action.PAUSE: self.toggle_pause,
            Action.RESTART: self.restart,
        }
        self._start()

    def _start(self) -> None:
        self.grid.clear()
        self.selector = PieceSelector(self.config.width, self.config.lookahead, self.rng)
        self.current_piece = None
        self.lines_cleared = 0
        self.elapsed_ms = 0.0
        self.state = GameState.ACTIVE

    # ----- queries -----
    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    @property
    def paused(self) -> bool:
        return self.state is GameState.PAUSED

    def _can_act(self) -> bool:
        return self.state is GameState.ACTIVE and self.current_piece is not None

    def ghost_offset(self) -> int:
        piece = self.current_piece
        if piece is None:
            return 0
        if not self.grid.is_valid_placement(piece.layout, piece.x, piece.y):
            return 0
        c = 0
        while self.grid.is_valid_placement(piece.layout, piece.x, piece.y + c + 1):
            c += 1
        return c

    def snapshot(self) -> GameSnapshot:
        piece = self.current_piece
        active = None
        if piece is not None:
            active = PieceView(piece.kind, _frozen(piece.layout), piece.x, piece.y)
        queue: Tuple[PieceView, ...] = ()
        if self.selector is not None:
            queue = tuple(
                PieceView(p.kind, _frozen(p.layout), p.x, p.y) for p in self.selector.queue
            )
        return GameSnapshot(
            board=_frozen(self.grid.grid),
            active=active,
            ghost_offset=self.ghost_offset() if self.config.ghost else 0,
            queue=queue,
            lines_cleared=self.lines_cleared,
            state=self.state,
            gravity_ms=self.gravity_ms,
        )

    # ----- settings -----
    def set_gravity_interval(self, ms: float) -> None:
        self.gravity_ms = check_gravity_interval(ms)

    # ----- per-frame update -----
    def tick(self, dt_ms: float) -> bool:
        """Advance the session by ``dt_ms`` milliseconds.

        Returns True when the active piece, board or state changed.
        """
        if self.state is not GameState.ACTIVE:
            return False
        if self.current_piece is None:
            self._spawn_piece()
            return True

        self.elapsed_ms += dt_ms
        changed = False
        while self.elapsed_ms >= self.gravity_ms:
            self.elapsed_ms -= self.gravity_ms
            changed = True
            if not self._step_down():
                self._lock_piece()
                self.elapsed_ms = 0.0
                break
        return changed

    def _spawn_piece(self) -> None:
        assert self.selector is not None
        piece = self.selector.pop_next()
        self.elapsed_ms = 0.0
        if not self.grid.is_valid_placement(piece.layout, piece.x, piece.y):
            logger.info("Spawn of %s blocked; game over after %d lines", piece.kind.name, self.lines_cleared)
            self.state = GameState.GAME_OVER
            return
        self.current_piece = piece
        logger.debug("Spawned %s at (%d, %d)", piece.kind.name, piece.x, piece.y)

    def _try_move(self, dx: int, dy: int) -> bool:
        piece = self.current_piece
        assert piece is not None
        if self.grid.is_valid_placement(piece.layout, piece.x + dx, piece.y + dy):
            piece.x += dx
            piece.y += dy
            return True
        return False

    def _step_down(self) -> bool:
        return self._try_move(0, 1)

    def _lock_piece(self) -> int:
        """Lock the active piece, clear completed rows and check for overflow."""
        piece = self.current_piece
        assert piece is not None
        self.grid.lock(piece.layout, piece.x, piece.y)
        self.current_piece = None
        logger.debug("Locked %s at (%d, %d)", piece.kind.name, piece.x, piece.y)

        rows = self.grid.find_completed_rows()
        removed = self.grid.compact(rows)
        if removed:
            self.lines_cleared += removed
            logger.debug("Cleared rows %s (total %d)", rows, self.lines_cleared)

        if self.grid.has_overflow():
            logger.info("Stack overflowed the buffer rows; game over after %d lines", self.lines_cleared)
            self.state = GameState.GAME_OVER
        return removed

    # ----- player actions -----
    def move_left(self) -> bool:
        return self._shift(-1, 0)

    def move_right(self) -> bool:
        return self._shift(1, 0)

    def soft_drop(self) -> bool:
        return self._shift(0, 1)

    def _shift(self, dx: int, dy: int) -> bool:
        if not self._can_act():
            return False
        if self._try_move(dx, dy):
            self.elapsed_ms = 0.0
            return True
        return False

    def hard_drop(self) -> bool:
        if not self._can_act():
            return False
        while self._step_down():
            pass
        self._lock_piece()
        self.elapsed_ms = 0.0
        return True

    def rotate_clockwise(self) -> bool:
        if not self._can_act():
            return False
        piece = self.current_piece
        assert piece is not None
        candidate = piece.rotated_layout()
        if not self.grid.is_valid_placement(candidate, piece.x, piece.y):
            return False
        piece.layout = candidate
        self.elapsed_ms = 0.0
        return True

    def toggle_pause(self) -> bool:
        if self.state is GameState.ACTIVE:
            self.state = GameState.PAUSED
        elif self.state is GameState.PAUSED:
            self.state = GameState.ACTIVE
        else:
            return False
        self.elapsed_ms = 0.0
        return True

    def restart(self, seed: Optional[int] = None) -> bool:
        """Start a fresh session. Without a seed the piece sequence keeps drawing
        from the current random stream instead of replaying it."""
        logger.info("Restarting session")
        if seed is not None:
            self.rng.seed(seed)
        self.state = GameState.UNINITIALIZED
        self._start()
        return True

    def apply(self, action: Action) -> bool:
        handler = self._handlers.get(Action(action))
        if handler is None:
            return False
        return handler()
