from __future__ import annotations

import math
import random
from collections import deque
from typing import Deque, List, Optional, Tuple

from .pieces import Piece, TetrominoType


INITIAL_WEIGHT = 5


class PieceSelector:
    """Weighted anti-repeat randomizer with a fixed-depth lookahead queue.

    Every catalog index carries a counter that starts at ``INITIAL_WEIGHT``.
    A draw samples ``floor(random() * weight**3)`` per index, nudges it by
    +/-0.5 and takes the smallest. The winner's counter is bumped, so recently
    dealt shapes lose ground to the ones that have been waiting. Counters are
    never reset within a session.
    """

    def __init__(self, board_width: int, lookahead: int = 3, rng: Optional[random.Random] = None) -> None:
        self.board_width = int(board_width)
        self.lookahead = int(lookahead)
        self.rng = rng or random.Random()
        self.weights: List[int] = [INITIAL_WEIGHT] * len(TetrominoType)
        self._queue: Deque[Piece] = deque()
        for _ in range(self.lookahead):
            self._push()

    def select_index(self) -> int:
        min_val: Optional[float] = None
        min_idx = 0
        for i, weight in enumerate(self.weights):
            rand_val = math.floor(self.rng.random() * weight ** 3)
            offset = 0.5 if self.rng.random() < 0.5 else -0.5
            adjusted = rand_val + offset
            if min_val is None or adjusted < min_val:
                min_val = adjusted
                min_idx = i
        self.weights[min_idx] += 1
        return min_idx

    def _push(self) -> None:
        kind = TetrominoType(self.select_index())
        self._queue.append(Piece.spawn(kind, self.board_width))

    def pop_next(self) -> Piece:
        self._push()
        return self._queue.popleft()

    @property
    def queue(self) -> Tuple[Piece, ...]:
        return tuple(self._queue)
