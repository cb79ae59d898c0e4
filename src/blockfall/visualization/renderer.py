from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from blockfall.game import GameSnapshot, GameState, TetrominoType
from blockfall.game.config import BUFFER_ROWS


BACKGROUND = (10, 10, 14)
FIELD = (30, 30, 36)
LOCKED = (85, 85, 85)
TEXT = (230, 230, 230)


def _color_for_kind(kind: TetrominoType) -> Tuple[int, int, int]:
    palette = {
        TetrominoType.O: (240, 240, 0),
        TetrominoType.I: (0, 240, 240),
        TetrominoType.Z: (240, 0, 0),
        TetrominoType.S: (0, 240, 0),
        TetrominoType.L: (240, 160, 0),
        TetrominoType.J: (0, 0, 240),
        TetrominoType.T: (160, 0, 240),
    }
    return palette.get(kind, (200, 200, 200))


class Renderer:
    """Draws snapshots; buffer rows are hidden and the queue sits on the right."""

    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        visible = height - BUFFER_ROWS
        panel_w = 6 * self.cell_size
        return (
            self.margin * 3 + width * self.cell_size + panel_w,
            self.margin * 2 + visible * self.cell_size,
        )

    def _cell(self, surf: pygame.Surface, x: int, y: int, color, width: int = 0) -> None:
        rect = pygame.Rect(
            x * self.cell_size,
            y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )
        pygame.draw.rect(surf, color, rect, width)

    def _field_surface(self, snap: GameSnapshot) -> pygame.Surface:
        board = snap.board[BUFFER_ROWS:]
        h, w = board.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(FIELD)
        for y, x in np.argwhere(board):
            self._cell(surf, int(x), int(y), LOCKED)
        piece = snap.active
        if piece is not None:
            color = _color_for_kind(piece.kind)
            for r, c in np.argwhere(piece.layout):
                gy = piece.y + snap.ghost_offset + int(r) - BUFFER_ROWS
                if snap.ghost_offset > 0 and gy >= 0:
                    self._cell(surf, piece.x + int(c), gy, color, 2)
            for r, c in np.argwhere(piece.layout):
                y = piece.y + int(r) - BUFFER_ROWS
                if y >= 0:
                    self._cell(surf, piece.x + int(c), y, color)
        return surf

    def _draw_queue(self, screen: pygame.Surface, snap: GameSnapshot, x0: int) -> int:
        y = self.margin
        for piece in snap.queue:
            rows = [row for row in piece.layout if row.any()]
            for r, row in enumerate(rows):
                for c, filled in enumerate(row):
                    if filled:
                        rect = pygame.Rect(
                            x0 + c * self.cell_size,
                            y + r * self.cell_size,
                            self.cell_size - 1,
                            self.cell_size - 1,
                        )
                        pygame.draw.rect(screen, _color_for_kind(piece.kind), rect)
            y += (len(rows) + 1) * self.cell_size
        return y

    def draw(self, screen: pygame.Surface, snap: GameSnapshot) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        field = self._field_surface(snap)
        screen.fill(BACKGROUND)
        screen.blit(field, (self.margin, self.margin))

        x0 = self.margin * 2 + field.get_width()
        y = self._draw_queue(screen, snap, x0)
        screen.blit(self._font.render(f"lines cleared: {snap.lines_cleared}", True, TEXT), (x0, y))

        banner = None
        if snap.state is GameState.PAUSED:
            banner = "PAUSED"
        elif snap.state is GameState.GAME_OVER:
            banner = "GAME OVER - R to restart"
        if banner is not None:
            text = self._font.render(banner, True, TEXT)
            rect = text.get_rect(center=(self.margin + field.get_width() // 2, screen.get_height() // 2))
            screen.blit(text, rect)
        pygame.display.flip()
