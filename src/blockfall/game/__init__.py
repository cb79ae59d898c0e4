"""Game module for blockfall.

Exports the falling-block engine and supporting classes:
- GameGrid: Locked cells, collision tests, row clearing
- Piece: Tetromino placement with clockwise rotation
- TetrominoType: Enum of catalog shapes
- PieceSelector: Weighted randomizer and lookahead queue
- GameConfig: Session settings and speed presets
- FallingBlockGame: Tick/action driven session state machine
"""

from .config import ConfigError, GameConfig, GravitySpeed
from .grid import GameGrid
from .pieces import SHAPES, Piece, TetrominoType, rotate_cw
from .selector import PieceSelector
from .core import Action, FallingBlockGame, GameSnapshot, GameState, PieceView

__all__ = [
    "ConfigError",
    "GameConfig",
    "GravitySpeed",
    "GameGrid",
    "SHAPES",
    "Piece",
    "TetrominoType",
    "rotate_cw",
    "PieceSelector",
    "Action",
    "FallingBlockGame",
    "GameSnapshot",
    "GameState",
    "PieceView",
]
