"""Game module for falling_blocks.

Exports the core game engine and supporting classes:
- Board: Occupancy grid, collision test and line clearing
- ActivePiece: The falling piece and its rotation
- PieceKind / PieceVariant: Catalog of the seven piece variants
- ScoringRules: Scoring, leveling and tick period configuration
- FallingBlocksGame: The game state machine
- ManualTickScheduler: Deterministic tick scheduler for headless use
"""

from .grid import Board
from .pieces import CATALOG, ActivePiece, PieceKind, PieceVariant, rotate_cells, variant
from .rules import ScoringRules
from .scheduler import ManualTickScheduler, TickScheduler
from .core import Action, FallingBlocksGame, GameConfig, GameSnapshot

__all__ = [
    "Board",
    "CATALOG",
    "ActivePiece",
    "PieceKind",
    "PieceVariant",
    "rotate_cells",
    "variant",
    "ScoringRules",
    "ManualTickScheduler",
    "TickScheduler",
    "Action",
    "FallingBlocksGame",
    "GameConfig",
    "GameSnapshot",
]
