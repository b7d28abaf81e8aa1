"""RuleRift: legality engine and move selectors for an inequality Latin-square duel."""

__version__ = "0.1.0"

from .board import Board, Cell, MoveUndo, create_board, preset_level, set_relation, validate_board
from .errors import (
    ConfigurationError,
    InvalidMoveError,
    InvalidStateError,
    RuleRiftError,
)
from .models import (
    AIConfig,
    AIType,
    Direction,
    GameStatus,
    Move,
    MoveType,
    Relation,
    SideResources,
)
from .moves import applied, apply_move, get_legal_moves, is_legal, play_move, undo_move
from .rules import game_status, has_legal_move, is_complete, valid_numbers

__all__ = [
    "AIConfig",
    "AIType",
    "Board",
    "Cell",
    "ConfigurationError",
    "Direction",
    "GameStatus",
    "InvalidMoveError",
    "InvalidStateError",
    "Move",
    "MoveType",
    "MoveUndo",
    "Relation",
    "RuleRiftError",
    "SideResources",
    "applied",
    "apply_move",
    "create_board",
    "game_status",
    "get_legal_moves",
    "has_legal_move",
    "is_complete",
    "is_legal",
    "play_move",
    "preset_level",
    "set_relation",
    "undo_move",
    "valid_numbers",
]
