"""chesstree — chess rules, notation and branching game records."""

import logging

from chesstree.core import (
    STARTING_FEN,
    Color,
    GameResult,
    GameStatus,
    Move,
    PieceType,
    Position,
    Variant,
    apply_move,
    attacked_squares,
    legal_moves,
    move_to_san,
    parse_san,
    perft,
    position_from_fen,
    position_to_fen,
)
from chesstree.errors import (
    AmbiguousMoveError,
    ChessError,
    FenError,
    GameOverError,
    IllegalMoveError,
    InvalidPositionError,
    MoveError,
    NavigationError,
    NoChildError,
    NoParentError,
    NoSuchMoveError,
    PgnError,
)
from chesstree.game import Game, GameNode, Outcome

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "STARTING_FEN",
    "Color",
    "Game",
    "GameNode",
    "GameResult",
    "GameStatus",
    "Move",
    "Outcome",
    "PieceType",
    "Position",
    "Variant",
    "apply_move",
    "attacked_squares",
    "legal_moves",
    "move_to_san",
    "parse_san",
    "perft",
    "position_from_fen",
    "position_to_fen",
    # Errors
    "AmbiguousMoveError",
    "ChessError",
    "FenError",
    "GameOverError",
    "IllegalMoveError",
    "InvalidPositionError",
    "MoveError",
    "NavigationError",
    "NoChildError",
    "NoParentError",
    "NoSuchMoveError",
    "PgnError",
]
