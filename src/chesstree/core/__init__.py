"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from chesstree.core import legal_moves, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    for move in legal_moves(pos):
        print(move, pos.apply_move(move))
"""

from chesstree.core.board import Board
from chesstree.core.castling import STANDARD_CASTLING, CastlingConfig
from chesstree.core.enums import (
    CastlingRights,
    Color,
    GameResult,
    GameStatus,
    MoveFlag,
    PieceType,
)
from chesstree.core.move import Move
from chesstree.core.move_generator import (
    MoveGenerator,
    attacked_squares,
    legal_moves,
    perft,
    pseudo_legal_moves,
)
from chesstree.core.notation import (
    STARTING_FEN,
    build_pgn,
    move_to_san,
    parse_san,
    pgn_movetext_from_tree,
    pgn_result_token,
    position_from_fen,
    position_to_fen,
)
from chesstree.core.piece import Piece
from chesstree.core.position import Position, apply_move
from chesstree.core.rules import Rules
from chesstree.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)
from chesstree.core.variant import Variant

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "GameStatus",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "CastlingConfig",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "STANDARD_CASTLING",
    "Variant",
    # Operations
    "apply_move",
    "attacked_squares",
    "legal_moves",
    "perft",
    "pseudo_legal_moves",
    # Notation
    "STARTING_FEN",
    "build_pgn",
    "move_to_san",
    "parse_san",
    "pgn_movetext_from_tree",
    "pgn_result_token",
    "position_from_fen",
    "position_to_fen",
]
