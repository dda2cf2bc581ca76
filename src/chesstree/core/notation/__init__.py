"""Notation package: FEN / SAN / PGN parsing and serialization."""

from chesstree.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from chesstree.core.notation.pgn import (
    build_pgn,
    pgn_movetext_from_tree,
    pgn_result_token,
)
from chesstree.core.notation.san import move_to_san, parse_san

__all__ = [
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
    "move_to_san",
    "parse_san",
    "pgn_result_token",
    "pgn_movetext_from_tree",
    "build_pgn",
]
