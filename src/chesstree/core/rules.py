"""High-level chess rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesstree.core.enums import Color, GameStatus, PieceType
from chesstree.core.move_generator import MoveGenerator
from chesstree.core.types import square_color
from chesstree.core.zobrist import hash_position

if TYPE_CHECKING:
    from chesstree.core.position import Position

FIFTY_MOVE_HALFMOVES = 100  # 100 half-moves = 50 full moves
REPETITION_LIMIT = 3

_HEAVY_OR_PAWN = (PieceType.PAWN, PieceType.ROOK, PieceType.QUEEN)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Policy: every draw rule below ends the game automatically; nothing is
    # left for the players to claim.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position)
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position)
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+minor vs K, or only bishops left, all on one square color."""
        board = position.board
        for color in (Color.WHITE, Color.BLACK):
            for ptype in _HEAVY_OR_PAWN:
                if board.has_piece(color, ptype):
                    return False

        knights: list[int] = []
        bishops: list[int] = []
        for color in (Color.WHITE, Color.BLACK):
            knights += board.pieces(color, PieceType.KNIGHT)
            bishops += board.pieces(color, PieceType.BISHOP)

        if len(knights) + len(bishops) <= 1:
            return True
        if knights:
            return False
        return len({square_color(sq) for sq in bishops}) == 1

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= FIFTY_MOVE_HALFMOVES

    @staticmethod
    def repetition_key(position: Position) -> int:
        """Identity of *position* for repetition counting.

        Covers placement, side to move and castling rights; the en passant
        square only counts when an en passant capture is actually legal.
        """
        gen = MoveGenerator(position)
        return hash_position(position, include_en_passant=gen.has_legal_en_passant())

    @staticmethod
    def status(position: Position, repetitions: int = 1) -> GameStatus:
        """Classify *position*; *repetitions* counts its occurrences so far.

        Precedence: no legal moves (mate / stalemate), fifty-move rule,
        insufficient material, threefold repetition.
        """
        gen = MoveGenerator(position)
        if not gen.generate_legal_moves():
            if gen.is_in_check(position.side_to_move):
                return GameStatus.CHECKMATE
            return GameStatus.STALEMATE

        if Rules.is_fifty_move_rule(position):
            return GameStatus.DRAW_BY_FIFTY_MOVE

        if Rules.is_insufficient_material(position):
            return GameStatus.DRAW_BY_INSUFFICIENT_MATERIAL

        if repetitions >= REPETITION_LIMIT:
            return GameStatus.DRAW_BY_REPETITION

        return GameStatus.IN_PROGRESS
