"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveFlag(IntFlag):
    """Derived move classification; a move may carry several flags."""

    NONE = 0
    CAPTURE = auto()
    DOUBLE_PAWN_PUSH = auto()
    EN_PASSANT = auto()
    KINGSIDE_CASTLE = auto()
    QUEENSIDE_CASTLE = auto()

    CASTLE = KINGSIDE_CASTLE | QUEENSIDE_CASTLE


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def kingside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_KINGSIDE if color == Color.WHITE else cls.BLACK_KINGSIDE

    @classmethod
    def queenside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_QUEENSIDE if color == Color.WHITE else cls.BLACK_QUEENSIDE

    @classmethod
    def both(cls, color: Color) -> CastlingRights:
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3


class GameStatus(IntEnum):
    """Why a game is (or is not) over."""

    IN_PROGRESS = 0
    CHECKMATE = 1
    STALEMATE = 2
    DRAW_BY_FIFTY_MOVE = 3
    DRAW_BY_INSUFFICIENT_MATERIAL = 4
    DRAW_BY_REPETITION = 5
    # Adjudicated by the host rather than by the board
    RESIGNATION = 6
    TIMEOUT = 7
    DRAW_BY_AGREEMENT = 8

    @property
    def is_draw(self) -> bool:
        return self in _DRAW_STATUSES

    @property
    def is_decisive(self) -> bool:
        return self in _DECISIVE_STATUSES


_DECISIVE_STATUSES = frozenset(
    {GameStatus.CHECKMATE, GameStatus.RESIGNATION, GameStatus.TIMEOUT}
)
_DRAW_STATUSES = frozenset(
    {
        GameStatus.STALEMATE,
        GameStatus.DRAW_BY_FIFTY_MOVE,
        GameStatus.DRAW_BY_INSUFFICIENT_MATERIAL,
        GameStatus.DRAW_BY_REPETITION,
        GameStatus.DRAW_BY_AGREEMENT,
    }
)
