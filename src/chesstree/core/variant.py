"""Variant configuration: starting position and castling geometry."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chesstree.core.castling import STANDARD_CASTLING, CastlingConfig
from chesstree.core.enums import Color, PieceType
from chesstree.core.notation.fen import STARTING_FEN, position_from_fen
from chesstree.core.piece import Piece
from chesstree.core.position import Position
from chesstree.core.types import file_of, make_square, rank_of
from chesstree.errors import FenError

_LOGGER = logging.getLogger(__name__)

STANDARD = "Standard"
FROM_POSITION = "From Position"
CHESS960 = "Chess960"


@dataclass(frozen=True, slots=True)
class Variant:
    """Rules configuration handed to a :class:`~chesstree.game.game.Game`."""

    name: str = STANDARD
    starting_fen: str = STARTING_FEN
    castling: CastlingConfig = field(default=STANDARD_CASTLING)

    @classmethod
    def standard(cls) -> Variant:
        return cls()

    @classmethod
    def from_position(cls, fen: str) -> Variant:
        """Standard rules starting from *fen* (validated eagerly)."""
        position_from_fen(fen)
        if fen == STARTING_FEN:
            return cls()
        return cls(FROM_POSITION, fen, STANDARD_CASTLING)

    @classmethod
    def chess960(cls, fen: str) -> Variant:
        """Chess960 starting from *fen*.

        The king file and the two rook files are read from the back rank:
        the king, then the outermost rook on each side of it.

        Raises:
            FenError: *fen* is malformed, or the back rank has no king
                standing between two rooks.
        """
        config = _castling_from_back_rank(position_from_fen(fen), fen)
        _LOGGER.debug(
            "Chess960 castling files: king=%d rooks=%d/%d",
            config.king_file,
            config.queenside_rook_file,
            config.kingside_rook_file,
        )
        return cls(CHESS960, fen, config)

    @property
    def is_chess960(self) -> bool:
        return self.castling.chess960

    @property
    def is_standard_start(self) -> bool:
        return self.starting_fen == STARTING_FEN and not self.is_chess960

    def initial_position(self) -> Position:
        return position_from_fen(self.starting_fen, self.castling)


def _castling_from_back_rank(position: Position, fen: str) -> CastlingConfig:
    board = position.board
    for color, rank in ((Color.WHITE, 0), (Color.BLACK, 7)):
        kings = [
            sq for sq in board.pieces(color, PieceType.KING) if rank_of(sq) == rank
        ]
        if len(kings) != 1:
            continue
        king_file = file_of(kings[0])
        rook = Piece(color, PieceType.ROOK)
        rook_files = [f for f in range(8) if board[make_square(f, rank)] == rook]
        left = [f for f in rook_files if f < king_file]
        right = [f for f in rook_files if f > king_file]
        if left and right:
            return CastlingConfig(
                king_file=king_file,
                queenside_rook_file=left[0],
                kingside_rook_file=right[-1],
                chess960=True,
            )
    raise FenError("Chess960 back rank needs a king between two rooks", fen)
