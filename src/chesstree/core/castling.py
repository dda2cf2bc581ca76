"""Castling geometry shared by the generator and the applier."""

from __future__ import annotations

from dataclasses import dataclass

from chesstree.core.enums import CastlingRights, Color
from chesstree.core.types import Square, make_square

# Destination files are the same in standard chess and Chess960.
KING_DEST_FILE = {True: 6, False: 2}
ROOK_DEST_FILE = {True: 5, False: 3}


def home_rank(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


@dataclass(frozen=True, slots=True)
class CastlingConfig:
    """Home files of the king and both castling rooks.

    ``chess960`` switches castling moves to the king-takes-own-rook encoding
    (``e1h1`` rather than ``e1g1``), which keeps castling distinguishable
    from an ordinary king step when the two share a destination.
    """

    king_file: int = 4
    queenside_rook_file: int = 0
    kingside_rook_file: int = 7
    chess960: bool = False

    def __post_init__(self) -> None:
        files = (self.queenside_rook_file, self.king_file, self.kingside_rook_file)
        if not (0 <= files[0] < files[1] < files[2] <= 7):
            raise ValueError(
                "Castling files must satisfy queenside rook < king < kingside rook, "
                f"got {files}"
            )

    def rook_file(self, kingside: bool) -> int:
        return self.kingside_rook_file if kingside else self.queenside_rook_file

    def king_home(self, color: Color) -> Square:
        return make_square(self.king_file, home_rank(color))

    def rook_home(self, color: Color, kingside: bool) -> Square:
        return make_square(self.rook_file(kingside), home_rank(color))

    def king_destination(self, color: Color, kingside: bool) -> Square:
        return make_square(KING_DEST_FILE[kingside], home_rank(color))

    def rook_destination(self, color: Color, kingside: bool) -> Square:
        return make_square(ROOK_DEST_FILE[kingside], home_rank(color))

    def move_target(self, color: Color, kingside: bool) -> Square:
        """``to_sq`` of the castling move in this configuration's encoding."""
        if self.chess960:
            return self.rook_home(color, kingside)
        return self.king_destination(color, kingside)

    def rook_corners(self) -> dict[Square, CastlingRights]:
        """Rook home square → castling right lost when that square changes."""
        return {
            self.rook_home(Color.WHITE, False): CastlingRights.WHITE_QUEENSIDE,
            self.rook_home(Color.WHITE, True): CastlingRights.WHITE_KINGSIDE,
            self.rook_home(Color.BLACK, False): CastlingRights.BLACK_QUEENSIDE,
            self.rook_home(Color.BLACK, True): CastlingRights.BLACK_KINGSIDE,
        }


STANDARD_CASTLING = CastlingConfig()
