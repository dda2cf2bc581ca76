"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesstree.core.enums import Color, PieceType

# White pieces are written uppercase in FEN, black pieces lowercase.
_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_TYPES: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """A coloured piece; two pieces are equal when colour and kind match."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        letter = _LETTERS[self.piece_type]
        return letter if self.color == Color.WHITE else letter.lower()

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Piece for a FEN placement character, e.g. ``'n'`` → black knight."""
        piece_type = _TYPES.get(char.upper()) if len(char) == 1 else None
        if piece_type is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, piece_type)
