"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass, field

from chesstree.core.enums import MoveFlag, PieceType
from chesstree.core.types import Square, parse_square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}
_PROMO_TYPES: dict[str, PieceType] = {v: k for k, v in _PROMO_CHARS.items()}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    ``flags`` are derived by the move generator. They are excluded from
    equality and hashing, so ``Move(E2, E4)`` equals the generated
    ``Move(E2, E4, flags=MoveFlag.DOUBLE_PAWN_PUSH)``.
    """

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None
    flags: MoveFlag = field(default=MoveFlag.NONE, compare=False)

    # ── Flag helpers ─────────────────────────────────────────────────────

    @property
    def is_capture(self) -> bool:
        return bool(self.flags & MoveFlag.CAPTURE)

    @property
    def is_en_passant(self) -> bool:
        return bool(self.flags & MoveFlag.EN_PASSANT)

    @property
    def is_castle(self) -> bool:
        return bool(self.flags & MoveFlag.CASTLE)

    @property
    def is_double_pawn_push(self) -> bool:
        return bool(self.flags & MoveFlag.DOUBLE_PAWN_PUSH)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Parse ``e2e4`` / ``e7e8q``. Flags are left empty."""
        if len(text) not in (4, 5):
            raise ValueError(f"Invalid UCI move: {text!r}")
        from_sq = parse_square(text[0:2])
        to_sq = parse_square(text[2:4])
        promotion: PieceType | None = None
        if len(text) == 5:
            try:
                promotion = _PROMO_TYPES[text[4]]
            except KeyError:
                raise ValueError(f"Invalid UCI promotion: {text!r}") from None
        return cls(from_sq, to_sq, promotion)
