"""Position — complete game state (board + metadata) and move application."""

from __future__ import annotations

from dataclasses import dataclass

from chesstree.core.board import Board
from chesstree.core.castling import STANDARD_CASTLING, CastlingConfig
from chesstree.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chesstree.core.move import Move
from chesstree.core.piece import Piece
from chesstree.core.types import Square, file_of, make_square, rank_of
from chesstree.errors import IllegalMoveError


@dataclass(slots=True)
class _PositionState:
    """Snapshot saved before each move so we can undo it."""

    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    captured_piece: Piece | None


class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Positions handed out by the library are snapshots: :meth:`apply_move`
    returns a new instance and leaves the receiver untouched, so a snapshot
    can be read from several threads at once.  :meth:`make_move` /
    :meth:`unmake_move` mutate in place (Command pattern) and are reserved
    for private scratch copies, such as the one the move generator uses to
    test king safety.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "castling_config",
        "_history",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
        castling_config: CastlingConfig = STANDARD_CASTLING,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self.castling_config = castling_config
        self._history: list[_PositionState] = []

    # ── Public, non-mutating API ─────────────────────────────────────────

    def apply_move(self, move: Move) -> Position:
        """Return the position after *move*.

        The move is matched against the legal moves by origin, destination
        and promotion; its flags are recomputed rather than trusted.

        Raises:
            IllegalMoveError: *move* is not legal here.
        """
        from chesstree.core.move_generator import MoveGenerator

        legal = MoveGenerator(self).find_move(move.from_sq, move.to_sq, move.promotion)
        if legal is None:
            from chesstree.core.notation.fen import position_to_fen

            raise IllegalMoveError(move, position_to_fen(self))

        child = self.copy()
        child.make_move(legal)
        child._history.clear()
        return child

    def piece_at(self, sq: Square) -> Piece | None:
        return self.board[sq]

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Apply a generated *move* in place, pushing undo state."""
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        captured: Piece | None = None
        capture_sq = move.to_sq
        if move.flags & MoveFlag.EN_PASSANT:
            # En passant: the captured pawn sits behind the target square
            capture_sq = make_square(file_of(move.to_sq), rank_of(move.from_sq))
            captured = board[capture_sq]
        elif not move.flags & MoveFlag.CASTLE:
            captured = board[move.to_sq]

        self._history.append(
            _PositionState(
                castling=self.castling,
                en_passant=self.en_passant,
                halfmove_clock=self.halfmove_clock,
                captured_piece=captured,
            )
        )

        if move.flags & MoveFlag.CASTLE:
            self._castle(move, piece)
        else:
            board[move.from_sq] = None
            if captured is not None:
                board[capture_sq] = None
            placed_piece = piece
            if move.promotion is not None:
                placed_piece = Piece(piece.color, move.promotion)
            board[move.to_sq] = placed_piece

        # En passant target for the opponent
        self.en_passant = None
        if move.flags & MoveFlag.DOUBLE_PAWN_PUSH:
            self.en_passant = make_square(
                file_of(move.from_sq),
                (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
            )

        self._update_castling(move, piece)

        # Clocks
        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1

        self.side_to_move = self.side_to_move.opposite

    def unmake_move(self, move: Move) -> None:
        """Undo the last :meth:`make_move`."""
        state = self._history.pop()
        board = self.board

        self.side_to_move = self.side_to_move.opposite
        if self.side_to_move == Color.BLACK:
            self.fullmove_number -= 1

        if move.flags & MoveFlag.CASTLE:
            self._uncastle(move)
        else:
            piece = board[move.to_sq]
            assert piece is not None
            if move.promotion is not None:
                piece = Piece(piece.color, PieceType.PAWN)

            board[move.from_sq] = piece
            if move.flags & MoveFlag.EN_PASSANT:
                board[move.to_sq] = None
                ep_capture_sq = make_square(file_of(move.to_sq), rank_of(move.from_sq))
                board[ep_capture_sq] = state.captured_piece
            else:
                board[move.to_sq] = state.captured_piece

        self.castling = state.castling
        self.en_passant = state.en_passant
        self.halfmove_clock = state.halfmove_clock

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _castle_squares(
        self, move: Move, color: Color
    ) -> tuple[Square, Square, Square]:
        """(rook_from, king_to, rook_to) for a castling *move*."""
        kingside = bool(move.flags & MoveFlag.KINGSIDE_CASTLE)
        cfg = self.castling_config
        return (
            cfg.rook_home(color, kingside),
            cfg.king_destination(color, kingside),
            cfg.rook_destination(color, kingside),
        )

    def _castle(self, move: Move, king: Piece) -> None:
        board = self.board
        rook_from, king_to, rook_to = self._castle_squares(move, king.color)
        rook = board[rook_from]
        assert rook is not None
        # Clear both origins first: in Chess960 the squares may overlap.
        board[move.from_sq] = None
        board[rook_from] = None
        board[king_to] = king
        board[rook_to] = rook

    def _uncastle(self, move: Move) -> None:
        board = self.board
        color = self.side_to_move
        rook_from, king_to, rook_to = self._castle_squares(move, color)
        king = board[king_to]
        rook = board[rook_to]
        assert king is not None and rook is not None
        board[king_to] = None
        board[rook_to] = None
        board[move.from_sq] = king
        board[rook_from] = rook

    def _update_castling(self, move: Move, piece: Piece) -> None:
        next_castling = self.castling
        if not next_castling:
            return
        if piece.piece_type == PieceType.KING:
            next_castling &= ~CastlingRights.both(piece.color)

        corners = self.castling_config.rook_corners()
        for sq in (move.from_sq, move.to_sq):
            right = corners.get(sq)
            if right is not None:
                next_castling &= ~right

        self.castling = next_castling

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Deep copy without history."""
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
            castling_config=self.castling_config,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
            and self.castling_config == other.castling_config
        )

    def __repr__(self) -> str:
        from chesstree.core.notation.fen import position_to_fen

        return f"Position({position_to_fen(self)!r})"


def apply_move(position: Position, move: Move) -> Position:
    """Functional form of :meth:`Position.apply_move`."""
    return position.apply_move(move)
