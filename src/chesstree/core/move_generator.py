"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesstree.core.board import Board
from chesstree.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chesstree.core.move import Move
from chesstree.core.piece import Piece
from chesstree.core.types import Square, make_square
from chesstree.errors import InvalidPositionError

if TYPE_CHECKING:
    from chesstree.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)
_COLOR_OPPOSITE: tuple[Color, Color] = (Color.BLACK, Color.WHITE)
_PAWN_FORWARD: tuple[int, int] = (1, -1)  # rank delta per color
_PAWN_START_RANK: tuple[int, int] = (1, 6)
_PAWN_LAST_RANK: tuple[int, int] = (7, 0)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_attack_masks(targets: tuple[tuple[Square, ...], ...]) -> tuple[int, ...]:
    masks: list[int] = [0] * 64
    for sq in range(64):
        mask = 0
        for to_sq in targets[sq]:
            mask |= 1 << to_sq
        masks[sq] = mask
    return tuple(masks)


def _build_pawn_attacks() -> tuple[tuple[tuple[Square, ...], ...], ...]:
    """[color][sq] -> squares a pawn of *color* on *sq* attacks."""
    per_color: list[tuple[tuple[Square, ...], ...]] = []
    for color_idx in range(2):
        dr = _PAWN_FORWARD[color_idx]
        per_square: list[tuple[Square, ...]] = []
        for sq in range(64):
            file_idx = sq & 7
            ar = (sq >> 3) + dr
            attacks: list[Square] = []
            if 0 <= ar < 8:
                for af in (file_idx - 1, file_idx + 1):
                    if 0 <= af < 8:
                        attacks.append(make_square(af, ar))
            per_square.append(tuple(attacks))
        per_color.append(tuple(per_square))
    return tuple(per_color)


def _build_pawn_attacker_masks(
    pawn_attacks: tuple[tuple[tuple[Square, ...], ...], ...],
) -> tuple[tuple[int, ...], ...]:
    """[color][sq] -> bitboard of squares from which a pawn of *color* hits *sq*."""
    masks = [[0] * 64 for _ in range(2)]
    for color_idx in range(2):
        for from_sq in range(64):
            for to_sq in pawn_attacks[color_idx][from_sq]:
                masks[color_idx][to_sq] |= 1 << from_sq
    return tuple(tuple(row) for row in masks)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_KNIGHT_ATTACK_MASKS = _build_attack_masks(_KNIGHT_TARGETS)
_KING_ATTACK_MASKS = _build_attack_masks(_KING_TARGETS)
_PAWN_ATTACKS = _build_pawn_attacks()
_PAWN_ATTACKER_MASKS = _build_pawn_attacker_masks(_PAWN_ATTACKS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

# Movement table per kind: leapers use fixed targets, sliders use rays.
_STEP_TARGETS: dict[PieceType, tuple[tuple[Square, ...], ...]] = {
    PieceType.KNIGHT: _KNIGHT_TARGETS,
    PieceType.KING: _KING_TARGETS,
}
_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


# -- Attack detection ------------------------------------------------------


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color* on *board*?"""
    by_idx = int(by_color)

    if (
        board.pieces_bitboard(by_color, PieceType.PAWN)
        & _PAWN_ATTACKER_MASKS[by_idx][sq]
    ):
        return True

    if board.pieces_bitboard(by_color, PieceType.KNIGHT) & _KNIGHT_ATTACK_MASKS[sq]:
        return True

    if board.pieces_bitboard(by_color, PieceType.KING) & _KING_ATTACK_MASKS[sq]:
        return True

    queens = board.pieces_bitboard(by_color, PieceType.QUEEN)

    if board.pieces_bitboard(by_color, PieceType.BISHOP) or queens:
        for ray in _BISHOP_RAYS[sq]:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in (
                    PieceType.BISHOP,
                    PieceType.QUEEN,
                ):
                    return True
                break

    if board.pieces_bitboard(by_color, PieceType.ROOK) or queens:
        for ray in _ROOK_RAYS[sq]:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in (
                    PieceType.ROOK,
                    PieceType.QUEEN,
                ):
                    return True
                break

    return False


class MoveGenerator:
    """Generates moves for a given :class:`Position`.

    The position is never modified: king-safety filtering plays each
    candidate on a private copy with ``make_move`` / ``unmake_move``.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def validate(self) -> None:
        """Reject positions the generator cannot reason about.

        Raises:
            InvalidPositionError: a king count other than one per side, or
                the side that just moved left its king attacked (which
                would make capturing a king pseudo-legal).
        """
        board = self._board
        for color in (Color.WHITE, Color.BLACK):
            count = board.king_count(color)
            if count != 1:
                raise InvalidPositionError(
                    f"expected exactly one {color} king, found {count}"
                )
        mover = self._pos.side_to_move
        waiting = _COLOR_OPPOSITE[int(mover)]
        if self.is_in_check(waiting):
            raise InvalidPositionError(
                f"{waiting} king is attacked while {mover} is to move"
            )

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        self.validate()
        return self._filter_legal(self._pseudo_legal())

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        self.validate()
        return self._pseudo_legal()

    def find_move(
        self, from_sq: Square, to_sq: Square, promotion: PieceType | None = None
    ) -> Move | None:
        """The legal move matching the given coordinates, flags filled in."""
        for move in self.generate_legal_moves():
            if (
                move.from_sq == from_sq
                and move.to_sq == to_sq
                and move.promotion == promotion
            ):
                return move
        return None

    def has_legal_en_passant(self) -> bool:
        """Whether an en passant capture is actually playable right now."""
        if self._pos.en_passant is None:
            return False
        return any(m.flags & MoveFlag.EN_PASSANT for m in self.generate_legal_moves())

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return is_square_attacked(self._board, king_sq, _COLOR_OPPOSITE[int(color)])

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return is_square_attacked(self._board, sq, by_color)

    def attacked_squares(self, by_color: Color) -> frozenset[Square]:
        """Every square a piece of *by_color* attacks.

        Pins are ignored and occupied squares count regardless of the
        occupant's color, so defended pieces are included.
        """
        self.validate()
        board = self._board
        attacked: set[Square] = set()
        for sq in board.all_pieces(by_color):
            piece = board[sq]
            assert piece is not None
            ptype = piece.piece_type
            if ptype == PieceType.PAWN:
                attacked.update(_PAWN_ATTACKS[int(by_color)][sq])
            elif ptype in _STEP_TARGETS:
                attacked.update(_STEP_TARGETS[ptype][sq])
            else:
                for ray in _SLIDER_RAYS[ptype][sq]:
                    for to_sq in ray:
                        attacked.add(to_sq)
                        if board[to_sq] is not None:
                            break
        return frozenset(attacked)

    # -- Generation internals ----------------------------------------------

    def _pseudo_legal(self) -> list[Move]:
        moves: list[Move] = []
        color = self._pos.side_to_move
        board = self._board

        for sq in board.all_pieces(color):
            piece = board[sq]
            assert piece is not None
            ptype = piece.piece_type
            if ptype == PieceType.PAWN:
                self._gen_pawn(sq, color, moves)
            elif ptype in _STEP_TARGETS:
                self._gen_step(sq, color, _STEP_TARGETS[ptype][sq], moves)
                if ptype == PieceType.KING:
                    self._gen_castling(sq, color, moves)
            else:
                self._gen_sliding(sq, color, _SLIDER_RAYS[ptype][sq], moves)
        return moves

    def _filter_legal(self, candidates: list[Move]) -> list[Move]:
        moving_color = self._pos.side_to_move
        opponent = _COLOR_OPPOSITE[int(moving_color)]
        scratch = self._pos.copy()
        scratch_board = scratch.board
        legal: list[Move] = []
        append_legal = legal.append

        for move in candidates:
            scratch.make_move(move)
            king_sq = scratch_board.king_square(moving_color)
            if not is_square_attacked(scratch_board, king_sq, opponent):
                append_legal(move)
            scratch.unmake_move(move)
        return legal

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        color_idx = int(color)
        file_idx = sq & 7
        rank_idx = sq >> 3
        target_rank = rank_idx + _PAWN_FORWARD[color_idx]
        if not 0 <= target_rank < 8:
            return
        promotes = target_rank == _PAWN_LAST_RANK[color_idx]

        one_step = make_square(file_idx, target_rank)
        if board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, promotes, MoveFlag.NONE, moves)
            if rank_idx == _PAWN_START_RANK[color_idx]:
                two_step = make_square(file_idx, target_rank + _PAWN_FORWARD[color_idx])
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step, flags=MoveFlag.DOUBLE_PAWN_PUSH))

        ep_square = self._pos.en_passant
        for cap_sq in _PAWN_ATTACKS[color_idx][sq]:
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, promotes, MoveFlag.CAPTURE, moves)
            elif cap_sq == ep_square:
                victim = board[make_square(cap_sq & 7, rank_idx)]
                if (
                    victim is not None
                    and victim.color != color
                    and victim.piece_type == PieceType.PAWN
                ):
                    moves.append(
                        Move(sq, cap_sq, flags=MoveFlag.CAPTURE | MoveFlag.EN_PASSANT)
                    )

    @staticmethod
    def _add_pawn_move(
        from_sq: Square,
        to_sq: Square,
        promotes: bool,
        flags: MoveFlag,
        moves: list[Move],
    ) -> None:
        if promotes:
            for pt in PROMOTION_TYPES:
                moves.append(Move(from_sq, to_sq, pt, flags))
        else:
            moves.append(Move(from_sq, to_sq, flags=flags))

    def _gen_step(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
            elif target.color != color:
                moves.append(Move(sq, to_sq, flags=MoveFlag.CAPTURE))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, flags=MoveFlag.CAPTURE))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        rights = self._pos.castling & CastlingRights.both(color)
        if not rights:
            return
        config = self._pos.castling_config
        if king_sq != config.king_home(color):
            return

        board = self._board
        opponent = _COLOR_OPPOSITE[int(color)]
        if is_square_attacked(board, king_sq, opponent):
            return

        for kingside in (True, False):
            side_right = (
                CastlingRights.kingside(color)
                if kingside
                else CastlingRights.queenside(color)
            )
            if not rights & side_right:
                continue

            rook_sq = config.rook_home(color, kingside)
            rook = board[rook_sq]
            if rook != Piece(color, PieceType.ROOK):
                continue

            king_to = config.king_destination(color, kingside)
            rook_to = config.rook_destination(color, kingside)
            low = min(king_sq, king_to, rook_sq, rook_to)
            high = max(king_sq, king_to, rook_sq, rook_to)
            if any(
                not board.is_empty(s)
                for s in range(low, high + 1)
                if s not in (king_sq, rook_sq)
            ):
                continue

            step = 1 if king_to > king_sq else -1
            path = range(king_sq + step, king_to + step, step)
            if any(is_square_attacked(board, s, opponent) for s in path):
                continue

            flag = MoveFlag.KINGSIDE_CASTLE if kingside else MoveFlag.QUEENSIDE_CASTLE
            moves.append(Move(king_sq, config.move_target(color, kingside), flags=flag))


# -- Functional API --------------------------------------------------------


def legal_moves(position: Position) -> list[Move]:
    return MoveGenerator(position).generate_legal_moves()


def pseudo_legal_moves(position: Position) -> list[Move]:
    return MoveGenerator(position).generate_pseudo_legal_moves()


def attacked_squares(position: Position, by_color: Color) -> frozenset[Square]:
    return MoveGenerator(position).attacked_squares(by_color)


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes of the legal move tree to *depth*.

    Reference values: https://www.chessprogramming.org/Perft_Results
    """
    MoveGenerator(position).validate()
    return _perft(position.copy(), depth)


def _perft(scratch: Position, depth: int) -> int:
    if depth == 0:
        return 1
    gen = MoveGenerator(scratch)
    moves = gen._filter_legal(gen._pseudo_legal())
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        scratch.make_move(move)
        nodes += _perft(scratch, depth - 1)
        scratch.unmake_move(move)
    return nodes
