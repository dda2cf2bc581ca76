"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

import re

from chesstree.core.enums import MoveFlag, PieceType
from chesstree.core.move import Move
from chesstree.core.move_generator import MoveGenerator
from chesstree.core.position import Position
from chesstree.core.types import FILE_NAMES, file_of, rank_of, square_name
from chesstree.errors import AmbiguousMoveError, IllegalMoveError, NoSuchMoveError

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}

_SAN_RE = re.compile(
    r"^(?P<piece>[NBRQK])?"
    r"(?P<file>[a-h])?(?P<rank>[1-8])?"
    r"(?P<capture>x)?"
    r"(?P<dest>[a-h][1-8])"
    r"(?:=?(?P<promo>[NBRQ]))?$"
)
_CASTLE_TOKENS: dict[str, MoveFlag] = {
    "O-O": MoveFlag.KINGSIDE_CASTLE,
    "0-0": MoveFlag.KINGSIDE_CASTLE,
    "O-O-O": MoveFlag.QUEENSIDE_CASTLE,
    "0-0-0": MoveFlag.QUEENSIDE_CASTLE,
}


def move_to_san(position: Position, move: Move) -> str:
    """Convert a legal *move* to SAN given the *position* before the move.

    Raises:
        IllegalMoveError: *move* is not legal in *position*.
    """
    gen = MoveGenerator(position)
    legal = gen.generate_legal_moves()
    try:
        move = legal[legal.index(move)]
    except ValueError:
        from chesstree.core.notation.fen import position_to_fen

        raise IllegalMoveError(move, position_to_fen(position)) from None

    board = position.board
    piece = board[move.from_sq]
    assert piece is not None

    if move.flags & MoveFlag.KINGSIDE_CASTLE:
        san = "O-O"
    elif move.flags & MoveFlag.QUEENSIDE_CASTLE:
        san = "O-O-O"
    else:
        san = ""
        if piece.piece_type == PieceType.PAWN:
            if move.is_capture:
                san += FILE_NAMES[file_of(move.from_sq)]
        else:
            san += _SAN_PIECE[piece.piece_type]
            san += _disambiguation(position, move, legal)

        if move.is_capture:
            san += "x"

        san += square_name(move.to_sq)

        if move.promotion is not None:
            san += "=" + _SAN_PIECE[move.promotion]

    # Check / checkmate suffix
    after = position.copy()
    after.make_move(move)
    gen_after = MoveGenerator(after)
    if gen_after.is_in_check(after.side_to_move):
        san += "+" if gen_after.generate_legal_moves() else "#"

    return san


def _disambiguation(position: Position, move: Move, legal: list[Move]) -> str:
    board = position.board
    piece = board[move.from_sq]
    rivals = [
        m.from_sq
        for m in legal
        if m.to_sq == move.to_sq
        and m.from_sq != move.from_sq
        and board[m.from_sq] == piece
        and not m.is_castle
    ]
    if not rivals:
        return ""
    if all(file_of(sq) != file_of(move.from_sq) for sq in rivals):
        return FILE_NAMES[file_of(move.from_sq)]
    if all(rank_of(sq) != rank_of(move.from_sq) for sq in rivals):
        return str(rank_of(move.from_sq) + 1)
    return square_name(move.from_sq)


def parse_san(position: Position, san: str) -> Move:
    """Parse a SAN token into the matching legal :class:`Move`.

    Check and annotation suffixes (``+#!?``) are ignored, as is a capture
    marker that disagrees with the board.  A pawn token without an origin
    file only matches the push along the destination file.

    Raises:
        NoSuchMoveError: the token is malformed or matches no legal move.
        AmbiguousMoveError: the token matches more than one legal move.
    """
    legal = MoveGenerator(position).generate_legal_moves()
    clean = san.strip().rstrip("+#!?")

    castle_flag = _CASTLE_TOKENS.get(clean)
    if castle_flag is not None:
        for m in legal:
            if m.flags & castle_flag:
                return m
        raise NoSuchMoveError(san, "castling is not legal here")

    match = _SAN_RE.match(clean)
    if match is None:
        raise NoSuchMoveError(san, "not a SAN token")

    letter = match.group("piece")
    piece_type = _SAN_PIECE_REV[letter] if letter else PieceType.PAWN
    from_file = FILE_NAMES.index(match.group("file")) if match.group("file") else None
    from_rank = int(match.group("rank")) - 1 if match.group("rank") else None
    promo = match.group("promo")
    promotion = _SAN_PIECE_REV[promo] if promo else None
    dest = match.group("dest")
    if piece_type == PieceType.PAWN and from_file is None:
        # A pawn capture always names its origin file; "e4" is a push.
        from_file = FILE_NAMES.index(dest[0])

    board = position.board
    side = position.side_to_move
    matching: list[Move] = []
    for m in legal:
        if m.is_castle or square_name(m.to_sq) != dest:
            continue
        p = board[m.from_sq]
        if p is None or p.color != side or p.piece_type != piece_type:
            continue
        if from_file is not None and file_of(m.from_sq) != from_file:
            continue
        if from_rank is not None and rank_of(m.from_sq) != from_rank:
            continue
        matching.append(m)

    candidates = [m for m in matching if m.promotion == promotion]
    if len(candidates) == 1:
        return candidates[0]
    if candidates:
        raise AmbiguousMoveError(san, candidates)
    if matching and promotion is None:
        raise NoSuchMoveError(san, "promotion piece required")
    raise NoSuchMoveError(san)
