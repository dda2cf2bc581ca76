"""FEN parsing and serialization."""

from __future__ import annotations

from chesstree.core.board import Board
from chesstree.core.castling import STANDARD_CASTLING, CastlingConfig
from chesstree.core.enums import CastlingRights, Color
from chesstree.core.piece import Piece
from chesstree.core.position import Position
from chesstree.core.types import Square, make_square, parse_square, rank_of, square_name
from chesstree.errors import FenError

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def _parse_counter(text: str, name: str, fen: str) -> int:
    # str.isdigit() alone accepts non-ASCII digits such as "²".
    if not (text.isascii() and text.isdigit()):
        raise FenError(f"{name} must be a non-negative integer, got {text!r}", fen)
    return int(text)


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FenError(f"board must contain 8 ranks, found {len(ranks)}", fen)
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isascii() and ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise FenError(f"invalid digit {ch!r} in rank {rank + 1}", fen)
                file += step
            else:
                if file >= 8:
                    raise FenError(f"rank {rank + 1} has more than 8 cells", fen)
                try:
                    board[make_square(file, rank)] = Piece.from_char(ch)
                except ValueError:
                    raise FenError(f"invalid piece character {ch!r}", fen) from None
                file += 1
            if file > 8:
                raise FenError(f"rank {rank + 1} has more than 8 cells", fen)
        if file != 8:
            raise FenError(f"rank {rank + 1} has {file} cells, expected 8", fen)
    return board


def position_from_fen(
    fen: str, castling_config: CastlingConfig | None = None
) -> Position:
    """Parse a FEN string into a :class:`Position`.

    FEN does not record castling geometry.  *castling_config* defaults to
    the standard files, so a Chess960 position only decodes back to an
    equal :class:`Position` when its own config is passed again:
    ``position_from_fen(position_to_fen(p), p.castling_config) == p``.

    Raises:
        FenError: the text is not a well-formed six-field FEN record.
    """
    parts = fen.split()
    if len(parts) != 6:
        raise FenError(f"need 6 fields, found {len(parts)}", fen)

    placement, side_part, castling_part, ep_part, half_part, full_part = parts

    # 1. Piece placement
    board = _parse_placement(placement, fen)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise FenError(f"invalid side-to-move field {side_part!r}", fen)

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        rights = dict(_CASTLING_CHARS)
        seen: set[str] = set()
        for ch in castling_part:
            right = rights.get(ch)
            if right is None or ch in seen:
                raise FenError(f"invalid castling field {castling_part!r}", fen)
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise FenError(f"invalid en-passant square {ep_part!r}", fen) from None
        expected_ep_rank = 5 if side == Color.WHITE else 2
        if rank_of(ep) != expected_ep_rank:
            raise FenError(
                f"en-passant square {ep_part!r} is not on rank "
                f"{expected_ep_rank + 1} for side-to-move {side}",
                fen,
            )

    # 5–6. Clocks
    halfmove = _parse_counter(half_part, "halfmove clock", fen)
    fullmove = _parse_counter(full_part, "fullmove number", fen)

    return Position(
        board,
        side,
        castling,
        ep,
        halfmove,
        fullmove,
        castling_config or STANDARD_CASTLING,
    )


def placement_to_fen(board: Board) -> str:
    """First FEN field for *board*."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN (castling geometry is not kept)."""
    board_str = placement_to_fen(pos.board)
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"
    return (
        f"{board_str} {side_str} {castling_str or '-'} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )
