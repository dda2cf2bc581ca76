"""Tests for Variant, CastlingConfig and Move text."""

import pytest

from chesstree.core.castling import STANDARD_CASTLING, CastlingConfig
from chesstree.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chesstree.core.move import Move
from chesstree.core.move_generator import legal_moves
from chesstree.core.notation import STARTING_FEN, position_to_fen
from chesstree.core.types import A1, E1, E2, E4, E7, E8, G1, H1, H8
from chesstree.core.variant import CHESS960, FROM_POSITION, STANDARD, Variant
from chesstree.errors import FenError

CHESS960_START = "bqnb1rkr/pppppppp/8/8/8/8/PPPPPPPP/BQNB1RKR w KQkq - 0 1"


class TestVariant:
    def test_standard(self) -> None:
        variant = Variant.standard()
        assert variant.name == STANDARD
        assert variant.starting_fen == STARTING_FEN
        assert variant.castling == STANDARD_CASTLING
        assert variant.is_standard_start
        assert position_to_fen(variant.initial_position()) == STARTING_FEN

    def test_from_position(self) -> None:
        fen = "4k3/8/8/8/8/8/8/4K2R w K - 0 1"
        variant = Variant.from_position(fen)
        assert variant.name == FROM_POSITION
        assert not variant.is_standard_start
        assert position_to_fen(variant.initial_position()) == fen

    def test_from_starting_fen_is_standard(self) -> None:
        assert Variant.from_position(STARTING_FEN) == Variant.standard()

    def test_from_position_validates_fen(self) -> None:
        with pytest.raises(FenError):
            Variant.from_position("8/8/8 w - - 0 1")

    def test_is_frozen(self) -> None:
        variant = Variant.standard()
        with pytest.raises(AttributeError):
            variant.name = "Other"  # type: ignore[misc]


class TestChess960Variant:
    def test_files_read_from_back_rank(self) -> None:
        variant = Variant.chess960(CHESS960_START)
        assert variant.name == CHESS960
        assert variant.is_chess960
        assert variant.castling == CastlingConfig(
            king_file=6, queenside_rook_file=5, kingside_rook_file=7, chess960=True
        )

    def test_outermost_rooks_are_used(self) -> None:
        fen = "4k3/8/8/8/8/8/8/RR2K1RR w KQ - 0 1"
        config = Variant.chess960(fen).castling
        assert config.queenside_rook_file == 0
        assert config.kingside_rook_file == 7

    def test_requires_king_between_rooks(self) -> None:
        with pytest.raises(FenError):
            Variant.chess960("4k3/8/8/8/8/8/8/K6R w - - 0 1")

    def test_no_castling_through_own_pieces(self) -> None:
        # f1 holds the queenside rook and c1, d1 are occupied.
        fen = "bqnb1rkr/pppppppp/8/8/8/8/PPPPPPPP/BQNB1RKR w KQkq - 0 1"
        pos = Variant.chess960(fen).initial_position()
        assert not any(m.is_castle for m in legal_moves(pos))

    def test_castling_encoded_as_king_takes_rook(self) -> None:
        fen = "bqnb1rkr/pppppppp/8/8/8/8/PPPPPPPP/BQNB2KR w KQkq - 0 1"
        pos = Variant.chess960(fen).initial_position()
        castles = [m for m in legal_moves(pos) if m.is_castle]
        assert [m.uci for m in castles] == ["g1h1"]
        after = pos.apply_move(castles[0])
        assert after.board[G1] is not None
        assert after.board[G1].piece_type == PieceType.KING  # type: ignore[union-attr]
        assert not after.castling & CastlingRights.WHITE_BOTH


class TestCastlingConfig:
    def test_standard_squares(self) -> None:
        assert STANDARD_CASTLING.king_home(Color.WHITE) == E1
        assert STANDARD_CASTLING.rook_home(Color.WHITE, True) == H1
        assert STANDARD_CASTLING.rook_home(Color.BLACK, True) == H8
        assert STANDARD_CASTLING.king_destination(Color.WHITE, True) == G1
        assert STANDARD_CASTLING.move_target(Color.WHITE, True) == G1

    def test_rook_corners(self) -> None:
        corners = STANDARD_CASTLING.rook_corners()
        assert corners[A1] == CastlingRights.WHITE_QUEENSIDE
        assert corners[H8] == CastlingRights.BLACK_KINGSIDE

    @pytest.mark.parametrize("files", [(4, 4, 7), (0, 7, 7), (5, 4, 7), (-1, 4, 7)])
    def test_rejects_bad_files(self, files: tuple[int, int, int]) -> None:
        queenside, king, kingside = files
        with pytest.raises(ValueError):
            CastlingConfig(
                king_file=king,
                queenside_rook_file=queenside,
                kingside_rook_file=kingside,
            )


class TestMoveText:
    def test_uci(self) -> None:
        assert Move(E2, E4).uci == "e2e4"
        assert Move(E7, E8, PieceType.QUEEN).uci == "e7e8q"

    def test_from_uci(self) -> None:
        assert Move.from_uci("e7e8n") == Move(E7, E8, PieceType.KNIGHT)

    @pytest.mark.parametrize("text", ["", "e2", "e2e9", "e7e8k", "e2e4qq"])
    def test_from_uci_rejects(self, text: str) -> None:
        with pytest.raises(ValueError):
            Move.from_uci(text)

    def test_flags_excluded_from_equality(self) -> None:
        flagged = Move(E2, E4, flags=MoveFlag.DOUBLE_PAWN_PUSH)
        assert flagged == Move(E2, E4)
        assert hash(flagged) == hash(Move(E2, E4))
