"""Tests for Rules: checkmate, stalemate, draw detection."""

import pytest

from chesstree.core.enums import GameStatus
from chesstree.core.notation import STARTING_FEN, position_from_fen
from chesstree.core.rules import Rules

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
BACK_RANK_MATE = "R2k4/8/3K4/8/8/8/8/8 b - - 0 1"
STALEMATE = "7k/8/5KQ1/8/8/8/8/8 b - - 0 1"
ROOKS = "4k3/8/8/8/8/8/4K2R/7r w - - {half} 51"


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        assert not Rules.is_in_check(position_from_fen(STARTING_FEN))

    def test_fools_mate_in_check(self) -> None:
        assert Rules.is_in_check(position_from_fen(FOOLS_MATE))


class TestCheckmate:
    def test_fools_mate(self) -> None:
        pos = position_from_fen(FOOLS_MATE)
        assert Rules.is_checkmate(pos)
        assert Rules.status(pos) == GameStatus.CHECKMATE

    def test_back_rank_mate(self) -> None:
        # R on a8 checks black king d8; white king d6 covers all escapes
        pos = position_from_fen(BACK_RANK_MATE)
        assert Rules.is_checkmate(pos)
        assert not Rules.is_stalemate(pos)

    def test_not_checkmate_when_can_escape(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)


class TestStalemate:
    def test_king_trapped(self) -> None:
        # Black king on h8, white K on f6, white Q on g6
        pos = position_from_fen(STALEMATE)
        assert Rules.is_stalemate(pos)
        assert Rules.status(pos) == GameStatus.STALEMATE

    def test_not_stalemate_when_has_moves(self) -> None:
        pos = position_from_fen("7k/8/5K2/8/8/8/8/8 b - - 0 1")
        assert not Rules.is_stalemate(pos)


class TestInsufficientMaterial:
    @pytest.mark.parametrize(
        "fen",
        [
            "8/8/4k3/8/8/4K3/8/8 w - - 0 1",
            "8/8/4k3/8/8/4K3/3B4/8 w - - 0 1",
            "8/8/4k3/8/8/4K3/3N4/8 w - - 0 1",
            "8/8/4k3/8/8/4K3/8/B1b5 w - - 0 1",
            "8/8/4k3/8/8/4K3/8/B1B5 w - - 0 1",
        ],
    )
    def test_dead_positions(self, fen: str) -> None:
        assert Rules.is_insufficient_material(position_from_fen(fen))

    @pytest.mark.parametrize(
        "fen",
        [
            "8/8/4k3/8/8/4K3/3R4/8 w - - 0 1",
            "8/8/4k3/8/4P3/4K3/8/8 w - - 0 1",
            "8/8/4k3/8/8/4K3/8/B2b4 w - - 0 1",
            "8/8/4k3/8/8/4K3/8/N1n5 w - - 0 1",
            "8/8/4k3/8/8/4K3/8/B1N5 w - - 0 1",
        ],
    )
    def test_mating_material_remains(self, fen: str) -> None:
        assert not Rules.is_insufficient_material(position_from_fen(fen))


class TestFiftyMoveRule:
    def test_not_triggered_at_99(self) -> None:
        pos = position_from_fen(ROOKS.format(half=99))
        assert not Rules.is_fifty_move_rule(pos)
        assert Rules.status(pos) == GameStatus.IN_PROGRESS

    def test_triggered_at_100_halfmoves(self) -> None:
        pos = position_from_fen(ROOKS.format(half=100))
        assert Rules.is_fifty_move_rule(pos)
        assert Rules.status(pos) == GameStatus.DRAW_BY_FIFTY_MOVE


class TestStatusPrecedence:
    def test_checkmate_beats_fifty_move(self) -> None:
        pos = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 100 60")
        assert Rules.status(pos) == GameStatus.CHECKMATE

    def test_stalemate_beats_fifty_move(self) -> None:
        pos = position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 120 60")
        assert Rules.status(pos) == GameStatus.STALEMATE

    def test_fifty_move_beats_insufficient_material(self) -> None:
        pos = position_from_fen("8/8/4k3/8/8/4K3/8/8 w - - 100 51")
        assert Rules.status(pos) == GameStatus.DRAW_BY_FIFTY_MOVE

    def test_insufficient_material_beats_repetition(self) -> None:
        pos = position_from_fen("8/8/4k3/8/8/4K3/8/8 w - - 0 1")
        status = Rules.status(pos, repetitions=3)
        assert status == GameStatus.DRAW_BY_INSUFFICIENT_MATERIAL

    def test_repetition_threshold(self) -> None:
        pos = position_from_fen(ROOKS.format(half=8))
        assert Rules.status(pos, repetitions=2) == GameStatus.IN_PROGRESS
        assert Rules.status(pos, repetitions=3) == GameStatus.DRAW_BY_REPETITION

    def test_in_progress_at_start(self) -> None:
        assert Rules.status(position_from_fen(STARTING_FEN)) == GameStatus.IN_PROGRESS


class TestRepetitionKey:
    def test_ignores_clocks(self) -> None:
        a = position_from_fen(ROOKS.format(half=0))
        b = position_from_fen(ROOKS.format(half=30))
        assert Rules.repetition_key(a) == Rules.repetition_key(b)

    def test_side_to_move_matters(self) -> None:
        a = position_from_fen("4k3/8/8/8/8/8/8/4K2R w - - 0 1")
        b = position_from_fen("4k3/8/8/8/8/8/8/4K2R b - - 0 1")
        assert Rules.repetition_key(a) != Rules.repetition_key(b)

    def test_castling_rights_matter(self) -> None:
        a = position_from_fen("4k3/8/8/8/8/8/8/4K2R w K - 0 1")
        b = position_from_fen("4k3/8/8/8/8/8/8/4K2R w - - 0 1")
        assert Rules.repetition_key(a) != Rules.repetition_key(b)

    def test_uncapturable_en_passant_square_ignored(self) -> None:
        after_e4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq {ep} 0 1"
        a = position_from_fen(after_e4.format(ep="e3"))
        b = position_from_fen(after_e4.format(ep="-"))
        assert Rules.repetition_key(a) == Rules.repetition_key(b)

    def test_capturable_en_passant_square_counts(self) -> None:
        fen = "4k3/8/8/3pP3/8/8/8/4K3 w - {ep} 0 2"
        a = position_from_fen(fen.format(ep="d6"))
        b = position_from_fen(fen.format(ep="-"))
        assert Rules.repetition_key(a) != Rules.repetition_key(b)
