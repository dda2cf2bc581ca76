"""Tests for PGN export of a game tree."""

from chesstree.core.enums import Color
from chesstree.game import Game

AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"


def _movetext(game: Game) -> str:
    return game.pgn().split("\n\n", 1)[1].strip()


class TestMovetext:
    def test_empty_game(self) -> None:
        assert _movetext(Game()) == "*"

    def test_main_line(self) -> None:
        game = Game()
        for san in ("e4", "e5", "Nf3"):
            game.play_san(san)
        assert _movetext(game) == "1. e4 e5 2. Nf3 *"

    def test_black_variation(self) -> None:
        game = Game()
        game.play_san("e4")
        e5 = game.play_san("e5")
        game.undo()
        game.play_san("c5")
        game.go_to(e5)
        game.play_san("Nf3")
        assert _movetext(game) == "1. e4 e5 (1... c5) 2. Nf3 *"

    def test_white_variation_renumbers_black_reply(self) -> None:
        game = Game()
        for san in ("e4", "e5", "Nf3", "Nc6"):
            game.play_san(san)
        game.go_to_root()
        game.play_san("d4")
        game.play_san("d5")
        assert _movetext(game) == "1. e4 (1. d4 d5) 1... e5 2. Nf3 Nc6 *"

    def test_nested_variations(self) -> None:
        game = Game()
        game.play_san("e4")
        game.play_san("e5")
        game.undo()
        game.play_san("c5")
        game.play_san("Nf3")
        game.undo()
        game.play_san("c3")
        assert _movetext(game) == "1. e4 e5 (1... c5 2. Nf3 (2. c3)) *"

    def test_black_to_move_start(self) -> None:
        game = Game.from_fen(AFTER_E4)
        game.play_san("e5")
        game.play_san("Nf3")
        assert _movetext(game) == "1... e5 2. Nf3 *"

    def test_comments(self) -> None:
        game = Game()
        game.root.comment = "Opening"
        game.play_san("e4").comment = "best by test}"
        game.play_san("e5")
        assert _movetext(game) == "{Opening} 1. e4 {best by test]} 1... e5 *"


class TestHeaders:
    def test_seven_tag_roster(self) -> None:
        game = Game()
        game.play_san("e4")
        expected = "\n".join(
            [
                '[Event "?"]',
                '[Site "?"]',
                '[Date "????.??.??"]',
                '[Round "?"]',
                '[White "?"]',
                '[Black "?"]',
                '[Result "*"]',
                "",
                "1. e4 *",
                "",
            ]
        )
        assert game.pgn() == expected

    def test_custom_headers_follow_roster(self) -> None:
        game = Game()
        game.headers["Annotator"] = "Nimzowitsch"
        game.headers["White"] = 'Max "the Mover"'
        lines = game.pgn().splitlines()
        assert lines[4] == '[White "Max \\"the Mover\\""]'
        assert lines[7] == '[Annotator "Nimzowitsch"]'

    def test_setup_and_fen(self) -> None:
        lines = Game.from_fen(AFTER_E4).pgn().splitlines()
        assert lines[7] == '[SetUp "1"]'
        assert lines[8] == f'[FEN "{AFTER_E4}"]'

    def test_standard_start_has_no_setup(self) -> None:
        assert "SetUp" not in Game().pgn()


class TestResult:
    def test_checkmate_result(self) -> None:
        game = Game()
        for san in ("f3", "e5", "g4", "Qh4#"):
            game.play_san(san)
        text = game.pgn()
        assert '[Result "0-1"]' in text
        assert text.endswith("1. f3 e5 2. g4 Qh4# 0-1\n")

    def test_resignation_result(self) -> None:
        game = Game()
        game.play_san("e4")
        game.resign(Color.BLACK)
        assert _movetext(game) == "1. e4 1-0"

    def test_result_taken_from_main_line_end(self) -> None:
        game = Game()
        game.play_san("e4")
        game.play_san("e5")
        game.undo()
        game.play_san("c5")
        game.agree_draw()
        # The draw sits on a variation; the main line is unfinished.
        assert _movetext(game).endswith(" *")

    def test_header_result_used_while_unfinished(self) -> None:
        game = Game()
        game.play_san("e4")
        game.headers["Result"] = "1/2-1/2"
        assert '[Result "1/2-1/2"]' in game.pgn()
        assert _movetext(game) == "1. e4 1/2-1/2"
