"""Game layer — branching move tree, cursor navigation and outcomes.

Quick start::

    from chesstree.core import Color
    from chesstree.game import Game

    game = Game()
    for token in ("f3", "e5", "g4", "Qh4#"):
        game.play_san(token)
    assert game.outcome.winner is Color.BLACK
"""

from chesstree.game.game import SEVEN_TAG_ROSTER, Game
from chesstree.game.node import GameNode
from chesstree.game.outcome import Outcome, evaluate_outcome

__all__ = [
    "SEVEN_TAG_ROSTER",
    "Game",
    "GameNode",
    "Outcome",
    "evaluate_outcome",
]
