"""Game — a branching move tree with a cursor.

The tree starts at a root node holding the variant's starting position.
Every node below it was reached by one legal move; ``children[0]`` of a
node continues the main line.  The cursor (:attr:`Game.current`) is the
node new moves are played from.

Quick start::

    from chesstree import Game

    game = Game()
    game.play_san("e4")
    game.play_san("e5")
    game.undo()
    game.play_san("c5")        # a second line under 1. e4
    print(game.pgn())
"""

from __future__ import annotations

import logging

from chesstree.core.enums import Color, GameStatus
from chesstree.core.move import Move
from chesstree.core.move_generator import MoveGenerator
from chesstree.core.notation.fen import position_to_fen
from chesstree.core.notation.pgn import build_pgn, pgn_result_token
from chesstree.core.notation.san import move_to_san, parse_san
from chesstree.core.position import Position
from chesstree.core.variant import Variant
from chesstree.errors import (
    GameOverError,
    IllegalMoveError,
    NoChildError,
    NoParentError,
)
from chesstree.game.node import GameNode
from chesstree.game.outcome import Outcome

_LOGGER = logging.getLogger(__name__)

SEVEN_TAG_ROSTER: tuple[tuple[str, str], ...] = (
    ("Event", "?"),
    ("Site", "?"),
    ("Date", "????.??.??"),
    ("Round", "?"),
    ("White", "?"),
    ("Black", "?"),
    ("Result", "*"),
)

# ── Game ─────────────────────────────────────────────────────────────────────


class Game:
    """Move tree plus cursor for one game.

    A ``Game`` has a single writer: calls that play moves, move the cursor
    or edit the tree must not run concurrently on the same instance.  The
    positions it hands out are snapshots and may be shared freely.
    """

    __slots__ = ("_variant", "_root", "_current", "headers")

    def __init__(self, variant: Variant | None = None, fen: str | None = None) -> None:
        if fen is not None:
            if variant is not None:
                raise ValueError("pass either a variant or a FEN, not both")
            variant = Variant.from_position(fen)
        self._variant = variant if variant is not None else Variant.standard()
        self._root = GameNode(self._variant.initial_position())
        self._current = self._root
        self.headers: dict[str, str] = dict(SEVEN_TAG_ROSTER)
        if self._root.outcome.is_terminal:
            _LOGGER.debug("Game starts in a terminal position: %s", self._root.outcome)

    @classmethod
    def from_fen(cls, fen: str) -> Game:
        return cls(fen=fen)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def variant(self) -> Variant:
        return self._variant

    @property
    def root(self) -> GameNode:
        return self._root

    @property
    def current(self) -> GameNode:
        return self._current

    @property
    def position(self) -> Position:
        return self._current.position

    @property
    def outcome(self) -> Outcome:
        return self._current.outcome

    @property
    def is_game_over(self) -> bool:
        return self._current.outcome.is_terminal

    @property
    def side_to_move(self) -> Color:
        return self._current.position.side_to_move

    @property
    def ply(self) -> int:
        return self._current.ply

    # ── Queries ──────────────────────────────────────────────────────────

    def fen(self) -> str:
        return position_to_fen(self._current.position)

    def legal_moves(self) -> list[Move]:
        """Moves :meth:`play_move` accepts right now (none once the game is over)."""
        if self.is_game_over:
            return []
        return MoveGenerator(self._current.position).generate_legal_moves()

    def repetition_count(self) -> int:
        return self._current.repetitions

    def next_moves(self) -> list[Move]:
        """Moves already recorded below the cursor, main line first."""
        return [c.move for c in self._current.children if c.move is not None]

    def main_line(self) -> list[Move]:
        return [node.move for node in self._root.main_line() if node.move is not None]

    def move_stack(self) -> list[Move]:
        """Moves from the root to the cursor."""
        return [node.move for node in self._current.path() if node.move is not None]

    def san_stack(self) -> list[str]:
        return [node.san for node in self._current.path()[1:]]

    # ── Playing moves ────────────────────────────────────────────────────

    def play_move(self, move: Move) -> GameNode:
        """Play *move* from the cursor and move the cursor onto it.

        An existing child with the same move is reused; otherwise the move
        becomes a new trailing variation (the main line if it is the first
        child).

        Raises:
            GameOverError: the cursor's outcome is terminal.
            IllegalMoveError: *move* is not legal here.
        """
        self._ensure_playable()
        parent = self._current
        existing = parent.child_for(move)
        if existing is not None:
            self._current = existing
            return existing

        position = parent.position
        gen = MoveGenerator(position)
        legal = gen.find_move(move.from_sq, move.to_sq, move.promotion)
        if legal is None:
            raise IllegalMoveError(move, position_to_fen(position))
        san = move_to_san(position, legal)
        node = GameNode(position.apply_move(legal), legal, san, parent)
        parent.children.append(node)
        self._current = node
        _LOGGER.debug(
            "Played %s at ply %d (variation %d)",
            san,
            node.ply,
            len(parent.children) - 1,
        )

        if node.outcome.is_terminal:
            _LOGGER.debug("Outcome after %s: %s", san, node.outcome)
        return node

    def play_san(self, token: str) -> GameNode:
        """Parse a SAN *token* against the cursor position and play it."""
        self._ensure_playable()
        return self.play_move(parse_san(self._current.position, token))

    def play_uci(self, text: str) -> GameNode:
        self._ensure_playable()
        return self.play_move(Move.from_uci(text))

    def _ensure_playable(self) -> None:
        outcome = self._current.outcome
        if outcome.is_terminal:
            raise GameOverError(outcome)

    # ── Navigation ───────────────────────────────────────────────────────

    def undo(self) -> GameNode:
        """Move the cursor to its parent.

        Raises:
            NoParentError: the cursor is at the root.
        """
        parent = self._current.parent
        if parent is None:
            raise NoParentError()
        self._current = parent
        return parent

    def redo(self, child_index: int = 0) -> GameNode:
        """Move the cursor to child *child_index* (0 = main line).

        Raises:
            NoChildError: there is no such child.
        """
        children = self._current.children
        if not 0 <= child_index < len(children):
            raise NoChildError(child_index, len(children))
        self._current = children[child_index]
        return self._current

    def go_to(self, node: GameNode) -> None:
        self._check_owned(node)
        self._current = node

    def go_to_root(self) -> None:
        self._current = self._root

    def go_to_end(self) -> None:
        """Follow the main line from the cursor to its last node."""
        for node in self._current.main_line():
            self._current = node

    # ── Tree editing ─────────────────────────────────────────────────────

    def promote_variation(self, node: GameNode) -> None:
        """Make *node* the first (main-line) child of its parent."""
        self._check_owned(node)
        parent = node.parent
        if parent is None:
            raise ValueError("the root has no siblings to be promoted over")
        siblings = parent.children
        index = _index_of(siblings, node)
        if index == 0:
            return
        del siblings[index]
        siblings.insert(0, node)
        _LOGGER.debug("Promoted %s from variation %d to main line", node.san, index)

    def remove_variation(self, node: GameNode) -> None:
        """Cut *node* and everything below it out of the tree.

        If the cursor sits inside the removed subtree it moves to the
        parent of *node*.
        """
        self._check_owned(node)
        parent = node.parent
        if parent is None:
            raise ValueError("the root cannot be removed")
        cursor_inside = any(n is node for n in self._current.path())
        del parent.children[_index_of(parent.children, node)]
        if cursor_inside:
            self._current = parent
        _LOGGER.debug("Removed variation %s at ply %d", node.san, node.ply)

    def truncate(self) -> None:
        """Drop every continuation below the cursor."""
        if self._current.children:
            _LOGGER.debug(
                "Truncated %d line(s) after ply %d",
                len(self._current.children),
                self._current.ply,
            )
        self._current.children.clear()

    def _check_owned(self, node: GameNode) -> None:
        path = node.path()
        if path[0] is not self._root:
            raise ValueError(f"{node!r} does not belong to this game")
        for parent, child in zip(path, path[1:]):
            if not any(c is child for c in parent.children):
                raise ValueError(f"{node!r} was removed from this game")

    # ── Adjudication ─────────────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        """*color* resigns at the cursor."""
        self._adjudicate(Outcome(GameStatus.RESIGNATION, color.opposite))

    def agree_draw(self) -> None:
        self._adjudicate(Outcome(GameStatus.DRAW_BY_AGREEMENT))

    def lose_on_time(self, color: Color) -> None:
        """*color* ran out of time at the cursor."""
        self._adjudicate(Outcome(GameStatus.TIMEOUT, color.opposite))

    def _adjudicate(self, outcome: Outcome) -> None:
        self._ensure_playable()
        self._current.adjudication = outcome
        _LOGGER.debug("Adjudicated at ply %d: %s", self._current.ply, outcome)

    # ── Export ───────────────────────────────────────────────────────────

    def pgn(self) -> str:
        """The whole tree as a PGN document.

        The result is taken from the last node of the main line; a
        ``Result`` header set by the caller is only used while that node
        is still in progress.
        """
        last = self._root
        for node in self._root.main_line():
            last = node
        result_token = pgn_result_token(last.outcome.result)
        if not last.outcome.is_terminal:
            result_token = self.headers.get("Result", "*")

        headers: dict[str, str] = {}
        for key, default in SEVEN_TAG_ROSTER:
            headers[key] = self.headers.get(key, default)
        headers["Result"] = result_token
        if not self._variant.is_standard_start:
            headers["SetUp"] = "1"
            headers["FEN"] = self._variant.starting_fen
        if self._variant.is_chess960:
            headers["Variant"] = self._variant.name
        for key, value in self.headers.items():
            headers.setdefault(key, value)
        return build_pgn(headers, self._root, result_token)

    def __repr__(self) -> str:
        return f"Game({self.fen()!r}, ply={self.ply}, outcome={self.outcome})"


def _index_of(nodes: list[GameNode], node: GameNode) -> int:
    for index, candidate in enumerate(nodes):
        if candidate is node:
            return index
    raise ValueError(f"{node!r} is not a child of its parent")
