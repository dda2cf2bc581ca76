"""GameNode — one position in the branching move tree."""

from __future__ import annotations

import weakref
from collections.abc import Iterator

from chesstree.core.move import Move
from chesstree.core.position import Position
from chesstree.core.rules import Rules
from chesstree.game.outcome import Outcome, evaluate_outcome


class GameNode:
    """A position reached by a move, with its continuations.

    ``children[0]`` is the main line; later children are alternative
    variations in the order they were added.  A node owns its children;
    the link back to the parent is weak so a subtree cut out of the tree
    is freed as soon as nobody else holds it.

    The board outcome and repetition count are computed once, when the
    node is created, from the path leading to it.
    """

    __slots__ = (
        "position",
        "move",
        "san",
        "children",
        "comment",
        "adjudication",
        "_parent",
        "_key",
        "_repetitions",
        "_board_outcome",
        "__weakref__",
    )

    def __init__(
        self,
        position: Position,
        move: Move | None = None,
        san: str = "",
        parent: GameNode | None = None,
    ) -> None:
        self.position = position
        self.move = move
        self.san = san
        self.children: list[GameNode] = []
        self.comment = ""
        self.adjudication: Outcome | None = None
        self._parent = weakref.ref(parent) if parent is not None else None

        self._key = Rules.repetition_key(position)
        repetitions = 1
        ancestor = parent
        while ancestor is not None:
            if ancestor._key == self._key:
                repetitions += 1
            ancestor = ancestor.parent
        self._repetitions = repetitions
        self._board_outcome = evaluate_outcome(position, repetitions)

    # ── Tree links ───────────────────────────────────────────────────────

    @property
    def parent(self) -> GameNode | None:
        return self._parent() if self._parent is not None else None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def ply(self) -> int:
        """Number of moves between the root and this node."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    @property
    def is_main_line(self) -> bool:
        node = self
        parent = node.parent
        while parent is not None:
            if not parent.children or parent.children[0] is not node:
                return False
            node, parent = parent, parent.parent
        return True

    def root(self) -> GameNode:
        return self.path()[0]

    def path(self) -> list[GameNode]:
        """Nodes from the root down to (and including) this node."""
        nodes: list[GameNode] = []
        node: GameNode | None = self
        while node is not None:
            nodes.append(node)
            node = node.parent
        nodes.reverse()
        return nodes

    def main_line(self) -> Iterator[GameNode]:
        """Successive main-line nodes below this one."""
        node = self
        while node.children:
            node = node.children[0]
            yield node

    def child_for(self, move: Move) -> GameNode | None:
        for child in self.children:
            if child.move == move:
                return child
        return None

    # ── Outcome ──────────────────────────────────────────────────────────

    @property
    def repetitions(self) -> int:
        """Occurrences of this position along the root-to-node path."""
        return self._repetitions

    @property
    def board_outcome(self) -> Outcome:
        return self._board_outcome

    @property
    def outcome(self) -> Outcome:
        """Adjudicated outcome if any, otherwise the board outcome."""
        if self.adjudication is not None:
            return self.adjudication
        return self._board_outcome

    def __repr__(self) -> str:
        label = self.san or "root"
        return f"GameNode({label!r}, ply={self.ply}, children={len(self.children)})"
