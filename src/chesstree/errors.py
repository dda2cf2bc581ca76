"""Exception taxonomy shared by the core and game layers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chesstree.core.move import Move
    from chesstree.game.outcome import Outcome


class ChessError(Exception):
    """Base class for every error raised by chesstree."""


# ── Text codecs ──────────────────────────────────────────────────────────────


class FenError(ChessError, ValueError):
    """Malformed FEN text; no position was built."""

    def __init__(self, reason: str, fen: str | None = None) -> None:
        self.reason = reason
        self.fen = fen
        message = f"Invalid FEN: {reason}"
        if fen is not None:
            message += f" ({fen!r})"
        super().__init__(message)


class PgnError(ChessError, ValueError):
    """A SAN token could not be resolved to exactly one legal move."""

    def __init__(self, token: str, message: str) -> None:
        self.token = token
        super().__init__(message)


class AmbiguousMoveError(PgnError):
    def __init__(self, token: str, candidates: Sequence[Move]) -> None:
        self.candidates = tuple(candidates)
        listed = ", ".join(m.uci for m in self.candidates)
        super().__init__(token, f"Ambiguous move: {token} matches {listed}")


class NoSuchMoveError(PgnError):
    def __init__(self, token: str, detail: str = "no legal move matches") -> None:
        self.detail = detail
        super().__init__(token, f"Illegal move: {token} ({detail})")


# ── Moves and positions ──────────────────────────────────────────────────────


class MoveError(ChessError):
    """Base class for move application failures."""


class IllegalMoveError(MoveError):
    """The move is not a member of the legal move set of the position."""

    def __init__(self, move: Move, fen: str) -> None:
        self.move = move
        self.fen = fen
        super().__init__(f"Illegal move {move.uci} in position {fen!r}")


class InvalidPositionError(ChessError):
    """A position violates structural invariants (e.g. a missing king).

    This signals a bug in whatever built the position, not bad user input.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid position: {reason}")


# ── Game tree ────────────────────────────────────────────────────────────────


class GameOverError(ChessError):
    """A move was submitted after the game reached a terminal outcome."""

    def __init__(self, outcome: Outcome) -> None:
        self.outcome = outcome
        super().__init__(f"Game is over: {outcome}")


class NavigationError(ChessError):
    """Cursor movement past the bounds of the game tree."""


class NoParentError(NavigationError):
    def __init__(self) -> None:
        super().__init__("Cannot undo: the cursor is at the root")


class NoChildError(NavigationError):
    def __init__(self, index: int, available: int) -> None:
        self.index = index
        self.available = available
        super().__init__(
            f"Cannot redo: child {index} requested, {available} available"
        )
