"""Outcome value object and its evaluation for a position."""

from __future__ import annotations

from dataclasses import dataclass

from chesstree.core.enums import Color, GameResult, GameStatus
from chesstree.core.position import Position
from chesstree.core.rules import Rules

_STATUS_TEXT: dict[GameStatus, str] = {
    GameStatus.IN_PROGRESS: "in progress",
    GameStatus.CHECKMATE: "checkmate",
    GameStatus.STALEMATE: "stalemate",
    GameStatus.DRAW_BY_FIFTY_MOVE: "draw by the fifty-move rule",
    GameStatus.DRAW_BY_INSUFFICIENT_MATERIAL: "draw by insufficient material",
    GameStatus.DRAW_BY_REPETITION: "draw by threefold repetition",
    GameStatus.RESIGNATION: "resignation",
    GameStatus.TIMEOUT: "loss on time",
    GameStatus.DRAW_BY_AGREEMENT: "draw by agreement",
}


@dataclass(frozen=True, slots=True)
class Outcome:
    """Status of a game plus the winner for decisive results."""

    status: GameStatus = GameStatus.IN_PROGRESS
    winner: Color | None = None

    def __post_init__(self) -> None:
        if self.status.is_decisive != (self.winner is not None):
            raise ValueError(f"{self.status.name} with winner={self.winner}")

    @property
    def is_terminal(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    @property
    def result(self) -> GameResult:
        if self.winner == Color.WHITE:
            return GameResult.WHITE_WINS
        if self.winner == Color.BLACK:
            return GameResult.BLACK_WINS
        if self.status.is_draw:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    def __str__(self) -> str:
        text = _STATUS_TEXT[self.status]
        if self.winner is not None:
            text += f", {self.winner} wins"
        return text


IN_PROGRESS = Outcome()


def evaluate_outcome(position: Position, repetitions: int = 1) -> Outcome:
    """Outcome derived from the board alone (no adjudication)."""
    status = Rules.status(position, repetitions)
    if status == GameStatus.CHECKMATE:
        return Outcome(status, position.side_to_move.opposite)
    if status == GameStatus.IN_PROGRESS:
        return IN_PROGRESS
    return Outcome(status)
