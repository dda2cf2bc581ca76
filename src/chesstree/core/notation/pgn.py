"""PGN serialization of a game tree."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from chesstree.core.enums import Color, GameResult

if TYPE_CHECKING:
    from chesstree.game.node import GameNode

PGN_RESULT_TOKENS = ("1-0", "0-1", "1/2-1/2", "*")


def pgn_result_token(result: GameResult) -> str:
    """Convert :class:`GameResult` to a PGN result token."""
    if result == GameResult.WHITE_WINS:
        return "1-0"
    if result == GameResult.BLACK_WINS:
        return "0-1"
    if result == GameResult.DRAW:
        return "1/2-1/2"
    return "*"


def _comment_token(comment: str) -> str:
    # PGN comments cannot contain a closing brace.
    clean = " ".join(comment.replace("}", "]").split())
    return f"{{{clean}}}"


def _move_tokens(parent: GameNode, child: GameNode, force_number: bool) -> list[str]:
    tokens: list[str] = []
    pos = parent.position
    if pos.side_to_move == Color.WHITE:
        tokens.append(f"{pos.fullmove_number}.")
    elif force_number:
        tokens.append(f"{pos.fullmove_number}...")
    tokens.append(child.san)
    if child.comment:
        tokens.append(_comment_token(child.comment))
    return tokens


def _line_tokens(node: GameNode, force_number: bool) -> list[str]:
    """Movetext for the main line below *node* with nested variations."""
    tokens: list[str] = []
    while node.children:
        main, *alternatives = node.children
        tokens += _move_tokens(node, main, force_number)
        force_number = bool(main.comment)
        for variation in alternatives:
            inner = _move_tokens(node, variation, True)
            inner += _line_tokens(variation, bool(variation.comment))
            tokens.append("(" + " ".join(inner) + ")")
            force_number = True
        node = main
    return tokens


def pgn_movetext_from_tree(root: GameNode, result_token: str) -> str:
    """Build PGN movetext for the tree under *root*.

    Child 0 of every node is the main line; the others are written as
    parenthesised variations right after the main-line move they replace.
    A Black move gets an ``N...`` number when it opens the game, follows a
    variation, or follows a comment.
    """
    if result_token not in PGN_RESULT_TOKENS:
        raise ValueError(f"Unknown PGN result token: {result_token!r}")
    tokens: list[str] = []
    if root.comment:
        tokens.append(_comment_token(root.comment))
    tokens += _line_tokens(root, True)
    tokens.append(result_token)
    return " ".join(tokens)


def build_pgn(headers: Mapping[str, str], root: GameNode, result_token: str) -> str:
    """Build a single-game PGN document."""
    lines: list[str] = []
    for key, value in headers.items():
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        lines.append(f'[{key} "{escaped}"]')
    lines.append("")
    lines.append(pgn_movetext_from_tree(root, result_token))
    lines.append("")
    return "\n".join(lines)
