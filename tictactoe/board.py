from __future__ import annotations

from collections.abc import Sequence

from tictactoe.api.models import BOARD_SIZE

EMPTY = ""

# Checked in this order: rows, columns, diagonals.
LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def empty_board() -> list[str]:
    return [EMPTY] * BOARD_SIZE


def in_range(position: int) -> bool:
    return 0 <= position < BOARD_SIZE


def find_winner(board: Sequence[str]) -> str:
    """Return the symbol of the first uniformly occupied line, or "" when none is."""

    for a, b, c in LINES:
        if board[a] != EMPTY and board[a] == board[b] == board[c]:
            return board[a]
    return EMPTY


def is_full(board: Sequence[str]) -> bool:
    return all(cell != EMPTY for cell in board)
