"""Sudoku board layout, text parsing and formatting."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np

WIDTH = 9
HEIGHT = 9
BLOCK_WIDTH = WIDTH // 3
BLOCK_HEIGHT = HEIGHT // 3
MAX_VALUE = 9
EMPTY_VALUE = 0
CELL_COUNT = WIDTH * HEIGHT


def digits_to_board(digits: Sequence[int]) -> np.ndarray:
    """Lay out 81 row-major digits as a 9x9 board."""
    return np.array(digits, dtype=np.int64).reshape(HEIGHT, WIDTH)


def board_to_digits(board: np.ndarray) -> list[int]:
    return [int(v) for v in np.asarray(board).ravel()]


def parse_board(text: str) -> np.ndarray:
    """
    Parse a puzzle written as up to 9 lines of up to 9 characters.

    Digits 1-9 are givens; any other character ('.', '0', ' ') is an empty
    cell. Missing rows or short lines leave the remaining cells empty.
    """
    board = np.full((HEIGHT, WIDTH), EMPTY_VALUE, dtype=np.int64)
    for y, line in enumerate(text.splitlines()[:HEIGHT]):
        for x, char in enumerate(line[:WIDTH]):
            if "1" <= char <= "9":
                board[y, x] = int(char)
    return board


def load_board(path: str | Path) -> np.ndarray | None:
    """Read a puzzle file; returns None if it cannot be opened."""
    try:
        text = Path(path).read_text()
    except OSError as exc:
        print(f"Could not open file {path}: {exc}")
        return None
    return parse_board(text)


def format_board(board: np.ndarray) -> str:
    """Render the 9x9 board as a human-friendly string."""
    lines = []
    for r, row in enumerate(board):
        parts = []
        for c, val in enumerate(row):
            parts.append(str(val) if val != EMPTY_VALUE else ".")
            if c in {2, 5}:
                parts.append("|")
        line = " ".join(parts)
        lines.append(line)
        if r in {2, 5}:
            lines.append("-" * len(line))
    return "\n".join(lines)
