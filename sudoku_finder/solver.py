"""
Backtracking Sudoku solver.

Cells are filled most-constrained first: at every step the empty cell with
the fewest legal digits is tried, which keeps the search small for boards
with the number of givens a photographed puzzle has.
"""

import numpy as np

from .board import BLOCK_HEIGHT, BLOCK_WIDTH, EMPTY_VALUE, MAX_VALUE
from .config import MAX_SOLVE_STEPS

ALL_DIGITS = frozenset(range(1, MAX_VALUE + 1))


def _units(board: np.ndarray):
    """Yield (label, values) for every row, column and block."""
    for i in range(board.shape[0]):
        yield f"Row {i+1}", board[i, :]
        yield f"Column {i+1}", board[:, i]

    for br in range(0, board.shape[0], BLOCK_HEIGHT):
        for bc in range(0, board.shape[1], BLOCK_WIDTH):
            block = board[br:br + BLOCK_HEIGHT, bc:bc + BLOCK_WIDTH].ravel()
            yield f"3x3 block ({br // BLOCK_HEIGHT + 1},{bc // BLOCK_WIDTH + 1})", block


def validate_givens(board: np.ndarray) -> tuple[bool, str]:
    """Check for out of range or duplicate givens."""
    if board.shape != (9, 9):
        return False, f"Board has shape {board.shape}, expected (9, 9)"
    if board.min() < EMPTY_VALUE or board.max() > MAX_VALUE:
        return False, "Board contains a value outside 0-9"

    for label, values in _units(board):
        givens = values[values != EMPTY_VALUE]
        if givens.size != np.unique(givens).size:
            return False, f"{label} has duplicate given digit"

    return True, ""


def is_solvable(board: np.ndarray) -> bool:
    """Cheap pre-check run before a full search."""
    ok, _ = validate_givens(board)
    return ok


def candidates(board: np.ndarray, row: int, col: int) -> set:
    """Digits that can legally go into (row, col)."""
    r0 = (row // BLOCK_HEIGHT) * BLOCK_HEIGHT
    c0 = (col // BLOCK_WIDTH) * BLOCK_WIDTH
    used = set(board[row, :].tolist())
    used.update(board[:, col].tolist())
    used.update(board[r0:r0 + BLOCK_HEIGHT, c0:c0 + BLOCK_WIDTH].ravel().tolist())
    return set(ALL_DIGITS - used)


def _most_constrained_cell(board: np.ndarray):
    best = None
    for row, col in np.argwhere(board == EMPTY_VALUE):
        options = candidates(board, row, col)
        if best is None or len(options) < len(best[1]):
            best = ((row, col), options)
            if not options:
                break
    return best


def solve_board(board: np.ndarray, step_counter: list[int], max_steps: int) -> bool:
    """In-place backtracking solver. Returns True if solved."""
    if step_counter[0] > max_steps:
        return False

    cell = _most_constrained_cell(board)
    if cell is None:
        return True

    (r, c), options = cell
    for val in sorted(options):
        board[r, c] = val
        step_counter[0] += 1
        if solve_board(board, step_counter, max_steps):
            return True
    board[r, c] = EMPTY_VALUE

    return False


def solve_puzzle(board: np.ndarray, max_steps: int = MAX_SOLVE_STEPS) -> tuple[np.ndarray | None, str]:
    """
    Return a solved copy of the board, or (None, reason) if unsolvable or invalid.
    Limits the search to max_steps placements to avoid runaway loops.
    """
    board = np.asarray(board)
    is_valid, reason = validate_givens(board)
    if not is_valid:
        return None, reason

    working = board.astype(np.int64, copy=True)
    steps = [0]
    if solve_board(working, steps, max_steps):
        return working, f"Solved in {steps[0]} steps"
    if steps[0] >= max_steps:
        return None, f"Stopped after {steps[0]} steps (limit {max_steps})"
    return None, "No solution found"
