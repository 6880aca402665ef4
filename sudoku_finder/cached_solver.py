"""
Memoizing front end for the solver.

Solutions are keyed by the exact 81-digit input, so a puzzle seen again in
a later frame is answered from the cache.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .board import CELL_COUNT, MAX_VALUE, board_to_digits, digits_to_board
from .config import MIN_GIVENS
from .solver import is_solvable, solve_puzzle

SolveFn = Callable[[np.ndarray], Tuple[Optional[np.ndarray], str]]


class CachedPuzzleSolver:
    """
    Solves 81-digit puzzles (row-major, 0 for blank) and remembers the results.

    Args:
        solve_fn: Routine that takes a 9x9 board and returns
            (solved board | None, message); defaults to solve_puzzle
    """

    def __init__(self, solve_fn: Optional[SolveFn] = None):
        self.solve_fn = solve_fn if solve_fn is not None else solve_puzzle
        self.solved_puzzles: Dict[Tuple[int, ...], List[int]] = {}
        self.solve_calls = 0
        self._last_used_key: Optional[Tuple[int, ...]] = None

    @staticmethod
    def check_digits(digits: Sequence[int]) -> Tuple[bool, str]:
        """Decide whether a digit sequence is worth handing to the solver."""
        if len(digits) != CELL_COUNT:
            return False, f"Expected {CELL_COUNT} digits, got {len(digits)}"
        if any(digit < 0 or digit > MAX_VALUE for digit in digits):
            return False, "Digits must be between 0 and 9"
        if not is_solvable(digits_to_board(digits)):
            return False, "Puzzle has conflicting givens"

        # Too few givens and the search may not finish in reasonable time
        givens = sum(1 for digit in digits if digit > 0)
        if givens < MIN_GIVENS:
            return False, f"Only {givens} givens (need at least {MIN_GIVENS})"

        return True, ""

    def solve(self, digits: Sequence[int]) -> Optional[List[int]]:
        """
        Return the 81 solved digits, or None if the puzzle is rejected or
        cannot be solved.
        """
        digits = [int(digit) for digit in digits]
        ok, _ = self.check_digits(digits)
        if not ok:
            return None

        key = tuple(digits)
        cached = self.solved_puzzles.get(key)
        if cached is not None:
            self._last_used_key = key
            return list(cached)

        self.solve_calls += 1
        solution, _ = self.solve_fn(digits_to_board(digits))
        if solution is None:
            return None

        solved = board_to_digits(solution)
        self.solved_puzzles[key] = solved
        self._last_used_key = key
        return list(solved)

    @property
    def last_used_solution(self) -> Optional[List[int]]:
        """Most recently served solution, or None before the first success."""
        if self._last_used_key is None:
            return None
        return list(self.solved_puzzles[self._last_used_key])

    def clear(self):
        self.solved_puzzles.clear()
        self._last_used_key = None
