"""Board helpers and the backtracking solver."""

import numpy as np

from sudoku_finder.board import (
    board_to_digits,
    digits_to_board,
    format_board,
    load_board,
    parse_board,
)
from sudoku_finder.solver import candidates, is_solvable, solve_puzzle, validate_givens


class TestBoard:

    def test_digits_round_trip(self, puzzle_digits):
        board = digits_to_board(puzzle_digits)
        assert board.shape == (9, 9)
        assert board[1, 3] == 1
        assert board_to_digits(board) == puzzle_digits

    def test_parse_board(self, puzzle_text, puzzle_digits):
        assert board_to_digits(parse_board(puzzle_text)) == puzzle_digits

    def test_parse_board_treats_other_characters_as_empty(self):
        board = parse_board("5x3\n\n   9")
        assert board[0, 0] == 5
        assert board[0, 1] == 0
        assert board[0, 2] == 3
        assert board[2, 3] == 9
        assert np.count_nonzero(board) == 3

    def test_load_board(self, tmp_path, puzzle_text, puzzle_digits):
        path = tmp_path / "puzzle.txt"
        path.write_text(puzzle_text)
        assert board_to_digits(load_board(path)) == puzzle_digits

    def test_load_missing_board(self, tmp_path, capsys):
        assert load_board(tmp_path / "nope.txt") is None
        assert "Could not open file" in capsys.readouterr().out

    def test_format_board(self, puzzle_digits):
        text = format_board(digits_to_board(puzzle_digits))
        lines = text.splitlines()
        assert len(lines) == 11
        assert lines[0] == "5 3 . | . 7 . | . . ."
        assert set(lines[3]) == {"-"}


class TestSolver:

    def test_solves_puzzle(self, puzzle_digits, solution_digits):
        solution, message = solve_puzzle(digits_to_board(puzzle_digits))
        assert board_to_digits(solution) == solution_digits
        assert message.startswith("Solved")

    def test_does_not_modify_input(self, puzzle_digits):
        board = digits_to_board(puzzle_digits)
        solve_puzzle(board)
        assert board_to_digits(board) == puzzle_digits

    def test_duplicate_givens(self, puzzle_digits):
        digits = list(puzzle_digits)
        digits[2] = 5  # second 5 in the first row
        board = digits_to_board(digits)
        ok, reason = validate_givens(board)
        assert not ok
        assert "Row 1" in reason
        assert not is_solvable(board)
        assert solve_puzzle(board) == (None, reason)

    def test_duplicate_in_block(self):
        board = np.zeros((9, 9), dtype=np.int64)
        board[0, 0] = 4
        board[1, 1] = 4
        ok, reason = validate_givens(board)
        assert not ok
        assert "block (1,1)" in reason

    def test_out_of_range_value(self):
        board = np.zeros((9, 9), dtype=np.int64)
        board[4, 4] = 12
        assert not is_solvable(board)

    def test_step_limit(self, puzzle_digits):
        solution, message = solve_puzzle(digits_to_board(puzzle_digits), max_steps=3)
        assert solution is None
        assert "limit 3" in message

    def test_candidates(self, puzzle_digits):
        board = digits_to_board(puzzle_digits)
        # row 0, column 2 of the sample puzzle can only be 1, 2 or 4
        assert candidates(board, 0, 2) == {1, 2, 4}
