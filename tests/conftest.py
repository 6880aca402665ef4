"""
pytest configuration and shared fixtures

Synthetic accumulators are built so that the lines behind every peak are
known exactly. With an accumulator of ACC_WIDTH x ACC_HEIGHT cells and a
TARGET_WIDTH x TARGET_HEIGHT photo (diagonal 500):

    theta = x / ACC_WIDTH * pi
    rho   = (y - ACC_HEIGHT / 2) * 500 / (ACC_HEIGHT / 2) = (y - 100) * 5
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from sudoku_finder.geometry import Line

ACC_WIDTH = 180
ACC_HEIGHT = 200
TARGET_WIDTH = 300
TARGET_HEIGHT = 400

PEAK_VOTES = 100
BACKGROUND_VOTES = 10

# rho 50, 100, 150, 200
GRID_ROWS = (110, 120, 130, 140)


def cell_to_line(x: int, y: int) -> Line:
    return Line(x / ACC_WIDTH * math.pi, (y - ACC_HEIGHT / 2) * 5.0)


def make_accumulator(peaks, width=ACC_WIDTH, height=ACC_HEIGHT,
                     votes=PEAK_VOTES, background=BACKGROUND_VOTES) -> np.ndarray:
    counts = np.full((height, width), background, dtype=np.uint16)
    for x, y in peaks:
        counts[y, x] = votes
    return counts


def family(column: int, rows=GRID_ROWS):
    return [(column, row) for row in rows]


@pytest.fixture
def axis_aligned_accumulator() -> np.ndarray:
    """Vertical lines x = 50..200 and horizontal lines y = 50..200."""
    return make_accumulator(family(0) + family(90))


@pytest.fixture
def rotated_accumulator() -> np.ndarray:
    """Two perpendicular families with normals at 10 and 100 degrees."""
    return make_accumulator(family(10) + family(100))


# ============================================================================
# Puzzles
# ============================================================================

PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


@pytest.fixture
def puzzle_digits() -> list[int]:
    return [int(c) for c in PUZZLE]


@pytest.fixture
def solution_digits() -> list[int]:
    return [int(c) for c in SOLUTION]


@pytest.fixture
def puzzle_text() -> str:
    rows = [PUZZLE[i:i + 9].replace("0", ".") for i in range(0, 81, 9)]
    return "\n".join(rows) + "\n"
