"""
Sudoku Finder - Hough-space puzzle location

This package contains modules for:
- Unpacking Hough transform accumulators
- Locating the 9x9 grid (peaks, clustering, spacing search, corners)
- Sudoku board parsing and solving
- Cached solving of repeated puzzles
"""

from .geometry import Line, Point
from .grid_detection import PuzzleFinder
from .cached_solver import CachedPuzzleSolver

__version__ = "1.0.0"
__all__ = ["Line", "Point", "PuzzleFinder", "CachedPuzzleSolver"]
