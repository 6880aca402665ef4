"""
Entry point for running sudoku_finder as a package.

Usage:
    python -m sudoku_finder locate --accumulator hough.png --target-size 800 600
    python -m sudoku_finder solve puzzle.txt
"""

from .cli import main

if __name__ == '__main__':
    main()
