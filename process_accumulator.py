#!/usr/bin/env python3
"""
Convenience script to run the Sudoku Finder commands.

Usage:
    python process_accumulator.py locate -a hough.png -t 800 600
    python process_accumulator.py locate -a hough.png -t 800 600 --image photo.jpg --output my_output/
    python process_accumulator.py solve puzzle.txt
"""

import sys
import os

# Add the repository root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sudoku_finder.cli import main

if __name__ == '__main__':
    main()
