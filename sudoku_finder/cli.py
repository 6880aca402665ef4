"""
Sudoku Finder - Command Line Application
"""

import argparse
import os
import sys

import cv2

from .accumulator import load_accumulator
from .board import board_to_digits, digits_to_board, format_board, load_board
from .cached_solver import CachedPuzzleSolver
from .config import FinderParams
from .grid_detection import PuzzleFinder, draw_puzzle_corners


def locate(args) -> int:
    """Locate a puzzle in a stored accumulator and report its corners."""
    print(f"\n{'='*60}")
    print(f"Processing: {os.path.basename(args.accumulator)}")
    print(f"{'='*60}")

    print("\n[1/3] Loading accumulator...")
    counts = load_accumulator(args.accumulator)
    if counts is None:
        print(f"Error: Could not load accumulator from {args.accumulator}")
        return 1
    print(f"      Accumulator size: {counts.shape[1]}x{counts.shape[0]}, peak votes: {counts.max()}")

    target_width, target_height = args.target_size
    params = FinderParams(spacing_tolerance=args.spacing_tolerance)
    finder = PuzzleFinder(params)

    print("\n[2/3] Searching Hough space for the 9x9 grid...")
    corners = finder.find(target_width, target_height, counts, debug=args.verbose)
    if corners is None:
        print("      ✗ No puzzle found")
        return 1

    print("\n[3/3] Corners identified...")
    for i, corner in enumerate(corners):
        print(f"        Corner {i}: ({corner.x:.1f}, {corner.y:.1f})")

    if args.image:
        image = cv2.imread(args.image)
        if image is None:
            print(f"Error: Could not load image from {args.image}")
            return 1
        os.makedirs(args.output, exist_ok=True)
        base_name = os.path.splitext(os.path.basename(args.image))[0]
        output_path = os.path.join(args.output, f"{base_name}_corners.jpg")
        cv2.imwrite(output_path, draw_puzzle_corners(image, corners))
        print(f"\n      Saved corner overlay to {output_path}")

    return 0


def solve(args) -> int:
    """Solve a puzzle stored as 9 lines of digits."""
    board = load_board(args.puzzle)
    if board is None:
        return 1

    print("\nPuzzle:")
    print(format_board(board))

    solver = CachedPuzzleSolver()
    solution = solver.solve(board_to_digits(board))
    if solution is None:
        ok, reason = solver.check_digits(board_to_digits(board))
        print(f"\n✗ Could not solve: {reason if not ok else 'no solution found'}")
        return 1

    print("\n✓ Solution:")
    print(format_board(digits_to_board(solution)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Sudoku Finder - locate a puzzle in Hough space and solve it',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Locate a puzzle in a packed accumulator for an 800x600 photo:
    python -m sudoku_finder locate --accumulator hough.png --target-size 800 600

  Draw the corners onto the photo:
    python -m sudoku_finder locate -a hough.png -t 800 600 --image photo.jpg

  Solve a puzzle file:
    python -m sudoku_finder solve puzzle.txt
        """
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    locate_parser = subparsers.add_parser('locate', help='Find puzzle corners in a Hough accumulator')
    locate_parser.add_argument('--accumulator', '-a', required=True,
                               help='Packed accumulator image (lossless, 3 channels)')
    locate_parser.add_argument('--target-size', '-t', type=int, nargs=2, required=True,
                               metavar=('WIDTH', 'HEIGHT'),
                               help='Size of the photo the accumulator was computed from')
    locate_parser.add_argument('--image', '-i', default=None,
                               help='Photo to draw the located corners on')
    locate_parser.add_argument('--output', '-o', default='output',
                               help='Output directory (default: output)')
    locate_parser.add_argument('--spacing-tolerance', type=float, default=FinderParams.spacing_tolerance,
                               help='Allowed gap deviation between grid lines (default: 15)')
    locate_parser.add_argument('--verbose', '-v', action='store_true',
                               help='Print a summary of each search stage')
    locate_parser.set_defaults(handler=locate)

    solve_parser = subparsers.add_parser('solve', help='Solve a puzzle text file')
    solve_parser.add_argument('puzzle', help='File with 9 lines of 9 characters (1-9 given, anything else blank)')
    solve_parser.set_defaults(handler=solve)

    return parser


def main(argv=None):
    """
    Main entry point for the Sudoku Finder application.

    Handles command-line arguments and dispatches to the chosen command.
    """
    args = build_parser().parse_args(argv)

    try:
        status = args.handler(args)
    except Exception as e:
        print(f"\nError during processing: {str(e)}")
        import traceback
        traceback.print_exc()
        sys.exit(1)

    if status:
        sys.exit(status)


if __name__ == '__main__':
    main()
