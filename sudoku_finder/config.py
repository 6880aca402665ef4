"""Tunable parameters for puzzle location and solving."""

import math
from dataclasses import dataclass


# Minimum number of non-zero digits accepted by CachedPuzzleSolver.
MIN_GIVENS = 21

MAX_SOLVE_STEPS = 200000


@dataclass
class FinderParams:
    # Max angular distance for "parallel" and for deviation from pi/2.
    angle_tolerance: float = math.pi / 12
    # Allowed deviation of each gap from (furthest - closest) / 3, in rho units.
    spacing_tolerance: float = 15.0
    min_cluster_size: int = 4
    # Bounds the exhaustive subset search; larger clusters are skipped.
    max_cluster_size: int = 32
    radius_divisor: float = 96.0
    # Peaks must reach numerator/denominator of the strongest cell.
    peak_ratio_numerator: int = 3
    peak_ratio_denominator: int = 4
    lines_per_axis: int = 4


DEFAULT_PARAMS = FinderParams()
