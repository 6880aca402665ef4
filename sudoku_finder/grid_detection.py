"""
Grid Detection Module

This module locates the Sudoku grid directly in Hough space:
- Peak extraction from the accumulator (sliding window local maxima)
- Grouping of lines by angle (single greedy pass)
- Search for four evenly spaced lines per angle group
- Pairing of two groups that are about pi/2 apart
- Intersection of the outer lines to get the four corners

A 9x9 grid has 10 lines per axis, and every third one (the block borders)
splits the grid into equal thirds. The search therefore looks for 4 evenly
spaced parallel lines on each axis; two such sets about pi/2 apart give the
puzzle outline.

References:
- Hough, P.V.C., "Method and means for recognizing complex patterns" (1962)
- Duda & Hart, "Use of the Hough transformation to detect lines and curves in pictures" (1972)
"""

from __future__ import annotations

import itertools
import math
from typing import List, Optional

import cv2
import numpy as np

from .accumulator import unpack_counts
from .config import DEFAULT_PARAMS, FinderParams
from .geometry import (
    Line,
    Point,
    alternate_line,
    difference_theta,
    intersect_lines,
    mean_theta,
    normalize_theta,
)


def peak_radius(width, height, params=DEFAULT_PARAMS):
    """
    Neighbourhood radius used when searching the accumulator for peaks.

    The radius scales with the accumulator size but is capped at 1, so every
    accumulator longer than about 48 cells on its long side gets a 3x3 window
    and anything smaller gets no neighbours at all.
    """
    # half away from zero, like C lround
    scaled = int(math.floor(max(width, height) / params.radius_divisor + 0.5))
    return min(1, scaled)


def find_lines(target_width: int, target_height: int, accumulator: np.ndarray,
               params: FinderParams = DEFAULT_PARAMS) -> List[Line]:
    """
    Find lines as peaks of the Hough accumulator.

    A cell is a peak when it beats every neighbour within the radius and
    holds at least 3/4 of the votes of the strongest cell (noise floor).
    Equal neighbours are not told apart, so a flat-topped peak is not
    reported at all.

    Args:
        target_width: Width of the photo the accumulator was computed from
        target_height: Height of that photo
        accumulator: Packed (H, W, 3) frame or (H, W) count array

    Returns:
        list[Line]: Lines in the photo's coordinate space, in scan order
            (row by row). Every line has rho >= 0 and theta in [0, 2*pi).
    """
    counts = unpack_counts(accumulator)
    height, width = counts.shape
    if counts.size == 0:
        return []

    radius = peak_radius(width, height, params)

    maximum_value = int(counts.max())
    minimum_value = maximum_value * params.peak_ratio_numerator // params.peak_ratio_denominator
    if minimum_value == 0:
        return []

    # Highest neighbour of every cell, centre excluded, zero outside the frame
    values = counts.astype(np.int32)
    padded = np.pad(values, radius, mode="constant", constant_values=0)
    neighbour_max = np.zeros_like(values)
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            if dx == 0 and dy == 0:
                continue
            shifted = padded[radius + dy:radius + dy + height, radius + dx:radius + dx + width]
            np.maximum(neighbour_max, shifted, out=neighbour_max)

    peaks = (values >= minimum_value) & (values > neighbour_max)

    # Rho in the accumulator spans [-diagonal, diagonal] of the photo
    r_multiplier = height / 2.0
    max_r = math.hypot(target_width, target_height)

    lines = []
    for y, x in zip(*np.nonzero(peaks)):
        theta = float(x) / width * math.pi
        rho = (float(y) - r_multiplier) * max_r / r_multiplier

        # canonical form: rho >= 0
        if rho < 0.0:
            theta = normalize_theta(theta + math.pi)
            rho = -rho

        lines.append(Line(theta, rho))

    return lines


def cluster_lines_by_theta(lines, params=DEFAULT_PARAMS):
    """
    Greedy single-pass grouping of lines into families of near-equal angle.

    Cluster centres are circular means recomputed at every test, so they
    shift as members are added and the result depends on input order.

    A line that does not match any cluster directly is retried with its
    normal flipped by pi (same line, negated rho); if that matches, the
    flipped form is what gets stored.
    """
    clusters = []

    for line in lines:
        target = None
        member = line

        for cluster in clusters:
            if difference_theta(line.theta, mean_theta(cluster)) < params.angle_tolerance:
                target = cluster
                break

        if target is None:
            alternative = alternate_line(line)
            for cluster in clusters:
                if difference_theta(alternative.theta, mean_theta(cluster)) < params.angle_tolerance:
                    target = cluster
                    member = alternative
                    break

        if target is None:
            clusters.append([line])
        else:
            target.append(member)

    return clusters


def _evenly_spaced(candidate, tolerance):
    span = candidate[-1].rho - candidate[0].rho
    mean = span / (len(candidate) - 1)
    return all(
        abs((following.rho - current.rho) - mean) < tolerance
        for current, following in zip(candidate, candidate[1:])
    )


def find_evenly_spaced_lines(cluster, params=DEFAULT_PARAMS):
    """
    Search one cluster for the widest set of evenly spaced lines.

    The cluster is sorted in place by |rho|. Every combination of
    params.lines_per_axis lines is tried; a combination qualifies when each
    gap is within params.spacing_tolerance of (furthest - closest) / 3.
    The widest qualifying combination wins, the first one found on ties.
    Combinations whose furthest line has a smaller rho than the closest one
    (negative range, possible after alternate-form members) never qualify.

    Returns:
        list[Line] sorted by |rho|, or None if the cluster is out of the size
        bounds or nothing qualifies
    """
    if len(cluster) < params.min_cluster_size or len(cluster) > params.max_cluster_size:
        return None

    cluster.sort(key=lambda line: abs(line.rho))

    best = None
    best_range = 0.0
    for candidate in itertools.combinations(cluster, params.lines_per_axis):
        span = candidate[-1].rho - candidate[0].rho
        if span < 0.0:
            continue
        if best is not None and span <= best_range:
            continue

        if _evenly_spaced(candidate, params.spacing_tolerance):
            best = list(candidate)
            best_range = span

    return best


def find_possible_puzzle_lines(line_clusters, params=DEFAULT_PARAMS):
    """Collect the best evenly spaced line set of every cluster that has one."""
    possible = []
    for cluster in line_clusters:
        lines = find_evenly_spaced_lines(cluster, params)
        if lines is not None:
            possible.append(lines)
    return possible


def find_puzzles(possible_puzzle_lines, params=DEFAULT_PARAMS):
    """
    Search candidate line sets for two that are rotated about pi/2 apart.

    Each pair is ordered with the larger cos(theta) set first; corner order
    downstream depends on it.
    """
    puzzles = []
    if len(possible_puzzle_lines) < 2:
        return puzzles

    for i, lines0 in enumerate(possible_puzzle_lines):
        theta0 = lines0[0].theta
        for lines1 in possible_puzzle_lines[i + 1:]:
            theta1 = lines1[0].theta

            if abs(math.pi / 2 - difference_theta(theta0, theta1)) < params.angle_tolerance:
                if math.cos(theta0) > math.cos(theta1):
                    puzzles.append((lines0, lines1))
                else:
                    puzzles.append((lines1, lines0))

    return puzzles


def resolve_corners(first, second):
    """
    Intersect the outer lines of a puzzle to get its corners.

    The inner lines are skipped. Corners come out in the fixed order
    first[0]xsecond[0], first[0]xsecond[-1], first[-1]xsecond[0],
    first[-1]xsecond[-1]; rectification relies on it.

    Returns:
        list[Point] of length 4, or None if two lines are parallel
    """
    corners = []
    for a in (first[0], first[-1]):
        for b in (second[0], second[-1]):
            point = intersect_lines(a, b)
            if point is None:
                return None
            corners.append(point)
    return corners


class PuzzleFinder:
    """
    Locates a single Sudoku puzzle in a Hough accumulator.

    The intermediate results of the last call are kept on the instance
    (lines, line_clusters, possible_puzzle_lines, puzzle_lines) for
    inspection and are cleared at the start of every call. An instance is
    not safe to share between threads; give each caller its own.
    """

    def __init__(self, params: Optional[FinderParams] = None):
        self.params = params if params is not None else FinderParams()
        self.lines = []
        self.line_clusters = []
        self.possible_puzzle_lines = []
        self.puzzle_lines = []

    def reset(self):
        self.lines.clear()
        self.line_clusters.clear()
        self.possible_puzzle_lines.clear()
        self.puzzle_lines.clear()

    def find(self, target_width: int, target_height: int, accumulator: np.ndarray,
             debug: bool = False) -> Optional[List[Point]]:
        """
        Run the full search on one accumulator.

        Args:
            target_width: Width of the photo the accumulator belongs to
            target_height: Height of that photo
            accumulator: Packed (H, W, 3) frame or (H, W) count array
            debug: If True, print a summary of each stage

        Returns:
            list[Point]: Four corners in photo coordinates, or None if no
                puzzle was found
        """
        self.reset()

        self.lines.extend(find_lines(target_width, target_height, accumulator, self.params))
        if debug:
            print(f"      Found {len(self.lines)} peak lines")

        self.line_clusters.extend(cluster_lines_by_theta(self.lines, self.params))
        if debug:
            sizes = [len(cluster) for cluster in self.line_clusters]
            print(f"      Grouped into {len(sizes)} angle clusters (sizes: {sizes})")

        self.possible_puzzle_lines.extend(find_possible_puzzle_lines(self.line_clusters, self.params))
        if debug:
            print(f"      {len(self.possible_puzzle_lines)} clusters have evenly spaced lines")

        self.puzzle_lines.extend(find_puzzles(self.possible_puzzle_lines, self.params))
        if not self.puzzle_lines:
            if debug:
                print("      No perpendicular line sets found")
            return None

        # first pair wins
        first, second = self.puzzle_lines[0]
        corners = resolve_corners(first, second)
        if debug and corners is not None:
            for i, corner in enumerate(corners):
                print(f"        Corner {i}: ({corner.x:.1f}, {corner.y:.1f})")

        return corners


def find_puzzle(target_width: int, target_height: int, accumulator: np.ndarray,
                params: Optional[FinderParams] = None, debug: bool = False) -> Optional[List[Point]]:
    """One-off search with a fresh PuzzleFinder."""
    return PuzzleFinder(params).find(target_width, target_height, accumulator, debug=debug)


def draw_puzzle_corners(image, corners):
    """
    Visualize the located corners on the photo.

    Corners are drawn as red circles labelled with their index, joined in
    outline order 0-1-3-2 since the corners come row by row.
    """
    output = image.copy()
    if output.ndim == 2:
        output = cv2.cvtColor(output, cv2.COLOR_GRAY2BGR)

    outline = np.array([corners[i] for i in (0, 1, 3, 2)], dtype=np.float32)
    pts = np.round(outline).astype(np.int32).reshape((-1, 1, 2))
    cv2.polylines(output, [pts], True, (0, 255, 0), 3)

    for i, corner in enumerate(corners):
        x, y = int(round(corner.x)), int(round(corner.y))
        cv2.circle(output, (x, y), 10, (0, 0, 255), -1)
        cv2.putText(output, str(i), (x + 15, y + 15),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 0, 0), 2)

    return output
