"""
Layout quality metrics.

Provides quantitative measures of a computed layout:
- Pairwise distances: distance between every pair of nodes
- Edge lengths / variance / uniformity: how evenly springs are stretched
- Edge crossings: Number of intersecting edges
- Max displacement: how far nodes moved between two position tables

All metrics work with a PositionTable and (source, target) edge pairs.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Tuple

import numpy as np

from .positions import PositionTable
from .types import Coordinate, Edge
from .validation import InvalidPositionsError


def pairwise_distances(positions: PositionTable) -> np.ndarray:
    """
    Distances between all unordered pairs of distinct nodes.

    Returns:
        1-D array of n * (n - 1) / 2 distances in row-major pair order
    """
    pos = positions.array
    n = len(pos)
    if n < 2:
        return np.zeros(0, dtype=np.float64)
    i, j = np.triu_indices(n, k=1)
    delta = pos[i] - pos[j]
    return np.hypot(delta[:, 0], delta[:, 1])


def edge_lengths(positions: PositionTable, edges: Iterable[Edge]) -> List[float]:
    """Length of every edge (self-loops have length 0)."""
    lengths = []
    for src, tgt in edges:
        x1, y1 = positions[src]
        x2, y2 = positions[tgt]
        lengths.append(math.hypot(x1 - x2, y1 - y2))
    return lengths


def edge_length_variance(positions: PositionTable, edges: Iterable[Edge]) -> float:
    """
    Compute the variance of edge lengths.

    Lower variance indicates more uniform edge lengths.

    Returns:
        Variance of edge lengths (0.0 without edges)
    """
    lengths = edge_lengths(positions, edges)
    if not lengths:
        return 0.0

    mean = sum(lengths) / len(lengths)
    return sum((length - mean) ** 2 for length in lengths) / len(lengths)


def edge_length_uniformity(positions: PositionTable, edges: Iterable[Edge]) -> float:
    """
    Compute edge length uniformity (0-1, higher is better).

    Returns:
        1 - (std_dev / mean), clamped to [0, 1]
    """
    lengths = edge_lengths(positions, edges)
    if not lengths:
        return 1.0

    mean = sum(lengths) / len(lengths)
    if mean == 0:
        return 0.0

    variance = sum((length - mean) ** 2 for length in lengths) / len(lengths)
    return max(0.0, min(1.0, 1.0 - math.sqrt(variance) / mean))


def edge_crossings(positions: PositionTable, edges: Iterable[Edge]) -> int:
    """
    Count the number of edge crossings in the layout.

    Two edges cross if their line segments intersect (excluding
    shared endpoints). Self-loops never cross.

    Time Complexity: O(m^2) where m = number of edges
    """
    segments = [(src, tgt) for src, tgt in edges if src != tgt]
    crossings = 0

    for a in range(len(segments)):
        s1, t1 = segments[a]
        for b in range(a + 1, len(segments)):
            s2, t2 = segments[b]
            # Skip if edges share an endpoint
            if s1 == s2 or s1 == t2 or t1 == s2 or t1 == t2:
                continue
            if _segments_intersect(positions[s1], positions[t1], positions[s2], positions[t2]):
                crossings += 1

    return crossings


def max_displacement(before: PositionTable, after: PositionTable) -> float:
    """
    Largest distance any node moved between two tables of the same nodes.

    Raises:
        InvalidPositionsError: If the tables cover different nodes
    """
    if before.nodes != after.nodes:
        raise InvalidPositionsError("Position tables must cover the same nodes")
    if len(before) == 0:
        return 0.0
    delta = after.array - before.array
    return float(np.hypot(delta[:, 0], delta[:, 1]).max())


def _segments_intersect(
    p1: Coordinate,
    p2: Coordinate,
    p3: Coordinate,
    p4: Coordinate,
) -> bool:
    """Check if line segments (p1,p2) and (p3,p4) intersect."""

    def ccw(a: Tuple[float, float], b: Tuple[float, float], c: Tuple[float, float]) -> bool:
        return (c[1] - a[1]) * (b[0] - a[0]) > (b[1] - a[1]) * (c[0] - a[0])

    return ccw(p1, p3, p4) != ccw(p2, p3, p4) and ccw(p1, p2, p3) != ccw(p1, p2, p4)


__all__ = [
    "pairwise_distances",
    "edge_lengths",
    "edge_length_variance",
    "edge_length_uniformity",
    "edge_crossings",
    "max_displacement",
]
