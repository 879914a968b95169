"""
Input validation utilities and error types.

Provides centralized validation functions for layout configuration, edge
lists, positions and canvas size. Raises descriptive exceptions on invalid
input. Numerical failures during a layout run are reported separately via
NumericalInstabilityError.
"""

from __future__ import annotations

import math
from typing import Any, Collection, Iterable, Optional, Sequence

import numpy as np


class ValidationError(ValueError):
    """Base exception for rejected input."""

    pass


class InvalidConfigError(ValidationError):
    """Raised when a layout configuration value is out of range."""

    pass


class InvalidEdgeError(ValidationError):
    """Raised when an edge references a node the graph does not contain."""

    pass


class InvalidPositionsError(ValidationError):
    """Raised when supplied positions are malformed or non-finite."""

    pass


class InvalidCanvasSizeError(ValidationError):
    """Raised when canvas dimensions are invalid."""

    pass


class NumericalInstabilityError(ArithmeticError):
    """
    Raised when a layout iteration produces a non-finite coordinate.

    Attributes:
        iteration: Index of the iteration that failed (None if unknown)
        nodes: Ids of the nodes whose coordinates became NaN or infinite
    """

    def __init__(
        self,
        message: str,
        *,
        iteration: Optional[int] = None,
        nodes: Sequence[Any] = (),
    ) -> None:
        super().__init__(message)
        self.iteration = iteration
        self.nodes = list(nodes)


def validate_positive(name: str, value: float) -> float:
    """
    Validate that a configuration value is strictly positive and finite.

    Raises:
        InvalidConfigError: If value <= 0, NaN or infinite
    """
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidConfigError(f"{name} must be positive, got {value}")
    return value


def validate_non_negative(name: str, value: float) -> float:
    """
    Validate that a configuration value is finite and not negative.

    Raises:
        InvalidConfigError: If value < 0, NaN or infinite
    """
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise InvalidConfigError(f"{name} must be non-negative, got {value}")
    return value


def validate_iterations(iterations: int) -> int:
    """
    Validate iteration count is positive.

    Args:
        iterations: Number of iterations

    Returns:
        Validated iteration count

    Raises:
        InvalidConfigError: If iterations < 1
    """
    if isinstance(iterations, bool) or int(iterations) != iterations:
        raise InvalidConfigError(f"max_iterations must be an integer, got {iterations!r}")
    if iterations < 1:
        raise InvalidConfigError(f"max_iterations must be >= 1, got {iterations}")
    return int(iterations)


def validate_seed(seed: Any) -> Optional[int]:
    """
    Validate a random seed: None or a non-negative integral value.

    Returns:
        None, or the seed as a plain int

    Raises:
        InvalidConfigError: If seed is negative, fractional or not a number
    """
    if seed is None:
        return None
    try:
        valid = not isinstance(seed, bool) and int(seed) == seed and seed >= 0
    except (TypeError, ValueError, OverflowError):
        valid = False
    if not valid:
        raise InvalidConfigError(f"seed must be a non-negative integer or None, got {seed!r}")
    return int(seed)


def validate_stride(stride: int) -> int:
    """Validate a frame recording stride (>= 1)."""
    if isinstance(stride, bool) or int(stride) != stride or stride < 1:
        raise InvalidConfigError(f"frame_stride must be an integer >= 1, got {stride!r}")
    return int(stride)


def validate_canvas_size(size: Sequence[float]) -> tuple[float, float]:
    """
    Validate canvas size dimensions.

    Args:
        size: [width, height] sequence

    Returns:
        Validated (width, height) tuple

    Raises:
        InvalidCanvasSizeError: If dimensions are invalid
    """
    if len(size) < 2:
        raise InvalidCanvasSizeError(
            f"Canvas size must have 2 elements [width, height], got {len(size)}"
        )

    width, height = float(size[0]), float(size[1])

    if not width > 0:
        raise InvalidCanvasSizeError(f"Canvas width must be positive, got {width}")
    if not height > 0:
        raise InvalidCanvasSizeError(f"Canvas height must be positive, got {height}")

    return width, height


def validate_margin(margin: float, width: float, height: float) -> float:
    """
    Validate that a canvas margin leaves a drawable area.

    Raises:
        InvalidCanvasSizeError: If margin is negative or consumes the canvas
    """
    margin = float(margin)
    if margin < 0:
        raise InvalidCanvasSizeError(f"Margin must be non-negative, got {margin}")
    if 2 * margin >= min(width, height):
        raise InvalidCanvasSizeError(
            f"Margin {margin} leaves no drawable area on a {width}x{height} canvas"
        )
    return margin


def validate_edge_endpoints(
    edges: Iterable[tuple[Any, Any]],
    nodes: Collection[Any],
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that every edge endpoint is a known node.

    Args:
        edges: Iterable of (source, target) pairs
        nodes: Collection of node ids supporting membership tests
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (edge_index, issue_description) tuples

    Raises:
        InvalidEdgeError: If strict=True and invalid edges found
    """
    issues: list[tuple[int, str]] = []

    for i, (src, tgt) in enumerate(edges):
        if src not in nodes:
            issues.append((i, f"Edge {i}: source {src!r} is not a node of the graph"))
        if tgt not in nodes:
            issues.append((i, f"Edge {i}: target {tgt!r} is not a node of the graph"))

    if strict and issues:
        msg = "Invalid edges:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidEdgeError(msg)

    return issues


def validate_position_array(array: Any, node_count: int) -> np.ndarray:
    """
    Validate and convert positions to an (n, 2) float64 array.

    Raises:
        InvalidPositionsError: On wrong shape or non-finite values
    """
    arr = np.array(array, dtype=np.float64)
    if node_count == 0 and arr.size == 0:
        return np.zeros((0, 2), dtype=np.float64)
    if arr.shape != (node_count, 2):
        raise InvalidPositionsError(
            f"Expected positions of shape ({node_count}, 2), got {arr.shape}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidPositionsError("Positions must be finite (found NaN or infinity)")
    return arr


__all__ = [
    "ValidationError",
    "InvalidConfigError",
    "InvalidEdgeError",
    "InvalidPositionsError",
    "InvalidCanvasSizeError",
    "NumericalInstabilityError",
    "validate_positive",
    "validate_non_negative",
    "validate_iterations",
    "validate_seed",
    "validate_stride",
    "validate_canvas_size",
    "validate_margin",
    "validate_edge_endpoints",
    "validate_position_array",
]
