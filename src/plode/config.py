"""
Layout configuration.

LayoutConfig is immutable and validated eagerly: an out-of-range value is
rejected when the config is built, before any iteration can run.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from .validation import (
    InvalidConfigError,
    validate_iterations,
    validate_non_negative,
    validate_positive,
    validate_seed,
    validate_stride,
)


class CoolingShape(Enum):
    """Shape of the temperature decay over iterations."""

    LINEAR = "linear"
    POLYNOMIAL = "polynomial"


@dataclass(frozen=True)
class LayoutConfig:
    """
    Parameters of a Fruchterman-Reingold layout run.

    Attributes:
        k: Ideal spring length (optimal distance between connected nodes)
        t0: Initial temperature (maximum displacement in the first
            iteration). None derives it from the node count as
            ``k * sqrt(n) / 10``.
        cooling: Temperature decay shape
        cooling_exponent: Exponent for polynomial cooling (1.0 is linear)
        max_iterations: Upper bound on iterations
        convergence_threshold: Stop early once no node moves farther
            than this in an iteration
        seed: Seed for initial placement and coincident-node separation
        record_frames: Record intermediate positions for animation
        frame_stride: Record every n-th iteration (initial and final
            states are always recorded)
        epsilon: Distance substituted for (near) coincident nodes
        repulsion_cutoff: Ignore repulsion between nodes farther apart than
            ``repulsion_cutoff * k``. None evaluates all pairs.
        init_scale: Side of the initial placement square in units of
            ``k * sqrt(n)``

    Raises:
        InvalidConfigError: If any value is out of range
    """

    k: float = 1.0
    t0: Optional[float] = None
    cooling: Union[CoolingShape, str] = CoolingShape.LINEAR
    cooling_exponent: float = 1.0
    max_iterations: int = 300
    convergence_threshold: float = 1e-4
    seed: Optional[int] = 0
    record_frames: bool = False
    frame_stride: int = 1
    epsilon: float = 1e-9
    repulsion_cutoff: Optional[float] = None
    init_scale: float = 1.0

    def __post_init__(self) -> None:
        # Frozen dataclass: normalized values are written with object.__setattr__
        set_ = object.__setattr__
        set_(self, "k", validate_positive("k", self.k))
        if self.t0 is not None:
            set_(self, "t0", validate_non_negative("t0", self.t0))
        try:
            set_(self, "cooling", CoolingShape(self.cooling))
        except ValueError:
            choices = ", ".join(shape.value for shape in CoolingShape)
            raise InvalidConfigError(
                f"cooling must be one of {choices}, got {self.cooling!r}"
            ) from None
        set_(self, "cooling_exponent", validate_positive("cooling_exponent", self.cooling_exponent))
        set_(self, "max_iterations", validate_iterations(self.max_iterations))
        set_(
            self,
            "convergence_threshold",
            validate_non_negative("convergence_threshold", self.convergence_threshold),
        )
        set_(self, "seed", validate_seed(self.seed))
        set_(self, "record_frames", bool(self.record_frames))
        set_(self, "frame_stride", validate_stride(self.frame_stride))
        set_(self, "epsilon", validate_positive("epsilon", self.epsilon))
        if self.repulsion_cutoff is not None:
            set_(
                self,
                "repulsion_cutoff",
                validate_positive("repulsion_cutoff", self.repulsion_cutoff),
            )
        set_(self, "init_scale", validate_positive("init_scale", self.init_scale))

    def initial_temperature(self, node_count: int) -> float:
        """Initial temperature for a graph with node_count nodes."""
        if self.t0 is not None:
            return self.t0
        return self.k * math.sqrt(max(1, node_count)) / 10

    def replace(self, **changes: Any) -> LayoutConfig:
        """Return a new, validated config with the given fields changed."""
        return dataclasses.replace(self, **changes)


__all__ = [
    "CoolingShape",
    "LayoutConfig",
]
