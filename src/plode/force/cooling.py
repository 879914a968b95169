"""
Cooling schedules.

A schedule maps an iteration index to a temperature: the largest distance
any node may move in that iteration. Schedules are pure functions of the
index and their constructor arguments, so they can be tested apart from
the layout loop.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..config import CoolingShape, LayoutConfig
from ..validation import validate_iterations, validate_non_negative, validate_positive


@runtime_checkable
class CoolingSchedule(Protocol):
    """Anything with a temperature(iteration) method can cool a layout."""

    def temperature(self, iteration: int) -> float: ...


class PolynomialCooling:
    """
    Polynomial decay: ``T(i) = t0 * (1 - i / max_iterations) ** exponent``.

    T(0) = t0, the sequence is non-increasing, and the last iteration's
    temperature ``t0 * (1 / max_iterations) ** exponent`` is close to zero.
    Larger exponents cool faster early on.
    """

    def __init__(self, t0: float, max_iterations: int, exponent: float = 1.0) -> None:
        self.t0 = validate_non_negative("t0", t0)
        self.max_iterations = validate_iterations(max_iterations)
        self.exponent = validate_positive("cooling_exponent", exponent)

    def temperature(self, iteration: int) -> float:
        if not 0 <= iteration < self.max_iterations:
            raise ValueError(
                f"iteration must be in [0, {self.max_iterations}), got {iteration}"
            )
        remaining = 1.0 - iteration / self.max_iterations
        if self.exponent == 1.0:
            return self.t0 * remaining
        return self.t0 * remaining**self.exponent

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(t0={self.t0}, max_iterations={self.max_iterations}, "
            f"exponent={self.exponent})"
        )


class LinearCooling(PolynomialCooling):
    """Linear decay: ``T(i) = t0 * (1 - i / max_iterations)``."""

    def __init__(self, t0: float, max_iterations: int) -> None:
        super().__init__(t0, max_iterations, exponent=1.0)

    def __repr__(self) -> str:
        return f"LinearCooling(t0={self.t0}, max_iterations={self.max_iterations})"


def make_schedule(config: LayoutConfig, t0: float) -> PolynomialCooling:
    """Build the schedule a config asks for, starting at temperature t0."""
    if config.cooling is CoolingShape.LINEAR:
        return LinearCooling(t0, config.max_iterations)
    return PolynomialCooling(t0, config.max_iterations, config.cooling_exponent)


__all__ = [
    "CoolingSchedule",
    "LinearCooling",
    "PolynomialCooling",
    "make_schedule",
]
