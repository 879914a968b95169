"""
Common types for the layout engine and renderers.

This module provides the small vocabulary shared across the package:
- NodeId / Edge / Coordinate: type aliases for graph data and positions
- EventType / Event: layout lifecycle events for observers
- LayoutState: where a layout run currently stands
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Callable, Hashable, Optional, Tuple, TypedDict

NodeId = Hashable
"""Opaque, hashable node identifier supplied by a graph view."""

Edge = Tuple[NodeId, NodeId]
"""A (source, target) pair of node ids."""

Coordinate = Tuple[float, float]
"""An (x, y) position."""


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: Initial positions are assigned, iterations are about to begin
    - tick: Fired once per iteration (for animation or progress reporting)
    - end: Layout has converged or hit the iteration limit
    """

    start = 0
    tick = 1
    end = 2


class LayoutState(Enum):
    """State of a layout run. CONVERGED and ITERATION_LIMIT_REACHED are both successful."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    CONVERGED = "converged"
    ITERATION_LIMIT_REACHED = "iteration_limit_reached"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (LayoutState.CONVERGED, LayoutState.ITERATION_LIMIT_REACHED)


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    alpha: float
    iteration: int
    temperature: float
    displacement: float
    state: LayoutState


EventCallback = Callable[[Optional[Event]], None]


__all__ = [
    "NodeId",
    "Edge",
    "Coordinate",
    "EventType",
    "Event",
    "EventCallback",
    "LayoutState",
]
