"""
Base classes for layout engines.

This module provides abstract base classes that define the common interface
and shared functionality of layout engines:

- BaseLayout: Abstract base with event system, configuration and results
- IterativeLayout: Tick loop with convergence bookkeeping and frame recording
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

import numpy as np

if TYPE_CHECKING:
    from typing_extensions import Self

from .config import LayoutConfig
from .graph import GraphView, IndexedGraph
from .positions import Frame, FrameSequence, PositionTable
from .types import Event, EventCallback, EventType, LayoutState


class BaseLayout(ABC):
    """
    Abstract base class for layout engines.

    Provides shared infrastructure:
    - Event system (start/tick/end events)
    - Configuration management
    - Initial position assignment from a seeded generator
    - Access to results (positions, frames, state)

    Example:
        engine = SomeLayout(config=LayoutConfig(k=1.0, seed=7))
        engine.run(graph)

        for node, (x, y) in engine.positions.items():
            print(f"Node {node}: ({x}, {y})")
    """

    def __init__(
        self,
        *,
        config: Optional[LayoutConfig] = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
    ) -> None:
        """
        Initialize layout with configuration.

        Args:
            config: Layout parameters (defaults to LayoutConfig())
            on_start: Callback for start event
            on_tick: Callback for tick event (iterative layouts)
            on_end: Callback for end event
        """
        self._config: LayoutConfig = config if config is not None else LayoutConfig()
        self._events: dict[EventType, EventCallback] = {}
        self._graph: Optional[IndexedGraph] = None
        self._positions: Optional[PositionTable] = None
        self._frames: Optional[FrameSequence] = None
        self._state: LayoutState = LayoutState.NOT_STARTED
        self._rng: Optional[np.random.Generator] = None

        # Register event callbacks
        if on_start:
            self._events[EventType.start] = on_start
        if on_tick:
            self._events[EventType.tick] = on_tick
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def config(self) -> LayoutConfig:
        """Get the layout configuration."""
        return self._config

    @config.setter
    def config(self, value: LayoutConfig) -> None:
        """Replace the configuration between runs."""
        if self._state is LayoutState.RUNNING:
            raise RuntimeError("Configuration cannot change while a layout is running")
        self._config = value

    @property
    def random_seed(self) -> Optional[int]:
        """Get random seed for reproducible layouts."""
        return self._config.seed

    @random_seed.setter
    def random_seed(self, value: Optional[int]) -> None:
        """Set random seed for reproducible layouts."""
        self.config = self._config.replace(seed=value)

    @property
    def graph(self) -> Optional[IndexedGraph]:
        """Indexed snapshot of the graph laid out by the last run."""
        return self._graph

    @property
    def positions(self) -> PositionTable:
        """Positions produced by the last run."""
        if self._positions is None:
            raise RuntimeError("Layout has not been run yet")
        return self._positions

    @property
    def frames(self) -> Optional[FrameSequence]:
        """Recorded frames of the last run, or None when recording was off."""
        return self._frames

    @property
    def state(self) -> LayoutState:
        """Get the state of the current or last run."""
        return self._state

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: EventCallback) -> Self:
        """
        Subscribe to a layout event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """
        Trigger an event, calling the registered callback.

        Args:
            event: Event payload with type and optional data
        """
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def run(self, graph: GraphView, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        This is the main entry point. Implementations should:
        1. Snapshot the graph and initialize node positions
        2. Run the layout algorithm
        3. Fire appropriate events

        Returns:
            self (for chaining)
        """
        pass

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _initialize_positions(self, node_count: int) -> np.ndarray:
        """
        Draw initial positions uniformly from a square centred on the origin.

        The square's side is ``init_scale * k * sqrt(n)``, so the expected
        spacing of nodes is comparable to the ideal spring length.
        """
        # Seeded by run()
        assert self._rng is not None
        side = self._config.init_scale * self._config.k * math.sqrt(node_count)
        half = side / 2
        return self._rng.uniform(-half, half, size=(node_count, 2))


class IterativeLayout(BaseLayout):
    """
    Base class for iterative layout engines.

    Provides:
    - Tick-based iteration loop bounded by max_iterations
    - Convergence state tracking
    - Opt-in frame recording at a configurable stride

    Subclasses implement tick(), which performs one iteration and reports
    whether the layout has converged.
    """

    def __init__(
        self,
        *,
        config: Optional[LayoutConfig] = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
    ) -> None:
        super().__init__(
            config=config,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        self._iteration: int = 0

    @property
    def iterations(self) -> int:
        """Get maximum iterations."""
        return self._config.max_iterations

    @property
    def iteration(self) -> int:
        """Number of iterations completed by the current or last run."""
        return self._iteration

    @property
    def converged(self) -> bool:
        return self._state is LayoutState.CONVERGED

    @abstractmethod
    def tick(self) -> bool:
        """
        Perform one iteration of the layout.

        Returns:
            True if converged, False if more iterations may follow.
        """
        pass

    def kick(self) -> LayoutState:
        """Run tick() repeatedly until convergence or max iterations."""
        self._state = LayoutState.RUNNING
        while self._iteration < self._config.max_iterations:
            converged = self.tick()
            self._iteration += 1
            self._record_frame()
            if converged:
                self._state = LayoutState.CONVERGED
                break
        else:
            self._state = LayoutState.ITERATION_LIMIT_REACHED
        self._record_frame(force=True)
        return self._state

    def _start_recording(self) -> None:
        """Begin a new frame sequence with the initial placement, if enabled."""
        self._frames = FrameSequence() if self._config.record_frames else None
        self._record_frame(force=True)

    def _record_frame(self, force: bool = False) -> None:
        if self._frames is None or self._positions is None:
            return
        if len(self._frames) and self._frames[-1].iteration == self._iteration:
            return
        if force or self._iteration % self._config.frame_stride == 0:
            self._frames.append(Frame(self._iteration, self._positions.copy()))


__all__ = [
    "BaseLayout",
    "IterativeLayout",
]
