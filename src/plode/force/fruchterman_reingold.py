"""
Fruchterman-Reingold force-directed layout algorithm.

Based on the paper:
"Graph Drawing by Force-directed Placement" by Fruchterman and Reingold (1991)

The algorithm simulates a physical system where:
- All nodes repel each other (like electrical charges)
- Connected nodes attract each other (like springs)
- A "temperature" parameter limits movement and decreases over time
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

import numpy as np

from ..base import IterativeLayout
from ..config import LayoutConfig
from ..graph import GraphView, IndexedGraph
from ..positions import FrameSequence, PositionTable
from ..types import EventCallback, EventType, LayoutState
from ..validation import InvalidPositionsError, NumericalInstabilityError
from .cooling import CoolingSchedule, make_schedule
from .model import ForceModel

logger = logging.getLogger(__name__)


class FruchtermanReingoldLayout(IterativeLayout):
    """
    Fruchterman-Reingold force-directed graph layout.

    This algorithm positions nodes by simulating a physical system where:
    - All node pairs have repulsive forces (inversely proportional to distance)
    - Connected node pairs have attractive forces (proportional to distance squared)
    - Movement is limited by a "temperature" that cools over iterations

    No centering or gravity is applied; disconnected components drift apart
    under repulsion alone.

    Example:
        engine = FruchtermanReingoldLayout(config=LayoutConfig(k=1.0, seed=42))
        engine.run(EdgeListGraph([("a", "b"), ("b", "c")]))

        for node, (x, y) in engine.positions.items():
            print(f"Node {node}: ({x}, {y})")
    """

    def __init__(
        self,
        *,
        config: Optional[LayoutConfig] = None,
        schedule: Optional[CoolingSchedule] = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
    ) -> None:
        """
        Initialize Fruchterman-Reingold layout.

        Args:
            config: Layout parameters (defaults to LayoutConfig())
            schedule: Cooling schedule overriding the one built from config
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
        """
        super().__init__(
            config=config,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        self._custom_schedule: Optional[CoolingSchedule] = schedule
        self._schedule: Optional[CoolingSchedule] = schedule
        self._force_model: Optional[ForceModel] = None
        self._t0: float = 0.0
        self._temperature: float = 0.0
        self._last_displacement: float = 0.0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def force_model(self) -> Optional[ForceModel]:
        """Force model of the current or last run."""
        return self._force_model

    @property
    def schedule(self) -> Optional[CoolingSchedule]:
        """Cooling schedule of the current or last run."""
        return self._schedule

    @property
    def temperature(self) -> float:
        """Temperature used by the most recent iteration."""
        return self._temperature

    @property
    def last_displacement(self) -> float:
        """Largest distance any node moved in the most recent iteration."""
        return self._last_displacement

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def run(
        self,
        graph: GraphView,
        initial: Optional[Union[PositionTable, Mapping[Any, Any]]] = None,
        **kwargs: Any,
    ) -> FruchtermanReingoldLayout:
        """
        Run the layout algorithm.

        Args:
            graph: Any object satisfying the GraphView protocol
            initial: Optional starting positions covering every node. When
                omitted, positions are drawn from the seeded generator, and a
                single node is placed at the origin. Explicit positions are
                always kept as given, so a lone node stays where the caller
                put it.

        Returns:
            self for chaining

        Raises:
            InvalidEdgeError: If an edge references an unknown node
            InvalidPositionsError: If initial positions are incomplete or non-finite
            NumericalInstabilityError: If a coordinate becomes NaN or infinite
        """
        config = self._config
        indexed = IndexedGraph.from_view(graph)
        n = indexed.node_count

        self._graph = indexed
        self._iteration = 0
        self._last_displacement = 0.0
        self._rng = np.random.default_rng(config.seed)
        self._force_model = ForceModel(
            config.k,
            epsilon=config.epsilon,
            repulsion_cutoff=config.repulsion_cutoff,
            rng=self._rng,
        )
        self._t0 = config.initial_temperature(n)
        self._schedule = (
            self._custom_schedule
            if self._custom_schedule is not None
            else make_schedule(config, self._t0)
        )
        self._temperature = self._t0

        if initial is not None:
            self._positions = self._positions_from(initial, indexed)
        elif n == 1:
            self._positions = PositionTable(indexed.node_ids, np.zeros((1, 2)))
        else:
            self._positions = PositionTable(indexed.node_ids, self._initialize_positions(n))

        self._start_recording()
        self.trigger(
            {
                "type": EventType.start,
                "alpha": 1.0,
                "iteration": 0,
                "temperature": self._t0,
            }
        )

        if n < 2:
            # Nothing can exert a force on fewer than two nodes
            self._state = LayoutState.CONVERGED
            logger.info("Layout of %d node(s) is trivially converged", n)
        else:
            logger.debug(
                "Starting layout: %d nodes, %d edges, k=%g, t0=%g, max_iterations=%d",
                n,
                indexed.edge_count,
                config.k,
                self._t0,
                config.max_iterations,
            )
            try:
                self.kick()
            except Exception:
                # Also covers exceptions raised by event callbacks
                self._state = LayoutState.FAILED
                raise
            logger.info(
                "Layout finished: %s after %d iteration(s), last displacement %g",
                self._state.value,
                self._iteration,
                self._last_displacement,
            )

        self.trigger(
            {
                "type": EventType.end,
                "alpha": 0.0,
                "iteration": self._iteration,
                "temperature": self._temperature,
                "displacement": self._last_displacement,
                "state": self._state,
            }
        )
        return self

    def tick(self) -> bool:
        """
        Perform one iteration of the layout.

        Returns:
            True if converged, False otherwise.
        """
        # These are set in run() before tick() is called
        assert self._positions is not None
        assert self._graph is not None
        assert self._force_model is not None
        assert self._schedule is not None

        i = self._iteration
        pos = self._positions._array
        temperature = float(self._schedule.temperature(i))
        self._temperature = temperature

        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            disp = self._force_model.forces(pos, self._graph.sources, self._graph.targets)

            # An infinite component dominates its row: keep only its sign
            overflow = np.isinf(disp).any(axis=1) & ~np.isnan(disp).any(axis=1)
            if overflow.any():
                rows = disp[overflow]
                disp[overflow] = np.where(np.isinf(rows), np.sign(rows), 0.0)

            # Limit displacement by temperature, keeping its direction
            length = np.hypot(disp[:, 0], disp[:, 1])
            scale = np.zeros_like(length)
            moving = length > 0
            scale[moving] = np.minimum(length[moving], temperature) / length[moving]
            step = disp * scale[:, np.newaxis]
            updated = pos + step

        finite = np.isfinite(updated).all(axis=1)
        if not finite.all():
            bad = [self._graph.node_ids[j] for j in np.flatnonzero(~finite)]
            logger.error("Non-finite coordinates at iteration %d for %d node(s)", i, len(bad))
            raise NumericalInstabilityError(
                f"Iteration {i} produced non-finite coordinates for node(s) {bad!r}",
                iteration=i,
                nodes=bad,
            )
        pos[...] = updated

        moved = np.hypot(step[:, 0], step[:, 1])
        self._last_displacement = float(moved.max()) if len(moved) else 0.0

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Iteration %d: temperature=%g, max displacement=%g",
                i,
                temperature,
                self._last_displacement,
            )

        self.trigger(
            {
                "type": EventType.tick,
                "alpha": temperature / self._t0 if self._t0 > 0 else 0.0,
                "iteration": i,
                "temperature": temperature,
                "displacement": self._last_displacement,
            }
        )

        return self._last_displacement < self._config.convergence_threshold

    def _positions_from(
        self,
        initial: Union[PositionTable, Mapping[Any, Any]],
        indexed: IndexedGraph,
    ) -> PositionTable:
        """Copy caller-supplied positions into engine-owned storage in graph order."""
        try:
            return PositionTable.from_mapping(initial, indexed.node_ids)
        except (TypeError, ValueError) as e:
            if isinstance(e, InvalidPositionsError):
                raise
            raise InvalidPositionsError(f"Invalid initial positions: {e}") from e


# -----------------------------------------------------------------------------
# Functional entry points
# -----------------------------------------------------------------------------


def layout(
    graph: GraphView,
    config: Optional[LayoutConfig] = None,
    **overrides: Any,
) -> PositionTable:
    """
    Lay out a graph and return its final positions.

    Args:
        graph: Any object satisfying the GraphView protocol
        config: Layout parameters (defaults to LayoutConfig())
        **overrides: LayoutConfig fields to change, e.g. seed=3

    Returns:
        PositionTable with one entry per node (empty for an empty graph)
    """
    config = _resolve_config(config, overrides)
    return FruchtermanReingoldLayout(config=config).run(graph).positions


def layout_with_frames(
    graph: GraphView,
    config: Optional[LayoutConfig] = None,
    **overrides: Any,
) -> tuple[PositionTable, FrameSequence]:
    """
    Lay out a graph, recording intermediate positions for animation.

    Frame recording is switched on regardless of config.record_frames;
    config.frame_stride still applies.

    Returns:
        (final positions, recorded frames)
    """
    config = _resolve_config(config, overrides).replace(record_frames=True)
    engine = FruchtermanReingoldLayout(config=config).run(graph)
    assert engine.frames is not None
    return engine.positions, engine.frames


def _resolve_config(config: Optional[LayoutConfig], overrides: dict[str, Any]) -> LayoutConfig:
    if config is None:
        return LayoutConfig(**overrides)
    return config.replace(**overrides) if overrides else config


__all__ = [
    "FruchtermanReingoldLayout",
    "layout",
    "layout_with_frames",
]
