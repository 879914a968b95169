"""
Position tables and recorded frames.

- BoundingBox: axis-aligned extent of a set of positions
- PositionTable: read-only mapping node id -> (x, y), backed by an (n, 2) array
- Frame: immutable snapshot of a PositionTable at an iteration
- FrameSequence: append-only list of frames driving animated rendering
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Union

import numpy as np

from .types import Coordinate, NodeId
from .validation import InvalidPositionsError, validate_position_array


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box given by its lower-left and upper-right corners."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def of_array(cls, array: np.ndarray) -> Optional[BoundingBox]:
        """Bounding box of an (n, 2) array, or None when it has no rows."""
        if len(array) == 0:
            return None
        lo = array.min(axis=0)
        hi = array.max(axis=0)
        return cls(float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Coordinate:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def union(self, other: BoundingBox) -> BoundingBox:
        """Smallest box containing both boxes."""
        return BoundingBox(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def expand(self, amount: float) -> BoundingBox:
        """Grow the box by amount on every side."""
        return BoundingBox(
            self.min_x - amount,
            self.min_y - amount,
            self.max_x + amount,
            self.max_y + amount,
        )

    def contains(self, x: float, y: float, tolerance: float = 0.0) -> bool:
        return (
            self.min_x - tolerance <= x <= self.max_x + tolerance
            and self.min_y - tolerance <= y <= self.max_y + tolerance
        )


class PositionTable(Mapping):
    """
    Mapping from node id to an (x, y) coordinate.

    The set of nodes is fixed at construction; coordinates are always
    finite. Reading through the Mapping interface returns plain float
    tuples. The layout engine updates the backing array in place through
    the private ``_array`` attribute; everyone else sees a read-only view.

    Example:
        table = PositionTable(["a", "b"], [[0.0, 0.0], [1.0, 2.0]])
        table["b"]            # (1.0, 2.0)
        table.bbox().width    # 1.0
    """

    def __init__(self, node_ids: Sequence[NodeId], array: Union[np.ndarray, Sequence]) -> None:
        self._node_ids: list[NodeId] = list(node_ids)
        self._index: dict[NodeId, int] = {node: i for i, node in enumerate(self._node_ids)}
        if len(self._index) != len(self._node_ids):
            raise InvalidPositionsError("Position table node ids must be unique")
        self._array: np.ndarray = validate_position_array(array, len(self._node_ids))

    @classmethod
    def from_mapping(
        cls,
        positions: Mapping,
        node_ids: Optional[Sequence[NodeId]] = None,
    ) -> PositionTable:
        """
        Build a table from a {node: (x, y)} mapping.

        Args:
            positions: Mapping from node id to a 2-sequence of numbers
            node_ids: Order (and required set) of nodes. Defaults to the
                mapping's own iteration order.

        Raises:
            InvalidPositionsError: If a requested node is missing
        """
        if node_ids is None:
            node_ids = list(positions)
        missing = [node for node in node_ids if node not in positions]
        if missing:
            raise InvalidPositionsError(f"No position given for node(s): {missing!r}")
        rows = [tuple(positions[node]) for node in node_ids]
        if any(len(row) != 2 for row in rows):
            raise InvalidPositionsError("Every position must be an (x, y) pair")
        return cls(node_ids, np.array(rows, dtype=np.float64).reshape(len(rows), 2))

    # -------------------------------------------------------------------------
    # Mapping interface
    # -------------------------------------------------------------------------

    def __getitem__(self, node: NodeId) -> Coordinate:
        row = self._array[self._index[node]]
        return (float(row[0]), float(row[1]))

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self._node_ids)

    def __len__(self) -> int:
        return len(self._node_ids)

    def __contains__(self, node: object) -> bool:
        try:
            return node in self._index
        except TypeError:
            return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PositionTable):
            return self._node_ids == other._node_ids and bool(
                np.array_equal(self._array, other._array)
            )
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PositionTable(nodes={len(self)})"

    # -------------------------------------------------------------------------
    # Array access
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> list[NodeId]:
        """Node ids in dense index order."""
        return list(self._node_ids)

    @property
    def array(self) -> np.ndarray:
        """Read-only (n, 2) view of the coordinates."""
        view = self._array.view()
        view.flags.writeable = False
        return view

    def index_of(self, node: NodeId) -> int:
        return self._index[node]

    def bbox(self) -> Optional[BoundingBox]:
        """Bounding box of all positions, or None for an empty table."""
        return BoundingBox.of_array(self._array)

    def copy(self) -> PositionTable:
        """Independent copy sharing no array memory with this table."""
        clone = PositionTable.__new__(PositionTable)
        clone._node_ids = list(self._node_ids)
        clone._index = dict(self._index)
        clone._array = self._array.copy()
        return clone


@dataclass(frozen=True)
class Frame:
    """
    Snapshot of node positions after a number of completed iterations.

    Attributes:
        iteration: Completed iterations when the snapshot was taken
            (0 is the initial placement)
        positions: Independent copy of the engine's position table
    """

    iteration: int
    positions: PositionTable


class FrameSequence(Sequence):
    """
    Ordered, append-only sequence of frames.

    Appending is reserved for the layout engine; renderers only read it.
    """

    def __init__(self, frames: Sequence[Frame] = ()) -> None:
        self._frames: list[Frame] = []
        for frame in frames:
            self.append(frame)

    def append(self, frame: Frame) -> None:
        if self._frames:
            last = self._frames[-1]
            if frame.iteration <= last.iteration:
                raise ValueError(
                    f"Frame iterations must increase: {frame.iteration} after {last.iteration}"
                )
            if frame.positions.nodes != last.positions.nodes:
                raise InvalidPositionsError("All frames must cover the same nodes")
        self._frames.append(frame)

    def __getitem__(self, index):  # type: ignore[override]
        return self._frames[index]

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self._frames)

    def __repr__(self) -> str:
        return f"FrameSequence(frames={len(self._frames)})"

    @property
    def nodes(self) -> list[NodeId]:
        """Node ids shared by all frames (empty for an empty sequence)."""
        return self._frames[0].positions.nodes if self._frames else []

    @property
    def iterations(self) -> list[int]:
        return [frame.iteration for frame in self._frames]

    def bbox(self) -> Optional[BoundingBox]:
        """Bounding box across ALL frames, or None if there is nothing to bound."""
        box: Optional[BoundingBox] = None
        for frame in self._frames:
            frame_box = frame.positions.bbox()
            if frame_box is None:
                continue
            box = frame_box if box is None else box.union(frame_box)
        return box


__all__ = [
    "BoundingBox",
    "PositionTable",
    "Frame",
    "FrameSequence",
]
