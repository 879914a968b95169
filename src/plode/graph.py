"""
Graph views consumed by the layout engine.

The engine never depends on a concrete graph library. Anything that can
enumerate its nodes and its edges satisfies the GraphView protocol:

- GraphView: structural read-only interface (nodes(), edges())
- EdgeListGraph: a plain edge-list graph for direct use and tests
- IndexedGraph: the dense integer-indexed form the engine works on
"""

from __future__ import annotations

import warnings
from typing import Iterable, Iterator, Optional, Protocol, Sequence, runtime_checkable

import numpy as np

from .types import Edge, NodeId
from .validation import validate_edge_endpoints


@runtime_checkable
class GraphView(Protocol):
    """
    Minimal read-only capability a graph must offer to be laid out.

    Node enumeration order should be stable for one invocation; it decides
    the dense index of every node and therefore the reproducibility of a
    seeded layout. Edges are (source, target) pairs of enumerated node ids;
    duplicates and self-loops are allowed.
    """

    def nodes(self) -> Iterable[NodeId]: ...

    def edges(self) -> Iterable[Edge]: ...


class EdgeListGraph:
    """
    Graph defined by an ordered edge list and an optional node list.

    If nodes are not given, they are discovered from the edge endpoints in
    order of first appearance. Isolated nodes must be listed explicitly.

    Example:
        graph = EdgeListGraph([("a", "b"), ("b", "c"), ("c", "a")])
        graph = EdgeListGraph([], nodes=["lonely"])
    """

    def __init__(
        self,
        edges: Iterable[Edge] = (),
        nodes: Optional[Iterable[NodeId]] = None,
    ) -> None:
        self._edges: list[Edge] = [(src, tgt) for src, tgt in edges]
        if nodes is None:
            discovered: dict[NodeId, None] = {}
            for src, tgt in self._edges:
                discovered.setdefault(src, None)
                discovered.setdefault(tgt, None)
            self._nodes: list[NodeId] = list(discovered)
        else:
            self._nodes = list(nodes)

    def nodes(self) -> list[NodeId]:
        return list(self._nodes)

    def edges(self) -> list[Edge]:
        return list(self._edges)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"EdgeListGraph(nodes={len(self._nodes)}, edges={len(self._edges)})"


class IndexedGraph:
    """
    Dense integer-indexed snapshot of a GraphView.

    Node ids are mapped to indices 0..n-1 in enumeration order and edges
    become two parallel int arrays, so positions live in a flat (n, 2)
    array and lookups are O(1).

    Attributes:
        node_ids: Node ids in index order
        index: Mapping node id -> dense index
        sources: Source index of every edge (int64 array, length m)
        targets: Target index of every edge (int64 array, length m)
    """

    def __init__(self, node_ids: Sequence[NodeId], edges: Iterable[Edge] = ()) -> None:
        self.node_ids: list[NodeId] = []
        self.index: dict[NodeId, int] = {}
        duplicates = 0
        for node in node_ids:
            if node in self.index:
                duplicates += 1
                continue
            self.index[node] = len(self.node_ids)
            self.node_ids.append(node)
        if duplicates:
            warnings.warn(
                f"Graph enumerated {duplicates} duplicate node id(s); "
                "only the first occurrence of each is kept",
                stacklevel=3,
            )

        edge_list = list(edges)
        validate_edge_endpoints(edge_list, self.index, strict=True)
        self.edge_ids: list[Edge] = edge_list
        self.sources = np.array([self.index[src] for src, _ in edge_list], dtype=np.int64)
        self.targets = np.array([self.index[tgt] for _, tgt in edge_list], dtype=np.int64)

    @classmethod
    def from_view(cls, graph: GraphView) -> IndexedGraph:
        """Snapshot any GraphView, enumerating nodes and edges exactly once."""
        if isinstance(graph, IndexedGraph):
            return graph
        return cls(list(graph.nodes()), list(graph.edges()))

    @property
    def node_count(self) -> int:
        return len(self.node_ids)

    @property
    def edge_count(self) -> int:
        return len(self.edge_ids)

    def nodes(self) -> list[NodeId]:
        return list(self.node_ids)

    def edges(self) -> list[Edge]:
        return list(self.edge_ids)

    def index_pairs(self) -> Iterator[tuple[int, int]]:
        """Iterate edges as (source_index, target_index)."""
        for src, tgt in zip(self.sources.tolist(), self.targets.tolist()):
            yield src, tgt

    def __repr__(self) -> str:
        return f"IndexedGraph(nodes={self.node_count}, edges={self.edge_count})"


__all__ = [
    "GraphView",
    "EdgeListGraph",
    "IndexedGraph",
]
