"""
NetworkXGraph - GraphView adapter for networkx graphs.

Wraps Graph, DiGraph, MultiGraph and MultiDiGraph instances. Node order is
networkx's insertion order; parallel edges of multigraphs are reported once
each, so they strengthen attraction like duplicate edges do.
"""

from __future__ import annotations

from typing import Iterable

import networkx as nx

from ..types import Edge, NodeId


class NetworkXGraph:
    """
    Read-only GraphView over a networkx graph.

    Example:
        import networkx as nx
        from plode import layout
        from plode.adapters.networkx import NetworkXGraph

        positions = layout(NetworkXGraph(nx.petersen_graph()), seed=3)
    """

    def __init__(self, graph: nx.Graph) -> None:
        if not isinstance(graph, nx.Graph):
            raise TypeError(f"Expected a networkx graph, got {type(graph).__name__}")
        self._graph = graph

    @property
    def graph(self) -> nx.Graph:
        """The wrapped networkx graph."""
        return self._graph

    def nodes(self) -> Iterable[NodeId]:
        return list(self._graph.nodes())

    def edges(self) -> Iterable[Edge]:
        if self._graph.is_multigraph():
            return [(u, v) for u, v, _ in self._graph.edges(keys=True)]
        return list(self._graph.edges())

    def __repr__(self) -> str:
        return (
            f"NetworkXGraph({type(self._graph).__name__}, "
            f"nodes={self._graph.number_of_nodes()}, edges={self._graph.number_of_edges()})"
        )


__all__ = ["NetworkXGraph"]
