"""Tests for graph views and the networkx adapter."""

import numpy as np
import pytest

from plode import (
    EdgeListGraph,
    GraphView,
    IndexedGraph,
    InvalidEdgeError,
    LayoutConfig,
    layout,
)


class TestEdgeListGraph:
    """Tests for EdgeListGraph."""

    def test_nodes_discovered_in_order(self):
        graph = EdgeListGraph([("c", "a"), ("a", "b"), ("b", "c")])
        assert graph.nodes() == ["c", "a", "b"]
        assert len(graph) == 3

    def test_explicit_nodes(self):
        graph = EdgeListGraph([(1, 2)], nodes=[3, 2, 1])
        assert graph.nodes() == [3, 2, 1]
        assert graph.edges() == [(1, 2)]

    def test_is_graph_view(self):
        assert isinstance(EdgeListGraph(), GraphView)


class TestIndexedGraph:
    """Tests for the dense indexed form."""

    def test_indices(self):
        graph = IndexedGraph(["a", "b", "c"], [("a", "c"), ("c", "c"), ("a", "c")])
        assert graph.node_count == 3
        assert graph.edge_count == 3
        assert graph.index == {"a": 0, "b": 1, "c": 2}
        assert graph.sources.dtype == np.int64
        assert graph.sources.tolist() == [0, 2, 0]
        assert graph.targets.tolist() == [2, 2, 2]
        assert list(graph.index_pairs()) == [(0, 2), (2, 2), (0, 2)]

    def test_unknown_endpoint(self):
        with pytest.raises(InvalidEdgeError):
            IndexedGraph(["a"], [("a", "b")])

    def test_duplicate_node_ids_warn(self):
        """Repeated node ids are collapsed with a warning."""
        with pytest.warns(UserWarning, match="duplicate"):
            graph = IndexedGraph(["a", "b", "a"], [])
        assert graph.node_ids == ["a", "b"]

    def test_from_view(self):
        view = EdgeListGraph([(1, 2)])
        indexed = IndexedGraph.from_view(view)
        assert indexed.nodes() == [1, 2]
        assert indexed.edges() == [(1, 2)]
        assert IndexedGraph.from_view(indexed) is indexed

    def test_structural_view(self):
        """Any object with nodes() and edges() can be laid out."""

        class Ring:
            def nodes(self):
                return iter(range(4))

            def edges(self):
                return ((i, (i + 1) % 4) for i in range(4))

        positions = layout(Ring(), LayoutConfig(max_iterations=10))
        assert positions.nodes == [0, 1, 2, 3]


class TestNetworkXAdapter:
    """Tests for the networkx GraphView adapter."""

    @pytest.fixture(autouse=True)
    def nx(self):
        return pytest.importorskip("networkx")

    def test_simple_graph(self, nx):
        from plode.adapters.networkx import NetworkXGraph

        view = NetworkXGraph(nx.path_graph(4))
        assert list(view.nodes()) == [0, 1, 2, 3]
        assert list(view.edges()) == [(0, 1), (1, 2), (2, 3)]
        assert isinstance(view, GraphView)

    def test_multigraph_keeps_parallel_edges(self, nx):
        from plode.adapters.networkx import NetworkXGraph

        graph = nx.MultiGraph()
        graph.add_edge("a", "b")
        graph.add_edge("a", "b")
        graph.add_edge("b", "b")
        assert list(NetworkXGraph(graph).edges()) == [("a", "b"), ("a", "b"), ("b", "b")]

    def test_rejects_other_types(self, nx):
        from plode.adapters.networkx import NetworkXGraph

        with pytest.raises(TypeError):
            NetworkXGraph([(0, 1)])

    def test_layout(self, nx):
        from plode.adapters.networkx import NetworkXGraph

        view = NetworkXGraph(nx.petersen_graph())
        positions = layout(view, seed=3, max_iterations=50)
        assert len(positions) == 10
        assert np.all(np.isfinite(positions.array))
