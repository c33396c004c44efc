"""Tests for edge geometry and connection paths."""

from __future__ import annotations

import networkx as nx
import pytest

from graphlayout import (
    AdapterContractViolation,
    InvalidWeightReference,
    Stage,
    TreeNode,
    compute,
    resolve_edges,
    resolve_path,
    resolve_paths,
)


class TestResolveEdges:
    def test_one_record_per_edge_with_multiplicity(self):
        g: nx.MultiGraph = nx.MultiGraph()
        g.add_edge("a", "b")
        g.add_edge("a", "b")
        g.add_edge("b", "c")
        g.add_edge("c", "c")
        edges = resolve_edges(compute(g, "linear"))
        assert [(e.from_index, e.to_index, e.key) for e in edges] == [(0, 1, 0), (0, 1, 1), (1, 2, 0), (2, 2, 0)]

    def test_endpoints_match_node_positions(self):
        result = compute(nx.path_graph(4), "linear")
        positions = result.positions()
        for edge in resolve_edges(result):
            assert (edge.x, edge.y) == positions[edge.from_index]
            assert (edge.xend, edge.yend) == positions[edge.to_index]

    def test_self_loop_starts_and_ends_at_node(self):
        g: nx.MultiGraph = nx.MultiGraph()
        g.add_edge(0, 0)
        (edge,) = resolve_edges(compute(g, "linear"))
        assert (edge.x, edge.y) == (edge.xend, edge.yend)

    @pytest.mark.parametrize("circular", [True, False])
    def test_circular_flag_copied(self, circular):
        result = compute(nx.path_graph(3), "linear", circular=circular)
        assert all(e.circular is circular for e in resolve_edges(result))

    def test_flag_false_when_layout_has_no_circular_form(self):
        result = compute(nx.path_graph(3), "fr", circular=True)
        assert all(e.circular is False for e in resolve_edges(result))

    def test_edge_attributes_kept(self):
        g: nx.Graph = nx.Graph()
        g.add_edge(0, 1, label="road")
        (edge,) = resolve_edges(compute(g, "linear"))
        assert edge.attrs == {"label": "road"}

    def test_hierarchy_edges(self):
        tree = TreeNode("r", [TreeNode("a"), TreeNode("b")])
        edges = resolve_edges(compute(tree, "tree"))
        assert [(e.from_index, e.to_index) for e in edges] == [(0, 1), (0, 2)]


class TestResolvePath:
    def test_shortest_path(self):
        result = compute(nx.cycle_graph(6), "linear")
        assert resolve_path(result, 0, 2) == [0, 1, 2]
        assert resolve_path(result, 0, 4) == [0, 5, 4]

    def test_path_ignores_direction(self):
        result = compute(nx.DiGraph([(0, 1), (2, 1)]), "linear")
        assert resolve_path(result, 0, 2) == [0, 1, 2]

    def test_weighted_path(self):
        g: nx.Graph = nx.Graph()
        g.add_edge(0, 1, cost=1.0)
        g.add_edge(1, 2, cost=1.0)
        g.add_edge(0, 2, cost=5.0)
        result = compute(g, "linear")
        assert resolve_path(result, 0, 2) == [0, 2]
        assert resolve_path(result, 0, 2, weight="cost") == [0, 1, 2]

    def test_weighted_path_needs_the_attribute_on_every_edge(self):
        g: nx.Graph = nx.Graph()
        g.add_edge(0, 1, cost=1.0)
        g.add_edge(1, 2)
        result = compute(g, "linear")
        with pytest.raises(InvalidWeightReference) as info:
            resolve_path(result, 0, 2, weight="cost")
        assert info.value.stage is Stage.DERIVATION

    def test_same_node(self):
        result = compute(nx.path_graph(3), "linear")
        assert resolve_path(result, 1, 1) == [1]

    def test_no_path(self):
        result = compute(nx.Graph([(0, 1), (2, 3)]), "linear")
        assert resolve_path(result, 0, 3) == []

    def test_hierarchy_has_no_connections(self):
        result = compute(TreeNode("r", [TreeNode("a")]), "tree")
        assert resolve_path(result, 0, 1) == []

    def test_index_out_of_range(self):
        result = compute(nx.path_graph(3), "linear")
        with pytest.raises(AdapterContractViolation) as info:
            resolve_path(result, 0, 9)
        assert info.value.stage is Stage.DERIVATION

    def test_many_pairs(self):
        result = compute(nx.path_graph(4), "linear")
        assert resolve_paths(result, [(0, 3), (3, 2)]) == [[0, 1, 2, 3], [3, 2]]
