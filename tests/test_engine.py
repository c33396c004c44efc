"""Tests for graphlayout.layout.engine — dispatch, parameters, circular handling, errors."""

from __future__ import annotations

import math

import networkx as nx
import pytest

from graphlayout import (
    GraphShapeError,
    InvalidParam,
    InvalidWeightReference,
    LayoutAlgorithm,
    LayoutEngine,
    LayoutRegistry,
    MissingRequiredParam,
    Param,
    Stage,
    TreeNode,
    UnknownLayoutName,
    UnsupportedGraphType,
    compute,
)
from graphlayout.adapters import NetworkXAdapter
from graphlayout.layout.types import AlgorithmOutput, RawPosition

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_tree() -> nx.DiGraph:
    """0 → {1, 2}, 1 → {3, 4}, 2 → {5}."""
    g: nx.DiGraph = nx.DiGraph()
    g.add_edges_from([(0, 1), (0, 2), (1, 3), (1, 4), (2, 5)])
    return g


def make_grouped_graph() -> nx.Graph:
    g: nx.Graph = nx.Graph()
    for node, group in [("a", "x"), ("b", "y"), ("c", "x"), ("d", "z"), ("e", "y")]:
        g.add_node(node, group=group)
    g.add_edges_from([("a", "b"), ("b", "c"), ("c", "d"), ("d", "e"), ("a", "c")])
    return g


def indices(result) -> list[int]:
    return [n.index for n in result.nodes]


ALL_TREE_LAYOUTS = ["linear", "treemap", "partition", "circlepack", "dendrogram", "tree", "fr"]


# ─── Linear ───────────────────────────────────────────────────────────────────


class TestLinear:
    def test_five_nodes_on_a_line(self):
        result = compute(nx.path_graph(5), "linear")
        assert [(n.x, n.y) for n in result.nodes] == [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)]
        assert result.circular is False
        assert result.algorithm == "linear"

    def test_five_nodes_on_a_circle(self):
        result = compute(nx.path_graph(5), "linear", circular=True)
        assert result.circular is True
        for i, node in enumerate(result.nodes):
            angle = math.radians(72 * i)
            assert node.x == pytest.approx(math.cos(angle))
            assert node.y == pytest.approx(math.sin(angle))
            assert node.attrs["angle"] == pytest.approx(angle)
            assert node.attrs["radius"] == 1.0

    def test_sort_by_attribute_is_stable(self):
        g: nx.Graph = nx.Graph()
        for name, rank in [("a", 2), ("b", 1), ("c", 2), ("d", 0)]:
            g.add_node(name, rank=rank)
        result = compute(g, "linear", sort_by="rank")
        # d (0), b (1), then a and c tied at 2 in their original order
        assert [n.x for n in result.nodes] == [2.0, 1.0, 3.0, 0.0]

    def test_sort_by_non_numeric_attribute(self):
        g: nx.Graph = nx.Graph()
        g.add_node("a", rank="high")
        with pytest.raises(InvalidWeightReference) as info:
            compute(g, "linear", sort_by="rank")
        assert info.value.param == "sort_by"


# ─── Result invariants ────────────────────────────────────────────────────────


class TestResultInvariants:
    @pytest.mark.parametrize("layout", ALL_TREE_LAYOUTS)
    def test_index_set_matches_nodes(self, layout):
        result = compute(make_tree(), layout)
        assert indices(result) == list(range(6))
        assert all(math.isfinite(n.x) and math.isfinite(n.y) for n in result.nodes)

    @pytest.mark.parametrize("layout", ["linear", "partition", "dendrogram", "tree"])
    def test_circular_positions_sit_at_their_radius(self, layout):
        result = compute(make_tree(), layout, circular=True)
        assert result.circular is True
        for node in result.nodes:
            assert math.hypot(node.x, node.y) == pytest.approx(node.attrs["radius"], abs=1e-9)

    @pytest.mark.parametrize("layout", ALL_TREE_LAYOUTS)
    def test_idempotent(self, layout):
        first = compute(make_tree(), layout)
        second = compute(make_tree(), layout)
        assert [(n.index, n.x, n.y) for n in first.nodes] == [(n.index, n.x, n.y) for n in second.nodes]

    def test_force_layout_idempotent_on_cyclic_graph(self):
        g = nx.cycle_graph(8)
        first = compute(g, "fr")
        second = compute(g, "fr")
        assert first.positions() == second.positions()

    def test_graph_reference_kept(self):
        g = make_tree()
        result = compute(g, "tree")
        assert result.graph is g
        assert result.kind == "graph"

    def test_node_attributes_in_records(self):
        result = compute(make_grouped_graph(), "linear")
        records = result.to_records()
        assert records[0]["index"] == 0
        assert records[0]["group"] == "x"
        assert records[0]["circular"] is False

    def test_empty_graph(self):
        result = compute(nx.Graph(), "linear")
        assert len(result) == 0


# ─── Circular degradation ─────────────────────────────────────────────────────


class TestCircularUnsupported:
    @pytest.mark.parametrize("layout", ["treemap", "circlepack", "fr"])
    def test_flag_false_without_error(self, layout):
        result = compute(make_tree(), layout, circular=True)
        assert result.circular is False

    def test_hive_ignores_circular(self):
        result = compute(make_grouped_graph(), "hive", circular=True, axis="group")
        assert result.circular is False


# ─── Auto selection ───────────────────────────────────────────────────────────


class TestAuto:
    def test_tree_graph_uses_tree_layout(self):
        assert compute(make_tree()).algorithm == "tree"
        assert compute(make_tree(), "auto").algorithm == "tree"

    def test_undirected_forest_uses_tree_layout(self):
        g: nx.Graph = nx.Graph([(0, 1), (1, 2), (3, 4)])
        assert compute(g).algorithm == "tree"

    def test_cyclic_graph_uses_force_layout(self):
        assert compute(nx.cycle_graph(4)).algorithm == "fr"

    def test_multi_parent_dag_uses_force_layout(self):
        g: nx.DiGraph = nx.DiGraph([(0, 2), (1, 2)])
        assert compute(g).algorithm == "fr"

    def test_hierarchy_uses_dendrogram(self):
        tree = TreeNode("root", [TreeNode("a"), TreeNode("b")])
        assert compute(tree).algorithm == "dendrogram"

    def test_auto_policy_for_empty_graph(self):
        assert compute(nx.Graph()).algorithm == "fr"


# ─── Errors ───────────────────────────────────────────────────────────────────


class TestErrors:
    def test_unknown_layout_name(self):
        with pytest.raises(UnknownLayoutName) as info:
            compute(make_tree(), "not-a-real-layout")
        assert info.value.stage is Stage.ALGORITHM_LOOKUP
        assert "not-a-real-layout" in str(info.value)

    def test_hive_not_registered_for_hierarchies(self):
        with pytest.raises(UnknownLayoutName):
            compute(TreeNode("root"), "hive", axis="group")

    def test_unsupported_graph_type(self):
        with pytest.raises(UnsupportedGraphType) as info:
            compute([(0, 1), (1, 2)], "linear")
        assert info.value.stage is Stage.ADAPTER_RESOLUTION

    def test_unknown_explicit_kind(self):
        with pytest.raises(UnsupportedGraphType):
            compute(make_tree(), "linear", kind="no-such-kind")

    def test_hive_without_axis_param(self):
        with pytest.raises(MissingRequiredParam) as info:
            compute(make_grouped_graph(), "hive")
        assert info.value.param == "axis"
        assert info.value.stage is Stage.PARAMETER_VALIDATION

    def test_hive_on_graph_lacking_axis_attribute(self):
        with pytest.raises(MissingRequiredParam) as info:
            compute(nx.path_graph(3), "hive", axis="group")
        assert info.value.param == "axis"

    def test_unknown_parameter(self):
        with pytest.raises(InvalidParam) as info:
            compute(make_tree(), "linear", bogus=1)
        assert info.value.param == "bogus"

    def test_bad_choice(self):
        with pytest.raises(InvalidParam) as info:
            compute(make_tree(), "treemap", algorithm="spiral")
        assert info.value.param == "algorithm"

    def test_negative_weight(self):
        g = make_tree()
        for node in g.nodes:
            g.nodes[node]["size"] = -1.0 if node == 3 else 1.0
        with pytest.raises(InvalidWeightReference) as info:
            compute(g, "treemap", weight="size")
        assert info.value.param == "weight"

    def test_missing_weight_attribute(self):
        with pytest.raises(InvalidWeightReference):
            compute(make_tree(), "circlepack", weight="size")

    def test_hierarchical_layout_on_cyclic_graph(self):
        with pytest.raises(GraphShapeError) as info:
            compute(nx.cycle_graph(4), "dendrogram")
        assert info.value.stage is Stage.ALGORITHM_EXECUTION

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            compute(make_tree(), "not-a-real-layout")


# ─── Custom registries ────────────────────────────────────────────────────────


def _diagonal(canonical, params, circular):
    step = params["step"]
    return AlgorithmOutput([RawPosition(i, i * step, i * step) for i in range(canonical.node_count())])


def _drops_a_node(canonical, params, circular):
    return AlgorithmOutput([RawPosition(i, 0.0, 0.0) for i in range(canonical.node_count() - 1)])


class TestCustomRegistry:
    def make_registry(self) -> LayoutRegistry:
        registry = LayoutRegistry()
        registry.register_adapter("graph", NetworkXAdapter(), auto=lambda canonical: "diagonal", graph_types=(nx.Graph,))
        registry.register_algorithm("graph", LayoutAlgorithm("diagonal", _diagonal, (Param("step", default=2.0),)))
        return registry

    def test_custom_algorithm_and_auto(self):
        engine = LayoutEngine(registry=self.make_registry())
        result = engine.compute(nx.path_graph(3))
        assert result.algorithm == "diagonal"
        assert [(n.x, n.y) for n in result.nodes] == [(0.0, 0.0), (2.0, 2.0), (4.0, 4.0)]

    def test_custom_params_bound(self):
        engine = LayoutEngine(registry=self.make_registry())
        result = engine.compute(nx.path_graph(2), "diagonal", step=0.5)
        assert result.nodes[1].x == 0.5

    def test_builtin_names_absent(self):
        engine = LayoutEngine(registry=self.make_registry())
        with pytest.raises(UnknownLayoutName):
            engine.compute(nx.path_graph(3), "linear")

    def test_auto_name_reserved(self):
        registry = self.make_registry()
        with pytest.raises(ValueError):
            registry.register_algorithm("graph", LayoutAlgorithm("x", _diagonal), name="auto")

    def test_algorithm_needs_registered_kind(self):
        with pytest.raises(ValueError):
            LayoutRegistry().register_algorithm("graph", LayoutAlgorithm("diagonal", _diagonal))

    def test_algorithm_missing_a_node_is_rejected(self):
        registry = self.make_registry()
        registry.register_algorithm("graph", LayoutAlgorithm("broken", _drops_a_node))
        engine = LayoutEngine(registry=registry)
        with pytest.raises(ValueError) as info:
            engine.compute(nx.path_graph(3), "broken")
        assert info.value.stage is Stage.ALGORITHM_EXECUTION

    def test_subclass_resolves_through_mro(self):
        engine = LayoutEngine(registry=self.make_registry())
        result = engine.compute(nx.DiGraph([(0, 1)]), "diagonal")
        assert result.kind == "graph"
