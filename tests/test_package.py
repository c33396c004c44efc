"""Smoke tests: imports, defaults from LayoutConfig, process-wide registration."""

import networkx as nx
import pytest

import graphlayout
from graphlayout import LayoutAlgorithm, LayoutConfig, LayoutEngine, default_registry
from graphlayout.layout.types import AlgorithmOutput, RawPosition


def test_import():
    assert graphlayout.compute is not None
    assert "compute" in graphlayout.__all__


def test_default_registry_is_shared():
    registry = default_registry()
    assert registry is default_registry()
    assert set(registry.kinds()) >= {"graph", "hierarchy"}
    assert "hive" in registry.algorithm_names("graph")
    assert "hive" not in registry.algorithm_names("hierarchy")


def test_config_default_layout():
    engine = LayoutEngine(config=LayoutConfig(default_layout="linear"))
    assert engine.compute(nx.cycle_graph(3)).algorithm == "linear"


def test_config_supplies_parameter_defaults():
    g = nx.DiGraph([(0, 1), (0, 2)])
    engine = LayoutEngine(config=LayoutConfig(treemap_algorithm="slice_dice"))
    result = engine.compute(g, "treemap")
    # slice_dice splits the root's children along x
    assert result.nodes[1].attrs["height"] == pytest.approx(1.0)
    assert result.nodes[1].attrs["width"] == pytest.approx(0.5)


def test_explicit_param_beats_config():
    engine = LayoutEngine(config=LayoutConfig(force_max_iter=5))
    assert engine.compute(nx.cycle_graph(4), "fr").metadata["iterations"] == 5
    assert engine.compute(nx.cycle_graph(4), "fr", max_iter=7).metadata["iterations"] == 7


def _origin(canonical, params, circular):
    return AlgorithmOutput([RawPosition(i, 0.0, 0.0) for i in range(canonical.node_count())])


@pytest.fixture
def fresh_default_registry(monkeypatch):
    """Swap in a new process-wide registry; the original comes back after the test."""
    from graphlayout.layout import engine, registry

    monkeypatch.setattr(registry, "_default", None)
    monkeypatch.setattr(engine, "_engine", None)


def test_register_algorithm_on_default_registry(fresh_default_registry):
    fresh = default_registry()
    graphlayout.register_algorithm("graph", "origin-smoke", LayoutAlgorithm("origin", _origin))
    result = graphlayout.compute(nx.path_graph(2), "origin-smoke")
    assert result.positions() == {0: (0.0, 0.0), 1: (0.0, 0.0)}
    assert "origin-smoke" in fresh.algorithm_names("graph")
