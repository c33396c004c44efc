"""Canonical graph — the normalized view every adapter converts into.

Wraps a networkx MultiDiGraph keyed by stable integer indices ``0..N-1`` so
that parallel edges and self-loops survive conversion. Hierarchical layouts
read the graph through a :class:`Forest` view derived on demand.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

from graphlayout.errors import AdapterContractViolation, GraphShapeError


@dataclass
class NodeData:
    index: int
    name: Any
    weight: float | None = None
    attrs: dict[str, Any] = field(default_factory=dict)


@dataclass
class EdgeData:
    from_index: int
    to_index: int
    key: int = 0
    weight: float | None = None
    attrs: dict[str, Any] = field(default_factory=dict)


@dataclass
class Forest:
    """Parent/child structure of a tree-shaped canonical graph.

    ``children`` lists keep canonical order; ``roots`` are sorted by index.
    """

    parents: list[int | None]
    children: list[list[int]]
    roots: list[int]
    depth: list[int]

    def is_leaf(self, index: int) -> bool:
        return not self.children[index]

    def preorder(self) -> list[int]:
        order: list[int] = []
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            order.append(node)
            stack.extend(reversed(self.children[node]))
        return order

    def postorder(self) -> list[int]:
        return list(reversed(self._reverse_postorder()))

    def _reverse_postorder(self) -> list[int]:
        # Root-right-left walk; reversed it yields children before parents.
        order: list[int] = []
        stack = list(self.roots)
        while stack:
            node = stack.pop()
            order.append(node)
            stack.extend(self.children[node])
        return order

    def leaves(self) -> list[int]:
        return [i for i in self.preorder() if self.is_leaf(i)]


class CanonicalGraph:
    """Ordered nodes and edges of an input graph, indexed ``0..N-1``."""

    def __init__(
        self,
        multigraph: nx.MultiDiGraph,
        directed: bool,
        parents: list[int | None] | None = None,
    ) -> None:
        self.multigraph = multigraph
        self.directed = directed
        self.parents = parents

    @classmethod
    def build(
        cls,
        nodes: list[NodeData],
        edges: list[EdgeData],
        directed: bool,
        parents: list[int | None] | None = None,
    ) -> CanonicalGraph:
        """Assemble a canonical graph, rejecting dangling edge references."""
        mg: nx.MultiDiGraph = nx.MultiDiGraph()
        for expected, node in enumerate(nodes):
            if node.index != expected:
                raise AdapterContractViolation(f"node index {node.index} out of order (expected {expected})")
            mg.add_node(node.index, data=node)

        count = len(nodes)
        for edge in edges:
            for end in (edge.from_index, edge.to_index):
                if not 0 <= end < count:
                    raise AdapterContractViolation(
                        f"edge {edge.from_index} -> {edge.to_index} references missing node {end}"
                    )
            edge.key = mg.add_edge(edge.from_index, edge.to_index, data=edge)

        if parents is not None and len(parents) != count:
            raise AdapterContractViolation(f"{len(parents)} parent links for {count} nodes")

        return cls(multigraph=mg, directed=directed, parents=parents)

    def node_count(self) -> int:
        return self.multigraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.multigraph.number_of_edges()

    def node(self, index: int) -> NodeData:
        return self.multigraph.nodes[index]["data"]

    def nodes(self) -> list[NodeData]:
        return [self.multigraph.nodes[i]["data"] for i in range(self.node_count())]

    def edges(self) -> list[EdgeData]:
        """All edges grouped by source node, parallel edges and self-loops included."""
        return [attrs["data"] for _, _, attrs in self.multigraph.edges(data=True)]

    def degree(self, index: int) -> int:
        return self.multigraph.degree(index)

    def node_attr(self, index: int, name: str) -> Any:
        """Look up a node attribute; raises KeyError when absent."""
        data = self.node(index)
        if name in data.attrs:
            return data.attrs[name]
        if name == "weight" and data.weight is not None:
            return data.weight
        raise KeyError(name)

    def is_forest(self) -> bool:
        if self.node_count() == 0:
            return False
        if self.parents is not None:
            return True
        if self.directed:
            if any(self.multigraph.in_degree(i) > 1 for i in self.multigraph.nodes):
                return False
            return nx.is_directed_acyclic_graph(self.multigraph)
        simple = nx.Graph(self.multigraph)
        if simple.number_of_edges() != self.edge_count():
            return False  # parallel edges or self-loops
        return nx.is_forest(simple)

    def forest(self, root: int | None = None) -> Forest:
        """Derive the parent/child view; raise GraphShapeError if not a forest."""
        count = self.node_count()
        if root is not None and not 0 <= root < count:
            raise GraphShapeError(f"root index {root} outside 0..{count - 1}")

        if self.parents is not None:
            parents = list(self.parents)
        elif self.directed:
            parents = self._directed_parents()
        else:
            parents = self._undirected_parents(root)

        children: list[list[int]] = [[] for _ in range(count)]
        for child, parent in enumerate(parents):
            if parent is not None:
                children[parent].append(child)
        roots = [i for i, p in enumerate(parents) if p is None]
        if count and not roots:
            raise GraphShapeError("graph has no root; hierarchical layouts need a tree or forest")

        depth = [0] * count
        seen = 0
        queue: deque[int] = deque(roots)
        while queue:
            node = queue.popleft()
            seen += 1
            for child in children[node]:
                depth[child] = depth[node] + 1
                queue.append(child)
        if seen != count:
            raise GraphShapeError("graph contains a cycle; hierarchical layouts need a tree or forest")

        return Forest(parents=parents, children=children, roots=roots, depth=depth)

    def _directed_parents(self) -> list[int | None]:
        parents: list[int | None] = [None] * self.node_count()
        for src, tgt in self.multigraph.edges():
            if src == tgt:
                raise GraphShapeError(f"self-loop on node {src}; hierarchical layouts need a tree or forest")
            if parents[tgt] is not None:
                raise GraphShapeError(f"node {tgt} has more than one parent")
            parents[tgt] = src
        return parents

    def _undirected_parents(self, root: int | None) -> list[int | None]:
        count = self.node_count()
        if count and not self.is_forest():
            raise GraphShapeError("undirected graph contains a cycle; hierarchical layouts need a tree or forest")
        parents: list[int | None] = [None] * count
        visited = [False] * count
        starts = ([root] if root is not None else []) + list(range(count))
        for start in starts:
            if visited[start]:
                continue
            visited[start] = True
            queue: deque[int] = deque([start])
            while queue:
                node = queue.popleft()
                for nb in sorted(set(self.multigraph.successors(node)) | set(self.multigraph.predecessors(node))):
                    if not visited[nb]:
                        visited[nb] = True
                        parents[nb] = node
                        queue.append(nb)
        return parents
