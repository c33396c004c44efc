"""Hierarchy input type: a nested merge tree such as a clustering result."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class TreeNode:
    """A node of a rooted, ordered tree.

    ``height`` is the merge height for internal nodes of a dendrogram; leave it
    unset to let layouts derive heights from tree shape.
    """

    name: Any
    children: list[TreeNode] = field(default_factory=list)
    weight: float | None = None
    height: float | None = None
    attrs: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_nested(cls, spec: Mapping[str, Any]) -> TreeNode:
        """Build a tree from nested mappings.

        Recognised keys are ``name``, ``children``, ``weight`` and ``height``;
        any other key becomes a node attribute.
        """
        extra = {k: v for k, v in spec.items() if k not in ("name", "children", "weight", "height")}
        return cls(
            name=spec.get("name"),
            children=[cls.from_nested(child) for child in spec.get("children", ())],
            weight=spec.get("weight"),
            height=spec.get("height"),
            attrs=extra,
        )

    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> list[TreeNode]:
        """Pre-order traversal (parent first, children in order)."""
        out: list[TreeNode] = []
        stack = [self]
        while stack:
            node = stack.pop()
            out.append(node)
            stack.extend(reversed(node.children))
        return out
