"""Intermediate representation: canonical graph and hierarchy input."""

from graphlayout.ir.graph import CanonicalGraph, EdgeData, Forest, NodeData
from graphlayout.ir.tree import TreeNode

__all__ = [
    "CanonicalGraph",
    "EdgeData",
    "Forest",
    "NodeData",
    "TreeNode",
]
