"""Built-in layout algorithms."""

from graphlayout.layout.algorithms.base import LayoutAlgorithm, LayoutFunc
from graphlayout.layout.algorithms.dendrogram import DENDROGRAM, TREE
from graphlayout.layout.algorithms.force import FR
from graphlayout.layout.algorithms.hive import HIVE
from graphlayout.layout.algorithms.linear import LINEAR
from graphlayout.layout.algorithms.pack import CIRCLEPACK
from graphlayout.layout.algorithms.partition import PARTITION, TREEMAP

HIERARCHICAL = (TREEMAP, PARTITION, CIRCLEPACK, DENDROGRAM, TREE)

__all__ = [
    "CIRCLEPACK",
    "DENDROGRAM",
    "FR",
    "HIERARCHICAL",
    "HIVE",
    "LINEAR",
    "PARTITION",
    "TREE",
    "TREEMAP",
    "LayoutAlgorithm",
    "LayoutFunc",
]
