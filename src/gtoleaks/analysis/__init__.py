"""Leak and exploit detection over annotated decision trees."""

from .engine import analyze_spot, annotate_spot
from .exploits import find_exploits
from .leaks import find_leaks
from .patterns import TreeIndex, classify_pattern
from .resolver import resolve_tree
from .traversal import NodeContext, node_contexts, walk

__all__ = [
    "NodeContext",
    "TreeIndex",
    "analyze_spot",
    "annotate_spot",
    "classify_pattern",
    "find_exploits",
    "find_leaks",
    "node_contexts",
    "resolve_tree",
    "walk",
]
