"""Path Highlighter: everything upstream and downstream of a selected node.

The result is one flat set holding node ids and edge keys. Edge keys are
recorded in both spellings (``a-b`` and ``b-a``) so a renderer can look up
an edge without knowing which way it is stored.
"""

from __future__ import annotations

from typing import Callable, FrozenSet, Iterable, Optional, Set

from ovntopo.topology.graph import TopologyGraph


def edge_highlight_keys(a: str, b: str) -> FrozenSet[str]:
    """Both highlight keys of the hop between ``a`` and ``b``."""
    return frozenset({f"{a}-{b}", f"{b}-{a}"})


def _traverse(
    start: str,
    neighbors: Callable[[str], Iterable[str]],
    highlighted: Set[str],
) -> None:
    visited: Set[str] = set()
    stack = [start]
    while stack:
        node_id = stack.pop()
        if node_id in visited:
            continue
        visited.add(node_id)
        highlighted.add(node_id)
        for neighbor in sorted(neighbors(node_id)):
            highlighted.update(edge_highlight_keys(node_id, neighbor))
            if neighbor not in visited:
                stack.append(neighbor)


def highlighted_path(graph: TopologyGraph, start: Optional[str]) -> FrozenSet[str]:
    """Compute the highlighted path for a selected node.

    Two traversals run from ``start``: one following upstream links, one
    following downstream links, each with its own visited set so a node may
    be reached in both directions. Cycles terminate.

    Args:
        graph: Topology graph.
        start: Selected node id, or ``None`` for no selection.

    Returns:
        Visited node ids (``start`` included) plus ``a-b``/``b-a`` keys of
        every traversed hop. Empty when nothing is selected.
    """
    if not start:
        return frozenset()
    highlighted: Set[str] = set()
    _traverse(start, graph.upstream, highlighted)
    _traverse(start, graph.downstream, highlighted)
    return frozenset(highlighted)


def is_edge_highlighted(highlighted: FrozenSet[str], source: str, target: str) -> bool:
    return f"{source}-{target}" in highlighted
