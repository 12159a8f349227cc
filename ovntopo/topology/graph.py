"""Topology graph with upstream/downstream lookup.

`TopologyGraph` wraps a `networkx.DiGraph` built once from a deduplicated
edge list. For an edge ``source -> target`` the source is upstream of the
target and the target is downstream of the source. The graph is never
mutated after construction; any input change means building a new one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, FrozenSet, Iterable, List

import networkx as nx

if TYPE_CHECKING:
    from ovntopo.topology.edges import Edge


class TopologyGraph:
    """Directed adjacency over node ids, queryable in both directions."""

    def __init__(self, digraph: nx.DiGraph) -> None:
        self._g = digraph

    @classmethod
    def from_edges(cls, edges: Iterable["Edge"]) -> "TopologyGraph":
        """Build the graph from edges; nodes are registered in edge order."""
        digraph = nx.DiGraph()
        for edge in edges:
            digraph.add_edge(edge.source, edge.target, kind=edge.kind)
        return cls(digraph)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._g

    def __len__(self) -> int:
        return self._g.number_of_nodes()

    @property
    def nodes(self) -> List[str]:
        """Node ids in first-seen order."""
        return list(self._g.nodes)

    def upstream(self, node_id: str) -> FrozenSet[str]:
        """Ids with an edge into ``node_id``; empty for unknown ids."""
        if node_id not in self._g:
            return frozenset()
        return frozenset(self._g.predecessors(node_id))

    def downstream(self, node_id: str) -> FrozenSet[str]:
        """Ids ``node_id`` has an edge to; empty for unknown ids."""
        if node_id not in self._g:
            return frozenset()
        return frozenset(self._g.successors(node_id))

    def has_edge(self, source: str, target: str) -> bool:
        return self._g.has_edge(source, target)

    def to_networkx(self) -> nx.DiGraph:
        """Return a copy of the underlying NetworkX graph."""
        return self._g.copy()
