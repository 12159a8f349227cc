"""Gravity Scorer: deterministic layout priority for topology nodes.

Lower gravity renders earlier (higher in its column). Scores come from the
longest simple path out of each physical entry point, biased toward paths
through "important" nodes (by default the primary uplink bridge ``br-ex``),
then adjusted by proximity to those nodes.

The longest-path search is an exhaustive DFS and therefore exponential in
the worst case. Per-host graphs hold tens of nodes, where this is instant;
``GravityConfig.max_path_depth`` caps the search for larger inputs at the
cost of exactness.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    AbstractSet,
    Callable,
    Dict,
    Iterable,
    List,
    Optional,
    Sequence,
    Set,
)

import networkx as nx

from ovntopo.config import GravityConfig
from ovntopo.logging import get_logger
from ovntopo.model.ids import is_udn_node_id
from ovntopo.model.resources import Interface
from ovntopo.topology.edges import Edge

logger = get_logger(__name__)

GravityMap = Dict[str, int]


@dataclass(frozen=True)
class _PathMembership:
    path_length: int
    position: int
    has_important_node: bool


def build_connection_graph(edges: Iterable[Edge]) -> nx.Graph:
    """Undirected view of the edges; neighbor order follows edge order."""
    graph = nx.Graph()
    for edge in edges:
        graph.add_edge(edge.source, edge.target)
    return graph


def find_longest_path(
    graph: nx.Graph, start: str, max_depth: Optional[int] = None
) -> List[str]:
    """Longest simple path from ``start`` by exhaustive DFS.

    Neighbors are explored in adjacency order and a longer path must be
    strictly longer to replace the current best, so the first path found
    wins ties.

    Args:
        graph: Undirected connection graph.
        start: Entry node.
        max_depth: Optional maximum number of nodes per path.

    Returns:
        The node sequence, starting with ``start``.
    """

    def extend(path: List[str], on_path: Set[str]) -> List[str]:
        longest = path
        if max_depth is not None and len(path) >= max_depth:
            return longest
        for neighbor in graph.adj[path[-1]]:
            if neighbor in on_path:
                continue
            on_path.add(neighbor)
            candidate = extend(path + [neighbor], on_path)
            on_path.discard(neighbor)
            if len(candidate) > len(longest):
                longest = candidate
        return longest

    if start not in graph:
        return [start]
    return extend([start], {start})


def nodes_near(graph: nx.Graph, sources: Iterable[str], depth: int) -> Set[str]:
    """Ids within ``depth`` hops of any source; sources are always included."""
    near: Set[str] = set()
    for source in sources:
        near.add(source)
        if source in graph:
            near.update(nx.single_source_shortest_path_length(graph, source, cutoff=depth))
    return near


def _best_membership(memberships: Sequence[_PathMembership]) -> _PathMembership:
    best = memberships[0]
    for current in memberships[1:]:
        if current.has_important_node != best.has_important_node:
            if current.has_important_node:
                best = current
            continue
        if current.path_length != best.path_length:
            if current.path_length > best.path_length:
                best = current
            continue
        if current.position < best.position:
            best = current
    return best


def _proximity_adjusted(score: Optional[int], config: GravityConfig) -> int:
    """Tiered reduction for nodes close to an important node."""
    if score is None:
        return config.proximity_default
    for threshold, reduction in config.proximity_tiers:
        if score >= threshold:
            return max(0, score - reduction)
    return score


def compute_gravity_by_id(
    edges: Sequence[Edge],
    interfaces: Sequence[Interface],
    physical_node_ids: Iterable[str],
    important_nodes: Optional[AbstractSet[str]] = None,
    is_secondary: Callable[[str], bool] = is_udn_node_id,
    config: Optional[GravityConfig] = None,
) -> GravityMap:
    """Compute a gravity score per node id.

    Args:
        edges: Topology edges, treated as undirected.
        interfaces: Host interfaces, used to find interfaces enslaved to an
            important node.
        physical_node_ids: Entry points of the longest-path search, in
            iteration order (which decides ties between equal paths).
        important_nodes: Node ids the layout gravitates around; defaults to
            ``config.important_nodes``.
        is_secondary: Predicate for secondary overlay kinds, which sort
            after primary ones.
        config: Scoring constants.

    Returns:
        Mapping of node id to score; lower renders first.
    """
    config = config or GravityConfig()
    important = frozenset(
        config.important_nodes if important_nodes is None else important_nodes
    )
    connections = build_connection_graph(edges)

    # Candidate paths: longest simple path from each connected entry point
    paths: List[List[str]] = []
    for node_id in physical_node_ids:
        if node_id not in connections:
            continue
        path = find_longest_path(connections, node_id, config.max_path_depth)
        if len(path) >= 2:
            paths.append(path)

    flagged = [(path, any(n in important for n in path)) for path in paths]
    # Stable sort: important paths first, then longer paths
    flagged.sort(key=lambda item: (not item[1], -len(item[0])))

    memberships: Dict[str, List[_PathMembership]] = {}
    for path, has_important in flagged:
        for position, node_id in enumerate(path):
            memberships.setdefault(node_id, []).append(
                _PathMembership(len(path), position, has_important)
            )

    gravity: GravityMap = {}
    for node_id, node_memberships in memberships.items():
        best = _best_membership(node_memberships)
        bonus = config.important_bonus if best.has_important_node else 0
        gravity[node_id] = (
            config.path_base
            - best.path_length * config.path_length_weight
            - best.position
            - bonus
        )

    for node_id in connections.nodes:
        if node_id not in gravity:
            gravity[node_id] = config.fallback_base + connections.degree(node_id)

    enslaved = {
        iface.name
        for iface in interfaces
        if iface.controller_name and iface.controller_name in important
    }
    for name in sorted(enslaved):
        gravity[name] = config.enslaved_score

    for node_id in sorted(nodes_near(connections, important, config.proximity_depth)):
        if node_id in enslaved:
            continue
        if node_id in important:
            gravity[node_id] = config.important_score
            continue
        gravity[node_id] = _proximity_adjusted(gravity.get(node_id), config)

    for node_id in list(gravity):
        if is_secondary(node_id):
            gravity[node_id] += config.secondary_penalty

    logger.debug(
        "Scored %d nodes from %d candidate paths (%d through important nodes)",
        len(gravity),
        len(paths),
        sum(1 for _, has_important in flagged if has_important),
    )
    return gravity
