"""Topology computation: edges, graph, highlight, gravity and layout."""

from ovntopo.topology.edges import Edge, EdgeSet, build_topology_edges
from ovntopo.topology.graph import TopologyGraph
from ovntopo.topology.gravity import GravityMap, compute_gravity_by_id, find_longest_path
from ovntopo.topology.highlight import edge_highlight_keys, highlighted_path, is_edge_highlighted
from ovntopo.topology.layout import DEFAULT_GRAVITY, assign_columns, sort_by_gravity
from ovntopo.topology.nodes import TopologyNode, build_topology_nodes
from ovntopo.topology.view import (
    TopologyView,
    TopologyWarning,
    build_topology_view,
    collect_warnings,
    physical_entry_points,
)

__all__ = [
    "DEFAULT_GRAVITY",
    "Edge",
    "EdgeSet",
    "GravityMap",
    "TopologyGraph",
    "TopologyNode",
    "TopologyView",
    "TopologyWarning",
    "assign_columns",
    "build_topology_edges",
    "build_topology_nodes",
    "build_topology_view",
    "collect_warnings",
    "compute_gravity_by_id",
    "edge_highlight_keys",
    "find_longest_path",
    "highlighted_path",
    "is_edge_highlighted",
    "physical_entry_points",
    "sort_by_gravity",
]
