"""End-to-end topology computation.

`build_topology_view` runs the normalizer, edge builder, graph, gravity
scorer and column assignment over one host's resources and returns an
immutable `TopologyView`. Recomputing from the same inputs yields the same
`to_dict()` output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from ovntopo.config import DEFAULT_CONFIG, TopologyConfig
from ovntopo.logging import get_logger
from ovntopo.model.ids import interface_node_id, nad_node_id
from ovntopo.model.state import TopologyInputs
from ovntopo.normalize.interfaces import classify_interfaces, vrf_interfaces
from ovntopo.normalize.lldp import extract_lldp_neighbors, has_lldp_neighbors
from ovntopo.normalize.nad import ConfigSource, parse_nad_config, resolve_nad_upstream
from ovntopo.normalize.networks import build_attachment_nodes
from ovntopo.selectors.routes import find_route_advertisement_for_vrf
from ovntopo.topology.edges import RULE_LLDP, Edge, build_topology_edges
from ovntopo.topology.graph import TopologyGraph
from ovntopo.topology.gravity import GravityMap, compute_gravity_by_id
from ovntopo.topology.highlight import highlighted_path
from ovntopo.topology.layout import DEFAULT_GRAVITY, assign_columns
from ovntopo.topology.nodes import TopologyNode, build_topology_nodes
from ovntopo.types.base import Column

logger = get_logger(__name__)

# Warning codes
NAD_CONFIG_REGEX_FALLBACK = "NAD_CONFIG_REGEX_FALLBACK"
NAD_CONFIG_UNPARSEABLE = "NAD_CONFIG_UNPARSEABLE"
VRF_WITHOUT_ROUTE_ADVERTISEMENT = "VRF_WITHOUT_ROUTE_ADVERTISEMENT"


@dataclass(frozen=True)
class TopologyWarning:
    """A degraded derivation, reported instead of raised."""

    code: str
    message: str
    subject: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "message": self.message, "subject": self.subject}


@dataclass(frozen=True)
class TopologyView:
    """Computed topology of one host.

    Attributes:
        nodes: Registered nodes in column order.
        edges: Deduplicated edges in discovery order.
        graph: Directed graph over ``edges``.
        gravity: Gravity score per node id.
        columns: Node ids per column, sorted by gravity.
        lldp_available: Whether any interface reports LLDP neighbors.
        warnings: Degraded derivations found while computing the view.
    """

    nodes: Tuple[TopologyNode, ...]
    edges: Tuple[Edge, ...]
    graph: TopologyGraph
    gravity: Mapping[str, int]
    columns: Mapping[Column, Tuple[str, ...]]
    lldp_available: bool
    warnings: Tuple[TopologyWarning, ...] = ()

    def node(self, node_id: str) -> Optional[TopologyNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def highlight(self, node_id: Optional[str]) -> FrozenSet[str]:
        """Highlighted node ids and edge keys for a selected node."""
        return highlighted_path(self.graph, node_id)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable representation of the view."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "gravity": dict(sorted(self.gravity.items())),
            "columns": {
                column.name.lower(): list(ids) for column, ids in self.columns.items()
            },
            "lldpAvailable": self.lldp_available,
            "warnings": [warning.to_dict() for warning in self.warnings],
        }


def physical_entry_points(inputs: TopologyInputs, graph: TopologyGraph) -> List[str]:
    """Interface node ids with no upstream edge, in interface order."""
    entry_points: List[str] = []
    for iface in inputs.interfaces:
        node_id = interface_node_id(iface)
        if node_id in graph and not graph.upstream(node_id) and node_id not in entry_points:
            entry_points.append(node_id)
    return entry_points


def collect_warnings(inputs: TopologyInputs) -> List[TopologyWarning]:
    """Report NAD configs and VRFs whose derivation degraded."""
    warnings: List[TopologyWarning] = []
    for nad in inputs.nads:
        upstream = resolve_nad_upstream(nad)
        subject = nad_node_id(nad)
        if upstream.source is ConfigSource.REGEX_FALLBACK:
            warnings.append(
                TopologyWarning(
                    NAD_CONFIG_REGEX_FALLBACK,
                    f"NAD {nad.namespace}/{nad.name}: config is not valid JSON, "
                    f"upstream recovered by pattern match",
                    subject,
                )
            )
        elif (
            upstream.source is ConfigSource.NONE
            and isinstance(nad.config, str)
            and nad.config.strip()
            and parse_nad_config(nad.config) is None
        ):
            warnings.append(
                TopologyWarning(
                    NAD_CONFIG_UNPARSEABLE,
                    f"NAD {nad.namespace}/{nad.name}: config could not be parsed",
                    subject,
                )
            )

    if inputs.route_advertisements is not None:
        for vrf in vrf_interfaces(inputs.interfaces):
            if find_route_advertisement_for_vrf(inputs.route_advertisements, vrf.name) is None:
                warnings.append(
                    TopologyWarning(
                        VRF_WITHOUT_ROUTE_ADVERTISEMENT,
                        f"VRF {vrf.name}: no RouteAdvertisements targets it",
                        interface_node_id(vrf),
                    )
                )

    for warning in warnings:
        logger.warning("%s: %s", warning.code, warning.message)
    return warnings


def build_topology_view(
    inputs: TopologyInputs, config: TopologyConfig = DEFAULT_CONFIG
) -> TopologyView:
    """Compute the full topology view of one host.

    Args:
        inputs: Resource collections of the host.
        config: Display and scoring configuration.

    Returns:
        The computed view.
    """
    buckets = classify_interfaces(inputs.interfaces)
    attachments = build_attachment_nodes(inputs.cudns, inputs.udns)
    neighbors = extract_lldp_neighbors(inputs.interfaces) if config.show_lldp_neighbors else []

    edges = build_topology_edges(
        inputs,
        show_lldp_neighbors=config.show_lldp_neighbors,
        lldp_neighbors=neighbors,
        attachment_nodes=attachments,
    )
    graph = TopologyGraph.from_edges(edges)

    # LLDP neighbor edges never take part in scoring
    host_edges = [edge for edge in edges if edge.kind != RULE_LLDP]
    gravity: GravityMap = compute_gravity_by_id(
        host_edges,
        inputs.interfaces,
        physical_entry_points(inputs, TopologyGraph.from_edges(host_edges)),
        config=config.gravity,
    )
    for neighbor in neighbors:
        gravity[neighbor.id] = gravity.get(neighbor.local_interface, DEFAULT_GRAVITY)
    nodes = build_topology_nodes(inputs, buckets, attachments, neighbors)
    columns = assign_columns(nodes, gravity)

    logger.debug(
        "Topology view: %d nodes, %d edges, %d scored",
        len(nodes),
        len(edges),
        len(gravity),
    )
    return TopologyView(
        nodes=tuple(nodes),
        edges=tuple(edges),
        graph=graph,
        gravity=gravity,
        columns={column: tuple(ids) for column, ids in columns.items()},
        lldp_available=has_lldp_neighbors(inputs.interfaces),
        warnings=tuple(collect_warnings(inputs)),
    )
