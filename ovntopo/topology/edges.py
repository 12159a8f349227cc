"""Edge Builder: derive directed topology edges from resource collections.

Edges point in the direction traffic is provisioned, from the physical side
toward workloads: NIC -> bond -> bridge -> ``ovn-<localnet>`` -> CUDN ->
attachment. Each rule below is independent; the only global invariant is
that an ordered (source, target) pair appears once, no matter how many
rules rediscover it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

from ovntopo.logging import get_logger
from ovntopo.model.ids import (
    cudn_node_id,
    cudn_resource_node_id,
    interface_node_id,
    nad_node_id,
    ovn_mapping_node_id,
    udn_node_id,
)
from ovntopo.model.state import TopologyInputs
from ovntopo.normalize.interfaces import vrf_interfaces
from ovntopo.normalize.lldp import LldpNeighbor, extract_lldp_neighbors
from ovntopo.normalize.nad import find_cudn_name_for_nad, get_nad_upstream_node_ids_for_edges
from ovntopo.normalize.networks import AttachmentNode, build_attachment_nodes
from ovntopo.selectors.routes import (
    find_route_advertisement_for_vrf,
    get_cudns_selected_by_route_advertisement,
)

logger = get_logger(__name__)

# Rule names carried as edge metadata
RULE_CONTROLLER = "controller"
RULE_BASE_IFACE = "base-iface"
RULE_BRIDGE_MAPPING = "bridge-mapping"
RULE_LOCALNET = "localnet"
RULE_ATTACHMENT = "attachment"
RULE_NAD = "nad"
RULE_ROUTE_ADVERTISEMENT = "route-advertisement"
RULE_LLDP = "lldp"


@dataclass(frozen=True)
class Edge:
    """A directed topology edge.

    Equality and hashing use only (source, target); ``kind`` records the
    rule that first produced the edge.
    """

    source: str
    target: str
    kind: str = field(default="", compare=False)

    @property
    def key(self) -> str:
        return f"{self.source}=>{self.target}"

    def to_dict(self) -> Dict[str, str]:
        return {"source": self.source, "target": self.target, "kind": self.kind}


class EdgeSet:
    """Insertion-ordered edge collection deduplicated by ``source=>target``."""

    def __init__(self) -> None:
        self._edges: Dict[str, Edge] = {}

    def add(self, source: Optional[str], target: Optional[str], kind: str = "") -> bool:
        """Add an edge; returns False if an endpoint is empty or the edge exists."""
        if not source or not target:
            return False
        edge = Edge(source, target, kind)
        if edge.key in self._edges:
            return False
        self._edges[edge.key] = edge
        return True

    def __contains__(self, key: object) -> bool:
        return key in self._edges

    def __iter__(self) -> Iterator[Edge]:
        return iter(self._edges.values())

    def __len__(self) -> int:
        return len(self._edges)

    def to_list(self) -> List[Edge]:
        return list(self._edges.values())


def build_topology_edges(
    inputs: TopologyInputs,
    *,
    show_lldp_neighbors: bool = False,
    lldp_neighbors: Optional[Sequence[LldpNeighbor]] = None,
    attachment_nodes: Optional[Sequence[AttachmentNode]] = None,
) -> List[Edge]:
    """Apply the matching rules and return deduplicated edges in discovery order.

    Args:
        inputs: Resource collections of one host.
        show_lldp_neighbors: Include LLDP neighbor -> local interface edges.
            This is the only rule gated by a display toggle.
        lldp_neighbors: Precomputed neighbors; derived from the interfaces
            when omitted.
        attachment_nodes: Precomputed attachment nodes; derived from the
            CUDNs/UDNs when omitted.

    Returns:
        Edges, each ordered (source, target) pair at most once.
    """
    edges = EdgeSet()
    interfaces = inputs.interfaces

    # Interface -> controller; base interface -> VLAN/MAC-VLAN
    for iface in interfaces:
        iface_id = interface_node_id(iface)
        edges.add(iface_id, iface.controller_name, RULE_CONTROLLER)
        edges.add(iface.base_iface, iface_id, RULE_BASE_IFACE)

    # Bridge -> OVN localnet mapping node
    for mapping in inputs.bridge_mappings:
        edges.add(mapping.bridge, ovn_mapping_node_id(mapping.localnet), RULE_BRIDGE_MAPPING)

    if show_lldp_neighbors:
        if lldp_neighbors is None:
            lldp_neighbors = extract_lldp_neighbors(interfaces)
        for neighbor in lldp_neighbors:
            edges.add(neighbor.id, neighbor.local_interface, RULE_LLDP)

    # OVN localnet mapping node -> Localnet CUDN. The physical network name
    # lives under spec.network.localnet, so only Localnet CUDNs carry one.
    for cudn in inputs.cudns:
        if cudn.physical_network_name:
            edges.add(
                ovn_mapping_node_id(cudn.physical_network_name),
                cudn_resource_node_id(cudn),
                RULE_LOCALNET,
            )

    # CUDN/UDN -> attachment
    if attachment_nodes is None:
        attachment_nodes = build_attachment_nodes(inputs.cudns, inputs.udns)
    for attachment in attachment_nodes:
        edges.add(attachment.network_node_id, attachment.node_id, RULE_ATTACHMENT)

    _add_nad_edges(edges, inputs)
    _add_route_advertisement_edges(edges, inputs)

    logger.debug(
        "Built %d topology edges from %d interfaces, %d mappings, %d cudns, %d nads",
        len(edges),
        len(interfaces),
        len(inputs.bridge_mappings),
        len(inputs.cudns),
        len(inputs.nads),
    )
    return edges.to_list()


def _add_nad_edges(edges: EdgeSet, inputs: TopologyInputs) -> None:
    for nad in inputs.nads:
        nad_id = nad_node_id(nad)
        cudn_name = find_cudn_name_for_nad(nad, inputs.cudns)
        if cudn_name:
            edges.add(cudn_node_id(cudn_name), nad_id, RULE_NAD)
        for udn in inputs.udns:
            if udn.namespace == nad.namespace and udn.name == nad.name:
                edges.add(udn_node_id(udn), nad_id, RULE_NAD)
                break
        for upstream_id in get_nad_upstream_node_ids_for_edges(nad, inputs.cudns):
            edges.add(upstream_id, nad_id, RULE_NAD)


def _add_route_advertisement_edges(edges: EdgeSet, inputs: TopologyInputs) -> None:
    if inputs.route_advertisements is None:
        return
    for vrf in vrf_interfaces(inputs.interfaces):
        ra = find_route_advertisement_for_vrf(inputs.route_advertisements, vrf.name)
        for cudn in get_cudns_selected_by_route_advertisement(ra, inputs.cudns):
            edges.add(interface_node_id(vrf), cudn_resource_node_id(cudn), RULE_ROUTE_ADVERTISEMENT)
