"""Node registry: every renderable node with its kind, label and column."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from ovntopo.model.ids import (
    cudn_resource_node_id,
    interface_node_id,
    nad_node_id,
    ovn_mapping_node_id,
    udn_node_id,
)
from ovntopo.model.resources import Interface
from ovntopo.model.state import TopologyInputs
from ovntopo.normalize.interfaces import InterfaceBuckets
from ovntopo.normalize.lldp import LldpNeighbor
from ovntopo.normalize.networks import AttachmentNode
from ovntopo.normalize.vrf import get_vrf_connection_info, get_vrf_routes_for_interface
from ovntopo.selectors.routes import find_route_advertisement_for_vrf
from ovntopo.types.base import Column, InterfaceType, NodeKind


@dataclass(frozen=True)
class TopologyNode:
    """A renderable node.

    Attributes:
        id: Node id, unique within one view.
        kind: Node kind.
        label: Display label.
        column: Diagram column.
        data: Kind-specific display attributes.
    """

    id: str
    kind: NodeKind
    label: str
    column: Column
    data: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "label": self.label,
            "column": self.column.name.lower(),
            "data": dict(self.data),
        }


def _interface_columns(buckets: InterfaceBuckets) -> List[tuple]:
    return [
        (Column.PHYSICAL, buckets.ethernet),
        (Column.BONDS, buckets.bond),
        (Column.VLANS, buckets.vlan + buckets.mac_vlan),
        (Column.BRIDGES, buckets.bridge),
        (Column.LOGICAL, buckets.logical),
        (Column.VRFS, buckets.vrf),
        (Column.OTHER, tuple(i for i in buckets.other if i.type is not InterfaceType.VRF)),
    ]


def _vrf_data(vrf: Interface, inputs: TopologyInputs) -> Dict[str, Any]:
    info = get_vrf_connection_info(vrf, inputs.interfaces)
    ra = find_route_advertisement_for_vrf(inputs.route_advertisements, vrf.name)
    return {
        "routeTableId": vrf.vrf.route_table_id if vrf.vrf else None,
        "routeAdvertisement": ra.name if ra else None,
        "ports": [p.name for p in info.ports],
        "brIntPorts": [p.name for p in info.br_int_ports],
        "missingPorts": list(info.missing_ports),
        "routes": [
            {
                "destination": r.destination,
                "nextHopInterface": r.next_hop_interface,
                "nextHopAddress": r.next_hop_address,
                "tableId": r.table_id,
            }
            for r in get_vrf_routes_for_interface(vrf, inputs.state)
        ],
    }


def build_topology_nodes(
    inputs: TopologyInputs,
    buckets: InterfaceBuckets,
    attachments: Sequence[AttachmentNode],
    lldp_neighbors: Sequence[LldpNeighbor] = (),
) -> List[TopologyNode]:
    """Register every renderable node once, in column order.

    LLDP neighbors are registered only when passed in; callers pass an
    empty sequence while the LLDP view is hidden. When two resources map to
    the same id, the first registration wins.
    """
    registry: Dict[str, TopologyNode] = {}

    def register(node: TopologyNode) -> None:
        registry.setdefault(node.id, node)

    for neighbor in lldp_neighbors:
        register(
            TopologyNode(
                neighbor.id,
                NodeKind.LLDP_NEIGHBOR,
                neighbor.label,
                Column.LLDP_NEIGHBORS,
                {
                    "localInterface": neighbor.local_interface,
                    "portId": neighbor.port_id,
                    "chassisId": neighbor.chassis_id,
                    "systemDescription": neighbor.system_description,
                    "capabilities": list(neighbor.capabilities),
                },
            )
        )

    for column, interfaces in _interface_columns(buckets):
        for iface in interfaces:
            data: Dict[str, Any] = {"type": iface.raw_type, "state": iface.state.value}
            if column is Column.VRFS:
                data.update(_vrf_data(iface, inputs))
            register(
                TopologyNode(interface_node_id(iface), NodeKind.INTERFACE, iface.name, column, data)
            )

    for mapping in inputs.bridge_mappings:
        register(
            TopologyNode(
                ovn_mapping_node_id(mapping.localnet),
                NodeKind.OVN_MAPPING,
                mapping.localnet,
                Column.OVN_MAPPINGS,
                {"bridge": mapping.bridge},
            )
        )

    for cudn in inputs.cudns:
        register(
            TopologyNode(
                cudn_resource_node_id(cudn),
                NodeKind.CUDN,
                cudn.name,
                Column.NETWORKS,
                {"topology": cudn.topology.value},
            )
        )
    for udn in inputs.udns:
        register(
            TopologyNode(
                udn_node_id(udn),
                NodeKind.UDN,
                f"{udn.namespace}/{udn.name}",
                Column.NETWORKS,
                {"topology": udn.topology.value},
            )
        )

    for nad in inputs.nads:
        register(
            TopologyNode(
                nad_node_id(nad),
                NodeKind.NAD,
                f"{nad.namespace}/{nad.name}" if nad.namespace else nad.name,
                Column.NADS,
            )
        )

    for attachment in attachments:
        register(
            TopologyNode(
                attachment.node_id,
                NodeKind.ATTACHMENT,
                attachment.name,
                Column.ATTACHMENTS,
                {"namespaces": list(attachment.namespaces)},
            )
        )

    return list(registry.values())
