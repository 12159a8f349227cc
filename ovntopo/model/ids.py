"""Node identifier construction.

Identifiers are namespaced by kind so that one graph can hold interfaces,
synthetic OVN mapping nodes, networks, attachments, NADs and LLDP neighbors
without collisions. Interfaces use their raw name, so an id alone does not
always reveal its kind (``ovn-k8s-mp0`` is an interface); kinds are tracked
by the pipeline's node registry instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ovntopo.model.resources import (
        ClusterUserDefinedNetwork,
        Interface,
        NetworkAttachmentDefinition,
        UserDefinedNetwork,
    )

OVN_PREFIX = "ovn-"
CUDN_PREFIX = "cudn-"
UDN_PREFIX = "udn-"
ATTACHMENT_PREFIX = "attachment-"
NAD_PREFIX = "nad-"
LLDP_PREFIX = "lldp-"


def interface_node_id(iface: "Interface") -> str:
    return iface.name


def ovn_mapping_node_id(localnet: str) -> str:
    return f"{OVN_PREFIX}{localnet}"


def cudn_node_id(name: str) -> str:
    return f"{CUDN_PREFIX}{name}"


def cudn_resource_node_id(cudn: "ClusterUserDefinedNetwork") -> str:
    return cudn_node_id(cudn.name)


def udn_node_id(udn: "UserDefinedNetwork") -> str:
    return f"{UDN_PREFIX}{udn.namespace}-{udn.name}"


def attachment_node_id(network_node_id: str) -> str:
    """Attachment node for a CUDN or UDN node id."""
    return f"{ATTACHMENT_PREFIX}{network_node_id}"


def nad_node_id(nad: "NetworkAttachmentDefinition") -> str:
    return f"{NAD_PREFIX}{nad.namespace}-{nad.name}"


def lldp_neighbor_node_id(local_interface: str, index: int) -> str:
    return f"{LLDP_PREFIX}{local_interface}-{index}"


def is_ovn_mapping_id(node_id: str) -> bool:
    return node_id.startswith(OVN_PREFIX)


def is_udn_node_id(node_id: str) -> bool:
    """True for ids of the secondary overlay kind (namespaced UDNs)."""
    return node_id.startswith(UDN_PREFIX)
