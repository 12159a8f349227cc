"""Resource normalization: typed entities to topology view-models."""

from ovntopo.normalize.interfaces import (
    InterfaceBuckets,
    classify_interfaces,
    controller_names,
    is_bridge,
    is_logical,
    vrf_interfaces,
)
from ovntopo.normalize.lldp import LldpNeighbor, extract_lldp_neighbors, has_lldp_neighbors
from ovntopo.normalize.nad import (
    ConfigSource,
    NadUpstream,
    find_cudn_name_for_nad,
    get_nad_network_name,
    get_nad_upstream_node_ids,
    get_nad_upstream_node_ids_for_edges,
    parse_nad_config,
    resolve_nad_upstream,
)
from ovntopo.normalize.networks import (
    AttachmentNode,
    build_attachment_nodes,
    get_cudn_associated_namespaces,
    get_network_namespaces,
    get_udn_associated_namespaces,
)
from ovntopo.normalize.vrf import (
    VrfConnectionInfo,
    get_vrf_connection_info,
    get_vrf_routes_for_interface,
)

__all__ = [
    # Interfaces
    "InterfaceBuckets",
    "classify_interfaces",
    "controller_names",
    "is_bridge",
    "is_logical",
    "vrf_interfaces",
    # LLDP
    "LldpNeighbor",
    "extract_lldp_neighbors",
    "has_lldp_neighbors",
    # NADs
    "ConfigSource",
    "NadUpstream",
    "find_cudn_name_for_nad",
    "get_nad_network_name",
    "get_nad_upstream_node_ids",
    "get_nad_upstream_node_ids_for_edges",
    "parse_nad_config",
    "resolve_nad_upstream",
    # Networks
    "AttachmentNode",
    "build_attachment_nodes",
    "get_cudn_associated_namespaces",
    "get_network_namespaces",
    "get_udn_associated_namespaces",
    # VRFs
    "VrfConnectionInfo",
    "get_vrf_connection_info",
    "get_vrf_routes_for_interface",
]
