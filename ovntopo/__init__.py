"""ovntopo: OVN-Kubernetes host network topology.

ovntopo computes, as a pure function of Kubernetes resources, the topology
graph of one host: NICs, bonds, VLANs, bridges, OVN bridge mappings,
CUDNs/UDNs, NADs, VRFs, RouteAdvertisements and LLDP neighbors. It also
computes a deterministic "gravity" ordering for layout and the highlighted
path through any selected node.

Primary API:
    TopologyInputs - Typed resource collections of one host
    build_topology_view() - Compute edges, graph, gravity and columns
    TopologyView - Computed view with highlight() and to_dict()
    load_bundle() - Read a resource bundle file (YAML/JSON)

Example:
    from ovntopo import TopologyInputs, build_topology_view

    inputs = TopologyInputs.from_resources(
        node_network_state=nns, cudns=cudns, udns=udns, nads=nads
    )
    view = build_topology_view(inputs)
    view.columns      # Column -> node ids in gravity order
    view.highlight("br-ex")
"""

from __future__ import annotations

from ovntopo import cli, logging
from ovntopo._version import __version__
from ovntopo.config import DEFAULT_CONFIG, GravityConfig, TopologyConfig
from ovntopo.io.loader import load_bundle, load_bundle_yaml
from ovntopo.model.resources import (
    ClusterUserDefinedNetwork,
    Interface,
    NetworkAttachmentDefinition,
    OvnBridgeMapping,
    RouteAdvertisements,
    UserDefinedNetwork,
)
from ovntopo.model.state import NodeNetworkState, TopologyInputs
from ovntopo.topology.edges import Edge, build_topology_edges
from ovntopo.topology.graph import TopologyGraph
from ovntopo.topology.gravity import compute_gravity_by_id
from ovntopo.topology.highlight import highlighted_path
from ovntopo.topology.layout import sort_by_gravity
from ovntopo.topology.view import TopologyView, TopologyWarning, build_topology_view
from ovntopo.types.base import Column, CudnTopology, InterfaceType, NodeKind

__all__ = [
    # Version
    "__version__",
    # Configuration
    "DEFAULT_CONFIG",
    "GravityConfig",
    "TopologyConfig",
    # Model
    "ClusterUserDefinedNetwork",
    "Interface",
    "NetworkAttachmentDefinition",
    "NodeNetworkState",
    "OvnBridgeMapping",
    "RouteAdvertisements",
    "TopologyInputs",
    "UserDefinedNetwork",
    # Topology (primary API)
    "build_topology_view",
    "TopologyView",
    "TopologyWarning",
    "Edge",
    "build_topology_edges",
    "TopologyGraph",
    "highlighted_path",
    "compute_gravity_by_id",
    "sort_by_gravity",
    # Types
    "Column",
    "CudnTopology",
    "InterfaceType",
    "NodeKind",
    # I/O
    "load_bundle",
    "load_bundle_yaml",
    # Utilities
    "cli",
    "logging",
]
