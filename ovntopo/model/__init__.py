"""Typed resource model for topology computation."""

from ovntopo.model.resources import (
    ClusterUserDefinedNetwork,
    Interface,
    LldpInfo,
    NetworkAttachmentDefinition,
    OvnBridgeMapping,
    RouteAdvertisements,
    StatusCondition,
    UserDefinedNetwork,
    VrfInfo,
)
from ovntopo.model.state import NodeNetworkState, RouteEntry, TopologyInputs

__all__ = [
    "ClusterUserDefinedNetwork",
    "Interface",
    "LldpInfo",
    "NetworkAttachmentDefinition",
    "NodeNetworkState",
    "OvnBridgeMapping",
    "RouteAdvertisements",
    "RouteEntry",
    "StatusCondition",
    "TopologyInputs",
    "UserDefinedNetwork",
    "VrfInfo",
]
