"""Closed enumerations shared by the topology model and algorithms."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional


class InterfaceType(str, Enum):
    """nmstate interface types recognized by the topology builder.

    Unrecognized type strings map to ``OTHER``; the raw string is kept on the
    interface for display.
    """

    ETHERNET = "ethernet"
    BOND = "bond"
    VLAN = "vlan"
    MAC_VLAN = "mac-vlan"
    LINUX_BRIDGE = "linux-bridge"
    OVS_BRIDGE = "ovs-bridge"
    OVS_INTERFACE = "ovs-interface"
    VRF = "vrf"
    OTHER = "other"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "InterfaceType":
        """Parse an nmstate type string; never raises.

        Args:
            value: Raw type string (case-insensitive), possibly ``None``.

        Returns:
            The matching member, or ``OTHER`` when unknown.
        """
        if not isinstance(value, str):
            return cls.OTHER
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER


class InterfaceState(str, Enum):
    """Administrative state reported by nmstate."""

    UP = "up"
    DOWN = "down"
    IGNORE = "ignore"
    OTHER = "other"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "InterfaceState":
        if not isinstance(value, str):
            return cls.OTHER
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER


class CudnTopology(str, Enum):
    """Topology of a (Cluster)UserDefinedNetwork."""

    LOCALNET = "Localnet"
    LAYER2 = "Layer2"
    LAYER3 = "Layer3"
    OTHER = "Other"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "CudnTopology":
        """Parse a topology string exactly as the API spells it.

        Matching is case-sensitive, like the API server's enum validation.
        """
        if not isinstance(value, str):
            return cls.OTHER
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER

    @property
    def is_routed(self) -> bool:
        """True for topologies that RouteAdvertisements can select."""
        return self in (CudnTopology.LAYER2, CudnTopology.LAYER3)


class SelectorOperator(str, Enum):
    """Kubernetes label selector ``matchExpressions`` operators."""

    IN = "In"
    NOT_IN = "NotIn"
    EXISTS = "Exists"
    DOES_NOT_EXIST = "DoesNotExist"


class NodeKind(str, Enum):
    """Closed set of node kinds appearing in a topology graph."""

    INTERFACE = "interface"
    OVN_MAPPING = "ovn-mapping"
    CUDN = "cudn"
    UDN = "udn"
    ATTACHMENT = "attachment"
    NAD = "nad"
    LLDP_NEIGHBOR = "lldp-neighbor"


class Column(IntEnum):
    """Diagram columns, in left-to-right rendering order."""

    LLDP_NEIGHBORS = 0
    PHYSICAL = 1
    BONDS = 2
    VLANS = 3
    BRIDGES = 4
    LOGICAL = 5
    VRFS = 6
    OTHER = 7
    OVN_MAPPINGS = 8
    NETWORKS = 9
    NADS = 10
    ATTACHMENTS = 11

    @property
    def title(self) -> str:
        """Human-readable column header."""
        return _COLUMN_TITLES[self]


_COLUMN_TITLES = {
    Column.LLDP_NEIGHBORS: "LLDP Neighbors",
    Column.PHYSICAL: "Physical Interfaces",
    Column.BONDS: "Bonds",
    Column.VLANS: "VLANs",
    Column.BRIDGES: "Bridges",
    Column.LOGICAL: "Logical Interfaces",
    Column.VRFS: "VRFs",
    Column.OTHER: "Other Interfaces",
    Column.OVN_MAPPINGS: "OVN Bridge Mappings",
    Column.NETWORKS: "Networks",
    Column.NADS: "Network Attachment Definitions",
    Column.ATTACHMENTS: "Attachments",
}
