"""Typed, immutable views of the Kubernetes resources the topology is built from.

Each entity offers a ``from_dict`` constructor that accepts the resource as
returned by the API server (parsed JSON/YAML). Parsing is total: absent or
malformed optional fields become ``None`` or empty collections, never an
exception. Only the fields the topology derivation uses are lifted into
attributes; interfaces keep their raw mapping for display purposes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from ovntopo.selectors.schema import NetworkSelector
from ovntopo.types.base import CudnTopology, InterfaceState, InterfaceType
from ovntopo.utils import as_list, as_mapping, as_str, as_str_dict, dig

#: One LLDP neighbor is an ordered list of TLV records.
LldpTlvBlock = Tuple[Dict[str, Any], ...]

#: NAD ``spec.config`` as delivered by the API: usually a JSON string,
#: occasionally an already-parsed object.
NadConfig = Union[str, Dict[str, Any], None]


@dataclass(frozen=True)
class VrfInfo:
    """VRF attributes of a ``type: vrf`` interface.

    Attributes:
        route_table_id: Kernel routing table bound to the VRF.
        ports: Names of the interfaces enslaved to the VRF.
    """

    route_table_id: Optional[int] = None
    ports: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> Optional["VrfInfo"]:
        if not isinstance(data, dict):
            return None
        table = data.get("route-table-id")
        if isinstance(table, bool) or not isinstance(table, (int, str)):
            table_id = None
        else:
            try:
                table_id = int(table)
            except ValueError:
                table_id = None
        ports = tuple(str(p) for p in as_list(data.get("port")) if as_str(p))
        return cls(route_table_id=table_id, ports=ports)


@dataclass(frozen=True)
class LldpInfo:
    """LLDP block of an interface.

    Attributes:
        enabled: Whether LLDP reception is enabled on the interface.
        neighbors: One TLV block per discovered neighbor.
    """

    enabled: bool = False
    neighbors: Tuple[LldpTlvBlock, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> Optional["LldpInfo"]:
        if not isinstance(data, dict):
            return None
        neighbors: List[LldpTlvBlock] = []
        for block in as_list(data.get("neighbors")):
            records = tuple(as_mapping(tlv) for tlv in as_list(block) if isinstance(tlv, dict))
            neighbors.append(records)
        return cls(enabled=data.get("enabled") is True, neighbors=tuple(neighbors))


@dataclass(frozen=True)
class Interface:
    """A host interface from ``NodeNetworkState.status.currentState.interfaces``.

    Attributes:
        name: Interface name, unique within one host.
        type: Normalized interface type.
        raw_type: Type string as reported (kept for display).
        state: Normalized state.
        controller: Controller interface name (nmstate >= 2).
        master: Legacy controller field.
        base_iface: Base interface of a VLAN or MAC-VLAN.
        patch: True when the interface carries a ``patch`` property.
        vrf: VRF attributes, for ``type: vrf``.
        lldp: LLDP block, when reported.
        attrs: Raw resource mapping (MTU, MAC address, addresses, ...).
    """

    name: str
    type: InterfaceType = InterfaceType.OTHER
    raw_type: str = ""
    state: InterfaceState = InterfaceState.OTHER
    controller: Optional[str] = None
    master: Optional[str] = None
    base_iface: Optional[str] = None
    patch: bool = False
    vrf: Optional[VrfInfo] = None
    lldp: Optional[LldpInfo] = None
    attrs: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def controller_name(self) -> Optional[str]:
        """The controller, falling back to the legacy ``master`` field."""
        return self.controller or self.master

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Interface"]:
        """Parse an nmstate interface mapping; returns ``None`` when unnamed."""
        name = as_str(dig(data, "name"))
        if name is None:
            return None
        raw_type = as_str(data.get("type")) or ""
        base_iface = as_str(dig(data, "vlan", "base-iface")) or as_str(
            dig(data, "mac-vlan", "base-iface")
        )
        return cls(
            name=name,
            type=InterfaceType.from_string(raw_type),
            raw_type=raw_type,
            state=InterfaceState.from_string(data.get("state")),
            controller=as_str(data.get("controller")),
            master=as_str(data.get("master")),
            base_iface=base_iface,
            patch="patch" in data and data.get("patch") is not None,
            vrf=VrfInfo.from_dict(data.get("vrf")),
            lldp=LldpInfo.from_dict(data.get("lldp")),
            attrs=dict(data),
        )


@dataclass(frozen=True)
class OvnBridgeMapping:
    """An OVN ``bridge-mappings`` entry: localnet exposed by a bridge."""

    bridge: str
    localnet: str
    state: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["OvnBridgeMapping"]:
        bridge = as_str(dig(data, "bridge"))
        localnet = as_str(dig(data, "localnet"))
        if bridge is None or localnet is None:
            return None
        return cls(bridge=bridge, localnet=localnet, state=as_str(data.get("state")))


@dataclass(frozen=True)
class StatusCondition:
    """A ``status.conditions[]`` entry."""

    type: str
    status: str
    message: Optional[str] = None

    @classmethod
    def list_from(cls, resource: Any) -> Tuple["StatusCondition", ...]:
        conditions = []
        for raw in as_list(dig(resource, "status", "conditions")):
            ctype = as_str(dig(raw, "type"))
            status = dig(raw, "status")
            if ctype is None or status is None:
                continue
            conditions.append(
                cls(type=ctype, status=str(status), message=as_str(raw.get("message")))
            )
        return tuple(conditions)


@dataclass(frozen=True)
class ClusterUserDefinedNetwork:
    """A cluster-scoped user-defined network (primary overlay kind).

    Attributes:
        name: Resource name.
        labels: Metadata labels, matched by RouteAdvertisements.
        topology: Network topology.
        physical_network_name: Localnet physical network, if any.
        conditions: Status conditions.
    """

    name: str
    labels: Dict[str, str] = field(default_factory=dict)
    topology: CudnTopology = CudnTopology.OTHER
    physical_network_name: Optional[str] = None
    conditions: Tuple[StatusCondition, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> Optional["ClusterUserDefinedNetwork"]:
        name = as_str(dig(data, "metadata", "name"))
        if name is None:
            return None
        network = dig(data, "spec", "network")
        # Both spellings occur in the wild; the API uses "localnet".
        physnet = as_str(dig(network, "localNet", "physicalNetworkName")) or as_str(
            dig(network, "localnet", "physicalNetworkName")
        )
        return cls(
            name=name,
            labels=as_str_dict(dig(data, "metadata", "labels")),
            topology=CudnTopology.from_string(dig(network, "topology")),
            physical_network_name=physnet,
            conditions=StatusCondition.list_from(data),
        )


@dataclass(frozen=True)
class UserDefinedNetwork:
    """A namespaced user-defined network (secondary overlay kind)."""

    namespace: str
    name: str
    topology: CudnTopology = CudnTopology.OTHER
    conditions: Tuple[StatusCondition, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> Optional["UserDefinedNetwork"]:
        name = as_str(dig(data, "metadata", "name"))
        namespace = as_str(dig(data, "metadata", "namespace"))
        if name is None or namespace is None:
            return None
        return cls(
            namespace=namespace,
            name=name,
            topology=CudnTopology.from_string(dig(data, "spec", "topology")),
            conditions=StatusCondition.list_from(data),
        )


@dataclass(frozen=True)
class NetworkAttachmentDefinition:
    """A Multus NetworkAttachmentDefinition.

    Attributes:
        namespace: Resource namespace (may be empty for malformed input).
        name: Resource name.
        config: Raw ``spec.config``; parsed lazily by ``ovntopo.normalize.nad``.
    """

    namespace: str
    name: str
    config: NadConfig = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> Optional["NetworkAttachmentDefinition"]:
        name = as_str(dig(data, "metadata", "name"))
        if name is None:
            return None
        raw_config = dig(data, "spec", "config")
        if not isinstance(raw_config, (str, dict)):
            raw_config = None
        return cls(
            namespace=as_str(dig(data, "metadata", "namespace")) or "",
            name=name,
            config=raw_config,
        )


@dataclass(frozen=True)
class RouteAdvertisements:
    """A RouteAdvertisements resource selecting CUDNs to advertise via a VRF."""

    name: str
    network_selectors: Tuple[NetworkSelector, ...] = ()
    target_vrf: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["RouteAdvertisements"]:
        name = as_str(dig(data, "metadata", "name"))
        if name is None:
            return None
        selectors = tuple(
            NetworkSelector.from_dict(raw)
            for raw in as_list(dig(data, "spec", "networkSelectors"))
            if isinstance(raw, dict)
        )
        return cls(
            name=name,
            network_selectors=selectors,
            target_vrf=as_str(dig(data, "spec", "targetVRF")),
        )
