"""Interface role classification.

nmstate reports an OVS bridge twice: as the ``ovs-bridge`` itself and as an
``ovs-interface`` internal port of the same name. Whether an
``ovs-interface`` renders as a bridge or as a logical port therefore depends
on whether other interfaces name it as their controller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Iterable, Sequence, Tuple

from ovntopo.model.resources import Interface
from ovntopo.types.base import InterfaceState, InterfaceType

_BRIDGE_TYPES = frozenset({InterfaceType.LINUX_BRIDGE, InterfaceType.OVS_BRIDGE})

_PATCH_PREFIX = "patch"


def controller_names(interfaces: Iterable[Interface]) -> FrozenSet[str]:
    """Names referenced as ``controller``/``master`` by any interface."""
    return frozenset(
        iface.controller_name for iface in interfaces if iface.controller_name
    )


def is_bridge(iface: Interface, controllers: AbstractSet[str]) -> bool:
    """Return True if the interface renders as a bridge.

    Args:
        iface: Interface to classify.
        controllers: Result of ``controller_names`` over the same host.
    """
    if iface.type in _BRIDGE_TYPES:
        return True
    return (
        iface.type is InterfaceType.OVS_INTERFACE
        and iface.name in controllers
        and not iface.patch
        and iface.state is not InterfaceState.IGNORE
    )


def is_logical(iface: Interface, controllers: AbstractSet[str]) -> bool:
    """Return True for OVS internal ports that are neither bridges nor patches."""
    return (
        iface.type is InterfaceType.OVS_INTERFACE
        and not is_bridge(iface, controllers)
        and iface.state is not InterfaceState.IGNORE
        and not iface.name.startswith(_PATCH_PREFIX)
    )


@dataclass(frozen=True)
class InterfaceBuckets:
    """Interfaces grouped by rendering role, each in reported order.

    ``other`` holds every interface outside ethernet, bond, vlan, mac-vlan,
    bridge and logical, VRFs included; ``vrf`` is a view of the VRF-typed
    interfaces only.
    """

    ethernet: Tuple[Interface, ...] = ()
    bond: Tuple[Interface, ...] = ()
    vlan: Tuple[Interface, ...] = ()
    mac_vlan: Tuple[Interface, ...] = ()
    bridge: Tuple[Interface, ...] = ()
    logical: Tuple[Interface, ...] = ()
    vrf: Tuple[Interface, ...] = ()
    other: Tuple[Interface, ...] = ()


def classify_interfaces(interfaces: Sequence[Interface]) -> InterfaceBuckets:
    """Group interfaces by role.

    Args:
        interfaces: All interfaces of one host.

    Returns:
        InterfaceBuckets with every interface in exactly one of ethernet,
        bond, vlan, mac_vlan, bridge, logical or other.
    """
    controllers = controller_names(interfaces)
    ethernet, bond, vlan, mac_vlan, bridge, logical, other = ([] for _ in range(7))
    for iface in interfaces:
        if is_bridge(iface, controllers):
            bridge.append(iface)
        elif is_logical(iface, controllers):
            logical.append(iface)
        elif iface.type is InterfaceType.ETHERNET:
            ethernet.append(iface)
        elif iface.type is InterfaceType.BOND:
            bond.append(iface)
        elif iface.type is InterfaceType.VLAN:
            vlan.append(iface)
        elif iface.type is InterfaceType.MAC_VLAN:
            mac_vlan.append(iface)
        else:
            other.append(iface)
    return InterfaceBuckets(
        ethernet=tuple(ethernet),
        bond=tuple(bond),
        vlan=tuple(vlan),
        mac_vlan=tuple(mac_vlan),
        bridge=tuple(bridge),
        logical=tuple(logical),
        vrf=tuple(i for i in interfaces if i.type is InterfaceType.VRF),
        other=tuple(other),
    )


def vrf_interfaces(interfaces: Iterable[Interface]) -> Tuple[Interface, ...]:
    """VRF-typed interfaces in reported order."""
    return tuple(i for i in interfaces if i.type is InterfaceType.VRF)
