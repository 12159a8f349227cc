"""LLDP neighbor view-models.

nmstate reports each LLDP neighbor as an ordered list of TLV records, one
mapping per TLV, e.g.::

    - type: 5
      system-name: USWEnterprise48PoE
    - type: 1
      chassis-id: 28:70:4E:D4:53:B0
      chassis-id-type: 4
    - type: 7
      system-capabilities: [MAC Bridge component, Router]

Fields are resolved by the first record carrying a non-empty value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from ovntopo.model.ids import lldp_neighbor_node_id
from ovntopo.model.resources import Interface, LldpTlvBlock


@dataclass(frozen=True)
class LldpNeighbor:
    """A physical neighbor discovered on a local interface."""

    id: str
    local_interface: str
    index: int
    label: str
    system_name: Optional[str] = None
    port_id: Optional[str] = None
    chassis_id: Optional[str] = None
    system_description: Optional[str] = None
    capabilities: Tuple[str, ...] = ()


def _first_value(block: LldpTlvBlock, key: str) -> Optional[str]:
    for tlv in block:
        value = tlv.get(key)
        if value is None or isinstance(value, (dict, list)):
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def _capabilities(block: LldpTlvBlock) -> Tuple[str, ...]:
    seen: List[str] = []
    for tlv in block:
        values: Any = tlv.get("system-capabilities")
        if isinstance(values, str):
            values = [values]
        if not isinstance(values, list):
            continue
        for value in values:
            text = str(value).strip()
            if text and text not in seen:
                seen.append(text)
    return tuple(seen)


def neighbor_from_block(local_interface: str, index: int, block: LldpTlvBlock) -> LldpNeighbor:
    """Build one neighbor view-model from its TLV block."""
    system_name = _first_value(block, "system-name")
    chassis_id = _first_value(block, "chassis-id")
    label = system_name or chassis_id or f"Neighbor {index + 1}"
    return LldpNeighbor(
        id=lldp_neighbor_node_id(local_interface, index),
        local_interface=local_interface,
        index=index,
        label=label,
        system_name=system_name,
        port_id=_first_value(block, "port-id"),
        chassis_id=chassis_id,
        system_description=_first_value(block, "system-description"),
        capabilities=_capabilities(block),
    )


def extract_lldp_neighbors(interfaces: Sequence[Interface]) -> List[LldpNeighbor]:
    """All LLDP neighbors, in interface order then neighbor order."""
    neighbors: List[LldpNeighbor] = []
    for iface in interfaces:
        if iface.lldp is None:
            continue
        for index, block in enumerate(iface.lldp.neighbors):
            neighbors.append(neighbor_from_block(iface.name, index, block))
    return neighbors


def has_lldp_neighbors(interfaces: Iterable[Interface]) -> bool:
    """Whether the LLDP view is available for a host.

    True only when some interface has LLDP enabled and some interface
    (not necessarily the same one) reports at least one neighbor.
    """
    enabled = False
    discovered = False
    for iface in interfaces:
        if iface.lldp is None:
            continue
        enabled = enabled or iface.lldp.enabled
        discovered = discovered or bool(iface.lldp.neighbors)
    return enabled and discovered
