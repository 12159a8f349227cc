"""VRF port and route association."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Set, Tuple

from ovntopo.model.resources import Interface
from ovntopo.model.state import NodeNetworkState, RouteEntry

#: OVN integration bridge; VRF ports attached to it are OVN management ports.
BR_INT = "br-int"


@dataclass(frozen=True)
class VrfConnectionInfo:
    """How a VRF connects to the rest of the host.

    Attributes:
        ports: VRF ports found among the host interfaces, in VRF port order.
        br_int_ports: Subset of ``ports`` whose controller is ``br-int``.
        missing_ports: Port names the VRF lists but the host does not report.
    """

    ports: Tuple[Interface, ...] = ()
    br_int_ports: Tuple[Interface, ...] = ()
    missing_ports: Tuple[str, ...] = ()


def get_vrf_connection_info(vrf: Interface, interfaces: Sequence[Interface]) -> VrfConnectionInfo:
    by_name = {iface.name: iface for iface in interfaces}
    port_names = vrf.vrf.ports if vrf.vrf else ()
    ports = tuple(by_name[name] for name in port_names if name in by_name)
    return VrfConnectionInfo(
        ports=ports,
        br_int_ports=tuple(p for p in ports if p.controller_name == BR_INT),
        missing_ports=tuple(name for name in port_names if name not in by_name),
    )


def get_vrf_routes_for_interface(vrf: Interface, state: NodeNetworkState) -> List[RouteEntry]:
    """Routes belonging to a VRF.

    A route belongs to the VRF when it lives in the VRF's routing table or
    egresses through the VRF or one of its ports. Routes are deduplicated by
    (destination, next-hop interface, next-hop address, table id), keeping
    the first occurrence; running routes precede configured ones.
    """
    table_id = vrf.vrf.route_table_id if vrf.vrf else None
    devices: Set[str] = {vrf.name}
    if vrf.vrf:
        devices.update(vrf.vrf.ports)

    routes: List[RouteEntry] = []
    seen: Set[tuple] = set()
    for route in state.routes:
        in_table = table_id is not None and route.table_id == table_id
        via_port = route.next_hop_interface is not None and route.next_hop_interface in devices
        if not (in_table or via_port):
            continue
        key = (route.destination, route.next_hop_interface, route.next_hop_address, route.table_id)
        if key in seen:
            continue
        seen.add(key)
        routes.append(route)
    return routes
