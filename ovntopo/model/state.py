"""Per-host network state and the input bundle of one topology computation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple, TypeVar

from ovntopo.model.resources import (
    ClusterUserDefinedNetwork,
    Interface,
    NetworkAttachmentDefinition,
    OvnBridgeMapping,
    RouteAdvertisements,
    UserDefinedNetwork,
)
from ovntopo.utils import as_list, as_str, dig

T = TypeVar("T")


def _parse_all(items: Any, parse: Callable[[Any], Optional[T]]) -> Tuple[T, ...]:
    """Parse every element of a list, silently dropping unparseable ones."""
    parsed = (parse(raw) for raw in as_list(items))
    return tuple(item for item in parsed if item is not None)


def _normalize_route_key(key: str) -> str:
    return key.strip().lower().replace("_", "-").replace(".", "-")


@dataclass(frozen=True)
class RouteEntry:
    """One route from ``status.currentState.routes``.

    Keys are accepted in hyphenated (``next-hop-interface``), underscored
    (``next_hop_interface``) or dotted (``next.hop.interface``) spelling.
    """

    destination: str
    next_hop_interface: Optional[str] = None
    next_hop_address: Optional[str] = None
    table_id: Optional[int] = None
    metric: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["RouteEntry"]:
        if not isinstance(data, Mapping):
            return None
        normalized = {
            _normalize_route_key(str(key)): value for key, value in data.items()
        }
        destination = as_str(normalized.get("destination"))
        if destination is None:
            return None
        return cls(
            destination=destination,
            next_hop_interface=as_str(normalized.get("next-hop-interface")),
            next_hop_address=as_str(normalized.get("next-hop-address")),
            table_id=_as_int(normalized.get("table-id")),
            metric=_as_int(normalized.get("metric")),
        )


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class NodeNetworkState:
    """The ``currentState`` of a NodeNetworkState resource.

    Attributes:
        node_name: Host the state was reported for.
        interfaces: Reported interfaces, in reported order.
        bridge_mappings: OVN bridge mappings.
        routes: Running routes followed by configured routes.
    """

    node_name: Optional[str] = None
    interfaces: Tuple[Interface, ...] = ()
    bridge_mappings: Tuple[OvnBridgeMapping, ...] = ()
    routes: Tuple[RouteEntry, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "NodeNetworkState":
        current = dig(data, "status", "currentState")
        running = as_list(dig(current, "routes", "running"))
        config = as_list(dig(current, "routes", "config"))
        return cls(
            node_name=as_str(dig(data, "metadata", "name")),
            interfaces=_parse_all(dig(current, "interfaces"), Interface.from_dict),
            bridge_mappings=_parse_all(
                dig(current, "ovn", "bridge-mappings"), OvnBridgeMapping.from_dict
            ),
            routes=_parse_all(running + config, RouteEntry.from_dict),
        )


@dataclass(frozen=True)
class TopologyInputs:
    """All resource collections one topology computation consumes.

    ``route_advertisements`` is ``None`` when the RouteAdvertisements API is
    unavailable; VRF-to-CUDN edges are then skipped entirely.
    """

    state: NodeNetworkState = field(default_factory=NodeNetworkState)
    cudns: Tuple[ClusterUserDefinedNetwork, ...] = ()
    udns: Tuple[UserDefinedNetwork, ...] = ()
    nads: Tuple[NetworkAttachmentDefinition, ...] = ()
    route_advertisements: Optional[Tuple[RouteAdvertisements, ...]] = ()

    @property
    def interfaces(self) -> Tuple[Interface, ...]:
        return self.state.interfaces

    @property
    def bridge_mappings(self) -> Tuple[OvnBridgeMapping, ...]:
        return self.state.bridge_mappings

    @classmethod
    def from_resources(
        cls,
        node_network_state: Any = None,
        cudns: Optional[Iterable[Any]] = None,
        udns: Optional[Iterable[Any]] = None,
        nads: Optional[Iterable[Any]] = None,
        route_advertisements: Optional[Iterable[Any]] = (),
    ) -> "TopologyInputs":
        """Build inputs from raw resource mappings as returned by the API server."""
        ras: Optional[Tuple[RouteAdvertisements, ...]] = None
        if route_advertisements is not None:
            ras = _parse_all(list(route_advertisements), RouteAdvertisements.from_dict)
        return cls(
            state=NodeNetworkState.from_dict(node_network_state),
            cudns=_parse_all(list(cudns or []), ClusterUserDefinedNetwork.from_dict),
            udns=_parse_all(list(udns or []), UserDefinedNetwork.from_dict),
            nads=_parse_all(list(nads or []), NetworkAttachmentDefinition.from_dict),
            route_advertisements=ras,
        )

    def summary(self) -> List[Tuple[str, int]]:
        """Resource counts, for inspection output."""
        return [
            ("interfaces", len(self.interfaces)),
            ("bridge mappings", len(self.bridge_mappings)),
            ("routes", len(self.state.routes)),
            ("cudns", len(self.cudns)),
            ("udns", len(self.udns)),
            ("nads", len(self.nads)),
            ("route advertisements", len(self.route_advertisements or ())),
        ]
