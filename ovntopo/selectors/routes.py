"""RouteAdvertisements matching against CUDNs and VRF interfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

from .conditions import matches_label_selector

if TYPE_CHECKING:
    from ovntopo.model.resources import ClusterUserDefinedNetwork, RouteAdvertisements

#: Linux limits interface names (and therefore VRF names) to 15 characters.
VRF_NAME_MAX_LEN = 15

__all__ = [
    "VRF_NAME_MAX_LEN",
    "find_route_advertisement_for_vrf",
    "get_cudns_selected_by_route_advertisement",
    "get_route_advertisements_matching_cudn",
    "route_advertisement_selects_cudn",
]


def route_advertisement_selects_cudn(
    route_advertisement: "RouteAdvertisements", cudn: "ClusterUserDefinedNetwork"
) -> bool:
    """Return True if the RA selects the CUDN.

    Only Layer2 and Layer3 CUDNs can be advertised; a Localnet CUDN is never
    selected regardless of its labels. Otherwise at least one network
    selector's CUDN label selector must match the CUDN labels.
    """
    if not cudn.topology.is_routed:
        return False
    return any(
        matches_label_selector(cudn.labels, selector.cudn_selector)
        for selector in route_advertisement.network_selectors
    )


def get_route_advertisements_matching_cudn(
    route_advertisements: Optional[Sequence["RouteAdvertisements"]],
    cudn: "ClusterUserDefinedNetwork",
) -> List["RouteAdvertisements"]:
    """All RAs that select ``cudn``, in input order."""
    if not route_advertisements:
        return []
    return [ra for ra in route_advertisements if route_advertisement_selects_cudn(ra, cudn)]


def find_route_advertisement_for_vrf(
    route_advertisements: Optional[Sequence["RouteAdvertisements"]], vrf_name: str
) -> Optional["RouteAdvertisements"]:
    """Find the RA that owns a VRF.

    ovn-kubernetes names the VRF after the RA, truncated to the kernel's
    interface name limit. The first RA whose full or truncated name equals
    ``vrf_name`` wins; two RAs sharing a 15-character prefix are not
    disambiguated.

    Args:
        route_advertisements: Candidate RAs, or ``None`` when unavailable.
        vrf_name: Name of the VRF interface.

    Returns:
        The first matching RA, or ``None``.
    """
    if not route_advertisements:
        return None
    for ra in route_advertisements:
        if ra.name == vrf_name or ra.name[:VRF_NAME_MAX_LEN] == vrf_name:
            return ra
    return None


def get_cudns_selected_by_route_advertisement(
    route_advertisement: Optional["RouteAdvertisements"],
    cudns: Sequence["ClusterUserDefinedNetwork"],
) -> List["ClusterUserDefinedNetwork"]:
    """CUDNs selected by ``route_advertisement``, in input order."""
    if route_advertisement is None:
        return []
    return [cudn for cudn in cudns if route_advertisement_selects_cudn(route_advertisement, cudn)]
