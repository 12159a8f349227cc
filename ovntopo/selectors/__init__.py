"""Label selectors and RouteAdvertisements matching.

Usage:
    from ovntopo.selectors import LabelSelector, matches_label_selector

    selector = LabelSelector.from_dict({"matchLabels": {"advertise": "true"}})
    matches_label_selector({"advertise": "true"}, selector)  # True
"""

from .conditions import evaluate_expression, matches_label_selector
from .routes import (
    VRF_NAME_MAX_LEN,
    find_route_advertisement_for_vrf,
    get_cudns_selected_by_route_advertisement,
    get_route_advertisements_matching_cudn,
    route_advertisement_selects_cudn,
)
from .schema import LabelSelector, MatchExpression, NetworkSelector

__all__ = [
    # Schema
    "LabelSelector",
    "MatchExpression",
    "NetworkSelector",
    # Evaluation
    "evaluate_expression",
    "matches_label_selector",
    # RouteAdvertisements
    "VRF_NAME_MAX_LEN",
    "find_route_advertisement_for_vrf",
    "get_cudns_selected_by_route_advertisement",
    "get_route_advertisements_matching_cudn",
    "route_advertisement_selects_cudn",
]
