"""Configuration classes for ovntopo components."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, FrozenSet, Iterable, Mapping, Optional, Tuple

#: The default primary uplink bridge on OpenShift/OVN-Kubernetes hosts.
DEFAULT_IMPORTANT_NODES: FrozenSet[str] = frozenset({"br-ex"})


@dataclass(frozen=True)
class GravityConfig:
    """Constants of the gravity scorer. Lower scores render first."""

    # Nodes the layout gravitates around
    important_nodes: FrozenSet[str] = DEFAULT_IMPORTANT_NODES

    # Path-derived score: base - length * length_weight - position - important_bonus
    path_base: int = 1000
    path_length_weight: int = 100
    important_bonus: int = 500

    # Nodes on no discovered path: fallback_base + connection count
    fallback_base: int = 10000

    # Proximity to an important node: (threshold, reduction) tiers, first match wins
    proximity_depth: int = 5
    proximity_tiers: Tuple[Tuple[int, int], ...] = ((10000, 5000), (1000, 500), (100, 50))
    proximity_default: int = 200
    important_score: int = 50
    enslaved_score: int = 25

    # Secondary overlay kinds (UDNs) sort after primary ones
    secondary_penalty: int = 50000

    # Optional cap on DFS path length; None keeps the search exhaustive
    max_path_depth: Optional[int] = None

    def with_important_nodes(self, nodes: Iterable[str]) -> "GravityConfig":
        """Return a copy with a different important node set."""
        return replace(self, important_nodes=frozenset(nodes))


@dataclass(frozen=True)
class TopologyConfig:
    """Configuration of one topology computation.

    Attributes:
        show_lldp_neighbors: Include LLDP neighbor nodes and their edges.
        gravity: Gravity scorer constants.
    """

    show_lldp_neighbors: bool = False
    gravity: GravityConfig = field(default_factory=GravityConfig)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "TopologyConfig":
        """Build a config from the optional ``config`` section of a bundle.

        Recognized keys: ``showLldpNeighbors`` (bool), ``importantNodes``
        (list of node ids), ``maxPathDepth`` (int). Unset keys keep defaults.
        """
        if not data:
            return cls()
        gravity = GravityConfig()
        important = data.get("importantNodes")
        if important is not None:
            gravity = gravity.with_important_nodes(str(n) for n in important)
        max_depth = data.get("maxPathDepth")
        if max_depth is not None:
            gravity = replace(gravity, max_path_depth=int(max_depth))
        return cls(
            show_lldp_neighbors=bool(data.get("showLldpNeighbors", False)),
            gravity=gravity,
        )


# Default configuration instance (immutable)
DEFAULT_CONFIG = TopologyConfig()
