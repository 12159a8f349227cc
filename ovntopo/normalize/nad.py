"""NetworkAttachmentDefinition config parsing.

``spec.config`` is a CNI config document. The API delivers it as a JSON
string, but some clients hand over an already-parsed object, and hand-edited
configs are not always valid JSON. Parsing therefore degrades in three
steps: mapping as-is, ``json.loads``, then regex extraction of the handful of
keys the topology needs.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple

from ovntopo.model.ids import is_ovn_mapping_id, ovn_mapping_node_id

if TYPE_CHECKING:
    from ovntopo.model.resources import (
        ClusterUserDefinedNetwork,
        NadConfig,
        NetworkAttachmentDefinition,
    )

#: CNI plugin types that attach to a host bridge by name.
BRIDGE_CNI_TYPES = frozenset({"bridge", "cnv-bridge"})

_TYPE_RE = re.compile(r'"type"\s*:\s*"([^"]+)"')
_BRIDGE_RE = re.compile(r'"bridge"\s*:\s*"([^"]+)"')
_PHYSNET_RE = re.compile(r'"physicalNetworkName"\s*:\s*"([^"]+)"')


class ConfigSource(str, Enum):
    """How the upstream ids of a NAD were derived."""

    PARSED = "parsed"
    REGEX_FALLBACK = "regex-fallback"
    NONE = "none"


@dataclass(frozen=True)
class NadUpstream:
    """Upstream node ids of a NAD plus how they were obtained."""

    node_ids: Tuple[str, ...] = ()
    source: ConfigSource = ConfigSource.NONE


def parse_nad_config(config: "NadConfig") -> Optional[Dict[str, Any]]:
    """Parse a NAD ``spec.config``.

    Args:
        config: JSON string, already-parsed mapping, or ``None``.

    Returns:
        The config mapping, or ``None`` if absent, not JSON, or not a JSON
        object at top level.
    """
    if config is None:
        return None
    if isinstance(config, dict):
        return config
    if not isinstance(config, str):
        return None
    try:
        parsed = json.loads(config)
    except (ValueError, TypeError):
        return None
    return parsed if isinstance(parsed, dict) else None


def get_nad_network_name(nad: "NetworkAttachmentDefinition") -> Optional[str]:
    """Logical network name (``config.name``) of a NAD, if present."""
    config = parse_nad_config(nad.config)
    if config is not None and isinstance(config.get("name"), str):
        return config["name"]
    return None


def find_cudn_name_for_nad(
    nad: "NetworkAttachmentDefinition", cudns: Sequence["ClusterUserDefinedNetwork"]
) -> Optional[str]:
    """Name of the CUDN backing a NAD.

    ovn-kubernetes renders one NAD per selected namespace named after the
    CUDN; hand-written NADs may instead reference it by ``config.name``. A
    direct name match takes precedence.
    """
    for cudn in cudns:
        if cudn.name == nad.name:
            return cudn.name
    network_name = get_nad_network_name(nad)
    if network_name:
        for cudn in cudns:
            if cudn.name == network_name:
                return cudn.name
    return None


def _upstream_from_fields(
    nad_type: Optional[str], bridge: Optional[str], physnet: Optional[str]
) -> List[str]:
    upstream: List[str] = []
    if nad_type in BRIDGE_CNI_TYPES and bridge:
        upstream.append(bridge)
    if physnet:
        upstream.append(ovn_mapping_node_id(physnet))
    return upstream


def _regex_group(pattern: "re.Pattern[str]", text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(1) if match else None


def resolve_nad_upstream(nad: "NetworkAttachmentDefinition") -> NadUpstream:
    """Derive the upstream node ids of a NAD.

    A bridge-type NAD hangs off its host bridge; an OVN localnet NAD hangs
    off the ``ovn-<physicalNetworkName>`` mapping node. When the parsed
    config yields nothing and the raw config is a string, the keys are
    extracted by regex instead.
    """
    config = parse_nad_config(nad.config)
    if config is not None:
        nad_type = config.get("type") if isinstance(config.get("type"), str) else None
        bridge = config.get("bridge") if isinstance(config.get("bridge"), str) else None
        physnet = config.get("physicalNetworkName")
        upstream = _upstream_from_fields(
            nad_type, bridge, physnet if isinstance(physnet, str) else None
        )
        if upstream:
            return NadUpstream(tuple(upstream), ConfigSource.PARSED)

    raw = nad.config if isinstance(nad.config, str) else ""
    if not raw:
        return NadUpstream()
    upstream = _upstream_from_fields(
        _regex_group(_TYPE_RE, raw),
        _regex_group(_BRIDGE_RE, raw),
        _regex_group(_PHYSNET_RE, raw),
    )
    if not upstream:
        return NadUpstream()
    return NadUpstream(tuple(upstream), ConfigSource.REGEX_FALLBACK)


def get_nad_upstream_node_ids(nad: "NetworkAttachmentDefinition") -> List[str]:
    """Upstream node ids of a NAD: bridge name and/or ``ovn-<physnet>``."""
    return list(resolve_nad_upstream(nad).node_ids)


def get_nad_upstream_node_ids_for_edges(
    nad: "NetworkAttachmentDefinition", cudns: Sequence["ClusterUserDefinedNetwork"]
) -> List[str]:
    """Upstream ids used for edges.

    A CUDN-backed NAD already inherits the mapping lineage through its CUDN,
    so ``ovn-*`` upstream ids are dropped and only bridge ids remain.
    """
    upstream = get_nad_upstream_node_ids(nad)
    if find_cudn_name_for_nad(nad, cudns):
        return [node_id for node_id in upstream if not is_ovn_mapping_id(node_id)]
    return upstream
