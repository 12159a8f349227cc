"""YAML loader + schema validation for host resource bundles.

A bundle is one YAML (or JSON) document holding the resources of a single
host, keyed by kind::

    nodeNetworkState: {...}            # NodeNetworkState object
    clusterUserDefinedNetworks: [...]
    userDefinedNetworks: [...]
    networkAttachmentDefinitions: [...]
    routeAdvertisements: [...]         # omit when the API is unavailable
    config: {...}                      # optional TopologyConfig overrides
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import jsonschema
import yaml

from ovntopo.config import TopologyConfig
from ovntopo.logging import get_logger
from ovntopo.model.state import TopologyInputs

logger = get_logger(__name__)

RECOGNIZED_KEYS = frozenset(
    {
        "nodeNetworkState",
        "clusterUserDefinedNetworks",
        "userDefinedNetworks",
        "networkAttachmentDefinitions",
        "routeAdvertisements",
        "config",
    }
)

_LIST_KEYS = (
    "clusterUserDefinedNetworks",
    "userDefinedNetworks",
    "networkAttachmentDefinitions",
    "routeAdvertisements",
)


@lru_cache(maxsize=1)
def _bundle_schema() -> Dict[str, Any]:
    with (
        resources.files("ovntopo.schemas")
        .joinpath("bundle.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def load_bundle_yaml(yaml_str: str) -> Dict[str, Any]:
    """Load and validate a bundle document.

    Args:
        yaml_str: YAML or JSON text.

    Returns:
        The validated bundle mapping; an empty document yields ``{}``.

    Raises:
        ValueError: If the top level is not a mapping, contains unknown keys,
            or a resource section is not a list.
        jsonschema.ValidationError: If the document violates the schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided bundle must map to a dictionary at top-level.")

    extra = set(map(str, data.keys())) - RECOGNIZED_KEYS
    if extra:
        raise ValueError(
            f"Unrecognized top-level key(s) in bundle: {', '.join(sorted(extra))}. "
            f"Allowed keys are {sorted(RECOGNIZED_KEYS)}"
        )

    # Early shape checks for clearer messages than the schema gives
    for key in _LIST_KEYS:
        if data.get(key) is not None and not isinstance(data[key], list):
            raise ValueError(f"'{key}' must be a list")

    jsonschema.validate(data, _bundle_schema())
    return data


def inputs_from_bundle(data: Dict[str, Any]) -> Tuple[TopologyInputs, TopologyConfig]:
    """Convert a validated bundle into topology inputs and configuration.

    A missing or null ``routeAdvertisements`` section means the API is
    unavailable; an empty list means no RouteAdvertisements exist.
    """
    inputs = TopologyInputs.from_resources(
        node_network_state=data.get("nodeNetworkState"),
        cudns=data.get("clusterUserDefinedNetworks"),
        udns=data.get("userDefinedNetworks"),
        nads=data.get("networkAttachmentDefinitions"),
        route_advertisements=data.get("routeAdvertisements"),
    )
    return inputs, TopologyConfig.from_dict(data.get("config"))


def load_bundle(path: Union[str, Path]) -> Tuple[TopologyInputs, TopologyConfig]:
    """Read, validate and convert a bundle file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the bundle is structurally invalid.
        jsonschema.ValidationError: If the bundle violates the schema.
    """
    bundle_path = Path(path)
    data = load_bundle_yaml(bundle_path.read_text(encoding="utf-8"))
    inputs, config = inputs_from_bundle(data)
    logger.debug(
        "Loaded bundle %s: %s",
        bundle_path,
        ", ".join(f"{count} {name}" for name, count in inputs.summary()),
    )
    return inputs, config
