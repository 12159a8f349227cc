"""Total accessors for loosely-typed Kubernetes resource mappings.

Resources arrive as parsed JSON/YAML whose optional fields may be absent,
``None`` or of an unexpected type. These helpers return a neutral value in
every such case so callers never need to guard against ``TypeError``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional


def dig(obj: Any, *keys: str) -> Any:
    """Return the value at a nested key path, or ``None`` if any hop is missing.

    Args:
        obj: Root object, usually a mapping.
        *keys: Keys to follow in order.

    Returns:
        The nested value, or ``None``.

    Examples:
        >>> dig({"spec": {"network": {"topology": "Layer2"}}}, "spec", "network", "topology")
        'Layer2'
        >>> dig({"spec": None}, "spec", "network") is None
        True
    """
    current = obj
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def as_str(value: Any) -> Optional[str]:
    """Return ``value`` if it is a non-empty string, else ``None``."""
    if isinstance(value, str) and value:
        return value
    return None


def as_list(value: Any) -> List[Any]:
    """Return ``value`` as a list; non-list values become an empty list."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def as_mapping(value: Any) -> Dict[str, Any]:
    """Return a shallow ``dict`` copy of a mapping; anything else becomes ``{}``."""
    if isinstance(value, Mapping):
        return dict(value)
    return {}


def as_str_dict(value: Any) -> Dict[str, str]:
    """Return the string-to-string entries of a mapping (labels, matchLabels)."""
    if not isinstance(value, Mapping):
        return {}
    return {
        str(key): str(val)
        for key, val in value.items()
        if val is not None and not isinstance(val, (Mapping, list))
    }
