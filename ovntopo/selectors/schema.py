"""Schema definitions for Kubernetes label selectors.

Provides frozen dataclasses for ``metav1.LabelSelector`` as it appears under
``RouteAdvertisements.spec.networkSelectors[].clusterUserDefinedNetworkSelector``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from ovntopo.utils import as_list, as_str, dig


@dataclass(frozen=True)
class MatchExpression:
    """A single ``matchExpressions`` requirement.

    Attributes:
        key: Label key the requirement applies to.
        operator: Raw operator string (In, NotIn, Exists, DoesNotExist).
            Unknown operators are kept and never match.
        values: Operand values for In/NotIn.
    """

    key: str
    operator: str
    values: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> Optional["MatchExpression"]:
        key = as_str(dig(data, "key"))
        operator = as_str(dig(data, "operator"))
        if key is None or operator is None:
            return None
        values = tuple(str(v) for v in as_list(dig(data, "values")) if v is not None)
        return cls(key=key, operator=operator, values=values)


def _match_labels(value: Any) -> Dict[str, Optional[str]]:
    if not isinstance(value, Mapping):
        return {}
    return {str(key): val if isinstance(val, str) else None for key, val in value.items()}


@dataclass(frozen=True)
class LabelSelector:
    """A label selector: ``matchLabels`` AND ``matchExpressions``.

    Attributes:
        match_labels: Exact key/value pairs, all of which must be present.
            A non-string value is kept as ``None`` and never matches.
        match_expressions: Requirements, all of which must hold.
    """

    match_labels: Dict[str, Optional[str]] = field(default_factory=dict)
    match_expressions: Tuple[MatchExpression, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> Optional["LabelSelector"]:
        """Parse a selector mapping; returns ``None`` when ``data`` is not a mapping."""
        if not isinstance(data, dict):
            return None
        expressions = []
        for raw in as_list(data.get("matchExpressions")):
            expr = MatchExpression.from_dict(raw)
            if expr is not None:
                expressions.append(expr)
        return cls(
            match_labels=_match_labels(data.get("matchLabels")),
            match_expressions=tuple(expressions),
        )


@dataclass(frozen=True)
class NetworkSelector:
    """One entry of ``RouteAdvertisements.spec.networkSelectors``.

    Attributes:
        network_selection_type: Raw ``networkSelectionType`` (e.g.
            ``ClusterUserDefinedNetworks`` or ``DefaultNetwork``).
        cudn_selector: Label selector against CUDN labels, when present.
    """

    network_selection_type: Optional[str] = None
    cudn_selector: Optional[LabelSelector] = None

    @classmethod
    def from_dict(cls, data: Any) -> "NetworkSelector":
        return cls(
            network_selection_type=as_str(dig(data, "networkSelectionType")),
            cudn_selector=LabelSelector.from_dict(
                dig(data, "clusterUserDefinedNetworkSelector", "networkSelector")
            ),
        )
