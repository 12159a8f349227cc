"""CUDN/UDN namespace extraction and attachment nodes.

ovn-kubernetes reports the namespaces a network was rendered into only in
the human-readable message of its ``NetworkCreated`` condition, e.g.
``NetworkAttachmentDefinition has been created in following namespaces: [blue, red]``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ovntopo.model.ids import attachment_node_id, cudn_node_id, udn_node_id
from ovntopo.model.resources import (
    ClusterUserDefinedNetwork,
    StatusCondition,
    UserDefinedNetwork,
)

NETWORK_CREATED = "NetworkCreated"

_BRACKETED_RE = re.compile(r"\[(.*?)\]")


@dataclass(frozen=True)
class AttachmentNode:
    """Namespaces a CUDN or UDN is attached to.

    Attributes:
        name: Display name (the network name).
        namespaces: Sorted namespace names.
        cudn: CUDN name, for CUDN-backed attachments.
        udn_id: UDN node id, for UDN-backed attachments.
    """

    name: str
    namespaces: Tuple[str, ...]
    cudn: Optional[str] = None
    udn_id: Optional[str] = None
    type: str = "attachment"

    @property
    def network_node_id(self) -> str:
        """Id of the CUDN/UDN node this attachment hangs off."""
        if self.cudn is not None:
            return cudn_node_id(self.cudn)
        return self.udn_id or ""

    @property
    def node_id(self) -> str:
        return attachment_node_id(self.network_node_id)


def _network_created(conditions: Sequence[StatusCondition]) -> Optional[StatusCondition]:
    for condition in conditions:
        if condition.type == NETWORK_CREATED and condition.status == "True":
            return condition
    return None


def get_network_namespaces(conditions: Sequence[StatusCondition]) -> List[str]:
    """Namespaces listed in the ``NetworkCreated=True`` condition message.

    Returns:
        Trimmed, non-empty namespace names in sorted order; empty when the
        condition is missing, false, or has no bracketed list.
    """
    condition = _network_created(conditions)
    if condition is None or not condition.message:
        return []
    match = _BRACKETED_RE.search(condition.message)
    if not match or not match.group(1):
        return []
    return sorted(ns.strip() for ns in match.group(1).split(",") if ns.strip())


def get_cudn_associated_namespaces(cudn: ClusterUserDefinedNetwork) -> List[str]:
    return get_network_namespaces(cudn.conditions)


def get_udn_associated_namespaces(udn: UserDefinedNetwork) -> List[str]:
    """Namespaces of a UDN; a created UDN without a list uses its own namespace."""
    namespaces = get_network_namespaces(udn.conditions)
    if not namespaces and _network_created(udn.conditions) is not None:
        return [udn.namespace]
    return namespaces


def build_attachment_nodes(
    cudns: Sequence[ClusterUserDefinedNetwork],
    udns: Sequence[UserDefinedNetwork] = (),
) -> List[AttachmentNode]:
    """One attachment node per CUDN/UDN with at least one namespace.

    CUDN attachments come first, each group in input order.
    """
    nodes: List[AttachmentNode] = []
    for cudn in cudns:
        namespaces = get_cudn_associated_namespaces(cudn)
        if namespaces:
            nodes.append(
                AttachmentNode(name=cudn.name, namespaces=tuple(namespaces), cudn=cudn.name)
            )
    for udn in udns:
        namespaces = get_udn_associated_namespaces(udn)
        if namespaces:
            nodes.append(
                AttachmentNode(
                    name=udn.name, namespaces=tuple(namespaces), udn_id=udn_node_id(udn)
                )
            )
    return nodes
