"""Sort/Layout Assigner: deterministic ordering within diagram columns."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Mapping, Sequence, TypeVar

from ovntopo.topology.nodes import TopologyNode
from ovntopo.types.base import Column

T = TypeVar("T")

#: Score assumed for items missing from the gravity map.
DEFAULT_GRAVITY = 10000


def sort_by_gravity(
    items: Iterable[T],
    get_id: Callable[[T], str],
    gravity_by_id: Mapping[str, int],
) -> List[T]:
    """Sort items by ascending gravity, breaking ties by ascending id.

    Args:
        items: Items to sort; not modified.
        get_id: Accessor returning an item's node id.
        gravity_by_id: Scores; missing ids count as ``DEFAULT_GRAVITY``.

    Returns:
        A new list in a total, deterministic order.
    """
    return sorted(
        items,
        key=lambda item: (gravity_by_id.get(get_id(item), DEFAULT_GRAVITY), get_id(item)),
    )


def assign_columns(
    nodes: Sequence[TopologyNode], gravity_by_id: Mapping[str, int]
) -> Dict[Column, List[str]]:
    """Group node ids by column, each column sorted by gravity.

    Columns appear in rendering order; empty columns are omitted.
    """
    by_column: Dict[Column, List[TopologyNode]] = {}
    for node in nodes:
        by_column.setdefault(node.column, []).append(node)
    return {
        column: [n.id for n in sort_by_gravity(by_column[column], lambda n: n.id, gravity_by_id)]
        for column in sorted(by_column)
    }
