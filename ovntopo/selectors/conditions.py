"""Label selector evaluation.

Implements Kubernetes ``metav1.LabelSelector`` semantics against a flat label
mapping: every ``matchLabels`` pair must be present with an equal value, and
every ``matchExpressions`` requirement must hold. Supported operators: In,
NotIn, Exists, DoesNotExist. Unknown operators never match.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from ovntopo.types.base import SelectorOperator

if TYPE_CHECKING:
    from .schema import LabelSelector, MatchExpression

__all__ = [
    "evaluate_expression",
    "matches_label_selector",
]


def evaluate_expression(labels: Mapping[str, str], expr: "MatchExpression") -> bool:
    """Evaluate a single ``matchExpressions`` requirement.

    Args:
        labels: Labels of the object being selected.
        expr: Requirement to evaluate.

    Returns:
        True if the requirement holds, False otherwise.
    """
    op = expr.operator

    if op == SelectorOperator.EXISTS.value:
        return expr.key in labels
    if op == SelectorOperator.DOES_NOT_EXIST.value:
        return expr.key not in labels

    label_value = labels.get(expr.key)
    if op == SelectorOperator.IN.value:
        return label_value in expr.values
    if op == SelectorOperator.NOT_IN.value:
        # A missing key satisfies NotIn
        return label_value not in expr.values

    return False


def _evaluate_expressions(
    labels: Mapping[str, str], expressions: Iterable["MatchExpression"]
) -> bool:
    return all(evaluate_expression(labels, expr) for expr in expressions)


def matches_label_selector(
    labels: Mapping[str, str], selector: Optional["LabelSelector"]
) -> bool:
    """Return True if ``labels`` satisfy ``selector``.

    An empty selector (no matchLabels, no matchExpressions) matches every
    object, as in Kubernetes. A ``None`` selector matches nothing.

    Args:
        labels: Labels of the object being selected.
        selector: Parsed label selector, or ``None``.

    Returns:
        True if every matchLabels pair and every matchExpressions
        requirement holds.
    """
    if selector is None:
        return False

    for key, value in selector.match_labels.items():
        if value is None or labels.get(key) != value:
            return False

    return _evaluate_expressions(labels, selector.match_expressions)
