"""Shared enums for ovntopo."""

from ovntopo.types.base import (
    Column,
    CudnTopology,
    InterfaceState,
    InterfaceType,
    NodeKind,
    SelectorOperator,
)

__all__ = [
    "Column",
    "CudnTopology",
    "InterfaceState",
    "InterfaceType",
    "NodeKind",
    "SelectorOperator",
]
