"""Command-line interface for ovntopo."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections import Counter
from dataclasses import replace
from pathlib import Path
from typing import Any, List, NoReturn, Optional, Tuple

from ovntopo.config import TopologyConfig
from ovntopo.io.loader import load_bundle
from ovntopo.logging import get_logger, set_global_log_level
from ovntopo.model.state import TopologyInputs
from ovntopo.topology.highlight import is_edge_highlighted
from ovntopo.topology.view import TopologyView, build_topology_view

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
    max_col_width: Optional[int] = None,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width
        max_col_width: Clip cells longer than this

    Returns:
        Formatted table string, empty when there are no rows
    """
    if not rows:
        return ""

    def clip(val: Any) -> str:
        s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    clipped_headers = [clip(h) for h in headers]
    clipped_rows = [[clip(item) for item in row] for row in rows]

    all_data = [clipped_headers] + clipped_rows
    col_widths = [
        max(max(len(row[i]) for row in all_data), min_width)
        for i in range(len(clipped_headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{item:<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(clipped_headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in clipped_rows)
    return "\n".join(lines)


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    if n == 1:
        return singular
    return plural or (singular + "s")


def _apply_overrides(
    config: TopologyConfig, show_lldp: bool, important: Optional[List[str]]
) -> TopologyConfig:
    if show_lldp:
        config = replace(config, show_lldp_neighbors=True)
    if important:
        config = replace(config, gravity=config.gravity.with_important_nodes(important))
    return config


def _load_view(
    path: Path, show_lldp: bool = False, important: Optional[List[str]] = None
) -> Tuple[TopologyInputs, TopologyView]:
    logger.info(f"Loading bundle from: {path}")
    inputs, config = load_bundle(path)
    config = _apply_overrides(config, show_lldp, important)
    return inputs, build_topology_view(inputs, config)


def _fail(action: str, path: Path, exc: Exception) -> NoReturn:
    if isinstance(exc, FileNotFoundError):
        logger.error(f"Bundle file not found: {path}")
        print(f"ERROR: Bundle file not found: {path}")
    else:
        logger.error(f"Failed to {action}: {type(exc).__name__}: {exc}")
        print(f"ERROR: Failed to {action}: {type(exc).__name__}: {exc}")
    sys.exit(1)


def _show(path: Path, as_json: bool, show_lldp: bool, important: Optional[List[str]]) -> None:
    """Print every column with its nodes in gravity order."""
    try:
        _, view = _load_view(path, show_lldp, important)
    except Exception as e:
        _fail("build topology", path, e)

    if as_json:
        print(json.dumps(view.to_dict(), indent=2))
        return

    for column, node_ids in view.columns.items():
        print(f"\n{column.title.upper()} ({len(node_ids)})")
        print("-" * 30)
        rows = []
        for node_id in node_ids:
            node = view.node(node_id)
            rows.append(
                [
                    node_id,
                    node.label if node else node_id,
                    str(view.gravity.get(node_id, "-")),
                ]
            )
        print(_format_table(["Node", "Label", "Gravity"], rows, max_col_width=48))
    print(f"\n{len(view.edges)} {_plural(len(view.edges), 'edge')}")


def _highlight(path: Path, node_id: str, show_lldp: bool, important: Optional[List[str]]) -> None:
    """Print the nodes and edges upstream and downstream of one node."""
    try:
        _, view = _load_view(path, show_lldp, important)
    except Exception as e:
        _fail("build topology", path, e)

    if node_id not in view.graph and view.node(node_id) is None:
        logger.error(f"Unknown node: {node_id}")
        print(f"ERROR: Unknown node: {node_id}")
        sys.exit(1)

    highlighted = view.highlight(node_id)
    nodes = [n for n in view.graph.nodes if n in highlighted] or [node_id]
    edges = [e for e in view.edges if is_edge_highlighted(highlighted, e.source, e.target)]

    print(f"\nHIGHLIGHTED PATH: {node_id}")
    print("-" * 30)
    print(f"Nodes ({len(nodes)}):")
    for n in nodes:
        print(f"  {n}")
    print(f"Edges ({len(edges)}):")
    for edge in edges:
        print(f"  {edge.source} -> {edge.target}")


def _inspect(path: Path, show_lldp: bool, important: Optional[List[str]]) -> None:
    """Print resource counts, edge rules, LLDP availability and warnings."""
    try:
        inputs, view = _load_view(path, show_lldp, important)
    except Exception as e:
        _fail("inspect bundle", path, e)
    logger.info("Bundle validated and loaded successfully")

    print("\n" + "=" * 60)
    print("OVNTOPO BUNDLE INSPECTION")
    print("=" * 60)

    print("\nRESOURCES")
    print("-" * 30)
    rows = [[name, str(count)] for name, count in inputs.summary()]
    if inputs.route_advertisements is None:
        rows[-1][1] = "unavailable"
    print(_format_table(["Resource", "Count"], rows))

    print("\nEDGES")
    print("-" * 30)
    by_kind = Counter(edge.kind for edge in view.edges)
    print(_format_table(["Rule", "Edges"], [[k, str(v)] for k, v in sorted(by_kind.items())]))
    if not by_kind:
        print("   (none)")

    print(f"\nLLDP neighbors available: {'yes' if view.lldp_available else 'no'}")

    print(f"\nWARNINGS ({len(view.warnings)})")
    print("-" * 30)
    if view.warnings:
        print(
            _format_table(
                ["Code", "Subject", "Message"],
                [[w.code, w.subject, w.message] for w in view.warnings],
                max_col_width=72,
            )
        )
    else:
        print("   (none)")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``ovntopo`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="ovntopo",
        description="Compute OVN-Kubernetes host network topology from resource bundles.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{show,highlight,inspect}",
        help="Available commands",
    )

    show_parser = subparsers.add_parser("show", help="Show columns in gravity order")
    show_parser.add_argument("bundle", type=Path, help="Path to resource bundle YAML/JSON")
    show_parser.add_argument(
        "--json", action="store_true", help="Print the full view as JSON"
    )

    highlight_parser = subparsers.add_parser(
        "highlight", help="Show the path through one node"
    )
    highlight_parser.add_argument("bundle", type=Path, help="Path to resource bundle YAML/JSON")
    highlight_parser.add_argument("node", help="Node id to highlight")

    inspect_parser = subparsers.add_parser(
        "inspect", help="Validate a bundle and summarize it"
    )
    inspect_parser.add_argument("bundle", type=Path, help="Path to resource bundle YAML/JSON")

    for p in (show_parser, highlight_parser, inspect_parser):
        p.add_argument(
            "--show-lldp",
            action="store_true",
            help="Include LLDP neighbor nodes and edges",
        )
        p.add_argument(
            "--important",
            "-i",
            action="append",
            default=None,
            metavar="NODE",
            help="Important node id (repeatable); replaces the configured set",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "show":
        _show(args.bundle, args.json, args.show_lldp, args.important)
    elif args.command == "highlight":
        _highlight(args.bundle, args.node, args.show_lldp, args.important)
    elif args.command == "inspect":
        _inspect(args.bundle, args.show_lldp, args.important)


if __name__ == "__main__":
    main()
