"""SharePoint source CLI entry points.
This module exposes commands for ingesting lists and inspecting results.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from core.config import SourceConfig, load_env_files
from core.types import SourceRunReport
from store.source_sdk import SharePointSourceClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="sharepoint-source",
        description="Ingest SharePoint Online lists into a local content graph",
    )
    parser.add_argument(
        "--data-root",
        help="Override SHAREPOINT_SOURCE_DATA_ROOT for this command",
    )
    parser.add_argument("--env", help="Load .env.<ENV> before reading configuration")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_ingest_command(subparsers)
    _add_schema_command(subparsers)
    _add_nodes_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the SharePoint source CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    load_env_files(args.env)
    client = _build_client(args.data_root)
    if args.command == "ingest":
        return _run_ingest_command(client, args)
    if args.command == "schema":
        return _run_schema_command(client, args)
    if args.command == "nodes":
        return _run_nodes_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_root: str | None) -> SharePointSourceClient:
    client = SharePointSourceClient(SourceConfig.from_env())
    if data_root:
        return client.with_data_root(data_root)
    return client


def _run_ingest_command(client: SharePointSourceClient, args: argparse.Namespace) -> int:
    """Handle ingest command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code; 1 when any list failed to ingest.
    """
    report = client.ingest(args.settings)
    for outcome in report.outcomes:
        print(
            f"{outcome.site_name}\t"
            f"{outcome.list_title or '-'}\t"
            f"{outcome.node_type or '-'}\t"
            f"{outcome.status}\t"
            f"{outcome.records_emitted}\t"
            f"{outcome.assets_linked}"
        )
    print(_format_summary(report))
    return 1 if any(outcome.status == "failed" for outcome in report.outcomes) else 0


def _run_schema_command(client: SharePointSourceClient, args: argparse.Namespace) -> int:
    """Handle schema command."""
    for definition in client.schema(args.settings):
        print(definition)
    return 0


def _run_nodes_command(client: SharePointSourceClient, args: argparse.Namespace) -> int:
    """Handle nodes command."""
    for node in client.nodes(args.node_type):
        print(f"{node.id}\t{node.node_type}\t{node.parent or '-'}\t{node.content_digest}")
    return 0


def _format_summary(report: SourceRunReport) -> str:
    return (
        f"records={report.records_emitted} "
        f"assets={report.assets_linked} "
        f"diagnostics={len(report.diagnostics)}"
    )


def _add_ingest_command(subparsers: Any) -> None:
    """Register ingest subcommand."""
    parser = subparsers.add_parser("ingest", help="Ingest all lists declared in a settings file")
    parser.add_argument("settings", help="Path to YAML settings file")


def _add_schema_command(subparsers: Any) -> None:
    """Register schema subcommand."""
    parser = subparsers.add_parser("schema", help="Print image link type definitions")
    parser.add_argument("settings", help="Path to YAML settings file")


def _add_nodes_command(subparsers: Any) -> None:
    """Register nodes subcommand."""
    parser = subparsers.add_parser("nodes", help="List nodes from the last ingest")
    parser.add_argument("--type", dest="node_type", help="Only list nodes of this type")
