#!/usr/bin/env python3
# src/qiuye_ui/cli/__init__.py
"""
CLI entry point for qiuye-ui.

Runs the registry MCP server over stdio (default), performs a one-shot
registry check, or synchronizes local registry descriptors.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx

from ..config import RegistryConfig
from ..constants import REGISTRY_BASE_ENV_VAR, REGISTRY_MANIFEST_NAME
from ..errors import RegistryError
from ..fetcher import descriptor_url, fetch_descriptor
from ..index import build_index
from ..queries import strip_file_content
from ..serialization import to_json_text
from ..server import create_registry_server
from ..sync import SyncReport, sync_registry

logger = logging.getLogger(__name__)

LOG_LEVELS = ["debug", "info", "warning", "error", "critical"]
COMMANDS = ["mcp", "sync"]
ERROR_PREFIX = "qiuye-ui CLI error:"


def setup_logging(debug: bool = False, stderr: bool = True, log_level: str = "warning") -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if debug else getattr(logging, log_level.upper(), logging.WARNING)
    stream = sys.stderr if stderr else sys.stdout

    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", stream=stream)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="qiuye-ui",
        description="QiuYe UI registry CLI: MCP server, registry check and descriptor sync",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Usage:
  qiuye-ui mcp [--registry-base <url>]
  qiuye-ui --check [--registry-base <url>]
  qiuye-ui sync [--dir registry] [--source-base .] [--dry]

Examples:
  qiuye-ui mcp
  qiuye-ui mcp --registry-base http://localhost:3000/registry
  qiuye-ui --check

Environment Variables:
  {REGISTRY_BASE_ENV_VAR}  Registry base URL (overridden by --registry-base)
        """,
    )

    parser.add_argument("command", nargs="?", default="mcp", help="mcp (default) or sync")
    parser.add_argument("--check", action="store_true", help="Build the index, fetch one sample item and exit")
    parser.add_argument(
        "--registry-base", "--base", dest="registry_base", default=None, help="Registry base URL"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=LOG_LEVELS,
        help="Logging level (default: warning)",
    )

    sync_group = parser.add_argument_group("sync options")
    sync_group.add_argument(
        "--dir", dest="registry_dir", default="registry", help="Registry directory to scan (default: registry)"
    )
    sync_group.add_argument("--source-base", default=".", help="Root of the component sources (default: .)")
    sync_group.add_argument("--dry", action="store_true", help="Report changes without writing")

    return parser


async def run_check(config: RegistryConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
    """Print the index and one content-stripped sample item."""
    index = await build_index(config, transport=transport)

    sample_name = index[0]["name"] if index else config.fallback_names[0]
    item = await fetch_descriptor(config, sample_name, transport=transport)

    print(f"registry base: {config.registry_base}")
    print(f"index items: {len(index)}")
    print("\n".join(f"- {entry['name']}" for entry in index))
    print("\n-- sample item --")
    print(f"GET {descriptor_url(config, sample_name)}")
    print(to_json_text(strip_file_content(item)))


def print_sync_report(report: SyncReport) -> None:
    print(f"Registry directory: {report.registry_dir.resolve()}")
    print(f"Component sources: {report.source_base.resolve()}")
    if report.dry_run:
        print("Dry run: no files will be written")

    for result in report.results:
        print(f"\n{result.path}")
        if result.error is not None:
            print(f"- failed: {result.error}")
        for detail in result.details:
            print(f"- {detail}")

    if report.manifest_path is not None:
        verb = "Would write" if report.dry_run else "Wrote"
        print(f"\n{verb} {report.manifest_path} ({report.manifest_items} items)")
    if report.manifest_error is not None:
        print(f"\nFailed to generate {REGISTRY_MANIFEST_NAME}: {report.manifest_error}")

    verb = "to update" if report.dry_run else "updated"
    print(f"\nDone. Descriptors: {report.total}, {verb}: {report.updated}, failed: {report.failed}")


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.check and args.command not in COMMANDS:
        parser.print_help()
        sys.exit(1)

    # stdout carries JSON-RPC in mcp mode, so logs always go to stderr
    setup_logging(debug=args.debug, stderr=True, log_level=args.log_level)

    try:
        config = RegistryConfig.from_sources(args.registry_base)

        if args.check:
            asyncio.run(run_check(config))
        elif args.command == "sync":
            report = sync_registry(Path(args.registry_dir), Path(args.source_base), dry_run=args.dry)
            print_sync_report(report)
            if report.manifest_error is not None:
                sys.exit(1)
        else:
            server = create_registry_server(config)
            print(f"QiuYe UI MCP Server (stdio) is running... (base={config.registry_base})", file=sys.stderr)
            server.run(stdio=True, debug=args.debug, log_level=args.log_level)
    except RegistryError as e:
        print(f"{ERROR_PREFIX} {e.to_message()}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"{ERROR_PREFIX} {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
