"""Sheetport CLI entry points.
This module exposes commands to inspect import plans and run imports.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Any, Sequence

from core.config import SheetportConfig
from core.constants import DEFAULT_SERIALIZATION_FILE_NAME
from core.errors import SheetportError
from core.import_plan import ImportPlan, load_import_plan
from core.types import SUPPORTED_SERIALIZATION_FORMATS, SerializationOptions
from ingest.observer import LoggingImportObserver
from store.import_sdk import SheetportClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="sheetport", description="Spreadsheet page importer")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_pages_command(subparsers)
    _add_import_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Sheetport CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        plan = load_import_plan(args.plan)
        if args.command == "pages":
            return _run_pages_command(plan)
        if args.command == "import":
            return _run_import_command(SheetportClient(SheetportConfig.from_env()), plan, args)
    except SheetportError as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _run_pages_command(plan: ImportPlan) -> int:
    """Handle pages command.

    Args:
        plan: Loaded import plan.

    Returns:
        Exit code.
    """
    for target in plan.targets:
        print(
            f"{target.field_name}\t"
            f"{target.page_name}\t"
            f"{target.container_kind}\t"
            f"{target.element_type.__name__}"
        )
    return 0


def _run_import_command(
    client: SheetportClient,
    plan: ImportPlan,
    args: argparse.Namespace,
) -> int:
    """Handle import command.

    Args:
        client: SDK client.
        plan: Loaded import plan.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    plan = plan.select(args.only or [])
    if args.document_id:
        plan = replace(plan, document_id=args.document_id)
    plan = replace(plan, serialization=_resolve_serialization(client, plan, args))
    run = client.run_plan(plan, LoggingImportObserver(), serialize=not args.no_serialize)
    if not run.result.succeeded:
        print(f"import_{run.result.state}={run.result.message}")
        return 1
    print(f"imported_fields={','.join(run.result.imported_fields)}")
    print(f"output_path={run.output_path or '-'}")
    return 0


def _resolve_serialization(
    client: SheetportClient,
    plan: ImportPlan,
    args: argparse.Namespace,
) -> SerializationOptions | None:
    """Apply CLI output overrides on top of plan serialization settings."""
    base = plan.serialization
    if base is None and not (args.output_dir or args.file_name or args.format):
        return None
    if base is None:
        base = SerializationOptions(
            output_dir=str(client.config.output_dir),
            file_name=DEFAULT_SERIALIZATION_FILE_NAME,
        )
    return SerializationOptions(
        output_dir=args.output_dir or base.output_dir,
        file_name=args.file_name or base.file_name,
        format=args.format or base.format,
    )


def _add_pages_command(subparsers: Any) -> None:
    """Register pages subcommand."""
    parser = subparsers.add_parser("pages", help="List target fields and pages of a plan")
    parser.add_argument("plan", help="YAML import plan file")


def _add_import_command(subparsers: Any) -> None:
    """Register import subcommand."""
    parser = subparsers.add_parser("import", help="Import plan pages and serialize content")
    parser.add_argument("plan", help="YAML import plan file")
    parser.add_argument(
        "--only",
        action="append",
        metavar="FIELD",
        help="Import only this target field; repeat to select several",
    )
    parser.add_argument("--document-id", help="Override the plan document id")
    parser.add_argument("--output-dir", help="Override the serialization output directory")
    parser.add_argument("--file-name", help="Override the serialization file name")
    parser.add_argument(
        "--format",
        choices=SUPPORTED_SERIALIZATION_FORMATS,
        help="Override the serialization format",
    )
    parser.add_argument(
        "--no-serialize",
        action="store_true",
        help="Skip writing the content file after import",
    )
