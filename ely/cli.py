#!/usr/bin/env python
"""
Main CLI entry point for the ely tool.

Sub-commands:
  ds       directory size report (largest subdirectories first)
  exec     run a shell command in every qualifying subdirectory
  pack     build, pack and copy the archive path to the clipboard
  help     show help
  version  show the installed version
"""
from __future__ import annotations

import argparse
import json as _json
import logging
import time
from dataclasses import replace
from typing import Sequence

from . import __version__
from .clipboard import copy_to_clipboard
from .config import (
    DEFAULT_DIRECTORY,
    DEFAULT_MAX_DEPTH,
    DEFAULT_TOP_COUNT,
    exec_depth_limit,
    load_settings,
    size_depth_limit,
)
from .dispatch import SequentialDispatcher, run_in_directory, summarize
from .errors import ElyError, PackStepError
from .models import ScanConfiguration, SubDirectory
from .pack import run_pack
from .probe import validate_directory
from .report import exec_report_payload, rank_nodes, render_report, size_report_payload, total_size
from .size_utils import format_bytes
from .walker import find_targets, scan
from . import ui

logger = logging.getLogger(__name__)


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{raw}'")
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a value >= 0, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ely", description="A collection of useful CLI tools.")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- ds command ---
    ds_parser = subparsers.add_parser("ds", help="Show directory sizes, largest first.")
    ds_parser.add_argument(
        "directory",
        nargs="?",
        default=DEFAULT_DIRECTORY,
        help="Directory to analyze (defaults to current directory).",
    )
    ds_parser.add_argument(
        "-d",
        "--max-depth",
        "--maxDepth",
        dest="max_depth",
        type=_non_negative_int,
        default=DEFAULT_MAX_DEPTH,
        help="Maximum depth to traverse. 0 for unlimited (default: %(default)s).",
    )
    ds_parser.add_argument(
        "-n",
        "--top-count",
        "--topCount",
        dest="top_count",
        type=_non_negative_int,
        default=DEFAULT_TOP_COUNT,
        help="Number of top directories to show (default: %(default)s).",
    )
    ds_parser.add_argument("-j", "--json", action="store_true", help="Output JSON instead of the text report.")

    # --- exec command ---
    exec_parser = subparsers.add_parser("exec", help="Execute a command in each subdirectory.")
    exec_parser.add_argument("exec_command", metavar="command", help="Shell command to run in each subdirectory.")
    exec_parser.add_argument(
        "-p",
        "--directory",
        default=DEFAULT_DIRECTORY,
        help="Directory to scan (defaults to current directory).",
    )
    exec_parser.add_argument(
        "-d",
        "--max-depth",
        "--maxDepth",
        dest="max_depth",
        type=_non_negative_int,
        default=DEFAULT_MAX_DEPTH,
        help="Maximum depth to traverse. 0 for immediate children only (default: %(default)s).",
    )
    exec_parser.add_argument(
        "-k",
        "--package-name",
        "--packageName",
        dest="package_name",
        default=None,
        help="Only run in directories containing a package manifest.",
    )
    exec_parser.add_argument("-j", "--json", action="store_true", help="Output JSON instead of the text report.")

    # --- pack command ---
    pack_parser = subparsers.add_parser("pack", help="Build, pack and copy the archive path to the clipboard.")
    pack_parser.add_argument(
        "-p",
        "--directory",
        default=DEFAULT_DIRECTORY,
        help="Directory to build and pack (defaults to current directory).",
    )
    pack_parser.add_argument("-b", "--build-command", default=None, help="Override the build command.")
    pack_parser.add_argument("-c", "--pack-command", default=None, help="Override the pack command.")

    subparsers.add_parser("help", help="Show help information.")
    subparsers.add_parser("version", help="Show the version.")
    return parser


def _run_ds(args: argparse.Namespace) -> int:
    root = validate_directory(args.directory)
    config = ScanConfiguration(
        root_directory=root,
        depth_limit=size_depth_limit(args.max_depth),
        top_count=args.top_count,
    )

    start = time.perf_counter()
    if not args.json:
        ui.echo(f"📂 Scanning directory: {root}")
        ui.echo(f"🔍 Max depth: {config.depth_limit.describe()}")
        ui.echo()

    nodes = scan(config)
    elapsed = ui.elapsed_ms(start)

    # stdout carries only the JSON document in --json mode.
    if args.json:
        logger.info("Discovered %d directories", len(nodes))
        print(_json.dumps(size_report_payload(config, nodes, elapsed), indent=2, ensure_ascii=False))
        return 0

    ui.log_info(f"Discovered {len(nodes)} directories")

    ranked = rank_nodes(nodes, config.top_count)
    ui.echo(f"📊 Top {config.top_count} directories by size:", style="ui.header")
    ui.echo()
    ui.echo_lines(render_report(ranked))
    ui.echo()
    ui.echo(f"📊 Total directory size: {format_bytes(total_size(nodes))}")
    ui.echo()
    ui.echo(f"⏱️  Scan completed in {elapsed}ms")
    return 0


def _run_exec(args: argparse.Namespace) -> int:
    settings = load_settings()
    root = validate_directory(args.directory)
    config = ScanConfiguration(
        root_directory=root,
        depth_limit=exec_depth_limit(args.max_depth),
        skip_dirs=settings.skip_dirs,
        marker_file=settings.manifest_file if args.package_name else None,
    )
    command = args.exec_command
    quiet = args.json

    start = time.perf_counter()
    if not quiet:
        ui.echo(f"📂 Scanning directory: {root}")
        ui.echo(f"🔍 Max depth: {config.depth_limit.describe()}")
        ui.echo(f"⚡ Command: {command}")
        if args.package_name:
            ui.echo(f"📦 Package: {args.package_name}")
        ui.echo()

    targets = find_targets(config)

    def on_start(target: SubDirectory) -> None:
        if not quiet:
            ui.echo(f"🔄 Processing: {target.relative_path}")

    if not quiet:
        ui.echo(f"Found {len(targets)} directories to process")
        ui.echo()

    dispatcher = SequentialDispatcher(runner=run_in_directory)
    results = dispatcher.dispatch_all(targets, command, on_start=on_start)
    summary = summarize(results)
    elapsed = ui.elapsed_ms(start)

    if quiet:
        print(_json.dumps(exec_report_payload(command, results, summary, elapsed), indent=2, ensure_ascii=False))
        return 0

    ui.echo()
    ui.echo("📊 Results:", style="ui.header")
    ui.echo()
    for target, result in results:
        if result.success:
            ui.log_success(target.relative_path)
        else:
            ui.log_error(target.relative_path)
            if result.error_message:
                ui.echo(ui.indent_block(f"Error: {result.error_message}"))
        if result.output:
            ui.echo(ui.indent_block(result.output))
        ui.echo()

    ui.echo(f"📈 Summary: {summary}")
    ui.echo(f"⏱️  Completed in {elapsed}ms")
    return 0


def _run_pack(args: argparse.Namespace) -> int:
    settings = load_settings()
    overrides = {}
    if args.build_command:
        overrides["build_command"] = args.build_command
    if args.pack_command:
        overrides["pack_command"] = args.pack_command
    if overrides:
        settings = replace(settings, **overrides)

    root = validate_directory(args.directory)
    messages = {
        "clean": f"🧹 Removing existing {settings.archive_suffix} files...",
        "build": f"🔨 Building project... ⚡ Running: {settings.build_command}",
        "pack": f"📦 Packing project... ⚡ Running: {settings.pack_command}",
        "locate": f"🔍 Finding latest {settings.archive_suffix} archive...",
    }

    ui.echo(f"📦 Building and packing in: {root}")
    ui.echo()

    def on_stage(stage: str, detail: str | None) -> None:
        if stage == "removed":
            ui.echo(f"   Removed: {detail}")
        elif stage in messages:
            ui.echo(messages[stage])

    try:
        outcome = run_pack(
            args.directory,
            settings,
            on_stage=on_stage,
            runner=run_in_directory,
            copier=copy_to_clipboard,
        )
    except PackStepError as e:
        ui.log_error(str(e))
        return 1

    ui.echo(f"📄 Found archive: {outcome.archive.name}")
    if outcome.copied:
        ui.echo(f"📋 Copied to clipboard: {outcome.archive}")
    else:
        ui.log_warning(f"Could not copy to clipboard: {outcome.clipboard_error}")
        ui.echo(f"📄 Archive path: {outcome.archive}")
    ui.echo()
    ui.log_success("Pack command completed successfully!")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    ui.set_verbose(args.verbose)

    if args.command == "help":
        parser.print_help()
        return 0
    if args.command == "version":
        print(f"ely {__version__}")
        return 0

    handlers = {"ds": _run_ds, "exec": _run_exec, "pack": _run_pack}
    try:
        return handlers[args.command](args)
    except ElyError as e:
        ui.log_error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        ui.log_warning("Interrupted.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
