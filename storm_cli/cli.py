"""ST🌀RM Stack advanced CLI.

Usage::

    python -m storm_cli info
    python -m storm_cli make-module book
    python -m storm_cli make-module category --plural categories --controller-only
    python -m storm_cli rebuild-routes
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.panel import Panel

from storm_cli.config import Config, LoggerMode
from storm_cli.orchestrator import ModuleArgs, ModuleOrchestrator
from storm_cli.project import check_project, find_project_root, get_cli_version
from storm_cli.scaffolder import rebuild_routes
from storm_cli.utils import (
    console,
    format_duration,
    print_error,
    print_success,
    print_summary_table,
)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storm-cli",
        description="ST🌀RM Stack CLI -- module scaffolding for ST🌀RM projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  storm-cli info\n"
            "  storm-cli make-module book\n"
            "  storm-cli make-module category --plural categories --controller-only\n"
            "  storm-cli rebuild-routes\n"
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_cli_version()}",
    )
    parser.add_argument(
        "--project-dir", "-C",
        default=None,
        help="Project directory (default: nearest parent with strm_config/, else cwd)",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only print errors and the final result",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("info", help="Check that the directory is a valid ST🌀RM project")

    make = sub.add_parser("make-module", help="Create a module (model, controller, routes, pages)")
    make.add_argument("name", help="Module name, e.g. 'book'")
    make.add_argument(
        "--plural", "-p",
        default=None,
        help="Plural used for routes and the pages folder (default: the name itself)",
    )
    make.add_argument(
        "--controller-only", "-c",
        action="store_true",
        help="Only generate backend files (no frontend pages)",
    )

    sub.add_parser("rebuild-routes", help="Regenerate strm_routes/__init__.py from the registry")
    return parser


def _resolve_config(args: argparse.Namespace) -> Config:
    project_dir: Optional[Path] = None
    if args.project_dir:
        project_dir = Path(args.project_dir).resolve()
    else:
        project_dir = find_project_root(Path.cwd())
    return Config.from_env(
        project_dir=project_dir,
        logger_mode=LoggerMode.QUIET if args.quiet else None,
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_info(config: Config) -> int:
    console.print(
        Panel(
            f"[bold bright_cyan]{config.brand} CLI[/bold bright_cyan] v{get_cli_version()}\n"
            f"Project : {config.project_dir}",
            border_style="bright_cyan",
        )
    )
    result = check_project(config, show_output=config.verbose)
    if result.success:
        print_success(result.message)
        return EXIT_SUCCESS
    print_error(f"Project appears invalid: {result.message}")
    return EXIT_FAILURE


def _cmd_make_module(config: Config, args: argparse.Namespace) -> int:
    orchestrator = ModuleOrchestrator(config)
    result = asyncio.run(
        orchestrator.create_module(
            ModuleArgs(
                name=args.name,
                plural=args.plural,
                controller_only=args.controller_only,
            )
        )
    )

    summary = {
        "Module": result.module_key,
        "State": result.state.value,
        "Duration": format_duration(result.duration_seconds),
        "Files": "\n".join(result.written) or "-",
    }
    if not result.success:
        summary["Failed step"] = result.failed_step.value if result.failed_step else "-"
        summary["Error"] = result.error.value if result.error else "-"
    if config.verbose or not result.success:
        print_summary_table(summary, title="Module")

    if result.success:
        print_success(result.message)
        return EXIT_SUCCESS
    print_error(f"Module not created: {result.message}")
    return EXIT_FAILURE


def _cmd_rebuild_routes(config: Config) -> int:
    result = asyncio.run(rebuild_routes(config))
    if result.success:
        print_success(f"{result.message}: {', '.join(result.written)}")
        return EXIT_SUCCESS
    print_error(result.message)
    return EXIT_FAILURE


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Parse *argv*, dispatch the command and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = _resolve_config(args)

    if args.command == "info":
        return _cmd_info(config)
    if args.command == "make-module":
        return _cmd_make_module(config, args)
    return _cmd_rebuild_routes(config)


def main() -> None:
    """Console-script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
