"""Project-level checks for the ``info`` command."""

from __future__ import annotations

import os
from importlib import metadata
from pathlib import Path
from typing import Optional

from storm_cli.config import Config
from storm_cli.errors import InvalidProject, ScaffoldError, ScaffoldOutput
from storm_cli.utils import console


def required_project_paths(config: Config) -> list[str]:
    """Project-relative paths every ST🌀RM project must contain.

    Raises:
        ProjectConfigUnavailable: If ``strm_config.json`` cannot be loaded,
            since the frontend folder depends on it.
    """
    settings = config.load_settings()
    frontend_dir = settings.frontend_dir
    return [
        frontend_dir,
        f"{frontend_dir}/src/{settings.frontend_entry_point}",
        f"{frontend_dir}/src/pages",
        config.controllers_dir_name,
        config.models_dir_name,
        f"{config.modules_dir}/strm_modules.json",
        config.routes_dir_name,
        "support/strm_hmr.py",
        "templates/app.html",
        "app.py",
        "vite.config.ts",
        "tailwind.config.ts",
    ]


def check_project(config: Config, show_output: bool = False) -> ScaffoldOutput:
    """Verify that ``config.project_dir`` holds a readable ST🌀RM project.

    Stops at the first missing or unreadable path and reports it.
    """
    try:
        paths = required_project_paths(config)
    except ScaffoldError as exc:
        return ScaffoldOutput.failed(exc)

    for rel in paths:
        target = config.project_dir / rel
        if not os.access(target, os.R_OK):
            return ScaffoldOutput.failed(
                InvalidProject(f"Missing or unreadable: {rel}", path=str(target))
            )
        if show_output:
            console.print(f"  [green]+[/green] {rel}")

    return ScaffoldOutput.ok(f"{config.brand} project appears valid")


def get_cli_version() -> Optional[str]:
    """Installed version of the CLI, or the in-tree version when not installed."""
    try:
        return metadata.version("storm-cli")
    except metadata.PackageNotFoundError:
        from storm_cli import __version__

        return __version__


def find_project_root(start: Path) -> Optional[Path]:
    """Walk up from *start* to the first directory containing ``strm_config/``."""
    for candidate in (start, *start.parents):
        if (candidate / "strm_config" / "strm_config.json").is_file():
            return candidate
    return None
