"""Shared pytest fixtures for the ST🌀RM CLI test suite.

Provides reusable fixtures for:
- A throwaway ST🌀RM project tree (config, registry, backend/frontend folders)
- A quiet ``Config`` pointing at that tree
- Raw registry payloads in the on-disk camelCase format
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from storm_cli.config import Config, LoggerMode


# ---------------------------------------------------------------------------
# Raw payloads
# ---------------------------------------------------------------------------

APP_ID = "4f1c2a9e-strm-test"


def make_settings(frontend: str = "react") -> dict[str, Any]:
    """``strm_config.json`` contents for the given frontend."""
    entry = "main.tsx" if frontend == "react" else "main.ts"
    return {
        "appId": APP_ID,
        "viteHost": "localhost",
        "vitePort": 5173,
        "frontend": frontend,
        "frontendBasePath": f"strm_fe_{frontend}",
        "frontendEntryPoint": entry,
        "frontendExtensions": [".ts", ".tsx"] if frontend == "react" else [".ts"],
    }


def make_module_payload(
    key: str,
    endpoint_base: str | None = None,
    controller_only: bool = False,
) -> dict[str, Any]:
    """A registry module entry as the CLI writes it to disk."""
    plural = endpoint_base or key
    title = key[:1].upper() + key[1:]
    title_plural = plural[:1].upper() + plural[1:]
    pages = []
    if not controller_only:
        pages = [
            {
                "path": f"/{plural}",
                "componentName": title,
                "componentPath": f"{title_plural}/Index",
            },
            {
                "path": f"/{plural}/:id",
                "componentName": f"{title}Detail",
                "componentPath": f"{title_plural}/{title}",
            },
        ]
    return {
        "controller": {
            "controllerName": f"{key.lower()}_controller",
            "endpointBase": plural,
            "modelName": f"{key.lower()}.py",
        },
        "controllerOnly": controller_only,
        "pages": pages,
    }


@pytest.fixture
def registry_payload() -> dict[str, Any]:
    """An empty registry as produced by the initial project scaffold."""
    return {
        "appId": APP_ID,
        "lastUpdated": "2026-01-15T10:30:00.000Z",
        "modules": {},
    }


# ---------------------------------------------------------------------------
# Project tree
# ---------------------------------------------------------------------------

def build_project(root: Path, frontend: str = "react", registry: dict[str, Any] | None = None) -> Path:
    """Create the minimal ST🌀RM project layout under *root*."""
    settings = make_settings(frontend)
    fe_dir = root / f"strm_fe_{frontend}"

    for d in (
        "strm_config",
        "strm_modules",
        "strm_controllers",
        "strm_models",
        "strm_routes",
        "support",
        "templates",
    ):
        (root / d).mkdir(parents=True, exist_ok=True)
    (fe_dir / "src" / "pages").mkdir(parents=True, exist_ok=True)

    (root / "strm_config" / "strm_config.json").write_text(
        json.dumps(settings, indent=2), encoding="utf-8"
    )
    (root / "strm_modules" / "strm_modules.json").write_text(
        json.dumps(
            registry or {"appId": APP_ID, "lastUpdated": "2026-01-15T10:30:00.000Z", "modules": {}},
            indent=2,
        ),
        encoding="utf-8",
    )
    (root / "strm_controllers" / "__init__.py").write_text("", encoding="utf-8")
    (root / "strm_routes" / "__init__.py").write_text("routes = []\n", encoding="utf-8")
    (root / "support" / "strm_hmr.py").write_text("", encoding="utf-8")
    (root / "templates" / "app.html").write_text("<html></html>\n", encoding="utf-8")
    (root / "app.py").write_text("", encoding="utf-8")
    (root / "vite.config.ts").write_text("", encoding="utf-8")
    (root / "tailwind.config.ts").write_text("", encoding="utf-8")
    (fe_dir / "src" / settings["frontendEntryPoint"]).write_text("", encoding="utf-8")
    return root


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A React ST🌀RM project with an empty registry."""
    return build_project(tmp_path / "strm-project")


@pytest.fixture
def config(project_dir: Path) -> Config:
    """Quiet config for the ``project_dir`` fixture."""
    return Config(project_dir=project_dir, logger_mode=LoggerMode.QUIET)


@pytest.fixture
def read_registry(project_dir: Path):
    """Return a callable that loads the registry JSON from disk."""

    def _read() -> dict[str, Any]:
        path = project_dir / "strm_modules" / "strm_modules.json"
        return json.loads(path.read_text(encoding="utf-8"))

    return _read
