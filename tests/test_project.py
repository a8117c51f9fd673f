"""Unit tests for project checks (storm_cli.project)."""

from __future__ import annotations

from pathlib import Path

import pytest

from storm_cli import __version__
from storm_cli.config import Config
from storm_cli.errors import ErrorKind
from storm_cli.project import (
    check_project,
    find_project_root,
    get_cli_version,
    required_project_paths,
)

from conftest import build_project

pytestmark = pytest.mark.unit


class TestRequiredProjectPaths:

    def test_react_project(self, config: Config):
        paths = required_project_paths(config)
        assert paths[:3] == [
            "strm_fe_react",
            "strm_fe_react/src/main.tsx",
            "strm_fe_react/src/pages",
        ]
        assert "strm_modules/strm_modules.json" in paths
        assert "support/strm_hmr.py" in paths
        assert "tailwind.config.ts" in paths

    def test_vue_project(self, tmp_path: Path):
        root = build_project(tmp_path / "vue-app", frontend="vue")
        paths = required_project_paths(Config(project_dir=root))
        assert "strm_fe_vue/src/main.ts" in paths


class TestCheckProject:

    def test_valid_project(self, config: Config):
        result = check_project(config)
        assert result.success
        assert result.message == "ST🌀RM Stack project appears valid"

    def test_lists_paths_when_verbose(self, config: Config, capsys: pytest.CaptureFixture[str]):
        check_project(config, show_output=True)
        assert "strm_routes" in capsys.readouterr().out

    def test_missing_path(self, config: Config, project_dir: Path):
        (project_dir / "vite.config.ts").unlink()

        result = check_project(config)

        assert not result.success
        assert result.error == ErrorKind.INVALID_PROJECT
        assert "vite.config.ts" in result.message

    def test_stops_at_first_missing(self, config: Config, project_dir: Path):
        (project_dir / "app.py").unlink()
        (project_dir / "vite.config.ts").unlink()
        result = check_project(config)
        assert "app.py" in result.message
        assert "vite.config.ts" not in result.message

    def test_missing_settings(self, config: Config, project_dir: Path):
        (project_dir / "strm_config" / "strm_config.json").unlink()
        result = check_project(config)
        assert result.error == ErrorKind.PROJECT_CONFIG_UNAVAILABLE

    def test_settings_not_utf8(self, config: Config, project_dir: Path):
        (project_dir / "strm_config" / "strm_config.json").write_bytes(b'{"frontend": "\xff"}')
        result = check_project(config)
        assert not result.success
        assert result.error == ErrorKind.PROJECT_CONFIG_UNAVAILABLE

    def test_empty_directory(self, tmp_path: Path):
        result = check_project(Config(project_dir=tmp_path))
        assert not result.success


class TestFindProjectRoot:

    def test_from_nested_directory(self, project_dir: Path):
        nested = project_dir / "strm_fe_react" / "src" / "pages"
        assert find_project_root(nested) == project_dir

    def test_from_root(self, project_dir: Path):
        assert find_project_root(project_dir) == project_dir

    def test_outside_project(self, tmp_path: Path):
        assert find_project_root(tmp_path) is None


class TestGetCliVersion:

    def test_returns_version_string(self):
        version = get_cli_version()
        assert isinstance(version, str)
        assert version

    def test_in_tree_version(self):
        assert __version__ == "0.4.0"
