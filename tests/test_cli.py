"""Tests for the command-line entry point (storm_cli.cli)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from storm_cli.cli import EXIT_FAILURE, EXIT_SUCCESS, build_parser, run

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for var in ("STRM_PROJECT_DIR", "STRM_BRAND", "STRM_LOGGER_MODE"):
        monkeypatch.delenv(var, raising=False)


class TestBuildParser:

    def test_make_module_args(self):
        args = build_parser().parse_args(
            ["make-module", "category", "--plural", "categories", "--controller-only"]
        )
        assert args.command == "make-module"
        assert args.name == "category"
        assert args.plural == "categories"
        assert args.controller_only is True

    def test_make_module_defaults(self):
        args = build_parser().parse_args(["make-module", "book"])
        assert args.plural is None
        assert args.controller_only is False
        assert args.quiet is False
        assert args.project_dir is None

    def test_global_options(self):
        args = build_parser().parse_args(["-C", "/tmp/app", "-q", "info"])
        assert args.project_dir == "/tmp/app"
        assert args.quiet is True

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_version(self, capsys: pytest.CaptureFixture[str]):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "storm-cli" in capsys.readouterr().out


class TestRun:

    def test_info_valid_project(self, project_dir: Path, capsys: pytest.CaptureFixture[str]):
        assert run(["-C", str(project_dir), "info"]) == EXIT_SUCCESS
        assert "appears valid" in capsys.readouterr().out

    def test_info_invalid_project(self, tmp_path: Path):
        assert run(["-C", str(tmp_path), "-q", "info"]) == EXIT_FAILURE

    def test_make_module(self, project_dir: Path):
        code = run(["-C", str(project_dir), "-q", "make-module", "book", "--plural", "books"])

        assert code == EXIT_SUCCESS
        registry = json.loads(
            (project_dir / "strm_modules" / "strm_modules.json").read_text(encoding="utf-8")
        )
        assert registry["modules"]["book"]["controller"]["endpointBase"] == "books"
        assert (project_dir / "strm_fe_react" / "src" / "pages" / "Books" / "Index.tsx").is_file()

    def test_make_module_verbose_prints_summary(
        self, project_dir: Path, capsys: pytest.CaptureFixture[str]
    ):
        assert run(["-C", str(project_dir), "make-module", "book"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "Module 'book' created" in out
        assert "Complete" in out

    def test_make_module_invalid_name(self, project_dir: Path, capsys: pytest.CaptureFixture[str]):
        assert run(["-C", str(project_dir), "-q", "make-module", "2book"]) == EXIT_FAILURE
        assert "ValidationError" in capsys.readouterr().out

    def test_make_module_without_registry(self, tmp_path: Path):
        assert run(["-C", str(tmp_path), "-q", "make-module", "book"]) == EXIT_FAILURE

    def test_rebuild_routes(self, project_dir: Path):
        assert run(["-C", str(project_dir), "-q", "rebuild-routes"]) == EXIT_SUCCESS
        text = (project_dir / "strm_routes" / "__init__.py").read_text(encoding="utf-8")
        assert text.startswith("# Generated by the ST🌀RM Stack 2026-01-15")

    def test_rebuild_routes_without_registry(self, tmp_path: Path):
        assert run(["-C", str(tmp_path), "-q", "rebuild-routes"]) == EXIT_FAILURE

    def test_brand_from_env(self, project_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("STRM_BRAND", "Acme Stack")
        assert run(["-C", str(project_dir), "-q", "rebuild-routes"]) == EXIT_SUCCESS
        text = (project_dir / "strm_routes" / "__init__.py").read_text(encoding="utf-8")
        assert text.startswith("# Generated by the Acme Stack")

    def test_discovers_project_from_cwd(
        self, project_dir: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.chdir(project_dir / "strm_models")
        assert run(["-q", "make-module", "book"]) == EXIT_SUCCESS
        assert (project_dir / "strm_models" / "book.py").is_file()
