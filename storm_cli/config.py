"""ST🌀RM Stack CLI configuration.

Typed configuration for the module pipeline.  ``Config`` carries the
invocation-level settings (project directory, branding, output mode) and
every project-relative path the generators write to.  ``ProjectSettings``
mirrors the project's own ``strm_config/strm_config.json``.

Both are plain Pydantic v2 models that are built once by the CLI (or a test)
and passed explicitly to each collaborator.
"""

from __future__ import annotations

import json
import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from storm_cli.errors import ProjectConfigUnavailable


DEFAULT_BRAND = "ST🌀RM Stack"


class FrontendOption(str, Enum):
    """Frontend frameworks a ST🌀RM project can be generated with."""
    REACT = "react"
    VUE = "vue"
    LIT = "lit"

    @property
    def page_extension(self) -> str:
        """File extension used for generated page components."""
        return _PAGE_EXTENSIONS[self]


_PAGE_EXTENSIONS: dict[FrontendOption, str] = {
    FrontendOption.REACT: "tsx",
    FrontendOption.VUE: "vue",
    FrontendOption.LIT: "ts",
}


class LoggerMode(str, Enum):
    """Console verbosity for pipeline progress messages."""
    QUIET = "quiet"
    VERBOSE = "verbose"


# ---------------------------------------------------------------------------
# Project settings (strm_config/strm_config.json)
# ---------------------------------------------------------------------------


class ProjectSettings(BaseModel):
    """Settings written into every project by the initial scaffold."""

    model_config = ConfigDict(populate_by_name=True)

    app_id: str = Field(default="", alias="appId")
    vite_host: str = Field(default="localhost", alias="viteHost")
    vite_port: int = Field(default=5173, alias="vitePort")
    frontend: FrontendOption = Field(default=FrontendOption.REACT)
    frontend_base_path: str = Field(default="", alias="frontendBasePath")
    frontend_entry_point: str = Field(default="main.tsx", alias="frontendEntryPoint")
    frontend_extensions: list[str] = Field(default_factory=list, alias="frontendExtensions")

    @property
    def frontend_dir(self) -> str:
        """Name of the frontend folder inside the project, e.g. ``strm_fe_react``."""
        return f"strm_fe_{self.frontend.value}"

    @classmethod
    def load(cls, path: Path) -> "ProjectSettings":
        """Load and validate ``strm_config.json``.

        Raises:
            ProjectConfigUnavailable: If the file is missing, is not UTF-8 JSON or
                does not describe a supported frontend.
        """
        try:
            raw = Path(path).read_text(encoding="utf-8")
            return cls.model_validate_json(raw)
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            raise ProjectConfigUnavailable(
                f"Failed to load project config: {exc}", path=str(path)
            ) from exc

    def to_json(self) -> str:
        return json.dumps(self.model_dump(mode="json", by_alias=True), indent=2)


# ---------------------------------------------------------------------------
# Invocation config
# ---------------------------------------------------------------------------


class Config(BaseModel):
    """Global CLI configuration.

    Holds the project directory the command operates on and derives every
    path the module pipeline reads or writes from it.
    """

    project_dir: Path = Field(default_factory=Path.cwd)
    brand: str = Field(default=DEFAULT_BRAND)
    logger_mode: LoggerMode = Field(default=LoggerMode.VERBOSE)

    config_dir: str = Field(default="strm_config")
    modules_dir: str = Field(default="strm_modules")
    controllers_dir_name: str = Field(default="strm_controllers")
    models_dir_name: str = Field(default="strm_models")
    routes_dir_name: str = Field(default="strm_routes")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def settings_path(self) -> Path:
        """Path to ``strm_config/strm_config.json``."""
        return self.project_dir / self.config_dir / "strm_config.json"

    @property
    def registry_path(self) -> Path:
        """Path to the module registry ``strm_modules/strm_modules.json``."""
        return self.project_dir / self.modules_dir / "strm_modules.json"

    @property
    def controllers_dir(self) -> Path:
        return self.project_dir / self.controllers_dir_name

    @property
    def models_dir(self) -> Path:
        return self.project_dir / self.models_dir_name

    @property
    def auto_imports_path(self) -> Path:
        """The append-only controller import table."""
        return self.controllers_dir / "__init__.py"

    @property
    def routes_path(self) -> Path:
        """The fully regenerated backend route table."""
        return self.project_dir / self.routes_dir_name / "__init__.py"

    @property
    def verbose(self) -> bool:
        return self.logger_mode == LoggerMode.VERBOSE

    def model_path(self, model_file_name: str) -> Path:
        return self.models_dir / model_file_name

    def controller_path(self, controller_name: str) -> Path:
        return self.controllers_dir / f"{controller_name}.py"

    def pages_dir(self, settings: ProjectSettings) -> Path:
        """``strm_fe_<frontend>/src/pages`` for the project's frontend."""
        return self.project_dir / settings.frontend_dir / "src" / "pages"

    def project_relative(self, path: Path) -> str:
        """Render *path* relative to the project directory for messages."""
        try:
            return path.relative_to(self.project_dir).as_posix()
        except ValueError:
            return str(path)

    def load_settings(self) -> ProjectSettings:
        """Load the project's ``strm_config.json``."""
        return ProjectSettings.load(self.settings_path)

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            STRM_PROJECT_DIR, STRM_BRAND, STRM_LOGGER_MODE.

        Keyword *overrides* win over the environment (``None`` values are
        ignored so CLI flags can be passed through unconditionally).
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("STRM_PROJECT_DIR"):
            kwargs["project_dir"] = Path(os.environ["STRM_PROJECT_DIR"])
        if os.environ.get("STRM_BRAND"):
            kwargs["brand"] = os.environ["STRM_BRAND"]
        if os.environ.get("STRM_LOGGER_MODE"):
            kwargs["logger_mode"] = LoggerMode(os.environ["STRM_LOGGER_MODE"])

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
