"""ST🌀RM Stack CLI -- module scaffolding for ST🌀RM projects.

Creates modules (model, controller, route bindings, frontend pages) inside a
ST🌀RM project and keeps ``strm_modules/strm_modules.json`` in sync with the
generated files.

Quick usage::

    from storm_cli import Config, ModuleArgs, ModuleOrchestrator

    orchestrator = ModuleOrchestrator(Config(project_dir=Path("my-app")))
    result = await orchestrator.create_module(ModuleArgs(name="book"))
"""

__version__ = "0.4.0"

from storm_cli.config import Config, FrontendOption, LoggerMode, ProjectSettings
from storm_cli.errors import ErrorKind, ScaffoldError, ScaffoldOutput
from storm_cli.orchestrator import (
    ModuleArgs,
    ModuleCreationResult,
    ModuleOrchestrator,
    ModuleState,
)

__all__ = [
    "Config",
    "ErrorKind",
    "FrontendOption",
    "LoggerMode",
    "ModuleArgs",
    "ModuleCreationResult",
    "ModuleOrchestrator",
    "ModuleState",
    "ProjectSettings",
    "ScaffoldError",
    "ScaffoldOutput",
    "__version__",
]
