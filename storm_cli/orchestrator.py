"""ST🌀RM module creation pipeline.

Implements ``make-module`` as a strictly forward state machine:

    VALIDATE_INPUT -> REGISTRY_LOADED -> REGISTRY_UPDATED -> MODEL_WRITTEN
    -> CONTROLLER_WRITTEN -> ROUTES_REBUILT -> AUTO_IMPORTS_UPDATED
    -> FRONTEND_COMPONENTS_WRITTEN -> COMPLETE

Each transition is gated by exactly one collaborator returning a successful
``ScaffoldOutput``.  The first failure moves the machine to ``FAILED`` and
stops it.  Nothing is rolled back and nothing is retried: files written and
the registry persisted by earlier steps stay on disk for the operator to
inspect.

Usage::

    orchestrator = ModuleOrchestrator(Config(project_dir=Path(".")))
    result = await orchestrator.create_module(ModuleArgs(name="book"))
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Awaitable, Callable, Optional

from pydantic import BaseModel, Field

from storm_cli.config import Config
from storm_cli.errors import (
    ErrorKind,
    ModuleNameError,
    RegistryUnavailable,
    RegistryWriteFailed,
    ScaffoldOutput,
)
from storm_cli.names import (
    NormalizedName,
    normalize_name,
    validate_module_name,
    validate_plural,
)
from storm_cli.registry import (
    ModuleDescriptor,
    ModuleRegistry,
    RegistryStore,
    build_module_descriptor,
)
from storm_cli.scaffolder import (
    append_auto_import,
    rebuild_routes,
    write_controller_file,
    write_frontend_pages,
    write_model_file,
)
from storm_cli.utils import (
    print_process_error,
    print_process_info,
    print_process_success,
    print_warning,
)


# ---------------------------------------------------------------------------
# Public models
# ---------------------------------------------------------------------------


class ModuleState(str, Enum):
    """States of the module creation pipeline, in execution order."""
    VALIDATE_INPUT = "ValidateInput"
    REGISTRY_LOADED = "RegistryLoaded"
    REGISTRY_UPDATED = "RegistryUpdated"
    MODEL_WRITTEN = "ModelWritten"
    CONTROLLER_WRITTEN = "ControllerWritten"
    ROUTES_REBUILT = "RoutesRebuilt"
    AUTO_IMPORTS_UPDATED = "AutoImportsUpdated"
    FRONTEND_COMPONENTS_WRITTEN = "FrontendComponentsWritten"
    COMPLETE = "Complete"
    FAILED = "Failed"


class ModuleArgs(BaseModel):
    """Inputs collected by the CLI for one module."""

    name: str = Field(default="", description="Module name, also the registry key")
    controller_only: bool = Field(default=False, description="Skip frontend pages")
    plural: Optional[str] = Field(default=None, description="Route segment override")


class ModuleCreationResult(BaseModel):
    """Aggregate outcome of one pipeline run."""

    module_key: str = Field(default="")
    success: bool = Field(default=False)
    state: ModuleState = Field(default=ModuleState.VALIDATE_INPUT)
    message: str = Field(default="")
    error: Optional[ErrorKind] = Field(default=None)
    failed_step: Optional[ModuleState] = Field(
        default=None, description="The state the pipeline was trying to reach"
    )
    completed: list[ModuleState] = Field(default_factory=list)
    written: list[str] = Field(default_factory=list)
    duration_seconds: float = Field(default=0.0, ge=0.0)


# ---------------------------------------------------------------------------
# Per-run context
# ---------------------------------------------------------------------------


@dataclass
class _ModuleRun:
    """Values handed from one pipeline step to the next."""

    args: ModuleArgs
    key: str = ""
    names: Optional[NormalizedName] = None
    registry: Optional[ModuleRegistry] = None
    descriptor: Optional[ModuleDescriptor] = None
    written: list[str] = field(default_factory=list)


_Step = Callable[[_ModuleRun], Awaitable[ScaffoldOutput]]


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class ModuleOrchestrator:
    """Drives module creation for one project directory.

    Attributes:
        config: CLI configuration (project directory, brand, output mode).
        store: Registry store for ``strm_modules/strm_modules.json``.
        today: Date stamped into generated model/controller headers.
    """

    # (target state, step method, progress label), in pipeline order
    _TRANSITIONS: list[tuple[ModuleState, str, str]] = [
        (ModuleState.REGISTRY_LOADED, "_load_registry", "Reading modules file"),
        (ModuleState.REGISTRY_UPDATED, "_update_registry", "Updating modules file"),
        (ModuleState.MODEL_WRITTEN, "_write_model", "Creating model file"),
        (ModuleState.CONTROLLER_WRITTEN, "_write_controller", "Creating controller file"),
        (ModuleState.ROUTES_REBUILT, "_rebuild_routes", "Rebuilding module routes"),
        (ModuleState.AUTO_IMPORTS_UPDATED, "_update_auto_imports", "Updating auto imports"),
        (
            ModuleState.FRONTEND_COMPONENTS_WRITTEN,
            "_write_frontend",
            "Creating frontend components",
        ),
    ]

    def __init__(
        self,
        config: Config,
        store: Optional[RegistryStore] = None,
        today: Optional[date] = None,
    ) -> None:
        self.config = config
        self.store = store or RegistryStore(config.registry_path)
        self.today = today

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def create_module(self, args: ModuleArgs) -> ModuleCreationResult:
        """Run the pipeline for *args* and report the aggregate result.

        Expected failures never raise; they come back as a result with
        ``success=False``, ``state=FAILED`` and the failing step.
        """
        started = time.monotonic()
        run = _ModuleRun(args=args)
        result = ModuleCreationResult(module_key=(args.name or "").strip())

        print_process_info(
            f"Attempting to update {self.config.brand} Modules...",
            verbose=self.config.verbose,
        )

        outcome = self._validate_input(run)
        if not outcome.success:
            return self._fail(result, ModuleState.VALIDATE_INPUT, outcome, run, started)
        result.module_key = run.key
        result.completed.append(ModuleState.VALIDATE_INPUT)

        for target, method_name, label in self._TRANSITIONS:
            print_process_info(label, verbose=self.config.verbose)
            step: _Step = getattr(self, method_name)
            outcome = await step(run)
            run.written.extend(outcome.written)
            if not outcome.success:
                return self._fail(result, target, outcome, run, started)

            result.state = target
            result.completed.append(target)
            print_process_success(
                outcome.message or label,
                ", ".join(outcome.written),
                verbose=self.config.verbose,
            )

        result.state = ModuleState.COMPLETE
        result.success = True
        result.message = f"Module '{run.key}' created"
        result.written = list(run.written)
        result.duration_seconds = time.monotonic() - started
        return result

    def _fail(
        self,
        result: ModuleCreationResult,
        target: ModuleState,
        outcome: ScaffoldOutput,
        run: _ModuleRun,
        started: float,
    ) -> ModuleCreationResult:
        print_process_error(f"Failed to reach {target.value}", outcome.message)
        result.state = ModuleState.FAILED
        result.success = False
        result.failed_step = target
        result.message = outcome.message
        result.error = outcome.error
        result.written = list(run.written)
        result.duration_seconds = time.monotonic() - started
        return result

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _validate_input(self, run: _ModuleRun) -> ScaffoldOutput:
        """Reject malformed input before any I/O happens."""
        try:
            key = validate_module_name(run.args.name)
            plural = validate_plural(run.args.plural)
        except ModuleNameError as exc:
            return ScaffoldOutput.failed(exc)
        run.key = key
        run.names = normalize_name(key, plural)
        return ScaffoldOutput.ok()

    async def _load_registry(self, run: _ModuleRun) -> ScaffoldOutput:
        try:
            run.registry = await self.store.load()
        except RegistryUnavailable as exc:
            return ScaffoldOutput.failed(exc)
        return ScaffoldOutput.ok(f"Loaded {self.config.brand} Modules")

    async def _update_registry(self, run: _ModuleRun) -> ScaffoldOutput:
        """Upsert the new descriptor and persist the registry."""
        assert run.registry is not None and run.names is not None
        run.descriptor = build_module_descriptor(run.names, run.args.controller_only)

        owner = run.registry.controller_owner(run.names.controller_name)
        if owner is not None and owner != run.key:
            print_warning(
                f"Module '{run.key}' reuses controller '{run.names.controller_name}' "
                f"already registered by '{owner}'"
            )

        run.registry.upsert(run.key, run.descriptor)
        try:
            await self.store.persist(run.registry)
        except RegistryWriteFailed as exc:
            return ScaffoldOutput.failed(exc)
        return ScaffoldOutput.ok(
            f"Updated {self.config.brand} Modules",
            written=[self.config.project_relative(self.store.path)],
        )

    async def _write_model(self, run: _ModuleRun) -> ScaffoldOutput:
        assert run.names is not None
        return await write_model_file(self.config, run.names, self.today)

    async def _write_controller(self, run: _ModuleRun) -> ScaffoldOutput:
        assert run.names is not None
        return await write_controller_file(self.config, run.names, self.today)

    async def _rebuild_routes(self, run: _ModuleRun) -> ScaffoldOutput:
        # Replays the registry as persisted, not the in-memory copy.
        return await rebuild_routes(self.config)

    async def _update_auto_imports(self, run: _ModuleRun) -> ScaffoldOutput:
        assert run.names is not None
        return await append_auto_import(self.config, run.names)

    async def _write_frontend(self, run: _ModuleRun) -> ScaffoldOutput:
        assert run.descriptor is not None
        return await write_frontend_pages(self.config, run.descriptor)
