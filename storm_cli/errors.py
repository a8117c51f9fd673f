"""Error taxonomy and the standard step outcome.

Primitives (registry store, settings loader, name validation) raise the
``ScaffoldError`` subclasses below.  Pipeline collaborators never let them
escape: they convert every expected failure into a ``ScaffoldOutput`` and
the orchestrator decides what is fatal.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    """Classification of every failure the module pipeline can report."""
    VALIDATION_ERROR = "ValidationError"
    REGISTRY_UNAVAILABLE = "RegistryUnavailable"
    REGISTRY_WRITE_FAILED = "RegistryWriteFailed"
    ARTIFACT_WRITE_FAILED = "ArtifactWriteFailed"
    ROUTE_REBUILD_WRITE_FAILED = "RouteRebuildWriteFailed"
    AUTO_IMPORT_UPDATE_FAILED = "AutoImportUpdateFailed"
    PROJECT_CONFIG_UNAVAILABLE = "ProjectConfigUnavailable"
    INVALID_PROJECT = "InvalidProject"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Base class for all scaffolding failures."""

    kind: ErrorKind = ErrorKind.ARTIFACT_WRITE_FAILED

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class ModuleNameError(ScaffoldError):
    """Raised when a module name or plural is malformed or missing."""

    kind = ErrorKind.VALIDATION_ERROR


class RegistryUnavailable(ScaffoldError):
    """Raised when the registry file is missing, unreadable or corrupt."""

    kind = ErrorKind.REGISTRY_UNAVAILABLE


class RegistryWriteFailed(ScaffoldError):
    kind = ErrorKind.REGISTRY_WRITE_FAILED


class ArtifactWriteFailed(ScaffoldError):
    kind = ErrorKind.ARTIFACT_WRITE_FAILED


class RouteRebuildWriteFailed(ScaffoldError):
    kind = ErrorKind.ROUTE_REBUILD_WRITE_FAILED


class AutoImportUpdateFailed(ScaffoldError):
    kind = ErrorKind.AUTO_IMPORT_UPDATE_FAILED


class ProjectConfigUnavailable(ScaffoldError):
    """Raised when ``strm_config/strm_config.json`` cannot be loaded."""

    kind = ErrorKind.PROJECT_CONFIG_UNAVAILABLE


class InvalidProject(ScaffoldError):
    kind = ErrorKind.INVALID_PROJECT


# ---------------------------------------------------------------------------
# Standard outcome
# ---------------------------------------------------------------------------


class ScaffoldOutput(BaseModel):
    """Result of a single scaffolding step.

    ``written`` lists the files the step created or modified, which lets the
    caller report partial progress when a later step fails.
    """

    success: bool = Field(default=False)
    message: str = Field(default="")
    error: Optional[ErrorKind] = Field(default=None)
    written: list[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, message: str = "", written: list[str] | None = None) -> "ScaffoldOutput":
        return cls(success=True, message=message, written=written or [])

    @classmethod
    def failed(cls, exc: ScaffoldError) -> "ScaffoldOutput":
        """Build a failed outcome from a ``ScaffoldError``."""
        return cls(success=False, message=str(exc), error=exc.kind)
