"""Pydantic v2 models for the module registry.

The registry (``strm_modules/strm_modules.json``) is the only source of
truth for the backend route table and the controller auto-imports.  Field
names are snake_case in Python and camelCase on disk, so files written by
earlier releases of the CLI load unchanged.  Keys the models do not declare
are kept and written back, so a file extended by another tool survives a
rewrite.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime
from typing import Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from storm_cli.names import NormalizedName


class _RegistryModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

class ControllerDescriptor(_RegistryModel):
    """Backend half of a module: controller, endpoint base and model file."""
    controller_name: str = Field(..., alias="controllerName")
    endpoint_base: str = Field(..., alias="endpointBase")
    model_file_name: str = Field(
        ...,
        validation_alias=AliasChoices("modelName", "modelFileName", "model_file_name"),
        serialization_alias="modelName",
    )


class PageDescriptor(_RegistryModel):
    """A framework-agnostic frontend route and the component serving it."""
    route_path: str = Field(
        ...,
        validation_alias=AliasChoices("path", "routePath", "route_path"),
        serialization_alias="path",
    )
    component_name: str = Field(..., alias="componentName")
    component_path: str = Field(..., alias="componentPath")

    @property
    def is_index(self) -> bool:
        return self.component_path.endswith("/Index")


class ModuleDescriptor(_RegistryModel):
    """One module: a controller, a model and zero or two pages."""

    controller: ControllerDescriptor = Field(
        ...,
        validation_alias=AliasChoices("controller", "controllerDescriptor"),
        serialization_alias="controller",
    )
    controller_only: bool = Field(default=False, alias="controllerOnly")
    pages: list[PageDescriptor] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_page_count(self) -> "ModuleDescriptor":
        expected = 0 if self.controller_only else 2
        if len(self.pages) != expected:
            raise ValueError(
                f"controllerOnly={self.controller_only} requires {expected} page(s), "
                f"got {len(self.pages)}"
            )
        return self


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class ModuleRegistry(_RegistryModel):
    """The full persisted registry."""

    app_id: str = Field(
        default="",
        validation_alias=AliasChoices("appId", "applicationId", "app_id"),
        serialization_alias="appId",
    )
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdated")
    # Insertion order is the route table order.  ``None`` entries are kept
    # as-is and skipped when routes are rebuilt.
    modules: dict[str, Optional[ModuleDescriptor]] = Field(default_factory=dict)

    @field_validator("last_updated", mode="before")
    @classmethod
    def _blank_timestamp(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    def upsert(self, module_key: str, descriptor: ModuleDescriptor) -> None:
        """Insert *descriptor* under *module_key*, replacing any existing entry.

        Replacing keeps the key's original position.  Controller-name
        collisions between distinct keys are not detected here; see
        :meth:`controller_owner`.
        """
        self.modules[module_key] = descriptor

    def iter_modules(self) -> Iterator[tuple[str, ModuleDescriptor]]:
        """Yield ``(key, descriptor)`` pairs in registry order, skipping nulls."""
        for key, descriptor in self.modules.items():
            if descriptor is not None:
                yield key, descriptor

    def controller_owner(self, controller_name: str) -> Optional[str]:
        """Return the key of the module that owns *controller_name*, if any."""
        for key, descriptor in self.iter_modules():
            if descriptor.controller.controller_name == controller_name:
                return key
        return None

    def to_json(self) -> str:
        """Serialise exactly as written to disk (camelCase, 2-space indent)."""
        return self.model_dump_json(by_alias=True, indent=2)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def build_module_descriptor(
    names: NormalizedName, controller_only: bool = False
) -> ModuleDescriptor:
    """Build the descriptor for a new module from its normalised names.

    Non controller-only modules get exactly two pages, index first::

        /books      -> Books/Index   (Book)
        /books/:id  -> Books/Book    (BookDetail)
    """
    controller = ControllerDescriptor(
        controller_name=names.controller_name,
        endpoint_base=names.pluralized_name,
        model_file_name=names.model_file_name,
    )

    pages: list[PageDescriptor] = []
    if not controller_only:
        pages = [
            PageDescriptor(
                route_path=f"/{names.pluralized_name}",
                component_name=names.title_case_name,
                component_path=f"{names.title_case_plural}/Index",
            ),
            PageDescriptor(
                route_path=f"/{names.pluralized_name}/:id",
                component_name=f"{names.title_case_name}Detail",
                component_path=f"{names.title_case_plural}/{names.title_case_name}",
            ),
        ]

    return ModuleDescriptor(
        controller=controller,
        controller_only=bool(controller_only),
        pages=pages,
    )
