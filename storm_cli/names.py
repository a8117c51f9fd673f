"""Name normalisation for generated artifacts.

Pure functions that turn a user-supplied module name into the casing
variants the generators embed in file names, class names and routes.  No
English pluralisation is attempted: the plural is whatever the user passed,
or the name itself.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel

from storm_cli.errors import ModuleNameError

_MODULE_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
_PLURAL_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


class NormalizedName(BaseModel):
    """Every casing variant derived from one module name."""

    raw: str
    lowercase_name: str
    title_case_name: str
    pluralized_name: str
    title_case_plural: str

    @property
    def controller_name(self) -> str:
        """``book`` -> ``book_controller``."""
        return f"{self.lowercase_name}_controller"

    @property
    def controller_class_name(self) -> str:
        """``book`` -> ``BookController``."""
        return controller_class_name(self.controller_name)

    @property
    def model_file_name(self) -> str:
        return f"{self.lowercase_name}.py"


def title_case(value: str) -> str:
    """Capitalise the first letter of each ``_`` segment and join them.

    The rest of each segment is left untouched::

        title_case("book")            -> "Book"
        title_case("book_controller") -> "BookController"
        title_case("myBook")          -> "MyBook"
    """
    return "".join(part[:1].upper() + part[1:] for part in value.split("_") if part)


def controller_class_name(controller_name: str) -> str:
    """Class name for a registry ``controllerName``.

    The controller file, the auto-import line and the route table all go
    through this function so they always agree.
    """
    return title_case(controller_name)


def validate_module_name(name: Optional[str]) -> str:
    """Return *name* stripped, or raise ``ModuleNameError``."""
    value = (name or "").strip()
    if not value:
        raise ModuleNameError("A module name is required")
    if not _MODULE_NAME_RE.fullmatch(value):
        raise ModuleNameError(
            f"Invalid module name '{value}': use letters, digits and underscores, "
            "starting with a letter"
        )
    return value


def validate_plural(plural: Optional[str]) -> Optional[str]:
    """Return the stripped plural override, ``None`` when absent."""
    if plural is None:
        return None
    value = plural.strip()
    if not value:
        return None
    if not _PLURAL_RE.fullmatch(value):
        raise ModuleNameError(
            f"Invalid plural '{value}': use letters, digits, '_' and '-', "
            "starting with a letter"
        )
    return value


def normalize_name(name: str, plural: Optional[str] = None) -> NormalizedName:
    """Derive all casing variants for an already-validated module name."""
    pluralized = plural or name
    return NormalizedName(
        raw=name,
        lowercase_name=name.lower(),
        title_case_name=title_case(name),
        pluralized_name=pluralized,
        title_case_plural=title_case(pluralized),
    )
