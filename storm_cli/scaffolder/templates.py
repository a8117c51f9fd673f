"""Jinja2 environment for the module artifact templates.

Templates live next to this module under ``templates/backend`` (model,
controller, route table) and ``templates/frontend/<framework>`` (index and
detail pages).  Rendering returns text only; the ``write_*`` coroutines in
the sibling modules decide where it goes.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from storm_cli.names import title_case

_TEMPLATE_ROOT = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Loads ``.j2`` files from *template_dir* (the packaged templates by default).

    Undefined variables raise ``jinja2.UndefinedError`` so a template that
    drifts from its generator fails at generation time.  Output is never
    HTML-escaped: every template emits source code.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir else _TEMPLATE_ROOT
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters.update(
            title_case=title_case,
            kebab_case=_kebab_case,
        )

    def render(self, name: str, context: dict[str, Any]) -> str:
        """Render the template at *name* (e.g. ``"backend/model.py.j2"``)."""
        return self.env.get_template(name).render(**context)


@lru_cache(maxsize=1)
def default_renderer() -> TemplateRenderer:
    """Shared renderer over the packaged templates."""
    return TemplateRenderer()


def _kebab_case(value: str) -> str:
    """``BookDetail`` / ``book_detail`` -> ``book-detail`` (custom element tags)."""
    spaced = re.sub(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])", "-", value)
    return re.sub(r"[_\s-]+", "-", spaced).strip("-").lower()
