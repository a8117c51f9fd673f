"""Model and controller generation.

``generate_model`` / ``generate_controller`` are pure: names in, source text
out.  ``write_model_file`` / ``write_controller_file`` render and write the
result into the project and report a ``ScaffoldOutput``.
"""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Optional

from storm_cli.config import Config
from storm_cli.errors import ArtifactWriteFailed, ScaffoldOutput
from storm_cli.names import NormalizedName
from storm_cli.utils import write_text

from .templates import TemplateRenderer, default_renderer


def generate_model(
    names: NormalizedName,
    brand: str,
    generated_on: date,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    """Render a mongoengine document with a ``label`` and ``updated_at`` field."""
    renderer = renderer or default_renderer()
    return renderer.render(
        "backend/model.py.j2",
        {
            "brand": brand,
            "generated_on": generated_on.isoformat(),
            "model_class": names.title_case_name,
            "module_name": names.raw,
        },
    )


def generate_controller(
    names: NormalizedName,
    brand: str,
    generated_on: date,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    """Render a Starlette ``HTTPEndpoint`` with a single ``get`` handler.

    The handler returns a fixed acknowledgement pointing the user at the
    model file to edit.
    """
    renderer = renderer or default_renderer()
    return renderer.render(
        "backend/controller.py.j2",
        {
            "brand": brand,
            "generated_on": generated_on.isoformat(),
            "controller_class": names.controller_class_name,
            "model_file_name": names.model_file_name,
        },
    )


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------

async def write_model_file(
    config: Config,
    names: NormalizedName,
    generated_on: Optional[date] = None,
) -> ScaffoldOutput:
    """Write ``strm_models/<name>.py``, replacing any previous version."""
    target = config.model_path(names.model_file_name)
    content = generate_model(names, config.brand, generated_on or date.today())
    try:
        await asyncio.to_thread(write_text, target, content)
    except OSError as exc:
        return ScaffoldOutput.failed(
            ArtifactWriteFailed(
                f"Failed to write model file {config.project_relative(target)}: "
                f"{exc.strerror or exc}",
                path=str(target),
            )
        )
    return ScaffoldOutput.ok(
        "Created model file", written=[config.project_relative(target)]
    )


async def write_controller_file(
    config: Config,
    names: NormalizedName,
    generated_on: Optional[date] = None,
) -> ScaffoldOutput:
    """Write ``strm_controllers/<name>_controller.py``."""
    target = config.controller_path(names.controller_name)
    content = generate_controller(names, config.brand, generated_on or date.today())
    try:
        await asyncio.to_thread(write_text, target, content)
    except OSError as exc:
        return ScaffoldOutput.failed(
            ArtifactWriteFailed(
                f"Failed to write controller file {config.project_relative(target)}: "
                f"{exc.strerror or exc}",
                path=str(target),
            )
        )
    return ScaffoldOutput.ok(
        "Created controller file", written=[config.project_relative(target)]
    )
