"""Frontend page component generation.

One index page and one detail page per (non controller-only) module, in the
flavour of the project's frontend framework.  Pages are written to
``strm_fe_<frontend>/src/pages/<Plural>/``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from storm_cli.config import Config, FrontendOption, ProjectSettings
from storm_cli.errors import ArtifactWriteFailed, ScaffoldError, ScaffoldOutput
from storm_cli.names import controller_class_name
from storm_cli.registry.models import ModuleDescriptor, PageDescriptor
from storm_cli.utils import print_process_success, write_text

from .templates import TemplateRenderer, default_renderer


def generate_index_page(
    frontend: FrontendOption,
    component_name: str,
    component_path: str = "",
    brand: str = "",
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    """Render the list page for a module."""
    renderer = renderer or default_renderer()
    frontend = FrontendOption(frontend)
    return renderer.render(
        f"frontend/{frontend.value}/index.{frontend.page_extension}.j2",
        {
            "brand": brand,
            "component_name": component_name,
            "component_path": component_path or f"{component_name}/Index",
        },
    )


def generate_detail_page(
    frontend: FrontendOption,
    component_name: str,
    component_path: str,
    controller_name: str,
    endpoint_base: str,
    brand: str = "",
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    """Render the single-item page, which fetches ``/api/<endpoint_base>/<id>``."""
    renderer = renderer or default_renderer()
    frontend = FrontendOption(frontend)
    return renderer.render(
        f"frontend/{frontend.value}/detail.{frontend.page_extension}.j2",
        {
            "brand": brand,
            "component_name": component_name,
            "component_path": component_path,
            "controller_name": controller_name,
            "controller_class": controller_class_name(controller_name),
            "endpoint_base": endpoint_base,
        },
    )


def page_file_name(page: PageDescriptor, frontend: FrontendOption) -> str:
    """``Index.<ext>`` for the index page, ``<ComponentName>.<ext>`` otherwise."""
    ext = FrontendOption(frontend).page_extension
    if page.is_index:
        return f"Index.{ext}"
    return f"{page.component_name}.{ext}"


def render_module_pages(
    module: ModuleDescriptor,
    settings: ProjectSettings,
    brand: str = "",
) -> list[tuple[str, str, str]]:
    """Render every page of *module* as ``(folder, file_name, content)`` triples."""
    rendered: list[tuple[str, str, str]] = []
    for page in module.pages:
        if page.is_index:
            content = generate_index_page(
                settings.frontend, page.component_name, page.component_path, brand
            )
        else:
            content = generate_detail_page(
                settings.frontend,
                page.component_name,
                page.component_path,
                module.controller.controller_name,
                module.controller.endpoint_base,
                brand,
            )
        folder = page.component_path.rsplit("/", 1)[0]
        rendered.append((folder, page_file_name(page, settings.frontend), content))
    return rendered


async def write_frontend_pages(
    config: Config,
    module: ModuleDescriptor,
) -> ScaffoldOutput:
    """Write the page components of *module* under ``src/pages/``.

    Each page lands in the folder named by its ``componentPath``, e.g.
    ``Books/Index`` -> ``src/pages/Books/Index.tsx``.

    Controller-only modules have no pages and succeed without touching the
    frontend.  The project settings are only loaded when there is something
    to write.
    """
    if module.controller_only or not module.pages:
        return ScaffoldOutput.ok("Controller-only module, no frontend pages")

    try:
        settings = await asyncio.to_thread(config.load_settings)
    except ScaffoldError as exc:
        return ScaffoldOutput.failed(exc)

    pages_dir = config.pages_dir(settings)
    written: list[str] = []
    for folder, file_name, content in render_module_pages(module, settings, config.brand):
        target: Path = pages_dir / folder / file_name
        try:
            await asyncio.to_thread(write_text, target, content)
        except OSError as exc:
            output = ScaffoldOutput.failed(
                ArtifactWriteFailed(
                    f"Failed to write frontend component "
                    f"{config.project_relative(target)}: {exc.strerror or exc}",
                    path=str(target),
                )
            )
            output.written = written
            return output
        written.append(config.project_relative(target))
        print_process_success(
            "Wrote frontend component", written[-1], verbose=config.verbose
        )

    return ScaffoldOutput.ok("Created frontend page components", written=written)
