"""Backend route table rebuild.

``strm_routes/__init__.py`` is never patched: every rebuild replays the whole
registry and rewrites the file.  The header date is taken from the
registry's ``lastUpdated`` stamp rather than the clock, so rebuilding an
unchanged registry reproduces the file byte for byte.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from storm_cli.config import Config
from storm_cli.errors import RegistryUnavailable, RouteRebuildWriteFailed, ScaffoldOutput
from storm_cli.names import controller_class_name
from storm_cli.registry.models import ModuleRegistry
from storm_cli.registry.store import RegistryStore
from storm_cli.utils import write_text

from .templates import TemplateRenderer, default_renderer

_INDENT = " " * 8


def build_route_bindings(registry: ModuleRegistry) -> str:
    """Two ``Route`` lines per module, modules separated by a newline.

    For module key ``book`` with endpoint base ``books``::

        Route('/books', BookController),
        Route('/books/{book}', BookController),
    """
    blocks: list[str] = []
    for module_key, module in registry.iter_modules():
        controller = module.controller
        class_name = controller_class_name(controller.controller_name)
        base = controller.endpoint_base
        blocks.append(
            f"{_INDENT}Route('/{base}', {class_name}),\n"
            f"{_INDENT}Route('/{base}/{{{module_key}}}', {class_name}),"
        )
    return "\n".join(blocks)


def generate_routes(
    registry: ModuleRegistry,
    brand: str,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    """Render the complete route-registration module for *registry*."""
    renderer = renderer or default_renderer()
    generated_on = ""
    if registry.last_updated is not None:
        generated_on = registry.last_updated.date().isoformat()
    return renderer.render(
        "backend/routes.py.j2",
        {
            "brand": brand,
            "generated_on": generated_on,
            "route_bindings": build_route_bindings(registry),
        },
    )


async def rebuild_routes(
    config: Config,
    registry: Optional[ModuleRegistry] = None,
) -> ScaffoldOutput:
    """Regenerate ``strm_routes/__init__.py`` from the registry.

    When *registry* is not given the persisted registry is re-read, so the
    route table always reflects what is on disk.
    """
    if registry is None:
        try:
            registry = await RegistryStore(config.registry_path).load()
        except RegistryUnavailable as exc:
            return ScaffoldOutput.failed(exc)

    target = config.routes_path
    content = generate_routes(registry, config.brand)
    try:
        await asyncio.to_thread(write_text, target, content)
    except OSError as exc:
        return ScaffoldOutput.failed(
            RouteRebuildWriteFailed(
                f"Failed to rewrite {config.project_relative(target)}: "
                f"{exc.strerror or exc}",
                path=str(target),
            )
        )
    return ScaffoldOutput.ok(
        "Rebuilt module routes", written=[config.project_relative(target)]
    )
