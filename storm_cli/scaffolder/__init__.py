"""ST🌀RM module artifact generators.

Each generator is a pure function from normalised names (or a registry) to
source text; the matching ``write_*`` / ``rebuild_*`` coroutine writes the
result into the project and returns a ``ScaffoldOutput``.

Quick usage::

    from storm_cli.scaffolder import generate_routes, generate_model

    text = generate_routes(registry, brand="ST🌀RM Stack")
"""

from storm_cli.scaffolder.auto_imports import append_auto_import, auto_import_line
from storm_cli.scaffolder.backend_gen import (
    generate_controller,
    generate_model,
    write_controller_file,
    write_model_file,
)
from storm_cli.scaffolder.page_gen import (
    generate_detail_page,
    generate_index_page,
    page_file_name,
    write_frontend_pages,
)
from storm_cli.scaffolder.routes_gen import (
    build_route_bindings,
    generate_routes,
    rebuild_routes,
)
from storm_cli.scaffolder.templates import TemplateRenderer

__all__ = [
    "TemplateRenderer",
    "append_auto_import",
    "auto_import_line",
    "build_route_bindings",
    "generate_controller",
    "generate_detail_page",
    "generate_index_page",
    "generate_model",
    "generate_routes",
    "page_file_name",
    "rebuild_routes",
    "write_controller_file",
    "write_frontend_pages",
    "write_model_file",
]
