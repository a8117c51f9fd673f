"""Controller auto-import table (``strm_controllers/__init__.py``).

The route table does ``from strm_controllers import *``, so every controller
class must be imported here.  The file is append-only: one line per module
creation, never deduplicated.  Re-creating a module appends the same import
again, which Python tolerates.
"""

from __future__ import annotations

import asyncio

from storm_cli.config import Config
from storm_cli.errors import AutoImportUpdateFailed, ScaffoldOutput
from storm_cli.names import NormalizedName
from storm_cli.utils import append_text


def auto_import_line(names: NormalizedName) -> str:
    """``from .book_controller import BookController`` plus a newline."""
    return f"from .{names.controller_name} import {names.controller_class_name}\n"


async def append_auto_import(config: Config, names: NormalizedName) -> ScaffoldOutput:
    """Append the controller import for *names* to the auto-import table."""
    target = config.auto_imports_path
    try:
        await asyncio.to_thread(append_text, target, auto_import_line(names))
    except OSError as exc:
        return ScaffoldOutput.failed(
            AutoImportUpdateFailed(
                f"Failed to update {config.project_relative(target)}: "
                f"{exc.strerror or exc}",
                path=str(target),
            )
        )
    return ScaffoldOutput.ok(
        "Updated auto imports", written=[config.project_relative(target)]
    )
