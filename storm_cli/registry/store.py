"""Loading and persisting the module registry file."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from storm_cli.errors import RegistryUnavailable, RegistryWriteFailed
from storm_cli.registry.models import ModuleRegistry
from storm_cli.utils import atomic_write_text


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RegistryStore:
    """Reads and writes ``strm_modules/strm_modules.json``.

    There is no locking: two processes working on the same project will
    read-modify-write the file independently and the last write wins.

    Args:
        path: Location of the registry file.
        clock: Source of "now" for ``lastUpdated`` stamps.
    """

    def __init__(self, path: Path, clock: Callable[[], datetime] = _utcnow) -> None:
        self.path = Path(path)
        self._clock = clock

    # -- Loading -----------------------------------------------------------

    def read(self) -> ModuleRegistry:
        """Synchronously load the registry.

        Raises:
            RegistryUnavailable: The file is missing, unreadable, not JSON, or
                does not match the registry schema.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise RegistryUnavailable(
                f"Failed to read modules file {self.path}: "
                f"{getattr(exc, 'strerror', None) or exc}",
                path=str(self.path),
            ) from exc

        try:
            return ModuleRegistry.model_validate_json(raw)
        except ValidationError as exc:
            raise RegistryUnavailable(
                f"Modules file {self.path} is corrupt: {exc.error_count()} error(s), "
                f"first: {exc.errors()[0]['msg']}",
                path=str(self.path),
            ) from exc

    async def load(self) -> ModuleRegistry:
        """Load the registry without blocking the event loop."""
        return await asyncio.to_thread(self.read)

    # -- Persisting --------------------------------------------------------

    def next_timestamp(self, registry: ModuleRegistry) -> datetime:
        """A ``lastUpdated`` value strictly after the registry's current one."""
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        previous = registry.last_updated
        if previous is not None:
            if previous.tzinfo is None:
                previous = previous.replace(tzinfo=timezone.utc)
            if now <= previous:
                now = previous + timedelta(milliseconds=1)
        return now

    async def persist(self, registry: ModuleRegistry) -> ModuleRegistry:
        """Stamp ``lastUpdated`` and write the registry.

        The file is replaced via a temp file so readers never see a partial
        write.  The in-memory registry is only stamped once the write has
        succeeded.

        Raises:
            RegistryWriteFailed: On any I/O error.
        """
        stamped = registry.model_copy(
            update={"last_updated": self.next_timestamp(registry)}
        )
        try:
            await asyncio.to_thread(atomic_write_text, self.path, stamped.to_json())
        except OSError as exc:
            raise RegistryWriteFailed(
                f"Failed to write modules file {self.path}: {exc.strerror or exc}",
                path=str(self.path),
            ) from exc

        registry.last_updated = stamped.last_updated
        return registry
