"""ST🌀RM module registry.

Usage::

    from storm_cli.registry import RegistryStore, build_module_descriptor

    store = RegistryStore(config.registry_path)
    registry = await store.load()
    registry.upsert("book", build_module_descriptor(normalize_name("book")))
    await store.persist(registry)
"""

from storm_cli.registry.models import (
    ControllerDescriptor,
    ModuleDescriptor,
    ModuleRegistry,
    PageDescriptor,
    build_module_descriptor,
)
from storm_cli.registry.store import RegistryStore

__all__ = [
    "ControllerDescriptor",
    "ModuleDescriptor",
    "ModuleRegistry",
    "PageDescriptor",
    "RegistryStore",
    "build_module_descriptor",
]
