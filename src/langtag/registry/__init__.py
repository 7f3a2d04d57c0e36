from langtag.registry.base import Category, Registry, RegistryEntry, as_category
from langtag.registry.iana import IanaRegistry, load_registry, read_registry
from langtag.registry.minimal import MinimalRegistry

__all__ = [
    "Category",
    "IanaRegistry",
    "MinimalRegistry",
    "Registry",
    "RegistryEntry",
    "as_category",
    "load_registry",
    "read_registry",
]
