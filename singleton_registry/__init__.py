"""Process-wide registry of named shared instances."""
from singleton_registry.errors import DuplicateNameError, ManifestError, NotFoundError, RegistryError
from singleton_registry.registry import UNKNOWN_TYPE, Entry, Registry, classify, get_registry

__version__ = "0.1.0"

__all__ = [
    "DuplicateNameError",
    "Entry",
    "ManifestError",
    "NotFoundError",
    "Registry",
    "RegistryError",
    "UNKNOWN_TYPE",
    "classify",
    "get_registry",
    "__version__",
]
