"""
Process-wide registry of named shared instances.

Any part of an application can register an already-built object under a
unique name and fetch the very same object elsewhere by that name.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from singleton_registry.errors import DuplicateNameError, NotFoundError

logger = logging.getLogger(__name__)

UNKNOWN_TYPE = "Unknown"

Classifier = Callable[[Any], Optional[str]]


@dataclass(frozen=True)
class Entry:
    name: str
    instance: Any
    type: str
    # introspection only, never compared or dispatched on
    type_handle: type


def classify(instance: Any) -> str:
    """Label an instance by the name of its runtime class."""
    if instance is None:
        return UNKNOWN_TYPE
    name = getattr(type(instance), "__name__", None)
    return name or UNKNOWN_TYPE


class Registry:
    def __init__(self, classifier: Optional[Classifier] = None):
        self._classify = classifier or classify
        self._entries: Dict[str, Entry] = {}
        self._lock = threading.Lock()

    def register(self, name: str, instance: Any, type: Optional[str] = None) -> None:
        with self._lock:
            if name in self._entries:
                raise DuplicateNameError(name)
            label = type or self._classify(instance) or UNKNOWN_TYPE
            self._entries[name] = Entry(
                name=name,
                instance=instance,
                type=label,
                type_handle=instance.__class__,
            )
        logger.debug("registered %s (%s)", name, label)

    def get(self, name: str) -> Any:
        with self._lock:
            entry = self._entries.get(name)
        if entry is None:
            raise NotFoundError(name)
        return entry.instance

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._entries

    def get_entry(self, name: str) -> Optional[Entry]:
        with self._lock:
            return self._entries.get(name)

    def list(self, type: Optional[str] = None) -> List[Dict[str, str]]:
        """Return ``{"name", "type"}`` pairs, optionally only those with label ``type``."""
        with self._lock:
            entries = list(self._entries.values())
        return [
            {"name": e.name, "type": e.type}
            for e in entries
            if type is None or e.type == type
        ]

    def clear(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        if count:
            logger.debug("cleared %d entries", count)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# Единственный экземпляр на процесс; создаётся при первом обращении
_registry: Optional[Registry] = None
_registry_lock = threading.Lock()


def get_registry() -> Registry:
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = Registry()
    return _registry
