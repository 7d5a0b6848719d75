"""
Startup manifest: build objects listed in YAML and register them.

    instances:
      - name: cacheRedis
        factory: myapp.clients:make_redis
        type: Redis
        kwargs: {url: "redis://cache:6379"}

Entries never reference each other; each factory gets only its own args.
"""
import importlib
import logging
from typing import Any, Callable, Dict, List, Optional

import yaml

from singleton_registry.errors import DuplicateNameError, ManifestError
from singleton_registry.registry import Registry, get_registry

logger = logging.getLogger(__name__)


def load_manifest(path: str) -> List[Dict[str, Any]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ManifestError(f"Cannot read manifest {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return []
    if isinstance(data, dict):
        if "instances" not in data:
            raise ManifestError(f"{path}: missing 'instances' key")
        data = data["instances"] or []
    if not isinstance(data, list):
        raise ManifestError(f"{path}: expected a list of instances")
    return [_check_item(item, i) for i, item in enumerate(data)]


def _check_item(item: Any, index: int) -> Dict[str, Any]:
    if not isinstance(item, dict):
        raise ManifestError(f"Item #{index}: expected a mapping")
    for key in ("name", "factory"):
        if not item.get(key) or not isinstance(item[key], str):
            raise ManifestError(f"Item #{index}: '{key}' is required")
    if not isinstance(item.get("args") or [], list):
        raise ManifestError(f"Item '{item['name']}': 'args' must be a list")
    if not isinstance(item.get("kwargs") or {}, dict):
        raise ManifestError(f"Item '{item['name']}': 'kwargs' must be a mapping")
    if item.get("type") is not None and not isinstance(item["type"], str):
        raise ManifestError(f"Item '{item['name']}': 'type' must be a string")
    return item


def resolve_factory(path: str) -> Callable[..., Any]:
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ManifestError(f"Bad factory '{path}', expected 'package.module:attribute'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ManifestError(f"Cannot import '{module_name}': {e}") from e
    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ManifestError(f"'{module_name}' has no attribute '{attr}'") from e
    if not callable(target):
        raise ManifestError(f"Factory '{path}' is not callable")
    return target


def register_manifest(items: List[Dict[str, Any]], registry: Optional[Registry] = None) -> List[str]:
    """Build and register every item; returns the names in manifest order.

    Name clashes are detected before any factory runs.
    """
    reg = registry or get_registry()
    seen = set()
    for item in items:
        name = item["name"]
        if name in seen or reg.has(name):
            raise DuplicateNameError(name)
        seen.add(name)

    names: List[str] = []
    for item in items:
        factory = resolve_factory(item["factory"])
        try:
            instance = factory(*(item.get("args") or []), **(item.get("kwargs") or {}))
        except Exception as e:
            raise ManifestError(f"Item '{item['name']}': {e}") from e
        reg.register(item["name"], instance, item.get("type"))
        names.append(item["name"])
    logger.info("manifest registered %d instances", len(names))
    return names
