#!/usr/bin/env python3
import argparse
import json
from pathlib import Path
from typing import List, Optional

from singleton_registry.config import load_config
from singleton_registry.errors import RegistryError
from singleton_registry.logging_setup import setup_logging
from singleton_registry.manifest import load_manifest, register_manifest
from singleton_registry.registry import get_registry


def build_parser():
    p = argparse.ArgumentParser(description="Singleton registry CLI: bootstrap a manifest and inspect entries")
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd")

    sp = sub.add_parser("list", help="List registered instances")
    sp.add_argument("--manifest", default=None, help="Path to instances manifest (YAML)")
    sp.add_argument("--type", dest="type_label", default=None, help="Only entries with this type label")
    sp.add_argument("--json", action="store_true", help="Print as JSON")

    sp2 = sub.add_parser("show", help="Show one entry")
    sp2.add_argument("name")
    sp2.add_argument("--manifest", default=None, help="Path to instances manifest (YAML)")
    return p


def _bootstrap(manifest: Optional[str]) -> int:
    if not manifest:
        return 0
    path = Path(manifest)
    if not path.exists():
        print(f"❌ Manifest not found: {path}")
        return 1
    try:
        register_manifest(load_manifest(str(path)))
    except RegistryError as e:
        print(f"❌ Manifest error: {e}")
        return 2
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.cmd:
        parser.print_help()
        return 0

    cfg = load_config(args.config)
    if args.verbose:
        cfg.log_level = "DEBUG"
    setup_logging(cfg.level, json_logs=args.json_logs or cfg.json_logs)

    rc = _bootstrap(args.manifest or cfg.manifest_path)
    if rc:
        return rc
    registry = get_registry()

    if args.cmd == "list":
        items = registry.list(type=args.type_label)
        if args.json:
            print(json.dumps(items, ensure_ascii=False, indent=2))
        elif not items:
            print("(empty)")
        else:
            for item in sorted(items, key=lambda i: i["name"]):
                print(f"{item['name']}\t{item['type']}")
        return 0

    if args.cmd == "show":
        entry = registry.get_entry(args.name)
        if entry is None:
            available = ", ".join(sorted(i["name"] for i in registry.list())) or "(empty)"
            print(f"❌ Unknown instance: {args.name}. Registered: {available}")
            return 1
        handle = entry.type_handle
        print(f"name:   {entry.name}")
        print(f"type:   {entry.type}")
        print(f"class:  {handle.__module__}.{handle.__qualname__}")
        print(f"value:  {entry.instance!r}")
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
