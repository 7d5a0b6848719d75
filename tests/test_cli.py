import json
import logging
from contextlib import contextmanager

import pytest
from pythonjsonlogger import jsonlogger

from singleton_registry.cli import main
from singleton_registry.config import CONFIG_ENV, LOG_LEVEL_ENV

MANIFEST = """
instances:
  - name: cacheRedis
    factory: types:SimpleNamespace
    type: Redis
    kwargs: {url: "redis://cache:6379"}
  - name: api
    factory: types:SimpleNamespace
    type: ApiClient
    kwargs: {base_url: "https://api.example.com"}
"""


@contextmanager
def bare_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    root.handlers = []
    try:
        yield root
    finally:
        root.handlers = handlers
        root.setLevel(level)


@pytest.fixture
def manifest(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV, str(tmp_path / "missing.yaml"))
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    p = tmp_path / "instances.yaml"
    p.write_text(MANIFEST, encoding="utf-8")
    return str(p)


def test_list_json(manifest, capsys):
    assert main(["list", "--manifest", manifest, "--json"]) == 0
    items = json.loads(capsys.readouterr().out)
    assert {(i["name"], i["type"]) for i in items} == {("cacheRedis", "Redis"), ("api", "ApiClient")}


def test_list_filtered_text(manifest, capsys):
    assert main(["list", "--manifest", manifest, "--type", "Redis"]) == 0
    out = capsys.readouterr().out
    assert "cacheRedis\tRedis" in out
    assert "api" not in out


def test_list_empty(manifest, capsys):
    assert main(["list"]) == 0
    assert "(empty)" in capsys.readouterr().out


def test_show(manifest, capsys):
    assert main(["show", "cacheRedis", "--manifest", manifest]) == 0
    out = capsys.readouterr().out
    assert "type:   Redis" in out
    assert "class:  types.SimpleNamespace" in out
    assert "redis://cache:6379" in out


def test_show_unknown(manifest, capsys):
    assert main(["show", "nope", "--manifest", manifest]) == 1
    out = capsys.readouterr().out
    assert "Unknown instance: nope" in out
    assert "api, cacheRedis" in out


def test_missing_manifest(manifest, tmp_path, capsys):
    assert main(["list", "--manifest", str(tmp_path / "nope.yaml")]) == 1
    assert "Manifest not found" in capsys.readouterr().out


def test_bad_manifest(manifest, tmp_path, capsys):
    bad = tmp_path / "bad.yaml"
    bad.write_text("- {name: a, factory: 'no_such_module_xyz:make'}\n", encoding="utf-8")
    assert main(["list", "--manifest", str(bad)]) == 2
    assert "Manifest error" in capsys.readouterr().out


def test_manifest_from_config(manifest, tmp_path, monkeypatch, capsys):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(f"manifest: {manifest}\n", encoding="utf-8")
    assert main(["--config", str(cfg), "list", "--json"]) == 0
    assert len(json.loads(capsys.readouterr().out)) == 2


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_factory_error_exits_2(manifest, tmp_path, capsys):
    bad = tmp_path / "bad_kwargs.yaml"
    bad.write_text("- {name: p, factory: 'decimal:Decimal', kwargs: {bogus: 1}}\n", encoding="utf-8")
    assert main(["list", "--manifest", str(bad)]) == 2
    assert "Item 'p'" in capsys.readouterr().out


def test_manifest_directory_exits_2(manifest, tmp_path, capsys):
    assert main(["list", "--manifest", str(tmp_path)]) == 2
    assert "Cannot read manifest" in capsys.readouterr().out


def test_broken_config_uses_defaults(manifest, tmp_path, capsys):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("log_level: [\n", encoding="utf-8")
    assert main(["--config", str(cfg), "list", "--manifest", manifest, "--json"]) == 0
    assert len(json.loads(capsys.readouterr().out)) == 2


def test_json_logs_flag(manifest, capsys):
    with bare_root_logger() as root:
        assert main(["--json-logs", "list", "--manifest", manifest]) == 0
        assert isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)

    lines = [json.loads(line) for line in capsys.readouterr().err.strip().splitlines()]
    assert {"name": "singleton_registry.manifest", "message": "manifest registered 2 instances"}.items() <= lines[-1].items()


def test_json_logs_from_config(manifest, tmp_path):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("json_logs: true\n", encoding="utf-8")
    with bare_root_logger() as root:
        assert main(["--config", str(cfg), "list"]) == 0
        assert isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)


def test_plain_logs_by_default(manifest, capsys):
    with bare_root_logger() as root:
        assert main(["list", "--manifest", manifest]) == 0
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)
        assert root.level == logging.INFO

    assert "INFO singleton_registry.manifest: manifest registered 2 instances" in capsys.readouterr().err
