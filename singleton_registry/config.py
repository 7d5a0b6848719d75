import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

# Путь к YAML-конфигу (может переопределяться env)
CONFIG_ENV = "SINGLETON_REGISTRY_CONFIG"
LOG_LEVEL_ENV = "SINGLETON_REGISTRY_LOG_LEVEL"
DEFAULT_CONFIG_PATH = "singleton_registry.yaml"


@dataclass
class AppConfig:
    manifest_path: Optional[str] = None
    log_level: str = "INFO"
    json_logs: bool = False

    @property
    def level(self) -> int:
        value = logging.getLevelName(self.log_level.upper())
        return value if isinstance(value, int) else logging.INFO


def load_config(path: Optional[str] = None) -> AppConfig:
    cfg_path = path or os.environ.get(CONFIG_ENV, DEFAULT_CONFIG_PATH)
    # Defaults
    data: Dict[str, Any] = {
        "manifest_path": None,
        "log_level": "INFO",
        "json_logs": False,
    }
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            y = yaml.safe_load(f) or {}
        # Merge shallow
        if isinstance(y, dict):
            if y.get("manifest"):
                data["manifest_path"] = str(y["manifest"])
            if "log_level" in y:
                data["log_level"] = str(y["log_level"])
            if "json_logs" in y:
                data["json_logs"] = bool(y["json_logs"])
    except FileNotFoundError:
        # Конфиг может отсутствовать — используем значения по умолчанию
        pass
    except yaml.YAMLError as e:
        logger.warning("Invalid config %s, using defaults: %s", cfg_path, e)
    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        data["log_level"] = env_level
    return AppConfig(**data)
