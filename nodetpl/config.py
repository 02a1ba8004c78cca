from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Type

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError, NodeTplError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
DEFAULT_CFG_FILE = "nodetpl.yaml"

# --------------------------------------------------------------------------- #
# DEFAULTS
# --------------------------------------------------------------------------- #
_DEFAULT_CFG: Dict[str, Any] = {
    "schema_version": SCHEMA_VERSION,
    # строка-разделитель при склейке фрагментов вывода
    "joiner": "",
    "trailing_newline": False,
}

# --------------------------------------------------------------------------- #
# YAML loader
# --------------------------------------------------------------------------- #
_yaml = YAML(typ="safe")


@dataclass(frozen=True)
class EngineConfig:
    """Настройки сборки вывода."""
    joiner: str = ""
    trailing_newline: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> EngineConfig:
        joiner = data.get("joiner", "")
        if not isinstance(joiner, str):
            raise ConfigError(f"joiner: expected string, got {type(joiner).__name__}")
        trailing = data.get("trailing_newline", False)
        if not isinstance(trailing, bool):
            raise ConfigError(f"trailing_newline: expected bool, got {type(trailing).__name__}")
        return cls(joiner=joiner, trailing_newline=trailing)


# --------------------------------------------------------------------------- #
# HELPERS
# --------------------------------------------------------------------------- #
def _merge_defaults(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Накладываем значения пользователя поверх дефолтов."""
    cfg = _DEFAULT_CFG.copy()
    cfg.update(raw)
    return cfg


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def load_yaml(path: Path, error_cls: Type[NodeTplError] = ConfigError) -> Any:
    """
    Прочитать YAML-файл безопасным загрузчиком.

    Ошибки чтения и разбора оборачиваются в error_cls.
    """
    try:
        with path.open(encoding="utf-8") as f:
            return _yaml.load(f)
    except OSError as e:
        raise error_cls(f"Cannot read {path}: {e.strerror or e}") from e
    except YAMLError as e:
        raise error_cls(f"Invalid YAML in {path}: {e}") from e


def parse_scalar(text: str) -> Any:
    """Разобрать значение из командной строки как YAML-скаляр ("3" -> 3, "true" -> True)."""
    try:
        return _yaml.load(text)
    except YAMLError as e:
        raise ConfigError(f"Invalid value {text!r}: {e}") from e


def load_config(path: Optional[Path]) -> EngineConfig:
    """
    Загрузить nodetpl.yaml.

    • Если файла нет, вернуть дефолты.
    • Если schema_version отсутствует, считаем версию актуальной.
    """
    if path is None or not path.exists():
        return EngineConfig.from_dict(_DEFAULT_CFG)

    raw = load_yaml(path) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")

    if raw.get("schema_version", SCHEMA_VERSION) != SCHEMA_VERSION:
        raise ConfigError(
            f"Unsupported config schema {raw.get('schema_version')} "
            f"(tool expects {SCHEMA_VERSION})"
        )

    logger.debug("Loaded config from %s", path)
    return EngineConfig.from_dict(_merge_defaults(raw))


__all__ = [
    "EngineConfig",
    "load_config",
    "load_yaml",
    "parse_scalar",
    "DEFAULT_CFG_FILE",
    "SCHEMA_VERSION",
]
