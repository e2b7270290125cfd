"""
Загрузчик eml.yaml.

Порядок разрешения severity правил:
  1) пресеты из `extends` (в порядке перечисления);
  2) явные значения из `rules`;
  3) если нет ни того, ни другого — пресет `recommended`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import EXTRA_LINT_EXTENSIONS, ConfigFile, LintConfig
from .paths import cfg_path
from .typed import ConfigLoadError, load_typed
from ..adapters import is_supported_extension
from ..errors import ConfigError
from ..rules import PathPolicy, get_preset, get_rule_class
from ..rules.entry_paths import SEPARATOR
from ..types import Severity

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

DEFAULT_PRESET = "recommended"


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь (пустой файл → {})."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def parse_config(raw: dict, *, origin: str = "eml.yaml") -> ConfigFile:
    """Типизирует сырую мапу; ошибки — с путём до поля."""
    try:
        return load_typed(ConfigFile, raw, path="$")
    except ConfigLoadError as e:
        raise ConfigError(f"{origin}: {e}") from e


def check_alias(alias: str, origin: str) -> None:
    if not alias:
        raise ConfigError(f"{origin}: top_level_alias must not be empty")
    if SEPARATOR in alias or alias.startswith("."):
        raise ConfigError(f"{origin}: top_level_alias must not contain '/' or start with '.': {alias!r}")


def check_extensions(exts: List[str], key: str, origin: str) -> None:
    for ext in exts:
        if not ext.startswith(".") or len(ext) < 2:
            raise ConfigError(f"{origin}: {key} entries must look like '.ts', got {ext!r}")


def _resolve_rules(cf: ConfigFile, origin: str) -> Dict[str, Severity]:
    presets: List[str]
    if cf.extends is None:
        presets = [] if cf.rules else [DEFAULT_PRESET]
    elif isinstance(cf.extends, str):
        presets = [cf.extends]
    else:
        presets = list(cf.extends)

    rules: Dict[str, Severity] = {}
    for name in presets:
        rules.update(get_preset(name))
    rules.update(cf.rules)

    # неизвестное имя правила — ошибка конфигурации
    for name in rules:
        get_rule_class(name)
    logger.debug("%s: effective rules %s", origin, rules)
    return rules


def build_config(
    cf: ConfigFile,
    *,
    source: Optional[Path] = None,
    alias: Optional[str] = None,
    gitignore: Optional[bool] = None,
) -> LintConfig:
    """Разрешает ConfigFile в LintConfig; аргументы-переопределения приходят из CLI."""
    origin = str(source) if source else "<defaults>"

    top_level_alias = alias if alias is not None else cf.top_level_alias
    check_alias(top_level_alias, origin)
    check_extensions(cf.extensions, "extensions", origin)

    if cf.lint_extensions is None:
        lint_exts = list(dict.fromkeys([*cf.extensions, *EXTRA_LINT_EXTENSIONS]))
    else:
        lint_exts = list(dict.fromkeys(cf.lint_extensions))
    check_extensions(lint_exts, "lint_extensions", origin)
    unsupported = [e for e in lint_exts if not is_supported_extension(e)]
    if unsupported:
        raise ConfigError(f"{origin}: no parser for lint_extensions {unsupported}")

    return LintConfig(
        policy=PathPolicy(top_level_alias=top_level_alias, extensions=tuple(cf.extensions)),
        lint_extensions=tuple(lint_exts),
        exclude=tuple(cf.exclude),
        gitignore=cf.gitignore if gitignore is None else gitignore,
        rules=_resolve_rules(cf, origin),
        source=source,
    )


def load_config(
    root: Path,
    config_file: Optional[Path] = None,
    *,
    alias: Optional[str] = None,
    gitignore: Optional[bool] = None,
) -> LintConfig:
    """
    Загружает конфигурацию проекта.

    Args:
        root: Корень проекта (там ищется eml.yaml)
        config_file: Явный путь к конфигу; должен существовать
        alias / gitignore: переопределения из командной строки

    Returns:
        LintConfig со встроенными значениями для отсутствующих ключей
    """
    if config_file is not None:
        path = config_file if config_file.is_absolute() else (root / config_file)
        path = path.resolve()
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
    else:
        path = cfg_path(root)
        if not path.is_file():
            logger.debug("No %s in %s, using built-in defaults", path.name, root)
            return build_config(ConfigFile(), alias=alias, gitignore=gitignore)

    logger.debug("Loading config from %s", path)
    cf = parse_config(_read_yaml_map(path), origin=str(path))
    return build_config(cf, source=path, alias=alias, gitignore=gitignore)


__all__ = [
    "DEFAULT_PRESET",
    "build_config",
    "check_alias",
    "check_extensions",
    "load_config",
    "parse_config",
]
