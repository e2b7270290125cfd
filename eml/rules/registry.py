from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Dict, List, Type

from .base import BaseRule
from ..errors import EMLUserError
from ..types import Severity

__all__ = [
    "UnknownRuleError",
    "UnknownPresetError",
    "register_lazy",
    "register_preset",
    "get_rule_class",
    "get_preset",
    "list_rules",
    "list_presets",
]


class UnknownRuleError(EMLUserError):
    pass


class UnknownPresetError(EMLUserError):
    pass


@dataclass(frozen=True)
class _LazySpec:
    module: str
    class_name: str


# Ленивые спецификации: имя правила → где лежит класс
_LAZY_BY_NAME: Dict[str, _LazySpec] = {}

# Разрешённые классы
_CLASS_BY_NAME: Dict[str, Type[BaseRule]] = {}

# Пресеты конфигурации: имя → {правило: severity}
_PRESETS: Dict[str, Dict[str, Severity]] = {}


def register_lazy(*, name: str, module: str, class_name: str) -> None:
    """
    Зарегистрировать правило «по строкам» без импорта модуля.
    Модуль импортируется при первом обращении к правилу.
    """
    _LAZY_BY_NAME[name] = _LazySpec(module=module, class_name=class_name)


def register_preset(name: str, rules: Dict[str, Severity]) -> None:
    _PRESETS[name] = dict(rules)


def _load_rule_from_spec(name: str, spec: _LazySpec) -> Type[BaseRule]:
    # Поддерживаем как относительные (".entry_imports") так и абсолютные имена модулей.
    mod = importlib.import_module(spec.module, package=__package__)
    cls = getattr(mod, spec.class_name, None)
    if cls is None:
        raise RuntimeError(f"Rule class '{spec.class_name}' not found in {spec.module}")
    if not issubclass(cls, BaseRule):
        raise TypeError(f"{spec.module}.{spec.class_name} is not a subclass of BaseRule")
    if cls.meta.name != name:
        raise RuntimeError(f"Rule registered as '{name}' declares name '{cls.meta.name}'")

    _CLASS_BY_NAME[name] = cls
    return cls


def get_rule_class(name: str) -> Type[BaseRule]:
    """Вернуть КЛАСС правила по имени. Ничего не инстанцируем."""
    cls = _CLASS_BY_NAME.get(name)
    if cls:
        return cls
    spec = _LAZY_BY_NAME.get(name)
    if spec is None:
        known = ", ".join(sorted(_LAZY_BY_NAME)) or "none"
        raise UnknownRuleError(f"Unknown rule '{name}' (known rules: {known})")
    return _load_rule_from_spec(name, spec)


def get_preset(name: str) -> Dict[str, Severity]:
    try:
        return dict(_PRESETS[name])
    except KeyError:
        known = ", ".join(sorted(_PRESETS)) or "none"
        raise UnknownPresetError(f"Unknown config preset '{name}' (known presets: {known})") from None


def list_rules() -> List[str]:
    return sorted(_LAZY_BY_NAME)


def list_presets() -> List[str]:
    return sorted(_PRESETS)
