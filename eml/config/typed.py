"""
Типизация сырых YAML-данных по аннотациям dataclass / pydantic-моделей.

Загрузчик строгий: лишние ключи, пропущенные обязательные поля и значения
не того типа дают ConfigLoadError с путём до поля, например
"$.rules.no-invalid-entry-imports: expected one of ['error', 'warn', 'off'], got 'fatal'".
"""

from __future__ import annotations

import dataclasses
import logging
import sys
import typing as t
from enum import Enum
from types import NoneType, UnionType
from typing import Any, Callable, List, Tuple, get_args, get_origin

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class ConfigLoadError(ValueError):
    """Значение конфига не подходит под объявленный тип."""
    pass


def _name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or str(tp)


def _kind(val: Any) -> str:
    return "null" if val is None else type(val).__name__


def _fail(path: str, msg: str) -> ConfigLoadError:
    logger.debug("config type error at %s: %s", path, msg)
    return ConfigLoadError(f"{path}: {msg}")


# ---- обработчики по виду аннотации ----

def _load_model(tp: Any, val: Any, path: str) -> Any:
    try:
        return tp.model_validate(val)
    except ValidationError as e:
        raise _fail(path, f"validation error: {e}") from None


def _load_dataclass(tp: Any, val: Any, path: str) -> Any:
    if not isinstance(val, dict):
        raise _fail(path, f"expected mapping for {_name(tp)}, got {_kind(val)}")
    module = sys.modules.get(tp.__module__)
    hints = t.get_type_hints(tp, globalns=vars(module) if module else None)
    init_fields = {f.name: f for f in dataclasses.fields(tp) if f.init}

    unknown = sorted(str(k) for k in val if k not in init_fields)
    if unknown:
        raise _fail(path, f"unknown key(s): {unknown}")

    kwargs = {}
    for name, f in init_fields.items():
        if name in val:
            kwargs[name] = load_typed(hints.get(name, f.type), val[name], path=f"{path}.{name}")
        elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            raise _fail(f"{path}.{name}", "required field missing")
    return tp(**kwargs)


def _load_literal(tp: Any, val: Any, path: str) -> Any:
    allowed = list(get_args(tp))
    if val not in allowed:
        raise _fail(path, f"expected one of {allowed}, got {val!r}")
    return val


def _load_union(tp: Any, val: Any, path: str) -> Any:
    problems: List[str] = []
    for variant in get_args(tp):
        if variant is NoneType:
            if val is None:
                return None
            continue
        try:
            return load_typed(variant, val, path=path)
        except ConfigLoadError as e:
            problems.append(str(e))
    raise _fail(path, " | ".join(problems) or f"no variant of {tp} matched")


def _load_dict(tp: Any, val: Any, path: str) -> Any:
    if not isinstance(val, dict):
        raise _fail(path, f"expected mapping, got {_kind(val)}")
    kt, vt = get_args(tp) or (Any, Any)
    out = {}
    for k, v in val.items():
        key = load_typed(kt, k, path=f"{path}.<key>")
        out[key] = load_typed(vt, v, path=f"{path}.{key}")
    return out


def _load_collection(tp: Any, val: Any, path: str) -> Any:
    if not isinstance(val, (list, tuple)):
        raise _fail(path, f"expected list, got {_kind(val)}")
    # Tuple[X, ...] и List[X]: тип элемента — первый аргумент
    item_tp = (get_args(tp) or (Any,))[0]
    items = [load_typed(item_tp, v, path=f"{path}[{i}]") for i, v in enumerate(val)]
    container = get_origin(tp)
    return container(items) if container in (tuple, set, frozenset) else items


def _load_enum(tp: Any, val: Any, path: str) -> Any:
    if isinstance(val, tp):
        return val
    try:
        return tp(val)
    except ValueError:
        raise _fail(path, f"expected one of {[m.value for m in tp]}, got {val!r}") from None


def _load_none(tp: Any, val: Any, path: str) -> Any:
    if val is not None:
        raise _fail(path, f"expected null, got {_kind(val)}")
    return None


def _load_scalar(tp: Any, val: Any, path: str) -> Any:
    # YAML `true` не должен проходить как int
    if not isinstance(val, tp) or (tp is not bool and isinstance(val, bool)):
        raise _fail(path, f"expected {_name(tp)}, got {_kind(val)}")
    return val


def _load_newtype(tp: Any, val: Any, path: str) -> Any:
    return tp(load_typed(tp.__supertype__, val, path=path))


def _is_class(tp: Any, base: type) -> bool:
    return isinstance(tp, type) and issubclass(tp, base)


Handler = Callable[[Any, Any, str], Any]

# Порядок важен: первый подошедший обработчик выигрывает
_HANDLERS: Tuple[Tuple[Callable[[Any], bool], Handler], ...] = (
    (lambda tp: _is_class(tp, BaseModel), _load_model),
    (lambda tp: isinstance(tp, type) and dataclasses.is_dataclass(tp), _load_dataclass),
    (lambda tp: get_origin(tp) is t.Literal, _load_literal),
    (lambda tp: get_origin(tp) in (t.Union, UnionType), _load_union),
    (lambda tp: get_origin(tp) is dict, _load_dict),
    (lambda tp: get_origin(tp) in (list, tuple, set, frozenset), _load_collection),
    (lambda tp: _is_class(tp, Enum), _load_enum),
    (lambda tp: tp is NoneType, _load_none),
    (lambda tp: tp in (str, int, float, bool), _load_scalar),
    (lambda tp: hasattr(tp, "__supertype__"), _load_newtype),
)


def load_typed(tp: Any, val: Any, *, path: str = "$") -> Any:
    """
    Приводит сырое значение к типу `tp` рекурсивно.

    Args:
        tp: Аннотация (dataclass, pydantic-модель, Literal, Union, Dict, List, ...)
        val: Данные из YAML
        path: Путь до значения для сообщений об ошибках
    """
    if get_origin(tp) is t.Annotated:
        tp = get_args(tp)[0]
    if tp is Any or tp is object:
        return val
    for matches, handler in _HANDLERS:
        if matches(tp):
            return handler(tp, val, path)
    raise _fail(path, f"unsupported annotation {_name(tp)}")


__all__ = ["ConfigLoadError", "load_typed"]
