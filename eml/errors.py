"""
Ошибки, которые CLI показывает пользователю одной строкой (код выхода 2).

Всё, что не наследует EMLUserError, считается дефектом инструмента
и выходит наружу с трейсбеком.
"""

from __future__ import annotations


class EMLUserError(Exception):
    """Проблема на стороне пользователя: конфиг, имя правила, путь цели."""
    pass


class ConfigError(EMLUserError):
    """eml.yaml не читается или не проходит валидацию."""
    pass


class TargetNotFoundError(EMLUserError):
    """Цель `eml check` не существует или лежит вне корня проекта."""
    pass


__all__ = ["EMLUserError", "ConfigError", "TargetNotFoundError"]
