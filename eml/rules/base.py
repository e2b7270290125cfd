from __future__ import annotations

from typing import ClassVar, Dict, Optional

from .entry_paths import DEFAULT_POLICY, PathPolicy
from ..types import ImportSource, RuleHit, RuleMeta

__all__ = ["BaseRule"]


class BaseRule:
    """
    Базовый класс правила.

    Правило получает по одному литералу импорта и либо молчит,
    либо возвращает RuleHit. Severity назначает движок по конфигу.
    """
    #: Метаданные: имя, тип, описание, шаблоны сообщений
    meta: ClassVar[RuleMeta]

    def __init__(self, policy: PathPolicy = DEFAULT_POLICY):
        self.policy = policy

    @property
    def name(self) -> str:
        return self.meta.name

    def messages(self) -> Dict[str, str]:
        """Тексты сообщений с подставленными значениями текущей политики."""
        return {mid: self.render_message(mid) for mid in self.meta.messages}

    def render_message(self, message_id: str) -> str:
        return self.meta.messages[message_id]

    def check(self, source: ImportSource) -> Optional[RuleHit]:
        raise NotImplementedError
