"""
Разрешение переменных шаблона.

Поддерживает пути с разделителем '.': первый сегмент ищется в контексте,
последующие - в ключах словарей, индексах списков и атрибутах объектов.
Аксессоры, встреченные по пути, вызываются автоматически.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from .context import Context
from .errors import VariableNotFound
from .values import ValueKind, classify, invoke

# Разделитель сегментов пути
VAR_LOOKUP_SEPARATOR = "."

_MISSING = object()


@dataclass(frozen=True)
class Variable:
    """Выражение-путь к переменной, например ``user.profile.name``."""
    expr: str

    @property
    def segments(self) -> List[str]:
        return self.expr.split(VAR_LOOKUP_SEPARATOR)

    def resolve(self, context: Context) -> Any:
        """
        Разрешает путь в контексте.

        Raises:
            VariableNotFound: Если какой-либо сегмент не найден
        """
        first, *rest = self.segments

        # Явно заданный None - это значение, а не отсутствие переменной
        if not context.has_key(first):
            raise VariableNotFound(f"Could not find [{first}] in {context!r}", first)
        current = context.get(first)
        if classify(current) is ValueKind.ACCESSOR:
            current = invoke(current)

        for segment in rest:
            if current is None:
                raise VariableNotFound(f"Could not find [{segment}] in None", segment)
            value = _lookup(current, segment)
            if value is _MISSING:
                raise VariableNotFound(f"Could not find [{segment}] in {current!r}", segment)
            # Аксессор вызывается с текущим объектом в качестве владельца
            if classify(value) is ValueKind.ACCESSOR:
                current = invoke(value, receiver=current, has_receiver=True)
            else:
                current = value

        return current

    def __str__(self) -> str:
        return self.expr


def _lookup(owner: Any, segment: str) -> Any:
    """Ищет сегмент в ключах, индексах или атрибутах владельца."""
    kind = classify(owner)
    if kind is ValueKind.MAPPING:
        return owner[segment] if segment in owner else _MISSING
    if kind is ValueKind.LIST and segment.isdigit():
        index = int(segment)
        return owner[index] if index < len(owner) else _MISSING
    # Приватные атрибуты в шаблонах не видны
    if segment.startswith("_"):
        return _MISSING
    try:
        return getattr(owner, segment)
    except AttributeError:
        return _MISSING


__all__ = ["Variable", "VAR_LOOKUP_SEPARATOR"]
