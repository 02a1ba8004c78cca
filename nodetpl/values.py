"""
Классификация значений контекста.

Любое значение, попадающее в контекст, относится к одному из вариантов
ValueKind. Проверка «является ли значение аксессором» сводится к сравнению
тега, без проб возможностей объекта во время разрешения пути.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable


class ValueKind(Enum):
    """Варианты значений контекста."""
    SCALAR = "scalar"
    LIST = "list"
    MAPPING = "mapping"
    ACCESSOR = "accessor"


@dataclass(frozen=True)
class Accessor:
    """
    Явный аксессор, вызываемый с объектом-владельцем.

    При разрешении ``user.display`` функция получит ``user``
    единственным аргументом. На верхнем уровне контекста владельца нет,
    и функция вызывается без аргументов.
    """
    func: Callable[..., Any]

    def __call__(self, *receiver: Any) -> Any:
        return self.func(*receiver)


def classify(value: Any) -> ValueKind:
    """Возвращает вариант значения."""
    if isinstance(value, Accessor):
        return ValueKind.ACCESSOR
    # Строки и байты тоже Sequence, но для шаблона это скаляры
    if isinstance(value, (str, bytes, bytearray)):
        return ValueKind.SCALAR
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, Sequence):
        return ValueKind.LIST
    # Классы вызываемы, но это конструкторы, а не аксессоры
    if callable(value) and not isinstance(value, type):
        if getattr(value, "do_not_call_in_templates", False):
            return ValueKind.SCALAR
        return ValueKind.ACCESSOR
    return ValueKind.SCALAR


def invoke(value: Any, receiver: Any = None, has_receiver: bool = False) -> Any:
    """Вызывает аксессор; явный Accessor получает владельца аргументом."""
    if isinstance(value, Accessor) and has_receiver:
        return value(receiver)
    return value()


def stringify(value: Any) -> str:
    """Приводит значение к строке для вывода (None превращается в пустую строку)."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


__all__ = ["ValueKind", "Accessor", "classify", "invoke", "stringify"]
