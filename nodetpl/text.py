"""
Компилятор текста с подстановками {{ ... }}.

Текст без маркеров остаётся статическим. Текст с маркерами разбивается
один раз на чередующиеся куски литерального текста и переменных.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .context import Context
from .values import stringify
from .variable import Variable

# Маркер подстановки, нежадный
VARIABLE_RE = re.compile(r"{{(.*?)}}")

TextPart = Union[str, Variable]


@dataclass(frozen=True)
class CompiledText:
    """Скомпилированный текст: чередование литералов и переменных."""
    parts: Tuple[TextPart, ...]

    def __call__(self, context: Context) -> str:
        return "".join(
            stringify(part.resolve(context)) if isinstance(part, Variable) else part
            for part in self.parts
        )


def has_markers(text: str) -> bool:
    return VARIABLE_RE.search(text) is not None


def compile_text(text: str) -> Optional[CompiledText]:
    """
    Компилирует текст в функцию рендеринга.

    Returns:
        None для статического текста, иначе CompiledText
    """
    if not has_markers(text):
        return None

    parts = []
    # re.split с группой даёт нечётные индексы для выражений
    for i, bit in enumerate(VARIABLE_RE.split(text)):
        if i % 2:
            parts.append(Variable(bit.strip()))
        elif bit:
            parts.append(bit)
    return CompiledText(parts=tuple(parts))


__all__ = ["VARIABLE_RE", "CompiledText", "compile_text", "has_markers"]
