"""
Узлы дерева шаблона.

Каждый узел реализует render(context) и возвращает строку (листовые узлы)
или список результатов дочерних узлов (составные узлы). Вложенность
результатов не сглаживается: это задача сборки вывода.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Union

from .context import Context
from .errors import TemplateSyntaxError
from .expressions import compile_expression
from .text import CompiledText, compile_text
from .values import stringify
from .variable import Variable

# Зарезервированное имя переменной с метаданными цикла
FORLOOP_KEY = "forloop"

# Разделитель имён при распаковке нескольких переменных цикла
UNPACK_SEPARATOR_RE = re.compile(r", ?")

Predicate = Callable[[Context], Any]


class Node(ABC):
    """Базовый класс для всех отрисовываемых узлов."""

    @abstractmethod
    def render(self, context: Context) -> Any:
        pass


@dataclass
class TextNode(Node):
    """
    Текст, возможно с подстановками {{ var }}.

    Текст без подстановок отдаётся как есть, без компиляции.
    """
    text: str
    compiled: Optional[CompiledText] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.compiled = compile_text(self.text)

    @property
    def dynamic(self) -> bool:
        return self.compiled is not None

    def render(self, context: Context) -> str:
        return self.compiled(context) if self.compiled is not None else self.text


@dataclass
class VariableNode(Node):
    """Вывод значения одной переменной."""
    variable: Variable

    def render(self, context: Context) -> str:
        return stringify(self.variable.resolve(context))


@dataclass
class IfNode(Node):
    """
    Условный блок: дочерние узлы рендерятся, если проверка истинна.

    Строковое выражение компилируется сразу, поэтому синтаксическая ошибка
    не даёт создать узел.
    """
    test: Union[str, Predicate]
    contents: List[Node] = field(default_factory=list)
    predicate: Predicate = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if callable(self.test):
            self.predicate = self.test
        else:
            self.predicate = compile_expression(self.test)

    def render(self, context: Context) -> List[Any]:
        if self.predicate(context):
            return context.render(self.contents)
        return []


@dataclass
class ForLoop:
    """Метаданные текущей итерации цикла, доступные как ``forloop``."""
    counter: int
    counter0: int
    revcounter: int
    revcounter0: int
    first: bool
    last: bool
    parentloop: Optional[ForLoop] = None

    @classmethod
    def start(cls, length: int, parentloop: Optional[ForLoop] = None) -> ForLoop:
        return cls(
            counter=1,
            counter0=0,
            revcounter=length,
            revcounter0=length - 1,
            first=True,
            last=length == 1,
            parentloop=parentloop,
        )

    def advance(self, last: bool) -> None:
        self.counter += 1
        self.counter0 += 1
        self.revcounter -= 1
        self.revcounter0 -= 1
        self.first = False
        self.last = last


@dataclass
class ForNode(Node):
    """
    Цикл по списку из контекста.

    Каждая итерация связывает переменные цикла в собственной области
    видимости и рендерит все дочерние узлы.
    """
    loop_vars: List[str]
    source: Variable
    contents: List[Node] = field(default_factory=list)

    @classmethod
    def from_props(cls, props: Mapping[str, str], contents: Optional[List[Node]] = None) -> ForNode:
        """
        Создаёт цикл из словаря ``{"имена": "выражение-источник"}``.

        Используется только первая пара словаря.
        """
        if not props:
            raise TemplateSyntaxError("$for requires a {loop_vars: source} mapping")
        names, source = next(iter(props.items()))
        return cls(
            loop_vars=UNPACK_SEPARATOR_RE.split(names),
            source=Variable(source),
            contents=list(contents or []),
        )

    def render(self, context: Context) -> List[Any]:
        items = list(self.source.resolve(context))
        length = len(items)
        forloop = ForLoop.start(length, parentloop=context.get(FORLOOP_KEY))
        results: List[Any] = []

        with context.scope():
            context.set(FORLOOP_KEY, forloop)
            for i, item in enumerate(items):
                if len(self.loop_vars) == 1:
                    context.set(self.loop_vars[0], item)
                else:
                    # Имена, которым не хватило значений, не наследуют прошлую итерацию
                    for name in self.loop_vars:
                        context.unset(name)
                    context.zip(self.loop_vars, item)
                if i > 0:
                    forloop.advance(last=i == length - 1)
                for node in self.contents:
                    results.append(node.render(context))

        return results


@dataclass(frozen=True)
class EndForNode:
    """Маркер конца $for, когда тело задано соседними узлами."""


@dataclass(frozen=True)
class EndIfNode:
    """Маркер конца $if, когда тело задано соседними узлами."""


__all__ = [
    "FORLOOP_KEY",
    "UNPACK_SEPARATOR_RE",
    "Node",
    "TextNode",
    "VariableNode",
    "IfNode",
    "ForLoop",
    "ForNode",
    "EndForNode",
    "EndIfNode",
]
