"""
Короткие конструкторы узлов для описания шаблонов в коде.

    tpl = [
        "Hello {{ name }}!",
        for_({"item": "items"},
            if_("forloop.first", "First: "),
            var("item.title"),
        ),
    ]

Строки среди дочерних элементов превращаются в TextNode, а маркеры
endfor()/endif() среди них сворачиваются через assemble().
"""

from __future__ import annotations

from typing import Any, List, Mapping, Union

from .assembly import assemble
from .nodes import EndForNode, EndIfNode, ForNode, IfNode, Node, Predicate, TextNode, VariableNode
from .variable import Variable

Child = Union[Node, str, EndForNode, EndIfNode]


def _children(contents: tuple) -> List[Any]:
    return [TextNode(item) if isinstance(item, str) else item for item in contents]


def nodes(*contents: Child) -> List[Node]:
    """Собирает список узлов верхнего уровня."""
    return assemble(_children(contents))


def text(value: str) -> TextNode:
    return TextNode(value)


def var(expr: str) -> VariableNode:
    return VariableNode(Variable(expr))


def for_(props: Mapping[str, str], *contents: Child) -> ForNode:
    """Цикл ``{"item": "items"}`` или ``{"key, value": "pairs"}``."""
    return ForNode.from_props(props, assemble(_children(contents)))


def endfor() -> EndForNode:
    return EndForNode()


def if_(test: Union[str, Predicate], *contents: Child) -> IfNode:
    return IfNode(test, assemble(_children(contents)))


def endif() -> EndIfNode:
    return EndIfNode()


__all__ = ["nodes", "text", "var", "for_", "endfor", "if_", "endif"]
