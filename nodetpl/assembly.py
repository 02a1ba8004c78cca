"""
Сборка дерева из плоской последовательности с маркерами.

Позволяет задавать тело блока соседними узлами вместо вложения:

    [for_({"item": "items"}), text("{{ item }}"), endfor()]

превращается в

    [ForNode(contents=[TextNode("{{ item }}")])]

Открывающим считается ForNode или IfNode без дочерних узлов.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, List, Sequence, Tuple, Union

from .errors import TemplateSyntaxError
from .nodes import EndForNode, EndIfNode, ForNode, IfNode, Node

BlockNode = Union[ForNode, IfNode]


def _is_opener(item: Any) -> bool:
    return isinstance(item, (ForNode, IfNode)) and not item.contents


def _closes(opener: BlockNode, marker: Any) -> bool:
    if isinstance(opener, ForNode):
        return isinstance(marker, EndForNode)
    return isinstance(marker, EndIfNode)


def _describe(item: Any) -> str:
    if isinstance(item, (ForNode, EndForNode)):
        return "$endfor" if isinstance(item, EndForNode) else "$for"
    return "$endif" if isinstance(item, EndIfNode) else "$if"


def assemble(items: Sequence[Any]) -> List[Node]:
    """
    Сворачивает диапазоны между открывающими узлами и маркерами конца.

    Raises:
        TemplateSyntaxError: Лишний, несовпадающий или незакрытый маркер
    """
    root: List[Node] = []
    stack: List[Tuple[BlockNode, List[Node]]] = []

    for item in items:
        target = stack[-1][1] if stack else root

        if isinstance(item, (EndForNode, EndIfNode)):
            if not stack:
                raise TemplateSyntaxError(f"Unexpected {_describe(item)} without matching opening node")
            opener, body = stack.pop()
            if not _closes(opener, item):
                raise TemplateSyntaxError(
                    f"Mismatched {_describe(item)}: expected end of {_describe(opener)}"
                )
            closed = replace(opener, contents=body)
            (stack[-1][1] if stack else root).append(closed)
        elif _is_opener(item):
            stack.append((item, []))
        else:
            target.append(item)

    if stack:
        opener, _ = stack[-1]
        raise TemplateSyntaxError(f"Unclosed {_describe(opener)} block")

    return root


__all__ = ["assemble"]
