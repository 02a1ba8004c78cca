"""
Контекст рендеринга.

Управляет стеком областей видимости с переменными шаблона. Поиск идёт
от самой локальной области к базовой, запись всегда в верхнюю область.
Базовую область снять нельзя.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Sequence

from .errors import ContextUnderflow

if TYPE_CHECKING:
    from .nodes import Node

Frame = Dict[str, Any]

_UNSET = object()


class Context:
    """
    Стек областей видимости для переменных шаблона.
    """

    def __init__(self, initial: Optional[Frame] = None):
        """
        Args:
            initial: Базовая область (создаётся пустая, если не задана)
        """
        self.stack: List[Frame] = [initial if initial is not None else {}]

    @property
    def depth(self) -> int:
        """Текущее количество областей в стеке."""
        return len(self.stack)

    def push(self, frame: Optional[Frame] = None) -> None:
        self.stack.append(frame if frame is not None else {})

    def pop(self) -> Frame:
        """
        Снимает верхнюю область.

        Raises:
            ContextUnderflow: Если в стеке осталась только базовая область
        """
        if len(self.stack) == 1:
            raise ContextUnderflow()
        return self.stack.pop()

    @contextmanager
    def scope(self, frame: Optional[Frame] = None) -> Iterator[Context]:
        """Открывает область и гарантированно снимает её при выходе."""
        self.push(frame)
        try:
            yield self
        finally:
            self.pop()

    def set(self, key: str, value: Any) -> None:
        self.stack[-1][key] = value

    def unset(self, key: str) -> None:
        """Удаляет переменную из верхней области (внешние области не трогает)."""
        self.stack[-1].pop(key, None)

    def zip(self, keys: Sequence[str], values: Any) -> None:
        """
        Записывает несколько значений в верхнюю область.

        Лишние имена или значения молча отбрасываются (усечение по
        более короткой последовательности).
        """
        top = self.stack[-1]
        for key, value in zip(keys, values):
            top[key] = value

    def get(self, key: str, default: Any = _UNSET) -> Any:
        """
        Ищет переменную от верхней области к нижней.

        Для отсутствующих переменных возвращает default, а если он не задан,
        None. Отличить «не задано» от «задано как None» можно через has_key().
        """
        for frame in reversed(self.stack):
            if key in frame:
                return frame[key]
        return None if default is _UNSET else default

    def has_key(self, key: str) -> bool:
        """Проверяет, задана ли переменная хотя бы в одной области."""
        return any(key in frame for frame in self.stack)

    def __contains__(self, key: str) -> bool:
        return self.has_key(key)

    def render(self, contents: Sequence[Node]) -> List[Any]:
        """Вызывает render() у каждого узла с этим контекстом."""
        return [node.render(self) for node in contents]

    def __repr__(self) -> str:
        keys = sorted({key for frame in self.stack for key in frame})
        return f"Context(depth={len(self.stack)}, keys={keys})"


__all__ = ["Context", "Frame"]
