"""
Рендеринг деревьев узлов и сборка итогового текста.

Узлы возвращают вложенные списки фрагментов; здесь они сглаживаются
и склеиваются в строку.
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from .config import EngineConfig, load_yaml
from .context import Context
from .document import load_document
from .errors import DocumentError
from .nodes import ForNode, IfNode, Node

logger = logging.getLogger(__name__)


def flatten(fragments: Any) -> Iterator[str]:
    """Обходит вложенные списки фрагментов в глубину."""
    if isinstance(fragments, str):
        yield fragments
        return
    for item in fragments:
        yield from flatten(item)


def render(nodes: Sequence[Node], data: Optional[Mapping[str, Any]] = None) -> List[Any]:
    """Рендерит узлы в новом контексте; результат не сглаживается."""
    context = Context(dict(data) if data is not None else None)
    return context.render(nodes)


def render_to_string(
    nodes: Sequence[Node],
    data: Optional[Mapping[str, Any]] = None,
    joiner: str = "",
) -> str:
    return joiner.join(flatten(render(nodes, data)))


def _load_data_files(paths: Iterable[Path]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    for path in paths:
        data = load_yaml(path, error_cls=DocumentError) or {}
        if not isinstance(data, dict):
            raise DocumentError(f"{path}: data file must contain a mapping")
        logger.debug("Loaded %d keys from %s", len(data), path)
        merged.update(data)
    return merged


def run_render(
    doc_path: Path,
    data_paths: Sequence[Path] = (),
    overrides: Optional[Mapping[str, Any]] = None,
    cfg: Optional[EngineConfig] = None,
) -> str:
    """
    Рендерит YAML-документ в текст.

    Приоритет данных базовой области: context документа < файлы данных
    (в порядке перечисления) < явные переопределения.
    """
    cfg = cfg or EngineConfig()
    doc = load_document(doc_path)

    data: Dict[str, Any] = dict(doc.context)
    data.update(_load_data_files(data_paths))
    data.update(overrides or {})

    text = render_to_string(doc.nodes, data, joiner=cfg.joiner)
    if cfg.trailing_newline and not text.endswith("\n"):
        text += "\n"
    logger.info("Rendered %s (%d chars)", doc_path, len(text))
    return text


def _count_nodes(nodes: Sequence[Node], counter: Counter) -> None:
    for node in nodes:
        counter[type(node).__name__] += 1
        if isinstance(node, (ForNode, IfNode)):
            _count_nodes(node.contents, counter)


def run_check(doc_path: Path) -> Dict[str, Any]:
    """
    Строит узлы документа (компилируя все выражения) без рендеринга.

    Returns:
        Сводка: количество узлов по типам и ключи базовой области
    """
    doc = load_document(doc_path)
    counter: Counter = Counter()
    _count_nodes(doc.nodes, counter)
    return {
        "document": str(doc_path),
        "nodes": dict(sorted(counter.items())),
        "context_keys": sorted(doc.context),
    }


__all__ = ["flatten", "render", "render_to_string", "run_render", "run_check"]
