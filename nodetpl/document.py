"""
YAML-документы с деревом узлов.

Документ описывает базовую область контекста и список узлов:

    context:
      name: Ann
      items: [1, 2, 3]
    nodes:
      - "Hi {{ name }}!"
      - var: name
      - if: "items && name == 'Ann'"
        body: ["yes"]
      - for: {item: items}
        body: ["{{ forloop.counter }}={{ item }} "]
      - for: {"key, value": pairs}     # плоская форма без body
      - "{{ key }}"
      - end: for

Структура проверяется моделями pydantic, выражения $if компилируются
при построении узлов.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .assembly import assemble
from .config import load_yaml
from .errors import DocumentError
from .nodes import EndForNode, EndIfNode, ForNode, IfNode, Node, TextNode, VariableNode
from .variable import Variable

logger = logging.getLogger(__name__)


class _Item(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class TextItem(_Item):
    text: str


class VarItem(_Item):
    var: str


class IfItem(_Item):
    test: str = Field(alias="if")
    body: List[Any] = Field(default_factory=list)


class ForItem(_Item):
    loop: Dict[str, str] = Field(alias="for")
    body: List[Any] = Field(default_factory=list)

    @field_validator("loop")
    @classmethod
    def _single_entry(cls, v: Dict[str, str]) -> Dict[str, str]:
        if len(v) != 1:
            raise ValueError("expected exactly one {loop_vars: source} entry")
        return v


class EndItem(_Item):
    end: Literal["for", "if"]


class DocumentModel(BaseModel):
    """Корневая структура документа."""
    model_config = ConfigDict(extra="forbid")

    context: Dict[str, Any] = Field(default_factory=dict)
    nodes: List[Any] = Field(default_factory=list)


# Ключ-дискриминатор -> модель элемента
_ITEM_MODELS = {
    "text": TextItem,
    "var": VarItem,
    "if": IfItem,
    "for": ForItem,
    "end": EndItem,
}


@dataclass(frozen=True)
class LoadedDocument:
    """Документ после построения узлов."""
    context: Dict[str, Any] = field(default_factory=dict)
    nodes: List[Node] = field(default_factory=list)


def _format_validation(e: ValidationError) -> str:
    first = e.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return f"{loc}: {first.get('msg')}" if loc else str(first.get("msg"))


def _build_item(raw: Any, where: str) -> Any:
    if isinstance(raw, str):
        return TextNode(raw)
    if not isinstance(raw, dict):
        raise DocumentError(f"{where}: expected string or mapping, got {type(raw).__name__}")

    kinds = [key for key in _ITEM_MODELS if key in raw]
    if len(kinds) != 1:
        raise DocumentError(
            f"{where}: expected exactly one of {', '.join(_ITEM_MODELS)}; got keys {sorted(map(str, raw))}"
        )
    model_cls = _ITEM_MODELS[kinds[0]]
    try:
        item = model_cls.model_validate(raw)
    except ValidationError as e:
        raise DocumentError(f"{where}: {_format_validation(e)}") from e

    if isinstance(item, TextItem):
        return TextNode(item.text)
    if isinstance(item, VarItem):
        return VariableNode(Variable(item.var))
    if isinstance(item, IfItem):
        return IfNode(item.test, build_nodes(item.body, f"{where}.body"))
    if isinstance(item, ForItem):
        return ForNode.from_props(item.loop, build_nodes(item.body, f"{where}.body"))
    return EndForNode() if item.end == "for" else EndIfNode()


def build_nodes(raw_items: List[Any], where: str = "nodes") -> List[Node]:
    """
    Строит и собирает узлы из сырых элементов документа.

    Raises:
        DocumentError: Некорректный элемент
        TemplateSyntaxError: Некорректное выражение или маркеры
    """
    items = [_build_item(raw, f"{where}[{i}]") for i, raw in enumerate(raw_items)]
    return assemble(items)


def parse_document(raw: Any) -> LoadedDocument:
    """Проверяет структуру и строит узлы из уже загруженных данных."""
    if raw is None:
        raw = {}
    try:
        model = DocumentModel.model_validate(raw)
    except ValidationError as e:
        raise DocumentError(f"Invalid document: {_format_validation(e)}") from e
    return LoadedDocument(context=dict(model.context), nodes=build_nodes(model.nodes))


def load_document(path: Path) -> LoadedDocument:
    """Загружает документ из YAML-файла."""
    raw = load_yaml(path, error_cls=DocumentError)
    doc = parse_document(raw)
    logger.debug("Loaded %d top-level nodes from %s", len(doc.nodes), path)
    return doc


__all__ = ["LoadedDocument", "DocumentModel", "build_nodes", "parse_document", "load_document"]
