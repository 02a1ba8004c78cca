"""
Шаблонизатор на деревьях узлов.

Шаблон строится из узлов (текст, переменная, условие, цикл) и рендерится
в стеке областей видимости. Выражения условий и подстановки в тексте
компилируются один раз при построении узла.
"""

from __future__ import annotations

from .assembly import assemble
from .builders import endfor, endif, for_, if_, nodes, text, var
from .context import Context
from .engine import flatten, render, render_to_string
from .errors import (
    ConfigError,
    ContextUnderflow,
    DocumentError,
    ErrorKind,
    NodeTplError,
    TemplateSyntaxError,
    VariableNotFound,
)
from .expressions import compile_expression
from .nodes import EndForNode, EndIfNode, ForLoop, ForNode, IfNode, Node, TextNode, VariableNode
from .text import compile_text
from .values import Accessor
from .variable import Variable

__all__ = [
    "Context",
    "Variable",
    "Accessor",
    "Node",
    "TextNode",
    "VariableNode",
    "IfNode",
    "ForNode",
    "ForLoop",
    "EndForNode",
    "EndIfNode",
    "assemble",
    "nodes",
    "text",
    "var",
    "for_",
    "endfor",
    "if_",
    "endif",
    "compile_expression",
    "compile_text",
    "flatten",
    "render",
    "render_to_string",
    "ErrorKind",
    "NodeTplError",
    "ContextUnderflow",
    "VariableNotFound",
    "TemplateSyntaxError",
    "DocumentError",
    "ConfigError",
]
