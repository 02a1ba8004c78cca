"""
Base exceptions for template rendering.

All expected errors that should be displayed to the user
as clean messages (without stack traces) inherit from NodeTplError.
Each error carries an ErrorKind tag so callers can dispatch on
``err.kind`` instead of the concrete class.

Programming errors and bugs should NOT inherit from NodeTplError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Виды ошибок шаблонизатора."""
    CONTEXT_UNDERFLOW = "context_underflow"
    VARIABLE_NOT_FOUND = "variable_not_found"
    SYNTAX = "syntax"
    DOCUMENT = "document"
    CONFIG = "config"


class NodeTplError(Exception):
    """
    Base class for all user-facing errors in nodetpl.

    These errors indicate problems that the template author can fix:
    malformed expressions, missing variables, invalid documents.
    """
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ContextUnderflow(NodeTplError):
    """pop() вызван больше раз, чем push()."""
    kind = ErrorKind.CONTEXT_UNDERFLOW

    def __init__(self, message: str = "pop() was called more times than push()"):
        super().__init__(message)


class VariableNotFound(NodeTplError):
    """Сегмент пути переменной не удалось разрешить."""
    kind = ErrorKind.VARIABLE_NOT_FOUND

    def __init__(self, message: str, segment: str = ""):
        super().__init__(message)
        self.segment = segment


class TemplateSyntaxError(NodeTplError):
    """
    Синтаксическая ошибка выражения или структуры шаблона.

    Выбрасывается при построении узла, а не при рендеринге.
    """
    kind = ErrorKind.SYNTAX

    def __init__(self, message: str, expression: str = "", position: Optional[int] = None):
        super().__init__(message)
        self.expression = expression
        self.position = position


class DocumentError(NodeTplError):
    """Некорректный YAML-документ с деревом узлов."""
    kind = ErrorKind.DOCUMENT


class ConfigError(NodeTplError):
    """Некорректный файл конфигурации."""
    kind = ErrorKind.CONFIG


__all__ = [
    "ErrorKind",
    "NodeTplError",
    "ContextUnderflow",
    "VariableNotFound",
    "TemplateSyntaxError",
    "DocumentError",
    "ConfigError",
]
