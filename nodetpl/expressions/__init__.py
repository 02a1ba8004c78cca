"""
Компилятор условных выражений для блоков $if.

Выражение разбирается один раз при построении узла; полученное дерево
вычисляется при каждом рендеринге без повторного разбора.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .evaluator import EvaluationError, ExpressionEvaluator, loose_equals, strict_equals
from .lexer import ExpressionLexer, LexError, Token
from .model import (
    BinaryExpr,
    Expression,
    ExprType,
    GroupExpr,
    LiteralExpr,
    UnaryExpr,
    VariableExpr,
)
from .parser import ExpressionParser, ParseError
from ..context import Context
from ..errors import TemplateSyntaxError


@dataclass(frozen=True)
class CompiledExpression:
    """Скомпилированный предикат: вызывается с контекстом рендеринга."""
    source: str
    ast: Expression

    def __call__(self, context: Context) -> Any:
        return ExpressionEvaluator(context).evaluate(self.ast)


def compile_expression(source: str) -> CompiledExpression:
    """
    Разбирает выражение и возвращает переиспользуемый предикат.

    Raises:
        TemplateSyntaxError: Если выражение некорректно
    """
    try:
        ast = ExpressionParser().parse(source)
    except (LexError, ParseError) as e:
        raise TemplateSyntaxError(
            f"Invalid $if expression ({e}): {source}",
            expression=source,
            position=e.position,
        ) from e
    return CompiledExpression(source=source, ast=ast)


__all__ = [
    "CompiledExpression",
    "compile_expression",
    "ExpressionLexer",
    "ExpressionParser",
    "ExpressionEvaluator",
    "EvaluationError",
    "LexError",
    "ParseError",
    "Token",
    "Expression",
    "ExprType",
    "LiteralExpr",
    "VariableExpr",
    "GroupExpr",
    "UnaryExpr",
    "BinaryExpr",
    "loose_equals",
    "strict_equals",
]
