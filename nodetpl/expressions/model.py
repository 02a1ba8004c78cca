"""
Модели данных для условных выражений.

Содержит классы узлов дерева выражения для блоков $if.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..variable import Variable


class ExprType(Enum):
    """Типы узлов выражения."""
    LITERAL = "literal"
    VARIABLE = "variable"
    GROUP = "group"  # для явной группировки в скобках
    UNARY = "unary"
    BINARY = "binary"


@dataclass(frozen=True)
class Expression(ABC):
    """Базовый абстрактный класс для всех узлов выражения."""

    @abstractmethod
    def get_type(self) -> ExprType:
        """Возвращает тип узла."""
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass


@dataclass(frozen=True)
class LiteralExpr(Expression):
    """Числовой или строковый литерал."""
    value: Any

    def get_type(self) -> ExprType:
        return ExprType.LITERAL

    def _to_string(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class VariableExpr(Expression):
    """
    Ссылка на переменную: user.name

    Разрешается в контексте во время рендеринга.
    """
    variable: Variable

    def get_type(self) -> ExprType:
        return ExprType.VARIABLE

    def _to_string(self) -> str:
        return self.variable.expr


@dataclass(frozen=True)
class GroupExpr(Expression):
    """Группа в скобках: (expression)"""
    expression: Expression

    def get_type(self) -> ExprType:
        return ExprType.GROUP

    def _to_string(self) -> str:
        return f"({self.expression})"


@dataclass(frozen=True)
class UnaryExpr(Expression):
    """
    Унарная операция: !operand или !!operand

    '!' инвертирует истинность, '!!' приводит значение к bool.
    """
    operator: str
    operand: Expression

    def get_type(self) -> ExprType:
        return ExprType.UNARY

    def _to_string(self) -> str:
        return f"{self.operator}{self.operand}"


@dataclass(frozen=True)
class BinaryExpr(Expression):
    """
    Бинарная операция: left op right

    Логические (&&, ||), сравнения на равенство (==, !=, ===, !==)
    и отношения порядка (<, <=, >, >=).
    """
    left: Expression
    right: Expression
    operator: str

    def get_type(self) -> ExprType:
        return ExprType.BINARY

    def _to_string(self) -> str:
        return f"{self.left} {self.operator} {self.right}"

__all__ = [
    "Expression",
    "ExprType",
    "LiteralExpr",
    "VariableExpr",
    "GroupExpr",
    "UnaryExpr",
    "BinaryExpr",
]
