"""
Вычислитель условных выражений.

Проходит по дереву выражения и вычисляет его значение в контексте
переменных шаблона.
"""

from __future__ import annotations

from numbers import Number
from typing import Any, Tuple, cast

from .model import (
    BinaryExpr,
    Expression,
    ExprType,
    GroupExpr,
    LiteralExpr,
    UnaryExpr,
    VariableExpr,
)
from ..context import Context


class EvaluationError(Exception):
    """Ошибка при вычислении выражения."""
    pass


class ExpressionEvaluator:
    """
    Вычислитель выражений.

    Принимает дерево выражения и контекст, возвращает значение. Логические
    операторы возвращают решающий операнд, как and/or в Python.
    """

    def __init__(self, context: Context):
        self.context = context

    def evaluate(self, expression: Expression) -> Any:
        """
        Raises:
            VariableNotFound: Если переменная выражения не найдена
            EvaluationError: При неизвестном типе узла или операторе
        """
        expr_type = expression.get_type()

        if expr_type == ExprType.LITERAL:
            return cast(LiteralExpr, expression).value
        elif expr_type == ExprType.VARIABLE:
            return cast(VariableExpr, expression).variable.resolve(self.context)
        elif expr_type == ExprType.GROUP:
            return self.evaluate(cast(GroupExpr, expression).expression)
        elif expr_type == ExprType.UNARY:
            return self._evaluate_unary(cast(UnaryExpr, expression))
        elif expr_type == ExprType.BINARY:
            return self._evaluate_binary(cast(BinaryExpr, expression))
        else:
            raise EvaluationError(f"Unknown expression type: {expr_type}")

    def _evaluate_unary(self, expression: UnaryExpr) -> bool:
        value = self.evaluate(expression.operand)
        if expression.operator == "!":
            return not value
        if expression.operator == "!!":
            return bool(value)
        raise EvaluationError(f"Unknown unary operator: {expression.operator}")

    def _evaluate_binary(self, expression: BinaryExpr) -> Any:
        op = expression.operator

        # Короткое вычисление
        if op == "&&":
            left = self.evaluate(expression.left)
            return self.evaluate(expression.right) if left else left
        if op == "||":
            left = self.evaluate(expression.left)
            return left if left else self.evaluate(expression.right)

        left = self.evaluate(expression.left)
        right = self.evaluate(expression.right)

        if op == "==":
            return loose_equals(left, right)
        if op == "!=":
            return not loose_equals(left, right)
        if op == "===":
            return strict_equals(left, right)
        if op == "!==":
            return not strict_equals(left, right)
        if op in ("<", "<=", ">", ">="):
            return _compare(op, left, right)
        raise EvaluationError(f"Unknown binary operator: {op}")


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _as_number(text: str) -> Any:
    """Число из строки; пустая строка считается нулём."""
    stripped = text.strip()
    if not stripped:
        return 0.0
    try:
        return float(stripped)
    except ValueError:
        return None


def _is_mixed(left: Any, right: Any) -> bool:
    return (_is_number(left) and isinstance(right, str)) or (isinstance(left, str) and _is_number(right))


def _coerce_pair(left: Any, right: Any) -> Tuple[Any, Any]:
    """
    Приводит строку к числу, если второй операнд число.

    Если строка не похожа на число, вместо неё возвращается None.
    """
    if not _is_mixed(left, right):
        return left, right
    if isinstance(right, str):
        return left, _as_number(right)
    return _as_number(left), right


def loose_equals(left: Any, right: Any) -> bool:
    """
    Нестрогое равенство: число равно строке с тем же числом.

    В остальных случаях работает обычное сравнение Python.
    """
    if _is_mixed(left, right):
        left, right = _coerce_pair(left, right)
        if left is None or right is None:
            return False
    return bool(left == right)


def strict_equals(left: Any, right: Any) -> bool:
    """Строгое равенство: совпадает значение и вид значения (1 === 1.0, но 1 !== True)."""
    if _is_number(left) and _is_number(right):
        return bool(left == right)
    if type(left) is not type(right):
        return False
    return bool(left == right)


def _compare(op: str, left: Any, right: Any) -> bool:
    # Несравнимые значения (None < 1, "a" < 1) дают False
    left, right = _coerce_pair(left, right)
    try:
        if op == "<":
            return bool(left < right)
        if op == "<=":
            return bool(left <= right)
        if op == ">":
            return bool(left > right)
        return bool(left >= right)
    except TypeError:
        return False


__all__ = ["ExpressionEvaluator", "EvaluationError", "loose_equals", "strict_equals"]
