"""
Парсер условных выражений с рекурсивным спуском.

Строит дерево выражения из последовательности токенов.
Поддерживает приоритеты операторов и группировку в скобках.

Грамматика:
expression → or_expr
or_expr    → and_expr ("||" and_expr)*
and_expr   → eq_expr ("&&" eq_expr)*
eq_expr    → rel_expr (("==" | "!=" | "===" | "!==") rel_expr)*
rel_expr   → unary (("<" | "<=" | ">" | ">=") unary)*
unary      → ("!" | "!!") unary | primary
primary    → NUMBER | STRING | IDENTIFIER | "(" expression ")"
"""

from __future__ import annotations

import re
from typing import List

from .lexer import ExpressionLexer, Token
from .model import (
    BinaryExpr,
    Expression,
    GroupExpr,
    LiteralExpr,
    UnaryExpr,
    VariableExpr,
)
from ..variable import Variable

EQUALITY_OPERATORS = ("==", "!=", "===", "!==")
RELATIONAL_OPERATORS = ("<", "<=", ">", ">=")
UNARY_OPERATORS = ("!", "!!")

_ESCAPE_RE = re.compile(r"\\(.)")


class ParseError(Exception):
    """Ошибка парсинга условного выражения."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Parse error at position {position}: {message}")


class ExpressionParser:
    """
    Парсер условных выражений с рекурсивным спуском.
    """

    def __init__(self):
        self.lexer = ExpressionLexer()
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, expression_str: str) -> Expression:
        """
        Парсит строку выражения в дерево.

        Raises:
            ParseError: При синтаксической ошибке
            LexError: При ошибке токенизации
        """
        self._tokens = self.lexer.tokenize(expression_str)
        self._position = 0

        if len(self._tokens) == 1:
            raise ParseError("Empty expression", 0)

        result = self._parse_or()

        if not self._is_at_end():
            current = self._current_token()
            raise ParseError(f"Unexpected token '{current.value}'", current.position)

        return result

    def _parse_or(self) -> Expression:
        """Низший приоритет."""
        left = self._parse_and()
        while self._match_operator("||"):
            left = BinaryExpr(left=left, right=self._parse_and(), operator="||")
        return left

    def _parse_and(self) -> Expression:
        left = self._parse_equality()
        while self._match_operator("&&"):
            left = BinaryExpr(left=left, right=self._parse_equality(), operator="&&")
        return left

    def _parse_equality(self) -> Expression:
        left = self._parse_relational()
        while self._check_operator(*EQUALITY_OPERATORS):
            op = self._advance().value
            left = BinaryExpr(left=left, right=self._parse_relational(), operator=op)
        return left

    def _parse_relational(self) -> Expression:
        left = self._parse_unary()
        while self._check_operator(*RELATIONAL_OPERATORS):
            op = self._advance().value
            left = BinaryExpr(left=left, right=self._parse_unary(), operator=op)
        return left

    def _parse_unary(self) -> Expression:
        """Правая ассоциативность: !!!x == !(!!x)."""
        if self._check_operator(*UNARY_OPERATORS):
            op = self._advance().value
            return UnaryExpr(operator=op, operand=self._parse_unary())
        return self._parse_primary()

    def _parse_primary(self) -> Expression:
        """Парсит литералы, переменные и группы в скобках."""
        current = self._current_token()

        if current.type == 'LPAREN':
            self._advance()
            expr = self._parse_or()
            if self._current_token().type != 'RPAREN':
                raise ParseError("Expected ')' after grouped expression", self._current_position())
            self._advance()
            return GroupExpr(expression=expr)

        if current.type == 'NUMBER':
            self._advance()
            value = float(current.value) if "." in current.value else int(current.value)
            return LiteralExpr(value=value)

        if current.type == 'STRING':
            self._advance()
            return LiteralExpr(value=_ESCAPE_RE.sub(r"\1", current.value[1:-1]))

        if current.type == 'IDENTIFIER':
            self._advance()
            return VariableExpr(variable=Variable(current.value))

        if current.type == 'EOF':
            raise ParseError("Unexpected end of expression", current.position)
        raise ParseError(f"Unexpected token '{current.value}'", current.position)

    # Вспомогательные методы для работы с токенами

    def _current_token(self) -> Token:
        if self._position >= len(self._tokens):
            return Token(type='EOF', value='', position=len(self._tokens))
        return self._tokens[self._position]

    def _current_position(self) -> int:
        return self._current_token().position

    def _is_at_end(self) -> bool:
        return self._current_token().type == 'EOF'

    def _advance(self) -> Token:
        """Продвигает позицию и возвращает предыдущий токен."""
        token = self._current_token()
        if not self._is_at_end():
            self._position += 1
        return token

    def _check_operator(self, *operators: str) -> bool:
        current = self._current_token()
        return current.type == 'OPERATOR' and current.value in operators

    def _match_operator(self, operator: str) -> bool:
        """Проверяет и потребляет оператор."""
        if self._check_operator(operator):
            self._advance()
            return True
        return False


__all__ = ["ExpressionParser", "ParseError"]
