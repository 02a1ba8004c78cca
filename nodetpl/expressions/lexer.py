"""
Лексер для разбора условных выражений.

Выполняет токенизацию строки условия, разбивая её на значимые элементы:
- Операторы (&&, ||, ==, ===, !=, !==, <, <=, >, >=, !, !!)
- Скобки
- Литералы (числа, строки в одинарных или двойных кавычках)
- Идентификаторы (пути к переменным через точку)
- Пробелы (игнорируются)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List


class LexError(ValueError):
    """Ошибка токенизации условного выражения."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"{message} at position {position}")


@dataclass
class Token:
    """
    Токен условного выражения.

    Attributes:
        type: Тип токена (OPERATOR, LPAREN, RPAREN, NUMBER, STRING, IDENTIFIER, EOF)
        value: Значение токена
        position: Позиция в исходной строке
    """
    type: str
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


class ExpressionLexer:
    """
    Лексер для разбиения строки условия на токены.
    """

    # Спецификация токенов: (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r'\s+', 'WHITESPACE', True),

        # Строки проверяем до операторов: внутри кавычек операторов нет
        (r'"(?:[^"\\]|\\.)*"', 'STRING', False),
        (r"'(?:[^'\\]|\\.)*'", 'STRING', False),

        # Число до идентификатора, чтобы "-1" и ".5" не ушли в неизвестные символы
        (r'-?(?:\d+(?:\.\d+)?|\.\d+)(?![\w.])', 'NUMBER', False),

        (r'\(', 'LPAREN', False),
        (r'\)', 'RPAREN', False),

        # Длинные операторы раньше коротких
        (r'===|!==|==|!=|<=|>=|&&|\|\||!!|!|<|>', 'OPERATOR', False),

        # Путь к переменной: сегменты через точку
        (r'[A-Za-z_$][\w$]*(?:\.[\w$]+)*', 'IDENTIFIER', False),

        (r'.', 'UNKNOWN', False),
    ]

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Разбивает строку на токены.

        Returns:
            Список токенов, включая EOF в конце

        Raises:
            LexError: При обнаружении неизвестного символа
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue
                value = match.group(0)
                if token_type == 'UNKNOWN':
                    if value in ('"', "'"):
                        raise LexError("Unterminated string literal", position)
                    raise LexError(f"Unexpected character '{value}'", position)
                if not ignore:
                    tokens.append(Token(type=token_type, value=value, position=position))
                position = match.end()
                break

        tokens.append(Token(type='EOF', value='', position=position))
        return tokens


__all__ = ["Token", "ExpressionLexer", "LexError"]
