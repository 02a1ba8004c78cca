"""
Тесты для вычислителя выражений.
"""

import pytest

from nodetpl import Context, VariableNotFound
from nodetpl.expressions.evaluator import ExpressionEvaluator, loose_equals, strict_equals
from nodetpl.expressions.parser import ExpressionParser


class TestExpressionEvaluator:

    def setup_method(self):
        self.parser = ExpressionParser()
        self.context = Context({
            "name": "Ann",
            "count": 3,
            "zero": 0,
            "empty": [],
            "items": [1, 2],
            "nothing": None,
            "flag": True,
            "user": {"age": 30, "city": "Oslo"},
            "age": "30",
            "blank": "",
        })
        self.evaluator = ExpressionEvaluator(self.context)

    def _eval(self, text):
        return self.evaluator.evaluate(self.parser.parse(text))

    def test_variable_truthiness(self):
        assert self._eval("items")
        assert not self._eval("empty")
        assert not self._eval("zero")
        assert not self._eval("nothing")

    def test_logical_operators_return_operand(self):
        assert self._eval("count && name") == "Ann"
        assert self._eval("zero || name") == "Ann"
        assert self._eval("zero && name") == 0

    def test_short_circuit_skips_missing_variables(self):
        assert self._eval("flag || missing") is True
        assert self._eval("zero && missing") == 0

    def test_missing_variable_raises(self):
        with pytest.raises(VariableNotFound):
            self._eval("missing")

    def test_negation(self):
        assert self._eval("!empty") is True
        assert self._eval("!!items") is True
        assert self._eval("!!zero") is False
        assert self._eval("!(count > 1)") is False

    def test_comparisons(self):
        cases = [
            ("count > 2", True),
            ("count >= 3", True),
            ("count < 3", False),
            ("count <= 3", True),
            ("user.age > 18 && user.city == 'Oslo'", True),
            ("name != 'Bob'", True),
            ("-1 < zero", True),
            (".5 < 1", True),
        ]
        for expr, expected in cases:
            assert self._eval(expr) is expected, expr

    def test_loose_vs_strict_equality(self):
        assert self._eval("count == '3'") is True
        assert self._eval("count === '3'") is False
        assert self._eval("count === 3") is True
        assert self._eval("count !== 3.0") is False
        assert self._eval("nothing === nothing") is True

    def test_incomparable_values_are_false(self):
        assert self._eval("nothing < 1") is False
        assert self._eval("name > 1") is False
        assert self._eval("name <= 1") is False

    def test_numeric_strings_compare_as_numbers(self):
        cases = [
            ("age == 30", True),
            ("age >= 30", True),
            ("age > 18", True),
            ("age < 18", False),
            ("'9' < 10", True),
            ("10 > '9'", True),
            ("'30' >= 30", True),
        ]
        for expr, expected in cases:
            assert self._eval(expr) is expected, expr

    def test_blank_string_equals_zero(self):
        assert self._eval("blank == 0") is True
        assert self._eval("blank < 1") is True
        assert self._eval("blank === 0") is False

    def test_grouping_changes_precedence(self):
        assert self._eval("(zero || flag) && name == 'Ann'") is True
        assert self._eval("zero || flag && name == 'Bob'") is False


def test_loose_equals():
    assert loose_equals(1, "1.0")
    assert loose_equals("2", 2)
    assert not loose_equals(1, "one")
    assert loose_equals(None, None)
    assert not loose_equals(0, None)
    assert loose_equals("", 0)
    assert loose_equals(" 7 ", 7)


def test_strict_equals():
    assert strict_equals(1, 1.0)
    assert not strict_equals(1, True)
    assert not strict_equals("1", 1)
    assert strict_equals("a", "a")
