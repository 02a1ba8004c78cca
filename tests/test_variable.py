"""
Тесты разрешения путей к переменным.
"""

from collections import namedtuple

import pytest

from nodetpl import Accessor, Context, ErrorKind, Variable, VariableNotFound


class User:
    def __init__(self, name):
        self.name = name
        self._secret = "hidden"

    def get_name(self):
        return self.name.upper()


class TestVariableResolve:

    def test_top_level(self):
        assert Variable("name").resolve(Context({"name": "Ann"})) == "Ann"

    def test_absent_raises(self):
        with pytest.raises(VariableNotFound, match=r"Could not find \[x\]"):
            Variable("x").resolve(Context())

    def test_explicit_none_resolves(self):
        assert Variable("x").resolve(Context({"x": None})) is None

    def test_not_found_kind(self):
        with pytest.raises(VariableNotFound) as exc:
            Variable("x.y").resolve(Context())
        assert exc.value.kind is ErrorKind.VARIABLE_NOT_FOUND
        assert exc.value.segment == "x"

    def test_mapping_path(self):
        ctx = Context({"user": {"profile": {"city": "Oslo"}}})
        assert Variable("user.profile.city").resolve(ctx) == "Oslo"

    def test_missing_key_in_mapping(self):
        ctx = Context({"user": {}})
        with pytest.raises(VariableNotFound, match=r"\[name\]"):
            Variable("user.name").resolve(ctx)

    def test_descend_into_none_raises(self):
        ctx = Context({"user": None})
        with pytest.raises(VariableNotFound, match=r"\[name\] in None"):
            Variable("user.name").resolve(ctx)

    def test_list_index(self):
        ctx = Context({"items": ["a", "b"]})
        assert Variable("items.1").resolve(ctx) == "b"

    def test_list_index_out_of_range(self):
        ctx = Context({"items": ["a"]})
        with pytest.raises(VariableNotFound):
            Variable("items.5").resolve(ctx)

    def test_namedtuple_field(self):
        Point = namedtuple("Point", "x y")
        ctx = Context({"p": Point(1, 2)})
        assert Variable("p.y").resolve(ctx) == 2

    def test_object_attribute(self):
        assert Variable("user.name").resolve(Context({"user": User("bo")})) == "bo"

    def test_private_attribute_hidden(self):
        with pytest.raises(VariableNotFound):
            Variable("user._secret").resolve(Context({"user": User("bo")}))


class TestAccessors:

    def test_top_level_callable_invoked(self):
        ctx = Context({"now": lambda: "today"})
        assert Variable("now").resolve(ctx) == "today"

    def test_accessor_receives_owner(self):
        """Аксессор вызывается с владельцем, а не возвращается как функция."""
        ctx = Context({"user": {"name": "Bo", "getName": Accessor(lambda self: self["name"])}})
        assert Variable("user.getName").resolve(ctx) == "Bo"

    def test_zero_arg_callable_in_mapping(self):
        ctx = Context({"user": {"getName": lambda: "Bo"}})
        assert Variable("user.getName").resolve(ctx) == "Bo"

    def test_bound_method_called(self):
        ctx = Context({"user": User("bo")})
        assert Variable("user.get_name").resolve(ctx) == "BO"

    def test_str_method_on_scalar(self):
        assert Variable("name.upper").resolve(Context({"name": "ann"})) == "ANN"

    def test_accessor_result_is_traversed(self):
        ctx = Context({"load": lambda: {"items": [1, 2]}})
        assert Variable("load.items.0").resolve(ctx) == 1

    def test_classes_not_invoked(self):
        ctx = Context({"cls": User})
        assert Variable("cls").resolve(ctx) is User

    def test_do_not_call_flag(self):
        def fn():
            return "called"
        fn.do_not_call_in_templates = True
        assert Variable("fn").resolve(Context({"fn": fn})) is fn


def test_variable_is_immutable():
    v = Variable("a.b")
    with pytest.raises(AttributeError):
        v.expr = "c"
    assert v.segments == ["a", "b"]
    assert str(v) == "a.b"
