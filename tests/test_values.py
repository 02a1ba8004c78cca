"""
Tests for value classification.
"""

from nodetpl.values import Accessor, ValueKind, classify, stringify


def test_classify_variants():
    assert classify("text") is ValueKind.SCALAR
    assert classify(3) is ValueKind.SCALAR
    assert classify(None) is ValueKind.SCALAR
    assert classify([1]) is ValueKind.LIST
    assert classify((1,)) is ValueKind.LIST
    assert classify({"a": 1}) is ValueKind.MAPPING
    assert classify(lambda: 1) is ValueKind.ACCESSOR
    assert classify(Accessor(lambda owner: 1)) is ValueKind.ACCESSOR
    assert classify(dict) is ValueKind.SCALAR


def test_stringify():
    assert stringify(None) == ""
    assert stringify("a") == "a"
    assert stringify(12) == "12"
    assert stringify(1.5) == "1.5"
