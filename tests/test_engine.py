"""
Tests for rendering entry points and output assembly.
"""

import pytest

from nodetpl import VariableNotFound, for_, if_, nodes, var
from nodetpl.config import EngineConfig
from nodetpl.engine import flatten, render, render_to_string, run_check, run_render
from tests.infrastructure.file_utils import write


def test_flatten_nested():
    assert list(flatten(["a", ["b", ["c"], []], "d"])) == ["a", "b", "c", "d"]


def test_flatten_string():
    assert list(flatten("abc")) == ["abc"]


def test_render_keeps_nesting():
    tpl = nodes("a", if_("x", "b"), for_({"i": "items"}, var("i")))
    assert render(tpl, {"x": True, "items": [1, 2]}) == ["a", ["b"], ["1", "2"]]


def test_render_does_not_mutate_data():
    data = {"items": [1]}
    render(nodes(for_({"i": "items"}, var("i"))), data)
    assert data == {"items": [1]}


def test_render_to_string_joiner():
    tpl = nodes(for_({"i": "items"}, var("i")))
    assert render_to_string(tpl, {"items": [1, 2, 3]}, joiner="-") == "1-2-3"


def test_render_error_propagates():
    with pytest.raises(VariableNotFound):
        render_to_string(nodes(var("missing")))


def test_run_render(tmpdoc):
    assert run_render(tmpdoc) == "Hi Ann! ok 1:10 2:20 3:30"


def test_run_render_data_priority(tmpdoc, tmp_path):
    data = write(tmp_path / "data.yaml", "name: Bo\nitems: [1]\n")
    out = run_render(tmpdoc, data_paths=[data], overrides={"items": [7, 8]})
    assert out == "Hi Bo! 1:7 2:8"


def test_run_render_config(tmpdoc):
    out = run_render(tmpdoc, cfg=EngineConfig(trailing_newline=True))
    assert out.endswith("3:30\n")


def test_run_check(tmpdoc):
    summary = run_check(tmpdoc)
    assert summary["nodes"] == {"ForNode": 1, "IfNode": 1, "TextNode": 3}
    assert summary["context_keys"] == ["items", "name"]
