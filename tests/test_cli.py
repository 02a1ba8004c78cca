"""
Tests for the command line interface.
"""

import json

import pytest

from nodetpl.cli import _parse_overrides, main
from tests.infrastructure.cli_utils import jload, run_cli
from tests.infrastructure.file_utils import write, write_document


class TestRenderCommand:

    def test_render_to_stdout(self, tmpdoc, capsys, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        assert main(["render", str(tmpdoc)]) == 0
        assert capsys.readouterr().out == "Hi Ann! ok 1:10 2:20 3:30"

    def test_set_overrides(self, tmpdoc, capsys, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        rc = main(["render", str(tmpdoc), "--set", "name=Bo", "--set", "items=[5]"])
        assert rc == 0
        assert capsys.readouterr().out == "Hi Bo! 1:5"

    def test_data_file(self, tmpdoc, capsys, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        data = write(tmp_path / "data.yaml", "items: []\n")
        assert main(["render", str(tmpdoc), "--data", str(data)]) == 0
        assert capsys.readouterr().out == "Hi Ann!"

    def test_config_from_cwd(self, tmpdoc, capsys, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        write(tmp_path / "nodetpl.yaml", "trailing_newline: true\n")
        assert main(["render", str(tmpdoc)]) == 0
        assert capsys.readouterr().out.endswith("\n")

    def test_missing_variable_exit_code(self, tmp_path, capsys, monkeypatch):
        monkeypatch.chdir(tmp_path)
        doc = write_document(tmp_path / "doc.yaml", """
            nodes:
              - "{{ nobody }}"
            """)
        assert main(["render", str(doc)]) == 2
        assert "Could not find [nobody]" in capsys.readouterr().err

    def test_syntax_error_exit_code(self, tmp_path, capsys, monkeypatch):
        monkeypatch.chdir(tmp_path)
        doc = write_document(tmp_path / "doc.yaml", """
            nodes:
              - if: "(a &&"
                body: []
            """)
        assert main(["render", str(doc)]) == 2
        assert "Invalid $if expression" in capsys.readouterr().err

    def test_bad_set_format(self, tmpdoc, capsys, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        assert main(["render", str(tmpdoc), "--set", "oops"]) == 2
        assert "Expected 'key=value'" in capsys.readouterr().err


class TestCheckCommand:

    def test_check_outputs_json(self, tmpdoc, capsys):
        assert main(["check", str(tmpdoc)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["nodes"]["ForNode"] == 1
        assert data["context_keys"] == ["items", "name"]


def test_parse_overrides():
    assert _parse_overrides(["a=1", "b = x", "c="]) == {"a": 1, "b": "x", "c": None}


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.startswith("nodetpl ")


def test_subprocess_smoke(tmpdoc, tmp_path):
    cp = run_cli(tmp_path, "check", str(tmpdoc))
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout)["document"] == str(tmpdoc)
