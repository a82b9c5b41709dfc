"""
Tests for json_utils.py - orjson wrapper and script-safe serialization.
"""

import pytest

import json_utils as json


class TestDumpsLoads:
    """Tests for the json-module-like interface."""

    def test_dumps_returns_str(self):
        assert json.dumps({"a": 1}) == '{"a":1}'

    def test_indent(self):
        assert json.dumps({"a": 1}, indent=2) == '{\n  "a": 1\n}'

    def test_loads_str_and_bytes(self):
        assert json.loads('{"a": [1, 2]}') == {"a": [1, 2]}
        assert json.loads(b'{"a": null}') == {"a": None}

    def test_decode_error(self):
        with pytest.raises(json.JSONDecodeError):
            json.loads("{not json")


class TestDumpsForScript:
    """Tests for dumps_for_script()."""

    def test_escapes_script_close(self):
        out = json.dumps_for_script({"name": "</script><b>&"})
        assert "<" not in out and ">" not in out and "&" not in out
        assert json.loads(out) == {"name": "</script><b>&"}

    def test_escapes_line_separators(self):
        out = json.dumps_for_script("a\u2028b\u2029c")
        assert "\u2028" not in out and "\u2029" not in out
        assert json.loads(out) == "a\u2028b\u2029c"

    def test_plain_values_unchanged(self):
        assert json.dumps_for_script([1, True, None, "x"]) == '[1,true,null,"x"]'
