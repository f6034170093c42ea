"""Tests for parser configuration."""

import pytest

from listtree_mcp.config import ParserConfig, is_local_only


class TestParserConfig:
    def test_defaults(self):
        config = ParserConfig()
        assert config.indentation_unit_width == 1
        assert config.list_marker == "-"
        assert config.tab_width == 4

    @pytest.mark.parametrize("kwargs", [
        {"indentation_unit_width": 0},
        {"tab_width": 0},
        {"list_marker": ""},
        {"list_marker": "- "},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            ParserConfig(**kwargs)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LISTTREE_INDENT_WIDTH", "2")
        monkeypatch.setenv("LISTTREE_LIST_MARKER", "*")
        config = ParserConfig.from_env()
        assert config.indentation_unit_width == 2
        assert config.list_marker == "*"

    def test_from_env_bad_int_falls_back(self, monkeypatch):
        monkeypatch.setenv("LISTTREE_INDENT_WIDTH", "two")
        assert ParserConfig.from_env().indentation_unit_width == 1

    def test_overrides(self):
        config = ParserConfig(indentation_unit_width=2).with_overrides(list_marker="+")
        assert config.indentation_unit_width == 2
        assert config.list_marker == "+"


class TestLocalOnly:
    def test_unset(self):
        assert is_local_only() is False

    @pytest.mark.parametrize("value", ["true", "1", "YES"])
    def test_enabled(self, monkeypatch, value):
        monkeypatch.setenv("LISTTREE_LOCAL_ONLY", value)
        assert is_local_only() is True
