"""
Tests for storeversion.config module.

Tests settings loading including:
- Built-in defaults
- YAML overrides and deep merging
- Error handling for bad files
"""

from __future__ import annotations

import pytest

from storeversion.config import DEFAULT_SETTINGS, load_settings
from storeversion.config.loader import _deep_merge_dicts
from storeversion.exceptions import ConfigError


class TestDefaults:
    """Tests for the built-in settings."""

    def test_default_endpoints(self):
        settings = load_settings()
        assert settings["play_store"]["authority"] == "play.google.com"
        assert settings["play_store"]["path"] == "/store/apps/details"
        assert settings["play_store"]["callback_marker"] == "AF_initDataCallback"
        assert settings["app_store"]["authority"] == "itunes.apple.com"
        assert settings["app_store"]["country"] is None
        assert settings["mi_store"]["url"] == "https://global.app.mi.com/details"
        assert settings["mi_store"]["params"] == {"lo": "IN", "la": "en"}
        assert settings["device"]["oem_markers"] == ["xiaomi", "mi"]

    def test_returns_independent_copy(self):
        """Test that mutating loaded settings leaves the defaults intact."""
        settings = load_settings()
        settings["play_store"]["headers"]["User-Agent"] = "changed"
        assert DEFAULT_SETTINGS["play_store"]["headers"]["User-Agent"] != "changed"


class TestYamlOverrides:
    """Tests for loading a YAML settings file."""

    def test_override_merges_nested_keys(self, create_yaml_file):
        path = create_yaml_file("settings.yaml", {"app_store": {"country": "gb"}})
        settings = load_settings(path)
        assert settings["app_store"]["country"] == "gb"
        assert settings["app_store"]["authority"] == "itunes.apple.com"

    def test_lists_are_replaced(self, create_yaml_file):
        path = create_yaml_file(
            "settings.yaml", {"device": {"oem_markers": ["redmi", "poco"]}}
        )
        assert load_settings(path)["device"]["oem_markers"] == ["redmi", "poco"]

    def test_overrides_win_over_file(self, create_yaml_file):
        path = create_yaml_file("settings.yaml", {"http": {"timeout": 5}})
        settings = load_settings(path, overrides={"http": {"timeout": 1}})
        assert settings["http"]["timeout"] == 1

    def test_empty_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path) == load_settings()

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "nope.yaml")

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("play_store: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigError, match="error parsing YAML"):
            load_settings(path)

    def test_non_mapping_raises(self, create_yaml_file):
        path = create_yaml_file("list.yaml", ["a", "b"])
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_settings(path)


def test_deep_merge_does_not_mutate_inputs():
    base = {"a": {"b": 1, "c": [1, 2]}}
    overlay = {"a": {"c": [3]}}
    merged = _deep_merge_dicts(base, overlay)
    assert merged == {"a": {"b": 1, "c": [3]}}
    assert base == {"a": {"b": 1, "c": [1, 2]}}


class TestSettingsShape:
    """Tests for overrides that would break the fetchers."""

    @pytest.mark.parametrize(
        "override, match",
        [
            ({"mi_store": None}, "section 'mi_store' must be a mapping"),
            ({"device": {"oem_markers": None}}, "oem_markers must be a list"),
            ({"device": {"oem_markers": "xiaomi"}}, "oem_markers must be a list"),
            ({"play_store": {"authority": None}}, "play_store.authority"),
            ({"mi_store": {"params": ["lo=IN"]}}, "mi_store.params must be a mapping"),
        ],
    )
    def test_bad_override_in_file_raises(self, create_yaml_file, override, match):
        path = create_yaml_file("settings.yaml", override)
        with pytest.raises(ConfigError, match=match):
            load_settings(path)

    def test_bad_override_argument_raises(self):
        with pytest.raises(ConfigError, match="oem_markers"):
            load_settings(overrides={"device": {"oem_markers": None}})

    def test_null_headers_are_allowed(self, create_yaml_file):
        path = create_yaml_file("settings.yaml", {"app_store": {"headers": None}})
        assert load_settings(path)["app_store"]["headers"] is None
