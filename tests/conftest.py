"""
Pytest configuration and shared fixtures for storeversion tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from storeversion.config import load_settings
from storeversion.environment import PackageInfo
from storeversion.logging import SilentLogger, set_global_logger

PACKAGE = "com.example.app"
PLAY_URL = f"https://play.google.com/store/apps/details?id={PACKAGE}"
MI_URL = f"https://global.app.mi.com/details?lo=IN&la=en&id={PACKAGE}"
APP_STORE_URL = "https://itunes.apple.com/lookup"


def make_play_page(script_body: str, marker: str = PACKAGE) -> str:
    """
    Build a minimal Play Store listing page.

    The head carries a decoy data script (outside <body>, so never a
    candidate); the body carries an unrelated script and the data script
    wrapping script_body.
    """
    return (
        "<!doctype html><html><head>"
        f"<script>AF_initDataCallback({{key: 'ds:0', data: ['{marker}', [\"0.0.1\"]]}});</script>"
        "</head><body><div class=\"app\">Example App</div>"
        "<script>window.WIZ_global_data = {\"x\": 1};</script>"
        f"<script nonce=\"abc\">AF_initDataCallback({{key: 'ds:5', hash: '7', "
        f"data: [['{marker}'], {script_body}], sideChannel: {{}}}});</script>"
        "</body></html>"
    )


def make_mi_page(version: str | None) -> str:
    """Build a minimal Mi Store listing page, with or without a version token."""
    token = f'versionName:"{version}",' if version else ""
    return (
        "<html><body><div id=\"app\"></div><script>"
        f"window.__INITIAL_STATE__={{appDetail:{{{token}packageName:\"{PACKAGE}\"}}}}"
        "</script></body></html>"
    )


@pytest.fixture(autouse=True)
def silent_global_logger():
    """Restore the silent global logger after every test."""
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def settings() -> dict[str, Any]:
    """Provide the built-in settings."""
    return load_settings()


@pytest.fixture
def package_info() -> PackageInfo:
    """Provide the running build's package info."""
    return PackageInfo(package_name=PACKAGE, version="9.0.0")


@pytest.fixture
def create_yaml_file(tmp_path: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("settings.yaml", {"key": "value"})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create
