"""
Settings loading and merging for storeversion.

Every endpoint, header set and routing marker the engine uses lives in a
nested settings dict. Built-in defaults (DEFAULT_SETTINGS) describe the real
stores; a YAML file can override any part of them, which is how tests point
the engine at fixtures and how deployments pin a different region or
User-Agent.

Settings Layout
---------------
play_store:
    authority, path, headers, callback_marker
app_store:
    authority, path, headers, country
mi_store:
    url, params, headers
device:
    oem_markers
http:
    timeout

Merge Behavior
--------------
The loader performs deep merging with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from overlay override base)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten (strings, numbers, booleans, null)

Error Handling
--------------
- ConfigError: missing file, YAML parse error, a document that is not a
  mapping, or an override that nulls or retypes a section, an endpoint
  or device.oem_markers. Errors are chained with "from err".

Examples
--------
Defaults only:

    >>> from storeversion.config import load_settings
    >>> load_settings()["play_store"]["authority"]
    'play.google.com'

With an override file:

    # settings.yaml
    app_store:
      country: gb

    >>> load_settings(Path("settings.yaml"))["app_store"]["country"]
    'gb'
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from storeversion.exceptions import ConfigError
from storeversion.extraction import PLAY_CALLBACK_MARKER
from storeversion.logging import get_global_logger

DEFAULT_SETTINGS: dict[str, Any] = {
    "play_store": {
        "authority": "play.google.com",
        "path": "/store/apps/details",
        # Play only serves the full inline data to browser-like clients.
        "headers": {
            "User-Agent": (
                "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
                "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
            ),
            "Accept-Language": "en-US,en;q=0.9",
        },
        "callback_marker": PLAY_CALLBACK_MARKER,
    },
    "app_store": {
        "authority": "itunes.apple.com",
        "path": "/lookup",
        "headers": {"Accept": "application/json"},
        "country": None,
    },
    "mi_store": {
        "url": "https://global.app.mi.com/details",
        "params": {"lo": "IN", "la": "en"},
        "headers": {
            "User-Agent": "Mozilla/5.0 (Linux; Android 13; Xiaomi) AppleWebKit/537.36",
            "Accept-Language": "en-IN,en;q=0.9",
        },
    },
    "device": {
        "oem_markers": ["xiaomi", "mi"],
    },
    "http": {
        "timeout": 30,
    },
}


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> dict[str, Any]:
    """
    Load a YAML settings file and return the parsed mapping.

    An empty file is treated as an empty mapping.

    Raises:
      ConfigError - missing file, invalid YAML, or non-mapping document
    """
    if not p.exists():
        raise ConfigError(f"settings file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"error parsing YAML: {p}: {err}") from err
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"settings file must contain a mapping, got {type(data).__name__}: {p}"
        )
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base (not concatenated)
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


def _validate_settings(settings: dict[str, Any]) -> None:
    """
    Check that overrides kept the shape the fetchers rely on.

    Every top-level section stays a mapping, endpoint strings stay strings
    and device.oem_markers stays a list of strings. Optional mappings
    (headers, params) may be null.

    Raises:
      ConfigError - on the first violation found
    """
    for section in DEFAULT_SETTINGS:
        if not isinstance(settings.get(section), dict):
            raise ConfigError(f"settings section {section!r} must be a mapping")

    required_strings = {
        "play_store": ("authority", "path"),
        "app_store": ("authority", "path"),
        "mi_store": ("url",),
    }
    for section, keys in required_strings.items():
        for key in keys:
            value = settings[section].get(key)
            if not isinstance(value, str) or not value:
                raise ConfigError(f"settings {section}.{key} must be a non-empty string")

    for section, key in (
        ("play_store", "headers"),
        ("app_store", "headers"),
        ("mi_store", "headers"),
        ("mi_store", "params"),
    ):
        value = settings[section].get(key)
        if value is not None and not isinstance(value, dict):
            raise ConfigError(f"settings {section}.{key} must be a mapping")

    markers = settings["device"].get("oem_markers")
    if not isinstance(markers, list) or not all(isinstance(m, str) for m in markers):
        raise ConfigError("settings device.oem_markers must be a list of strings")


# -------------------------------
# Public API
# -------------------------------


def load_settings(
    path: Path | None = None, overrides: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Load the effective settings.

    Args:
        path: Optional YAML file merged over the defaults.
        overrides: Optional dict merged last, over the file.

    Returns:
        A fresh settings dict; callers may mutate it freely.

    Raises:
        ConfigError: If the file is missing, invalid YAML, not a mapping,
            or overrides a section with the wrong type (e.g. null).
    """
    logger = get_global_logger()

    settings = copy.deepcopy(DEFAULT_SETTINGS)
    if path is not None:
        path = Path(path)
        logger.verbose("CONFIG", f"Loading settings from {path}")
        settings = _deep_merge_dicts(settings, _load_yaml_file(path))
    if overrides:
        settings = _deep_merge_dicts(settings, overrides)
    _validate_settings(settings)
    return settings
