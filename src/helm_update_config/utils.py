"""Utility functions for helm-update-config."""

import copy
from collections.abc import Mapping
from typing import Any

import yaml

from .exceptions import ConfigFormatError


def merge_values(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Deep merge override values onto a release's stored values.

    Recursively merges nested mappings. When either side at a key is not a
    mapping, the override replaces the base value outright (lists included).
    Keys present only in base are kept.

    Args:
        base: Values currently stored with the release
        overrides: Values supplied on the command line (take precedence)

    Returns:
        New merged dictionary (base and overrides are not modified)

    Examples:
        >>> merge_values({"a": {"x": 1, "y": 2}}, {"a": {"y": 9}})
        {'a': {'x': 1, 'y': 9}}

        >>> merge_values({"a": {"x": 1}}, {"a": 5})
        {'a': 5}

        >>> merge_values({"a": 1}, {"a": {"x": 1}})
        {'a': {'x': 1}}
    """
    result = dict(base)

    for key, value in overrides.items():
        current = result.get(key)
        if key in result and isinstance(current, Mapping) and isinstance(value, Mapping):
            # Both sides hold a mapping at this key - recurse
            result[key] = merge_values(current, value)
        else:
            # Override wins - replace completely
            result[key] = copy.deepcopy(value)

    return result


def normalize_keys(tree: Any) -> Any:
    """Return a copy of tree with every mapping key converted to str.

    YAML decodes ``1: x`` or ``true: y`` with non-string keys, while values
    parsed from flags are always keyed by strings. Boolean and null keys
    keep their YAML spelling (``true``, ``false``, ``null``).
    """
    if isinstance(tree, Mapping):
        return {_key_text(key): normalize_keys(value) for key, value in tree.items()}
    if isinstance(tree, list):
        return [normalize_keys(item) for item in tree]
    return tree


def _key_text(key: Any) -> str:
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def load_config(raw: str) -> dict[str, Any]:
    """Parse a stored values document.

    Args:
        raw: YAML document as returned by the release service

    Returns:
        Values tree with string keys; empty document yields {}

    Raises:
        ConfigFormatError: If the document is invalid YAML or not a mapping
    """
    try:
        data = yaml.safe_load(raw) if raw else None
    except yaml.YAMLError as e:
        raise ConfigFormatError(f"Failed to parse stored values: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigFormatError(f"Stored values must be a mapping, got {type(data).__name__}")
    return normalize_keys(data)


def dump_config(tree: Mapping[str, Any]) -> str:
    """Serialize a values tree to the YAML document format the service stores."""
    return yaml.safe_dump(dict(tree), default_flow_style=False, sort_keys=False)
