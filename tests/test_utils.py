"""Tests for utility functions."""

import pytest
from helm_update_config import ConfigFormatError
from helm_update_config.utils import dump_config
from helm_update_config.utils import load_config
from helm_update_config.utils import merge_values
from helm_update_config.utils import normalize_keys


class TestMergeValues:
    """Test merge_values function."""

    def test_empty_dicts(self):
        """Test merging empty dictionaries."""
        assert merge_values({}, {}) == {}

    def test_empty_base(self):
        """Test merging with empty base."""
        assert merge_values({}, {"a": 1, "b": {"c": 2}}) == {"a": 1, "b": {"c": 2}}

    def test_empty_overrides_is_identity(self):
        """Test merging with empty overrides returns an equal tree."""
        base = {"a": 1, "b": {"c": [1, 2]}}
        assert merge_values(base, {}) == base

    def test_new_key_inserted_regardless_of_shape(self):
        """Test keys absent from base take the override value as is."""
        base = {"a": 1}
        for value in (5, "x", None, [1, 2], {"nested": {"deep": True}}):
            assert merge_values(base, {"k": value})["k"] == value

    def test_scalar_replaces_nested_value(self):
        """Test scalar override replaces a nested mapping."""
        assert merge_values({"a": {"x": 1}}, {"a": 5}) == {"a": 5}

    def test_mapping_replaces_scalar(self):
        """Test nested mapping override replaces a non-mapping base value."""
        assert merge_values({"a": 1}, {"a": {"x": 1}}) == {"a": {"x": 1}}

    def test_deep_merge_preserves_siblings(self):
        """Test untouched siblings survive a nested override."""
        assert merge_values({"a": {"x": 1, "y": 2}}, {"a": {"y": 9}}) == {"a": {"x": 1, "y": 9}}

    def test_deep_nested_merge(self):
        """Test merging several levels deep."""
        base = {"level1": {"level2": {"level3": {"a": 1, "b": 2}}, "keep": "me"}}
        overrides = {"level1": {"level2": {"level3": {"b": 20, "c": 3}}}}
        expected = {"level1": {"level2": {"level3": {"a": 1, "b": 20, "c": 3}}, "keep": "me"}}
        assert merge_values(base, overrides) == expected

    def test_lists_not_merged(self):
        """Test lists are replaced, not merged."""
        assert merge_values({"a": [1, 2, 3]}, {"a": [4, 5]}) == {"a": [4, 5]}

    def test_list_replaces_mapping(self):
        """Test a list override replaces a mapping."""
        assert merge_values({"a": {"x": 1}}, {"a": ["x"]}) == {"a": ["x"]}

    def test_none_override_replaces(self):
        """Test an explicit null replaces the stored value."""
        assert merge_values({"a": {"x": 1}}, {"a": None}) == {"a": None}

    def test_idempotent(self):
        """Test applying the same overrides twice changes nothing further."""
        base = {"replicas": 2, "env": {"tier": "prod", "region": "eu"}, "image": "app:1"}
        overrides = {"replicas": 3, "env": {"tier": "canary", "extra": {"a": 1}}, "image": {"tag": "2"}}
        once = merge_values(base, overrides)
        assert merge_values(once, overrides) == once

    def test_originals_not_modified(self):
        """Test base and overrides are left unchanged."""
        base = {"a": {"b": 1}, "c": 1}
        overrides = {"a": {"c": 2}, "c": {"d": 3}}
        result = merge_values(base, overrides)

        assert result == {"a": {"b": 1, "c": 2}, "c": {"d": 3}}
        assert base == {"a": {"b": 1}, "c": 1}
        assert overrides == {"a": {"c": 2}, "c": {"d": 3}}

    def test_result_does_not_alias_overrides(self):
        """Test mutating the result does not leak into the overrides."""
        overrides = {"new": {"x": [1]}}
        result = merge_values({}, overrides)
        result["new"]["x"].append(2)
        assert overrides == {"new": {"x": [1]}}


class TestLoadConfig:
    """Test load_config and dump_config."""

    def test_empty_document(self):
        """Test empty and null documents load as an empty mapping."""
        assert load_config("") == {}
        assert load_config("null\n") == {}

    def test_nested_document(self):
        """Test a nested YAML document loads as nested dicts."""
        raw = "replicas: 2\nenv:\n  tier: prod\n"
        assert load_config(raw) == {"replicas": 2, "env": {"tier": "prod"}}

    def test_keys_normalized_to_strings(self):
        """Test non-string YAML keys become strings."""
        assert load_config("1: one\nports:\n  8080: http\n") == {"1": "one", "ports": {"8080": "http"}}

    def test_boolean_and_null_keys_keep_yaml_spelling(self):
        """Test true/false/null keys are not renamed to Python spellings."""
        raw = "true: y\nfalse: n\n~: z\nnested:\n  null: w\n"
        loaded = load_config(raw)
        assert loaded == {"true": "y", "false": "n", "null": "z", "nested": {"null": "w"}}
        assert load_config(dump_config(loaded)) == loaded

    def test_invalid_yaml(self):
        """Test invalid YAML raises ConfigFormatError."""
        with pytest.raises(ConfigFormatError):
            load_config("a: [1, 2\n")

    def test_non_mapping_document(self):
        """Test a top-level list is rejected."""
        with pytest.raises(ConfigFormatError, match="mapping"):
            load_config("- a\n- b\n")

    def test_dump_loads_back(self):
        """Test dumped values load back to an equal tree."""
        tree = {"replicas": 3, "env": {"tier": "canary"}, "hosts": ["a", "b"], "debug": False, "note": None}
        assert load_config(dump_config(tree)) == tree

    def test_dump_format(self):
        """Test dumped YAML uses block style and keeps key order."""
        content = dump_config({"zeta": 1, "alpha": {"tier": "prod"}})
        assert content == "zeta: 1\nalpha:\n  tier: prod\n"

    def test_normalize_keys_in_lists(self):
        """Test normalization reaches mappings inside lists."""
        assert normalize_keys({"a": [{1: "x"}]}) == {"a": [{"1": "x"}]}
