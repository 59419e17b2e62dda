"""Tests for configuration loading, merging and the typed merge policy."""

from pathlib import Path

import pytest
import yaml

from port_to_docs.api_filter import ApiFilter
from port_to_docs.compute_config_hash import compute_config_hash
from port_to_docs.deep_merge import deep_merge
from port_to_docs.load_config import load_config
from port_to_docs.port_config import PortConfig


def test_deep_merge_nested() -> None:
    """Verify recursive merging of dictionaries."""
    base = {"nested": {"x": 1, "y": 2}}
    update = {"nested": {"y": 3, "z": 4}}
    merged = deep_merge(base, update)
    assert merged == {"nested": {"x": 1, "y": 3, "z": 4}}


def test_deep_merge_arrays_replace() -> None:
    """Verify that arrays are replaced by default."""
    base = {"included_namespaces": ["A"]}
    update = {"included_namespaces": ["B"]}
    assert deep_merge(base, update) == {"included_namespaces": ["B"]}


def test_deep_merge_exclusions_additive() -> None:
    """Verify that the exclusion lists are merged additively."""
    base = {"filters": {"excluded_namespaces": ["System.B", "System.A"]}}
    update = {"filters": {"excluded_namespaces": ["System.B", "System.C"]}}
    merged = deep_merge(base, update)
    assert merged["filters"]["excluded_namespaces"] == [
        "System.A",
        "System.B",
        "System.C",
    ]


def test_compute_config_hash_stability() -> None:
    """Verify that config hash is stable regardless of key order."""
    config1 = {"b": 2, "a": 1, "nested": {"y": 2, "x": 1}}
    config2 = {"a": 1, "b": 2, "nested": {"x": 1, "y": 2}}
    assert compute_config_hash(config1) == compute_config_hash(config2)
    assert compute_config_hash(config1) != compute_config_hash({"a": 2})


def test_compute_config_hash_ignores_reporting() -> None:
    """Verify that logging-only options do not change the hash."""
    config = load_config(None)
    verbose = load_config(None)
    verbose["reporting"]["print_undoc"] = True
    assert compute_config_hash(config) == compute_config_hash(verbose)

    verbose["behavior"]["markdown_remarks"] = True
    assert compute_config_hash(config) != compute_config_hash(verbose)


def test_load_config_defaults() -> None:
    """Verify that default config is loaded when no path is provided."""
    config = load_config(None)
    assert config["behavior"]["preserve_inheritdoc_tag"] is True
    assert config["behavior"]["exception_collision_threshold"] == 70  # noqa: PLR2004
    assert config["port"]["exceptions_existing"] is False


def test_load_config_with_file(tmp_path: Path) -> None:
    """Verify that user config correctly overrides defaults."""
    config_file = tmp_path / "config.yml"
    config_data = {
        "behavior": {"markdown_remarks": True},
        "filters": {"excluded_types": ["System.Obsolete"]},
    }
    config_file.write_text(yaml.dump(config_data))

    loaded = load_config(str(config_file))
    assert loaded["behavior"]["markdown_remarks"] is True
    assert loaded["behavior"]["disable_prompts"] is True  # Default
    assert loaded["filters"]["excluded_types"] == ["System.Obsolete"]


def test_load_config_does_not_mutate_defaults(tmp_path: Path) -> None:
    """Verify that loading twice starts from pristine defaults."""
    config_file = tmp_path / "config.yml"
    config_file.write_text(yaml.dump({"filters": {"excluded_types": ["X"]}}))

    load_config(str(config_file))
    assert load_config(None)["filters"]["excluded_types"] == []


def test_port_config_from_dict() -> None:
    """Verify the typed policy built from a merged configuration."""
    config = load_config(None)
    config["behavior"]["markdown_remarks"] = True
    config["port"]["exceptions_existing"] = True
    config["filters"]["included_namespaces"] = ["System.IO"]

    port_config = PortConfig.from_dict(config)
    assert port_config.markdown_remarks
    assert port_config.port_exceptions_existing
    assert port_config.preserve_inheritdoc_tag
    assert port_config.disable_prompts
    assert port_config.api_filter.is_namespace_included("System.IO.Compression")
    assert not port_config.api_filter.is_namespace_included("System.Text")


def test_port_config_rejects_bad_threshold() -> None:
    """Verify the collision threshold must be a percentage."""
    with pytest.raises(ValueError, match="percentage"):
        PortConfig.from_dict({"behavior": {"exception_collision_threshold": 101}})


def test_api_filter_rules() -> None:
    """Verify exclusion wins over inclusion and empty includes pass everything."""
    api_filter = ApiFilter(
        included_namespaces=["System.IO"],
        excluded_namespaces=["System.IO.Pipes"],
    )
    assert api_filter.is_namespace_included("System.IO")
    assert not api_filter.is_namespace_included("System.IO.Pipes")
    assert not api_filter.is_namespace_included("System.Text")
    assert api_filter.is_type_included("System.IO.File")
    assert api_filter.is_assembly_included([])

    api_filter = ApiFilter(excluded_assemblies=["System.Private"])
    assert not api_filter.is_assembly_included(["System.Private.CoreLib"])
    assert api_filter.is_assembly_included(["System.Private.CoreLib", "System.IO"])
