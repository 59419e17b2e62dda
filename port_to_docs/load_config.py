"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from port_to_docs.deep_merge import deep_merge

DEFAULT_CONFIG: dict[str, Any] = {
    "filters": {
        "included_assemblies": [],
        "excluded_assemblies": [],
        "included_namespaces": [],
        "excluded_namespaces": [],
        "included_types": [],
        "excluded_types": [],
    },
    "port": {
        "type_summaries": True,
        "member_summaries": True,
        "type_remarks": True,
        "member_remarks": True,
        "type_params": True,
        "member_params": True,
        "type_type_params": True,
        "member_type_params": True,
        "member_returns": True,
        "member_properties": True,
        "exceptions_new": True,
        "exceptions_existing": False,
    },
    "behavior": {
        "markdown_remarks": False,
        "preserve_inheritdoc_tag": True,
        "skip_interface_implementations": False,
        "skip_interface_remarks": True,
        "disable_prompts": True,
        "exception_collision_threshold": 70,
    },
    "reporting": {
        "print_summary_details": False,
        "print_undoc": False,
    },
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)
    return config
