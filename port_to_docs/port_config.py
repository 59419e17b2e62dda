"""Typed merge policy built from the loaded configuration dictionary."""

from dataclasses import dataclass, field
from typing import Any

from port_to_docs.api_filter import ApiFilter
from port_to_docs.load_config import DEFAULT_CONFIG


@dataclass
class PortConfig:
    """Toggles that decide which doc fields get ported, and how."""

    port_type_summaries: bool = True
    port_member_summaries: bool = True
    port_type_remarks: bool = True
    port_member_remarks: bool = True
    port_type_params: bool = True
    port_member_params: bool = True
    port_type_type_params: bool = True
    port_member_type_params: bool = True
    port_member_returns: bool = True
    port_member_properties: bool = True
    port_exceptions_new: bool = True
    port_exceptions_existing: bool = False

    markdown_remarks: bool = False
    preserve_inheritdoc_tag: bool = True
    skip_interface_implementations: bool = False
    skip_interface_remarks: bool = True
    disable_prompts: bool = True
    exception_collision_threshold: int = 70

    print_summary_details: bool = False
    print_undoc: bool = False

    api_filter: ApiFilter = field(default_factory=ApiFilter)

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "PortConfig":
        """Build the policy from a merged configuration dictionary."""
        filters = {**DEFAULT_CONFIG["filters"], **config.get("filters", {})}
        port = {**DEFAULT_CONFIG["port"], **config.get("port", {})}
        behavior = {**DEFAULT_CONFIG["behavior"], **config.get("behavior", {})}
        reporting = {**DEFAULT_CONFIG["reporting"], **config.get("reporting", {})}

        threshold = int(behavior["exception_collision_threshold"])
        if not 0 <= threshold <= 100:
            msg = f"exception_collision_threshold must be a percentage: {threshold}"
            raise ValueError(msg)

        return cls(
            port_type_summaries=bool(port["type_summaries"]),
            port_member_summaries=bool(port["member_summaries"]),
            port_type_remarks=bool(port["type_remarks"]),
            port_member_remarks=bool(port["member_remarks"]),
            port_type_params=bool(port["type_params"]),
            port_member_params=bool(port["member_params"]),
            port_type_type_params=bool(port["type_type_params"]),
            port_member_type_params=bool(port["member_type_params"]),
            port_member_returns=bool(port["member_returns"]),
            port_member_properties=bool(port["member_properties"]),
            port_exceptions_new=bool(port["exceptions_new"]),
            port_exceptions_existing=bool(port["exceptions_existing"]),
            markdown_remarks=bool(behavior["markdown_remarks"]),
            preserve_inheritdoc_tag=bool(behavior["preserve_inheritdoc_tag"]),
            skip_interface_implementations=bool(
                behavior["skip_interface_implementations"]
            ),
            skip_interface_remarks=bool(behavior["skip_interface_remarks"]),
            disable_prompts=bool(behavior["disable_prompts"]),
            exception_collision_threshold=threshold,
            print_summary_details=bool(reporting["print_summary_details"]),
            print_undoc=bool(reporting["print_undoc"]),
            api_filter=ApiFilter(
                included_assemblies=filters["included_assemblies"],
                excluded_assemblies=filters["excluded_assemblies"],
                included_namespaces=filters["included_namespaces"],
                excluded_namespaces=filters["excluded_namespaces"],
                included_types=filters["included_types"],
                excluded_types=filters["excluded_types"],
            ),
        )
