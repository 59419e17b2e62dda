"""Orchestration logic for porting IntelliSense xml comments into Docs xml."""

import argparse
import logging
from pathlib import Path
from typing import Any

from lxml import etree

from port_to_docs.collect_files import collect_files
from port_to_docs.compute_config_hash import compute_config_hash
from port_to_docs.decision_provider import DecisionProvider
from port_to_docs.deep_merge import deep_merge
from port_to_docs.load_config import load_config
from port_to_docs.port_config import PortConfig
from port_to_docs.to_docs_porter import ToDocsPorter
from port_to_docs.xml_file import XmlFile, load_xml_file, save_xml_file

logger = logging.getLogger(__name__)

# (argument name, config section, config key, value written when the flag is set)
FLAG_OVERRIDES = [
    ("markdown_remarks", "behavior", "markdown_remarks", True),
    ("no_preserve_inheritdoc", "behavior", "preserve_inheritdoc_tag", False),
    (
        "skip_interface_implementations",
        "behavior",
        "skip_interface_implementations",
        True,
    ),
    ("port_interface_remarks", "behavior", "skip_interface_remarks", False),
    ("enable_prompts", "behavior", "disable_prompts", False),
    ("port_exceptions_existing", "port", "exceptions_existing", True),
    ("skip_exceptions_new", "port", "exceptions_new", False),
    ("print_undoc", "reporting", "print_undoc", True),
    ("print_summary_details", "reporting", "print_summary_details", True),
]

FILTER_OVERRIDES = [
    "included_assemblies",
    "excluded_assemblies",
    "included_namespaces",
    "excluded_namespaces",
    "included_types",
    "excluded_types",
]


def build_config(args: argparse.Namespace) -> dict[str, Any]:
    """Merge the command-line options on top of the file configuration."""
    config = load_config(args.config)

    overrides: dict[str, Any] = {}
    for name in FILTER_OVERRIDES:
        values = getattr(args, name, None)
        if values:
            overrides.setdefault("filters", {})[name] = list(values)
    for name, section, key, value in FLAG_OVERRIDES:
        if getattr(args, name, False):
            overrides.setdefault(section, {})[key] = value
    threshold = getattr(args, "exception_collision_threshold", None)
    if threshold is not None:
        overrides.setdefault("behavior", {})["exception_collision_threshold"] = (
            threshold
        )

    return deep_merge(config, overrides)


def run_port(
    args: argparse.Namespace, decision_provider: DecisionProvider | None = None
) -> int:
    """Execute the full port: load, port, report and optionally save."""
    config = build_config(args)
    porter = ToDocsPorter(PortConfig.from_dict(config), decision_provider)

    docs_files = _load_docs_files(porter, args.docs)
    _load_intellisense_files(porter, args.intellisense)

    report = porter.start()
    report.log_summary()
    if porter.config.print_undoc:
        report.log_undocumented(porter.docs_comments)

    changed = porter.docs_comments.changed_types()
    if args.save:
        for docs_type in changed:
            save_xml_file(docs_files[docs_type.file_path])
        logger.info("Saved %s modified Docs xml files.", len(changed))
    elif changed:
        logger.info("Run with --save to write the %s modified files.", len(changed))

    if args.report:
        report.write_json(args.report, compute_config_hash(config))
        logger.info("Report written to %s", args.report)

    return 0


def _load_docs_files(
    porter: ToDocsPorter, directories: list[Path]
) -> dict[str, XmlFile]:
    """Load the Docs xml type files, keyed by path for saving later."""
    docs_files: dict[str, XmlFile] = {}
    paths = collect_files(directories, skip_docs_metadata=True)
    logger.info("Loading %s Docs xml files...", len(paths))
    for path in paths:
        try:
            xml_file = load_xml_file(path)
        except (OSError, etree.XMLSyntaxError):
            logger.exception("Failed to load Docs xml file '%s'", path)
            porter.docs_comments.skipped_files.append(str(path))
            continue
        if porter.load_docs_file(xml_file.tree, str(path)) is not None:
            docs_files[str(path)] = xml_file
    logger.info("Loaded %s Docs xml types.", len(porter.docs_comments.types))
    return docs_files


def _load_intellisense_files(porter: ToDocsPorter, directories: list[Path]) -> None:
    """Load the IntelliSense xml files into the source corpus."""
    paths = collect_files(directories)
    logger.info("Loading %s IntelliSense xml files...", len(paths))
    for path in paths:
        try:
            xml_file = load_xml_file(path)
        except (OSError, etree.XMLSyntaxError):
            logger.exception("Failed to load IntelliSense xml file '%s'", path)
            porter.intellisense_comments.skipped_files.append(str(path))
            continue
        porter.load_intellisense_xml_file(xml_file.tree, str(path))
    logger.info(
        "Loaded %s IntelliSense xml members.", len(porter.intellisense_comments)
    )
