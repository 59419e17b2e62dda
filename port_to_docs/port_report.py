"""Logic for collecting and summarizing the results of a port run."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from port_to_docs.xml_text import is_docs_empty

if TYPE_CHECKING:
    from port_to_docs.docs_container import DocsCommentsContainer

logger = logging.getLogger(__name__)


def _add_unique(items: list[str], item: str) -> None:
    if item not in items:
        items.append(item)


class PortReport:
    """Tracks every modification and problem found while porting."""

    def __init__(self, print_details: bool = False) -> None:
        """Initialize an empty report."""
        self.print_details = print_details
        self.modified_files: list[str] = []
        self.modified_types: list[str] = []
        self.modified_apis: list[str] = []
        self.interface_ported_apis: list[str] = []
        self.problems: list[str] = []
        self.added_exceptions: list[str] = []
        self.total_modified_elements = 0
        self.start_time = time.time()

    def record_modified_element(
        self, element: str, file_path: str, doc_id: str, is_eii: bool = False
    ) -> None:
        """Count one ported doc field and log where it went."""
        self.total_modified_elements += 1
        _add_unique(self.modified_files, file_path)
        if is_eii:
            _add_unique(self.interface_ported_apis, doc_id)
        log = logger.info if self.print_details else logger.debug
        log("File: %s", file_path)
        log("    DocId: %s", doc_id)
        log("        %s", element)
        if is_eii:
            log("            Ported from an explicit interface implementation.")

    def add_modified_type(self, doc_id: str) -> None:
        """Record a type whose own doc fields changed."""
        _add_unique(self.modified_types, doc_id)

    def add_modified_api(self, doc_id: str) -> None:
        """Record a member whose doc fields changed."""
        _add_unique(self.modified_apis, doc_id)

    def add_problem(self, message: str) -> None:
        """Record something that needs a human to look at it."""
        self.problems.append(message)

    def add_exception(self, cref: str, doc_id: str) -> None:
        """Record a newly added exception entry."""
        self.added_exceptions.append(f"Exception=[{cref}] in Member=[{doc_id}]")

    def log_summary(self, details: bool | None = None) -> None:
        """Log the totals of the run, and the item lists when requested."""
        details = self.print_details if details is None else details
        logger.info("---------")
        logger.info("FINISHED")
        logger.info("---------")
        logger.info("Total modified files: %s", len(self.modified_files))
        if details:
            for file_path in self.modified_files:
                logger.info("    - %s", file_path)
        logger.info("Total modified types: %s", len(self.modified_types))
        if details:
            for doc_id in self.modified_types:
                logger.info("    - %s", doc_id)
        logger.info("Total modified APIs: %s", len(self.modified_apis))
        if details:
            for doc_id in self.modified_apis:
                logger.info("    - %s", doc_id)
        logger.info("Total problems: %s", len(self.problems))
        if details:
            for problem in self.problems:
                logger.info("    - %s", problem)
        logger.info("Total added exceptions: %s", len(self.added_exceptions))
        if details:
            for exception in self.added_exceptions:
                logger.info("    - %s", exception)
        logger.info(
            "Total modified individual elements: %s", self.total_modified_elements
        )

    def log_undocumented(self, docs: DocsCommentsContainer) -> dict[str, int]:
        """Log every doc field that is still missing. Returns the counts."""
        counts = {
            "type_summaries": 0,
            "member_summaries": 0,
            "member_returns": 0,
            "member_property_values": 0,
            "member_params": 0,
            "member_type_params": 0,
            "exceptions": 0,
        }

        logger.info("-----------------")
        logger.info("UNDOCUMENTED APIS")
        logger.info("-----------------")
        for docs_type in docs.all_types():
            if is_docs_empty(docs_type.summary):
                counts["type_summaries"] += 1
                logger.info("%s: <summary>", docs_type.doc_id)
            for member in docs.members_of(docs_type.doc_id):
                doc_id = member.doc_id
                if is_docs_empty(member.summary):
                    counts["member_summaries"] += 1
                    logger.info("%s: <summary>", doc_id)
                if (
                    member.is_method
                    and member.return_type not in ("", "System.Void")
                    and is_docs_empty(member.returns)
                ):
                    counts["member_returns"] += 1
                    logger.info("%s: <returns>", doc_id)
                if member.is_property and is_docs_empty(member.value):
                    counts["member_property_values"] += 1
                    logger.info("%s: <value>", doc_id)
                for param in member.params:
                    if is_docs_empty(param.value):
                        counts["member_params"] += 1
                        logger.info("%s: <param name=%s>", doc_id, param.name)
                for type_param in member.type_params:
                    if is_docs_empty(type_param.value):
                        counts["member_type_params"] += 1
                        logger.info("%s: <typeparam name=%s>", doc_id, type_param.name)
                for exception in member.exceptions:
                    if is_docs_empty(exception.value):
                        counts["exceptions"] += 1
                        logger.info("%s: <exception cref=%s>", doc_id, exception.cref)

        logger.info("Undocumented type summaries: %s", counts["type_summaries"])
        logger.info("Undocumented member summaries: %s", counts["member_summaries"])
        logger.info("Undocumented method returns: %s", counts["member_returns"])
        logger.info(
            "Undocumented property values: %s", counts["member_property_values"]
        )
        logger.info("Undocumented member params: %s", counts["member_params"])
        logger.info("Undocumented member type params: %s", counts["member_type_params"])
        logger.info("Undocumented exceptions: %s", counts["exceptions"])
        return counts

    def write_json(self, path: str | Path, config_hash: str) -> None:
        """Write the report to a JSON file."""
        report: dict[str, Any] = {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "config_hash": config_hash,
            },
            "modified_files": self.modified_files,
            "modified_types": self.modified_types,
            "modified_apis": self.modified_apis,
            "interface_ported_apis": self.interface_ported_apis,
            "problems": self.problems,
            "added_exceptions": self.added_exceptions,
            "stats": {
                "total_modified_files": len(self.modified_files),
                "total_modified_types": len(self.modified_types),
                "total_modified_apis": len(self.modified_apis),
                "total_problems": len(self.problems),
                "total_added_exceptions": len(self.added_exceptions),
                "total_modified_elements": self.total_modified_elements,
            },
        }

        Path(path).write_text(json.dumps(report, indent=2), encoding="utf-8")
