"""Index of IntelliSense xml documentation keyed by DocId."""

import logging

from lxml import etree

from port_to_docs.api_filter import ApiFilter
from port_to_docs.doc_id import namespace_of, strip_prefix, type_doc_id_of
from port_to_docs.intellisense_member import IntelliSenseXmlMember
from port_to_docs.xml_text import root_of

logger = logging.getLogger(__name__)

ROOT_TAG = "doc"


class IntelliSenseXmlCommentsContainer:
    """Holds every IntelliSense member loaded for a run, in load order."""

    def __init__(self, api_filter: ApiFilter | None = None) -> None:
        """Initialize an empty container."""
        self.api_filter = api_filter or ApiFilter()
        self.members: dict[str, IntelliSenseXmlMember] = {}
        self.skipped_files: list[str] = []
        self.conflicts: list[str] = []

    def load(
        self, document: etree._Element | etree._ElementTree, file_path: str
    ) -> int:
        """Index the members of one IntelliSense xml document.

        Returns the number of members added. Documents that do not follow the
        IntelliSense schema are skipped and recorded in ``skipped_files``.
        """
        root = root_of(document)
        if root.tag != ROOT_TAG:
            logger.error(
                "Skipping '%s': expected <%s> root, found <%s>.",
                file_path,
                ROOT_TAG,
                root.tag,
            )
            self.skipped_files.append(file_path)
            return 0

        assembly = (root.findtext("assembly/name") or "").strip()
        if not assembly:
            logger.error("Skipping '%s': no assembly name.", file_path)
            self.skipped_files.append(file_path)
            return 0

        if not self.api_filter.is_assembly_included([assembly]):
            logger.debug("Assembly '%s' excluded: %s", assembly, file_path)
            return 0

        added = 0
        for element in root.iterfind("members/member"):
            member = IntelliSenseXmlMember.from_element(element, assembly, file_path)
            if not member.name or not self._is_included(member.name):
                continue
            if member.name in self.members:
                first = self.members[member.name].file_path
                logger.warning(
                    "Duplicate DocId '%s' in '%s' ignored (first seen in '%s').",
                    member.name,
                    file_path,
                    first,
                )
                self.conflicts.append(member.name)
                continue
            self.members[member.name] = member
            added += 1

        logger.debug("Loaded %s IntelliSense members from '%s'.", added, file_path)
        return added

    def _is_included(self, doc_id: str) -> bool:
        type_name = strip_prefix(type_doc_id_of(doc_id))
        return self.api_filter.is_namespace_included(
            namespace_of(doc_id)
        ) and self.api_filter.is_type_included(type_name)

    def lookup(self, doc_id: str) -> IntelliSenseXmlMember | None:
        """Return the member with the given DocId, if loaded."""
        return self.members.get(doc_id)

    def all_members(self) -> list[IntelliSenseXmlMember]:
        """Return every member in load order."""
        return list(self.members.values())

    def __len__(self) -> int:
        return len(self.members)
