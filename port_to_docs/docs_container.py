"""Index of Docs xml types and members keyed by DocId."""

import logging

from lxml import etree

from port_to_docs.api_filter import ApiFilter
from port_to_docs.doc_id import type_doc_id_from_name
from port_to_docs.docs_member import DocsMember
from port_to_docs.docs_type import DocsType
from port_to_docs.xml_text import root_of

logger = logging.getLogger(__name__)

ROOT_TAG = "Type"


class DocsCommentsContainer:
    """Holds every Docs type and member loaded for a run, in load order."""

    def __init__(self, api_filter: ApiFilter | None = None) -> None:
        """Initialize an empty container."""
        self.api_filter = api_filter or ApiFilter()
        self.types: dict[str, DocsType] = {}
        self.members: dict[str, DocsMember] = {}
        self.type_members: dict[str, list[DocsMember]] = {}
        self.skipped_files: list[str] = []
        self.conflicts: list[str] = []

    def load(
        self,
        document: etree._Element | etree._ElementTree,
        file_path: str,
    ) -> DocsType | None:
        """Index the type and members of one Docs xml document.

        Returns the loaded type, or None when the document was skipped.
        """
        root = root_of(document)
        tree = document if isinstance(document, etree._ElementTree) else None
        if root.tag != ROOT_TAG:
            logger.error(
                "Skipping '%s': expected <%s> root, found <%s>.",
                file_path,
                ROOT_TAG,
                root.tag,
            )
            self.skipped_files.append(file_path)
            return None

        docs_type = DocsType(root, file_path, tree)
        doc_id = docs_type.doc_id
        if not doc_id:
            logger.error("Skipping '%s': the type has no DocId signature.", file_path)
            self.skipped_files.append(file_path)
            return None

        if not self.api_filter.is_api_included(
            docs_type.assembly_names, docs_type.namespace, docs_type.full_name
        ):
            logger.debug("Type '%s' excluded: %s", doc_id, file_path)
            return None

        if doc_id in self.types:
            logger.warning(
                "Duplicate DocId '%s' in '%s' ignored (first seen in '%s').",
                doc_id,
                file_path,
                self.types[doc_id].file_path,
            )
            self.conflicts.append(doc_id)
            return None

        self.types[doc_id] = docs_type
        members = self.type_members.setdefault(doc_id, [])
        for element in docs_type.member_elements():
            member = DocsMember(element, docs_type)
            member_id = member.doc_id
            if member_id in self.members:
                logger.warning(
                    "Duplicate DocId '%s' in '%s' ignored.", member_id, file_path
                )
                self.conflicts.append(member_id)
                continue
            self.members[member_id] = member
            members.append(member)

        logger.debug(
            "Loaded type '%s' with %s members from '%s'.",
            doc_id,
            len(members),
            file_path,
        )
        return docs_type

    def lookup(self, doc_id: str) -> DocsType | DocsMember | None:
        """Return the type or member with the given DocId, if loaded."""
        if doc_id.startswith("T:"):
            return self.types.get(doc_id)
        return self.members.get(doc_id)

    def lookup_type_by_name(self, full_name: str) -> DocsType | None:
        """Return a type by its fully qualified name (as used in BaseTypeName)."""
        return self.types.get(type_doc_id_from_name(full_name))

    def all_types(self) -> list[DocsType]:
        """Return every type in load order."""
        return list(self.types.values())

    def all_members(self) -> list[DocsMember]:
        """Return every member in load order."""
        return list(self.members.values())

    def members_of(self, type_doc_id: str) -> list[DocsMember]:
        """Return the members declared by the given type."""
        return list(self.type_members.get(type_doc_id, []))

    def changed_types(self) -> list[DocsType]:
        """Return the types whose file needs saving."""
        return [
            t
            for t in self.types.values()
            if t.changed or any(m.changed for m in self.type_members[t.doc_id])
        ]
