"""A ``<Member>`` element inside a Docs xml type file."""

from lxml import etree

from port_to_docs.doc_id import build_member_doc_id
from port_to_docs.docs_api import KIND_MEMBER, DocsAPI, DocsException, insert_docs_child
from port_to_docs.docs_type import DocsType


class DocsMember(DocsAPI):
    """Represents a method, constructor, property, field or event of a type."""

    kind = KIND_MEMBER

    def __init__(self, element: etree._Element, parent_type: DocsType) -> None:
        """Wrap a ``<Member>`` element owned by ``parent_type``."""
        super().__init__(element, parent_type.file_path)
        self.parent_type = parent_type

    @property
    def member_name(self) -> str:
        """Return the literal member name, e.g. ``.ctor`` or ``Add``."""
        return self.element.get("MemberName", "")

    @property
    def member_type(self) -> str:
        """Return the member kind: Method, Constructor, Property, Field or Event."""
        return (self.element.findtext("MemberType") or "").strip()

    @property
    def is_method(self) -> bool:
        """Check if this member is a method."""
        return self.member_type == "Method"

    @property
    def is_property(self) -> bool:
        """Check if this member is a property."""
        return self.member_type == "Property"

    @property
    def is_field(self) -> bool:
        """Check if this member is a field."""
        return self.member_type == "Field"

    @property
    def parameters(self) -> list[tuple[str, str]]:
        """Return the (name, type) pairs from the ``Parameters`` element."""
        return [
            (p.get("Name", ""), p.get("Type", ""))
            for p in self.element.iterfind("Parameters/Parameter")
        ]

    @property
    def doc_id(self) -> str:
        """Return the DocId, derived from the signature pieces when not declared."""
        for sig in self.element.iterfind("MemberSignature"):
            if sig.get("Language") == "DocId":
                return sig.get("Value", "").strip()
        return build_member_doc_id(
            self.member_type,
            self.parent_type.doc_id,
            self.member_name,
            [t for _, t in self.parameters],
        )

    @property
    def doc_id_unprefixed(self) -> str:
        """Return the DocId without its kind prefix."""
        return self.doc_id[2:]

    @property
    def implements_interface_member(self) -> str:
        """Return the DocId of the interface member this member implements."""
        return (self.element.findtext("Implements/InterfaceMember") or "").strip()

    @property
    def value(self) -> str:
        """Return the property value text."""
        return self._docs_text("value")

    @value.setter
    def value(self, text: str) -> None:
        self._set_docs_text("value", text)

    @property
    def exceptions(self) -> list[DocsException]:
        """Return the documented exceptions in document order."""
        return [DocsException(e, self) for e in self.docs.iterfind("exception")]

    def find_exception(self, cref: str) -> DocsException | None:
        """Return the exception entry for the given cref, if documented."""
        return next((e for e in self.exceptions if e.cref == cref), None)

    def add_exception(self, cref: str, text: str) -> DocsException:
        """Create a new exception entry after the existing ones."""
        element = insert_docs_child(self.docs, etree.Element("exception", cref=cref))
        exception = DocsException(element, self)
        exception.value = text
        return exception
