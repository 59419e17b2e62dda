"""A ``<Type>`` document from the Docs xml repository."""

from lxml import etree

from port_to_docs.docs_api import KIND_TYPE, DocsAPI

DELEGATE_BASE_TYPES = frozenset({"System.Delegate", "System.MulticastDelegate"})
ENUM_BASE_TYPE = "System.Enum"


class DocsType(DocsAPI):
    """Represents one Docs xml file, which documents exactly one type."""

    kind = KIND_TYPE

    def __init__(
        self,
        element: etree._Element,
        file_path: str,
        tree: etree._ElementTree | None = None,
    ) -> None:
        """Wrap the ``<Type>`` root element of a Docs file."""
        super().__init__(element, file_path)
        self.tree = tree

    @property
    def doc_id(self) -> str:
        """Return the DocId from the ``TypeSignature`` element."""
        for sig in self.element.iterfind("TypeSignature"):
            if sig.get("Language") == "DocId":
                return sig.get("Value", "").strip()
        return ""

    @property
    def name(self) -> str:
        """Return the short type name, e.g. ``List<T>``."""
        return self.element.get("Name", "")

    @property
    def full_name(self) -> str:
        """Return the fully qualified type name, e.g. ``System.Collections.List<T>``."""
        return self.element.get("FullName", "")

    @property
    def namespace(self) -> str:
        """Return the namespace from the full name."""
        # Generic arguments may be qualified names themselves.
        name = self.full_name.split("<", 1)[0]
        namespace, _, _ = name.rpartition(".")
        return namespace

    @property
    def base_type_name(self) -> str:
        """Return the base type name, or an empty string."""
        return (self.element.findtext("Base/BaseTypeName") or "").strip()

    @property
    def is_delegate(self) -> bool:
        """Check if the type derives from a delegate base type."""
        return self.base_type_name in DELEGATE_BASE_TYPES

    @property
    def is_enum(self) -> bool:
        """Check if the type is an enum."""
        return self.base_type_name == ENUM_BASE_TYPE

    def member_elements(self) -> list[etree._Element]:
        """Return the ``<Member>`` elements of this type."""
        return list(self.element.iterfind("Members/Member"))
