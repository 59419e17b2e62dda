"""Immutable documentation fragments read from IntelliSense xml files."""

from dataclasses import dataclass

from lxml import etree

from port_to_docs.xml_text import inner_xml


@dataclass(frozen=True)
class IntelliSenseXmlParam:
    """A ``<param>`` or ``<typeparam>`` entry: name plus description."""

    name: str
    value: str


@dataclass(frozen=True)
class IntelliSenseXmlException:
    """An ``<exception cref="...">`` entry."""

    cref: str
    value: str


@dataclass(frozen=True)
class IntelliSenseXmlMember:
    """Represents one ``<member name="DocId">`` element."""

    name: str
    assembly: str
    file_path: str
    summary: str = ""
    remarks: str = ""
    returns: str = ""
    value: str = ""
    params: tuple[IntelliSenseXmlParam, ...] = ()
    type_params: tuple[IntelliSenseXmlParam, ...] = ()
    exceptions: tuple[IntelliSenseXmlException, ...] = ()
    inheritdoc: bool = False
    inheritdoc_cref: str = ""

    @classmethod
    def from_element(
        cls, element: etree._Element, assembly: str, file_path: str
    ) -> "IntelliSenseXmlMember":
        """Parse a ``<member>`` element."""
        inheritdoc = element.find("inheritdoc")
        inheritdoc_cref = inheritdoc.get("cref", "") if inheritdoc is not None else ""
        return cls(
            name=element.get("name", "").strip(),
            assembly=assembly,
            file_path=file_path,
            summary=inner_xml(element.find("summary")),
            remarks=inner_xml(element.find("remarks")),
            returns=inner_xml(element.find("returns")),
            value=inner_xml(element.find("value")),
            params=tuple(
                IntelliSenseXmlParam(p.get("name", ""), inner_xml(p))
                for p in element.iterfind("param")
            ),
            type_params=tuple(
                IntelliSenseXmlParam(p.get("name", ""), inner_xml(p))
                for p in element.iterfind("typeparam")
            ),
            exceptions=tuple(
                IntelliSenseXmlException(e.get("cref", ""), inner_xml(e))
                for e in element.iterfind("exception")
            ),
            inheritdoc=inheritdoc is not None,
            inheritdoc_cref=inheritdoc_cref.strip(),
        )

    def find_param(self, name: str) -> IntelliSenseXmlParam | None:
        """Return the param with the given name, if any."""
        return next((p for p in self.params if p.name == name), None)

    def find_type_param(self, name: str) -> IntelliSenseXmlParam | None:
        """Return the type param with the given name, if any."""
        return next((p for p in self.type_params if p.name == name), None)
