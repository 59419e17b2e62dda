"""Loading and saving xml files without disturbing their on-disk encoding."""

import codecs
import re
from dataclasses import dataclass
from pathlib import Path

from lxml import etree

from port_to_docs.xml_text import normalize_self_closing

DECLARATION_RE = re.compile(r"^\s*(<\?xml[^>]*\?>)")


@dataclass
class XmlFile:
    """A parsed xml file plus what is needed to write it back unchanged."""

    path: Path
    tree: etree._ElementTree
    has_bom: bool = False
    declaration: str = ""
    newline: str = "\n"
    trailing_newline: bool = False


def _parser() -> etree.XMLParser:
    return etree.XMLParser(strip_cdata=False, remove_blank_text=False)


def load_xml_file(path: str | Path) -> XmlFile:
    """Parse an xml file, remembering its BOM, declaration and line endings.

    Raises ``OSError`` when the file cannot be read and
    ``lxml.etree.XMLSyntaxError`` when it is not well-formed.
    """
    path = Path(path)
    data = path.read_bytes()
    has_bom = data.startswith(codecs.BOM_UTF8)
    text = data.decode("utf-8-sig", errors="replace")

    m = DECLARATION_RE.match(text)
    root = etree.fromstring(data, _parser())
    return XmlFile(
        path=path,
        tree=root.getroottree(),
        has_bom=has_bom,
        declaration=m.group(1) if m else "",
        newline="\r\n" if "\r\n" in text else "\n",
        trailing_newline=text.endswith("\n"),
    )


def serialize_xml_file(xml_file: XmlFile) -> str:
    """Serialize the tree the way the file was originally laid out."""
    body = etree.tostring(xml_file.tree, encoding="unicode")
    body = normalize_self_closing(body)
    if xml_file.declaration:
        body = xml_file.declaration + "\n" + body
    if xml_file.trailing_newline and not body.endswith("\n"):
        body += "\n"
    if xml_file.newline != "\n":
        body = body.replace("\n", xml_file.newline)
    return body


def save_xml_file(xml_file: XmlFile) -> None:
    """Write the tree back to its file, keeping the original BOM presence."""
    data = serialize_xml_file(xml_file).encode("utf-8")
    if xml_file.has_bom:
        data = codecs.BOM_UTF8 + data
    xml_file.path.write_bytes(data)
