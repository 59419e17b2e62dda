"""Helpers for reading and writing the text content of XML doc elements."""

import re
from xml.sax.saxutils import escape

from lxml import etree

TO_BE_ADDED = "To be added."

SELF_CLOSING_RE = re.compile(r"<([^<>!?/][^<>]*?)\s*/>")
CDATA_RE = re.compile(r"(<!\[CDATA\[.*?\]\]>)", re.DOTALL)
_WRAPPER = "wrapper"


def is_docs_empty(text: str | None) -> bool:
    """Check if a doc string is missing, blank, or the 'To be added.' placeholder."""
    if text is None:
        return True
    stripped = text.strip()
    return not stripped or stripped == TO_BE_ADDED


def remove_substrings(text: str, *substrings: str) -> str:
    """Remove every occurrence of each substring from the text."""
    for s in substrings:
        text = text.replace(s, "")
    return text


def inner_xml(element: etree._Element | None) -> str:
    """Return the serialized content of an element, without the element tags."""
    if element is None:
        return ""
    parts = [escape(element.text or "")]
    parts.extend(
        etree.tostring(child, encoding="unicode", with_tail=True) for child in element
    )
    return normalize_self_closing("".join(parts)).strip()


def set_inner_xml(element: etree._Element, text: str) -> None:
    """Replace the content of an element with the given XML fragment.

    Text that does not parse as XML is stored as plain, escaped text.
    """
    for child in list(element):
        element.remove(child)
    try:
        fragment = etree.fromstring(f"<{_WRAPPER}>{text}</{_WRAPPER}>")
    except etree.XMLSyntaxError:
        element.text = text
        return
    element.text = fragment.text
    for child in list(fragment):
        element.append(child)


def normalize_self_closing(xml: str) -> str:
    """Rewrite self-closing tags as ``<tag attr="x" />``, leaving CDATA untouched."""
    pieces = CDATA_RE.split(xml)
    for i in range(0, len(pieces), 2):
        pieces[i] = SELF_CLOSING_RE.sub(r"<\1 />", pieces[i])
    return "".join(pieces)


def indentation_of(element: etree._Element) -> str:
    """Return the whitespace that precedes the element on its line."""
    previous = element.getprevious()
    before = previous.tail if previous is not None else element.getparent().text
    if before and "\n" in before:
        return before.rsplit("\n", 1)[1]
    return ""


def append_indented(
    parent: etree._Element,
    child: etree._Element,
    after: etree._Element | None = None,
) -> etree._Element:
    """Insert a child after ``after`` (or last), keeping sibling indentation."""
    siblings = list(parent)
    anchor = after if after is not None else (siblings[-1] if siblings else None)
    if anchor is None:
        parent_indent = indentation_of(parent) if parent.getparent() is not None else ""
        parent.text = "\n" + parent_indent + "  "
        child.tail = "\n" + parent_indent
        parent.append(child)
        return child

    child.tail = anchor.tail
    anchor.tail = "\n" + indentation_of(anchor)
    anchor.addnext(child)
    return child


def root_of(document: etree._Element | etree._ElementTree) -> etree._Element:
    """Return the root element of a parsed document or element."""
    if isinstance(document, etree._ElementTree):
        return document.getroot()
    return document
