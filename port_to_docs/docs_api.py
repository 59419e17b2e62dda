"""Shared behavior of Docs xml types and members.

Every write goes through the structured xml formatter and marks the API as
changed, so the set of changed APIs is exactly the set of files to save.
"""

import re
from collections import Counter

from lxml import etree

from port_to_docs.markup_translator import format_as_xml
from port_to_docs.xml_text import (
    TO_BE_ADDED,
    append_indented,
    indentation_of,
    inner_xml,
    is_docs_empty,
    remove_substrings,
    set_inner_xml,
)

KIND_TYPE = "Type"
KIND_MEMBER = "Member"

# Canonical order of the children of a <Docs> block.
DOCS_CHILD_ORDER = [
    "typeparam",
    "param",
    "summary",
    "returns",
    "value",
    "remarks",
    "exception",
    "inheritdoc",
]

WORD_RE = re.compile(r"\w+")
OR_SEPARATOR_RE = re.compile(r"\n\s*-or-\s*\n")


def insert_docs_child(docs: etree._Element, child: etree._Element) -> etree._Element:
    """Insert a child into a <Docs> block at its canonical position."""
    rank = DOCS_CHILD_ORDER.index(child.tag)
    anchor = None
    for existing in docs:
        if (
            isinstance(existing.tag, str)
            and existing.tag in DOCS_CHILD_ORDER
            and DOCS_CHILD_ORDER.index(existing.tag) <= rank
        ):
            anchor = existing
    if anchor is None and len(docs):
        child.tail = docs.text
        docs.insert(0, child)
        return child
    return append_indented(docs, child, after=anchor)


class DocsParam:
    """A ``<param>`` or ``<typeparam>`` element inside a Docs block."""

    def __init__(self, element: etree._Element, parent_api: "DocsAPI") -> None:
        """Wrap the element and remember which API owns it."""
        self.element = element
        self.parent_api = parent_api

    @property
    def name(self) -> str:
        """Return the param name."""
        return self.element.get("name", "")

    @property
    def value(self) -> str:
        """Return the param description."""
        return inner_xml(self.element)

    @value.setter
    def value(self, text: str) -> None:
        set_inner_xml(self.element, format_as_xml(text))
        self.parent_api.changed = True


class DocsException:
    """An ``<exception cref="...">`` element inside a Docs block."""

    def __init__(self, element: etree._Element, parent_api: "DocsAPI") -> None:
        """Wrap the element and remember which API owns it."""
        self.element = element
        self.parent_api = parent_api

    @property
    def cref(self) -> str:
        """Return the exception type DocId."""
        return self.element.get("cref", "")

    @property
    def value(self) -> str:
        """Return the exception description."""
        return inner_xml(self.element)

    @value.setter
    def value(self, text: str) -> None:
        set_inner_xml(
            self.element, format_as_xml(text, remove_undesired_endlines=False)
        )
        self.parent_api.changed = True

    def append(self, text: str) -> None:
        """Append another condition, separated by an ``-or-`` paragraph."""
        current = remove_substrings(self.value, TO_BE_ADDED).strip()
        if current:
            current += "\n\n-or-\n\n"
        self.value = current + text

    def word_count_collides_above_threshold(self, text: str, threshold: int) -> bool:
        """Check if ``text`` mostly repeats the current description.

        The whole description and each of its ``-or-`` conditions are compared,
        so a condition appended by an earlier run is recognized again.
        """
        incoming = Counter(WORD_RE.findall(text))
        current = self.value
        for existing in [current, *OR_SEPARATOR_RE.split(current)]:
            if existing.strip() == text.strip():
                return True
            if _words_collide(Counter(WORD_RE.findall(existing)), incoming, threshold):
                return True
        return False


def _words_collide(existing: Counter, incoming: Counter, threshold: int) -> bool:
    """Check the share of shared word counts against ``threshold``.

    Counts the distinct words of the smaller text whose number of occurrences
    is the same in the larger text, as a percentage of the smaller text.
    """
    small, big = sorted((existing, incoming), key=len)
    if not small:
        return False
    collisions = sum(1 for word, count in small.items() if big.get(word) == count)
    return collisions * 100 // len(small) >= threshold


class DocsAPI:
    """Base class for a Docs xml element that owns a <Docs> block."""

    kind = ""

    def __init__(self, element: etree._Element, file_path: str) -> None:
        """Wrap an API element that belongs to the given file."""
        self.element = element
        self.file_path = file_path
        self.changed = False

    @property
    def doc_id(self) -> str:
        """Return the DocId of this API."""
        raise NotImplementedError

    @property
    def docs(self) -> etree._Element:
        """Return the <Docs> block, creating it if missing."""
        docs = self.element.find("Docs")
        if docs is None:
            docs = append_indented(self.element, etree.Element("Docs"))
        return docs

    @property
    def assembly_names(self) -> list[str]:
        """Return the names of the assemblies this API ships in."""
        return [
            (n.text or "").strip()
            for n in self.element.iterfind("AssemblyInfo/AssemblyName")
        ]

    @property
    def return_type(self) -> str:
        """Return the declared return type, or an empty string."""
        return (self.element.findtext("ReturnValue/ReturnType") or "").strip()

    def _docs_text(self, tag: str) -> str:
        element = self.docs.find(tag)
        if element is None:
            return ""
        fmt = element.find("format")
        if fmt is not None:
            return (fmt.text or "").strip()
        return inner_xml(element)

    def _docs_element(self, tag: str) -> etree._Element:
        element = self.docs.find(tag)
        if element is None:
            element = insert_docs_child(self.docs, etree.Element(tag))
        return element

    def _set_docs_text(self, tag: str, text: str) -> None:
        set_inner_xml(self._docs_element(tag), format_as_xml(text))
        self.changed = True

    @property
    def summary(self) -> str:
        """Return the summary text."""
        return self._docs_text("summary")

    @summary.setter
    def summary(self, text: str) -> None:
        self._set_docs_text("summary", text)

    @property
    def remarks(self) -> str:
        """Return the remarks text; markdown remarks come back as raw markdown."""
        return self._docs_text("remarks")

    @remarks.setter
    def remarks(self, text: str) -> None:
        self._set_docs_text("remarks", text)

    def set_markdown_remarks(self, markdown: str) -> None:
        """Store remarks as a markdown block wrapped in CDATA."""
        element = self._docs_element("remarks")
        for child in list(element):
            element.remove(child)
        indent = indentation_of(element)
        element.text = "\n" + indent + "  "
        fmt = etree.SubElement(element, "format", type="text/markdown")
        fmt.text = etree.CDATA(markdown + indent + "  ")
        fmt.tail = "\n" + indent
        self.changed = True

    @property
    def returns(self) -> str:
        """Return the returns text."""
        return self._docs_text("returns")

    @returns.setter
    def returns(self, text: str) -> None:
        self._set_docs_text("returns", text)

    @property
    def params(self) -> list[DocsParam]:
        """Return the documented params in document order."""
        return [DocsParam(e, self) for e in self.docs.iterfind("param")]

    @property
    def type_params(self) -> list[DocsParam]:
        """Return the documented type params in document order."""
        return [DocsParam(e, self) for e in self.docs.iterfind("typeparam")]

    @property
    def inheritdoc_cref(self) -> str | None:
        """Return the inheritdoc cref, '' for a bare marker, None without one."""
        element = self.docs.find("inheritdoc")
        if element is None:
            return None
        return element.get("cref", "")

    def set_inheritdoc(self, cref: str) -> bool:
        """Add the inheritdoc marker. Returns True if the xml changed.

        A marker that is already there is kept as is, cref included.
        """
        if self.inheritdoc_cref is not None:
            return False
        element = self._docs_element("inheritdoc")
        if cref:
            element.set("cref", cref)
        self.changed = True
        return True

    @property
    def is_undocumented(self) -> bool:
        """Check if the summary, remarks or any (type) param is still missing."""
        return (
            is_docs_empty(self.summary)
            or is_docs_empty(self.remarks)
            or any(is_docs_empty(p.value) for p in self.params)
            or any(is_docs_empty(p.value) for p in self.type_params)
        )
