"""Rewriting of inline doc markup between IntelliSense xml, Docs xml and markdown.

The rewriting is purely textual: crefs are never checked for existence.
"""

import re
import textwrap

from port_to_docs.doc_id import (
    CCTOR_DOC_ID_SEGMENT,
    CTOR_DOC_ID_SEGMENT,
    has_prefix,
    strip_prefix,
)
from port_to_docs.xml_text import normalize_self_closing, remove_substrings

# C# keyword aliases and the runtime types they stand for.
PRIMITIVE_TYPE_ALIASES: dict[str, str] = {
    "bool": "System.Boolean",
    "byte": "System.Byte",
    "sbyte": "System.SByte",
    "char": "System.Char",
    "decimal": "System.Decimal",
    "double": "System.Double",
    "float": "System.Single",
    "int": "System.Int32",
    "uint": "System.UInt32",
    "nint": "System.IntPtr",
    "nuint": "System.UIntPtr",
    "long": "System.Int64",
    "ulong": "System.UInt64",
    "short": "System.Int16",
    "ushort": "System.UInt16",
    "object": "System.Object",
    "string": "System.String",
}

# Aliases with no real underlying type are emitted as keywords.
LANGWORD_ALIASES = frozenset({"dynamic"})

MARKDOWN_REMARKS_HEADER = "## Remarks"

SEE_CREF_RE = re.compile(r'<(?P<tag>see|seealso)\s+cref="(?P<cref>[^"]*)"\s*/>')
SEE_CREF_PAIRED_RE = re.compile(
    r'<(?P<tag>see|seealso)\s+cref="(?P<cref>[^"]*)"\s*>(?P<text>.*?)</(?P=tag)>',
    re.DOTALL,
)
SEE_LANGWORD_RE = re.compile(r'<see\s+langword="(?P<word>[^"]*)"\s*/>')
NAME_REF_RE = re.compile(r'<(?:paramref|typeparamref)\s+name="(?P<name>[^"]*)"\s*/>')
SEE_HREF_RE = re.compile(
    r'<see\s+href="(?P<href>[^"]*)"\s*>(?P<text>.*?)</see>', re.DOTALL
)
SEE_HREF_EMPTY_RE = re.compile(r'<see\s+href="(?P<href>[^"]*)"\s*/>')
INLINE_CODE_RE = re.compile(r"<c>(?P<code>.*?)</c>", re.DOTALL)
CODE_BLOCK_RE = re.compile(r"(<code\b[^>]*>.*?</code>)", re.DOTALL)
CODE_BLOCK_PARTS_RE = re.compile(
    r'<code(?:\s+(?:language|lang)="(?P<lang>[^"]*)")?[^>]*>(?P<code>.*?)</code>',
    re.DOTALL,
)
PARA_RE = re.compile(r"\s*<para>(?P<text>.*?)</para>\s*", re.DOTALL)
EXCEPTION_OR_RE = re.compile(r"\s*<para>\s*-or-\s*</para>\s*")
UNDESIRED_ENDLINE_RE = re.compile(r"[ \t]*\r?\n\s*")
BLANK_LINES_RE = re.compile(r"\n{3,}")


def escape_xref_uid(uid: str) -> str:
    """Escape a DocId (without prefix) for use inside an ``<xref:...>`` link."""
    uid = uid.replace("`", "%60")
    uid = uid.replace(CCTOR_DOC_ID_SEGMENT, "%23cctor")
    return uid.replace(CTOR_DOC_ID_SEGMENT, "%23ctor")


def _split_code_blocks(text: str) -> list[str]:
    """Split text so that odd indexes hold ``<code>`` blocks."""
    return CODE_BLOCK_RE.split(text)


def format_as_xml(text: str, *, remove_undesired_endlines: bool = True) -> str:
    """Format IntelliSense xml doc text for a Docs xml element.

    Primitive aliases in crefs become fully qualified type crefs, except aliases
    without an underlying type, which become langword references. Running this on
    already formatted text changes nothing.
    """
    if not text:
        return text

    def repl_cref(m: re.Match) -> str:
        cref = m.group("cref")
        if cref in PRIMITIVE_TYPE_ALIASES:
            return f'<{m.group("tag")} cref="T:{PRIMITIVE_TYPE_ALIASES[cref]}" />'
        if cref in LANGWORD_ALIASES:
            return f'<see langword="{cref}" />'
        return m.group(0)

    pieces = _split_code_blocks(text)
    for i in range(0, len(pieces), 2):
        piece = SEE_CREF_RE.sub(repl_cref, pieces[i])
        if remove_undesired_endlines:
            piece = UNDESIRED_ENDLINE_RE.sub(" ", piece)
        pieces[i] = piece
    return normalize_self_closing("".join(pieces)).strip()


def _cref_as_markdown(cref: str) -> str:
    if cref in PRIMITIVE_TYPE_ALIASES or cref in LANGWORD_ALIASES:
        return f"`{cref}`"
    uid = strip_prefix(cref) if has_prefix(cref) else cref
    return f"<xref:{escape_xref_uid(uid)}>"


def _paired_cref_as_markdown(m: re.Match) -> str:
    cref = m.group("cref")
    if cref in PRIMITIVE_TYPE_ALIASES or cref in LANGWORD_ALIASES:
        return f"`{cref}`"
    uid = strip_prefix(cref) if has_prefix(cref) else cref
    return f"[{m.group('text')}](xref:{escape_xref_uid(uid)})"


def _code_block_as_markdown(m: re.Match) -> str:
    lang = m.group("lang") or ""
    code = textwrap.dedent(m.group("code").strip("\n"))
    return f"\n\n```{lang}\n{code}\n```\n\n"


def format_as_markdown(text: str) -> str:
    """Convert IntelliSense xml doc text to markdown prose."""
    if not text:
        return text

    text = CODE_BLOCK_PARTS_RE.sub(_code_block_as_markdown, text)
    text = SEE_CREF_RE.sub(lambda m: _cref_as_markdown(m.group("cref")), text)
    text = SEE_CREF_PAIRED_RE.sub(_paired_cref_as_markdown, text)
    text = SEE_LANGWORD_RE.sub(lambda m: f"`{m.group('word')}`", text)
    text = NAME_REF_RE.sub(lambda m: f"`{m.group('name')}`", text)
    text = SEE_HREF_RE.sub(lambda m: f"[{m.group('text')}]({m.group('href')})", text)
    text = SEE_HREF_EMPTY_RE.sub(lambda m: f"<{m.group('href')}>", text)
    text = INLINE_CODE_RE.sub(lambda m: f"`{m.group('code')}`", text)
    text = PARA_RE.sub(lambda m: f"\n\n{m.group('text').strip()}\n\n", text)

    text = text.replace("&lt;", "<").replace("&gt;", ">").replace("&amp;", "&")

    lines = []
    in_fence = False
    for line in text.replace("\r\n", "\n").split("\n"):
        if line.strip().startswith("```"):
            in_fence = not in_fence
            lines.append(line.strip())
        else:
            lines.append(line.rstrip() if in_fence else line.strip())
    return BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


def format_remarks_as_markdown(remarks: str) -> str:
    """Produce the raw markdown body of a Docs remarks block, header included."""
    body = remarks.strip()
    for header in ("##Remarks", MARKDOWN_REMARKS_HEADER):
        if body.startswith(header):
            body = body[len(header) :].strip()
    return f"\n\n{MARKDOWN_REMARKS_HEADER}\n\n{format_as_markdown(body)}\n\n"


def clean_interface_remarks(remarks: str) -> str:
    """Strip markdown wrappers from interface remarks and normalize line endings."""
    text = remove_substrings(
        remarks, "##Remarks", MARKDOWN_REMARKS_HEADER, "<![CDATA[", "]]>"
    ).strip()
    lines = [line.strip() for line in re.split(r"[\r\n]+", text)]
    return "\n".join(line for line in lines if line)


def replace_exception_patterns(text: str) -> str:
    """Turn ``<para>`` separators in exception text into blank-line paragraphs."""
    text = EXCEPTION_OR_RE.sub("\n\n-or-\n\n", text)
    text = PARA_RE.sub(lambda m: f"\n\n{m.group('text').strip()}\n\n", text)
    return BLANK_LINES_RE.sub("\n\n", text).strip()
