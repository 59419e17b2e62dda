"""Helpers for parsing and building API DocId strings.

A DocId is a kind prefix followed by a fully qualified name, e.g.
``T:System.Collections.Generic.List`1`` or
``M:System.String.Join(System.String,System.Object[])``. Type generic arity is a
single backtick suffix, method generic arity a double backtick suffix, and
parameter lists hold fully qualified type names separated by commas without spaces.
"""

import re

KIND_TYPE = "Type"
KIND_METHOD = "Method"
KIND_CONSTRUCTOR = "Constructor"
KIND_PROPERTY = "Property"
KIND_FIELD = "Field"
KIND_EVENT = "Event"

CTOR_MEMBER_NAME = ".ctor"
CCTOR_MEMBER_NAME = ".cctor"
CTOR_DOC_ID_SEGMENT = "#ctor"
CCTOR_DOC_ID_SEGMENT = "#cctor"

_PREFIX_KINDS = {
    "T": KIND_TYPE,
    "M": KIND_METHOD,
    "P": KIND_PROPERTY,
    "F": KIND_FIELD,
    "E": KIND_EVENT,
}

PREFIX_RE = re.compile(r"^[A-Z]:")
ARITY_RE = re.compile(r"`(\d+)$")
METHOD_ARITY_RE = re.compile(r"``(\d+)$")

MEMBER_TYPE_PREFIXES = {
    "Method": "M",
    "Constructor": "M",
    "Property": "P",
    "Field": "F",
    "Event": "E",
}

_OPENERS = {"{": "}", "[": "]", "(": ")", "<": ">"}


def has_prefix(doc_id: str) -> bool:
    """Check if the DocId starts with a kind prefix such as ``T:``."""
    return bool(PREFIX_RE.match(doc_id))


def strip_prefix(doc_id: str) -> str:
    """Remove the kind prefix from a DocId, if present."""
    if has_prefix(doc_id):
        return doc_id[2:]
    return doc_id


def kind_of(doc_id: str) -> str | None:
    """Return the API kind encoded in the DocId prefix, or None if unknown."""
    if not has_prefix(doc_id):
        return None
    kind = _PREFIX_KINDS.get(doc_id[0])
    if kind == KIND_METHOD and member_name_of(doc_id) in (
        CTOR_MEMBER_NAME,
        CCTOR_MEMBER_NAME,
    ):
        return KIND_CONSTRUCTOR
    return kind


def split_parameters(doc_id: str) -> tuple[str, str]:
    """Split a DocId into its name part and its parenthesized parameter list."""
    # Parameter types may contain dots, so split before looking for the member name.
    index = doc_id.find("(")
    if index < 0:
        return doc_id, ""
    return doc_id[:index], doc_id[index:]


def _split_name(doc_id: str) -> tuple[str, str]:
    """Split an unprefixed member DocId into (type part, member segment)."""
    name, _ = split_parameters(strip_prefix(doc_id))
    owner, _, member = name.rpartition(".")
    return owner, member


def member_name_of(doc_id: str) -> str:
    """Return the literal member name, without generic arity.

    Constructors use the fixed member names ``.ctor`` and ``.cctor`` rather than
    the ``#ctor`` segment found in their DocId.
    """
    _, member = _split_name(doc_id)
    if member == CTOR_DOC_ID_SEGMENT:
        return CTOR_MEMBER_NAME
    if member == CCTOR_DOC_ID_SEGMENT:
        return CCTOR_MEMBER_NAME
    return METHOD_ARITY_RE.sub("", member)


def type_doc_id_of(doc_id: str) -> str:
    """Return the DocId of the type that declares the given member or type."""
    if doc_id.startswith("T:"):
        return doc_id
    owner, _ = _split_name(doc_id)
    return f"T:{owner}"


def namespace_of(doc_id: str) -> str:
    """Return the namespace portion of a type or member DocId."""
    type_name = strip_prefix(type_doc_id_of(doc_id))
    # Nested types are dot separated too, so an outer type reads as namespace.
    namespace, _, _ = type_name.rpartition(".")
    return namespace


def arity_of(type_name: str) -> int:
    """Return the generic arity encoded in a type name (``List`1`` is 1)."""
    name, _ = split_parameters(strip_prefix(type_name))
    if METHOD_ARITY_RE.search(name):
        return 0
    m = ARITY_RE.search(name)
    return int(m.group(1)) if m else 0


def method_arity_of(doc_id: str) -> int:
    """Return the generic arity of a method DocId (``M``2`` is 2)."""
    _, member = _split_name(doc_id)
    m = METHOD_ARITY_RE.search(member)
    return int(m.group(1)) if m else 0


def parse_parameter_list(signature: str) -> list[str]:
    """Split a parenthesized parameter list into its top-level type names."""
    signature = signature.strip()
    if signature.startswith("(") and signature.endswith(")"):
        signature = signature[1:-1]
    if not signature:
        return []

    parts: list[str] = []
    stack: list[str] = []
    current = ""
    for ch in signature:
        if ch in _OPENERS:
            stack.append(_OPENERS[ch])
        elif stack and ch == stack[-1]:
            stack.pop()
        elif ch == "," and not stack:
            parts.append(current)
            current = ""
            continue
        current += ch
    parts.append(current)
    return parts


def format_type_for_doc_id(type_name: str) -> str:
    """Format a Docs parameter type name the way DocIds spell it.

    ``System.Collections.Generic.List<System.Int32>`` becomes
    ``System.Collections.Generic.List{System.Int32}`` and by-ref types end in ``@``.
    """
    formatted = type_name.replace(" ", "").replace("<", "{").replace(">", "}")
    if formatted.endswith("&"):
        formatted = formatted[:-1] + "@"
    return formatted


def format_parameter_list(type_names: list[str]) -> str:
    """Format parameter types into the canonical ``(A,B)`` DocId suffix."""
    if not type_names:
        return ""
    return "(" + ",".join(format_type_for_doc_id(t) for t in type_names) + ")"


def build_member_doc_id(
    member_type: str, type_doc_id: str, member_name: str, parameter_types: list[str]
) -> str:
    """Build a member DocId from its pieces.

    Used for Docs members that carry no DocId signature of their own.
    """
    prefix = MEMBER_TYPE_PREFIXES.get(member_type, "M")
    if member_name == CTOR_MEMBER_NAME:
        member_name = CTOR_DOC_ID_SEGMENT
    elif member_name == CCTOR_MEMBER_NAME:
        member_name = CCTOR_DOC_ID_SEGMENT
    type_name = strip_prefix(type_doc_id)
    return (
        f"{prefix}:{type_name}.{member_name}{format_parameter_list(parameter_types)}"
    )


def rebase_member_doc_id(member_doc_id: str, new_type_doc_id: str) -> str:
    """Move a member DocId onto another declaring type, keeping its signature."""
    prefix = member_doc_id[:2] if has_prefix(member_doc_id) else ""
    name, params = split_parameters(strip_prefix(member_doc_id))
    _, _, member = name.rpartition(".")
    return f"{prefix}{strip_prefix(new_type_doc_id)}.{member}{params}"


def type_doc_id_from_name(full_name: str) -> str:
    """Build a type DocId from a Docs type name such as ``N.Dictionary<K,V>``."""
    name = full_name.strip()
    index = name.find("<")
    if index < 0 or not name.endswith(">"):
        return f"T:{name}"
    arguments = parse_parameter_list("(" + name[index + 1 : -1] + ")")
    return f"T:{name[:index]}`{len(arguments)}"
