"""Scratch record used to stage candidate text before it is ported."""

from dataclasses import dataclass, field

from port_to_docs.xml_text import TO_BE_ADDED, is_docs_empty


def first_documented(*texts: str | None) -> str:
    """Return the first text that is not empty, or the placeholder."""
    for text in texts:
        if not is_docs_empty(text):
            return text  # type: ignore[return-value]
    return TO_BE_ADDED


@dataclass
class MissingComments:
    """Candidate text for the single-valued doc fields of one API."""

    summary: str = TO_BE_ADDED
    returns: str = TO_BE_ADDED
    remarks: str = TO_BE_ADDED
    property_value: str = TO_BE_ADDED
    interface_fields: set[str] = field(default_factory=set)
    inheritdoc_preserved: bool = False

    def fill(
        self,
        summary: str | None = None,
        returns: str | None = None,
        remarks: str | None = None,
        property_value: str | None = None,
    ) -> list[str]:
        """Fill only the fields that are still missing. Returns the filled names."""
        filled: list[str] = []
        for name, text in (
            ("summary", summary),
            ("returns", returns),
            ("remarks", remarks),
            ("property_value", property_value),
        ):
            if is_docs_empty(getattr(self, name)) and not is_docs_empty(text):
                setattr(self, name, text)
                filled.append(name)
        return filled
