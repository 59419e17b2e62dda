"""Inclusion and exclusion rules for assemblies, namespaces and types."""


def _matches_any(name: str, prefixes: list[str]) -> bool:
    return any(name.startswith(p) for p in prefixes)


def _is_included(name: str, included: list[str], excluded: list[str]) -> bool:
    if _matches_any(name, excluded):
        return False
    return not included or _matches_any(name, included)


class ApiFilter:
    """Decides which APIs take part in a porting run."""

    def __init__(
        self,
        included_assemblies: list[str] | None = None,
        excluded_assemblies: list[str] | None = None,
        included_namespaces: list[str] | None = None,
        excluded_namespaces: list[str] | None = None,
        included_types: list[str] | None = None,
        excluded_types: list[str] | None = None,
    ) -> None:
        """Initialize the filter with name prefixes to include or exclude."""
        self.included_assemblies = list(included_assemblies or [])
        self.excluded_assemblies = list(excluded_assemblies or [])
        self.included_namespaces = list(included_namespaces or [])
        self.excluded_namespaces = list(excluded_namespaces or [])
        self.included_types = list(included_types or [])
        self.excluded_types = list(excluded_types or [])

    def is_assembly_included(self, assembly_names: list[str]) -> bool:
        """Check the assemblies an API ships in; no assembly info always passes."""
        if not assembly_names:
            return True
        return any(
            _is_included(a, self.included_assemblies, self.excluded_assemblies)
            for a in assembly_names
        )

    def is_namespace_included(self, namespace: str) -> bool:
        """Check a namespace against the namespace rules."""
        return _is_included(
            namespace, self.included_namespaces, self.excluded_namespaces
        )

    def is_type_included(self, type_full_name: str) -> bool:
        """Check a fully qualified type name against the type rules."""
        return _is_included(type_full_name, self.included_types, self.excluded_types)

    def is_api_included(
        self, assembly_names: list[str], namespace: str, type_full_name: str
    ) -> bool:
        """Check all three rules at once."""
        return (
            self.is_assembly_included(assembly_names)
            and self.is_namespace_included(namespace)
            and self.is_type_included(type_full_name)
        )
