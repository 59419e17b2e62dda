"""Port IntelliSense xml comments into undocumented Docs xml APIs.

Types are ported before members so that inherited and interface documentation is
already in place when a member looks it up. Each doc field is resolved on its own:
the directly matching IntelliSense member comes first, then the inheritdoc target
(or the base type chain), then the interface member the API implements. Existing
human-written text is never overwritten.
"""

import logging
from collections.abc import Iterator

from lxml import etree

from port_to_docs.decision_provider import (
    ACTION_ABORT,
    ACTION_SELECT,
    ConsoleDecisionProvider,
    DecisionProvider,
)
from port_to_docs.doc_id import rebase_member_doc_id, split_parameters, strip_prefix
from port_to_docs.docs_api import KIND_TYPE, DocsAPI, DocsParam
from port_to_docs.docs_container import DocsCommentsContainer
from port_to_docs.docs_member import DocsMember
from port_to_docs.docs_type import DocsType
from port_to_docs.errors import EmptyCorpusError, PortAbortedError
from port_to_docs.intellisense_container import IntelliSenseXmlCommentsContainer
from port_to_docs.intellisense_member import IntelliSenseXmlMember, IntelliSenseXmlParam
from port_to_docs.markup_translator import (
    clean_interface_remarks,
    format_remarks_as_markdown,
    replace_exception_patterns,
)
from port_to_docs.missing_comments import MissingComments, first_documented
from port_to_docs.port_config import PortConfig
from port_to_docs.port_report import PortReport
from port_to_docs.xml_text import is_docs_empty

logger = logging.getLogger(__name__)

VOID_RETURN_TYPE = "System.Void"

EII_REMARKS_MESSAGE = (
    "This member is an explicit interface member implementation. It can be used "
    'only when the <see cref="T:{type_name}" /> instance is cast to an '
    '<see cref="T:{interface_name}" /> interface.'
)


class ToDocsPorter:
    """Holds both corpora and runs the porting pass over the Docs types."""

    def __init__(
        self,
        config: PortConfig | None = None,
        decision_provider: DecisionProvider | None = None,
    ) -> None:
        """Initialize empty containers filtered by the configured API filter."""
        self.config = config or PortConfig()
        self.decision_provider = decision_provider or ConsoleDecisionProvider()
        self.docs_comments = DocsCommentsContainer(self.config.api_filter)
        self.intellisense_comments = IntelliSenseXmlCommentsContainer(
            self.config.api_filter
        )
        self.report = PortReport(self.config.print_summary_details)
        self._in_progress: set[str] = set()

    def load_intellisense_xml_file(
        self, document: etree._Element | etree._ElementTree, file_path: str
    ) -> int:
        """Add the members of one IntelliSense xml document to the source corpus."""
        return self.intellisense_comments.load(document, file_path)

    def load_docs_file(
        self, document: etree._Element | etree._ElementTree, file_path: str
    ) -> DocsType | None:
        """Add one Docs xml type document to the target corpus."""
        return self.docs_comments.load(document, file_path)

    def start(self) -> PortReport:
        """Port every missing doc field and return the report of the run."""
        if not len(self.intellisense_comments):
            logger.error("No IntelliSense xml comments found.")
            msg = "No IntelliSense xml comments were loaded."
            raise EmptyCorpusError(msg)
        if not self.docs_comments.types:
            logger.error("No Docs xml types found.")
            msg = "No Docs xml types were loaded."
            raise EmptyCorpusError(msg)

        self.report = PortReport(self.config.print_summary_details)
        self._in_progress.clear()

        logger.info("Looking for IntelliSense xml comments that can be ported...")
        for docs_type in self.docs_comments.all_types():
            self.port_missing_comments_for_type(docs_type)
        for member in self.docs_comments.all_members():
            self.port_missing_comments_for_member(member)
        return self.report

    # Types

    def port_missing_comments_for_type(self, docs_type: DocsType) -> None:
        """Port the missing doc fields of one type from its IntelliSense member."""
        doc_id = docs_type.doc_id
        if doc_id in self._in_progress:
            return
        source = self.intellisense_comments.lookup(doc_id)
        if source is None:
            return

        self._in_progress.add(doc_id)
        try:
            mc = MissingComments(
                summary=source.summary,
                returns=source.returns,
                remarks=source.remarks,
            )
            if source.inheritdoc:
                self._fill_from_type_inheritdoc(mc, docs_type, source)

            self._try_port_summary(docs_type, mc.summary)
            self._try_port_remarks(docs_type, mc.remarks)
            self._try_port_params(docs_type, source, None)
            self._try_port_type_params(docs_type, source, None)
            if docs_type.is_delegate:
                self._try_port_returns(docs_type, mc.returns)
        finally:
            self._in_progress.discard(doc_id)

    def _fill_from_type_inheritdoc(
        self, mc: MissingComments, docs_type: DocsType, source: IntelliSenseXmlMember
    ) -> None:
        if self.config.preserve_inheritdoc_tag:
            self._preserve_inheritdoc(mc, docs_type, source.inheritdoc_cref)
            return

        inherited = self._lookup_inheritdoc_cref(source)
        if inherited is not None:
            mc.fill(
                summary=inherited.summary,
                returns=inherited.returns,
                remarks=inherited.remarks,
            )
            return

        for base_type in self._base_types(docs_type):
            mc.fill(
                summary=base_type.summary,
                returns=base_type.returns,
                remarks=base_type.remarks,
            )
            if not any(is_docs_empty(t) for t in (mc.summary, mc.remarks)):
                break

    def _base_types(self, docs_type: DocsType) -> Iterator[DocsType]:
        """Walk the declared base types, porting undocumented ones first."""
        visited = {docs_type.doc_id}
        current = docs_type
        while current.base_type_name:
            base_type = self.docs_comments.lookup_type_by_name(current.base_type_name)
            if base_type is None or base_type.doc_id in visited:
                return
            visited.add(base_type.doc_id)
            if base_type.is_undocumented:
                self.port_missing_comments_for_type(base_type)
            yield base_type
            current = base_type

    # Members

    def port_missing_comments_for_member(self, member: DocsMember) -> None:
        """Port the missing doc fields of one member.

        Members without a matching IntelliSense member can still get their
        documentation from the interface member they implement.
        """
        doc_id = member.doc_id
        if doc_id in self._in_progress:
            return

        self._in_progress.add(doc_id)
        try:
            source = self.intellisense_comments.lookup(doc_id)
            mc = MissingComments()
            if source is not None:
                mc.fill(
                    summary=source.summary,
                    returns=source.returns if member.is_method else None,
                    remarks=source.remarks,
                    property_value=(
                        first_documented(source.value, source.returns)
                        if member.is_property
                        else None
                    ),
                )
                if source.inheritdoc:
                    self._fill_from_member_inheritdoc(mc, member, source)

            interfaced = None
            if not mc.inheritdoc_preserved:
                interfaced = self._interfaced_member(member)
                if interfaced is not None:
                    self._fill_from_interface(mc, member, interfaced)

            if source is None and interfaced is None:
                return

            from_interface = mc.interface_fields
            self._try_port_summary(member, mc.summary, "summary" in from_interface)
            self._try_port_remarks(member, mc.remarks, "remarks" in from_interface)
            self._try_port_params(member, source, interfaced)
            self._try_port_type_params(member, source, interfaced)
            if member.is_property:
                self._try_port_property(
                    member, mc.property_value, "property_value" in from_interface
                )
            elif member.is_method:
                self._try_port_returns(member, mc.returns, "returns" in from_interface)
            if source is not None:
                self._try_port_exceptions(member, source)
        finally:
            self._in_progress.discard(doc_id)

    def _fill_from_member_inheritdoc(
        self, mc: MissingComments, member: DocsMember, source: IntelliSenseXmlMember
    ) -> None:
        if self.config.preserve_inheritdoc_tag:
            self._preserve_inheritdoc(mc, member, source.inheritdoc_cref)
            return

        inherited = self._lookup_inheritdoc_cref(source)
        if inherited is not None:
            mc.fill(
                summary=inherited.summary,
                returns=inherited.returns if member.is_method else None,
                remarks=inherited.remarks,
                property_value=(
                    first_documented(inherited.value, inherited.returns)
                    if member.is_property
                    else None
                ),
            )
            return

        for base_type in self._base_types(member.parent_type):
            base_id = rebase_member_doc_id(member.doc_id, base_type.doc_id)
            base_member = self.docs_comments.members.get(base_id)
            if base_member is None:
                continue
            if base_member.is_undocumented:
                self.port_missing_comments_for_member(base_member)
            mc.fill(
                summary=base_member.summary,
                returns=base_member.returns if member.is_method else None,
                remarks=base_member.remarks,
                property_value=base_member.value if member.is_property else None,
            )
            if not any(is_docs_empty(t) for t in (mc.summary, mc.remarks)):
                break

    def _interfaced_member(self, member: DocsMember) -> DocsMember | None:
        """Return the Docs member of the interface member this one implements."""
        if self.config.skip_interface_implementations:
            return None
        interface_member_id = member.implements_interface_member
        if not interface_member_id:
            return None
        interfaced = self.docs_comments.members.get(interface_member_id)
        if interfaced is None or interfaced is member:
            return None
        if interfaced.is_undocumented:
            self.port_missing_comments_for_member(interfaced)
        return interfaced

    def _fill_from_interface(
        self, mc: MissingComments, member: DocsMember, interfaced: DocsMember
    ) -> None:
        remarks = None
        if is_docs_empty(mc.remarks):
            remarks = self._explicit_implementation_remarks(member, interfaced)
        filled = mc.fill(
            summary=interfaced.summary,
            returns=interfaced.returns if member.is_method else None,
            remarks=remarks,
            property_value=interfaced.value if member.is_property else None,
        )
        mc.interface_fields.update(filled)

    def _explicit_implementation_remarks(
        self, member: DocsMember, interfaced: DocsMember
    ) -> str | None:
        """Build the remarks of an explicit interface implementation, if it is one."""
        if is_docs_empty(interfaced.remarks):
            return None
        interface_member_name, _ = split_parameters(interfaced.doc_id_unprefixed)
        if member.member_name != interface_member_name:
            return None

        remarks = EII_REMARKS_MESSAGE.format(
            type_name=strip_prefix(member.parent_type.doc_id),
            interface_name=strip_prefix(interfaced.parent_type.doc_id),
        )
        if not self.config.skip_interface_remarks:
            remarks += "\n\n" + clean_interface_remarks(interfaced.remarks)
        return remarks

    def _record(self, element: str, api: DocsAPI, is_eii: bool = False) -> None:
        self.report.record_modified_element(element, api.file_path, api.doc_id, is_eii)
        if api.kind == KIND_TYPE:
            self.report.add_modified_type(api.doc_id)
        else:
            self.report.add_modified_api(api.doc_id)

    # Inheritdoc

    def _preserve_inheritdoc(
        self, mc: MissingComments, api: DocsAPI, cref: str
    ) -> None:
        mc.inheritdoc_preserved = True
        if api.set_inheritdoc(cref):
            self._record("inheritdoc", api)

    def _lookup_inheritdoc_cref(
        self, source: IntelliSenseXmlMember
    ) -> IntelliSenseXmlMember | None:
        if not source.inheritdoc_cref or source.inheritdoc_cref == source.name:
            return None
        inherited = self.intellisense_comments.lookup(source.inheritdoc_cref)
        if inherited is None:
            logger.warning(
                "The inheritdoc cref '%s' of '%s' was not found in IntelliSense xml.",
                source.inheritdoc_cref,
                source.name,
            )
        return inherited

    # Single-valued fields

    def _try_port_summary(
        self, api: DocsAPI, summary: str, is_eii: bool = False
    ) -> None:
        if api.kind == KIND_TYPE:
            enabled = self.config.port_type_summaries
        else:
            enabled = self.config.port_member_summaries
        if enabled and is_docs_empty(api.summary) and not is_docs_empty(summary):
            api.summary = summary
            self._record("summary", api, is_eii)

    def _try_port_remarks(
        self, api: DocsAPI, remarks: str, is_eii: bool = False
    ) -> None:
        if api.kind == KIND_TYPE:
            enabled = self.config.port_type_remarks
        else:
            enabled = self.config.port_member_remarks
        if not enabled:
            return
        # Enum fields only ever carry a summary.
        if isinstance(api, DocsMember) and api.is_field and api.parent_type.is_enum:
            return
        if is_docs_empty(api.remarks) and not is_docs_empty(remarks):
            if self.config.markdown_remarks:
                api.set_markdown_remarks(format_remarks_as_markdown(remarks))
            else:
                api.remarks = remarks
            self._record("remarks", api, is_eii)

    def _try_port_returns(
        self, api: DocsAPI, returns: str, is_eii: bool = False
    ) -> None:
        if not self.config.port_member_returns:
            return
        if api.return_type == VOID_RETURN_TYPE:
            return
        if is_docs_empty(api.returns) and not is_docs_empty(returns):
            api.returns = returns
            self._record("returns", api, is_eii)

    def _try_port_property(
        self, member: DocsMember, property_value: str, is_eii: bool = False
    ) -> None:
        if not self.config.port_member_properties:
            return
        if is_docs_empty(member.value) and not is_docs_empty(property_value):
            member.value = property_value
            self._record("value", member, is_eii)

    # Params and type params

    def _try_port_params(
        self,
        api: DocsAPI,
        source: IntelliSenseXmlMember | None,
        interfaced: DocsMember | None,
    ) -> None:
        if api.kind == KIND_TYPE:
            enabled = self.config.port_type_params
        else:
            enabled = self.config.port_member_params
        if enabled:
            self._try_port_param_list(
                api,
                "param",
                api.params,
                source,
                interfaced.params if interfaced is not None else None,
            )

    def _try_port_type_params(
        self,
        api: DocsAPI,
        source: IntelliSenseXmlMember | None,
        interfaced: DocsMember | None,
    ) -> None:
        if api.kind == KIND_TYPE:
            enabled = self.config.port_type_type_params
        else:
            enabled = self.config.port_member_type_params
        if enabled:
            self._try_port_param_list(
                api,
                "typeparam",
                api.type_params,
                source,
                interfaced.type_params if interfaced is not None else None,
            )

    def _try_port_param_list(
        self,
        api: DocsAPI,
        element_name: str,
        targets: list[DocsParam],
        source: IntelliSenseXmlMember | None,
        interfaced: list[DocsParam] | None,
    ) -> None:
        """Port each undocumented (type) param by name.

        Without an IntelliSense member, same-named entries of the interface member
        are used instead.
        """
        sources = None
        if source is not None:
            if element_name == "param":
                sources, find = source.params, source.find_param
            else:
                sources, find = source.type_params, source.find_type_param

        for target in targets:
            if not is_docs_empty(target.value):
                continue

            value = ""
            is_eii = False
            if sources is not None:
                match = find(target.name)
                if match is None:
                    match = self._resolve_unmatched_param(
                        api, element_name, target, sources, len(targets)
                    )
                    if match is None:
                        continue
                value = match.value
                if is_docs_empty(value) and interfaced:
                    value = _param_value(interfaced, match.name, target.name)
                    is_eii = not is_docs_empty(value)
            elif interfaced:
                value = _param_value(interfaced, target.name)
                is_eii = True

            if not is_docs_empty(value):
                target.value = value
                self._record(f"{element_name} {target.name}", api, is_eii)

    def _resolve_unmatched_param(
        self,
        api: DocsAPI,
        element_name: str,
        target: DocsParam,
        sources: tuple[IntelliSenseXmlParam, ...],
        target_count: int,
    ) -> IntelliSenseXmlParam | None:
        """Find the IntelliSense (type) param for a Docs one with a different name."""
        doc_id = api.doc_id
        if not sources:
            message = (
                f"There were no IntelliSense xml comments for {element_name} "
                f"{target.name} in Member DocId {doc_id}"
            )
            logger.warning(message)
            self.report.add_problem(message)
            return None

        if len(sources) != target_count:
            message = (
                f"The total number of {element_name}s does not match between "
                f"IntelliSense and Docs members {doc_id}"
            )
            logger.warning(message)
            self.report.add_problem(message)
            return None

        chosen = self._prompt_for_param(api, element_name, target, sources)
        if chosen is None:
            message = (
                f"The {element_name} {target.name} was not found in IntelliSense xml "
                f"for {doc_id}"
            )
            logger.error(message)
            self.report.add_problem(message)
        return chosen

    def _prompt_for_param(
        self,
        api: DocsAPI,
        element_name: str,
        target: DocsParam,
        sources: tuple[IntelliSenseXmlParam, ...],
    ) -> IntelliSenseXmlParam | None:
        if self.config.disable_prompts:
            logger.error(
                "Prompts disabled. Will not process the '%s' %s.",
                target.name,
                element_name,
            )
            return None

        decision = self.decision_provider.choose(
            element_name,
            target.name,
            api.doc_id,
            api.file_path,
            [p.name for p in sources],
        )
        if decision.action == ACTION_ABORT:
            msg = f"Port aborted while matching {element_name} '{target.name}'."
            raise PortAbortedError(msg)
        if decision.action != ACTION_SELECT:
            return None
        if not 0 <= decision.index < len(sources):
            logger.error(
                "Invalid %s selection %s for '%s'.",
                element_name,
                decision.index,
                api.doc_id,
            )
            return None
        return sources[decision.index]

    # Exceptions

    def _try_port_exceptions(
        self, member: DocsMember, source: IntelliSenseXmlMember
    ) -> None:
        """Add missing exception entries and optionally extend existing ones."""
        if not (
            self.config.port_exceptions_new or self.config.port_exceptions_existing
        ):
            return

        for source_exception in source.exceptions:
            if is_docs_empty(source_exception.value):
                continue
            text = replace_exception_patterns(source_exception.value)
            existing = member.find_exception(source_exception.cref)
            if existing is None:
                if not self.config.port_exceptions_new:
                    continue
                member.add_exception(source_exception.cref, text)
                self.report.add_exception(source_exception.cref, member.doc_id)
                self._record(f"exception {source_exception.cref}", member)
            elif self.config.port_exceptions_existing:
                if existing.word_count_collides_above_threshold(
                    text, self.config.exception_collision_threshold
                ):
                    continue
                existing.append(text)
                self._record(f"exception {source_exception.cref}", member)


def _param_value(params: list[DocsParam], *names: str) -> str:
    """Return the value of the first param whose name is one of ``names``."""
    for name in names:
        for param in params:
            if param.name == name and not is_docs_empty(param.value):
                return param.value
    return ""
