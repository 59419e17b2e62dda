"""Tests for loading IntelliSense xml documentation."""

from lxml import etree

from port_to_docs.api_filter import ApiFilter
from port_to_docs.intellisense_container import IntelliSenseXmlCommentsContainer

INTELLISENSE_XML = """<doc>
  <assembly>
    <name>MyAssembly</name>
  </assembly>
  <members>
    <member name="T:MyNamespace.MyType">
      <typeparam name="T">The item type.</typeparam>
      <summary>This is the type summary.</summary>
      <remarks>These are the type remarks.</remarks>
    </member>
    <member name="M:MyNamespace.MyType.MyMethod(System.Int32)">
      <summary>Summary with <see cref="T:System.String"/>.</summary>
      <param name="value">The value.</param>
      <returns>The result.</returns>
      <exception cref="T:System.ArgumentNullException">Thrown when null.</exception>
    </member>
    <member name="P:MyNamespace.MyType.MyProperty">
      <inheritdoc cref="P:MyNamespace.IMyInterface.MyProperty"/>
    </member>
    <member name="T:OtherNamespace.OtherType">
      <summary>Other type.</summary>
    </member>
  </members>
</doc>"""


def test_load_members() -> None:
    """Verify that every member is indexed by its DocId."""
    container = IntelliSenseXmlCommentsContainer()
    added = container.load(etree.fromstring(INTELLISENSE_XML), "MyAssembly.xml")

    assert added == 4  # noqa: PLR2004
    assert len(container) == 4  # noqa: PLR2004
    assert container.all_members()[0].name == "T:MyNamespace.MyType"

    member = container.lookup("M:MyNamespace.MyType.MyMethod(System.Int32)")
    assert member is not None
    assert member.assembly == "MyAssembly"
    assert member.file_path == "MyAssembly.xml"
    assert member.summary == 'Summary with <see cref="T:System.String" />.'
    assert member.returns == "The result."
    assert member.find_param("value") is not None
    assert member.find_param("value").value == "The value."
    assert member.find_param("other") is None
    assert member.exceptions[0].cref == "T:System.ArgumentNullException"
    assert member.exceptions[0].value == "Thrown when null."
    assert not member.inheritdoc


def test_load_inheritdoc() -> None:
    """Verify that inheritdoc markers are recorded with their cref."""
    container = IntelliSenseXmlCommentsContainer()
    container.load(etree.fromstring(INTELLISENSE_XML), "MyAssembly.xml")

    member = container.lookup("P:MyNamespace.MyType.MyProperty")
    assert member is not None
    assert member.inheritdoc
    assert member.inheritdoc_cref == "P:MyNamespace.IMyInterface.MyProperty"
    assert member.summary == ""


def test_missing_elements_read_as_empty() -> None:
    """Verify that absent doc elements become empty strings."""
    container = IntelliSenseXmlCommentsContainer()
    container.load(etree.fromstring(INTELLISENSE_XML), "MyAssembly.xml")

    member = container.lookup("T:MyNamespace.MyType")
    assert member is not None
    assert member.returns == ""
    assert member.params == ()
    assert member.find_type_param("T").value == "The item type."
    assert member.find_type_param("U") is None


def test_wrong_root_is_skipped() -> None:
    """Verify that documents of another schema are skipped."""
    container = IntelliSenseXmlCommentsContainer()
    added = container.load(etree.fromstring("<Type Name='X' />"), "X.xml")

    assert added == 0
    assert container.skipped_files == ["X.xml"]


def test_missing_assembly_is_skipped() -> None:
    """Verify that documents without an assembly name are skipped."""
    container = IntelliSenseXmlCommentsContainer()
    added = container.load(etree.fromstring("<doc><members /></doc>"), "X.xml")

    assert added == 0
    assert container.skipped_files == ["X.xml"]


def test_duplicate_doc_id_keeps_first() -> None:
    """Verify that the first occurrence of a DocId wins."""
    container = IntelliSenseXmlCommentsContainer()
    container.load(etree.fromstring(INTELLISENSE_XML), "First.xml")
    added = container.load(etree.fromstring(INTELLISENSE_XML), "Second.xml")

    assert added == 0
    assert container.lookup("T:MyNamespace.MyType").file_path == "First.xml"
    assert "T:MyNamespace.MyType" in container.conflicts


def test_filters() -> None:
    """Verify assembly and namespace filters."""
    container = IntelliSenseXmlCommentsContainer(
        ApiFilter(excluded_namespaces=["OtherNamespace"])
    )
    container.load(etree.fromstring(INTELLISENSE_XML), "MyAssembly.xml")
    assert container.lookup("T:OtherNamespace.OtherType") is None
    assert container.lookup("T:MyNamespace.MyType") is not None

    excluded = IntelliSenseXmlCommentsContainer(
        ApiFilter(excluded_assemblies=["MyAssembly"])
    )
    assert excluded.load(etree.fromstring(INTELLISENSE_XML), "MyAssembly.xml") == 0

    included = IntelliSenseXmlCommentsContainer(
        ApiFilter(included_types=["MyNamespace.MyType"])
    )
    included.load(etree.fromstring(INTELLISENSE_XML), "MyAssembly.xml")
    assert len(included) == 3  # noqa: PLR2004
