#!/usr/bin/env python3

import pytest

from niem_check.models.models import LoadKind
from niem_check.services.domain.schema.document_loader import conformance_version, parse_schema_document
from tests.utils.schema_files import (
    NIEM5_CT_NS,
    NIEM5_REF_TARGET,
    SchemaFiles,
    import_element,
    include_element,
)


def line_of(path, text):
    """1-based line number of the first line containing text."""
    for n, line in enumerate(path.read_text().splitlines(), start=1):
        if text in line:
            return n
    raise AssertionError(f"{text} not found in {path}")


class TestConformanceVersion:
    """Test suite for reading the NIEM version from conformance targets"""

    def test_niem5_reference_target(self):
        assert conformance_version(NIEM5_REF_TARGET) == "5.0"

    def test_niem6_target(self):
        value = "https://docs.oasis-open.org/niemopen/ns/specification/NDR/6.0/#ExtensionSchemaDocument"
        assert conformance_version(value) == "6.0"

    def test_first_ndr_target_of_several(self):
        value = (
            "http://example.com/other/1.0/#Thing "
            "http://reference.niem.gov/niem/specification/naming-and-design-rules/4.0/#ExtensionSchemaDocument"
        )
        assert conformance_version(value) == "4.0"

    @pytest.mark.parametrize("value", ["", "http://example.com/other/1.0/#Thing", "not a uri"])
    def test_no_ndr_target(self, value):
        assert conformance_version(value) == ""


class TestParseSchemaDocument:
    """Test suite for parsing one schema document"""

    @pytest.fixture
    def files(self, tmp_path):
        return SchemaFiles(tmp_path)

    def test_target_namespace_and_references(self, files):
        path = files.schema(
            "ext.xsd",
            target_namespace="http://example.com/ext",
            body="\n".join([
                import_element("http://example.com/core", "core.xsd"),
                include_element("part.xsd"),
                include_element("old.xsd", kind="redefine"),
            ]),
        )
        result = parse_schema_document(files.uri("ext.xsd"))

        assert result.parsed
        assert result.has_schema_element
        assert result.target_namespace == "http://example.com/ext"
        assert result.version == ""
        assert [r.kind for r in result.references] == [LoadKind.IMPORT, LoadKind.INCLUDE, LoadKind.REDEFINE]

        imp, inc, red = result.references
        assert imp.namespace == "http://example.com/core"
        assert imp.schema_location == "core.xsd"
        assert imp.line == line_of(path, "<xs:import")
        assert inc.namespace is None
        assert inc.schema_location == "part.xsd"
        assert inc.line == line_of(path, "<xs:include")
        assert red.schema_location == "old.xsd"

    def test_import_without_attributes(self, files):
        files.schema("a.xsd", target_namespace="urn:a", body=import_element())
        result = parse_schema_document(files.uri("a.xsd"))

        (ref,) = result.references
        assert ref.namespace is None
        assert ref.schema_location is None

    def test_niem_version(self, files):
        files.schema(
            "core.xsd",
            target_namespace="http://release.niem.gov/niem/niem-core/5.0/",
            xmlns={"ct": NIEM5_CT_NS},
            extra_attrs=f'\n  ct:conformanceTargets="{NIEM5_REF_TARGET}"',
        )
        result = parse_schema_document(files.uri("core.xsd"))

        assert result.version == "5.0"

    def test_conformance_attribute_in_wrong_namespace_ignored(self, files):
        files.schema(
            "x.xsd",
            target_namespace="urn:x",
            xmlns={"ct": "http://example.com/not-conformance/"},
            extra_attrs=f'\n  ct:conformanceTargets="{NIEM5_REF_TARGET}"',
        )
        assert parse_schema_document(files.uri("x.xsd")).version == ""

    def test_namespace_declarations(self, files):
        files.schema(
            "decls.xsd",
            target_namespace="urn:d",
            xmlns={"d": "urn:d", "nc": "http://example.com/nc"},
            body='  <xs:annotation xmlns:inner="urn:inner"/>',
        )
        result = parse_schema_document(files.uri("decls.xsd"), first_decl_number=10)

        decls = result.declarations
        # the XML Schema namespace declaration is not recorded
        assert [(d.prefix, d.uri) for d in decls] == [
            ("d", "urn:d"),
            ("nc", "http://example.com/nc"),
            ("inner", "urn:inner"),
        ]
        assert [d.decl_number for d in decls] == [10, 11, 12]
        assert [d.nest_level for d in decls] == [0, 0, 1]
        assert all(d.file_uri == files.uri("decls.xsd") for d in decls)

    def test_default_namespace_declaration_not_recorded(self, files):
        files.schema("dflt.xsd", target_namespace="urn:d", extra_attrs='\n  xmlns="urn:d"')
        result = parse_schema_document(files.uri("dflt.xsd"))

        assert result.declarations == []

    def test_no_target_namespace(self, files):
        files.schema("none.xsd")
        result = parse_schema_document(files.uri("none.xsd"))

        assert result.parsed
        assert result.target_namespace is None

    def test_not_a_schema_document(self, files):
        files.write("data.xml", '<?xml version="1.0"?>\n<data xmlns:p="urn:p"/>\n')
        result = parse_schema_document(files.uri("data.xml"))

        assert result.parsed
        assert not result.has_schema_element
        assert result.target_namespace is None

    def test_malformed_document(self, files):
        files.write("bad.xsd", (
            '<?xml version="1.0"?>\n'
            '<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema" xmlns:p="urn:p" targetNamespace="urn:bad">\n'
            '  <xs:import namespace="urn:x" schemaLocation="x.xsd"/>\n'
            '  <xs:element>\n'
            '</xs:schema>\n'
        ))
        result = parse_schema_document(files.uri("bad.xsd"))

        assert not result.parsed
        assert result.parse_error
        assert result.read_error is None
        # partial results of a failed parse are discarded
        assert result.references == []
        assert result.declarations == []

    def test_missing_file(self, files):
        result = parse_schema_document(files.uri("missing.xsd"))

        assert not result.parsed
        assert result.read_error
        assert result.parse_error is None
