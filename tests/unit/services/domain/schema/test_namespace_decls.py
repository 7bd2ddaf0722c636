#!/usr/bin/env python3

import pytest

from niem_check.services.domain.schema.constants import RDF_NS
from niem_check.services.domain.schema.namespace_decls import (
    PRIORITY_EXTENSION,
    PRIORITY_EXTERNAL,
    PRIORITY_RELEASE,
    NamespaceDeclarations,
)
from tests.utils.factories import NamespaceDeclFactory


def add_document(ledger, target_ns, version, decls):
    """Record a document's declarations and claim them, as assembly does."""
    for decl in decls:
        ledger.add_declaration(decl)
    ledger.claim_declarations(target_ns, version, len(decls))


class TestClaimDeclarations:
    """Test suite for assigning target namespaces and priorities"""

    @pytest.fixture
    def ledger(self):
        return NamespaceDeclarations()

    def test_claim_only_most_recent(self, ledger):
        first = NamespaceDeclFactory()
        second = NamespaceDeclFactory()
        add_document(ledger, "urn:first", "", [first])
        add_document(ledger, "http://example.com/ext", "5.0", [second])

        assert first.target_namespace == "urn:first"
        assert first.sort_priority == PRIORITY_EXTERNAL
        assert second.target_namespace == "http://example.com/ext"
        assert second.sort_priority == PRIORITY_EXTENSION

    def test_release_priority(self, ledger):
        decl = NamespaceDeclFactory()
        add_document(ledger, "http://release.niem.gov/niem/niem-core/5.0/", "5.0", [decl])

        assert decl.sort_priority == PRIORITY_RELEASE

    def test_claim_nothing(self, ledger):
        decl = NamespaceDeclFactory()
        ledger.add_declaration(decl)
        ledger.claim_declarations("urn:x", "", 0)

        assert decl.target_namespace is None

    def test_next_decl_number(self, ledger):
        assert ledger.next_decl_number() == 1
        add_document(ledger, "urn:x", "", [NamespaceDeclFactory(), NamespaceDeclFactory()])
        assert ledger.next_decl_number() == 3
        assert len(ledger) == 2


class TestPrioritizedDeclarations:
    """Test suite for prefix-mapping priority order"""

    def test_priority_order(self):
        ledger = NamespaceDeclarations()
        ext_ns = NamespaceDeclFactory(prefix="xs-ext", decl_number=1)
        rel_ns = NamespaceDeclFactory(prefix="nc", decl_number=2)
        ext_inner = NamespaceDeclFactory(prefix="inner", decl_number=3, nest_level=2)
        ext_outer = NamespaceDeclFactory(prefix="outer", decl_number=4, nest_level=0)
        my_ns = NamespaceDeclFactory(prefix="my", decl_number=5)

        add_document(ledger, "urn:external", "", [ext_ns])
        add_document(ledger, "http://release.niem.gov/niem/niem-core/5.0/", "5.0", [rel_ns])
        add_document(ledger, "urn:other-external", "", [ext_inner, ext_outer])
        add_document(ledger, "http://example.com/my", "5.0", [my_ns])

        ordered = [d.prefix for d in ledger.prioritized_declarations()]
        assert ordered == ["my", "nc", "xs-ext", "outer", "inner"]

    def test_encounter_order_kept(self):
        ledger = NamespaceDeclarations()
        decls = [NamespaceDeclFactory(decl_number=n) for n in range(1, 4)]
        add_document(ledger, "urn:x", "", decls)

        assert ledger.declarations() == decls
        assert ledger.prioritized_declarations() == decls


class TestNamespaceDeclarationWarnings:
    """Test suite for inconsistent namespace binding warnings"""

    def test_consistent_bindings(self):
        ledger = NamespaceDeclarations()
        add_document(ledger, "urn:a", "", [
            NamespaceDeclFactory(prefix="nc", uri="urn:nc", file_uri="file:///s/a.xsd"),
        ])
        add_document(ledger, "urn:b", "", [
            NamespaceDeclFactory(prefix="nc", uri="urn:nc", file_uri="file:///s/b.xsd"),
        ])

        assert ledger.warnings() == []

    def test_prefix_with_two_uris(self):
        ledger = NamespaceDeclarations()
        add_document(ledger, "urn:a", "", [
            NamespaceDeclFactory(prefix="p", uri="urn:one", file_uri="file:///s/a.xsd", line=3),
            NamespaceDeclFactory(prefix="p", uri="urn:two", file_uri="file:///s/b.xsd", line=4),
        ])

        assert ledger.warnings() == [
            'prefix "p" mapped to multiple URIs:',
            '  to "urn:one" at file:///s/a.xsd:3',
            '  to "urn:two" at file:///s/b.xsd:4',
        ]

    def test_uri_with_two_prefixes(self):
        ledger = NamespaceDeclarations()
        add_document(ledger, "urn:a", "", [
            NamespaceDeclFactory(prefix="a", uri="urn:same", file_uri="file:///s/a.xsd", line=5),
            NamespaceDeclFactory(prefix="b", uri="urn:same", file_uri="file:///s/a.xsd", line=6),
        ])

        assert ledger.warnings() == [
            'uri "urn:same" mapped to multiple prefixes:',
            '  to "a" at file:///s/a.xsd:5',
            '  to "b" at file:///s/a.xsd:6',
        ]

    def test_rdf_prefix_misuse(self):
        ledger = NamespaceDeclarations()
        add_document(ledger, "urn:a", "", [
            NamespaceDeclFactory(prefix="rdf", uri="urn:not-rdf", file_uri="file:///s/a.xsd", line=2),
        ])

        warnings = ledger.warnings()
        assert 'Well-known "rdf" prefix bound to non-standard namespace URI:' in warnings
        assert '  to "urn:not-rdf" at file:///s/a.xsd:2' in warnings

    def test_rdf_namespace_misuse(self):
        ledger = NamespaceDeclarations()
        add_document(ledger, "urn:a", "", [
            NamespaceDeclFactory(prefix="r", uri=RDF_NS, file_uri="file:///s/a.xsd", line=2),
        ])

        assert ledger.warnings() == [
            "RDF namespace URI bound to non-standard prefix:",
            '  to "r" at file:///s/a.xsd:2',
        ]

    def test_warnings_recomputed_after_new_declaration(self):
        ledger = NamespaceDeclarations()
        add_document(ledger, "urn:a", "", [NamespaceDeclFactory(prefix="p", uri="urn:one")])
        assert ledger.warnings() == []

        add_document(ledger, "urn:b", "", [NamespaceDeclFactory(prefix="p", uri="urn:two")])
        assert ledger.warnings()[0] == 'prefix "p" mapped to multiple URIs:'
