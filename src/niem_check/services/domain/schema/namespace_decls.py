#!/usr/bin/env python3
"""
Namespace declaration ledger.

Records every ``xmlns:prefix="uri"`` declaration found in a schema document
set, remembering the prefix/URI pair, the document and line of the
declaration, the target namespace of the document, the element nesting depth
of the declaration, and the order in which declarations were encountered.

Once assembly is complete the ledger generates warnings about:

- one prefix declared for multiple URIs
- one URI declared with multiple prefixes
- the well-known ``rdf`` prefix and the RDF namespace bound to anything else
"""

import logging
from collections import defaultdict

from ....models.models import NamespaceDecl
from .constants import NIEM_RELEASE_PREFIXES, RDF_NS

logger = logging.getLogger(__name__)

# Sort priorities for prefix mapping; lower sorts first
PRIORITY_EXTENSION = 1
PRIORITY_RELEASE = 2
PRIORITY_EXTERNAL = 3


class NamespaceDeclarations:
    """Ordered record of the namespace declarations in a schema document set."""

    def __init__(self):
        self._decls: list[NamespaceDecl] = []
        self._warnings: list[str] | None = None

    def __len__(self):
        return len(self._decls)

    def next_decl_number(self) -> int:
        return len(self._decls) + 1

    def add_declaration(self, decl: NamespaceDecl) -> None:
        """Record one declaration. Its target namespace is claimed later."""
        self._decls.append(decl)
        self._warnings = None

    def claim_declarations(self, target_ns: str | None, version: str, count: int) -> None:
        """Set the target namespace and priority of the most recent declarations.

        Called once a schema document is parsed, for the ``count``
        declarations that document contributed.
        """
        if count <= 0:
            return
        if not version:
            priority = PRIORITY_EXTERNAL
        elif target_ns and target_ns.startswith(NIEM_RELEASE_PREFIXES):
            priority = PRIORITY_RELEASE
        else:
            priority = PRIORITY_EXTENSION
        for decl in self._decls[-count:]:
            decl.target_namespace = target_ns
            decl.sort_priority = priority
        self._warnings = None

    def declarations(self) -> list[NamespaceDecl]:
        """Declarations in the order they were encountered."""
        return list(self._decls)

    def prioritized_declarations(self) -> list[NamespaceDecl]:
        """Declarations in prefix-mapping priority order.

        Extension schemas first, then NIEM release schemas, then external
        schemas. Within one namespace, outer elements before inner ones.
        Ties keep the order in which declarations were found.
        """
        first_seen: dict[str | None, int] = {}
        for decl in self._decls:
            first_seen.setdefault(decl.target_namespace, decl.decl_number)
        return sorted(
            self._decls,
            key=lambda d: (d.sort_priority, first_seen[d.target_namespace], d.nest_level, d.decl_number),
        )

    def prefix_declarations(self) -> dict[str, list[NamespaceDecl]]:
        """Declarations grouped by prefix."""
        index = defaultdict(list)
        for decl in self._decls:
            index[decl.prefix].append(decl)
        return dict(index)

    def uri_declarations(self) -> dict[str, list[NamespaceDecl]]:
        """Declarations grouped by namespace URI."""
        index = defaultdict(list)
        for decl in self._decls:
            index[decl.uri].append(decl)
        return dict(index)

    def warnings(self) -> list[str]:
        """Warnings about inconsistent namespace bindings in the document set."""
        if self._warnings is not None:
            return self._warnings
        msgs = []
        by_prefix = self.prefix_declarations()
        by_uri = self.uri_declarations()

        for prefix in sorted(by_prefix):
            decls = by_prefix[prefix]
            if len({d.uri for d in decls}) > 1:
                msgs.append(f'prefix "{prefix}" mapped to multiple URIs:')
                msgs.extend(f'  to "{d.uri}" at {d.file_uri}:{d.line}' for d in decls)

        for uri in sorted(by_uri):
            decls = by_uri[uri]
            if len({d.prefix for d in decls}) > 1:
                msgs.append(f'uri "{uri}" mapped to multiple prefixes:')
                msgs.extend(f'  to "{d.prefix}" at {d.file_uri}:{d.line}' for d in decls)

        bad_rdf = [d for d in by_prefix.get("rdf", []) if d.uri != RDF_NS]
        if bad_rdf:
            msgs.append('Well-known "rdf" prefix bound to non-standard namespace URI:')
            msgs.extend(f'  to "{d.uri}" at {d.file_uri}:{d.line}' for d in bad_rdf)

        bad_rdf = [d for d in by_uri.get(RDF_NS, []) if d.prefix != "rdf"]
        if bad_rdf:
            msgs.append("RDF namespace URI bound to non-standard prefix:")
            msgs.extend(f'  to "{d.prefix}" at {d.file_uri}:{d.line}' for d in bad_rdf)

        if msgs:
            logger.debug(f"Namespace declarations produced {len(msgs)} warning lines")
        self._warnings = msgs
        return msgs
