#!/usr/bin/env python3
"""
Schema assembly checking.

Finds inconsistencies and ambiguities in the assembly of an XML Schema from
a collection of schema documents, under the assumption that

- the schema should be constructed entirely from local schema documents
- each schema component should have a namespace
- each namespace should be constructed from a single schema document
- in ``import`` elements, the resolved ``namespace`` and ``schemaLocation``
  attributes should point to the same document

A schema is specified by a list of XML Catalog files plus a list of initial
schema documents and/or namespace URIs. Checking happens in two stages, each
computed once and cached until the inputs change:

1. Initialization: are the catalogs valid, can every initial schema document
   be read, and does every initial namespace resolve to a local file?
2. Assembly: parse every schema document reachable through import, include,
   and redefine elements, breadth-first, and record findings for each
   reference.

Example usage::

    checker = SchemaAssemblyChecker(["catalog.xml"], ["myschema.xsd"])
    if checker.initialization_errors():
        print("\\n".join(checker.initialization_errors()))
    print(f"Schema root directory: {checker.schema_root_directory()}")
    for msg in checker.assembly_warning_messages():
        print(msg)
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable

from ....clients.catalog_client import CatalogResolver, create_catalog_resolver
from ....models.models import DocumentParseResult, LoadKind, LoadRequest, NamespaceDecl
from ....utils.uris import (
    canonical_file_uri,
    common_root_directory,
    file_uri_to_path,
    is_file_uri,
    is_namespace_argument,
    is_valid_uri,
)
from . import findings
from .document_loader import parse_schema_document
from .namespace_decls import NamespaceDeclarations
from .resolution import resolve_load_request

logger = logging.getLogger(__name__)


class AssemblyStage(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    ASSEMBLED = "assembled"


class SchemaInitializationError(Exception):
    """Raised when a schema has no usable initial schema documents.

    Carries the complete list of initialization errors.
    """

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class SchemaAssemblyChecker:
    """Check the assembly of a schema from schema documents and catalogs.

    Not safe for concurrent use; check independent schemas with separate
    instances.
    """

    def __init__(
        self,
        catalog_files: list[str] | None = None,
        schema_or_namespaces: list[str] | None = None,
        resolver_factory: Callable[[list[str]], CatalogResolver] | None = None,
    ):
        self._resolver_factory = resolver_factory or create_catalog_resolver
        self._catalog_files: list[str] = []
        self._schema_files: list[str] = []
        self._initial_namespaces: list[str] = []

        for cf in catalog_files or []:
            self._catalog_files.append(canonical_file_uri(cf))
        for sn in schema_or_namespaces or []:
            if is_namespace_argument(sn):
                self._initial_namespaces.append(sn)
            elif is_file_uri(sn):
                self._schema_files.append(str(file_uri_to_path(sn)))
            else:
                self._schema_files.append(sn)
        self._reset()

    # ----- input setup ---------------------------------------------------------

    def add_catalog_file(self, path: str) -> None:
        self._catalog_files.append(canonical_file_uri(path))
        self._reset()

    def add_schema_file(self, path: str) -> None:
        self._schema_files.append(path)
        self._reset()

    def add_namespace_uri(self, ns: str) -> None:
        self._initial_namespaces.append(ns)
        self._reset()

    def _reset(self) -> None:
        self._stage = AssemblyStage.UNINITIALIZED
        self._resolver: CatalogResolver | None = None
        self._init_errors: list[str] = []
        self._initial_schema_uris: list[str] = []
        self._initial_file_uris: list[str] = []

        self._requests: list[LoadRequest] = []
        self._attempted: set[str] = set()
        self._loaded: set[str] = set()
        self._namespace_file: dict[str, str] = {}
        self._namespace_version: dict[str, str] = {}
        self._ns_decls = NamespaceDeclarations()
        self._ns_decl_warnings: list[str] = []
        self._root_dir = ""
        self._warnings = False
        self._log_msgs: list[str] | None = None
        self._warn_msgs: list[str] | None = None

    @property
    def stage(self) -> AssemblyStage:
        return self._stage

    def initial_catalog_files(self) -> list[str]:
        return list(self._catalog_files)

    def initial_schema_files(self) -> list[str]:
        return list(self._schema_files)

    def initial_namespaces(self) -> list[str]:
        return list(self._initial_namespaces)

    # ----- initialization ------------------------------------------------------

    def _initialize(self) -> None:
        if self._stage != AssemblyStage.UNINITIALIZED:
            return
        logger.info(
            f"Initializing schema: {len(self._catalog_files)} catalogs, "
            f"{len(self._schema_files)} schema files, {len(self._initial_namespaces)} namespaces"
        )
        errors = []
        self._resolver = self._resolver_factory(list(self._catalog_files))
        errors.extend(self._resolver.validation_errors())

        file_uris = []
        for sf in self._schema_files:
            path = Path(sf)
            if path.is_file() and _readable(path):
                file_uris.append(canonical_file_uri(path))
            else:
                errors.append(findings.cannot_read_schema_file(sf))

        uris = list(file_uris)
        for ns in self._initial_namespaces:
            if not is_valid_uri(ns):
                errors.append(findings.invalid_initial_namespace(ns))
                continue
            resolved = self._resolver.resolve(ns)
            if resolved is None:
                errors.append(findings.cannot_resolve_initial_namespace(ns))
            elif not is_file_uri(resolved):
                errors.append(findings.initial_namespace_not_local(ns, resolved))
            else:
                uris.append(resolved)

        if not uris:
            errors.append(findings.NO_READABLE_SCHEMAS)
        self._initial_schema_uris = uris
        self._initial_file_uris = file_uris
        self._init_errors = errors
        self._stage = AssemblyStage.INITIALIZED
        if errors:
            logger.warning(f"Schema initialization found {len(errors)} errors")

    def resolver(self) -> CatalogResolver:
        """Catalog resolver constructed from the catalog files."""
        self._initialize()
        return self._resolver

    def initialization_errors(self) -> list[str]:
        """Initialization errors, including catalog errors; empty if none."""
        self._initialize()
        return list(self._init_errors)

    def require_initialized(self) -> list[str]:
        """Initial schema document URIs; raises if there are none."""
        self._initialize()
        if not self._initial_schema_uris:
            raise SchemaInitializationError(self._init_errors)
        return list(self._initial_schema_uris)

    def all_initial_schema_uris(self) -> list[str]:
        """File URIs of the initial schema documents, given as files or namespaces."""
        self._initialize()
        return list(self._initial_schema_uris)

    def all_catalog_files(self) -> list[str]:
        """File URIs of every catalog requested, subordinate catalogs included."""
        return self.resolver().all_catalog_files()

    def catalog_validation_results(self) -> list[str]:
        return self.resolver().validation_results()

    # ----- assembly ------------------------------------------------------------

    def _assemble(self) -> None:
        """Process the load queue breadth-first until it is exhausted.

        Parsing a document appends its import/include/redefine references to
        the end of the queue, so the whole document graph is covered without
        recursion.
        """
        self._initialize()
        if self._stage == AssemblyStage.ASSEMBLED:
            return
        for furi in self._initial_file_uris:
            self._requests.append(LoadRequest(kind=LoadKind.LOAD, schema_location_resolved=furi))
        for ns in self._initial_namespaces:
            self._requests.append(LoadRequest(
                kind=LoadKind.LOAD, namespace_attr=ns, expected_namespace=ns
            ))

        have_catalogs = len(self._catalog_files) > 0
        idx = 0
        while idx < len(self._requests):
            r = self._requests[idx]
            for furi in resolve_load_request(r, self._resolver, have_catalogs):
                self._load_document(r, furi)
            idx += 1

        docs = list(self._resolver.all_catalog_files())
        docs.extend(sorted(self._attempted))
        self._root_dir = common_root_directory(docs)

        self._ns_decl_warnings = self._ns_decls.warnings()
        self._warnings = any(r.has_warnings for r in self._requests) or bool(self._ns_decl_warnings)
        self._stage = AssemblyStage.ASSEMBLED
        logger.info(
            f"Schema assembly processed {len(self._requests)} load requests, "
            f"loaded {len(self._loaded)} of {len(self._attempted)} documents"
        )

    def _load_document(self, r: LoadRequest, furi: str) -> None:
        """Parse one schema document for a request, unless already attempted."""
        if furi in self._loaded:
            r.log(findings.already_parsed(furi))
            return
        if furi in self._attempted:
            r.log(findings.already_non_parsable(furi))
            return
        self._attempted.add(furi)
        r.log(findings.now_parsing(furi))
        result = parse_schema_document(furi, self._ns_decls.next_decl_number())
        self._apply_result(r, result)

    def _apply_result(self, r: LoadRequest, result: DocumentParseResult) -> None:
        """Fold one document's parse result into the assembly state."""
        furi = result.file_uri
        if result.read_error is not None:
            r.warn(findings.cannot_read(furi, result.read_error))
            return
        if result.parse_error is not None:
            r.warn(findings.cannot_parse(furi, result.parse_error))
            return
        self._loaded.add(furi)
        if not result.has_schema_element:
            r.warn(findings.no_schema_element(furi))

        tns = result.target_namespace
        if tns is None:
            r.warn(findings.no_target_namespace())
        else:
            previous = self._namespace_file.get(tns)
            if previous is not None and previous != furi and r.kind in (LoadKind.LOAD, LoadKind.IMPORT):
                r.warn(findings.namespace_already_loaded(tns, previous))
            self._namespace_file[tns] = furi
            if r.expected_namespace is not None and tns != r.expected_namespace:
                r.warn(findings.target_namespace_mismatch(tns, r.expected_namespace))
            if not self._namespace_version.get(tns):
                self._namespace_version[tns] = result.version

        for decl in result.declarations:
            self._ns_decls.add_declaration(decl)
        self._ns_decls.claim_declarations(tns, self._namespace_version.get(tns, ""), len(result.declarations))

        for ref in result.references:
            if ref.kind == LoadKind.IMPORT:
                expected = ref.namespace
            else:
                expected = r.expected_namespace
                if r.namespace_resolved is not None:
                    r.warn(findings.include_in_catalog_namespace(ref.kind.value, ref.schema_location))
            self._requests.append(LoadRequest(
                kind=ref.kind,
                parent_uri=furi,
                parent_line=ref.line,
                expected_namespace=expected,
                namespace_attr=ref.namespace,
                schema_location_attr=ref.schema_location,
            ))

    # ----- results -------------------------------------------------------------

    def load_requests(self) -> list[LoadRequest]:
        """Every load request processed, in queue order."""
        self._assemble()
        return list(self._requests)

    def schema_root_directory(self) -> str:
        """File URI of the directory containing every catalog and schema document."""
        self._assemble()
        return self._root_dir or "unknown"

    def assembled_schema_documents(self) -> list[str]:
        """File URIs of the schema documents successfully parsed."""
        self._assemble()
        return list(self._loaded)

    def attempted_schema_documents(self) -> list[str]:
        self._assemble()
        return list(self._attempted)

    def assembly_warnings(self) -> bool:
        """True if schema assembly checking produced any warnings."""
        self._assemble()
        return self._warnings

    def assembly_log_messages(self) -> list[str]:
        """Results of every import, include, and redefine element, and every
        initial load, with log entries and warnings."""
        if self._log_msgs is None:
            self._log_msgs = self._assembly_messages(all_msgs=True)
        return list(self._log_msgs)

    def assembly_warning_messages(self) -> list[str]:
        """Warnings generated by schema assembly checking."""
        if self._warn_msgs is None:
            self._warn_msgs = self._assembly_messages(all_msgs=False)
        return list(self._warn_msgs)

    def _assembly_messages(self, all_msgs: bool) -> list[str]:
        self._assemble()
        if not self._requests:
            return ["Empty schema"]
        root = self._root_dir
        msgs = []
        for r in self._requests:
            if not (all_msgs or r.has_warnings):
                continue
            msgs.append(self._relative(_request_header(r, root), root))
            for m in r.messages:
                if all_msgs or m.is_warning:
                    text = m.text if m.is_warning else f"[log] {m.text}"
                    msgs.append("  " + self._relative(text, root))
        msgs.extend(self._relative(m, root) for m in self._ns_decl_warnings)
        return msgs

    @staticmethod
    def _relative(text: str, root: str) -> str:
        return text.replace(root, "") if root else text

    def namespaces(self) -> set[str]:
        """Target namespaces of all the schema documents loaded."""
        self._assemble()
        return set(self._namespace_version)

    def namespace_version(self, ns: str) -> str | None:
        """NIEM version of a namespace from its conformance target assertion.

        Empty string for an external namespace; None for a namespace not in
        the schema.
        """
        self._assemble()
        return self._namespace_version.get(ns)

    def namespace_file(self, ns: str) -> str | None:
        """Most recently loaded document with this target namespace."""
        self._assemble()
        return self._namespace_file.get(ns)

    def external_namespaces(self) -> list[str]:
        """Namespaces without a NIEM conformance assertion, sorted."""
        self._assemble()
        return sorted(ns for ns, v in self._namespace_version.items() if not v)

    def namespace_declarations(self) -> NamespaceDeclarations:
        self._assemble()
        return self._ns_decls

    def namespace_declaration_list(self) -> list[NamespaceDecl]:
        return self.namespace_declarations().declarations()


def _request_header(r: LoadRequest, root: str) -> str:
    if r.kind == LoadKind.LOAD:
        if r.namespace_attr is not None:
            return f"INITIAL LOAD of namespace {r.namespace_attr}"
        return f"INITIAL LOAD of schema document {r.schema_location_resolved}"
    parent = r.parent_uri or ""
    if root and parent.startswith(root):
        parent = parent[len(root):]
    return f"{r.kind.value.upper()} at {parent}:{r.parent_line} ns={r.namespace_attr} sl={r.schema_location_attr}"


def _readable(path: Path) -> bool:
    try:
        with open(path, "rb"):
            return True
    except OSError:
        return False
