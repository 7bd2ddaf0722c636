#!/usr/bin/env python3

from enum import Enum

from pydantic import BaseModel

# Pydantic Models


class LoadKind(str, Enum):
    LOAD = "load"  # initial schema document or namespace
    IMPORT = "import"
    INCLUDE = "include"
    REDEFINE = "redefine"


class Severity(str, Enum):
    LOG = "log"
    WARNING = "warning"


class AssemblyMessage(BaseModel):
    severity: Severity
    text: str

    @property
    def is_warning(self) -> bool:
        return self.severity == Severity.WARNING


class LoadRequest(BaseModel):
    """One attempt to contribute a schema document to the assembled schema."""

    kind: LoadKind
    parent_uri: str | None = None  # document containing the reference; None for initial loads
    parent_line: int = 0  # line of the import/include/redefine element
    expected_namespace: str | None = None
    namespace_attr: str | None = None
    schema_location_attr: str | None = None
    namespace_resolved: str | None = None
    schema_location_resolved: str | None = None
    messages: list[AssemblyMessage] = []
    has_warnings: bool = False

    def log(self, text: str) -> None:
        self.messages.append(AssemblyMessage(severity=Severity.LOG, text=text))

    def warn(self, text: str) -> None:
        self.has_warnings = True
        self.messages.append(AssemblyMessage(severity=Severity.WARNING, text=text))

    @property
    def warnings(self) -> list[AssemblyMessage]:
        return [m for m in self.messages if m.is_warning]


class SchemaReference(BaseModel):
    """An import, include, or redefine element found while parsing."""

    kind: LoadKind
    line: int
    namespace: str | None = None
    schema_location: str | None = None


class NamespaceDecl(BaseModel):
    prefix: str
    uri: str
    file_uri: str
    line: int
    nest_level: int
    decl_number: int  # nth declaration found in the document set
    target_namespace: str | None = None  # set once the declaring document is parsed
    sort_priority: int = 0


class DocumentParseResult(BaseModel):
    """Everything one parse of a schema document contributes to assembly."""

    file_uri: str
    parsed: bool = False
    read_error: str | None = None  # file could not be opened or read
    parse_error: str | None = None  # file is not well-formed XML
    target_namespace: str | None = None
    has_schema_element: bool = False
    version: str = ""  # conformance version; empty for an external schema
    declarations: list[NamespaceDecl] = []
    references: list[SchemaReference] = []


class NamespaceInfo(BaseModel):
    namespace: str
    version: str  # empty string for an external namespace
    file_uri: str | None = None  # most recent document with this target namespace


class AssemblyReport(BaseModel):
    """Complete result of one assembly check, for machine-readable output."""

    status: str  # 'ok', 'warnings', 'error'
    schema_root_directory: str
    initialization_errors: list[str] = []
    catalog_validation_results: list[str] = []
    initial_schema_documents: list[str] = []
    assembled_schema_documents: list[str] = []
    namespaces: list[NamespaceInfo] = []
    warnings: list[str] = []
    log: list[str] = []
    summary: dict[str, int] = {}
