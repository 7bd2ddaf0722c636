#!/usr/bin/env python3
"""
Schema assembly findings.

Every message the assembly checker attaches to a load request is built here,
so the complete list of things the checker can report is in one place.

Resolution findings:
- no catalog entry for a namespace
- namespace or schemaLocation resolves to a non-local resource
- malformed namespace or schemaLocation URI
- resolved namespace != resolved schemaLocation
- no schema document to parse

Structural findings:
- import without namespace, import/include/redefine without schemaLocation
- schema document without targetNamespace
- targetNamespace != expected namespace
- namespace loaded from more than one file
- include/redefine in a namespace that has a catalog entry

I/O findings:
- schema document can't be read or can't be parsed
"""


# ----- resolution ------------------------------------------------------------

def no_catalog_entry(ns: str) -> str:
    return f"no catalog entry for namespace {ns}"


def invalid_namespace_uri(ns: str) -> str:
    return f"invalid URI syntax for namespace {ns}"


def invalid_schema_location_uri(sloc: str) -> str:
    return f"invalid URI syntax for schemaLocation {sloc}"


def namespace_not_local(ns: str, uri: str) -> str:
    return f"namespace {ns} resolves to non-local resource {uri}"


def schema_location_not_local(sloc: str, uri: str) -> str:
    return f"schemaLocation {sloc} resolves to non-local resource {uri}"


def resolution_mismatch(ns_uri: str, sloc_uri: str) -> str:
    return f"resolved namespace != resolved schemaLocation ({ns_uri} != {sloc_uri})"


def namespace_resolves_to(uri: str | None) -> str:
    return f"namespace resolves to      {uri if uri is not None else 'null'}"


def schema_location_resolves_to(uri: str | None) -> str:
    return f"schemaLocation resolves to {uri if uri is not None else 'null'}"


def no_document_to_parse() -> str:
    return "can't determine a schema document to parse"


# ----- structure ---------------------------------------------------------------

def no_namespace_attribute() -> str:
    return "no namespace attribute in import element"


def no_schema_location_attribute(kind: str) -> str:
    return f"no schemaLocation attribute in {kind} element"


def no_target_namespace() -> str:
    return "no targetNamespace attribute"


def no_schema_element(file_uri: str) -> str:
    return f"{file_uri} is not a schema document (no xs:schema element)"


def target_namespace_mismatch(tns: str, ens: str) -> str:
    return f"targetNamespace {tns} != expected namespace {ens}"


def namespace_already_loaded(ns: str, previous_uri: str) -> str:
    return f"namespace {ns} already loaded from a different file {previous_uri}"


def include_in_catalog_namespace(kind: str, sloc: str | None) -> str:
    return f'<{kind} "{sloc}"> found in a namespace that has a catalog entry'


# ----- document loading --------------------------------------------------------

def now_parsing(file_uri: str) -> str:
    return f"now parsing schema document {file_uri}"


def already_parsed(file_uri: str) -> str:
    return f"{file_uri} already parsed"


def already_non_parsable(file_uri: str) -> str:
    return f"{file_uri} already found non-parsable"


def cannot_read(file_uri: str, reason: str) -> str:
    return f"{file_uri} can't be read: {reason}"


def cannot_parse(file_uri: str, reason: str) -> str:
    return f"{file_uri} can't be parsed: {reason}"


# ----- initialization ----------------------------------------------------------

def cannot_read_schema_file(path: str) -> str:
    return f"can't read schema file {path}"


def invalid_initial_namespace(ns: str) -> str:
    return f"invalid URI syntax for initial namespace {ns}"


def cannot_resolve_initial_namespace(ns: str) -> str:
    return f"can't resolve initial namespace {ns}"


def initial_namespace_not_local(ns: str, uri: str) -> str:
    return f"initial namespace {ns} resolves to non-local resource {uri}"


NO_READABLE_SCHEMAS = "no readable schema documents provided"
