#!/usr/bin/env python3
"""Namespace URIs and prefixes the schema checker recognizes."""

XML_SCHEMA_NS = "http://www.w3.org/2001/XMLSchema"
RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"

CONFORMANCE_ATTRIBUTE_NAME = "conformanceTargets"

# (conformance target attribute namespace prefix, NDR conformance target URI prefix)
# The NIEM version is the path segment that follows the NDR prefix.
CONFORMANCE_TARGET_PREFIXES = [
    (
        "http://release.niem.gov/niem/conformanceTargets/",
        "http://reference.niem.gov/niem/specification/naming-and-design-rules/",
    ),
    (
        "https://docs.oasis-open.org/niemopen/ns/specification/conformanceTargets/",
        "https://docs.oasis-open.org/niemopen/ns/specification/NDR/",
    ),
]

# Namespaces of the published NIEM model (as opposed to extensions built on it)
NIEM_RELEASE_PREFIXES = (
    "http://release.niem.gov/niem/",
    "https://docs.oasis-open.org/niemopen/ns/model/",
)
