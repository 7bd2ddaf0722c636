#!/usr/bin/env python3
"""
Schema document loader.

Parses a single schema document as plain, namespace-aware XML (no schema
validation) and reports what it contributes to schema assembly: its target
namespace, NIEM conformance version, namespace declarations, and the
import/include/redefine elements that pull in further documents.

The loader never touches assembly state. It returns a DocumentParseResult
and the assembly engine decides what to do with it.
"""

import logging
from xml.sax import SAXException
from xml.sax.handler import ContentHandler, feature_namespaces
from xml.sax.xmlreader import InputSource

from defusedxml import DefusedXmlException
# Use defusedxml for secure XML parsing (prevents XXE attacks)
import defusedxml.sax

from ....models.models import DocumentParseResult, LoadKind, NamespaceDecl, SchemaReference
from ....utils.uris import exception_reason, file_uri_to_path
from .constants import CONFORMANCE_ATTRIBUTE_NAME, CONFORMANCE_TARGET_PREFIXES, XML_SCHEMA_NS

logger = logging.getLogger(__name__)

REFERENCE_KINDS = {
    "import": LoadKind.IMPORT,
    "include": LoadKind.INCLUDE,
    "redefine": LoadKind.REDEFINE,
}


def conformance_version(value: str) -> str:
    """NIEM version named by a conformanceTargets attribute value.

    Returns the first version found, or the empty string if no target is an
    NDR conformance target.
    """
    for target in value.split():
        for _, ndr_prefix in CONFORMANCE_TARGET_PREFIXES:
            if target.startswith(ndr_prefix):
                rest = target[len(ndr_prefix):]
                sp = rest.find("/")
                if sp >= 0:
                    return rest[:sp]
    return ""


class SchemaDocumentHandler(ContentHandler):
    """SAX callbacks collecting one document's assembly facts."""

    def __init__(self, result: DocumentParseResult, first_decl_number: int = 1):
        super().__init__()
        self.result = result
        self.locator = None
        self.nest_level = 0
        self.next_decl = first_decl_number

    def setDocumentLocator(self, locator):
        self.locator = locator

    def _line(self) -> int:
        return self.locator.getLineNumber() if self.locator is not None else 0

    def startPrefixMapping(self, prefix, uri):
        if not prefix or uri == XML_SCHEMA_NS:
            return
        self.result.declarations.append(NamespaceDecl(
            prefix=prefix,
            uri=uri,
            file_uri=self.result.file_uri,
            line=self._line(),
            nest_level=self.nest_level,
            decl_number=self.next_decl,
        ))
        self.next_decl += 1

    def startElementNS(self, name, qname, attrs):
        self.nest_level += 1
        element_ns, local = name
        if element_ns != XML_SCHEMA_NS:
            return
        if local == "schema":
            self._schema_element(attrs)
        elif local in REFERENCE_KINDS:
            kind = REFERENCE_KINDS[local]
            self.result.references.append(SchemaReference(
                kind=kind,
                line=self._line(),
                # include and redefine have no namespace attribute
                namespace=attrs.get((None, "namespace")) if kind == LoadKind.IMPORT else None,
                schema_location=attrs.get((None, "schemaLocation")),
            ))

    def endElementNS(self, name, qname):
        self.nest_level -= 1

    def _schema_element(self, attrs):
        self.result.has_schema_element = True
        self.result.target_namespace = attrs.get((None, "targetNamespace"))
        if self.result.version:
            return
        for (attr_ns, attr_local), value in attrs.items():
            if attr_ns is None or attr_local != CONFORMANCE_ATTRIBUTE_NAME:
                continue
            if any(attr_ns.startswith(ct_prefix) for ct_prefix, _ in CONFORMANCE_TARGET_PREFIXES):
                version = conformance_version(value)
                if version:
                    self.result.version = version
                    return


def parse_schema_document(file_uri: str, first_decl_number: int = 1) -> DocumentParseResult:
    """Parse one schema document file.

    Read and parse failures are reported in the result, never raised. On
    failure the result carries no declarations or references, since a
    partially parsed document contributes nothing to the schema.

    Args:
        file_uri: canonical file URI of the document
        first_decl_number: number given to the first namespace declaration
            found, so numbering continues across the whole document set

    Returns:
        DocumentParseResult for the document
    """
    result = DocumentParseResult(file_uri=file_uri)
    path = file_uri_to_path(file_uri)
    handler = SchemaDocumentHandler(result, first_decl_number)

    parser = defusedxml.sax.make_parser()
    parser.setFeature(feature_namespaces, True)
    parser.setContentHandler(handler)

    try:
        with open(path, "rb") as f:
            source = InputSource(file_uri)
            source.setByteStream(f)
            parser.parse(source)
        result.parsed = True
        logger.debug(
            f"Parsed {file_uri}: targetNamespace={result.target_namespace}, "
            f"{len(result.references)} references, {len(result.declarations)} declarations"
        )
    except (SAXException, DefusedXmlException) as e:
        result.parse_error = exception_reason(e)
        logger.debug(f"Failed to parse {file_uri}: {e}")
    except OSError as e:
        result.read_error = exception_reason(e)
        logger.debug(f"Failed to read {file_uri}: {e}")

    if not result.parsed:
        result.declarations = []
        result.references = []
    return result
