#!/usr/bin/env python3
"""
Resolution policy for one load request.

Given the namespace and schemaLocation attributes of an import, include, or
redefine element (or an initial namespace to load), decide which schema
document file(s) to parse and record every finding on the request.

Two mechanisms are layered: catalog resolution of the namespace (and of the
schemaLocation when the namespace has a catalog entry), and resolution of
the schemaLocation relative to the parent document. When the two disagree
both documents are loaded, so that any contradiction shows up downstream.
"""

import logging

from ....clients.catalog_client import CatalogResolver
from ....models.models import LoadKind, LoadRequest
from ....utils.uris import canonical_relative_file_uri, is_file_uri, is_valid_uri
from . import findings

logger = logging.getLogger(__name__)


def _resolve_namespace(r: LoadRequest, resolver: CatalogResolver, have_catalogs: bool) -> None:
    r.namespace_attr = r.namespace_attr.strip()
    ns = r.namespace_attr
    if not is_valid_uri(ns):
        r.warn(findings.invalid_namespace_uri(ns))
        return
    resolved = resolver.resolve(ns)
    if resolved is None:
        if have_catalogs:
            r.warn(findings.no_catalog_entry(ns))
    elif not is_file_uri(resolved):
        r.warn(findings.namespace_not_local(ns, resolved))
    else:
        r.namespace_resolved = resolved


def _resolve_schema_location(r: LoadRequest, resolver: CatalogResolver) -> None:
    r.schema_location_attr = r.schema_location_attr.strip()
    sloc = r.schema_location_attr
    valid = is_valid_uri(sloc)
    if not valid:
        # Still usable as a file path relative to the parent
        r.warn(findings.invalid_schema_location_uri(sloc))
    if valid and r.namespace_resolved is not None:
        resolved = resolver.resolve(sloc)
        if resolved is not None:
            if is_file_uri(resolved):
                r.schema_location_resolved = resolved
            else:
                r.warn(findings.schema_location_not_local(sloc, resolved))
            return
    r.schema_location_resolved = canonical_relative_file_uri(r.parent_uri, sloc)


def resolve_load_request(r: LoadRequest, resolver: CatalogResolver, have_catalogs: bool) -> list[str]:
    """Resolve a load request and return the file URIs to parse for it.

    Args:
        r: request to resolve; resolution results and findings are recorded on it
        resolver: catalog resolver
        have_catalogs: True when at least one catalog file was configured

    Returns:
        File URIs to parse, in order: none, one, or two when the namespace
        and schemaLocation resolve to different documents
    """
    if r.namespace_attr is not None:
        _resolve_namespace(r, resolver, have_catalogs)
    elif r.kind == LoadKind.IMPORT:
        r.warn(findings.no_namespace_attribute())

    if r.schema_location_attr is not None:
        _resolve_schema_location(r, resolver)
    elif r.kind != LoadKind.LOAD:
        r.warn(findings.no_schema_location_attribute(r.kind.value))

    ns_res = r.namespace_resolved
    sl_res = r.schema_location_resolved
    if ns_res is not None and sl_res is not None and ns_res != sl_res:
        r.warn(findings.resolution_mismatch(ns_res, sl_res))
        r.log(findings.namespace_resolves_to(ns_res))
        r.log(findings.schema_location_resolves_to(sl_res))
        logger.debug(f"{r.kind.value} resolves to two documents: {ns_res}, {sl_res}")
        return [ns_res, sl_res]

    r.log(findings.namespace_resolves_to(ns_res))
    r.log(findings.schema_location_resolves_to(sl_res))
    if ns_res is not None:
        return [ns_res]
    if sl_res is not None:
        return [sl_res]
    r.warn(findings.no_document_to_parse())
    return []
