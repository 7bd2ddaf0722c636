#!/usr/bin/env python3
"""
XML Catalog Client

A resolver for OASIS XML Catalog documents, used to map namespace URIs and
schemaLocation URIs onto local schema document files.

Besides resolving, the client reports on what it is doing, which is what a
developer checking a schema document set needs to see:

- parsing results for every catalog file requested, including subordinate
  catalogs reached through ``nextCatalog`` entries
- structural validation results for each catalog that parsed
- every resolution performed

Supported entries: ``uri``, ``rewriteURI``, ``uriSuffix``, ``system``,
``rewriteSystem``, ``systemSuffix``, ``nextCatalog`` and ``group``, with
``xml:base`` on any of them. Public identifier and delegate entries are
accepted but never used, since schema assembly only resolves URIs.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol
from urllib.parse import urljoin
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException
# Use defusedxml for secure XML parsing (prevents XXE attacks)
from defusedxml import ElementTree as ET

from ..utils.uris import canonical_file_uri, file_uri_to_path, is_file_uri, is_valid_uri

logger = logging.getLogger(__name__)

CATALOG_NS = "urn:oasis:names:tc:entity:xmlns:xml:catalog"
XML_BASE = "{http://www.w3.org/XML/1998/namespace}base"

# Catalog parsing results
CATALOG_OK = "OK"
CATALOG_NOT_FOUND = "catalog file does not exist"
CATALOG_NOT_READABLE = "catalog file cannot be read"
CATALOG_PARSE_FAILED = "catalog parsing failed"

# Required attributes for each entry type
ENTRY_ATTRIBUTES = {
    "uri": ("name", "uri"),
    "rewriteURI": ("uriStartString", "rewritePrefix"),
    "uriSuffix": ("uriSuffix", "uri"),
    "system": ("systemId", "uri"),
    "rewriteSystem": ("systemIdStartString", "rewritePrefix"),
    "systemSuffix": ("systemIdSuffix", "uri"),
    "nextCatalog": ("catalog",),
    "public": ("publicId", "uri"),
    "delegatePublic": ("publicIdStartString", "catalog"),
    "delegateSystem": ("systemIdStartString", "catalog"),
    "delegateURI": ("uriStartString", "catalog"),
}


class CatalogResolver(Protocol):
    """What schema assembly needs from a URI resolver."""

    def resolve(self, uri: str) -> str | None: ...

    def all_catalog_files(self) -> list[str]: ...

    def validation_results(self) -> list[str]: ...

    def validation_errors(self) -> list[str]: ...

    def resolution_messages(self) -> list[str]: ...


@dataclass
class CatalogEntry:
    kind: str
    key: str  # name, start string, or suffix being matched
    target: str  # absolute URI (or prefix) after xml:base processing


@dataclass
class Catalog:
    file_uri: str
    status: str = CATALOG_OK
    problems: list[str] = field(default_factory=list)
    entries: list[CatalogEntry] = field(default_factory=list)
    next_catalogs: list[str] = field(default_factory=list)

    def lookup(self, uri: str, family: tuple[str, str, str]) -> str | None:
        """Resolve against this catalog's own entries of one entry family.

        ``family`` names the exact, rewrite and suffix entry kinds, in the
        order the XML Catalogs standard tries them.
        """
        exact, rewrite, suffix = family
        for entry in self.entries:
            if entry.kind == exact and entry.key == uri:
                return entry.target

        best = None
        for entry in self.entries:
            if entry.kind == rewrite and uri.startswith(entry.key):
                if best is None or len(entry.key) > len(best.key):
                    best = entry
        if best is not None:
            return best.target + uri[len(best.key):]

        for entry in self.entries:
            if entry.kind == suffix and uri.endswith(entry.key):
                if best is None or len(entry.key) > len(best.key):
                    best = entry
        if best is not None:
            return best.target
        return None


URI_FAMILY = ("uri", "rewriteURI", "uriSuffix")
SYSTEM_FAMILY = ("system", "rewriteSystem", "systemSuffix")


class XMLCatalogResolver:
    """Resolve URIs through an ordered list of XML Catalog files.

    Catalog files are parsed once, on first use. ``resolve`` never raises;
    malformed or unmapped URIs resolve to None.

    URIs that no ``uri``-family entry matches are also tried against the
    ``system``, ``rewriteSystem`` and ``systemSuffix`` entries, so catalogs
    written for system identifiers still map schema locations.
    """

    def __init__(self, catalog_files: list[str] | None = None):
        self._catalog_uris = [canonical_file_uri(c) for c in (catalog_files or [])]
        self._catalogs: list[Catalog] | None = None
        self._resolutions: list[str] = []

    # ----- catalog parsing -------------------------------------------------

    def _load_catalogs(self) -> list[Catalog]:
        if self._catalogs is not None:
            return self._catalogs
        self._catalogs = []
        seen = set()
        pending = list(self._catalog_uris)
        # Subordinate catalogs come right after the catalog that names them,
        # ahead of any later catalog in the list
        while pending:
            curi = pending.pop(0)
            if curi in seen:
                continue
            seen.add(curi)
            cat = self._parse_catalog(curi)
            self._catalogs.append(cat)
            pending[0:0] = cat.next_catalogs
        logger.info(f"Parsed {len(self._catalogs)} catalog files")
        return self._catalogs

    def _parse_catalog(self, curi: str) -> Catalog:
        cat = Catalog(file_uri=curi)
        path = file_uri_to_path(curi)
        try:
            with open(path, "rb") as f:
                root = ET.parse(f).getroot()
        except FileNotFoundError:
            logger.warning(f"Catalog does not exist: {curi}")
            cat.status = CATALOG_NOT_FOUND
            return cat
        except (ET.ParseError, DefusedXmlException) as e:
            logger.warning(f"Failed to parse catalog {curi}: {e}")
            cat.status = CATALOG_PARSE_FAILED
            return cat
        except OSError as e:
            logger.warning(f"Catalog file could not be read {curi}: {e}")
            cat.status = CATALOG_NOT_READABLE
            return cat

        if root.tag != f"{{{CATALOG_NS}}}catalog":
            cat.problems.append(f"root element {root.tag} is not an XML Catalog <catalog> element")
            return cat
        self._collect_entries(cat, root, urljoin(curi, root.get(XML_BASE, "")))
        return cat

    def _collect_entries(self, cat: Catalog, parent: Element, base: str) -> None:
        for elem in parent:
            if not isinstance(elem.tag, str):
                continue
            if not elem.tag.startswith(f"{{{CATALOG_NS}}}"):
                # Elements from other namespaces are allowed and ignored
                continue
            kind = elem.tag.split("}", 1)[1]
            ebase = urljoin(base, elem.get(XML_BASE, ""))
            if kind == "group":
                self._collect_entries(cat, elem, ebase)
                continue
            if kind not in ENTRY_ATTRIBUTES:
                cat.problems.append(f"unknown catalog element <{kind}>")
                continue
            missing = [a for a in ENTRY_ATTRIBUTES[kind] if elem.get(a) is None]
            if missing:
                cat.problems.append(f"<{kind}> element missing attribute {', '.join(missing)}")
                continue
            if kind == "nextCatalog":
                next_uri = urljoin(ebase, elem.get("catalog").strip())
                if is_file_uri(next_uri):
                    cat.next_catalogs.append(canonical_file_uri(next_uri))
                else:
                    cat.problems.append(f"non-local subordinate catalog {next_uri}")
                continue
            keys = ENTRY_ATTRIBUTES[kind]
            key = elem.get(keys[0]).strip()
            target = urljoin(ebase, elem.get(keys[1]).strip())
            cat.entries.append(CatalogEntry(kind=kind, key=key, target=target))

    # ----- resolution --------------------------------------------------------

    def resolve(self, uri: str) -> str | None:
        """Resolve a namespace or schemaLocation URI to a URI from the catalogs.

        Local results are returned as canonical file URIs. Returns None when
        the URI is malformed or no catalog entry matches.
        """
        if uri is None:
            return None
        uri = uri.strip()
        if not is_valid_uri(uri):
            self._record(uri, None, "malformed URI")
            return None
        result = None
        for cat in self._load_catalogs():
            result = cat.lookup(uri, URI_FAMILY) or cat.lookup(uri, SYSTEM_FAMILY)
            if result is not None:
                break
        if result is not None and is_file_uri(result):
            result = canonical_file_uri(result)
        self._record(uri, result)
        return result

    def _record(self, uri: str, result: str | None, note: str | None = None) -> None:
        msg = f"{uri} -> {result if result is not None else 'null'}"
        if note:
            msg += f" ({note})"
        self._resolutions.append(msg)
        logger.debug(f"Catalog resolution: {msg}")

    def resolution_messages(self) -> list[str]:
        """Results of every resolution since the last reset."""
        return list(self._resolutions)

    def reset_resolutions(self) -> None:
        self._resolutions.clear()

    # ----- reporting -----------------------------------------------------------

    def initial_catalog_files(self) -> list[str]:
        return list(self._catalog_uris)

    def all_catalog_files(self) -> list[str]:
        """File URIs of every requested catalog, subordinates included,
        whether or not it could be parsed."""
        return [c.file_uri for c in self._load_catalogs()]

    def all_valid_catalog_files(self) -> list[str]:
        return [c.file_uri for c in self._load_catalogs() if c.status == CATALOG_OK and not c.problems]

    def validation_results(self) -> list[str]:
        """One result per requested catalog, formatted ``{file uri} : {result}``.

        A catalog with structural problems gets one line per problem.
        """
        results = []
        for cat in self._load_catalogs():
            if cat.status != CATALOG_OK:
                results.append(f"{cat.file_uri} : {cat.status}")
            elif not cat.problems:
                results.append(f"{cat.file_uri} : {CATALOG_OK}")
            else:
                for problem in cat.problems:
                    results.append(f"{cat.file_uri} : {problem}")
        return results

    def validation_errors(self) -> list[str]:
        """Validation results other than OK; empty if every catalog is valid."""
        return [r for r in self.validation_results() if not r.endswith(f" : {CATALOG_OK}")]


def create_catalog_resolver(catalog_files: list[str]) -> XMLCatalogResolver:
    """Default resolver factory for schema assembly."""
    return XMLCatalogResolver(catalog_files)
