#!/usr/bin/env python3

from pathlib import Path
from typing import Optional

XS_NS = "http://www.w3.org/2001/XMLSchema"
CATALOG_NS = "urn:oasis:names:tc:entity:xmlns:xml:catalog"

NIEM5_CT_NS = "http://release.niem.gov/niem/conformanceTargets/3.0/"
NIEM5_REF_TARGET = (
    "http://reference.niem.gov/niem/specification/naming-and-design-rules/5.0/#ReferenceSchemaDocument"
)


class SchemaFiles:
    """Write schema documents and XML catalogs into a temporary directory tree"""

    def __init__(self, root: Path):
        self.root = root

    def path(self, relpath: str) -> Path:
        return self.root / relpath

    def uri(self, relpath: str) -> str:
        return self.path(relpath).resolve().as_uri()

    def write(self, relpath: str, content: str) -> Path:
        p = self.path(relpath)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
        return p

    def schema(
        self,
        relpath: str,
        target_namespace: Optional[str] = None,
        body: str = "",
        xmlns: Optional[dict[str, str]] = None,
        extra_attrs: str = "",
    ) -> Path:
        """Write a schema document; body goes inside the xs:schema element."""
        decls = "".join(f'\n  xmlns:{p}="{u}"' for p, u in (xmlns or {}).items())
        tns = f'\n  targetNamespace="{target_namespace}"' if target_namespace is not None else ""
        content = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<xs:schema\n  xmlns:xs="{XS_NS}"{decls}{tns}{extra_attrs}>\n'
            f"{body}\n"
            "</xs:schema>\n"
        )
        return self.write(relpath, content)

    def catalog(self, relpath: str, uris: Optional[dict[str, str]] = None, body: str = "") -> Path:
        """Write an XML catalog mapping names to (relative) uri values."""
        entries = "".join(f'\n  <uri name="{n}" uri="{u}"/>' for n, u in (uris or {}).items())
        content = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<catalog xmlns="{CATALOG_NS}" prefer="public">{entries}\n{body}\n</catalog>\n'
        )
        return self.write(relpath, content)


def import_element(namespace: Optional[str] = None, schema_location: Optional[str] = None) -> str:
    attrs = ""
    if namespace is not None:
        attrs += f' namespace="{namespace}"'
    if schema_location is not None:
        attrs += f' schemaLocation="{schema_location}"'
    return f"  <xs:import{attrs}/>"


def include_element(schema_location: str, kind: str = "include") -> str:
    return f'  <xs:{kind} schemaLocation="{schema_location}"/>'
