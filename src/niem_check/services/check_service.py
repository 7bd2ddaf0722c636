#!/usr/bin/env python3
"""
Schema check service.

Runs a complete assembly check for a list of catalogs and schema documents
and packages the result as an AssemblyReport.
"""

import logging

from ..models.models import AssemblyReport, NamespaceInfo
from .domain.schema import SchemaAssemblyChecker

logger = logging.getLogger(__name__)


def build_assembly_report(checker: SchemaAssemblyChecker) -> AssemblyReport:
    """Collect every result of a checker into one report.

    File URIs in messages stay absolute; consumers can shorten them with the
    reported schema root directory.
    """
    init_errors = checker.initialization_errors()
    initial = checker.all_initial_schema_uris()

    if not initial:
        return AssemblyReport(
            status="error",
            schema_root_directory=checker.schema_root_directory(),
            initialization_errors=init_errors,
            catalog_validation_results=checker.catalog_validation_results(),
            summary={"initialization_errors": len(init_errors)},
        )

    namespaces = [
        NamespaceInfo(
            namespace=ns,
            version=checker.namespace_version(ns) or "",
            file_uri=checker.namespace_file(ns),
        )
        for ns in sorted(checker.namespaces())
    ]
    warnings = checker.assembly_warning_messages() if checker.assembly_warnings() else []
    assembled = sorted(checker.assembled_schema_documents())

    if init_errors:
        status = "error"
    elif checker.assembly_warnings():
        status = "warnings"
    else:
        status = "ok"

    report = AssemblyReport(
        status=status,
        schema_root_directory=checker.schema_root_directory(),
        initialization_errors=init_errors,
        catalog_validation_results=checker.catalog_validation_results(),
        initial_schema_documents=initial,
        assembled_schema_documents=assembled,
        namespaces=namespaces,
        warnings=warnings,
        log=checker.assembly_log_messages(),
        summary={
            "initialization_errors": len(init_errors),
            "load_requests": len(checker.load_requests()),
            "documents_attempted": len(checker.attempted_schema_documents()),
            "documents_assembled": len(assembled),
            "namespaces": len(namespaces),
            "warning_requests": sum(1 for r in checker.load_requests() if r.has_warnings),
        },
    )
    logger.info(f"Assembly check result: {status.upper()} - {report.summary}")
    return report


def check_schema(catalog_files: list[str], schema_or_namespaces: list[str]) -> AssemblyReport:
    """
    Convenience function to run an assembly check.

    Args:
        catalog_files: XML Catalog file paths (may be empty)
        schema_or_namespaces: schema document paths and/or namespace URIs

    Returns:
        AssemblyReport for the schema
    """
    checker = SchemaAssemblyChecker(catalog_files, schema_or_namespaces)
    return build_assembly_report(checker)
