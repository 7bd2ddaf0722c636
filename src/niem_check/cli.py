#!/usr/bin/env python3
"""
Command-line interface for schema assembly checking.

    niem-check [-s SEP] [-i] [-v] [--json] [xmlCatalog[,...]] schemaOrNamespace[,...]

With two or more arguments the first is the list of XML Catalog files.
Every other argument is a list of schema documents or namespace URIs.
"""

import argparse
import logging
import sys

from .core.config import LOG_LEVELS, check_config
from .core.logging import setup_logging
from .services.check_service import build_assembly_report
from .services.domain.schema import SchemaAssemblyChecker

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="niem-check",
        description="Check an XML schema for assembly errors",
    )
    parser.add_argument(
        "-s", dest="separator", default=None,
        help=f'filename separator character (e.g. "-s," or "-s ,"; default "{check_config.FILE_SEPARATOR}")',
    )
    parser.add_argument(
        "-i", dest="ignore", action="store_true",
        help="continue checking after initialization errors",
    )
    parser.add_argument(
        "-v", dest="verbose", action="store_true", default=check_config.VERBOSE,
        help="verbose output",
    )
    parser.add_argument("--json", action="store_true", help="print the report as JSON")
    parser.add_argument(
        "--log-level", default=check_config.LOG_LEVEL, choices=LOG_LEVELS,
        type=str.upper, help="diagnostic logging level (written to stderr)",
    )
    parser.add_argument("args", nargs="+", metavar="[xmlCatalog[,...]] schemaOrNamespace[,...]")
    return parser


def split_arguments(args: list[str], separator: str) -> tuple[list[str], list[str]]:
    """Split positional arguments into catalog files and schema documents."""
    args = list(args)
    catalogs = []
    if len(args) > 1:
        catalogs = check_config.split_list(args.pop(0), separator)
    schemas = []
    for arg in args:
        schemas.extend(check_config.split_list(arg, separator))
    if not catalogs:
        catalogs = list(check_config.DEFAULT_CATALOGS)
    return catalogs, schemas


def print_messages(header: str, msgs: list[str], verbose: bool, root: str = "") -> None:
    """Print a header and indented messages, unless there is nothing to say.

    With a root, absolute file URIs are shortened relative to it.
    """
    if not msgs and not verbose:
        return
    print(header)
    for m in msgs:
        print("  " + (m.replace(root, "") if root else m))


def run(args: argparse.Namespace) -> int:
    separator = args.separator or check_config.FILE_SEPARATOR
    catalogs, schemas = split_arguments(args.args, separator)
    if not schemas:
        logger.error("No schema documents or namespaces given")
        return 1

    checker = SchemaAssemblyChecker(catalogs, schemas)

    if args.json:
        report = build_assembly_report(checker)
        print(report.model_dump_json(indent=2))
        return 1 if report.status == "error" and not args.ignore else 0

    root = checker.schema_root_directory()
    print(f"Schema root directory: {root}")
    root = "" if root == "unknown" else root

    if args.verbose:
        print_messages("Catalog validation results:", checker.catalog_validation_results(), True, root)
        print_messages("Initial schema documents:", checker.all_initial_schema_uris(), True, root)
    if not checker.all_initial_schema_uris():
        print("Schema initialization error: no initial schema documents")
        print_messages("Schema initialization errors:", checker.initialization_errors(), args.verbose, root)
        return 1
    init_errors = checker.initialization_errors()
    if init_errors:
        print_messages("Schema initialization errors:", init_errors, args.verbose, root)
        if not args.ignore:
            return 1
    else:
        print("Schema initialization: OK")

    if args.verbose:
        print_messages("Schema documents assembled:", sorted(checker.assembled_schema_documents()), True, root)
        print_messages("Schema assembly log messages:", checker.assembly_log_messages(), True)
    else:
        print_messages("Schema assembly warnings:", checker.assembly_warning_messages(), False)

    print(f"Schema assembly: {'WARNINGS' if checker.assembly_warnings() else 'OK'}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, check_config.LOG_JSON)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
