#!/usr/bin/env python3
"""
File URI helpers for schema assembly.

Every schema and catalog document is identified by a canonical ``file:`` URI
(absolute, symlinks resolved) so that two references to the same file always
compare equal, no matter how the path was spelled.
"""

import re
from pathlib import Path
from urllib.parse import urlsplit
from urllib.request import url2pathname

# Characters that may never appear in a URI reference, even unescaped
_ILLEGAL_URI_CHARS = re.compile(r'[\s<>"{}|\\^`\x00-\x1f\x7f]')


def is_file_uri(uri: str | None) -> bool:
    """True for a URI naming a local file."""
    return uri is not None and uri.startswith("file:")


def is_valid_uri(uri: str) -> bool:
    """Check the syntax of a URI reference (absolute or relative).

    Only catches what makes a reference unusable: illegal characters,
    a malformed scheme, or an unparsable authority.
    """
    if not uri or _ILLEGAL_URI_CHARS.search(uri):
        return False
    try:
        parts = urlsplit(uri)
        parts.port
    except ValueError:
        return False
    if ":" in uri.split("/", 1)[0] and not parts.scheme:
        return False
    return True


def is_namespace_argument(value: str) -> bool:
    """Decide whether an initial schema argument is a namespace URI.

    A value with a non-``file`` scheme is a namespace; anything else is a
    file path. One-letter schemes are Windows drive letters.
    """
    try:
        scheme = urlsplit(value).scheme
    except ValueError:
        return False
    return len(scheme) > 1 and scheme != "file"


def file_uri_to_path(uri: str) -> Path | None:
    """Convert a ``file:`` URI to a local path; None for anything else."""
    if not is_file_uri(uri):
        return None
    parts = urlsplit(uri)
    return Path(url2pathname(parts.path))


def canonical_file_uri(path: str | Path) -> str:
    """Canonical file URI for a path, which need not exist."""
    if isinstance(path, str) and is_file_uri(path):
        path = file_uri_to_path(path)
    return Path(path).expanduser().resolve().as_uri()


def canonical_relative_file_uri(parent_uri: str | None, location: str) -> str:
    """Canonical file URI for a schemaLocation relative to its parent document.

    An absolute location (path or ``file:`` URI) ignores the parent. Without
    a usable parent the location is taken relative to the working directory.
    """
    if is_file_uri(location):
        return canonical_file_uri(file_uri_to_path(location))
    target = Path(url2pathname(location))
    if target.is_absolute():
        return canonical_file_uri(target)
    parent = file_uri_to_path(parent_uri) if parent_uri else None
    if parent is None:
        return canonical_file_uri(target)
    base = parent if parent.is_dir() else parent.parent
    return canonical_file_uri(base / target)


def common_root_directory(uris: list[str]) -> str:
    """Longest common directory prefix of a list of file URIs.

    The result always ends in ``/`` and never cuts a path segment in half.
    Returns the empty string for an empty list or URIs with nothing in common.
    """
    if not uris:
        return ""
    split = [uri.split("/") for uri in uris]
    # Last segment of each URI is a file name, never part of the root
    dirs = [parts[:-1] for parts in split]
    common = []
    for segments in zip(*dirs):
        if any(s != segments[0] for s in segments[1:]):
            break
        common.append(segments[0])
    if not common:
        return ""
    return "/".join(common) + "/"


def exception_reason(ex: Exception) -> str:
    """Exception message, cut down to its parenthesized detail if it has one."""
    msg = str(ex)
    px = msg.find("(")
    if px >= 0:
        msg = msg[px:]
    return msg
