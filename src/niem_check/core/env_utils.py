#!/usr/bin/env python3
"""
Environment variable readers for checker configuration.

Values are stripped of surrounding whitespace, including the stray ``\\r``
left when a variable is exported from a shell profile saved with CRLF line
endings.
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off", "")


def env_str(key: str, default: Optional[str] = None) -> Optional[str]:
    """Stripped value of an environment variable, or default if unset."""
    value = os.getenv(key)
    if value is None:
        return default
    cleaned = value.strip()
    if cleaned != value:
        logger.debug(f"Stripped whitespace from {key}: {repr(value)}")
    return cleaned


def env_flag(key: str, default: bool = False) -> bool:
    """Boolean environment variable; unrecognized values keep the default."""
    value = env_str(key)
    if value is None:
        return default
    if value.lower() in TRUE_VALUES:
        return True
    if value.lower() in FALSE_VALUES:
        return False
    logger.warning(f"Ignoring {key}={repr(value)}: not a boolean, using {default}")
    return default


def env_paths(key: str, separator: str) -> list[str]:
    """Separator-joined list of file names, empty items dropped."""
    value = env_str(key, "")
    return [item.strip() for item in value.split(separator) if item.strip()]
