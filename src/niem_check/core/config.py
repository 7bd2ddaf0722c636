#!/usr/bin/env python3
"""
Configuration settings for the schema assembly checker.

These settings can be overridden via environment variables so the same
command line works unchanged in a developer shell and in a CI job.
"""

import logging

from .env_utils import env_flag, env_paths, env_str

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CheckConfig:
    """Checker configuration.

    Values are read from the environment when the object is created, so a
    fresh instance picks up changes made after import.
    """

    def __init__(self):
        # Separator for catalog and schema lists given as a single argument
        self.FILE_SEPARATOR = env_str("NIEM_CHECK_FILE_SEPARATOR", ",") or ","

        # Catalogs used when the command line names none
        self.DEFAULT_CATALOGS = env_paths("NIEM_CHECK_CATALOGS", self.FILE_SEPARATOR)

        self.LOG_LEVEL = self._log_level(env_str("NIEM_CHECK_LOG_LEVEL", "WARNING"))
        self.LOG_JSON = env_flag("NIEM_CHECK_LOG_JSON", False)

        # Verbose output shows the full assembly log instead of warnings only
        self.VERBOSE = env_flag("NIEM_CHECK_VERBOSE", False)

    @staticmethod
    def _log_level(value: str) -> str:
        level = (value or "WARNING").upper()
        if level not in LOG_LEVELS:
            logger.warning(f"Unknown log level {repr(value)}, using WARNING")
            return "WARNING"
        return level

    def split_list(self, value: str, separator: str | None = None) -> list[str]:
        """Split a separator-joined argument into its non-empty items."""
        sep = separator or self.FILE_SEPARATOR
        return [item.strip() for item in value.split(sep) if item.strip()]


# Singleton instance
check_config = CheckConfig()
