"""Error types raised by the dedupe pipeline.

Only ``FatalError`` subclasses abort a run. Everything else is reported
where it happens and the scan carries on.
"""
from __future__ import annotations


class FatalError(Exception):
    """Setup error that terminates the run with exit code 1."""


class ConfigError(FatalError):
    pass


class SourceDirectoryError(FatalError):
    pass


class DestinationDirectoryError(FatalError):
    pass


class ListFileError(FatalError):
    pass


class UniqueNameError(OSError):
    """No free destination name was found within the attempt limit."""
