"""Custom exceptions for the vhostkit CLI."""

from __future__ import annotations


class VhostkitError(Exception):
    """Base exception for all vhostkit operations."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class CommandError(VhostkitError):
    """An external command could not be run or exited non-zero."""


class ProvisionError(VhostkitError):
    """A filesystem step (directory, symlink, ownership) failed."""


class NginxConfigError(VhostkitError):
    """NGINX configuration validation or reload failed."""


class HostsFileError(VhostkitError):
    """The hosts file could not be read or updated."""


class DatabaseError(VhostkitError):
    """Database creation failed."""


class DownloadError(VhostkitError):
    """The application archive could not be downloaded."""


class WordPressError(VhostkitError):
    """Unpacking or laying out WordPress failed."""


class AuditWriteError(VhostkitError):
    """The audit trail could not be written after an otherwise clean run."""
