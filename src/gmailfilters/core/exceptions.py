"""Custom exceptions for gmailfilters."""

from __future__ import annotations


class GmailFiltersError(Exception):
    """Base exception for all gmailfilters errors."""


class ConfigurationError(GmailFiltersError):
    """Required settings are missing or point at nothing."""


class AuthenticationError(GmailFiltersError):
    """Failed to authenticate with Gmail API."""


class FileFormatError(GmailFiltersError):
    """A local filters or labels file could not be decoded."""


class RecordValidationError(GmailFiltersError):
    """A local filter or label record is not well-formed."""


class ConsistencyError(GmailFiltersError):
    """Remote state cannot be represented in the local file format."""


class RemoteAPIError(GmailFiltersError):
    """A Gmail API call failed."""

    def __init__(self, operation: str, target: str | None, cause: Exception) -> None:
        self.operation = operation
        self.target = target
        where = f" {target}" if target else ""
        super().__init__(f"Failed to {operation}{where}: {cause}")
