"""Error taxonomy shared by every claude-cmd component.

All domain failures derive from :class:`ClaudeCmdError` and carry three
structured fields:

- ``kind``: an :class:`ErrorKind` tag that callers branch on
- ``resource``: the identifying key (command name, language, path or URL)
- ``cause``: a short human-readable description of the underlying failure

The concrete subclasses only exist so tracebacks and log lines read well.
Callers should match on ``error.kind`` instead of ``isinstance`` chains.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Failure categories surfaced to callers."""

    NOT_FOUND = "not_found"
    TRANSPORT = "transport"
    VALIDATION = "validation"
    SECURITY = "security"
    IO = "io"


class ClaudeCmdError(RuntimeError):
    """Base class for all claude-cmd errors."""

    kind: ErrorKind = ErrorKind.IO

    def __init__(
        self,
        message: str,
        *,
        resource: str | None = None,
        cause: str | None = None,
        kind: ErrorKind | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.resource = resource
        self.cause = cause
        if kind is not None:
            self.kind = kind

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "resource": self.resource,
            "cause": self.cause,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Language resolution
# ---------------------------------------------------------------------------


class InvalidLocaleError(ClaudeCmdError):
    """Raised when a POSIX locale string cannot be used for detection."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, locale: str = "") -> None:
        super().__init__(message, resource=locale, cause=message)


class InvalidLanguageCodeError(ClaudeCmdError):
    """Raised when a language segment is not 2-3 lowercase letters."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, code: str = "") -> None:
        super().__init__(message, resource=code, cause=message)


# ---------------------------------------------------------------------------
# Configuration and cache
# ---------------------------------------------------------------------------


class ConfigValidationError(ClaudeCmdError):
    """Raised when a configuration document fails validation."""

    kind = ErrorKind.VALIDATION

    def __init__(self, config_path: str) -> None:
        super().__init__("Invalid configuration", resource=config_path)


class ConfigWriteError(ClaudeCmdError):
    """Raised when a valid configuration document cannot be persisted."""

    kind = ErrorKind.IO

    def __init__(self, config_path: str, cause: str) -> None:
        super().__init__(
            f"Failed to save configuration: {cause}",
            resource=config_path,
            cause=cause,
        )


class CacheError(ClaudeCmdError):
    """Raised for invalid cache keys and failed cache writes."""

    def __init__(
        self,
        message: str,
        language: str,
        *,
        cause: str | None = None,
        kind: ErrorKind = ErrorKind.IO,
    ) -> None:
        super().__init__(message, resource=language, cause=cause, kind=kind)
        self.language = language


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class RepositoryError(ClaudeCmdError):
    """Base class for manifest and command retrieval failures."""

    def __init__(self, message: str, language: str, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.language = language


class CommandNotFoundError(RepositoryError):
    """The requested command is not part of the catalog."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, command_name: str, language: str) -> None:
        super().__init__(
            f'Command "{command_name}" not found in language "{language}"',
            language,
            resource=command_name,
        )
        self.command_name = command_name


class ManifestError(RepositoryError):
    """The manifest for a language could not be retrieved or parsed."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, language: str, cause: str | None = None) -> None:
        super().__init__(
            f'Failed to retrieve manifest for language "{language}": {cause or "Unknown error"}',
            language,
            resource=language,
            cause=cause,
        )


class CommandContentError(RepositoryError):
    """The command exists in the catalog but its file could not be fetched."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, command_name: str, language: str, cause: str | None = None) -> None:
        super().__init__(
            f'Failed to retrieve content for command "{command_name}" '
            f'in language "{language}": {cause or "Unknown error"}',
            language,
            resource=command_name,
            cause=cause,
        )
        self.command_name = command_name


class InvalidArgumentError(ClaudeCmdError):
    """A caller passed an empty or malformed argument (search query, command name)."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, argument: str = "") -> None:
        super().__init__(message, resource=argument, cause=message)


# ---------------------------------------------------------------------------
# Command files
# ---------------------------------------------------------------------------


class CommandParseError(ClaudeCmdError):
    """A command definition file is malformed."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, command_name: str | None = None, cause: str | None = None) -> None:
        super().__init__(message, resource=command_name, cause=cause)
        self.command_name = command_name


class CommandSecurityError(CommandParseError):
    """A command file declares a capability or path outside the whitelist."""

    kind = ErrorKind.SECURITY

    def __init__(self, message: str, command_name: str | None = None, entry: str | None = None) -> None:
        super().__init__(message, command_name, cause=entry)
        self.entry = entry


class NamespaceError(ClaudeCmdError):
    """A namespace string is empty or has invalid segments."""

    kind = ErrorKind.VALIDATION

    def __init__(self, namespace: str, reason: str) -> None:
        super().__init__(f'Invalid namespace "{namespace}": {reason}', resource=namespace, cause=reason)


# ---------------------------------------------------------------------------
# Injected capabilities
# ---------------------------------------------------------------------------


class FileServiceError(ClaudeCmdError):
    """Base class for file-service failures."""

    kind = ErrorKind.IO

    def __init__(self, message: str, path: str, cause: str | None = None) -> None:
        super().__init__(message, resource=path, cause=cause)
        self.path = path


class MissingFileError(FileServiceError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: str) -> None:
        super().__init__(f"File not found: {path}", path)


class FilePermissionError(FileServiceError):
    def __init__(self, path: str, operation: str) -> None:
        super().__init__(f"Permission denied ({operation}): {path}", path, cause="permission denied")
        self.operation = operation


class FileIOError(FileServiceError):
    def __init__(self, path: str, operation: str, cause: str) -> None:
        super().__init__(f"I/O error ({operation}) on {path}: {cause}", path, cause=cause)
        self.operation = operation


class HTTPError(ClaudeCmdError):
    """Base class for HTTP capability failures."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, url: str, cause: str | None = None) -> None:
        super().__init__(message, resource=url, cause=cause or message)
        self.url = url


class HTTPTimeoutError(HTTPError):
    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(f"Request timed out after {timeout:g}s", url)
        self.timeout = timeout


class HTTPNetworkError(HTTPError):
    def __init__(self, url: str, cause: str | None = None) -> None:
        super().__init__(f"Network error: {cause or 'Connection failed'}", url, cause=cause)


class HTTPStatusError(HTTPError):
    def __init__(self, url: str, status: int, status_text: str) -> None:
        super().__init__(f"HTTP {status}: {status_text}", url)
        self.status = status
        self.status_text = status_text


__all__ = [
    "CacheError",
    "ClaudeCmdError",
    "CommandContentError",
    "CommandNotFoundError",
    "CommandParseError",
    "CommandSecurityError",
    "ConfigValidationError",
    "ConfigWriteError",
    "ErrorKind",
    "FileIOError",
    "FilePermissionError",
    "FileServiceError",
    "HTTPError",
    "HTTPNetworkError",
    "HTTPStatusError",
    "HTTPTimeoutError",
    "InvalidArgumentError",
    "InvalidLanguageCodeError",
    "InvalidLocaleError",
    "ManifestError",
    "MissingFileError",
    "NamespaceError",
    "RepositoryError",
]
