"""Injected I/O capabilities: filesystem and HTTP."""

from .files import FileService, LocalFileService
from .http import HTTPClient, HTTPGetter, HTTPResponse

__all__ = [
    "FileService",
    "HTTPClient",
    "HTTPGetter",
    "HTTPResponse",
    "LocalFileService",
]
