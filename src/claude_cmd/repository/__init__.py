"""Remote and local command repositories."""

from .base import LanguageInfo, Repository
from .local import LocalRepository, LocalScanResult
from .remote import RemoteRepository, parse_manifest_body
from .scanner import NamespacedFile, ScanWarning, TreeScan, scan_command_tree

__all__ = [
    "LanguageInfo",
    "LocalRepository",
    "LocalScanResult",
    "NamespacedFile",
    "RemoteRepository",
    "Repository",
    "ScanWarning",
    "TreeScan",
    "parse_manifest_body",
    "scan_command_tree",
]
