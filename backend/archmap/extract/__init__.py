"""
Source fact extraction.

Two recognition profiles over raw file text: server files (decorated,
dependency-injected classes) and client files (file-routed pages).
"""

from archmap.extract.source import SourceFile
from archmap.extract.server import analyze_server_file
from archmap.extract.client import analyze_client_file, page_identity

__all__ = [
    "SourceFile",
    "analyze_server_file",
    "analyze_client_file",
    "page_identity",
]
