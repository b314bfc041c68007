"""Reference search engine: GUID resolution, traversal and matching."""

from .errors import (
    SearchError,
    InvalidInputError,
    ResolutionError,
    TraversalError,
    DocumentParseError,
)
from .identity import resolve_identity, read_meta_guid
from .discovery import iter_files
from .parser import parse_document
from .matchers import select_matcher
from .search import search, scan_references, scan_pass

__all__ = [
    "SearchError",
    "InvalidInputError",
    "ResolutionError",
    "TraversalError",
    "DocumentParseError",
    "resolve_identity",
    "read_meta_guid",
    "iter_files",
    "parse_document",
    "select_matcher",
    "search",
    "scan_references",
    "scan_pass",
]
