"""Errors raised by the reference search engine."""


class SearchError(Exception):
    """Base class for failures that abort a search."""


class InvalidInputError(SearchError):
    """No target asset was supplied."""


class ResolutionError(SearchError):
    """The target asset's GUID could not be derived."""


class TraversalError(SearchError):
    """The search root is missing or cannot be listed."""


class DocumentParseError(Exception):
    """A serialized scene or prefab could not be parsed.
    
    Only affects the file being read; the scanner skips it and moves on.
    """
