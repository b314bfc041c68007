"""Value types shared by the search engine and its callers."""

from .model import AssetIdentity, SearchOptions, MatchResult, normalize_selector

__all__ = ["AssetIdentity", "SearchOptions", "MatchResult", "normalize_selector"]
