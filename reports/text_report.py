"""Plain text report: a header line followed by one path per line."""

from references.model import MatchResult


def to_text(result: MatchResult, target_path: str) -> str:
    """
    Render a search result as text.
    
    Args:
        result: Paths found by the search.
        target_path: Path (or GUID) of the asset that was searched for.
    
    Returns:
        ``Found N file(s) referencing `path`:`` followed by the paths, or a
        single "not found" line when nothing matched.
    """
    if not result:
        return f"Could not find any references to: {target_path}"
    
    header = f"Found {len(result)} file(s) referencing `{target_path}`:"
    return "\n".join([header] + result.paths)
