"""JSON report (machine-friendly format)."""

import json
from typing import Any, Dict, Optional

from references.model import MatchResult


def to_json(
    result: MatchResult,
    target_path: str,
    guid: Optional[str] = None,
    indent: int = 2,
) -> str:
    """
    Render a search result as JSON.
    
    Args:
        result: Paths found by the search.
        target_path: Path (or GUID) of the asset that was searched for.
        guid: GUID of the asset, None when it was never resolved.
        indent: JSON indentation level.
    
    Returns:
        JSON object with the target, the match count and the paths in order.
    """
    data: Dict[str, Any] = {
        "target": {"path": target_path, "guid": guid},
        "count": len(result),
        "references": result.paths,
    }
    return json.dumps(data, indent=indent)
