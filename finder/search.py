"""Reference scanner: walks the project once per extension and collects matches."""

import logging
from pathlib import Path
from typing import Callable, List, Optional

from references.model import MatchResult, SearchOptions
from .discovery import check_root, iter_files, to_report_path
from .errors import DocumentParseError
from .identity import AssetHandle, check_handle, resolve_identity
from .matchers import select_matcher


logger = logging.getLogger(__name__)

# Called before each pass with (selector, pass index, pass count).
ProgressCallback = Callable[[str, int, int], None]


def scan_pass(
    root: Path,
    selector: str,
    guid: str,
    deep_sprite_filter: bool = False,
) -> List[str]:
    """
    Run one pass: find files matching selector under root that reference guid.
    
    Files that cannot be read or parsed are logged and skipped.
    
    Args:
        root: Directory to search.
        selector: Normalized glob selector, e.g. ``*.prefab``.
        guid: GUID of the target asset.
        deep_sprite_filter: Inspect sprite renderers instead of raw text where
            the selector supports it.
    
    Returns:
        Matching paths in enumeration order, with forward slashes.
    
    Raises:
        TraversalError: If root cannot be listed.
    """
    matcher = select_matcher(selector, deep_sprite_filter)
    logger.debug(f"Pass {selector} under {root.as_posix()} using {matcher.name} matching")
    
    found: List[str] = []
    for file_path in iter_files(root, selector):
        try:
            matched = matcher.matches(file_path, guid)
        except (OSError, UnicodeDecodeError, DocumentParseError) as e:
            logger.warning(f"Skipping {to_report_path(file_path)}: {e}")
            continue
        
        if matched:
            report_path = to_report_path(file_path)
            logger.debug(f"Match: {report_path}")
            found.append(report_path)
    
    return found


def scan_references(
    guid: str,
    options: SearchOptions,
    progress: Optional[ProgressCallback] = None,
) -> MatchResult:
    """
    Search every selector of options for references to guid.
    
    Passes run in the order the selectors were given and their results are
    concatenated without deduplication.
    
    Args:
        guid: GUID of the target asset.
        options: Selectors, root directory and deep filter flag.
        progress: Optional callback invoked before each pass.
    
    Returns:
        MatchResult with the paths of all passes.
    
    Raises:
        TraversalError: If the root directory is missing or unreadable.
    """
    result = MatchResult()
    if not options.extensions:
        return result
    
    root = Path(options.root_directory)
    check_root(root)
    
    total = len(options.extensions)
    for index, selector in enumerate(options.extensions):
        if progress is not None:
            progress(selector, index, total)
        result.extend(scan_pass(root, selector, guid, options.deep_sprite_filter))
    
    logger.debug(f"Found {len(result)} reference(s) to {guid} in {total} pass(es)")
    return result


def search(
    asset: Optional[AssetHandle],
    options: SearchOptions,
    progress: Optional[ProgressCallback] = None,
) -> MatchResult:
    """
    Find every file under the search root that references an asset.
    
    Args:
        asset: Path of the target asset (its ``.meta`` file supplies the GUID)
            or a ready AssetIdentity.
        options: What to search and how.
        progress: Optional callback invoked before each pass.
    
    Returns:
        MatchResult of all passes.
    
    Raises:
        InvalidInputError: If no asset was given.
        ResolutionError: If the asset's GUID cannot be read.
        TraversalError: If the root directory is missing or unreadable.
    """
    check_handle(asset)
    if not options.extensions:
        return MatchResult()
    
    identity = resolve_identity(asset)
    return scan_references(identity.guid, options, progress)
