#!/usr/bin/env python3
"""
Asset Reference Finder CLI

Find every prefab, scene, material or asset file in a project that references
a given asset by GUID.
"""

import argparse
import logging
import sys
from pathlib import Path

from references.model import AssetIdentity, SearchOptions, DEFAULT_ROOT
from finder.errors import InvalidInputError, SearchError
from finder.identity import read_meta_guid
from finder.search import search
from reports import to_text, to_json


DEFAULT_LOG_PATH = "Assets/Logs/AssetReferenceSearchResult.txt"

logger = logging.getLogger("assetrefs")


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="assetrefs",
        description="Find files that reference an asset by its GUID.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  assetrefs Assets/Sprites/hero.png               # Prefabs and scenes under Assets/
  assetrefs Assets/Sprites/hero.png --sprite-only # Only sprite renderer references
  assetrefs Assets/Materials/wood.mat --materials --assets
  assetrefs 4c1a9b0e2d7f4e3a8b6c5d4e3f2a1b0c --guid -f json
  assetrefs Assets/Sprites/hero.png --save-log    # Write Assets/Logs/AssetReferenceSearchResult.txt
        """,
    )
    
    parser.add_argument(
        "target",
        help="Path of the target asset (its .meta file holds the GUID), or a GUID with --guid",
    )
    
    parser.add_argument(
        "--guid",
        action="store_true",
        help="Treat TARGET as a raw GUID instead of an asset path",
    )
    
    parser.add_argument(
        "--root",
        type=str,
        default=DEFAULT_ROOT,
        help=f"Directory to search (default: {DEFAULT_ROOT})",
    )
    
    # File kinds
    parser.add_argument(
        "--no-prefabs",
        action="store_true",
        help="Do not search prefabs (.prefab)",
    )
    
    parser.add_argument(
        "--no-scenes",
        action="store_true",
        help="Do not search scenes (.unity)",
    )
    
    parser.add_argument(
        "--materials",
        action="store_true",
        help="Also search materials (.mat)",
    )
    
    parser.add_argument(
        "--assets",
        action="store_true",
        help="Also search other assets (.asset)",
    )
    
    parser.add_argument(
        "--ext",
        nargs="+",
        default=[],
        help="Additional extensions to search (e.g., .controller .anim)",
    )
    
    parser.add_argument(
        "--sprite-only",
        action="store_true",
        help="In prefabs and scenes, only count references made by a SpriteRenderer's sprite",
    )
    
    # Output options
    parser.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Write the report to this file when references are found (default: stdout only)",
    )
    
    output.add_argument(
        "--save-log",
        action="store_const",
        const=DEFAULT_LOG_PATH,
        dest="output",
        help=f"Write the report to {DEFAULT_LOG_PATH} when references are found",
    )
    
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log each pass and match",
    )
    
    return parser.parse_args(args)


def _guid_identity(target: str) -> AssetIdentity:
    """Build the identity for a raw GUID target."""
    if not target.strip():
        raise InvalidInputError("GUID must not be empty")
    return AssetIdentity(path=target.strip(), guid=target.strip())


def _report_progress(selector: str, index: int, total: int) -> None:
    logger.info(f"Searching {selector} ({index + 1}/{total})")


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    
    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    
    options = SearchOptions.from_toggles(
        prefabs=not parsed.no_prefabs,
        scenes=not parsed.no_scenes,
        materials=parsed.materials,
        assets=parsed.assets,
        deep_sprite_filter=parsed.sprite_only,
        root_directory=parsed.root,
        extra=parsed.ext,
    )
    
    try:
        handle = _guid_identity(parsed.target) if parsed.guid else parsed.target
        result = search(handle, options, progress=_report_progress)
    except SearchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    if isinstance(handle, AssetIdentity):
        target_path, guid = handle.path, handle.guid
    else:
        target_path = Path(handle).as_posix()
        guid = read_meta_guid(Path(handle)) if parsed.format == "json" else None
    
    if parsed.format == "json":
        output = to_json(result, target_path, guid)
    else:
        output = to_text(result, target_path)
    
    print(output)
    
    if parsed.output and result:
        try:
            output_path = Path(parsed.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(output, encoding="utf-8")
            print(f"Output written to: {output_path.as_posix()}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
