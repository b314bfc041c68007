"""File discovery utilities for walking a project tree."""

import fnmatch
import logging
from pathlib import Path
from typing import Iterator, Set, Tuple

from .errors import TraversalError


logger = logging.getLogger(__name__)


def matches_selector(file_name: str, selector: str) -> bool:
    """Check a file name against a glob selector such as ``*.prefab``, ignoring case."""
    return fnmatch.fnmatchcase(file_name.lower(), selector.lower())


def check_root(root: Path) -> None:
    """
    Make sure root is a directory that can be searched.
    
    Raises:
        TraversalError: If root is missing, not a directory, or cannot be stat'ed.
    """
    try:
        is_dir = root.is_dir()
    except OSError as e:
        raise TraversalError(f"Cannot access '{root.as_posix()}': {e}") from e
    if not is_dir:
        raise TraversalError(f"'{root.as_posix()}' is not a directory")


def _directory_key(path: Path) -> Tuple[int, int]:
    """Identify a directory by device and inode, following symlinks."""
    st = path.stat()
    return st.st_dev, st.st_ino


def iter_files(root: Path, selector: str) -> Iterator[Path]:
    """
    Iterate over files under root whose names match the selector.
    
    Directories are walked depth-first in sorted order, so a given tree always
    yields the same sequence. Paths are built from root as given (not resolved).
    Symlinked directories are followed, but a directory already visited is not
    entered again, so link cycles cannot repeat files. Entries that cannot be
    stat'ed or listed are skipped with a warning.
    
    Args:
        root: Root directory to scan.
        selector: Glob pattern matched against file names, e.g. ``*.unity``.
    
    Yields:
        Path objects for matching files.
    
    Raises:
        TraversalError: If root itself is missing or cannot be listed.
    """
    check_root(root)
    
    try:
        visited: Set[Tuple[int, int]] = {_directory_key(root)}
        top_entries = sorted(root.iterdir())
    except OSError as e:
        raise TraversalError(f"Cannot list '{root.as_posix()}': {e}") from e
    
    def _walk(entries) -> Iterator[Path]:
        for entry in entries:
            try:
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                logger.warning(f"Skipping {entry.as_posix()}: {e}")
                continue
            
            if is_dir:
                try:
                    key = _directory_key(entry)
                    if key in visited:
                        logger.debug(f"Already visited {entry.as_posix()}, not following")
                        continue
                    visited.add(key)
                    children = sorted(entry.iterdir())
                except OSError as e:
                    logger.warning(f"Skipping directory {entry.as_posix()}: {e}")
                    continue
                yield from _walk(children)
            elif is_file and matches_selector(entry.name, selector):
                yield entry
    
    yield from _walk(top_entries)


def to_report_path(path: Path) -> str:
    """Render a path with forward slashes regardless of platform."""
    return str(path).replace("\\", "/")
