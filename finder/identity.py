"""Resolve a target asset to its project path and GUID."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml

from references.model import AssetIdentity
from .errors import InvalidInputError, ResolutionError


logger = logging.getLogger(__name__)

META_SUFFIX = ".meta"

# Base loader keeps every scalar a string, so all-digit GUIDs are not turned into ints.
_Loader = getattr(yaml, "CBaseLoader", yaml.BaseLoader)

AssetHandle = Union[str, "os.PathLike[str]", AssetIdentity]


def meta_path_for(asset_path: Path) -> Path:
    """Return the ``.meta`` file that sits next to an asset."""
    return asset_path.with_name(asset_path.name + META_SUFFIX)


def read_meta_guid(asset_path: Path) -> Optional[str]:
    """
    Read the GUID recorded in an asset's ``.meta`` file.
    
    Args:
        asset_path: Path to the asset (not to the meta file).
    
    Returns:
        The GUID string, or None if the meta file is missing, unreadable,
        malformed or has no guid.
    """
    meta_path = meta_path_for(asset_path)
    
    try:
        content = meta_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Cannot read {meta_path}: {e}")
        return None
    
    try:
        data = yaml.load(content, Loader=_Loader)
    except yaml.YAMLError as e:
        logger.debug(f"Cannot parse {meta_path}: {e}")
        return None
    
    if not isinstance(data, dict):
        return None
    
    guid = data.get("guid")
    if not isinstance(guid, str) or not guid.strip():
        return None
    return guid.strip()


def check_handle(asset: Optional[AssetHandle]) -> None:
    """
    Reject a missing target before anything touches the filesystem.
    
    Raises:
        InvalidInputError: If no asset was given.
    """
    if asset is None:
        raise InvalidInputError("Select a target asset to search")
    if isinstance(asset, AssetIdentity):
        return
    if not os.fspath(asset).strip():
        raise InvalidInputError("Select a target asset to search")


def resolve_identity(asset: Optional[AssetHandle]) -> AssetIdentity:
    """
    Map an asset handle to its path and GUID.
    
    Args:
        asset: Path to an asset inside the project, or an AssetIdentity
            which is returned unchanged.
    
    Returns:
        AssetIdentity of the asset.
    
    Raises:
        InvalidInputError: If no asset was given.
        ResolutionError: If the GUID could not be read.
    """
    check_handle(asset)
    if isinstance(asset, AssetIdentity):
        return asset
    
    asset_path = Path(os.fspath(asset))
    guid = read_meta_guid(asset_path)
    if guid is None:
        raise ResolutionError(f"Failed to retrieve the GUID of '{asset_path.as_posix()}'")
    
    return AssetIdentity(path=asset_path.as_posix(), guid=guid)
