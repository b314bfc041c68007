"""Data model for asset reference searches."""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple


DEFAULT_ROOT = "Assets"

PREFAB_SELECTOR = "*.prefab"
SCENE_SELECTOR = "*.unity"
MATERIAL_SELECTOR = "*.mat"
ASSET_SELECTOR = "*.asset"


def normalize_selector(selector: str) -> Optional[str]:
    """
    Normalize an extension selector to glob form.
    
    ``prefab``, ``.prefab`` and ``*.prefab`` all become ``*.prefab``.
    
    Args:
        selector: Raw selector string.
    
    Returns:
        Lowercased glob selector, or None if the selector is blank.
    """
    cleaned = selector.strip().lower()
    if not cleaned:
        return None
    if cleaned.startswith("*"):
        return cleaned
    if not cleaned.startswith("."):
        cleaned = "." + cleaned
    return "*" + cleaned


@dataclass(frozen=True)
class AssetIdentity:
    """The asset being searched for: its project path and GUID."""
    
    path: str
    guid: str
    
    def __post_init__(self):
        if not self.guid or not self.guid.strip():
            raise ValueError("AssetIdentity requires a non-empty guid")
        object.__setattr__(self, "path", self.path.replace("\\", "/"))


@dataclass(frozen=True)
class SearchOptions:
    """
    Options for a single search.
    
    Selectors keep the order they were supplied in, since that order decides
    the order of the result passes. Duplicates are kept.
    """
    
    extensions: Tuple[str, ...] = ()
    deep_sprite_filter: bool = False
    root_directory: str = DEFAULT_ROOT
    
    def __post_init__(self):
        extensions = self.extensions
        if isinstance(extensions, str):
            extensions = (extensions,)

        selectors = []
        for ext in extensions:
            normalized = normalize_selector(ext)
            if normalized is not None:
                selectors.append(normalized)
        object.__setattr__(self, "extensions", tuple(selectors))
    
    @classmethod
    def from_toggles(
        cls,
        prefabs: bool = True,
        scenes: bool = True,
        materials: bool = False,
        assets: bool = False,
        deep_sprite_filter: bool = False,
        root_directory: str = DEFAULT_ROOT,
        extra: Iterable[str] = (),
    ) -> "SearchOptions":
        """
        Build options from per-kind toggles.
        
        Args:
            prefabs: Search ``*.prefab`` files.
            scenes: Search ``*.unity`` files.
            materials: Search ``*.mat`` files.
            assets: Search ``*.asset`` files.
            deep_sprite_filter: Restrict prefab/scene matches to sprite renderers.
            root_directory: Directory to search under.
            extra: Additional selectors, searched after the toggled kinds.
        
        Returns:
            SearchOptions with selectors in prefab, scene, material, asset order.
        """
        extensions: List[str] = []
        if prefabs:
            extensions.append(PREFAB_SELECTOR)
        if scenes:
            extensions.append(SCENE_SELECTOR)
        if materials:
            extensions.append(MATERIAL_SELECTOR)
        if assets:
            extensions.append(ASSET_SELECTOR)
        extensions.extend(extra)
        
        return cls(
            extensions=tuple(extensions),
            deep_sprite_filter=deep_sprite_filter,
            root_directory=root_directory,
        )


class MatchResult:
    """
    Ordered list of files referencing the target.
    
    Each extension pass appends its matches; nothing is deduplicated.
    """
    
    def __init__(self, paths: Optional[Iterable[str]] = None):
        self._paths: List[str] = list(paths) if paths is not None else []
    
    @property
    def paths(self) -> List[str]:
        """Return a copy of the matched paths."""
        return list(self._paths)
    
    def extend(self, paths: Sequence[str]) -> None:
        """Append the matches of one pass."""
        self._paths.extend(paths)
    
    def __len__(self) -> int:
        return len(self._paths)
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)
    
    def __getitem__(self, index: int) -> str:
        return self._paths[index]
    
    def __contains__(self, path: object) -> bool:
        return path in self._paths
    
    def __bool__(self) -> bool:
        return bool(self._paths)
    
    def __eq__(self, other: object) -> bool:
        if isinstance(other, MatchResult):
            return self._paths == other._paths
        if isinstance(other, list):
            return self._paths == other
        return NotImplemented
    
    def __repr__(self) -> str:
        return f"MatchResult(count={len(self._paths)}, paths={self._paths!r})"
