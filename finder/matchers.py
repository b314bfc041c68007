"""Matching strategies deciding whether a file references a GUID."""

from pathlib import Path
from typing import Dict, Iterable

from references.model import PREFAB_SELECTOR, SCENE_SELECTOR
from .parser import parse_document


class ReferenceMatcher:
    """Decides whether a single file references a GUID."""
    
    name = "matcher"
    
    def matches(self, file_path: Path, guid: str) -> bool:
        """
        Check a file for a reference to guid.
        
        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If a text-based matcher meets binary content.
            DocumentParseError: If a structural matcher cannot parse the file.
        """
        raise NotImplementedError


class ContainmentMatcher(ReferenceMatcher):
    """
    Match when the GUID appears anywhere in the file's bytes.
    
    Structure is ignored, so a GUID inside an unrelated field or a comment
    still counts as a reference.
    """
    
    name = "containment"
    
    def matches(self, file_path: Path, guid: str) -> bool:
        return guid.encode("utf-8") in file_path.read_bytes()


class ComponentReferenceMatcher(ReferenceMatcher):
    """
    Match when a component of a given type, attached to any game object or
    one of its descendants, points at the GUID through a given field.
    """
    
    name = "component"
    
    def __init__(self, component_types: Iterable[str], reference_field: str):
        self.component_types = tuple(component_types)
        self.reference_field = reference_field
    
    def matches(self, file_path: Path, guid: str) -> bool:
        document = parse_document(file_path.read_text(encoding="utf-8"))
        
        for game_object in document.iter_hierarchy():
            for component in document.components(game_object):
                if component.type_name not in self.component_types:
                    continue
                if document.reference_guid(component, self.reference_field) == guid:
                    return True
        return False
    
    def __repr__(self) -> str:
        return f"ComponentReferenceMatcher({self.component_types!r}, {self.reference_field!r})"


CONTAINMENT_MATCHER = ContainmentMatcher()
SPRITE_RENDERER_MATCHER = ComponentReferenceMatcher(["SpriteRenderer"], "m_Sprite")

# Selectors whose files can be inspected structurally when the deep filter is on.
DEEP_MATCHERS: Dict[str, ReferenceMatcher] = {
    PREFAB_SELECTOR: SPRITE_RENDERER_MATCHER,
    SCENE_SELECTOR: SPRITE_RENDERER_MATCHER,
}


def select_matcher(selector: str, deep_sprite_filter: bool = False) -> ReferenceMatcher:
    """
    Pick the matcher for one extension pass.
    
    Args:
        selector: Normalized glob selector of the pass, e.g. ``*.prefab``.
        deep_sprite_filter: Whether structural inspection was requested.
    
    Returns:
        The structural matcher registered for the selector when the deep
        filter is on, otherwise plain containment.
    """
    if deep_sprite_filter:
        return DEEP_MATCHERS.get(selector, CONTAINMENT_MATCHER)
    return CONTAINMENT_MATCHER
