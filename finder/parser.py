"""Parser for the engine's text serialization of scenes and prefabs.

A serialized file is a YAML stream in which every document is one object::

    %YAML 1.1
    %TAG !u! tag:unity3d.com,2011:
    --- !u!1 &1000
    GameObject:
      m_Component:
      - component: {fileID: 4000}
    --- !u!4 &4000
    Transform:
      m_GameObject: {fileID: 1000}
      m_Children: []

The header carries the class ID and the object's file ID, and may end with
``stripped`` for objects owned by a nested prefab instance. Bodies are parsed
one by one so the custom tags and the ``stripped`` marker never reach PyYAML.
"""

import re
from typing import Any, Dict, Iterator, List, Optional

import yaml

from .errors import DocumentParseError


_Loader = getattr(yaml, "CBaseLoader", yaml.BaseLoader)

_HEADER_RE = re.compile(r"^--- !u!(\d+) &(-?\d+)([^\n]*)$", re.MULTILINE)

NULL_FILE_ID = "0"
GAME_OBJECT = "GameObject"
TRANSFORM_TYPES = {"Transform", "RectTransform"}


class UnityObject:
    """One serialized object: a game object, a component, an asset..."""
    
    def __init__(
        self,
        class_id: int,
        file_id: str,
        type_name: str,
        fields: Dict[str, Any],
        stripped: bool = False,
    ):
        self.class_id = class_id
        self.file_id = file_id
        self.type_name = type_name
        self.fields = fields
        self.stripped = stripped
    
    def __repr__(self) -> str:
        return f"UnityObject({self.type_name}, class_id={self.class_id}, file_id={self.file_id})"


def _ref_file_id(value: Any) -> Optional[str]:
    """Return the file ID of a ``{fileID: ...}`` reference, or None for null references."""
    if not isinstance(value, dict):
        return None
    file_id = value.get("fileID")
    if not isinstance(file_id, str) or file_id == NULL_FILE_ID:
        return None
    return file_id


class UnityDocument:
    """
    The objects of one serialized file, indexed by file ID.
    
    Only the links needed to walk a hierarchy are interpreted: a game object's
    component list, a transform's owner and children.
    """
    
    def __init__(self, objects: List[UnityObject]):
        self._objects = list(objects)
        self._by_id: Dict[str, UnityObject] = {obj.file_id: obj for obj in self._objects}
    
    @property
    def objects(self) -> List[UnityObject]:
        return list(self._objects)
    
    def get(self, file_id: Optional[str]) -> Optional[UnityObject]:
        if file_id is None:
            return None
        return self._by_id.get(file_id)
    
    def game_objects(self) -> List[UnityObject]:
        """Return every game object in file order."""
        return [obj for obj in self._objects if obj.type_name == GAME_OBJECT]
    
    def components(self, game_object: UnityObject) -> List[UnityObject]:
        """
        Return the components attached to a game object.
        
        Handles both entry forms of ``m_Component``: ``- component: {fileID: n}``
        and the older ``- 4: {fileID: n}`` keyed by class ID.
        """
        found: List[UnityObject] = []
        entries = game_object.fields.get("m_Component")
        if not isinstance(entries, list):
            return found
        
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            for value in entry.values():
                component = self.get(_ref_file_id(value))
                if component is not None:
                    found.append(component)
        return found
    
    def transform_of(self, game_object: UnityObject) -> Optional[UnityObject]:
        for component in self.components(game_object):
            if component.type_name in TRANSFORM_TYPES:
                return component
        return None
    
    def children(self, game_object: UnityObject) -> List[UnityObject]:
        """Return the direct child game objects, following ``m_Children`` transforms."""
        transform = self.transform_of(game_object)
        if transform is None:
            return []
        
        entries = transform.fields.get("m_Children")
        if not isinstance(entries, list):
            return []
        
        found: List[UnityObject] = []
        for entry in entries:
            child_transform = self.get(_ref_file_id(entry))
            if child_transform is None:
                continue
            child = self.get(_ref_file_id(child_transform.fields.get("m_GameObject")))
            if child is not None and child.type_name == GAME_OBJECT:
                found.append(child)
        return found
    
    def iter_descendants(self, game_object: UnityObject) -> Iterator[UnityObject]:
        """Yield the game object and all of its descendants, each once."""
        seen = set()
        stack = [game_object]
        while stack:
            current = stack.pop()
            if current.file_id in seen:
                continue
            seen.add(current.file_id)
            yield current
            stack.extend(reversed(self.children(current)))
    
    def root_game_objects(self) -> List[UnityObject]:
        """
        Return game objects without a parent game object in this file.

        An object whose parent transform is missing or stripped counts as a root.
        """
        roots: List[UnityObject] = []
        for game_object in self.game_objects():
            transform = self.transform_of(game_object)
            parent = None
            if transform is not None:
                parent_transform = self.get(_ref_file_id(transform.fields.get("m_Father")))
                if parent_transform is not None:
                    parent = self.get(_ref_file_id(parent_transform.fields.get("m_GameObject")))
            if parent is None or parent.type_name != GAME_OBJECT:
                roots.append(game_object)
        return roots

    def iter_hierarchy(self) -> Iterator[UnityObject]:
        """
        Yield every game object once, each root followed by its subtree.

        Objects only reachable through a parent cycle come last.
        """
        seen = set()
        for start in self.root_game_objects() + self.game_objects():
            if start.file_id in seen:
                continue
            for node in self.iter_descendants(start):
                if node.file_id not in seen:
                    seen.add(node.file_id)
                    yield node

    def components_in_children(self, game_object: UnityObject, type_name: str) -> Iterator[UnityObject]:
        """Yield components of the given type on the game object or any descendant."""
        for node in self.iter_descendants(game_object):
            for component in self.components(node):
                if component.type_name == type_name:
                    yield component
    
    def reference_guid(self, obj: UnityObject, field_name: str) -> Optional[str]:
        """
        Return the asset GUID an object field points at.
        
        Null references and references to objects inside the same file carry
        no GUID and yield None.
        """
        value = obj.fields.get(field_name)
        if _ref_file_id(value) is None:
            return None
        guid = value.get("guid")
        if not isinstance(guid, str) or not guid:
            return None
        return guid
    
    def __len__(self) -> int:
        return len(self._objects)


def parse_document(content: str) -> UnityDocument:
    """
    Parse a serialized scene or prefab.
    
    Args:
        content: Full text of the file.
    
    Returns:
        UnityDocument with one UnityObject per YAML document. Text without
        object headers yields an empty document.
    
    Raises:
        DocumentParseError: If an object body is not valid YAML.
    """
    headers = list(_HEADER_RE.finditer(content))
    objects: List[UnityObject] = []
    
    for index, header in enumerate(headers):
        end = headers[index + 1].start() if index + 1 < len(headers) else len(content)
        body = content[header.end():end]
        
        try:
            data = yaml.load(body, Loader=_Loader)
        except yaml.YAMLError as e:
            raise DocumentParseError(f"Invalid object &{header.group(2)}: {e}") from e
        
        type_name = ""
        fields: Dict[str, Any] = {}
        if isinstance(data, dict) and data:
            type_name, value = next(iter(data.items()))
            if isinstance(value, dict):
                fields = value
        
        objects.append(
            UnityObject(
                class_id=int(header.group(1)),
                file_id=header.group(2),
                type_name=type_name,
                fields=fields,
                stripped="stripped" in header.group(3),
            )
        )
    
    return UnityDocument(objects)
