"""scenetools: geometry access and scene graph utilities."""

from .core import BoundingBox, BufferGeometry, Group, Mesh, SceneNode, Transform
from .materials import Material, Texture

__all__ = [
    "BoundingBox",
    "BufferGeometry",
    "Group",
    "Mesh",
    "SceneNode",
    "Transform",
    "Material",
    "Texture",
]
