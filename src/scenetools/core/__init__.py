"""Scene graph and geometry engine components."""

from .transform import Transform
from .resource import Resource
from .buffer_geometry import BufferAttribute, BufferGeometry
from .bounds import BoundingBox
from .mesh import Mesh
from .node import Group, SceneNode
from . import geometry

__all__ = [
    "Transform",
    "Resource",
    "BufferAttribute",
    "BufferGeometry",
    "BoundingBox",
    "Mesh",
    "Group",
    "SceneNode",
    "geometry",
]
