"""Shared fixtures for scenetools tests."""

import numpy as np
import pytest

from scenetools.core import BufferGeometry, Mesh, SceneNode
from scenetools.materials import Material, Texture

# Unit square in the XY plane as two triangles
QUAD_POSITIONS = [
    0, 0, 0,
    1, 0, 0,
    1, 1, 0,
    0, 1, 0,
]
QUAD_INDEX = [0, 1, 2, 0, 2, 3]


@pytest.fixture
def triangle() -> BufferGeometry:
    """Non-indexed unit right triangle."""
    return BufferGeometry(position=[0, 0, 0, 1, 0, 0, 0, 1, 0])


@pytest.fixture
def quad() -> BufferGeometry:
    """Indexed unit square with normals and uvs."""
    return BufferGeometry(
        position=QUAD_POSITIONS,
        normal=[0, 0, 1] * 4,
        uv=[0, 0, 1, 0, 1, 1, 0, 1],
        index=QUAD_INDEX,
    )


def make_mesh_node(name: str, translation=(0, 0, 0), textured: bool = False) -> SceneNode:
    """Mesh node with its own triangle geometry and material."""
    geometry = BufferGeometry(position=[0, 0, 0, 1, 0, 0, 0, 1, 0], name=name)
    textures = {}
    if textured:
        textures = {
            "map": Texture.from_color((2, 2), (255, 0, 0), name=f"{name}_map"),
            "normal_map": Texture.from_color((2, 2), (128, 128, 255), name=f"{name}_nrm"),
        }
    material = Material(name=name, **textures)
    node = SceneNode(name, mesh=Mesh(geometry, material))
    node.transform.translation = np.array(translation, dtype=np.float64)
    return node


@pytest.fixture
def make_mesh():
    """Factory for mesh nodes, see make_mesh_node."""
    return make_mesh_node
