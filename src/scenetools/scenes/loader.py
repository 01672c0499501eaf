"""YAML loader for scene descriptions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from ..core.buffer_geometry import BufferGeometry
from ..core.mesh import Mesh
from ..core.node import Group, SceneNode
from ..core.transform import Transform
from ..materials.material import TEXTURE_SLOTS, Material, Texture

logger = logging.getLogger(__name__)


class SceneLoader:
    """Builds a SceneNode hierarchy from a YAML description.

    YAML format:
    ```yaml
    name: street
    textures:
      wood: {size: [4, 4], color: [200, 150, 100]}
    materials:
      oak: {roughness: 0.7, map: wood}
    geometries:
      tri: {position: [0,0,0, 1,0,0, 0,1,0], index: [0, 1, 2]}
    nodes:
      - name: group
        translation: [2, 0, 0]
        rotation: [0, 90, 0]   # degrees, XYZ order
        children:
          - {name: m, geometry: tri, material: oak, translation: [1, 0, 0]}
    ```

    Textures, materials and geometries are created once and shared by every
    node that names them. Geometry may also be given inline as a mapping.
    Nodes without geometry are created as Group nodes. Declared resources
    that no node ends up using are disposed once the scene is built.
    """

    def load(self, path: str | Path) -> SceneNode:
        """Load a scene from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the description references unknown resources
        """
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f)

        return self._build_scene(data or {})

    def load_string(self, yaml_string: str) -> SceneNode:
        """Load a scene from a YAML string."""
        data = yaml.safe_load(yaml_string)
        return self._build_scene(data or {})

    def _build_scene(self, data: dict[str, Any]) -> SceneNode:
        textures = {
            name: self._parse_texture(name, entry)
            for name, entry in data.get("textures", {}).items()
        }
        materials = {
            name: self._parse_material(name, entry, textures)
            for name, entry in data.get("materials", {}).items()
        }
        geometries = {
            name: self._parse_geometry(name, entry)
            for name, entry in data.get("geometries", {}).items()
        }

        root = Group(data.get("name", "root"))
        for node_data in data.get("nodes", []):
            root.add_child(self._parse_node(node_data, materials, geometries))

        # Materials go first: disposing one releases its textures.
        for kind, resources in (
            ("material", materials),
            ("geometry", geometries),
            ("texture", textures),
        ):
            for name, resource in resources.items():
                if resource.ref_count == 0 and not resource.disposed:
                    logger.debug("Disposing unused %s '%s'", kind, name)
                    resource.dispose()
        return root

    def _parse_texture(self, name: str, data: dict[str, Any]) -> Texture:
        size = tuple(data.get("size", [1, 1]))
        color = tuple(data.get("color", [255, 255, 255]))
        return Texture.from_color(size, color, name=name)

    def _parse_material(
        self, name: str, data: dict[str, Any], textures: dict[str, Texture]
    ) -> Material:
        slots = {}
        for slot in TEXTURE_SLOTS:
            texture_name = data.get(slot)
            if texture_name is None:
                continue
            if texture_name not in textures:
                raise ValueError(
                    f"Material '{name}' references unknown texture '{texture_name}'"
                )
            slots[slot] = textures[texture_name]

        tint = data.get("tint")
        return Material(
            name=name,
            roughness=data.get("roughness", 0.5),
            metallic=data.get("metallic", 0.0),
            normal_strength=data.get("normal_strength", 1.0),
            ao_strength=data.get("ao_strength", 1.0),
            tint=tuple(tint) if tint is not None else None,
            **slots,
        )

    def _parse_geometry(self, name: str, data: dict[str, Any]) -> BufferGeometry:
        return BufferGeometry(
            position=data.get("position", []),
            normal=data.get("normal"),
            uv=data.get("uv"),
            index=data.get("index"),
            name=name,
        )

    def _parse_node(
        self,
        data: dict[str, Any],
        materials: dict[str, Material],
        geometries: dict[str, BufferGeometry],
    ) -> SceneNode:
        name = data.get("name", "node")
        transform = Transform(
            translation=data.get("translation", [0, 0, 0]),
            rotation=np.radians(np.array(data.get("rotation", [0, 0, 0]), dtype=np.float64)),
            scale=data.get("scale", [1, 1, 1]),
        )

        geometry_ref = data.get("geometry")
        if geometry_ref is None:
            node = Group(name, transform=transform)
        else:
            if isinstance(geometry_ref, dict):
                geometry = self._parse_geometry(name, geometry_ref)
            elif geometry_ref in geometries:
                geometry = geometries[geometry_ref]
            else:
                raise ValueError(f"Node '{name}' references unknown geometry '{geometry_ref}'")

            material = None
            material_name = data.get("material")
            if material_name is not None:
                if material_name not in materials:
                    raise ValueError(
                        f"Node '{name}' references unknown material '{material_name}'"
                    )
                material = materials[material_name]
            node = SceneNode(name, transform=transform, mesh=Mesh(geometry, material))

        for child_data in data.get("children", []):
            node.add_child(self._parse_node(child_data, materials, geometries))
        return node
