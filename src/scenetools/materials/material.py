"""Material and texture resources."""

from __future__ import annotations

from typing import Any

import numpy as np
from PIL import Image

from ..core.resource import Resource

# Texture slots a material may populate, in disposal order
TEXTURE_SLOTS = (
    "map",
    "ao_map",
    "emissive_map",
    "bump_map",
    "normal_map",
    "displacement_map",
    "roughness_map",
    "metalness_map",
    "alpha_map",
)


class Texture(Resource):
    """An image uploaded for sampling by a material.

    Disposing the texture closes the underlying Pillow image.
    """

    def __init__(self, image: Image.Image, name: str = "") -> None:
        super().__init__(name)
        self.image: Image.Image | None = image

    @classmethod
    def from_color(
        cls,
        size: tuple[int, int],
        color: tuple[int, int, int],
        name: str = "",
    ) -> Texture:
        """Create a texture filled with a single RGB color."""
        return cls(Image.new("RGB", tuple(size), tuple(color)), name=name)

    @property
    def size(self) -> tuple[int, int]:
        self._check_alive()
        return self.image.size

    def to_array(self) -> np.ndarray:
        """Get the image as a HxWxC uint8 array."""
        self._check_alive()
        return np.array(self.image)

    def _free(self) -> None:
        if self.image is not None:
            self.image.close()
        self.image = None


class _TextureSlot:
    """Descriptor that keeps texture reference counts in step with a slot."""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, material: Material | None, owner: type) -> Any:
        if material is None:
            return self
        return material._textures.get(self.name)

    def __set__(self, material: Material, texture: Texture | None) -> None:
        material._set_texture(self.name, texture)


class Material(Resource):
    """Surface appearance: PBR parameters plus texture slots.

    Attributes:
        roughness: Surface roughness (0=smooth/shiny, 1=rough/matte)
        metallic: Metalness (0=dielectric/non-metal, 1=metal)
        normal_strength: Normal map intensity multiplier
        ao_strength: Ambient occlusion strength multiplier
        tint: Optional color tint multiplier (R, G, B) normalized 0-1

    Assigning a texture to a slot acquires it and releases whatever the slot
    held before. Disposing the material releases every populated slot, so a
    texture shared with another material stays alive.
    """

    map = _TextureSlot()
    ao_map = _TextureSlot()
    emissive_map = _TextureSlot()
    bump_map = _TextureSlot()
    normal_map = _TextureSlot()
    displacement_map = _TextureSlot()
    roughness_map = _TextureSlot()
    metalness_map = _TextureSlot()
    alpha_map = _TextureSlot()

    def __init__(
        self,
        name: str = "",
        roughness: float = 0.5,
        metallic: float = 0.0,
        normal_strength: float = 1.0,
        ao_strength: float = 1.0,
        tint: tuple[float, float, float] | None = None,
        **textures: Texture,
    ) -> None:
        super().__init__(name)
        self.roughness = roughness
        self.metallic = metallic
        self.normal_strength = normal_strength
        self.ao_strength = ao_strength
        self.tint = tint
        self._textures: dict[str, Texture] = {}

        for slot, texture in textures.items():
            if slot not in TEXTURE_SLOTS:
                raise ValueError(f"Unknown texture slot: {slot}")
            self._set_texture(slot, texture)

    def textures(self) -> dict[str, Texture]:
        """Populated texture slots, in slot order."""
        return {
            slot: self._textures[slot]
            for slot in TEXTURE_SLOTS
            if slot in self._textures
        }

    def _set_texture(self, slot: str, texture: Texture | None) -> None:
        self._check_alive()
        previous = self._textures.pop(slot, None)
        if texture is not None:
            self._textures[slot] = texture.acquire()
        if previous is not None and not previous.disposed:
            previous.release()

    def _free(self) -> None:
        for slot in TEXTURE_SLOTS:
            texture = self._textures.pop(slot, None)
            if texture is not None and not texture.disposed:
                texture.release()
