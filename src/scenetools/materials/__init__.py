"""Materials and the textures they reference."""

from .material import TEXTURE_SLOTS, Material, Texture

__all__ = ["TEXTURE_SLOTS", "Material", "Texture"]
