"""Mesh role: the geometry and material a scene node renders."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .buffer_geometry import BufferGeometry

if TYPE_CHECKING:
    from ..materials.material import Material


class Mesh:
    """Pairs one geometry with one material.

    A Mesh owns a reference to each of its resources: assigning a geometry
    or material acquires it and releases the previous one. Several meshes
    may share a geometry or material; the resource is disposed when the
    last mesh releases it.
    """

    def __init__(
        self,
        geometry: BufferGeometry | None = None,
        material: Material | None = None,
    ) -> None:
        self._geometry: BufferGeometry | None = None
        self._material: Material | None = None
        self.geometry = geometry
        self.material = material

    @property
    def geometry(self) -> BufferGeometry | None:
        return self._geometry

    @geometry.setter
    def geometry(self, geometry: BufferGeometry | None) -> None:
        previous = self._geometry
        self._geometry = geometry.acquire() if geometry is not None else None
        # A force-disposed resource has no references left to release.
        if previous is not None and not previous.disposed:
            previous.release()

    @property
    def material(self) -> Material | None:
        return self._material

    @material.setter
    def material(self, material: Material | None) -> None:
        previous = self._material
        self._material = material.acquire() if material is not None else None
        if previous is not None and not previous.disposed:
            previous.release()

    @property
    def vertex_count(self) -> int:
        """Number of vertices in the geometry (0 without geometry)."""
        if self._geometry is None or self._geometry.disposed:
            return 0
        return self._geometry.attributes["position"].count

    def release(self) -> None:
        """Drop this mesh's references to its geometry and material."""
        self.geometry = None
        self.material = None

    def __repr__(self) -> str:
        return f"Mesh(geometry={self._geometry!r}, material={self._material!r})"
