"""Buffer-backed geometry: flat attribute arrays plus an optional index."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .geometry import is_singular, transform_normals, transform_points
from .resource import Resource

if TYPE_CHECKING:
    import trimesh

logger = logging.getLogger(__name__)


class BufferAttribute:
    """A flat numeric array interpreted as items of ``item_size`` components.

    A position attribute holding two vertices is stored as
    ``[x0, y0, z0, x1, y1, z1]`` with ``item_size=3`` and ``count=2``.
    """

    def __init__(self, array: ArrayLike, item_size: int, dtype=np.float64) -> None:
        self.array = np.asarray(array, dtype=dtype).reshape(-1)
        self.item_size = item_size
        if len(self.array) % item_size != 0:
            raise ValueError(
                f"Attribute length {len(self.array)} is not a multiple of "
                f"item size {item_size}"
            )

    @property
    def count(self) -> int:
        """Number of items (vertices, for a position attribute)."""
        return len(self.array) // self.item_size

    def items(self) -> NDArray:
        """View of the array as a (count, item_size) matrix."""
        return self.array.reshape(-1, self.item_size)

    def copy(self) -> BufferAttribute:
        return BufferAttribute(self.array.copy(), self.item_size, self.array.dtype)

    def __len__(self) -> int:
        return len(self.array)

    def __repr__(self) -> str:
        return f"BufferAttribute(count={self.count}, item_size={self.item_size})"


class BufferGeometry(Resource):
    """Mesh surface description as named attribute streams.

    Standard attributes are ``position`` (3 components), ``normal``
    (3 components) and ``uv`` (2 components). Without an index, vertices are
    laid out as consecutive triangles; with an index, every three index
    entries name the vertices of one triangle.

    Example:
        geometry = BufferGeometry(
            position=[0, 0, 0, 1, 0, 0, 0, 1, 0],
            index=[0, 1, 2],
        )
    """

    def __init__(
        self,
        position: ArrayLike | None = None,
        normal: ArrayLike | None = None,
        uv: ArrayLike | None = None,
        index: ArrayLike | None = None,
        name: str = "",
    ) -> None:
        super().__init__(name)
        self.attributes: dict[str, BufferAttribute] = {}
        self.index: BufferAttribute | None = None

        self.set_attribute("position", BufferAttribute(
            position if position is not None else [], 3
        ))
        if normal is not None:
            self.set_attribute("normal", BufferAttribute(normal, 3))
        if uv is not None:
            self.set_attribute("uv", BufferAttribute(uv, 2))
        if index is not None:
            self.set_index(index)

    def get_attribute(self, name: str) -> BufferAttribute | None:
        return self.attributes.get(name)

    def set_attribute(self, name: str, attribute: BufferAttribute) -> BufferGeometry:
        self._check_alive()
        self.attributes[name] = attribute
        return self

    def get_index(self) -> BufferAttribute | None:
        return self.index

    def set_index(self, index: ArrayLike | BufferAttribute | None) -> BufferGeometry:
        """Set or clear the index stream."""
        self._check_alive()
        if index is None or isinstance(index, BufferAttribute):
            self.index = index
        else:
            self.index = BufferAttribute(index, 1, dtype=np.uint32)
        return self

    def apply_matrix4(self, matrix: NDArray[np.float64]) -> BufferGeometry:
        """Transform vertex data in place by a 4x4 matrix.

        Positions are transformed directly; normals use the inverse transpose
        of the upper 3x3 and are renormalized. If that 3x3 is singular (a zero
        scale axis) the normals have no meaningful image and are left unchanged.

        Returns:
            The geometry itself (for chaining)
        """
        self._check_alive()
        position = self.attributes["position"]
        position.array = transform_points(position.array, matrix).reshape(-1)

        normal = self.attributes.get("normal")
        if normal is not None:
            if is_singular(matrix[:3, :3]):
                logger.warning(
                    "Singular matrix applied to '%s'; normals left unchanged", self.name
                )
            else:
                normal.array = transform_normals(normal.array, matrix).reshape(-1)
        return self

    def clone(self) -> BufferGeometry:
        """Deep copy of the attribute data, with no owners."""
        self._check_alive()
        copy = BufferGeometry(name=self.name)
        for name, attribute in self.attributes.items():
            copy.attributes[name] = attribute.copy()
        copy.index = self.index.copy() if self.index is not None else None
        return copy

    def _free(self) -> None:
        self.attributes.clear()
        self.index = None

    def to_trimesh(self) -> trimesh.Trimesh:
        """Convert to a trimesh.Trimesh for export or analysis.

        Non-indexed geometry gets a sequential face array.
        """
        import trimesh as tm

        self._check_alive()
        vertices = self.attributes["position"].items()
        if self.index is not None:
            faces = self.index.array.reshape(-1, 3).astype(np.int64)
        else:
            faces = np.arange(len(vertices), dtype=np.int64).reshape(-1, 3)

        mesh = tm.Trimesh(
            vertices=vertices,
            faces=faces,
            process=False,  # Don't modify our geometry
        )
        normal = self.attributes.get("normal")
        if normal is not None:
            mesh.vertex_normals = normal.items()
        return mesh

    @classmethod
    def from_trimesh(cls, mesh: trimesh.Trimesh, name: str = "") -> BufferGeometry:
        """Create an indexed BufferGeometry from a trimesh.Trimesh."""
        return cls(
            position=np.array(mesh.vertices),
            normal=np.array(mesh.vertex_normals) if len(mesh.vertices) else None,
            index=np.array(mesh.faces),
            name=name,
        )
