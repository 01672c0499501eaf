"""Read access to the vertex and face data of a BufferGeometry.

Faces are addressed the same way whether or not the geometry has an index
stream:

- Indexed: face ``f`` is ``index[3f], index[3f+1], index[3f+2]``
- Non-indexed: face ``f`` is vertices ``3f, 3f+1, 3f+2``

Every function validates its geometry argument first and raises
NotBufferGeometryError for anything else. get_surface_area is the exception:
it returns None for input it cannot measure.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from ..core.buffer_geometry import BufferGeometry
from ..core.geometry import compute_triangle_normal, triangle_area
from ..errors import (
    IndexOutOfRangeError,
    MalformedGeometryError,
    MissingAttribute,
    MissingAttributeError,
    NotBufferGeometryError,
    ResourceDisposedError,
    SceneToolsError,
)

logger = logging.getLogger(__name__)

FacePoints = tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]


def is_buffer_geometry(geometry: object) -> bool:
    """True if geometry is a BufferGeometry. Never raises."""
    return isinstance(geometry, BufferGeometry)


def _require_geometry(geometry: object) -> BufferGeometry:
    if not is_buffer_geometry(geometry):
        raise NotBufferGeometryError(geometry)
    if geometry.disposed:
        raise ResourceDisposedError(f"{geometry} has already been disposed")
    return geometry


def get_position_array(geometry: BufferGeometry) -> NDArray[np.float64]:
    """Flat position array ``[x0, y0, z0, x1, ...]``."""
    geometry = _require_geometry(geometry)
    attribute = geometry.get_attribute("position")
    if attribute is None:
        raise MalformedGeometryError("Geometry has no position attribute")
    return attribute.array


def get_normal_array(geometry: BufferGeometry) -> NDArray[np.float64]:
    """Flat normal array.

    Raises:
        MissingAttributeError: kind NO_NORMAL if the geometry has no normals
    """
    geometry = _require_geometry(geometry)
    attribute = geometry.get_attribute("normal")
    if attribute is None:
        raise MissingAttributeError(MissingAttribute.NO_NORMAL)
    return attribute.array


def get_uv_array(geometry: BufferGeometry) -> NDArray[np.float64]:
    """Flat texture coordinate array ``[u0, v0, u1, v1, ...]``.

    Raises:
        MissingAttributeError: kind NO_UV if the geometry has no uvs
    """
    geometry = _require_geometry(geometry)
    attribute = geometry.get_attribute("uv")
    if attribute is None:
        raise MissingAttributeError(MissingAttribute.NO_UV)
    return attribute.array


def get_indices_array(geometry: BufferGeometry) -> NDArray[np.uint32]:
    """Flat index array, three entries per face.

    Raises:
        MissingAttributeError: kind NO_INDEX for non-indexed geometry
    """
    geometry = _require_geometry(geometry)
    index = geometry.get_index()
    if index is None:
        raise MissingAttributeError(MissingAttribute.NO_INDEX)
    return index.array


def get_number_of_vertices(geometry: BufferGeometry) -> int:
    return len(get_position_array(geometry)) // 3


def get_number_of_faces(geometry: BufferGeometry) -> int:
    """Number of triangles.

    ``len(index) / 3`` for indexed geometry, ``len(position) / 9`` otherwise.

    Raises:
        MalformedGeometryError: If the stream length does not describe whole
            triangles
    """
    geometry = _require_geometry(geometry)
    index = geometry.get_index()
    if index is not None:
        if len(index) % 3 != 0:
            raise MalformedGeometryError(
                f"Index length {len(index)} is not a multiple of 3"
            )
        return len(index) // 3

    positions = get_position_array(geometry)
    if len(positions) % 9 != 0:
        raise MalformedGeometryError(
            f"Non-indexed position length {len(positions)} is not a multiple of 9"
        )
    return len(positions) // 9


def get_point(geometry: BufferGeometry, index: int) -> NDArray[np.float64]:
    """Position of vertex ``index`` as a new 3-vector.

    Raises:
        IndexOutOfRangeError: If index < 0 or index >= vertex count
    """
    positions = get_position_array(geometry)
    count = len(positions) // 3
    index = int(index)
    if index < 0 or index >= count:
        raise IndexOutOfRangeError(index, count)
    return positions[index * 3:index * 3 + 3].astype(np.float64)


def get_face_point_indices(
    geometry: BufferGeometry, face_index: int
) -> tuple[int, int, int]:
    """Vertex indices of face ``face_index``, in stored winding order.

    Raises:
        IndexOutOfRangeError: If face_index is outside [0, face count)
    """
    face_count = get_number_of_faces(geometry)
    face_index = int(face_index)
    if face_index < 0 or face_index >= face_count:
        raise IndexOutOfRangeError(face_index, face_count)

    offset = face_index * 3
    index = geometry.get_index()
    if index is None:
        return offset, offset + 1, offset + 2
    array = index.array
    return int(array[offset]), int(array[offset + 1]), int(array[offset + 2])


def get_face_points(geometry: BufferGeometry, face_index: int) -> FacePoints:
    """The three corner points of a face, in stored winding order."""
    a, b, c = get_face_point_indices(geometry, face_index)
    return get_point(geometry, a), get_point(geometry, b), get_point(geometry, c)


def get_face_normal(geometry: BufferGeometry, face_index: int) -> NDArray[np.float64]:
    """Unit normal of a face from its winding, ``(B-A) × (C-A)``.

    Degenerate faces give ``(0, 1, 0)``.
    """
    return compute_triangle_normal(*get_face_points(geometry, face_index))


def get_face_area(geometry: BufferGeometry, face_index: int) -> float:
    return triangle_area(*get_face_points(geometry, face_index))


def _face_vertex_indices(geometry: BufferGeometry) -> NDArray[np.int64]:
    """All faces as an (F, 3) array of vertex indices, range-checked."""
    face_count = get_number_of_faces(geometry)
    vertex_count = get_number_of_vertices(geometry)
    index = geometry.get_index()
    if index is None:
        return np.arange(face_count * 3, dtype=np.int64).reshape(-1, 3)

    faces = index.array.astype(np.int64).reshape(-1, 3)
    if faces.size and faces.max() >= vertex_count:
        raise IndexOutOfRangeError(int(faces.max()), vertex_count)
    return faces


def get_surface_area(geometry: BufferGeometry) -> float | None:
    """Total area of all faces.

    Returns:
        The summed area (0.0 for geometry without faces), or None if the
        input is not a live, well-formed buffer geometry
    """
    try:
        faces = _face_vertex_indices(geometry)
        points = get_position_array(geometry).astype(np.float64).reshape(-1, 3)
    except SceneToolsError as e:
        logger.debug("Surface area unknown: %s", e)
        return None

    if len(faces) == 0:
        return 0.0
    v0, v1, v2 = points[faces[:, 0]], points[faces[:, 1]], points[faces[:, 2]]
    cross = np.cross(v1 - v0, v2 - v0)
    return float(np.linalg.norm(cross, axis=1).sum() / 2.0)
