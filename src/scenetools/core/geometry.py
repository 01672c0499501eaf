"""Triangle and point-set math shared by the geometry utilities.

Winding convention:

- Counter-clockwise winding (when viewed from outside) = outward normal
- For triangle (A, B, C), normal direction is (B-A) × (C-A)
"""

import numpy as np
from numpy.typing import NDArray


def compute_triangle_normal(
    v0: NDArray[np.float64],
    v1: NDArray[np.float64],
    v2: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Compute the normal vector for a triangle.

    Uses the cross product (v1-v0) × (v2-v0) to determine normal direction.

    Args:
        v0, v1, v2: The three vertices of the triangle

    Returns:
        Normalized normal vector (unit length)
    """
    normal = np.cross(v1 - v0, v2 - v0)
    length = np.linalg.norm(normal)
    if length > 1e-10:
        return normal / length
    return np.array([0.0, 1.0, 0.0])  # Degenerate triangle fallback


def triangle_area(
    v0: NDArray[np.float64],
    v1: NDArray[np.float64],
    v2: NDArray[np.float64],
) -> float:
    """Area of a triangle: half the magnitude of (v1-v0) × (v2-v0).

    Collinear points give 0.0.
    """
    return float(np.linalg.norm(np.cross(v1 - v0, v2 - v0)) / 2.0)


def transform_points(
    points: NDArray[np.float64],
    matrix: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Apply a 4x4 matrix to an Nx3 array of points (homogeneous w=1)."""
    points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    ones = np.ones((len(points), 1))
    homogeneous = np.hstack([points, ones])
    transformed = (matrix @ homogeneous.T).T
    return transformed[:, :3]


def invert_matrix(matrix: NDArray[np.float64]) -> NDArray[np.float64]:
    """Inverse of a square matrix, or a zero matrix if it is singular.

    A transform with a zero scale axis has no inverse; like three.js'
    ``Matrix4.invert`` this returns all zeros instead of raising.
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    if is_singular(matrix):
        return np.zeros_like(matrix)
    return np.linalg.inv(matrix)


def is_singular(matrix: NDArray[np.float64], rtol: float = 1e-12) -> bool:
    """True if the smallest singular value is negligible next to the largest."""
    singular_values = np.linalg.svd(np.asarray(matrix, dtype=np.float64), compute_uv=False)
    return bool(singular_values[-1] <= singular_values[0] * rtol)


def transform_normals(
    normals: NDArray[np.float64],
    matrix: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Transform Nx3 normals by the inverse transpose of the upper 3x3.

    Results are renormalized; zero-length normals stay zero. A singular
    upper 3x3 maps every normal to zero.
    """
    normals = np.asarray(normals, dtype=np.float64).reshape(-1, 3)
    normal_matrix = invert_matrix(matrix[:3, :3]).T
    result = (normal_matrix @ normals.T).T
    norms = np.linalg.norm(result, axis=1, keepdims=True)
    return np.divide(result, norms, where=norms != 0, out=result)
