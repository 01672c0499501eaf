"""Local transform of a scene node."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Self

import numpy as np
from numpy.typing import NDArray


def _rotation_matrix(rotation: NDArray[np.float64]) -> NDArray[np.float64]:
    """3x3 rotation for XYZ Euler angles (applied X, then Y, then Z)."""
    rx, ry, rz = rotation
    cos_x, sin_x = np.cos(rx), np.sin(rx)
    cos_y, sin_y = np.cos(ry), np.sin(ry)
    cos_z, sin_z = np.cos(rz), np.sin(rz)

    rot_x = np.array([[1, 0, 0], [0, cos_x, -sin_x], [0, sin_x, cos_x]])
    rot_y = np.array([[cos_y, 0, sin_y], [0, 1, 0], [-sin_y, 0, cos_y]])
    rot_z = np.array([[cos_z, -sin_z, 0], [sin_z, cos_z, 0], [0, 0, 1]])
    return rot_z @ rot_y @ rot_x


@dataclass
class Transform:
    """Translation, rotation and scale of a node relative to its parent.

    Rotation is stored as Euler angles (XYZ order) in radians.
    """

    translation: NDArray[np.float64] = field(
        default_factory=lambda: np.zeros(3, dtype=np.float64)
    )
    rotation: NDArray[np.float64] = field(
        default_factory=lambda: np.zeros(3, dtype=np.float64)
    )
    scale: NDArray[np.float64] = field(
        default_factory=lambda: np.ones(3, dtype=np.float64)
    )

    def __post_init__(self) -> None:
        self.translation = np.asarray(self.translation, dtype=np.float64)
        self.rotation = np.asarray(self.rotation, dtype=np.float64)
        self.scale = np.asarray(self.scale, dtype=np.float64)

    def to_matrix(self) -> NDArray[np.float64]:
        """Convert to a 4x4 transformation matrix.

        Order: Scale -> Rotate -> Translate
        """
        matrix = np.eye(4, dtype=np.float64)
        matrix[:3, :3] = _rotation_matrix(self.rotation) @ np.diag(self.scale)
        matrix[:3, 3] = self.translation
        return matrix

    @classmethod
    def from_matrix(cls, matrix: NDArray[np.float64]) -> Self:
        """Create Transform from a 4x4 transformation matrix.

        Note: Shear cannot be represented. A matrix built from a rotated
        parent with non-uniform scale loses its shear component.
        """
        translation = matrix[:3, 3].copy()

        # Scale is the length of each basis vector
        scale = np.linalg.norm(matrix[:3, :3], axis=0)
        if np.linalg.det(matrix[:3, :3]) < 0:
            scale[0] = -scale[0]

        rot = matrix[:3, :3].copy()
        for axis in range(3):
            if scale[axis] != 0:
                rot[:, axis] /= scale[axis]

        if abs(rot[2, 0]) < 0.9999:
            ry = np.arcsin(-rot[2, 0])
            rx = np.arctan2(rot[2, 1], rot[2, 2])
            rz = np.arctan2(rot[1, 0], rot[0, 0])
        else:
            # Gimbal lock
            rz = 0.0
            if rot[2, 0] < 0:
                ry = np.pi / 2
                rx = np.arctan2(rot[0, 1], rot[0, 2])
            else:
                ry = -np.pi / 2
                rx = np.arctan2(-rot[0, 1], -rot[0, 2])

        return cls(
            translation=translation,
            rotation=np.array([rx, ry, rz], dtype=np.float64),
            scale=scale,
        )

    def copy(self) -> Self:
        """Create a deep copy of this transform."""
        return Transform(
            translation=self.translation.copy(),
            rotation=self.rotation.copy(),
            scale=self.scale.copy(),
        )

    @staticmethod
    def identity() -> Transform:
        """Create an identity transform."""
        return Transform()

    def is_identity(self, atol: float = 1e-12) -> bool:
        return bool(np.allclose(self.to_matrix(), np.eye(4), atol=atol))

    def has_uniform_scale(self, atol: float = 1e-9) -> bool:
        return bool(np.allclose(np.abs(self.scale), abs(self.scale[0]), atol=atol))
