"""Axis-aligned bounding boxes."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .geometry import transform_points


@dataclass
class BoundingBox:
    """Axis-aligned box given by its min and max corners.

    An empty box has min = +inf and max = -inf, so expanding it by any point
    yields a box around that point.
    """

    min: NDArray[np.float64] = field(
        default_factory=lambda: np.full(3, np.inf, dtype=np.float64)
    )
    max: NDArray[np.float64] = field(
        default_factory=lambda: np.full(3, -np.inf, dtype=np.float64)
    )

    def __post_init__(self) -> None:
        self.min = np.asarray(self.min, dtype=np.float64)
        self.max = np.asarray(self.max, dtype=np.float64)

    @classmethod
    def empty(cls) -> BoundingBox:
        return cls()

    @classmethod
    def from_points(cls, points: ArrayLike) -> BoundingBox:
        return cls().expand_by_points(points)

    @property
    def is_empty(self) -> bool:
        return bool(np.any(self.max < self.min))

    def expand_by_points(self, points: ArrayLike) -> BoundingBox:
        """Grow the box in place to enclose an Nx3 array of points."""
        points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        if len(points):
            self.min = np.minimum(self.min, points.min(axis=0))
            self.max = np.maximum(self.max, points.max(axis=0))
        return self

    def union(self, other: BoundingBox) -> BoundingBox:
        """Grow the box in place to enclose another box."""
        self.min = np.minimum(self.min, other.min)
        self.max = np.maximum(self.max, other.max)
        return self

    def corners(self) -> NDArray[np.float64]:
        """The 8 corner points as an 8x3 array."""
        lo, hi = self.min, self.max
        return np.array([
            [x, y, z]
            for x in (lo[0], hi[0])
            for y in (lo[1], hi[1])
            for z in (lo[2], hi[2])
        ], dtype=np.float64)

    def apply_matrix4(self, matrix: NDArray[np.float64]) -> BoundingBox:
        """Return the axis-aligned box enclosing this box after transformation."""
        if self.is_empty:
            return BoundingBox()
        return BoundingBox.from_points(transform_points(self.corners(), matrix))

    @property
    def center(self) -> NDArray[np.float64]:
        return (self.min + self.max) / 2

    @property
    def size(self) -> NDArray[np.float64]:
        if self.is_empty:
            return np.zeros(3, dtype=np.float64)
        return self.max - self.min

    def copy(self) -> BoundingBox:
        return BoundingBox(self.min.copy(), self.max.copy())
