"""Tests for face and vertex addressing on buffer geometry."""

import numpy as np
import pytest

from scenetools.core import BufferGeometry
from scenetools.errors import (
    IndexOutOfRangeError,
    MalformedGeometryError,
    MissingAttribute,
    MissingAttributeError,
    NotBufferGeometryError,
    ResourceDisposedError,
)
from scenetools.utils import buffer_geometry as bg

ACCESSORS = [
    bg.get_position_array,
    bg.get_normal_array,
    bg.get_uv_array,
    bg.get_indices_array,
    bg.get_number_of_vertices,
    bg.get_number_of_faces,
]


@pytest.mark.parametrize("accessor", ACCESSORS)
@pytest.mark.parametrize("bad_input", [None, [0, 0, 0], "geometry", object()])
def test_accessors_reject_non_geometry(accessor, bad_input):
    with pytest.raises(NotBufferGeometryError):
        accessor(bad_input)


def test_is_buffer_geometry(triangle):
    assert bg.is_buffer_geometry(triangle)
    assert not bg.is_buffer_geometry(None)
    assert not bg.is_buffer_geometry({"position": []})


def test_attribute_arrays(quad):
    assert len(bg.get_position_array(quad)) == 12
    assert len(bg.get_normal_array(quad)) == 12
    assert len(bg.get_uv_array(quad)) == 8
    assert list(bg.get_indices_array(quad)) == [0, 1, 2, 0, 2, 3]


@pytest.mark.parametrize("accessor,kind", [
    (bg.get_normal_array, MissingAttribute.NO_NORMAL),
    (bg.get_uv_array, MissingAttribute.NO_UV),
    (bg.get_indices_array, MissingAttribute.NO_INDEX),
])
def test_missing_attributes(triangle, accessor, kind):
    with pytest.raises(MissingAttributeError) as excinfo:
        accessor(triangle)
    assert excinfo.value.kind is kind


@pytest.mark.parametrize("k", [0, 1, 2, 5])
def test_non_indexed_counts(k):
    geometry = BufferGeometry(position=np.arange(9 * k, dtype=np.float64))
    assert bg.get_number_of_faces(geometry) == k
    assert bg.get_number_of_vertices(geometry) == 3 * k


def test_indexed_face_count_ignores_position_length():
    geometry = BufferGeometry(position=np.zeros(3 * 7), index=[0, 1, 2, 2, 3, 4, 4, 5, 6, 6, 0, 1])
    assert bg.get_number_of_faces(geometry) == 4
    assert bg.get_number_of_vertices(geometry) == 7


def test_non_indexed_partial_triangle_is_malformed():
    geometry = BufferGeometry(position=np.zeros(12))
    with pytest.raises(MalformedGeometryError):
        bg.get_number_of_faces(geometry)


def test_index_length_not_multiple_of_three_is_malformed():
    geometry = BufferGeometry(position=np.zeros(9), index=[0, 1])
    with pytest.raises(MalformedGeometryError):
        bg.get_number_of_faces(geometry)


def test_get_point(quad):
    np.testing.assert_array_equal(bg.get_point(quad, 2), [1, 1, 0])
    np.testing.assert_array_equal(bg.get_point(quad, 3), [0, 1, 0])


@pytest.mark.parametrize("index", [-1, 4])
def test_get_point_out_of_range(quad, index):
    with pytest.raises(IndexOutOfRangeError):
        bg.get_point(quad, index)


def test_get_point_returns_copy(quad):
    point = bg.get_point(quad, 1)
    point[0] = 99.0
    assert bg.get_point(quad, 1)[0] == 1.0


def test_face_point_indices_non_indexed():
    geometry = BufferGeometry(position=np.zeros(18))
    assert bg.get_face_point_indices(geometry, 0) == (0, 1, 2)
    assert bg.get_face_point_indices(geometry, 1) == (3, 4, 5)


def test_face_point_indices_indexed(quad):
    assert bg.get_face_point_indices(quad, 0) == (0, 1, 2)
    assert bg.get_face_point_indices(quad, 1) == (0, 2, 3)
    assert all(isinstance(i, int) for i in bg.get_face_point_indices(quad, 1))


@pytest.mark.parametrize("face_index", [-1, 2])
def test_face_point_indices_out_of_range(quad, face_index):
    with pytest.raises(IndexOutOfRangeError):
        bg.get_face_point_indices(quad, face_index)


@pytest.mark.parametrize("indexed", [True, False])
def test_face_points_match_position_array(indexed):
    rng = np.random.default_rng(7)
    if indexed:
        geometry = BufferGeometry(position=rng.random(30), index=[9, 0, 4, 1, 8, 2, 3, 3, 7])
    else:
        geometry = BufferGeometry(position=rng.random(27))
    positions = bg.get_position_array(geometry)

    for face in range(bg.get_number_of_faces(geometry)):
        indices = bg.get_face_point_indices(geometry, face)
        points = bg.get_face_points(geometry, face)
        for vertex, point in zip(indices, points):
            np.testing.assert_array_equal(point, positions[vertex * 3:vertex * 3 + 3])


def test_face_points_preserve_winding(quad):
    a, b, c = bg.get_face_points(quad, 1)
    np.testing.assert_array_equal(a, [0, 0, 0])
    np.testing.assert_array_equal(b, [1, 1, 0])
    np.testing.assert_array_equal(c, [0, 1, 0])


def test_face_normal_follows_winding(quad):
    np.testing.assert_allclose(bg.get_face_normal(quad, 0), [0, 0, 1])
    flipped = BufferGeometry(position=[0, 0, 0, 0, 1, 0, 1, 0, 0])
    np.testing.assert_allclose(bg.get_face_normal(flipped, 0), [0, 0, -1])


def test_surface_area_unit_right_triangle(triangle):
    assert bg.get_surface_area(triangle) == pytest.approx(0.5)
    assert bg.get_face_area(triangle, 0) == pytest.approx(0.5)


def test_surface_area_indexed_quad(quad):
    assert bg.get_surface_area(quad) == pytest.approx(1.0)


def test_surface_area_matches_trimesh(quad):
    assert bg.get_surface_area(quad) == pytest.approx(quad.to_trimesh().area)


def test_surface_area_empty_geometry():
    geometry = BufferGeometry()
    assert bg.get_number_of_faces(geometry) == 0
    assert bg.get_number_of_vertices(geometry) == 0
    assert bg.get_surface_area(geometry) == 0.0


def test_surface_area_degenerate_triangle():
    geometry = BufferGeometry(position=[0, 0, 0, 1, 1, 1, 2, 2, 2])
    assert bg.get_surface_area(geometry) == 0.0


@pytest.mark.parametrize("bad_input", [None, "geometry", 42])
def test_surface_area_unknown_for_non_geometry(bad_input):
    assert bg.get_surface_area(bad_input) is None


def test_surface_area_unknown_for_malformed_geometry():
    assert bg.get_surface_area(BufferGeometry(position=np.zeros(12))) is None
    assert bg.get_surface_area(BufferGeometry(position=np.zeros(9), index=[0, 1, 5])) is None


def test_disposed_geometry_is_rejected(triangle):
    triangle.dispose()
    with pytest.raises(ResourceDisposedError):
        bg.get_position_array(triangle)
    assert bg.get_surface_area(triangle) is None


def test_trimesh_round_trip_keeps_faces(quad):
    geometry = BufferGeometry.from_trimesh(quad.to_trimesh())
    assert bg.get_number_of_faces(geometry) == 2
    assert bg.get_surface_area(geometry) == pytest.approx(1.0)


def test_non_indexed_to_trimesh(triangle):
    mesh = triangle.to_trimesh()
    assert mesh.faces.tolist() == [[0, 1, 2]]


def test_apply_matrix4_transforms_positions_and_normals(quad):
    matrix = np.eye(4)
    matrix[:3, 3] = [5, 0, 0]
    matrix[:3, :3] = np.diag([2.0, 1.0, 1.0])
    quad.apply_matrix4(matrix)
    np.testing.assert_allclose(bg.get_point(quad, 1), [7, 0, 0])
    np.testing.assert_allclose(bg.get_normal_array(quad)[:3], [0, 0, 1])


def test_clone_is_independent(quad):
    copy = quad.clone()
    copy.get_attribute("position").array[0] = 42.0
    assert bg.get_point(quad, 0)[0] == 0.0
    assert copy.ref_count == 0
