"""Geometry accessor, scene graph and numeric utility functions."""

from .buffer_geometry import (
    get_face_area,
    get_face_normal,
    get_face_point_indices,
    get_face_points,
    get_indices_array,
    get_normal_array,
    get_number_of_faces,
    get_number_of_vertices,
    get_point,
    get_position_array,
    get_surface_area,
    get_uv_array,
    is_buffer_geometry,
)
from .numeric import round_to_decimals, round_vector
from .object3d import (
    delete_mesh_with_data,
    delete_object_with_data,
    get_all_meshes,
    get_bounding_box,
    get_class_instance_objects,
    is_mesh,
    is_object,
    ungroup_all_meshes,
)

__all__ = [
    "get_face_area",
    "get_face_normal",
    "get_face_point_indices",
    "get_face_points",
    "get_indices_array",
    "get_normal_array",
    "get_number_of_faces",
    "get_number_of_vertices",
    "get_point",
    "get_position_array",
    "get_surface_area",
    "get_uv_array",
    "is_buffer_geometry",
    "round_to_decimals",
    "round_vector",
    "delete_mesh_with_data",
    "delete_object_with_data",
    "get_all_meshes",
    "get_bounding_box",
    "get_class_instance_objects",
    "is_mesh",
    "is_object",
    "ungroup_all_meshes",
]
