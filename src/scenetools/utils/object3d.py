"""Structural and lifecycle operations on scene node subtrees.

Covers mesh enumeration, ungrouping with world placement preserved,
bounding boxes in world or parent space, and recursive disposal of the
geometries, materials and textures a subtree owns.

Deletion is reference counted: a resource shared with a node outside the
deleted subtree stays alive, and a resource shared only inside it is
disposed once, when its last referrer is deleted.
"""

from __future__ import annotations

import logging
from typing import Callable

from ..core.bounds import BoundingBox
from ..core.geometry import invert_matrix, transform_points
from ..core.node import SceneNode
from ..core.transform import Transform
from ..errors import NotObjectError

logger = logging.getLogger(__name__)

Selector = type[SceneNode] | Callable[[SceneNode], bool]


def is_object(node: object) -> bool:
    """True if node is a SceneNode. Never raises."""
    return isinstance(node, SceneNode)


def is_mesh(node: object) -> bool:
    """True if node is a SceneNode carrying a mesh role. Never raises."""
    return is_object(node) and node.mesh is not None


def get_class_instance_objects(node: SceneNode, selector: Selector) -> list[SceneNode]:
    """All nodes in the subtree (node included) matching selector.

    Args:
        node: Subtree root
        selector: A SceneNode subclass to match with isinstance, or a
            predicate called with each node

    Returns:
        Matching nodes in depth-first pre-order, or [] if node is not a
        scene node
    """
    if not is_object(node):
        return []
    if isinstance(selector, type):
        return [child for child in node.iter_nodes() if isinstance(child, selector)]
    return [child for child in node.iter_nodes() if selector(child)]


def get_all_meshes(node: SceneNode) -> list[SceneNode]:
    """All mesh nodes in the subtree (node included), pre-order."""
    return get_class_instance_objects(node, is_mesh)


def _bake_transform(mesh: SceneNode) -> None:
    """Fold a mesh's local transform into its geometry and reset it."""
    role = mesh.mesh
    if role.geometry is None or role.geometry.disposed:
        mesh.transform = Transform.identity()
        return

    if role.geometry.is_shared:
        logger.debug("Cloning shared geometry of '%s' before baking", mesh.name)
        role.geometry = role.geometry.clone()

    if not mesh.transform.has_uniform_scale() and "normal" in role.geometry.attributes:
        logger.warning(
            "Baking non-uniform scale %s into '%s'; normals may be distorted",
            mesh.transform.scale.tolist(),
            mesh.name,
        )
    role.geometry.apply_matrix4(mesh.transform.to_matrix())
    mesh.transform = Transform.identity()


def ungroup_all_meshes(
    node: SceneNode, remove_mesh_transformation: bool = False
) -> list[SceneNode]:
    """Move every mesh below node up to node's parent, then drop node.

    Each mesh keeps its world placement. If node has no parent, the meshes
    become parentless roots carrying their world transform.

    Args:
        node: Group to dissolve
        remove_mesh_transformation: Also fold each relocated mesh's transform
            into its geometry and reset the transform to identity. Positions
            are preserved exactly; normals are only correct for uniform scale.

    Returns:
        The relocated mesh nodes, in pre-order

    Raises:
        NotObjectError: If node is not a scene node
    """
    if not is_object(node):
        raise NotObjectError(node)

    meshes = [mesh for mesh in get_all_meshes(node) if mesh is not node]
    target = node.parent
    if target is None:
        logger.warning(
            "Ungrouping parentless node '%s'; its meshes become root nodes", node.name
        )
        anchor = SceneNode("ungroup_anchor")
        anchor.add_child(node)
        for mesh in meshes:
            anchor.attach(mesh)
        for mesh in meshes:
            anchor.remove_child(mesh)
        anchor.remove_child(node)
    else:
        for mesh in meshes:
            target.attach(mesh)
        target.remove_child(node)

    if remove_mesh_transformation:
        for mesh in meshes:
            _bake_transform(mesh)

    logger.debug("Ungrouped %d mesh(es) from '%s'", len(meshes), node.name)
    return meshes


def get_bounding_box(node: SceneNode, in_local_space: bool = False) -> BoundingBox:
    """Axis-aligned box around the geometry of node and its descendants.

    Args:
        node: Subtree root
        in_local_space: Express the box in the coordinate space of node's
            parent instead of world space. Ignored for parentless nodes.

    Returns:
        The enclosing box; empty if the subtree has no live geometry

    Raises:
        NotObjectError: If node is not a scene node
    """
    if not is_object(node):
        raise NotObjectError(node)

    box = BoundingBox.empty()
    for mesh in get_all_meshes(node):
        geometry = mesh.mesh.geometry
        if geometry is None or geometry.disposed:
            continue
        position = geometry.get_attribute("position")
        if position is None or position.count == 0:
            continue
        box.expand_by_points(transform_points(position.array, mesh.world_transform()))

    if in_local_space and node.parent is not None:
        box = box.apply_matrix4(invert_matrix(node.parent.world_transform()))
    return box


def delete_mesh_with_data(mesh: SceneNode) -> bool:
    """Release a mesh's geometry and material, then detach it.

    The material releases its populated texture slots when it is disposed.
    Resources still referenced elsewhere stay alive.

    Returns:
        True if the mesh was deleted, False (with a warning) if the input
        is not a mesh node
    """
    if not is_mesh(mesh):
        logger.warning("delete_mesh_with_data: not a mesh: %r", mesh)
        return False

    mesh.mesh.release()
    mesh.mesh = None
    mesh.remove_from_parent()
    return True


def delete_object_with_data(node: SceneNode) -> bool:
    """Recursively delete a subtree, bottom-up, releasing mesh data.

    Children are visited in reverse order from a snapshot of the child list,
    so removals during the walk are safe.

    Returns:
        True if the subtree was deleted, False (with a warning) if the input
        is not a scene node
    """
    if not is_object(node):
        logger.warning("delete_object_with_data: not a scene node: %r", node)
        return False

    for child in reversed(list(node.children)):
        delete_object_with_data(child)

    if is_mesh(node):
        return delete_mesh_with_data(node)
    node.remove_from_parent()
    return True
