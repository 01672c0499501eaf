"""SceneNode class for the scene hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator

import numpy as np
from numpy.typing import NDArray

from .geometry import invert_matrix
from .mesh import Mesh
from .transform import Transform


@dataclass(eq=False)
class SceneNode:
    """A node in the scene hierarchy.

    Each node has a local transform, an optional mesh role, and can have
    children. Child transforms are relative to their parent. Nodes compare
    by identity.

    Example:
        group = SceneNode("group")
        group.transform.translation = np.array([2.0, 0.0, 0.0])
        leg = group.add_child(SceneNode("leg", mesh=Mesh(geometry, material)))
    """

    name: str
    transform: Transform = field(default_factory=Transform)
    mesh: Mesh | None = None
    children: list[SceneNode] = field(default_factory=list)
    parent: SceneNode | None = field(default=None, repr=False)

    def add_child(self, node: SceneNode) -> SceneNode:
        """Add a child node, removing it from any previous parent.

        The child's local transform is kept, so its world placement follows
        the new parent. Use attach() to keep the world placement instead.

        Args:
            node: The node to add as a child

        Returns:
            The added node (for chaining)
        """
        ancestor: SceneNode | None = self
        while ancestor is not None:
            if ancestor is node:
                raise ValueError(
                    f"Cannot add node '{node.name}' below itself (under '{self.name}')"
                )
            ancestor = ancestor.parent
        if node.parent is not None:
            node.parent.remove_child(node)
        node.parent = self
        self.children.append(node)
        return node

    def remove_child(self, node: SceneNode) -> bool:
        """Remove a child node.

        Args:
            node: The node to remove

        Returns:
            True if the node was found and removed
        """
        if node in self.children:
            node.parent = None
            self.children.remove(node)
            return True
        return False

    def remove_from_parent(self) -> bool:
        """Detach this node from its parent, if any."""
        if self.parent is None:
            return False
        return self.parent.remove_child(self)

    def attach(self, node: SceneNode) -> SceneNode:
        """Reparent a node under this one, keeping its world placement.

        The node's local transform is recomputed as
        inverse(world(self)) @ world(node). A singular world matrix
        (zero scale axis) inverts to zeros, so the placement cannot be kept.

        Returns:
            The attached node (for chaining)
        """
        world = node.world_transform()
        local = invert_matrix(self.world_transform()) @ world
        self.add_child(node)
        node.transform = Transform.from_matrix(local)
        return node

    def world_transform(self) -> NDArray[np.float64]:
        """Compute the world transformation matrix.

        Traverses up the parent chain and combines transforms, so the result
        always reflects the current hierarchy.

        Returns:
            4x4 transformation matrix in world space
        """
        if self.parent is None:
            return self.transform.to_matrix()
        return self.parent.world_transform() @ self.transform.to_matrix()

    def world_position(self) -> NDArray[np.float64]:
        """Origin of this node in world space."""
        return self.world_transform()[:3, 3].copy()

    def iter_nodes(self, include_self: bool = True) -> Iterator[SceneNode]:
        """Iterate over this node and all descendants (depth-first, pre-order).

        Args:
            include_self: Whether to include this node in the iteration

        Yields:
            SceneNode instances
        """
        if include_self:
            yield self
        for child in self.children:
            yield from child.iter_nodes(include_self=True)

    def traverse(self, callback: Callable[[SceneNode], None]) -> None:
        """Call callback on this node and every descendant, pre-order."""
        for node in list(self.iter_nodes()):
            callback(node)

    def find(self, name: str) -> SceneNode | None:
        """Find a descendant node by name.

        Args:
            name: The name to search for

        Returns:
            The first matching node, or None
        """
        for node in self.iter_nodes():
            if node.name == name:
                return node
        return None

    def find_all(self, name: str) -> list[SceneNode]:
        """Find all descendant nodes with the given name."""
        return [node for node in self.iter_nodes() if node.name == name]

    @property
    def depth(self) -> int:
        """Get the depth of this node in the hierarchy (root = 0)."""
        if self.parent is None:
            return 0
        return self.parent.depth + 1

    @property
    def root(self) -> SceneNode:
        """Get the root node of this hierarchy."""
        if self.parent is None:
            return self
        return self.parent.root

    def copy(self, deep: bool = True) -> SceneNode:
        """Create a copy of this node.

        The copy's mesh role shares (and acquires) the same geometry and
        material.

        Args:
            deep: If True, recursively copy children

        Returns:
            New SceneNode with copied data
        """
        mesh = None
        if self.mesh is not None:
            mesh = Mesh(self.mesh.geometry, self.mesh.material)
        new_node = type(self)(
            name=self.name,
            transform=self.transform.copy(),
            mesh=mesh,
        )
        if deep:
            for child in self.children:
                new_node.add_child(child.copy(deep=True))
        return new_node

    def __repr__(self) -> str:
        mesh_str = f", mesh={self.mesh.vertex_count}v" if self.mesh else ""
        children_str = f", children={len(self.children)}" if self.children else ""
        return f"{type(self).__name__}({self.name!r}{mesh_str}{children_str})"


class Group(SceneNode):
    """A node that only organises its children."""
