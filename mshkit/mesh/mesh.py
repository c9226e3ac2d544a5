"""Mesh model for the legacy MSH 2.2 format.

This module provides the records stored in an MSH file (physical names,
nodes, elements) and the Mesh aggregate that holds them. Elements refer to
nodes purely by id; ids are chosen by whoever wrote the file and may be
sparse, unsorted, or collide with ids of another mesh.
"""

from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np


class ElementType(IntEnum):
    """Element kind codes used by the MSH format."""

    LINE = 1
    TRIANGLE = 2
    QUADRANGLE = 3
    TETRAHEDRON = 4
    HEXAHEDRON = 5
    PRISM = 6
    PYRAMID = 7
    LINE3 = 8
    TRIANGLE6 = 9
    QUADRANGLE9 = 10
    TETRAHEDRON10 = 11
    POINT = 15
    QUADRANGLE8 = 16


def element_kind(code: int) -> int:
    """Return the ElementType for ``code``, or ``code`` itself if unknown."""
    try:
        return ElementType(code)
    except ValueError:
        return code


@dataclass
class PhysicalName:
    """Label attached to a (dimension, tag) pair."""

    dimension: int
    tag: int
    name: str


@dataclass
class Node:
    """Point in 3D space identified by an integer id."""

    id: int
    coord: tuple[float, float, float]


@dataclass
class Element:
    """Geometric primitive referencing nodes by id.

    Attributes:
        id: Element id
        kind: ElementType code (plain int for codes outside ElementType)
        tags: Integer tags, usually physical and elementary entity tags
        node_ids: Node ids in local winding order
    """

    id: int
    kind: int
    tags: list[int] = field(default_factory=list)
    node_ids: list[int] = field(default_factory=list)


class Mesh:
    """Physical names, nodes and elements of one MSH file.

    Attributes:
        physical_names: List of PhysicalName
        nodes: List of Node, ids unique
        elements: List of Element

    Examples:
        >>> mesh = mk.decode(text)
        >>> print(mesh.n_nodes, mesh.n_elements)

        >>> mesh = mk.Mesh(
        ...     nodes=[Node(1, (0, 0, 0)), Node(2, (1, 0, 0))],
        ...     elements=[Element(1, ElementType.LINE, [0, 1], [1, 2])],
        ... )
    """

    def __init__(
        self,
        physical_names: list[PhysicalName] | None = None,
        nodes: list[Node] | None = None,
        elements: list[Element] | None = None,
    ):
        self.physical_names = list(physical_names) if physical_names else []
        self.nodes = list(nodes) if nodes else []
        self.elements = list(elements) if elements else []

    @property
    def n_physical_names(self) -> int:
        """Number of physical names."""
        return len(self.physical_names)

    @property
    def n_nodes(self) -> int:
        """Number of nodes."""
        return len(self.nodes)

    @property
    def n_elements(self) -> int:
        """Number of elements."""
        return len(self.elements)

    @property
    def coordinates(self) -> np.ndarray:
        """(N, 3) float array of node coordinates in node list order."""
        if not self.nodes:
            return np.empty((0, 3), dtype=np.float64)
        return np.array([node.coord for node in self.nodes], dtype=np.float64)

    @property
    def bounds(self) -> np.ndarray:
        """Bounding box of the nodes.

        Returns:
            Array of shape (2, 3) with [[xmin, ymin, zmin], [xmax, ymax, zmax]]

        Raises:
            ValueError: If the mesh has no nodes
        """
        if not self.nodes:
            raise ValueError("Cannot compute bounds of a mesh without nodes")
        coords = self.coordinates
        return np.array([coords.min(axis=0), coords.max(axis=0)])

    def max_node_id(self) -> int:
        """Largest node id, or 0 for a mesh without nodes."""
        return max((node.id for node in self.nodes), default=0)

    def max_element_id(self) -> int:
        """Largest element id, or 0 for a mesh without elements."""
        return max((element.id for element in self.elements), default=0)

    def is_valid(self) -> bool:
        """Check that every element node id resolves to a node of this mesh."""
        ids = {node.id for node in self.nodes}
        return all(
            node_id in ids for element in self.elements for node_id in element.node_ids
        )

    def copy(self) -> "Mesh":
        """Create a deep copy of this mesh.

        Returns:
            New Mesh sharing no mutable state with this one
        """
        return Mesh(
            physical_names=[
                PhysicalName(pn.dimension, pn.tag, pn.name) for pn in self.physical_names
            ],
            nodes=[Node(node.id, tuple(node.coord)) for node in self.nodes],
            elements=[
                Element(el.id, el.kind, list(el.tags), list(el.node_ids))
                for el in self.elements
            ],
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mesh):
            return NotImplemented
        return (
            self.physical_names == other.physical_names
            and self.nodes == other.nodes
            and self.elements == other.elements
        )

    def __repr__(self) -> str:
        return (
            f"Mesh(n_physical_names={self.n_physical_names}, "
            f"n_nodes={self.n_nodes}, "
            f"n_elements={self.n_elements})"
        )

    def __str__(self) -> str:
        return self.__repr__()
