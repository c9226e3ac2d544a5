"""Mesh I/O functionality.

This module reads and writes MSH files, runs an external generator through
the :class:`~mshkit.core.base.MeshGenerator` interface, and converts to and
from trimesh surface meshes.
"""

from pathlib import Path

import numpy as np
import trimesh

from mshkit.core.base import MeshGenerator
from mshkit.exceptions import UnknownIdError
from mshkit.mesh.codec import decode, encode
from mshkit.mesh.mesh import Element, ElementType, Mesh, Node


def load(file_path: str | Path) -> Mesh:
    """Load a mesh from an MSH file.

    Args:
        file_path: Path to .msh file

    Returns:
        Loaded Mesh

    Raises:
        FileNotFoundError: If file doesn't exist
        FormatError: If the file content is not valid MSH text

    Examples:
        >>> mesh = mk.mesh.load('plate.msh')
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Mesh file not found: {file_path}")

    return decode(file_path.read_text(encoding="utf-8"))


def save(mesh: Mesh, file_path: str | Path) -> None:
    """Save a mesh to an MSH file.

    Args:
        mesh: Mesh to save
        file_path: Output file path

    Examples:
        >>> mk.mesh.save(mesh, 'merged.msh')
    """
    file_path = Path(file_path)
    file_path.write_text(encode(mesh), encoding="utf-8")


def from_geometry(geometry: str, generator: MeshGenerator) -> Mesh:
    """Generate a mesh for ``geometry`` and decode it.

    Whatever the generator raises is propagated unchanged.

    Args:
        geometry: Geometry description handed to the generator
        generator: Generator producing MSH text

    Returns:
        Decoded Mesh

    Raises:
        FormatError: If the generator output is not valid MSH text
    """
    return decode(generator.generate(geometry))


def to_trimesh(mesh: Mesh) -> trimesh.Trimesh:
    """Convert the surface elements of a mesh to a trimesh.Trimesh.

    Every node becomes a vertex, in node list order. Triangles become faces,
    quadrangles are split into two triangles, other element kinds are
    skipped.

    Args:
        mesh: Mesh to convert

    Returns:
        trimesh.Trimesh object

    Raises:
        UnknownIdError: If a surface element references a missing node
    """
    position = {node.id: i for i, node in enumerate(mesh.nodes)}

    faces = []
    for element in mesh.elements:
        if element.kind == ElementType.TRIANGLE:
            corners = [element.node_ids[:3]]
        elif element.kind == ElementType.QUADRANGLE:
            a, b, c, d = element.node_ids[:4]
            corners = [[a, b, c], [a, c, d]]
        else:
            continue
        for tri in corners:
            try:
                faces.append([position[node_id] for node_id in tri])
            except KeyError as e:
                raise UnknownIdError(
                    f"Element {element.id} references missing node {e.args[0]}",
                    id=e.args[0],
                ) from None

    return trimesh.Trimesh(
        vertices=mesh.coordinates,
        faces=np.array(faces, dtype=np.int64).reshape(-1, 3),
        process=False,
    )


def from_trimesh(
    mesh_tri: trimesh.Trimesh,
    physical_tag: int = 0,
    entity_tag: int = 0,
) -> Mesh:
    """Create a Mesh from a trimesh.Trimesh object.

    Vertices become nodes 1..N and faces become triangle elements 1..M.

    Args:
        mesh_tri: trimesh.Trimesh object
        physical_tag: First tag written on every element
        entity_tag: Second tag written on every element

    Returns:
        New Mesh instance

    Examples:
        >>> import trimesh
        >>> mesh = mk.mesh.from_trimesh(trimesh.creation.box())
    """
    vertices = np.asarray(mesh_tri.vertices, dtype=np.float64)
    faces = np.asarray(mesh_tri.faces, dtype=np.int64)

    nodes = [
        Node(id=i, coord=(float(x), float(y), float(z)))
        for i, (x, y, z) in enumerate(vertices, start=1)
    ]
    elements = [
        Element(
            id=i,
            kind=ElementType.TRIANGLE,
            tags=[physical_tag, entity_tag],
            node_ids=[int(v) + 1 for v in face],
        )
        for i, face in enumerate(faces, start=1)
    ]

    return Mesh(nodes=nodes, elements=elements)
