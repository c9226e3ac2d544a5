# mshkit - mesh module
"""Mesh model, MSH text codec, and file I/O."""

from mshkit.mesh.mesh import Element, ElementType, Mesh, Node, PhysicalName
from mshkit.mesh.codec import decode, encode
from mshkit.mesh.io import from_geometry, from_trimesh, load, save, to_trimesh

__all__ = [
    "Element",
    "ElementType",
    "Mesh",
    "Node",
    "PhysicalName",
    "decode",
    "encode",
    "from_geometry",
    "from_trimesh",
    "load",
    "save",
    "to_trimesh",
]
