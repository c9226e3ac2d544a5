# mshkit - core module
"""Mesh operations and the external generator interface."""

from mshkit.core.base import MeshGenerator
from mshkit.core.operations import (
    compact,
    dedupe,
    filter_elements,
    find_node,
    merge,
    reorder,
)

__all__ = [
    "MeshGenerator",
    "compact",
    "dedupe",
    "filter_elements",
    "find_node",
    "merge",
    "reorder",
]
