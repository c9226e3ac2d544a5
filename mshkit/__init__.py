"""mshkit: read, write and edit legacy MSH 2.2 meshes.

mshkit decodes the tagged-section MSH text format (physical names, nodes,
elements) into a Mesh, edits it in place while keeping element-to-node
references consistent, and encodes it back to text.

Quick Start:
    >>> import mshkit as mk
    >>>
    >>> # Load two meshes
    >>> plate = mk.mesh.load('plate.msh')
    >>> stiffener = mk.mesh.load('stiffener.msh')
    >>>
    >>> # Combine them and weld coincident nodes
    >>> mk.merge(plate, stiffener)
    >>> mk.dedupe(plate, 1e-6)
    >>>
    >>> # Keep surface elements only, renumber, write
    >>> mk.filter_elements(plate, [mk.ElementType.POINT, mk.ElementType.LINE])
    >>> mk.compact(plate)
    >>> mk.mesh.save(plate, 'combined.msh')

Main Features:
    - Deterministic MSH 2.2 encode/decode
    - Merge of meshes with colliding ids
    - Tolerance based node deduplication
    - Id compaction, element filtering and reordering
"""

from mshkit.version import __version__, __version_info__
from mshkit.config import config

# Errors
from mshkit.exceptions import (
    DedupeIncompleteWarning,
    DuplicateIdError,
    FormatError,
    MshError,
    UnknownIdError,
)

# Core classes
from mshkit.mesh import Element, ElementType, Mesh, Node, PhysicalName
from mshkit.reindex import IdMap, Reindexer
from mshkit.core import MeshGenerator

# Submodules
from mshkit import mesh
from mshkit import core

# Main API functions
from mshkit.mesh import decode, encode, from_geometry
from mshkit.core import compact, dedupe, filter_elements, find_node, merge, reorder

__all__ = [
    # Version info
    "__version__",
    "__version_info__",
    # Configuration
    "config",
    # Errors
    "MshError",
    "FormatError",
    "UnknownIdError",
    "DuplicateIdError",
    "DedupeIncompleteWarning",
    # Core classes
    "Mesh",
    "Node",
    "Element",
    "ElementType",
    "PhysicalName",
    "Reindexer",
    "IdMap",
    "MeshGenerator",
    # Submodules
    "mesh",
    "core",
    # API functions
    "decode",
    "encode",
    "from_geometry",
    "compact",
    "merge",
    "dedupe",
    "reorder",
    "filter_elements",
    "find_node",
]

# Package metadata
__license__ = "MIT"
__description__ = "Read, write and edit legacy MSH 2.2 meshes"
