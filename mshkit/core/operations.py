"""In-place mesh operations.

Every operation keeps a single consistent id space: when one of them returns
normally, each node id referenced by an element belongs to exactly one node
of the same mesh.
"""

import bisect
import warnings
from collections.abc import Iterable

import numpy as np

from mshkit.config import config
from mshkit.exceptions import DedupeIncompleteWarning, UnknownIdError
from mshkit.mesh.mesh import Mesh
from mshkit.reindex import Reindexer


def compact(mesh: Mesh) -> None:
    """Renumber nodes and elements to 1..N and 1..M in current order.

    Element node references are rewritten through the node renumbering. All
    references are resolved before anything is changed, so on failure the
    mesh is left as it was.

    Args:
        mesh: Mesh to renumber in place

    Raises:
        UnknownIdError: If an element references a node that does not exist
        DuplicateIdError: If two nodes share an id. This is a ValueError, not
            a LookupError: the node list itself is malformed, no reference
            is missing.

    Examples:
        >>> mesh.nodes[0].id, mesh.nodes[1].id
        (7, 3)
        >>> mk.compact(mesh)
        >>> mesh.nodes[0].id, mesh.nodes[1].id
        (1, 2)
    """
    node_ids = Reindexer.sequential(node.id for node in mesh.nodes)

    references = []
    for element in mesh.elements:
        try:
            references.append(node_ids.resolve_all(element.node_ids))
        except UnknownIdError as e:
            raise UnknownIdError(
                f"Element {element.id} references missing node {e.id}", id=e.id
            ) from e

    for new_id, node in enumerate(mesh.nodes, start=1):
        node.id = new_id
    for new_id, (element, node_refs) in enumerate(zip(mesh.elements, references), start=1):
        element.id = new_id
        element.node_ids = node_refs


def merge(target: Mesh, source: Mesh) -> None:
    """Append ``source`` to ``target`` under fresh, non-colliding ids.

    Source nodes are numbered after the largest target node id and source
    elements after the largest target element id. Node and element lists of
    ``target`` end up sorted by id. Physical names are concatenated as they
    are, so duplicate tags are possible. ``source`` is not modified.

    Args:
        target: Mesh that receives the data
        source: Mesh to copy from

    Raises:
        UnknownIdError: If ``source`` has an element referencing a missing
            node; ``target`` is unchanged in that case

    Examples:
        >>> a.n_nodes, b.n_nodes
        (5, 5)
        >>> mk.merge(a, b)
        >>> a.n_nodes
        10
    """
    src = source.copy()
    compact(src)

    node_ids = Reindexer.sequential(
        (node.id for node in src.nodes), start=target.max_node_id() + 1
    )
    for node in src.nodes:
        node.id = node_ids.resolve(node.id)
    for element in src.elements:
        element.node_ids = node_ids.resolve_all(element.node_ids)

    element_ids = Reindexer.sequential(
        (element.id for element in src.elements), start=target.max_element_id() + 1
    )
    for element in src.elements:
        element.id = element_ids.resolve(element.id)

    target.nodes.extend(src.nodes)
    target.nodes.sort(key=lambda node: node.id)
    target.elements.extend(src.elements)
    target.elements.sort(key=lambda element: element.id)
    target.physical_names.extend(src.physical_names)


def dedupe(
    mesh: Mesh,
    tolerance: float,
    default_tolerance: float | None = None,
    max_passes: int | None = None,
) -> int:
    """Collapse nodes closer than ``tolerance`` and compact the mesh.

    Node pairs (i, j), i < j, are scanned in list order. For the first pair
    within ``tolerance``, each element has the first occurrence of node i's id
    replaced by node j's id, node i is removed, and the scan starts over.
    Only the first occurrence per element is rewritten. Scanning stops when
    no close pair is left or after ``max_passes`` merges.

    Args:
        mesh: Mesh to modify in place
        tolerance: Maximum Euclidean distance between merged nodes. A negative
            value does nothing; zero uses ``default_tolerance``.
        default_tolerance: Distance used for a zero ``tolerance``. Defaults
            to ``config.default_tolerance``.
        max_passes: Maximum number of merges. Defaults to
            ``config.max_dedupe_passes``.

    Returns:
        Number of removed nodes

    Raises:
        UnknownIdError: If the final compaction finds a dangling reference

    Warns:
        DedupeIncompleteWarning: If the pass limit was reached while close
            pairs remain (only when ``config.verbose >= 1``)
    """
    if tolerance < 0:
        return 0
    if default_tolerance is None:
        default_tolerance = config.default_tolerance
    if max_passes is None:
        max_passes = config.max_dedupe_passes
    if tolerance == 0:
        tolerance = default_tolerance

    coords = mesh.coordinates
    removed = 0
    for _ in range(max_passes):
        pair = _first_close_pair(coords, tolerance)
        if pair is None:
            break
        i, j = pair
        old_id, new_id = mesh.nodes[i].id, mesh.nodes[j].id
        for element in mesh.elements:
            for k, node_id in enumerate(element.node_ids):
                if node_id == old_id:
                    element.node_ids[k] = new_id
                    break
        del mesh.nodes[i]
        coords = np.delete(coords, i, axis=0)
        removed += 1
    else:
        if config.verbose >= 1 and _first_close_pair(coords, tolerance) is not None:
            warnings.warn(
                f"dedupe stopped after {max_passes} passes; "
                f"nodes closer than {tolerance} remain",
                DedupeIncompleteWarning,
                stacklevel=2,
            )

    compact(mesh)
    return removed


def _first_close_pair(coords: np.ndarray, tolerance: float) -> tuple[int, int] | None:
    """Return the first (i, j), i < j, in row-major order within tolerance."""
    for i in range(len(coords) - 1):
        distances = np.linalg.norm(coords[i + 1 :] - coords[i], axis=1)
        hits = np.flatnonzero(distances <= tolerance)
        if hits.size:
            return i, i + 1 + int(hits[0])
    return None


def reorder(mesh: Mesh, priority_kinds: Iterable[int]) -> None:
    """Stably move elements of the given kinds to the front.

    Elements are grouped by the position of their kind in ``priority_kinds``;
    kinds not listed keep their relative order after all listed ones. Ids are
    not changed; call :func:`compact` afterwards to renumber.

    Examples:
        >>> mk.reorder(mesh, [ElementType.TRIANGLE, ElementType.QUADRANGLE])
    """
    priority_kinds = list(priority_kinds)
    position: dict[int, int] = {}
    for i, kind in enumerate(priority_kinds):
        position.setdefault(kind, i)

    rank = len(priority_kinds)
    mesh.elements.sort(key=lambda element: position.get(element.kind, rank))


def filter_elements(mesh: Mesh, excluded_kinds: Iterable[int]) -> int:
    """Remove every element whose kind is in ``excluded_kinds``.

    Nodes are left alone, including nodes no remaining element uses.

    Returns:
        Number of removed elements
    """
    excluded = set(excluded_kinds)
    before = len(mesh.elements)
    mesh.elements[:] = [el for el in mesh.elements if el.kind not in excluded]
    return before - len(mesh.elements)


def find_node(mesh: Mesh, node_id: int) -> int | None:
    """Return the list position of the node with ``node_id``.

    A binary search is tried first (node lists are sorted after
    :func:`compact` and :func:`merge`); if it misses, the whole list is
    scanned.

    Returns:
        Position in ``mesh.nodes``, or None if no node has that id
    """
    nodes = mesh.nodes
    index = bisect.bisect_left(nodes, node_id, key=lambda node: node.id)
    if index < len(nodes) and nodes[index].id == node_id:
        return index

    for i, node in enumerate(nodes):
        if node.id == node_id:
            return i
    return None
