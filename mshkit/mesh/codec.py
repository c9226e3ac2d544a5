"""Text codec for the legacy MSH 2.2 ASCII format.

The format is a sequence of tagged sections::

    $MeshFormat
    2.2 0 8
    $EndMeshFormat
    $PhysicalNames
    number-of-names
    dimension tag "name"
    $EndPhysicalNames
    $Nodes
    number-of-nodes
    id x y z
    $EndNodes
    $Elements
    number-of-elements
    id kind number-of-tags tag ... node-id ...
    $EndElements

Every section is optional. The count line after each start marker is skipped
and never checked; every line up to the end marker is a record.
"""

import re

from mshkit.exceptions import FormatError
from mshkit.mesh.mesh import Element, Mesh, Node, PhysicalName, element_kind
from mshkit.version import MSH_FORMAT_VERSION

HEADER = f"$MeshFormat\n{MSH_FORMAT_VERSION} 0 8\n$EndMeshFormat\n"

PHYSICAL_NAMES = ("$PhysicalNames", "$EndPhysicalNames")
NODES = ("$Nodes", "$EndNodes")
ELEMENTS = ("$Elements", "$EndElements")

# ASCII digits only, no "_" separators
INTEGER = re.compile(r"[+-]?[0-9]+")
NUMBER = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)


def decode(text: str) -> Mesh:
    """Decode MSH text into a Mesh.

    Args:
        text: Content of an MSH 2.2 ASCII file

    Returns:
        Decoded Mesh

    Raises:
        FormatError: If a section marker is unmatched or misordered, a record
            has the wrong number of fields, a number does not parse, or an
            element declares more tags than it has fields

    Examples:
        >>> mesh = mk.decode(open('part.msh').read())
        >>> mesh.elements[0].node_ids
        [1, 2, 5]
    """
    lines = text.split("\n")
    mesh = Mesh()

    for line in _section(lines, *PHYSICAL_NAMES):
        mesh.physical_names.append(_decode_physical_name(line))

    for line in _section(lines, *NODES):
        mesh.nodes.append(_decode_node(line))

    for line in _section(lines, *ELEMENTS):
        mesh.elements.append(_decode_element(line))

    return mesh


def encode(mesh: Mesh) -> str:
    """Encode a Mesh as MSH text.

    Output is deterministic: sections are written only for non-empty
    collections, counts are the current collection lengths, and coordinates
    use six decimals.

    Args:
        mesh: Mesh to encode

    Returns:
        MSH 2.2 ASCII text
    """
    parts = [HEADER]

    if mesh.physical_names:
        parts.append(f"{PHYSICAL_NAMES[0]}\n{len(mesh.physical_names)}\n")
        for pn in mesh.physical_names:
            parts.append(f'{pn.dimension:d} {pn.tag:d} "{pn.name}"\n')
        parts.append(f"{PHYSICAL_NAMES[1]}\n")

    if mesh.nodes:
        parts.append(f"{NODES[0]}\n{len(mesh.nodes)}\n")
        for node in mesh.nodes:
            x, y, z = node.coord
            parts.append(f"{node.id:d} {x:f} {y:f} {z:f}\n")
        parts.append(f"{NODES[1]}\n")

    if mesh.elements:
        parts.append(f"{ELEMENTS[0]}\n{len(mesh.elements)}\n")
        for el in mesh.elements:
            fields = [el.id, int(el.kind), len(el.tags), *el.tags, *el.node_ids]
            parts.append(" ".join(f"{value:d}" for value in fields) + "\n")
        parts.append(f"{ELEMENTS[1]}\n")

    return "".join(parts)


def _find_marker(lines: list[str], marker: str) -> int:
    for i, line in enumerate(lines):
        if line.strip() == marker:
            return i
    return -1


def _section(lines: list[str], start: str, end: str) -> list[str]:
    """Return the record lines between ``start`` and ``end``.

    An absent section yields no lines.
    """
    first = _find_marker(lines, start)
    last = _find_marker(lines, end)

    if first < 0 and last < 0:
        return []
    if first < 0:
        raise FormatError(f"Found {end} without {start}", section=start)
    if last < 0:
        raise FormatError(f"Found {start} without {end}", section=start)
    if last < first:
        raise FormatError(f"{end} appears before {start}", section=start)

    # Skip the count line
    return lines[first + 2 : last]


def _parse_int(token: str, section: str, line: str) -> int:
    if not INTEGER.fullmatch(token):
        raise FormatError(f"Invalid integer {token!r}", section=section, line=line)
    return int(token)


def _parse_float(token: str, section: str, line: str) -> float:
    if not NUMBER.fullmatch(token):
        raise FormatError(f"Invalid number {token!r}", section=section, line=line)
    return float(token)


def _decode_physical_name(line: str) -> PhysicalName:
    section = PHYSICAL_NAMES[0]
    fields = line.split()
    if len(fields) != 3:
        raise FormatError(
            f"Expected 3 fields, got {len(fields)}", section=section, line=line
        )

    dimension = _parse_int(fields[0], section, line)
    tag = _parse_int(fields[1], section, line)

    name = fields[2]
    if len(name) >= 2 and name[0] == '"' and name[-1] == '"':
        name = name[1:-1]

    return PhysicalName(dimension=dimension, tag=tag, name=name)


def _decode_node(line: str) -> Node:
    section = NODES[0]
    fields = line.split()
    if len(fields) != 4:
        raise FormatError(
            f"Expected 4 fields, got {len(fields)}", section=section, line=line
        )

    node_id = _parse_int(fields[0], section, line)
    x, y, z = (_parse_float(token, section, line) for token in fields[1:])

    return Node(id=node_id, coord=(x, y, z))


def _decode_element(line: str) -> Element:
    section = ELEMENTS[0]
    values = [_parse_int(token, section, line) for token in line.split()]
    if len(values) < 3:
        raise FormatError(
            f"Expected at least 3 fields, got {len(values)}", section=section, line=line
        )

    element_id, code, n_tags = values[:3]
    rest = values[3:]
    if n_tags < 0 or n_tags > len(rest):
        raise FormatError(
            f"Element declares {n_tags} tags but has {len(rest)} remaining fields",
            section=section,
            line=line,
        )

    return Element(
        id=element_id,
        kind=element_kind(code),
        tags=rest[:n_tags],
        node_ids=rest[n_tags:],
    )
