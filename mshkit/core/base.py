"""Base class for external mesh generators.

A generator turns a geometry description into MSH text. mshkit never starts
one on its own; callers pass an instance to :func:`mshkit.from_geometry`.
"""

from abc import ABC, abstractmethod


class MeshGenerator(ABC):
    """Base class for geometry-to-mesh generators.

    Implementations keep their own settings (executable path, command line
    options, working directory) as instance state and report failures by
    raising; mshkit passes those exceptions through unchanged.

    Examples:
        >>> class FileGenerator(MeshGenerator):
        ...     def __init__(self, path):
        ...         self.path = path
        ...     def generate(self, geometry):
        ...         return Path(self.path).read_text()
    """

    @abstractmethod
    def generate(self, geometry: str) -> str:
        """Generate mesh text for a geometry description.

        Args:
            geometry: Geometry description, passed through uninterpreted

        Returns:
            MSH 2.2 ASCII text
        """
        pass
