"""Global configuration for mshkit.

This module provides configuration options for controlling the default
deduplication tolerance, the deduplication pass limit, and warning verbosity.
"""

from contextlib import contextmanager
from typing import Any


class Config:
    """Global configuration for mshkit.

    Examples:
        >>> import mshkit as mk
        >>> mk.config.verbose = 0
        >>> mk.config.set_default_tolerance(1e-6)

        # Temporary config
        >>> with mk.config.temporary(max_dedupe_passes=10, verbose=0):
        ...     mk.dedupe(mesh, 0.01)
    """

    def __init__(self):
        # Deduplication
        self._default_tolerance: float = 1e-5
        self._max_dedupe_passes: int = 1000

        # Output
        self._verbose: int = 1  # 0=silent, 1=warnings, 2=info, 3=debug

        # Store for temporary context
        self._context_stack: list[dict[str, Any]] = []

    # Deduplication properties
    @property
    def default_tolerance(self) -> float:
        """Distance used by ``dedupe`` when called with a zero tolerance."""
        return self._default_tolerance

    def set_default_tolerance(self, tolerance: float) -> None:
        """Set the distance substituted for a zero dedupe tolerance.

        Args:
            tolerance: Positive distance in mesh units
        """
        if tolerance <= 0:
            raise ValueError(f"Default tolerance must be positive, got {tolerance}")
        self._default_tolerance = float(tolerance)

    @property
    def max_dedupe_passes(self) -> int:
        """Maximum number of restarted scans performed by ``dedupe``."""
        return self._max_dedupe_passes

    @max_dedupe_passes.setter
    def max_dedupe_passes(self, n: int) -> None:
        if n < 1:
            raise ValueError(f"Number of dedupe passes must be at least 1, got {n}")
        self._max_dedupe_passes = int(n)

    # Output properties
    @property
    def verbose(self) -> int:
        """Verbosity level (0=silent, 1=warnings, 2=info, 3=debug)."""
        return self._verbose

    @verbose.setter
    def verbose(self, level: int) -> None:
        """Set verbosity level.

        Args:
            level: 0=silent, 1=warnings, 2=info, 3=debug
        """
        if level not in (0, 1, 2, 3):
            raise ValueError(f"Verbose level must be 0-3, got {level}")
        self._verbose = level

    # Context manager for temporary configuration
    @contextmanager
    def temporary(self, **kwargs):
        """Temporarily override configuration settings.

        Args:
            **kwargs: Configuration options to override

        Examples:
            >>> with config.temporary(default_tolerance=1e-3):
            ...     mk.dedupe(mesh, 0.0)
        """
        # Save current state
        state = {}
        for key, value in kwargs.items():
            if key == "default_tolerance":
                state["default_tolerance"] = self._default_tolerance
                self.set_default_tolerance(value)
            elif key == "max_dedupe_passes":
                state["max_dedupe_passes"] = self._max_dedupe_passes
                self.max_dedupe_passes = value
            elif key == "verbose":
                state["verbose"] = self._verbose
                self.verbose = value
            else:
                raise ValueError(f"Unknown configuration option: {key}")

        self._context_stack.append(state)

        try:
            yield self
        finally:
            # Restore previous state
            old_state = self._context_stack.pop()
            for key, value in old_state.items():
                if key == "default_tolerance":
                    self._default_tolerance = value
                elif key == "max_dedupe_passes":
                    self._max_dedupe_passes = value
                elif key == "verbose":
                    self._verbose = value

    def reset(self) -> None:
        """Reset all configuration to defaults."""
        self.__init__()

    def __repr__(self) -> str:
        return (
            f"Config(\n"
            f"  default_tolerance={self._default_tolerance},\n"
            f"  max_dedupe_passes={self._max_dedupe_passes},\n"
            f"  verbose={self._verbose}\n"
            f")"
        )


# Global configuration instance
config = Config()
