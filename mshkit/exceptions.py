"""Exceptions and warnings raised by mshkit."""


class MshError(Exception):
    """Base class for mshkit errors."""


class FormatError(MshError, ValueError):
    """Malformed section, record, or field in mesh text.

    Attributes:
        section: Section marker the problem was found in (e.g. ``$Nodes``)
        line: Offending line content, or None for section-level problems
    """

    def __init__(self, message: str, section: str | None = None, line: str | None = None):
        if line is not None:
            message = f"{message}: {line!r}"
        super().__init__(message)
        self.section = section
        self.line = line


class UnknownIdError(MshError, LookupError):
    """A referenced identifier has no corresponding entry.

    Raised when an element refers to a node that does not exist, or when an
    id is resolved through a map it was never added to.
    """

    def __init__(self, message: str, id: int | None = None):
        super().__init__(message)
        self.id = id


class DuplicateIdError(MshError, ValueError):
    """An identifier was added twice to a one-to-one id map."""

    def __init__(self, message: str, id: int | None = None):
        super().__init__(message)
        self.id = id


class DedupeIncompleteWarning(UserWarning):
    """``dedupe`` stopped at the pass limit before every close pair was merged."""
