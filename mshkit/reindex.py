"""One-to-one id remapping used by merge and compaction.

Renumbering happens in two phases. A :class:`Reindexer` collects every
``old -> new`` pair first, then :meth:`Reindexer.finalize` freezes it into an
:class:`IdMap` that is applied to all references. No reference is ever
resolved against a partially built map.
"""

from collections.abc import Iterable, Iterator, Mapping

from mshkit.exceptions import DuplicateIdError, UnknownIdError


class IdMap(Mapping):
    """Immutable, insertion-ordered ``old id -> new id`` map.

    Lookups of ids that were never added raise :class:`UnknownIdError`.

    Examples:
        >>> builder = Reindexer()
        >>> builder.add(10, 1)
        >>> builder.add(42, 2)
        >>> ids = builder.finalize()
        >>> ids.resolve(42)
        2
        >>> ids.resolve_all([42, 10, 42])
        [2, 1, 2]
    """

    def __init__(self, pairs: dict[int, int]):
        self._forward = dict(pairs)

    def resolve(self, old_id: int) -> int:
        """Return the new id for ``old_id``.

        Raises:
            UnknownIdError: If ``old_id`` was never mapped
        """
        try:
            return self._forward[old_id]
        except KeyError:
            raise UnknownIdError(f"Id {old_id} is not mapped", id=old_id) from None

    def resolve_all(self, old_ids: Iterable[int]) -> list[int]:
        """Resolve every id of a sequence, preserving order."""
        return [self.resolve(old_id) for old_id in old_ids]

    def __getitem__(self, old_id: int) -> int:
        return self.resolve(old_id)

    # Mapping's defaults only catch KeyError
    def __contains__(self, old_id: object) -> bool:
        return old_id in self._forward

    def get(self, old_id: int, default: int | None = None) -> int | None:
        return self._forward.get(old_id, default)

    def __iter__(self) -> Iterator[int]:
        return iter(self._forward)

    def __len__(self) -> int:
        return len(self._forward)

    def __repr__(self) -> str:
        return f"IdMap({self._forward!r})"


class Reindexer:
    """Insert-only builder for an :class:`IdMap`.

    Both sides of the map must stay unique: adding an old id twice, or giving
    two old ids the same new id, raises :class:`DuplicateIdError`.
    """

    def __init__(self):
        self._pairs: dict[int, int] = {}
        self._targets: set[int] = set()
        self._finalized = False

    @classmethod
    def sequential(cls, old_ids: Iterable[int], start: int = 1) -> IdMap:
        """Map ``old_ids`` in order onto ``start, start + 1, ...``."""
        builder = cls()
        for new_id, old_id in enumerate(old_ids, start=start):
            builder.add(old_id, new_id)
        return builder.finalize()

    def add(self, old_id: int, new_id: int) -> None:
        """Record that ``old_id`` becomes ``new_id``.

        Raises:
            DuplicateIdError: If either id was already used
            RuntimeError: If the builder was already finalized
        """
        if self._finalized:
            raise RuntimeError("Reindexer is finalized; no more ids can be added")
        if old_id in self._pairs:
            raise DuplicateIdError(f"Id {old_id} is already mapped", id=old_id)
        if new_id in self._targets:
            raise DuplicateIdError(f"Target id {new_id} is already used", id=new_id)
        self._pairs[old_id] = new_id
        self._targets.add(new_id)

    def finalize(self) -> IdMap:
        """Freeze the builder and return the resulting map."""
        self._finalized = True
        return IdMap(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)
