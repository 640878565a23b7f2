"""A non-empty sequence: one required item followed by any number of others."""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")

__all__ = ["EmptyListError", "OneOrMany"]


class EmptyListError(ValueError):
    """Raised when a OneOrMany would be built from no items at all."""

    def __init__(self) -> None:
        super().__init__("Cannot create OneOrMany with an empty list.")


class OneOrMany(Generic[T]):
    """Holds at least one item; build it with :meth:`one`, :meth:`many` or :meth:`merge`."""

    __slots__ = ("_first", "_rest")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, first: T, rest: Iterable[T] = ()) -> None:
        self._first = first
        self._rest = list(rest)

    @classmethod
    def one(cls, item: T) -> OneOrMany[T]:
        """Create a collection holding a single item."""
        return cls(item)

    @classmethod
    def many(cls, items: Iterable[T]) -> OneOrMany[T]:
        """Create a collection from ``items``; raise EmptyListError if there are none."""
        iterator = iter(items)
        try:
            first = next(iterator)
        except StopIteration:
            raise EmptyListError() from None
        return cls(first, iterator)

    @classmethod
    def merge(cls, groups: Iterable[OneOrMany[T]]) -> OneOrMany[T]:
        """Concatenate several collections into one, in order."""
        return cls.many(item for group in groups for item in group)

    def first(self) -> T:
        """Return the first item."""
        return self._first

    def rest(self) -> list[T]:
        """Return a copy of every item after the first."""
        return list(self._rest)

    def push(self, item: T) -> None:
        """Append an item at the end."""
        self._rest.append(item)

    def __len__(self) -> int:
        return 1 + len(self._rest)

    def __iter__(self) -> Iterator[T]:
        yield self._first
        yield from self._rest

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OneOrMany):
            return NotImplemented
        return self._first == other._first and self._rest == other._rest

    def __repr__(self) -> str:
        return f"OneOrMany({[self._first, *self._rest]!r})"