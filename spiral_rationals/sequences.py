"""
Seekable sequences: positional lookup for lazy, restartable sequences.

Sequences here are produced incrementally, not stored.  Indexing one means
starting a fresh iterator and walking it from the beginning until the
requested position, so the cost of seq[n] is O(n) production steps and
nothing is cached between calls.

This only works for restartable sources: every call to __iter__ must yield
an independent iterator positioned at the start.  Single-pass iterators
(generators, file handles, ...) are rejected up front.
"""

from abc import ABC, abstractmethod
import collections.abc
import operator
from typing import Callable, Generic, Iterable, Iterator, List, TypeVar, Union

T = TypeVar("T")


def _check_index(index) -> int:
    # bool is an int subclass, but seq[True] is almost certainly a bug
    if isinstance(index, bool):
        raise TypeError("Sequence indices must be integers, not bool")
    try:
        index = operator.index(index)
    except TypeError:
        raise TypeError(
            f"Sequence indices must be integers, not {type(index).__name__}"
        ) from None
    if index < 0:
        raise IndexError(f"{index}: Negative index")
    return index


def element_at(iterable: Iterable[T], index: int) -> T:
    """Return the element at position `index` of any iterable.

    Consumes the iterable up to and including the element.  Raises
    IndexError for a negative index (before iterating) or when the
    iterable runs out first.
    """
    index = _check_index(index)
    for i, item in enumerate(iterable):
        if i == index:
            return item
    raise IndexError(f"{index}: Past end")


class SeekableSequence(ABC, Generic[T]):
    """A lazy, restartable, possibly infinite sequence with index lookup.

    Subclasses implement __iter__ so that each call returns a brand-new
    iterator at the start of the sequence.
    """

    @abstractmethod
    def __iter__(self) -> Iterator[T]:
        ...

    def get(self, index: int) -> T:
        """Find the element at zero-based `index` by replaying from the start.

        No assumption is made that the sequence is bounded: this can be very
        expensive for large indices or hard-to-compute sequences.
        """
        # Check up front: the sequence may be infinite
        index = _check_index(index)
        return element_at(iter(self), index)

    def __getitem__(self, index: int) -> T:
        return self.get(index)

    def take(self, count: int) -> List[T]:
        """First `count` elements, from a fresh iterator."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        out: List[T] = []
        if count == 0:
            return out
        for item in iter(self):
            out.append(item)
            if len(out) >= count:
                break
        return out


class ReplayableSequence(SeekableSequence[T]):
    """Adapt a restartable source into a SeekableSequence.

    `source` is either a zero-argument callable returning a new iterator
    (typically a generator function) or a re-iterable container such as a
    list, tuple or range.
    """

    def __init__(self, source: Union[Callable[[], Iterator[T]], Iterable[T]]):
        if callable(source):
            self._factory = source
        elif isinstance(source, collections.abc.Iterable):
            if iter(source) is source:
                raise TypeError(
                    f"{type(source).__name__} is a single-pass iterator; "
                    "pass a container or a factory that builds a new iterator"
                )
            self._factory = lambda: iter(source)
        else:
            raise TypeError(
                f"Expected an iterable or iterator factory, "
                f"got {type(source).__name__}"
            )

    def __iter__(self) -> Iterator[T]:
        return iter(self._factory())

    def __repr__(self) -> str:
        return f"ReplayableSequence({self._factory!r})"
