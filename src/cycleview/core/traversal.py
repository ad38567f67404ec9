"""
Capability query and source cursors.

A source cursor is a position within a finite source counted from the source's begin. Three cursor types exist, one
per traversal tier a source may provide:

* :class:`ForwardCursor` walks any multipass iterable with a live iterator,
* :class:`BidirectionalCursor` additionally steps backward via ``reversed()``,
* :class:`IndexCursor` addresses a sequence (or numpy array) by integer index.

None of them buffer elements; a forward cursor that has to be rebuilt re-walks the source lazily instead.
"""
from collections.abc import Iterable, Iterator, Reversible, Sequence, Sized
from enum import Flag, auto
from itertools import islice
from typing import Any, Final, Generic, Optional, TypeVar, Union

import numpy as np
from typing_extensions import Self

from cycleview.core.util.errors import ContractViolation, NotTraversableError
from cycleview.core.util.protocols import MultipassIterable, SupportsReversed

_T = TypeVar('_T')

_END: Final[object] = object()
_UNSET: Final[object] = object()


class Capability(Flag):
    """
    Flags describing how a source can be traversed.
    """
    NONE = 0
    FORWARD = auto()
    BIDIRECTIONAL = auto()
    RANDOM_ACCESS = auto()
    SIZED = auto()
    COMMON = auto()
    INFINITE = auto()


RANDOM_ACCESS_CAPABILITIES: Final[Capability] = (Capability.FORWARD | Capability.BIDIRECTIONAL |
                                                 Capability.RANDOM_ACCESS | Capability.SIZED | Capability.COMMON)


def is_infinite(source: Any) -> bool:
    """
    Checks whether a source declares itself as endless via a truthy ``__infinite__`` attribute.
    :param source: The source to check.
    :return: ``True`` if the source never reaches an end; otherwise ``False``.
    """
    return bool(getattr(source, '__infinite__', False))


def capabilities_of(source: Any) -> Capability:
    """
    Determines the traversal capabilities of a source.
    :param source: The source to classify.
    :return: The capabilities of the source.
    :raises NotTraversableError: If the source is not iterable or can only be iterated once.
    """
    if isinstance(source, np.ndarray):
        if source.ndim == 0:
            raise NotTraversableError('Zero-dimensional arrays cannot be traversed')
        caps = RANDOM_ACCESS_CAPABILITIES
    elif isinstance(source, Sequence):
        caps = RANDOM_ACCESS_CAPABILITIES
    elif isinstance(source, Iterator) or not isinstance(source, Iterable):
        raise NotTraversableError(f'Objects of type {type(source).__name__} cannot be traversed more than once')
    else:
        caps = Capability.FORWARD
        if isinstance(source, Reversible):
            caps |= Capability.BIDIRECTIONAL
        if isinstance(source, Sized):
            caps |= Capability.SIZED | Capability.COMMON

    if is_infinite(source):
        caps |= Capability.INFINITE
    return caps


def is_empty(source: Any, capabilities: Capability) -> bool:
    """
    Checks whether a finite source has no elements without consuming more than its first element.
    :param source: The source to check.
    :param capabilities: The capabilities of the source.
    :return: ``True`` if the source is empty; otherwise ``False``.
    """
    if Capability.SIZED in capabilities:
        return len(source) == 0
    return next(iter(source), _END) is _END


def _consume(iterator: Iterator, n: int) -> None:
    next(islice(iterator, n, n), None)


class ForwardCursor(Generic[_T]):
    """
    A position within a multipass iterable. The element at the position is read from a live iterator. A copied cursor
    does not share that iterator but re-walks the source up to its index the first time it is used.
    """
    __slots__ = ('_source', '_index', '_length', '_iter', '_value')

    def __init__(self, source: MultipassIterable[_T], index: int = 0) -> None:
        self._source = source
        self._index = index
        self._length: Optional[int] = len(source) if isinstance(source, Sized) else None
        self._iter: Optional[Iterator[_T]] = None
        self._value: Any = _UNSET

    @classmethod
    def end_of(cls, source: MultipassIterable[_T]) -> Self:
        """
        Creates a cursor at the end position of a sized source without walking it.
        :param source: The sized source.
        :return: A cursor at the end position.
        """
        cursor = cls(source, len(source))
        cursor._mark_end()
        return cursor

    @property
    def index(self) -> int:
        return self._index

    @property
    def length(self) -> Optional[int]:
        """
        The length of the source if it is known yet; otherwise ``None``.
        """
        return self._length

    def _mark_end(self) -> None:
        self._iter = iter(())
        self._value = _END
        self._length = self._index

    def _align(self) -> None:
        if self._iter is None:
            self._iter = iter(self._source)
            self._value = next(islice(self._iter, self._index, None), _END)
            if self._value is _END:
                self._length = self._index

    def _step(self) -> None:
        self._value = next(self._iter, _END)
        self._index += 1
        if self._value is _END:
            self._length = self._index

    def at_end(self) -> bool:
        if self._value is _UNSET:
            self._align()
        return self._value is _END

    def read(self) -> _T:
        if self.at_end():
            raise ContractViolation('Cannot read the end position of a source')
        return self._value

    def next(self) -> None:
        self._align()
        if self._value is _END:
            raise ContractViolation('Cannot step past the end position of a source')
        self._step()

    def seek_end(self) -> None:
        """
        Moves the cursor to the end position of its source by counting the remaining elements.
        """
        self._align()
        while self._value is not _END:
            self._step()

    def equal(self, other: 'ForwardCursor[_T]') -> bool:
        return self._source is other._source and self._index == other._index

    def distance(self, other: Union['ForwardCursor[_T]', 'IndexCursor[_T]']) -> int:
        return other.index - self._index

    def copy(self) -> Self:
        cursor = type(self)(self._source, self._index)
        if self._length is not None:
            cursor._length = self._length
        if self._value is _END:
            cursor._mark_end()
        return cursor

    def __copy__(self) -> Self:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ForwardCursor):
            return self.equal(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f'{type(self).__name__}(index={self._index})'


class BidirectionalCursor(ForwardCursor[_T]):
    """
    A position within a multipass iterable that also supports ``reversed()``. Consecutive backward steps share a single
    reverse iterator; a backward step after a forward step rebuilds it.
    """
    __slots__ = ('_reverse', '_reverse_index')

    def __init__(self, source: SupportsReversed[_T], index: int = 0) -> None:
        super().__init__(source, index)
        self._reverse: Optional[Iterator[_T]] = None
        # index of the element the reverse iterator yielded last
        self._reverse_index = -1

    def prev(self) -> None:
        if self._index == 0:
            raise ContractViolation('Cannot step before the begin position of a source')

        if self._reverse is None or self._reverse_index != self._index:
            if self._length is None:
                # length unknown yet, re-walk forward instead
                self._index -= 1
                self._iter = None
                self._value = _UNSET
                self._reverse = None
                return
            self._reverse = reversed(self._source)
            _consume(self._reverse, self._length - self._index)

        self._value = next(self._reverse)
        self._index -= 1
        self._reverse_index = self._index
        self._iter = None


class IndexCursor(Generic[_T]):
    """
    A position within a sequence or numpy array addressed by integer index. Every operation runs in constant time.
    """
    __slots__ = ('_source', '_index', '_length')

    def __init__(self, source: Union[Sequence[_T], np.ndarray], index: int = 0) -> None:
        self._source = source
        self._index = index
        self._length = len(source)

    @classmethod
    def end_of(cls, source: Union[Sequence[_T], np.ndarray]) -> Self:
        return cls(source, len(source))

    @property
    def index(self) -> int:
        return self._index

    @property
    def length(self) -> int:
        return self._length

    def at_end(self) -> bool:
        return self._index == self._length

    def read(self) -> _T:
        if self.at_end():
            raise ContractViolation('Cannot read the end position of a source')
        return self._source[self._index]

    def next(self) -> None:
        if self.at_end():
            raise ContractViolation('Cannot step past the end position of a source')
        self._index += 1

    def prev(self) -> None:
        if self._index == 0:
            raise ContractViolation('Cannot step before the begin position of a source')
        self._index -= 1

    def advance(self, n: int) -> None:
        index = self._index + n
        if not 0 <= index <= self._length:
            raise ContractViolation(f'Index {index} lies outside of the source [0, {self._length}]')
        self._index = index

    def seek_end(self) -> None:
        self._index = self._length

    def equal(self, other: 'IndexCursor[_T]') -> bool:
        return self._source is other._source and self._index == other._index

    def distance(self, other: 'IndexCursor[_T]') -> int:
        return other._index - self._index

    def copy(self) -> Self:
        return type(self)(self._source, self._index)

    def __copy__(self) -> Self:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IndexCursor):
            return self.equal(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f'{type(self).__name__}(index={self._index})'


SourceCursor = Union[ForwardCursor, BidirectionalCursor, IndexCursor]


def cursor_type_for(capabilities: Capability) -> type:
    """
    Selects the source cursor type matching the given capabilities.
    :param capabilities: The capabilities of a source.
    :return: The most capable cursor type the source supports.
    """
    if Capability.RANDOM_ACCESS in capabilities:
        return IndexCursor
    if Capability.BIDIRECTIONAL in capabilities:
        return BidirectionalCursor
    if Capability.FORWARD in capabilities:
        return ForwardCursor
    raise NotTraversableError('The source is not traversable')
