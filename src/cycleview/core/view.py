import operator
from logging import getLogger, Logger
from typing import Any, ClassVar, Final, Generic, Iterable, Iterator, Optional, Type, TypeVar, Union

from cycleview.core.cache import NonPropagatingCache
from cycleview.core.cursor import CycleCursor, BidirectionalCycleCursor, RandomAccessCycleCursor
from cycleview.core.sentinel import UNREACHABLE, UnreachableSentinel
from cycleview.core.traversal import Capability, ForwardCursor, SourceCursor, capabilities_of, cursor_type_for, \
    is_empty
from cycleview.core.util.errors import ContractViolation, EmptySourceError, NotTraversableError
from cycleview.functional import Adaptor

_T = TypeVar('_T')

logger: Final[Logger] = getLogger(__name__)


class CycledView(Generic[_T]):
    """
    An endless view repeating a finite, non-empty source. Elements are never copied; every position reads straight
    from the source.

    Forward views only support stepping forward. :class:`BidirectionalCycledView` and :class:`RandomAccessCycledView`
    add backward steps and constant time jumps for sources that allow them; :func:`cycle` picks the right one.

    If the end position of the source cannot be created directly, the first position to reach it stores it in a cache
    shared by all positions of the view. Copies of the view start with an empty cache.
    """
    __infinite__: ClassVar[bool] = True
    cursor_type: ClassVar[Type[CycleCursor]] = CycleCursor
    required: ClassVar[Capability] = Capability.FORWARD

    def __init__(self, source: Iterable[_T], capabilities: Optional[Capability] = None) -> None:
        """
        :param source: The source to be repeated. It has to be non-empty, finite and iterable more than once.
        :param capabilities: The capabilities of the source (optional). Determined from the source if omitted.
        """
        if capabilities is None:
            capabilities = capabilities_of(source)
        if Capability.INFINITE in capabilities:
            raise ContractViolation('An endless source cannot be cycled; use cycle() to pass it through instead')
        if self.required not in capabilities:
            raise NotTraversableError(f'{type(self).__name__} requires a source supporting {self.required}, '
                                      f'got {capabilities}')
        if is_empty(source, capabilities):
            raise EmptySourceError('Cannot cycle an empty source')

        self._source = source
        self._capabilities = capabilities
        self._common = Capability.COMMON in capabilities
        self._source_cursor_type = cursor_type_for(capabilities)
        self._end_cache: NonPropagatingCache[SourceCursor] = NonPropagatingCache()
        logger.debug(f'Created {type(self).__name__} over {type(source).__name__} '
                     f'(source cursor: {self._source_cursor_type.__name__}; common: {self._common})')

    @property
    def source(self) -> Iterable[_T]:
        return self._source

    @property
    def capabilities(self) -> Capability:
        return self._capabilities

    def begin(self) -> CycleCursor[_T]:
        """
        :return: A position at the begin of the source within the first lap.
        """
        return self.cursor_type(self)

    def end(self) -> UnreachableSentinel:
        """
        :return: The unreachable end marker; no position ever equals it.
        """
        return UNREACHABLE

    def source_begin(self) -> SourceCursor:
        return self._source_cursor_type(self._source)

    def source_end(self, start: Optional[SourceCursor] = None) -> SourceCursor:
        """
        Returns a new cursor at the end position of the source.
        :param start: A cursor of the source to count from if the end has to be discovered (optional). If omitted, the
        end has to be known already.
        :return: A cursor at the end position of the source.
        """
        if self._common:
            return self._source_cursor_type.end_of(self._source)
        if start is None:
            return self._end_cache.value.copy()

        def discover() -> SourceCursor:
            end = start.copy()
            end.seek_end()
            logger.debug(f'Discovered end of {type(self._source).__name__} at index {end.index}')
            return end

        return self._end_cache.get_or_fill(discover).copy()

    def remember_end(self, end: SourceCursor) -> None:
        """
        Caches the end position of the source if it cannot be created directly and has not been cached yet.
        :param end: A cursor at the end position of the source.
        """
        if not self._common and self._end_cache.emplace(end.copy()):
            logger.debug(f'Cached end of {type(self._source).__name__} at index {end.index}')

    def source_length(self, start: Optional[SourceCursor] = None) -> int:
        """
        :param start: A cursor of the source to count from if the end has to be discovered (optional).
        :return: The number of elements in the source.
        """
        return self.source_end(self.source_begin() if start is None else start).index

    def __iter__(self) -> Iterator[_T]:
        cursor = self.begin()
        while True:
            yield cursor.read()
            cursor.next()

    def __copy__(self) -> 'CycledView[_T]':
        return type(self)(self._source, self._capabilities)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._source!r})'


class BidirectionalCycledView(CycledView[_T]):
    """
    A cycled view over a source that can be traversed in both directions.
    """
    cursor_type: ClassVar[Type[CycleCursor]] = BidirectionalCycleCursor
    required: ClassVar[Capability] = Capability.BIDIRECTIONAL


class RandomAccessCycledView(BidirectionalCycledView[_T]):
    """
    A cycled view over a sequence or numpy array. Any logical index is reachable in constant time, either through a
    position or by indexing the view directly: ``view[i]`` is the same as ``source[i % len(source)]``.
    """
    cursor_type: ClassVar[Type[CycleCursor]] = RandomAccessCycleCursor
    required: ClassVar[Capability] = Capability.RANDOM_ACCESS

    def __getitem__(self, index: int) -> _T:
        cursor = self.begin()
        cursor.advance(operator.index(index))
        return cursor.read()


class IdentityView(Generic[_T]):
    """
    Pass-through view over an already endless source. Positions are the source's own; no laps are counted.
    """
    __infinite__: ClassVar[bool] = True

    def __init__(self, source: Iterable[_T]) -> None:
        if Capability.INFINITE not in capabilities_of(source):
            raise ContractViolation(f'{type(source).__name__} is not endless')
        self._source = source

    @property
    def source(self) -> Iterable[_T]:
        return self._source

    def begin(self) -> Union[CycleCursor[_T], ForwardCursor[_T]]:
        begin = getattr(self._source, 'begin', None)
        if callable(begin):
            return begin()
        return ForwardCursor(self._source)

    def end(self) -> UnreachableSentinel:
        return UNREACHABLE

    def __iter__(self) -> Iterator[_T]:
        return iter(self._source)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._source!r})'


def make_cycled_view(source: Any) -> Union[CycledView, IdentityView]:
    """
    Creates an endless view repeating the given source. The most capable view the source supports is chosen once;
    endless sources are passed through unchanged.
    :param source: A non-empty source that can be iterated more than once.
    :return: The view over the source.
    :raises EmptySourceError: If the source is empty.
    :raises NotTraversableError: If the source can only be iterated once.
    """
    caps = capabilities_of(source)
    if Capability.INFINITE in caps:
        return IdentityView(source)
    if Capability.RANDOM_ACCESS in caps:
        return RandomAccessCycledView(source, caps)
    if Capability.BIDIRECTIONAL in caps:
        return BidirectionalCycledView(source, caps)
    return CycledView(source, caps)


cycle: Final[Adaptor] = Adaptor(make_cycled_view)
