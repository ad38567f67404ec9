import operator
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar, Union

from typing_extensions import Self

from cycleview.core.traversal import SourceCursor
from cycleview.core.util.errors import ContractViolation

if TYPE_CHECKING:
    from cycleview.core.view import CycledView

_T = TypeVar('_T')


class CycleCursor(Generic[_T]):
    """
    A position within a cycled view: a source cursor combined with the number of completed laps over the source.
    Positions keep a reference to the view they were created from and are only comparable to positions of that view.
    """
    __slots__ = ('_view', '_it', '_lap')

    def __init__(self, view: 'CycledView[_T]', it: Optional[SourceCursor] = None, lap: int = 0) -> None:
        """
        :param view: The view the position belongs to.
        :param it: The position within the source (optional). Defaults to the source's begin.
        :param lap: The number of completed laps (defaults to ``0``).
        """
        self._view = view
        self._it = view.source_begin() if it is None else it
        self._lap = lap

    @property
    def view(self) -> 'CycledView[_T]':
        return self._view

    @property
    def lap(self) -> int:
        return self._lap

    @property
    def index(self) -> int:
        """
        The position within the source, counted from its begin.
        """
        return self._it.index

    def read(self) -> _T:
        return self._it.read()

    def next(self) -> None:
        """
        Moves the position one element forward, wrapping around to the source's begin after its last element.
        """
        if self._it.at_end():
            raise ContractViolation('Position is at the end of its source without having wrapped around')
        self._it.next()
        if self._it.at_end():
            self._lap += 1
            self._view.remember_end(self._it)
            self._it = self._view.source_begin()

    def equal(self, other: Any) -> bool:
        if not isinstance(other, CycleCursor) or other._view is not self._view:
            return False
        return self._lap == other._lap and self._it.equal(other._it)

    def distance_to(self, other: 'CycleCursor[_T]') -> int:
        """
        Computes the number of forward steps from this position to another one. Resolves the source's length if it is
        not known yet.
        :param other: A position of the same view.
        :return: The signed distance between both positions.
        """
        if other._view is not self._view:
            raise ContractViolation('Cannot compute the distance between positions of different views')
        dist = self._view.source_length(self._it)
        return (other._lap - self._lap) * dist + self._it.distance(other._it)

    def copy(self) -> Self:
        return type(self)(self._view, self._it.copy(), self._lap)

    def __copy__(self) -> Self:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CycleCursor):
            return self.equal(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f'{type(self).__name__}(lap={self._lap}, index={self._it.index})'


class BidirectionalCycleCursor(CycleCursor[_T]):
    __slots__ = ()

    def prev(self) -> None:
        """
        Moves the position one element backward, wrapping around to the source's last element when at its begin.
        """
        if self._it.index == 0:
            if self._lap <= 0:
                raise ContractViolation('Cannot step before the begin of the first lap')
            self._lap -= 1
            self._it = self._view.source_end()
        self._it.prev()


class RandomAccessCycleCursor(BidirectionalCycleCursor[_T]):
    __slots__ = ()

    def advance(self, n: int) -> None:
        """
        Moves the position by ``n`` elements in constant time, regardless of how many laps are crossed.
        :param n: The number of elements to move; negative values move backward.
        """
        n = operator.index(n)
        dist = self._view.source_length(self._it)
        laps, offset = divmod(self._it.index + n, dist)
        if self._lap + laps < 0:
            raise ContractViolation(f'Cannot move {n} elements from lap {self._lap}, index {self._it.index}: '
                                    f'the position would lie before the first lap')
        self._lap += laps
        it = self._view.source_begin()
        it.advance(offset)
        self._it = it

    def __add__(self, n: int) -> Self:
        cursor = self.copy()
        cursor.advance(n)
        return cursor

    __radd__ = __add__

    def __iadd__(self, n: int) -> Self:
        self.advance(n)
        return self

    def __sub__(self, other: Union[int, 'RandomAccessCycleCursor[_T]']) -> Union[int, Self]:
        if isinstance(other, CycleCursor):
            return other.distance_to(self)
        return self + -operator.index(other)

    def __isub__(self, n: int) -> Self:
        self.advance(-operator.index(n))
        return self

    def __getitem__(self, n: int) -> _T:
        return (self + n).read()
