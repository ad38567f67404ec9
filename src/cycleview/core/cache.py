from threading import Lock
from typing import Callable, Generic, Optional, TypeVar

from cycleview.core.util.errors import ContractViolation

_T = TypeVar('_T')


class NonPropagatingCache(Generic[_T]):
    """
    A write-once slot holding an optional value. The slot is filled at most once, even when several threads race to
    fill it. Copying, deep copying or pickling the cache yields an empty cache; the cached value is never duplicated.
    """
    __slots__ = ('_value', '_lock')

    def __init__(self) -> None:
        self._value: Optional[_T] = None
        self._lock = Lock()

    def __bool__(self) -> bool:
        return self._value is not None

    @property
    def value(self) -> _T:
        """
        The cached value.
        :raises ContractViolation: If the cache has not been filled yet.
        """
        if self._value is None:
            raise ContractViolation('The cache has not been filled yet')
        return self._value

    def emplace(self, value: _T) -> bool:
        """
        Fills the cache with the given value unless it already holds one.
        :param value: The value to store.
        :return: ``True`` if the value was stored; ``False`` if the cache was filled before.
        """
        if self._value is not None:
            return False
        with self._lock:
            if self._value is not None:
                return False
            self._value = value
            return True

    def get_or_fill(self, factory: Callable[[], _T]) -> _T:
        """
        Returns the cached value, computing and storing it first if the cache is empty.
        :param factory: Callable producing the value to be cached.
        :return: The cached value.
        """
        if self._value is None:
            with self._lock:
                if self._value is None:
                    self._value = factory()
        return self._value

    def __copy__(self) -> 'NonPropagatingCache[_T]':
        return type(self)()

    def __deepcopy__(self, memo: dict) -> 'NonPropagatingCache[_T]':
        return type(self)()

    def __reduce__(self) -> tuple:
        return type(self), ()

    def __repr__(self) -> str:
        state = 'empty' if self._value is None else repr(self._value)
        return f'{type(self).__name__}({state})'
