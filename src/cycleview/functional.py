from typing import Any, Callable, Generic, TypeVar

_R = TypeVar('_R')


class bind_back(Generic[_R]):
    """
    Partially applies trailing arguments to a callable; the counterpart of ``functools.partial``, which binds leading
    arguments. ``bind_back(fn, 2, 3)(1) == fn(1, 2, 3)``. Keyword arguments passed on call override bound ones.
    """
    __slots__ = ('fn', 'args', 'kwargs')

    def __init__(self, fn: Callable[..., _R], *args: Any, **kwargs: Any) -> None:
        if not callable(fn):
            raise TypeError(f'{type(fn).__name__} object is not callable')
        self.fn = fn
        self.args = args
        self.kwargs = kwargs

    def __call__(self, *args: Any, **kwargs: Any) -> _R:
        return self.fn(*args, *self.args, **{**self.kwargs, **kwargs})

    def __repr__(self) -> str:
        bound = [repr(arg) for arg in self.args]
        bound.extend(f'{key}={value!r}' for key, value in self.kwargs.items())
        return f'{type(self).__name__}({self.fn!r}, {", ".join(bound)})'


class Adaptor(Generic[_R]):
    """
    Wraps a view factory so it can be applied either by calling it or by piping a source into it:
    ``adaptor(source)`` and ``source | adaptor`` are equivalent. Trailing factory arguments can be bound beforehand
    using :meth:`bind`.
    """
    __slots__ = ('_fn',)

    # keeps numpy from broadcasting ``array | adaptor`` element wise
    __array_ufunc__ = None

    def __init__(self, fn: Callable[..., _R]) -> None:
        self._fn = fn

    def __call__(self, source: Any, *args: Any, **kwargs: Any) -> _R:
        return self._fn(source, *args, **kwargs)

    def __ror__(self, source: Any) -> _R:
        return self._fn(source)

    def bind(self, *args: Any, **kwargs: Any) -> 'Adaptor[_R]':
        """
        Creates a new adaptor with the given trailing arguments bound to the wrapped factory.
        :return: An adaptor only expecting the source.
        """
        return Adaptor(bind_back(self._fn, *args, **kwargs))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._fn!r})'
