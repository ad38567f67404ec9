from typing import Protocol, TypeVar, Iterator

_T_co = TypeVar('_T_co', covariant=True)


class MultipassIterable(Protocol[_T_co]):
    """
    Static duck typing class for anything that returns a fresh iterator every time ``iter()`` is called on it.
    """

    def __iter__(self) -> Iterator[_T_co]:
        ...


class SupportsReversed(MultipassIterable[_T_co], Protocol[_T_co]):
    """
    Static duck typing class for a multipass iterable that can also be iterated from its end via ``reversed()``.
    """

    def __reversed__(self) -> Iterator[_T_co]:
        ...
