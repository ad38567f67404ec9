from typing import Final


class UnreachableSentinel:
    """
    End marker of an endless view. It compares unequal to every position, so any loop running until it reaches the
    marker never terminates on its own.
    """
    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        return other is self

    def __ne__(self, other: object) -> bool:
        return other is not self

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        return 'UNREACHABLE'

    def __copy__(self) -> 'UnreachableSentinel':
        return self

    def __deepcopy__(self, memo: dict) -> 'UnreachableSentinel':
        return self

    def __reduce__(self) -> str:
        return 'UNREACHABLE'


UNREACHABLE: Final[UnreachableSentinel] = UnreachableSentinel()
