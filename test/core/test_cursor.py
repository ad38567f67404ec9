import copy
import unittest

import numpy as np

from cycleview.core import cycle, UNREACHABLE
from cycleview.core.util.errors import ContractViolation


class Walk:
    """
    Multipass iterable without ``len()``, indexing or ``reversed()``.
    """

    def __init__(self, *items) -> None:
        self._items = items

    def __iter__(self):
        return iter(self._items)


class ReversibleWalk(Walk):

    def __reversed__(self):
        return reversed(self._items)


def forward_sources() -> tuple:
    return bidirectional_sources() + (Walk('a', 'b', 'c'),)


def bidirectional_sources() -> tuple:
    return random_access_sources() + (dict.fromkeys('abc'), ReversibleWalk('a', 'b', 'c'))


def random_access_sources() -> tuple:
    return ['a', 'b', 'c'], ('a', 'b', 'c'), 'abc', np.array(['a', 'b', 'c'])


def stepped(view, steps: int):
    cursor = view.begin()
    for _ in range(steps):
        cursor.next()
    return cursor


class TestForward(unittest.TestCase):

    def test_reads_and_laps(self) -> None:
        for source in forward_sources():
            with self.subTest(source=source):
                cursor = cycle(source).begin()
                for expected, lap in zip('abcabca', (0, 0, 0, 1, 1, 1, 2)):
                    self.assertEqual(cursor.read(), expected)
                    self.assertEqual(cursor.lap, lap)
                    cursor.next()

    def test_logical_index(self) -> None:
        source = ['e0', 'e1', 'e2', 'e3']
        cursor = cycle(source).begin()
        for i in range(41):
            self.assertEqual(cursor.read(), source[i % len(source)])
            cursor.next()

    def test_full_lap(self) -> None:
        for source in forward_sources():
            with self.subTest(source=source):
                view = cycle(source)
                cursor = view.begin()
                for _ in range(3):
                    cursor.next()
                self.assertEqual(cursor.lap, 1)
                self.assertEqual(cursor.index, view.begin().index)
                self.assertNotEqual(cursor, view.begin())

    def test_read_right_after_wrap(self) -> None:
        for source in forward_sources():
            with self.subTest(source=source):
                cursor = stepped(cycle(source), 3)
                self.assertEqual(cursor.index, 0)
                self.assertEqual(cursor.read(), 'a')

    def test_equality(self) -> None:
        for source in forward_sources():
            with self.subTest(source=source):
                view = cycle(source)
                self.assertEqual(stepped(view, 5), stepped(view, 5))
                self.assertNotEqual(stepped(view, 5), stepped(view, 4))
                self.assertNotEqual(stepped(view, 5), stepped(view, 2))
                self.assertNotEqual(stepped(view, 5), UNREACHABLE)
                self.assertFalse(stepped(view, 5).equal(UNREACHABLE))

    def test_equality_across_views(self) -> None:
        source = ['a', 'b']
        first = cycle(source)
        second = cycle(source)
        self.assertNotEqual(first.begin(), second.begin())
        self.assertFalse(first.begin().equal(second.begin()))

    def test_copy_is_independent(self) -> None:
        for source in forward_sources():
            with self.subTest(source=source):
                cursor = stepped(cycle(source), 2)
                duplicate = copy.copy(cursor)
                self.assertEqual(duplicate, cursor)
                duplicate.next()
                self.assertEqual(cursor.read(), 'c')
                self.assertEqual(duplicate.read(), 'a')
                self.assertEqual(duplicate.lap, 1)
                self.assertEqual(cursor.lap, 0)

    def test_distance(self) -> None:
        for source in forward_sources():
            with self.subTest(source=source):
                view = cycle(source)
                begin = view.begin()
                for steps in range(10):
                    cursor = stepped(view, steps)
                    self.assertEqual(begin.distance_to(cursor), steps)
                    self.assertEqual(cursor.distance_to(begin), -steps)

    def test_distance_before_first_wrap(self) -> None:
        view = cycle(Walk('a', 'b', 'c'))
        with self.assertLogs('cycleview.core.view', 'DEBUG') as cm:
            self.assertEqual(view.begin().distance_to(stepped(view, 2)), 2)
        self.assertEqual(cm.output, ['DEBUG:cycleview.core.view:Discovered end of Walk at index 3'])

    def test_explicit_source_position(self) -> None:
        view = cycle(['a', 'b', 'c'])
        it = view.source_begin()
        it.next()
        cursor = type(view.begin())(view, it, 2)
        self.assertEqual(cursor.read(), 'b')
        self.assertEqual(cursor, stepped(view, 7))
        self.assertEqual(type(view.begin())(view), view.begin())

    def test_distance_across_views(self) -> None:
        with self.assertRaises(ContractViolation):
            cycle([1, 2]).begin().distance_to(cycle([1, 2]).begin())


class TestBidirectional(unittest.TestCase):

    def test_round_trip(self) -> None:
        for source in bidirectional_sources():
            with self.subTest(source=source):
                view = cycle(source)
                for steps in range(10):
                    cursor = stepped(view, steps)
                    cursor.next()
                    cursor.prev()
                    self.assertEqual(cursor, stepped(view, steps))
                    self.assertEqual(cursor.read(), 'abc'[steps % 3])

    def test_backward_over_laps(self) -> None:
        for source in bidirectional_sources():
            with self.subTest(source=source):
                cursor = stepped(cycle(source), 7)
                read = []
                for _ in range(7):
                    cursor.prev()
                    read.append((cursor.read(), cursor.lap))
                self.assertEqual(read, [('a', 2), ('c', 1), ('b', 1), ('a', 1), ('c', 0), ('b', 0), ('a', 0)])
                self.assertEqual(cursor.lap, 0)
                self.assertEqual(cursor.index, 0)

    def test_before_first_lap(self) -> None:
        for source in bidirectional_sources():
            with self.subTest(source=source):
                cursor = cycle(source).begin()
                with self.assertRaises(ContractViolation):
                    cursor.prev()
                self.assertEqual(cursor.lap, 0)
                self.assertEqual(cursor.read(), 'a')


class TestRandomAccess(unittest.TestCase):

    def test_advance_scenario(self) -> None:
        for source in random_access_sources():
            with self.subTest(source=source):
                cursor = cycle(source).begin()
                cursor.advance(4)
                self.assertEqual((cursor.lap, cursor.index), (1, 1))
                self.assertEqual(cursor.read(), 'b')
                # logical index 4 - 5 lies before the first lap
                with self.assertRaises(ContractViolation):
                    cursor.advance(-5)
                self.assertEqual((cursor.lap, cursor.index), (1, 1))

                cursor.advance(3)
                self.assertEqual((cursor.lap, cursor.index), (2, 1))
                cursor.advance(-5)
                self.assertEqual((cursor.lap, cursor.index), (0, 2))
                self.assertEqual(cursor.read(), 'c')

    def test_advance_matches_stepping(self) -> None:
        view = cycle(['a', 'b', 'c'])
        for steps in range(20):
            cursor = view.begin()
            cursor.advance(steps)
            self.assertEqual(cursor, stepped(view, steps))

    def test_advance_round_trip(self) -> None:
        view = cycle(['a', 'b', 'c'])
        start = view.begin() + 25
        for n in range(-25, 40):
            with self.subTest(n=n):
                moved = start + n
                self.assertEqual(moved - n, start)
                self.assertEqual(start.distance_to(moved), n)
                self.assertEqual(moved - start, n)
                self.assertEqual((start + 0).distance_to(moved), n)

    def test_advance_before_first_lap(self) -> None:
        cursor = cycle(['a', 'b', 'c']).begin() + 2
        with self.assertRaises(ContractViolation):
            cursor.advance(-3)
        self.assertEqual((cursor.lap, cursor.index), (0, 2))
        cursor.advance(-2)
        self.assertEqual((cursor.lap, cursor.index), (0, 0))

    def test_operators(self) -> None:
        view = cycle('abcd')
        cursor = view.begin()
        cursor += 9
        self.assertEqual(cursor.read(), 'b')
        self.assertEqual((cursor.lap, cursor.index), (2, 1))
        cursor -= 6
        self.assertEqual(cursor.read(), 'd')
        self.assertEqual(cursor.lap, 0)
        self.assertEqual((3 + cursor).read(), 'c')
        self.assertEqual(cursor[1], 'a')
        self.assertEqual(cursor.read(), 'd')
        with self.assertRaises(TypeError):
            cursor.advance(0.5)

    def test_numpy_source(self) -> None:
        source = np.arange(5) * 10
        cursor = cycle(source).begin()
        cursor.advance(12)
        self.assertEqual(cursor.read(), 20)
        self.assertEqual(cursor.lap, 2)
        cursor.prev()
        cursor.prev()
        cursor.prev()
        self.assertEqual(cursor.read(), 40)
        self.assertEqual(cursor.lap, 1)


if __name__ == '__main__':
    unittest.main()
