import argparse
import sys
from itertools import islice
from logging import getLogger, Logger
from typing import Final, Optional, Sequence, TextIO

from cycleview.core.cursor import CycleCursor
from cycleview.core.view import RandomAccessCycledView, cycle
from cycleview.core.util.defs import DEFAULT_TAKE_COUNT
from cycleview.core.util.errors import ContractViolation
from cycleview.core.util.loggings import LoggerStep, apply_default_config
from cycleview.data import Method, TakeSettings, SeekSettings

logger: Final[Logger] = getLogger(__name__)


def _format(cursor: CycleCursor, show_laps: bool) -> str:
    if show_laps:
        return f'{cursor.read()}\t(lap {cursor.lap}, index {cursor.index})'
    return str(cursor.read())


def take(se: TakeSettings, out: Optional[TextIO] = None) -> None:
    """
    Prints the first elements of the cycled items.
    :param se: The settings to be used.
    :param out: The stream to print to (optional). Defaults to ``sys.stdout``.
    """
    if se.count < 0:
        raise ValueError(f'Cannot take {se.count} elements')
    if out is None:
        out = sys.stdout
    view = cycle(se.items)
    with LoggerStep(logger, f'Taking {se.count} elements from {len(se.items)} items'):
        if not se.show_laps:
            for item in islice(view, se.count):
                out.write(f'{item}{se.separator}')
            return

        cursor = view.begin()
        for _ in range(se.count):
            out.write(f'{_format(cursor, True)}{se.separator}')
            cursor.next()


def seek(se: SeekSettings, out: Optional[TextIO] = None) -> None:
    """
    Prints the element at a logical index of the cycled items.
    :param se: The settings to be used.
    :param out: The stream to print to (optional). Defaults to ``sys.stdout``.
    """
    if out is None:
        out = sys.stdout
    view: RandomAccessCycledView = cycle(se.items)
    with LoggerStep(logger, f'Seeking logical index {se.index} within {len(se.items)} items'):
        cursor = view.begin()
        cursor.advance(se.index)
        out.write(f'{_format(cursor, se.show_laps)}{se.separator}')


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f'expected a non-negative integer, got {number}')
    return number


def build_parser() -> argparse.ArgumentParser:
    arg_parser = argparse.ArgumentParser(prog='cycleview', description='repeat a list of items endlessly')
    arg_parser.add_argument('-v', '--verbose', action='store_true', help='log every processing step')
    sub_parsers = arg_parser.add_subparsers(dest='method', help='method to be executed', required=True)

    take_sub_parser = sub_parsers.add_parser(
        name=Method.Take.value,
        help='print the first elements of the cycled items'
    )
    take_sub_parser.add_argument('items', nargs='+', help='items to be cycled')
    take_sub_parser.add_argument('-n', '--count', type=_non_negative_int, default=DEFAULT_TAKE_COUNT,
                                 help=f'amount of elements to print (defaults to {DEFAULT_TAKE_COUNT})')
    take_sub_parser.add_argument('--laps', action='store_true', help='print lap and source index of every element')

    seek_sub_parser = sub_parsers.add_parser(
        name=Method.Seek.value,
        help='print the element at a logical index of the cycled items'
    )
    seek_sub_parser.add_argument('items', nargs='+', help='items to be cycled')
    seek_sub_parser.add_argument('-i', '--index', type=int, required=True, help='logical index to be printed')
    seek_sub_parser.add_argument('--laps', action='store_true', help='print lap and source index of the element')

    return arg_parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    arg_parser = build_parser()
    args = arg_parser.parse_args(argv)
    if args.verbose:
        apply_default_config('DEBUG')

    try:
        if args.method == Method.Take:
            take(TakeSettings(items=args.items, show_laps=args.laps, count=args.count))
        elif args.method == Method.Seek:
            seek(SeekSettings(items=args.items, show_laps=args.laps, index=args.index))
    except ContractViolation as e:
        arg_parser.error(str(e))


if __name__ == '__main__':
    main()
