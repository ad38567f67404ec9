from copy import deepcopy
from logging import Logger, LogRecord
import logging.config
from time import perf_counter
from typing import ContextManager, Final, Optional

from cycleview.core.util.defs import PACKAGE_NAME

DEFAULT_LOGGING_CONFIG: Final[dict] = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '[%(asctime)s] %(name)s: %(message)s',
        }
    },
    'handlers': {
        'default': {
            'class': 'logging.StreamHandler',
            'level': 'DEBUG',
            'formatter': 'simple',
            'stream': 'ext://sys.stderr',
        }
    },
    'loggers': {
        PACKAGE_NAME: {
            'level': 'INFO',
            'handlers': ['default'],
            'propagate': False,
        }
    }
}


def apply_default_config(level: Optional[str] = None) -> None:
    """
    Applies the default logging configuration to the loggers of this package.
    :param level: The level to be used for the package logger (optional). Defaults to the level stated in
    ``DEFAULT_LOGGING_CONFIG``.
    """
    config = deepcopy(DEFAULT_LOGGING_CONFIG)
    if level is not None:
        config['loggers'][PACKAGE_NAME]['level'] = level
    logging.config.dictConfig(config)


class LoggerStep(ContextManager):
    """
    Frames one command of the command line tool, e.g. a ``take`` or ``seek`` run, in the log. Entering logs what the
    command is about to do. Messages logged on ``logger`` itself while the command runs are drawn as children of the
    step; records of other loggers, child loggers included, pass unchanged. Leaving logs the outcome
    together with the elapsed time, ``'└ {exit_msg} [{ms} ms]'`` on success or ``'└ Failed ({error}) [{ms} ms]'`` when
    the command raised. The exception itself is never suppressed.
    """
    CHILD_PREFIX: Final[str] = '│ '
    LAST_PREFIX: Final[str] = '└ '

    def __init__(self, logger: Logger, enter_msg: str, exit_msg: str = 'Done', visualize_step: bool = True) -> None:
        """
        :param logger: The logger the step is reported on.
        :param enter_msg: The message logged when the command starts.
        :param exit_msg: The message logged when the command succeeded (defaults to ``'Done'``).
        :param visualize_step: Whether to draw the step's messages as a tree (defaults to ``True``).
        """
        self.logger = logger
        self.enter_msg = enter_msg
        self.exit_msg = exit_msg
        self.visualize_step = visualize_step
        self.duration_ms: Optional[float] = None
        self._start: Optional[float] = None

    def _indent(self, record: LogRecord) -> bool:
        record.msg = f'{self.CHILD_PREFIX}{record.msg}'
        return True

    def _outcome(self, exc_type: Optional[type], exc_val: Optional[BaseException]) -> str:
        prefix = self.LAST_PREFIX if self.visualize_step else ''
        if exc_type is None:
            return f'{prefix}{self.exit_msg}'
        return f'{prefix}Failed ({exc_type.__name__}: {exc_val})'

    def __enter__(self) -> 'LoggerStep':
        self.logger.info(self.enter_msg)
        if self.visualize_step:
            self.logger.addFilter(self._indent)
        self._start = perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.duration_ms = (perf_counter() - self._start) * 1000
        if self.visualize_step:
            self.logger.removeFilter(self._indent)
        self.logger.info(f'{self._outcome(exc_type, exc_val)} [{self.duration_ms:.3f} ms]')
