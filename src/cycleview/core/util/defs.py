from enum import Enum
from typing import Final

# META
PACKAGE_NAME: Final[str] = __name__.split('.')[0]


class StrEnum(str, Enum):
    pass

# CLI
DEFAULT_TAKE_COUNT: Final[int] = 10
DEFAULT_SEPARATOR: Final[str] = '\n'
