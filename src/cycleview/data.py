from dataclasses import dataclass, field
from typing import Final

from cycleview.core.util.defs import StrEnum, DEFAULT_TAKE_COUNT, DEFAULT_SEPARATOR


class Method(StrEnum):
    """
    Enum describing the methods available on the command line.
    """
    Take: Final[str] = 'take'
    Seek: Final[str] = 'seek'


@dataclass
class BaseSettings:
    """
    Class storing settings shared by all command line methods
    :cvar items: The items to be cycled
    :cvar show_laps: Whether every element should be printed together with its lap and source index
    :cvar separator: The string printed after every element
    """
    items: list[str] = field(default_factory=list)
    show_laps: bool = False
    separator: str = DEFAULT_SEPARATOR


@dataclass
class TakeSettings(BaseSettings):
    """
    Class storing settings of the take method
    :cvar count: The amount of elements to be printed from the begin of the cycled items
    """
    count: int = DEFAULT_TAKE_COUNT


@dataclass
class SeekSettings(BaseSettings):
    """
    Class storing settings of the seek method
    :cvar index: The logical index of the element to be printed
    """
    index: int = 0
