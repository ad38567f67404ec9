from .traversal import Capability, capabilities_of, ForwardCursor, BidirectionalCursor, IndexCursor

from .sentinel import UnreachableSentinel, UNREACHABLE
from .cache import NonPropagatingCache

from .cursor import CycleCursor, BidirectionalCycleCursor, RandomAccessCycleCursor

from .view import CycledView, BidirectionalCycledView, RandomAccessCycledView, IdentityView, make_cycled_view, cycle
