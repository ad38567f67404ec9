from .core import cycle, CycledView, BidirectionalCycledView, RandomAccessCycledView, IdentityView, \
    CycleCursor, BidirectionalCycleCursor, RandomAccessCycleCursor, Capability, capabilities_of, UNREACHABLE

from .core.util.errors import ContractViolation, EmptySourceError, NotTraversableError

from .functional import bind_back, Adaptor
