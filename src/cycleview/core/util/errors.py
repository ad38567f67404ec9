class ContractViolation(AssertionError):
    """
    Raised when a precondition of a cyclic view or one of its positions is violated. This always indicates misuse by
    the caller and is never raised for a recoverable condition.
    """


class EmptySourceError(ContractViolation):
    """
    Raised when a cyclic view is requested over a source without any elements
    """


class NotTraversableError(TypeError):
    """
    Raised when a source cannot be traversed more than once, or cannot be traversed at all
    """
