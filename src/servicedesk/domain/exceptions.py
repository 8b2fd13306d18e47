"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input, e.g. a non-positive quantity."""


class EntityNotFoundError(DomainException):
    """A referenced order, client, technician, product or service does not exist."""


class InvalidTransitionError(DomainException):
    """A status or assignment precondition was violated."""


class ConcurrentUpdateError(InvalidTransitionError):
    """The order changed in the store after it was read."""


class InsufficientStockError(DomainException):
    """The requested quantity exceeds the stock on hand."""
