"""Domain-level exceptions.

All business rule violations and storage failures are expressed as
subclasses of DomainException so the CLI layer can catch them uniformly
and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PersistenceError(DomainException):
    """The storage layer failed (connectivity, constraint, malformed row)."""


class IntegrityWarning(UserWarning):
    """Stored data breaks an invariant that the read path can tolerate.

    Emitted when a client has more than one unpaid order.
    """
