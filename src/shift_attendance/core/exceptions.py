class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity (template, shift, ...) does not exist."""


class PreconditionError(DomainError):
    """Raised when a target is not in the state a batch mutation requires."""
