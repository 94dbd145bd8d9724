class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain_error"


class NotFoundError(DomainError):
    """Raised when a referenced student, interview, guardian or staff user is absent."""

    kind = "not_found"


class InvalidStateError(DomainError):
    """Raised when a workflow transition's precondition is not met."""

    kind = "invalid_state"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation_error"


class ConflictError(DomainError):
    """Raised when a concurrent write won or a unique key was violated."""

    kind = "conflict"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    kind = "authentication_error"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = "authorization_error"
