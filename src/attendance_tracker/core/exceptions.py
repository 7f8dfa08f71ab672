class DomainError(Exception):
    """Base class for attendance-tracker rule violations."""


class ValidationError(DomainError):
    """Rejected input, e.g. a missing name, a duplicate username or a company
    outside the actor's allowed companies. Nothing is written."""


class AuthenticationError(DomainError):
    """Unknown username or wrong password at sign-in."""


class AuthorizationError(DomainError):
    """Signed-in user is not allowed here (e.g. non-admin managing users)."""
