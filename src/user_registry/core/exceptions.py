class DomainError(Exception):
    """Base exception for business rule violations."""


class NotFoundError(DomainError):
    """Raised when a referenced user id or token does not exist."""


class BadRequestError(DomainError):
    """Raised when input data is malformed or conflicts with stored data."""


class ConflictError(BadRequestError):
    """Raised when a write would give two users the same username."""


class ForbiddenError(DomainError):
    """Raised when credentials are wrong or a token lacks the permission."""
