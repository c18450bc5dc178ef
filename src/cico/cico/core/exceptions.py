class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when a PIN, token or shared secret is invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced row does not exist in the caller's tenant."""


class BackendError(DomainError):
    """Raised when a Supabase query, RPC or storage call fails."""


class DeliveryError(DomainError):
    """Raised when the email provider rejects a message."""
