"""Custom exception hierarchy for mhimmo."""


class MhImmoError(Exception):
    """Base exception for all mhimmo errors."""

    http_status = 500
    code = "internal_error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        """Error body returned by the HTTP API."""
        return {"error": {"code": self.code, "message": self.message}}


class EntityNotFoundError(MhImmoError):
    """Raised when a referenced entity does not exist."""

    http_status = 404
    code = "not_found"


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class InvalidEntityStateError(MhImmoError):
    """Raised when an entity is in an invalid state for the operation."""

    http_status = 409
    code = "invalid_state"


class AuthenticationError(MhImmoError):
    """Raised when no valid identity is bound to a request."""

    http_status = 401
    code = "unauthorized"


class AuthorizationError(MhImmoError):
    """Raised when the caller's role fails a permission check."""

    http_status = 403
    code = "forbidden"


class ValidationError(MhImmoError):
    """Raised when input is rejected before reaching the store."""

    http_status = 400
    code = "validation_error"


class ConfigurationError(MhImmoError):
    """Raised when configuration is invalid or missing."""


class StorageError(MhImmoError):
    """Raised when a key-value backend operation fails."""

    code = "storage_error"
