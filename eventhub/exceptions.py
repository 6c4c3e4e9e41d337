from typing import List, Optional


class EventHubError(Exception):
    """Base exception for errors reported to the client."""
    status_code = 500

    def __init__(self, message: str, errors: Optional[List[dict]] = None):
        self.message = message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(EventHubError):
    status_code = 400

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors=[{"field": field, "message": message}])


class AuthenticationError(EventHubError):
    status_code = 401

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class AuthorizationError(EventHubError):
    status_code = 403


class NotFoundError(EventHubError):
    status_code = 404


class ConflictError(EventHubError):
    # Duplicate save/registration is a bad request for API clients
    status_code = 400
