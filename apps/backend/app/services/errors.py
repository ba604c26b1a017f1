"""Service-layer errors, translated to HTTP responses by the routes."""


class ServiceError(Exception):
    """Base class for errors reported to the caller of a service."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PermissionDeniedError(ServiceError):
    """The caller lacks the role or organization required for the operation."""

    pass


class InvalidRequestError(ServiceError):
    """The request names missing or unknown data."""

    pass


class NotFoundError(ServiceError):
    """The requested resource does not exist in the caller's scope."""

    pass


class ConflictError(ServiceError):
    """The request collides with an existing resource."""

    pass


class AuthenticationError(ServiceError):
    """The caller could not re-confirm their identity."""

    pass
