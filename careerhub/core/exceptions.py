"""Error taxonomy for applicant decisioning operations."""

from typing import Any, Optional


class CareerHubError(Exception):
    """
    Base class for every error surfaced by a public operation.

    Attributes:
        message: Error description
        code: Stable machine-readable error kind
        details: Extra context for the caller (ids, limits)
    """

    code = "internal"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(CareerHubError):
    """A referenced entity does not exist."""

    code = "not_found"

    def __init__(self, resource: str, identifier: Any):
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            f"{resource} not found: {identifier}",
            {"resource": resource, "id": str(identifier)},
        )


class InvalidArgumentError(CareerHubError):
    """A malformed value or unrecognized enum label was supplied."""

    code = "invalid_argument"


class ConflictError(CareerHubError):
    """The submission duplicates an existing one."""

    code = "conflict"


class LimitExceededError(CareerHubError):
    """A per-owner cap would be exceeded."""

    code = "limit_exceeded"


class ForbiddenError(CareerHubError):
    """The caller does not own the resource it is acting on."""

    code = "forbidden"


class UnavailableError(CareerHubError):
    """
    The document store failed transiently.

    Attributes:
        operation: Store operation that failed
        original_error: The driver exception
    """

    code = "unavailable"

    def __init__(self, operation: str, original_error: Optional[Exception] = None):
        self.operation = operation
        self.original_error = original_error
        message = f"Document store unavailable during {operation}"
        if original_error is not None:
            message = f"{message}: {original_error}"
        super().__init__(message, {"operation": operation})
