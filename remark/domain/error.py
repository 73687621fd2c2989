"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Raised for missing or oversized page filters, malformed identifiers and
    invalid comment submissions. Never retried.
    """

    pass


class NotAuthorizedError(DomainError):
    """Raised when a viewer may not act on a comment."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"Not authorized to delete {resource} {resource_id}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class StorageError(DomainError):
    """Raised when the comment store is unreachable or rejects a statement.

    Surfaced to the caller as a generic failure, never retried here.
    """

    pass
