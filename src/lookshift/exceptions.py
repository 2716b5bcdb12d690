"""Custom exception classes for lookshift."""


class LookShiftError(Exception):
    """Base exception for all lookshift errors."""

    pass


class ConfigError(LookShiftError):
    """Exception raised for configuration errors."""

    pass


class SerializationError(LookShiftError):
    """Exception raised when an exported file cannot be written or parsed."""

    pass


class ValidationError(LookShiftError):
    """Exception raised when imported content is missing required parts."""

    pass


class UnknownOperationError(LookShiftError):
    """Exception raised when no field allow-list is registered for an operation."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"No field allow-list registered for operation '{operation}'")


class RemoteError(LookShiftError):
    """Exception raised when a call against the Looker API fails."""

    pass


class RemoteQueryError(RemoteError):
    """Exception raised when a read against the Looker API fails."""

    pass


class RemoteWriteError(RemoteError):
    """Exception raised when a create, update or delete against the Looker API fails."""

    pass


class NotFoundError(RemoteError):
    """Exception raised when the requested object does not exist (HTTP 404)."""

    pass


class ConflictError(LookShiftError):
    """Exception raised when an import collides with existing content.

    Carries the identity of the colliding object so the operator can resolve
    the conflict by hand.
    """

    def __init__(
        self,
        message: str,
        title: str | None = None,
        slug: str | None = None,
        folder_id: str | None = None,
        existing_id: str | None = None,
    ):
        """Initialize conflict error.

        Args:
            message: Error message
            title: Title of the existing object
            slug: Slug of the existing object
            folder_id: Folder the conflict was detected in
            existing_id: ID of the existing object
        """
        self.title = title
        self.slug = slug
        self.folder_id = folder_id
        self.existing_id = existing_id
        super().__init__(message)
