"""Custom exception classes for verman."""


class RegistryException(Exception):
    """Base exception for all registry errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code for API responses.
    """

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code for API responses.
        """
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class PathNotFoundError(RegistryException):
    """Raised when a path does not exist in the directory store."""

    def __init__(self, path: str, message: str | None = None) -> None:
        """Initialize the exception.

        Args:
            path: Store path that was not found.
            message: Optional message overriding the default one.
        """
        super().__init__(
            message=message or f"Path '{path}' not found",
            status_code=404,
        )
        self.path = path


class VersionNotFoundError(PathNotFoundError):
    """Raised when a requested package version directory does not exist."""

    def __init__(self, package_name: str, version: str, path: str = "") -> None:
        """Initialize the exception.

        Args:
            package_name: Name of the package.
            version: Version that was not found.
            path: Store path that was checked.
        """
        super().__init__(
            path=path,
            message=f"Version '{version}' of package '{package_name}' not found",
        )
        self.package_name = package_name
        self.version = version


class StorageError(RegistryException):
    """Raised when a storage operation fails for a reason other than absence."""

    def __init__(self, message: str, operation: str = "unknown") -> None:
        """Initialize the exception.

        Args:
            message: Error message describing the failure.
            operation: The storage operation that failed.
        """
        super().__init__(
            message=f"Storage error during '{operation}': {message}",
            status_code=500,
        )
        self.operation = operation


class InvalidConstraintError(RegistryException):
    """Raised when a version-range expression cannot be parsed."""

    def __init__(self, expression: str, reason: str = "") -> None:
        """Initialize the exception.

        Args:
            expression: The offending expression.
            reason: Optional parser detail.
        """
        message = f"Invalid version constraint '{expression}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message=message, status_code=400)
        self.expression = expression
        self.reason = reason


class InvalidLocationError(RegistryException):
    """Raised when a file location URI cannot be assembled."""

    def __init__(self, message: str) -> None:
        """Initialize the exception.

        Args:
            message: Error message describing the failure.
        """
        super().__init__(message=message, status_code=500)
